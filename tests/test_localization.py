import pytest

from dashboard.schemas.view import Language
from dashboard.services import localization
from dashboard.services.localization import TRANSLATIONS, detect_language, labels, translate


@pytest.mark.parametrize(
    ("locale_name", "expected"),
    [
        ("ko_KR", Language.KO),
        ("ko-KR", Language.KO),
        ("ko", Language.KO),
        ("en_US", Language.EN),
        ("ja_JP", Language.EN),
        (None, Language.KO),
    ],
)
def test_detect_language(locale_name, expected) -> None:
    assert detect_language(locale_name) == expected


def test_both_languages_share_the_same_key_set() -> None:
    assert set(TRANSLATIONS[Language.KO]) == set(TRANSLATIONS[Language.EN])


def test_translate_resolves_per_language() -> None:
    assert translate(Language.KO, "predict_btn") == "예측하기"
    assert translate(Language.EN, "predict_btn") == "Predict"
    assert translate("en", "refresh_btn") == "Refresh"


def test_unknown_key_is_a_programming_error() -> None:
    with pytest.raises(KeyError):
        translate(Language.EN, "does_not_exist")


def test_labels_returns_a_copy() -> None:
    copied = labels(Language.EN)
    copied["title"] = "changed"
    assert translate(Language.EN, "title") == "Stock Investment Advisor"


def test_client_locale_prefers_configured_value(monkeypatch) -> None:
    monkeypatch.setattr(localization.settings, "LOCALE", "en_GB")
    assert localization.client_locale() == "en_GB"
