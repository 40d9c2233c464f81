from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # 백엔드 API (배포 시 VITE_API_URL 로 주입, 미설정 시 프록시 경로)
    API_URL: str = Field(default="/api", validation_alias=AliasChoices("VITE_API_URL", "API_URL"))
    # API_URL 이 상대 경로일 때 붙일 오리진 (개발 프록시)
    API_ORIGIN: str = "http://localhost:8000"

    # 요청 타임아웃 (None = 무제한, 응답 없는 요청은 로딩 상태 유지)
    REQUEST_TIMEOUT: Optional[float] = None
    HTTP_MAX_WORKERS: int = 5

    # 최적화 상태 폴링 주기 (초)
    POLL_INTERVAL_SECONDS: float = 5.0

    # 화면 기본값
    DEFAULT_MARKET: str = "KR"
    # 클라이언트 로케일 강제 지정 (미설정 시 시스템 로케일 사용)
    LOCALE: Optional[str] = None

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
