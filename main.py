"""FastAPI 애플리케이션 진입점 - 주식 투자 어드바이저 대시보드"""
import asyncio
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from dashboard.agents.view_state import DashboardController
from dashboard.api.v1 import state, recommendations, predictions, sse
from dashboard.services.backend_client import resolve_base_url
from dashboard.services.events import EventHub, dashboard_event
from dashboard.config.settings import settings


def create_app(controller: Optional[DashboardController] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """앱 시작/종료 = 대시보드 화면 수명 (폴링 타이머 포함)"""
        active = controller or DashboardController()
        hub = EventHub()
        active.on_event = lambda kind, message: hub.publish(dashboard_event(active, kind, message))
        app.state.controller = active
        app.state.events = hub

        logger.info(f"주식 투자 어드바이저 대시보드 시작... (백엔드: {resolve_base_url(settings.API_URL, settings.API_ORIGIN)})")
        # 백엔드 응답 대기로 기동이 막히지 않도록 초기 조회는 백그라운드 실행
        mount_task = asyncio.create_task(active.mount())
        yield
        await active.close()
        if not mount_task.done():
            mount_task.cancel()
        await asyncio.gather(mount_task, return_exceptions=True)
        logger.info("주식 투자 어드바이저 대시보드 종료")

    app = FastAPI(
        title="주식 투자 어드바이저 대시보드",
        description="""
## AI 추천 종목 + 7일 주가 예측 대시보드 (클라이언트 상태 계층)

### 주요 기능
- **AI 추천 종목**: KR/US 시장별 추천 목록 (시장 변경 시 재조회)
- **주가 예측**: 종목 입력 또는 추천 종목 선택 → 7일 예측 + 뉴스 감성 분석
- **최적화 상태**: 5초 주기 백그라운드 폴링
- **실시간 알림**: SSE 기반 상태 변경/예측 실패 알림
- **다국어**: 한국어/영어 전환
        """,
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS 설정 (로컬 화면용 - 모든 origin 허용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API 라우터 등록
    app.include_router(state.router, prefix="/api/v1", tags=["대시보드"])
    app.include_router(recommendations.router, prefix="/api/v1", tags=["추천"])
    app.include_router(predictions.router, prefix="/api/v1", tags=["예측"])
    app.include_router(sse.router, prefix="/api/v1", tags=["실시간"])

    @app.get("/health", summary="헬스체크")
    async def health():
        """서비스 상태 및 폴링 여부 반환"""
        active = getattr(app.state, "controller", None)
        return {
            "status": "ok",
            "mounted": active is not None,
            "polling": bool(active and active.polling),
        }

    return app


app = create_app()
