from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from nurse_roster.agents.schedule_generator_agent import GeminiTransport
from nurse_roster.config import Settings, load_settings
from nurse_roster.routers import editor, health, nurses, pages, roster
from nurse_roster.services.graph_service import GraphService
from nurse_roster.services.roster_panel import RosterPanel
from nurse_roster.utils.utils import get_logger

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, client=None) -> FastAPI:
    """
    애플리케이션 생성. API 키가 없으면 시작 단계에서 ConfigurationError로 중단된다.
    client를 넘기면 외부 생성 서비스 대신 사용한다 (테스트용).
    """
    if settings is None:
        settings = load_settings()
    if client is None:
        client = GraphService(GeminiTransport(settings))

    app = FastAPI(title="Nurse Roster AI")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.panel = RosterPanel(client)

    app.include_router(pages.router)
    app.include_router(nurses.router)
    app.include_router(editor.router)
    app.include_router(roster.router)
    app.include_router(health.router)

    logger.info(f"애플리케이션 시작: model={settings.model_name}, temperature={settings.temperature}")
    return app


if __name__ == "__main__":
    uvicorn.run("nurse_roster.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
