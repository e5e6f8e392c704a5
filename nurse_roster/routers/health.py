"""
헬스체크 라우터 모듈
- 서비스 상태와 현재 세션 상태를 간단히 반환한다
"""
from datetime import datetime

from fastapi import APIRouter, Depends, Request

from nurse_roster.routers.utils import get_panel
from nurse_roster.services.roster_panel import RosterPanel

router = APIRouter(
    prefix="/health",
    tags=["health"]
)


@router.get("")
async def health_check(request: Request, panel: RosterPanel = Depends(get_panel)):
    """
    기본 헬스체크. 외부 생성 서비스는 호출하지 않는다.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "model": request.app.state.settings.model_name,
        "nurse_count": len(panel.store),
        "generation_status": panel.status.value,
    }
