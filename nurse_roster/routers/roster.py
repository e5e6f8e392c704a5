from fastapi import APIRouter, Depends

from nurse_roster.exceptions import (
    GenerationInProgressError,
    GenerationPreconditionError,
    ScheduleGenerationError,
)
from nurse_roster.routers.utils import get_panel, redirect_home, to_http_error
from nurse_roster.services.roster_panel import (
    GENERATION_FAILED_MESSAGE,
    GenerationResult,
    RosterPanel,
)

router = APIRouter(tags=["roster"])


def _roster_state(panel: RosterPanel) -> dict:
    view = panel.view()
    return {
        "status": view.status.value,
        "can_generate": view.can_generate,
        "error": view.error,
        "schedule": view.schedule.model_dump(mode="json") if view.schedule is not None else None,
    }


# [Roster] - 화면 폼: 근무표 생성 (진행 중이면 무시)
@router.post("/roster/generate")
async def generate_roster_form(panel: RosterPanel = Depends(get_panel)):
    await panel.generate()
    return redirect_home()


# [Roster] - 근무표 생성
@router.post("/api/roster/generate")
async def generate_roster(panel: RosterPanel = Depends(get_panel)):
    result = await panel.generate()
    if result == GenerationResult.ignored:
        raise to_http_error(GenerationInProgressError("이미 근무표를 생성하는 중입니다."))
    if result == GenerationResult.rejected:
        raise to_http_error(GenerationPreconditionError(panel.error))
    if result == GenerationResult.failed:
        raise to_http_error(ScheduleGenerationError(GENERATION_FAILED_MESSAGE))
    return _roster_state(panel)


# [Roster] - 현재 생성 상태와 근무표 조회
@router.get("/api/roster")
async def get_roster(panel: RosterPanel = Depends(get_panel)):
    return _roster_state(panel)
