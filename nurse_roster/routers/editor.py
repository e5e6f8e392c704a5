from fastapi import APIRouter, Depends, Form

from nurse_roster.exceptions import NurseNotFoundError, PreferenceEditError
from nurse_roster.routers.utils import get_panel, redirect_home, to_http_error
from nurse_roster.schemas.roster_schema import (
    DayOfWeek, Nurse, PreferencesUpdate, ReasonUpdateRequest, ShiftType,
)
from nurse_roster.services.preference_editor import CANCEL_BUTTON
from nurse_roster.services.roster_panel import RosterPanel

router = APIRouter(tags=["editor"])


def _editor_state(panel: RosterPanel) -> dict:
    editor = panel.editor
    if editor is None:
        return {"open": False}
    return {
        "open": True,
        "nurse_id": editor.nurse_id,
        "nurse_name": editor.nurse_name,
        "draft": editor.draft.model_dump(mode="json"),
    }


# ─────────────────────────  화면 폼  ───────────────────────── #
@router.post("/nurses/{nurse_id}/editor")
async def open_editor_form(nurse_id: str, panel: RosterPanel = Depends(get_panel)):
    try:
        panel.open_editor(nurse_id)
    except NurseNotFoundError as e:
        raise to_http_error(e)
    return redirect_home()


@router.post("/editor/shifts/{shift}")
async def toggle_shift_form(shift: ShiftType, panel: RosterPanel = Depends(get_panel)):
    try:
        panel.require_editor().toggle_shift(shift)
    except PreferenceEditError as e:
        raise to_http_error(e)
    return redirect_home()


@router.post("/editor/days/{day}")
async def toggle_day_form(day: DayOfWeek, panel: RosterPanel = Depends(get_panel)):
    try:
        panel.require_editor().toggle_day(day)
    except PreferenceEditError as e:
        raise to_http_error(e)
    return redirect_home()


@router.post("/editor/days/{day}/reason")
async def set_reason_form(day: DayOfWeek, reason: str = Form(""),
                          panel: RosterPanel = Depends(get_panel)):
    try:
        panel.require_editor().set_reason(day, reason)
    except PreferenceEditError as e:
        raise to_http_error(e)
    return redirect_home()


@router.post("/editor/save")
async def save_editor_form(panel: RosterPanel = Depends(get_panel)):
    try:
        panel.save_editor()
    except PreferenceEditError as e:
        raise to_http_error(e)
    return redirect_home()


# 취소 버튼, 배경 클릭, Esc 키 모두 이 경로로 들어온다
@router.post("/editor/cancel")
async def cancel_editor_form(source: str = CANCEL_BUTTON, panel: RosterPanel = Depends(get_panel)):
    panel.cancel_signal.fire(source)
    return redirect_home()


# ─────────────────────────  JSON API  ───────────────────────── #
@router.post("/api/nurses/{nurse_id}/editor")
async def open_editor(nurse_id: str, panel: RosterPanel = Depends(get_panel)):
    try:
        panel.open_editor(nurse_id)
    except NurseNotFoundError as e:
        raise to_http_error(e)
    return _editor_state(panel)


@router.get("/api/editor")
async def get_editor(panel: RosterPanel = Depends(get_panel)):
    return _editor_state(panel)


@router.post("/api/editor/shifts/{shift}")
async def toggle_shift(shift: ShiftType, panel: RosterPanel = Depends(get_panel)):
    try:
        panel.require_editor().toggle_shift(shift)
    except PreferenceEditError as e:
        raise to_http_error(e)
    return _editor_state(panel)


@router.post("/api/editor/days/{day}")
async def toggle_day(day: DayOfWeek, panel: RosterPanel = Depends(get_panel)):
    try:
        panel.require_editor().toggle_day(day)
    except PreferenceEditError as e:
        raise to_http_error(e)
    return _editor_state(panel)


@router.put("/api/editor/days/{day}/reason")
async def set_reason(day: DayOfWeek, req: ReasonUpdateRequest,
                     panel: RosterPanel = Depends(get_panel)):
    try:
        panel.require_editor().set_reason(day, req.reason)
    except PreferenceEditError as e:
        raise to_http_error(e)
    return _editor_state(panel)


@router.post("/api/editor/save", response_model=Nurse)
async def save_editor(panel: RosterPanel = Depends(get_panel)):
    try:
        return panel.save_editor()
    except PreferenceEditError as e:
        raise to_http_error(e)


@router.post("/api/editor/cancel")
async def cancel_editor(source: str = CANCEL_BUTTON, panel: RosterPanel = Depends(get_panel)):
    panel.cancel_signal.fire(source)
    return _editor_state(panel)


# [Preferences] - 선호도 전체 저장 (편집기 없이)
@router.put("/api/nurses/{nurse_id}/preferences", response_model=Nurse)
async def replace_preferences(nurse_id: str, req: PreferencesUpdate,
                              panel: RosterPanel = Depends(get_panel)):
    nurse = panel.store.get(nurse_id)
    if nurse is None:
        raise to_http_error(NurseNotFoundError(f"간호사를 찾을 수 없습니다: {nurse_id}"))
    panel.store.replace(Nurse(id=nurse.id, name=nurse.name,
                              preferences=req.preferences))
    return panel.store.get(nurse_id)
