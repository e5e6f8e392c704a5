from typing import List

from fastapi import APIRouter, Depends, Form, HTTPException

from nurse_roster.exceptions import NurseValidationError
from nurse_roster.routers.utils import get_panel, redirect_home, to_http_error
from nurse_roster.schemas.roster_schema import Nurse, NurseCreateRequest
from nurse_roster.services.roster_panel import RosterPanel

router = APIRouter(tags=["nurses"])


# [Nurses] - 화면 폼: 간호사 추가
@router.post("/nurses")
async def add_nurse_form(
    name: str = Form(""),
    panel: RosterPanel = Depends(get_panel),
):
    panel.add_nurse(name)
    return redirect_home()


# [Nurses] - 화면 폼: 간호사 삭제 (확인 절차 없음)
@router.post("/nurses/{nurse_id}/delete")
async def remove_nurse_form(nurse_id: str, panel: RosterPanel = Depends(get_panel)):
    panel.remove_nurse(nurse_id)
    return redirect_home()


# [Nurses] - 간호사 목록 조회
@router.get("/api/nurses", response_model=List[Nurse])
async def list_nurses(panel: RosterPanel = Depends(get_panel)):
    return list(panel.store.snapshot())


# [Nurses] - 간호사 추가
@router.post("/api/nurses", response_model=Nurse, status_code=201)
async def add_nurse(req: NurseCreateRequest, panel: RosterPanel = Depends(get_panel)):
    nurse = panel.add_nurse(req.name)
    if nurse is None:
        raise to_http_error(NurseValidationError(panel.add_error))
    return nurse


# [Nurses] - 간호사 삭제 (없는 ID도 성공)
@router.delete("/api/nurses/{nurse_id}", status_code=204)
async def remove_nurse(nurse_id: str, panel: RosterPanel = Depends(get_panel)):
    panel.remove_nurse(nurse_id)


# [Nurses] - 간호사 단건 조회
@router.get("/api/nurses/{nurse_id}", response_model=Nurse)
async def get_nurse(nurse_id: str, panel: RosterPanel = Depends(get_panel)):
    nurse = panel.store.get(nurse_id)
    if nurse is None:
        raise HTTPException(status_code=404, detail="간호사를 찾을 수 없습니다.")
    return nurse
