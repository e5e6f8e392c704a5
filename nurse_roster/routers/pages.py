from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from nurse_roster.routers.utils import get_panel
from nurse_roster.schemas.roster_schema import DAY_LABELS, DAY_ORDER, SHIFT_INFO, SHIFT_ORDER
from nurse_roster.services.roster_panel import RosterPanel

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# ─────────────────────────  메인 페이지  ───────────────────────── #
@router.get("/", response_class=HTMLResponse)
async def read_item(request: Request, panel: RosterPanel = Depends(get_panel)):
    """
    간호사 목록, 선호도 편집 모달, 근무표(또는 오류/빈 화면)를 한 페이지로 렌더링
    """
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "view": panel.view(),
            "day_order": DAY_ORDER,
            "day_labels": DAY_LABELS,
            "shift_order": SHIFT_ORDER,
            "shift_info": SHIFT_INFO,
        },
    )
