from fastapi import HTTPException, Request
from starlette import status
from starlette.responses import RedirectResponse

from nurse_roster.exceptions import status_code_for
from nurse_roster.services.roster_panel import RosterPanel


def get_panel(request: Request) -> RosterPanel:
    return request.app.state.panel


def redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)


def to_http_error(error: Exception) -> HTTPException:
    return HTTPException(status_code=status_code_for(error), detail=str(error))
