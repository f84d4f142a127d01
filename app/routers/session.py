from fastapi import APIRouter
from fastapi.responses import RedirectResponse
from app.core.config import settings
from app.deps import CurrentSession, Registry

router = APIRouter(prefix="/session", tags=["Session"])


@router.post("/close")
async def close_session(session: CurrentSession, registry: Registry):
    """Tear down the caller's session; the next request starts a fresh one."""
    registry.close(session.session_id)
    response = RedirectResponse(url="/payments", status_code=303)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response
