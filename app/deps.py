from typing import Annotated
from fastapi import Depends, HTTPException, Request, status
from app.services.sessions import SessionContext, SessionRegistry


def get_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session(request: Request) -> SessionContext:
    context = getattr(request.state, "session", None)

    if context is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No active session",
        )

    return context


CurrentSession = Annotated[SessionContext, Depends(get_session)]
Registry = Annotated[SessionRegistry, Depends(get_registry)]
