from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from app.core.config import settings


def create_session_token(session_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a session identifier for the session cookie.

    Args:
        session_id: Identifier of a context held by the session registry
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT session token
    """
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.SESSION_IDLE_MINUTES)

    to_encode = {"sid": session_id, "exp": expire, "type": "session"}
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt


def decode_session_token(token: str) -> Optional[str]:
    """
    Decode a session cookie.

    Returns:
        The session identifier if the token is valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])

        if payload.get("type") != "session":
            return None

        return payload.get("sid")
    except jwt.ExpiredSignatureError:
        return None
    except jwt.JWTClaimsError:
        return None
    except JWTError:
        return None
