"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from app.domain.entities import Caller
from app.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")


def resolve_caller(token: str) -> Caller:
    """Resolve the authenticated caller for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    raw_user_id = payload.get("user_id")
    if raw_user_id is None or isinstance(raw_user_id, bool):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid token payload: user_id missing",
        )
    try:
        user_id = int(raw_user_id)
    except (TypeError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid token payload: user_id missing",
        ) from exc

    return Caller(
        user_id=user_id,
        username=payload.get("username"),
        role=payload.get("role"),
    )


def get_current_caller(token: str = Depends(oauth2_scheme)) -> Caller:
    """Return the caller identified by the bearer token."""

    return resolve_caller(token)
