import hmac
from typing import Annotated, Optional

from fastapi import Header, HTTPException

from config.settings import settings

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def _bearer_token(authorization: Optional[str]) -> str:
    """'Bearer <token>' -> '<token>'"""
    if not authorization:
        raise _unauthorized("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if not token.strip():
        raise _unauthorized("Invalid Authorization header format")
    if scheme.lower() != "bearer":
        raise _unauthorized("Invalid auth scheme")
    return token.strip()


# ✅ batch runs that write enrollments (promotions, repeater corrections)
def require_service_token(authorization: AuthHeader = None):
    if not settings.SERVICE_TOKEN:
        raise HTTPException(status_code=500, detail="Server token not configured")

    token = _bearer_token(authorization)
    if not hmac.compare_digest(token, settings.SERVICE_TOKEN):
        raise _unauthorized("Invalid token")
    return {"client": "service"}
