"""
Dependances communes aux routers : token de l'appelant, rate limiting, cookies d'auth.
"""
from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.auth.jwt import TokenResponse, jwt_manager
from app.core.settings import get_settings

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

_bearer = HTTPBearer(auto_error=False)


def _raw_token(request: Request) -> Optional[str]:
    """Token brut : header Authorization en priorite, sinon cookie."""
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return request.cookies.get(ACCESS_COOKIE)


async def security(request: Request) -> HTTPAuthorizationCredentials:
    """Credentials de l'appelant (header Bearer ou cookie), 401 sinon."""
    credentials = await _bearer(request)
    if credentials is None:
        token = request.cookies.get(ACCESS_COOKIE)
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)
    return credentials


def rate_limit_key(request: Request) -> str:
    """Un compteur par utilisateur authentifie (id entier du token), sinon par IP."""
    token = _raw_token(request)
    if token:
        try:
            return f"user:{jwt_manager.verify_token(token).user_id}"
        except HTTPException:
            pass
    return get_remote_address(request)


limiter = Limiter(key_func=rate_limit_key, default_limits=["100/minute"], headers_enabled=True)


def _cookie_options() -> dict:
    # Frontend et API servis sur le meme site : SameSite=Lax suffit
    return {
        "httponly": True,
        "secure": get_settings().ENVIRONMENT == "production",
        "samesite": "lax",
        "path": "/",
    }


def set_access_cookie(response: JSONResponse, access_token: str) -> JSONResponse:
    settings = get_settings()
    response.set_cookie(
        ACCESS_COOKIE, access_token,
        max_age=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **_cookie_options(),
    )
    return response


def set_auth_cookies(response: JSONResponse, tokens: TokenResponse) -> JSONResponse:
    """Pose access et refresh token en cookies httpOnly."""
    settings = get_settings()
    set_access_cookie(response, tokens.access_token)
    response.set_cookie(
        REFRESH_COOKIE, tokens.refresh_token,
        max_age=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS * 86400,
        **_cookie_options(),
    )
    return response


def clear_auth_cookies(response: JSONResponse) -> JSONResponse:
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(name, **_cookie_options())
    return response
