"""
Routes d'authentification et de profil : signup, login, refresh, logout, me, stats.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Request, Form
from fastapi.responses import JSONResponse
from sqlmodel import Session

from app.core.database import get_session
from app.auth.jwt import jwt_manager, get_current_user_id
from app.domain.entities import UserCreate, UserRead, UserUpdate, UserStats
from app.domain.services.auth_service import auth_service
from app.domain.services.activity_service import activity_service
from app.api.routers._shared import (
    REFRESH_COOKIE, security, limiter, set_access_cookie, set_auth_cookies, clear_auth_cookies,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# ============ AUTH LOCALE ============

@router.post("/auth/signup")
@limiter.limit("3/hour")
async def signup(
    request: Request,
    user_data: UserCreate,
    session: Session = Depends(get_session)
):
    """Inscription d'un nouvel utilisateur"""
    try:
        tokens = auth_service.signup(session, user_data)
        response = JSONResponse(content=tokens.model_dump(), status_code=status.HTTP_201_CREATED)
        return set_auth_cookies(response, tokens)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/auth/login")
@limiter.limit("5/minute")
async def login(
    request: Request,
    username: str = Form(...),
    password: str = Form(...),
    session: Session = Depends(get_session)
):
    """Connexion utilisateur"""
    try:
        tokens = auth_service.login(session, username, password)
        response = JSONResponse(content=tokens.model_dump())
        return set_auth_cookies(response, tokens)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


@router.post("/auth/refresh")
async def refresh_token(request: Request):
    """Nouvel access token a partir du refresh token (cookie, ou champ refresh_token du body JSON)."""
    refresh_tok = request.cookies.get(REFRESH_COOKIE)
    if not refresh_tok:
        try:
            refresh_tok = (await request.json()).get(REFRESH_COOKIE)
        except (ValueError, AttributeError):
            refresh_tok = None
    if not refresh_tok:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token missing")

    new_access = jwt_manager.refresh_access_token(refresh_tok)
    return set_access_cookie(JSONResponse(content={"access_token": new_access}), new_access)


@router.post("/auth/logout")
async def logout():
    """Supprime les cookies d'authentification."""
    response = JSONResponse(content={"message": "Logged out"})
    return clear_auth_cookies(response)


# ============ PROFIL ============

@router.get("/users/me", response_model=UserRead)
async def get_current_user(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere les informations de l'utilisateur connecte"""
    user_id = get_current_user_id(token.credentials)
    try:
        return auth_service.get_user(session, user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.patch("/users/me", response_model=UserRead)
async def update_current_user(
    user_updates: UserUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Met a jour les objectifs quotidiens et les mensurations"""
    user_id = get_current_user_id(token.credentials)
    try:
        return auth_service.update_profile(session, user_id, user_updates)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("/users/stats", response_model=UserStats)
async def get_user_stats(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Nombre de seances, calories totales, jours actifs sur 7 jours"""
    user_id = get_current_user_id(token.credentials)
    try:
        return activity_service.user_stats(session, user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
