"""
Routes des activites : resume du jour, vue hebdomadaire, mensuelle, moyennes.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Path, Query
from sqlmodel import Session
from typing import List, Optional
from datetime import date

from app.core.database import get_session
from app.auth.jwt import get_current_user_id
from app.domain.entities import ActivityRead, ActivityAverages, DailyActivity, DailyActivityView
from app.domain.services.activity_service import activity_service
from app.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/activities", response_model=DailyActivity)
async def get_daily_activity(
    token: str = Depends(security),
    session: Session = Depends(get_session),
    date: Optional[date] = Query(None, description="Jour ISO (YYYY-MM-DD), aujourd'hui par defaut")
):
    """Recupere le resume d'un jour (valeurs a zero si aucune seance)"""
    user_id = get_current_user_id(token.credentials)
    try:
        return activity_service.daily_activity(session, user_id, date)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.get("/activities/weekly", response_model=List[DailyActivityView])
async def get_weekly_activities(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere les 7 derniers jours, jours vides inclus"""
    user_id = get_current_user_id(token.credentials)
    return activity_service.weekly_activities(session, user_id)


@router.get("/activities/monthly/{year_month}", response_model=List[ActivityRead])
async def get_monthly_activities(
    year_month: str = Path(..., pattern=r"^\d{4}-\d{2}$", description="Mois au format YYYY-MM"),
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere les resumes persistes d'un mois"""
    user_id = get_current_user_id(token.credentials)
    try:
        return activity_service.monthly_activities(session, user_id, year_month)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/activities/averages", response_model=ActivityAverages)
async def get_activity_averages(
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere les moyennes sur tout l'historique"""
    user_id = get_current_user_id(token.credentials)
    try:
        return activity_service.activity_averages(session, user_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
