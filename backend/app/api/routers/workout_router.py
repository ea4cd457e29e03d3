"""
Routes des seances et du catalogue de types : CRUD.
Routes = validation + delegation au service. Pas de logique metier ici.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlmodel import Session
from typing import List, Optional
from datetime import date

from app.core.database import get_session
from app.auth.jwt import get_current_user_id
from app.domain.entities import WorkoutCreate, WorkoutRead, WorkoutUpdate, WorkoutTypeRead
from app.domain.services.workout_service import workout_service, workout_type_service
from app.api.routers._shared import security

logger = logging.getLogger(__name__)

router = APIRouter()


def _raise_for_value_error(e: ValueError):
    error_msg = str(e)
    if "not found" in error_msg:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_msg)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)


# ============ TYPES DE SEANCE ============

@router.get("/workout-types", response_model=List[WorkoutTypeRead])
async def get_workout_types(session: Session = Depends(get_session)):
    """Catalogue des types de seance"""
    return workout_type_service.list_types(session)


@router.get("/workout-types/{type_id}", response_model=WorkoutTypeRead)
async def get_workout_type(type_id: int, session: Session = Depends(get_session)):
    """Recupere un type de seance"""
    try:
        return workout_type_service.get(session, type_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout type not found")


# ============ SEANCES ============

@router.get("/workouts", response_model=List[WorkoutRead])
async def get_workouts(
    token: str = Depends(security),
    session: Session = Depends(get_session),
    date: Optional[date] = Query(None, description="Jour calendaire ISO (YYYY-MM-DD)")
):
    """Recupere les seances de l'utilisateur, eventuellement d'un seul jour"""
    user_id = get_current_user_id(token.credentials)
    return workout_service.list_workouts(session, user_id, date)


@router.post("/workouts", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
async def create_workout(
    workout_data: WorkoutCreate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Cree une seance et recalcule le resume du jour"""
    user_id = get_current_user_id(token.credentials)
    try:
        return workout_service.create(session, user_id, workout_data)
    except ValueError as e:
        _raise_for_value_error(e)


@router.get("/workouts/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: int,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Recupere une seance"""
    user_id = get_current_user_id(token.credentials)
    try:
        return workout_service.get(session, user_id, workout_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found")


@router.patch("/workouts/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: int,
    workout_updates: WorkoutUpdate,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Met a jour une seance et recalcule le(s) jour(s) concerne(s)"""
    user_id = get_current_user_id(token.credentials)
    try:
        return workout_service.update(session, user_id, workout_id, workout_updates)
    except ValueError as e:
        _raise_for_value_error(e)


@router.delete("/workouts/{workout_id}")
async def delete_workout(
    workout_id: int,
    token: str = Depends(security),
    session: Session = Depends(get_session)
):
    """Supprime une seance et recalcule le resume du jour"""
    user_id = get_current_user_id(token.credentials)
    try:
        return workout_service.delete(session, user_id, workout_id)
    except ValueError as e:
        _raise_for_value_error(e)
