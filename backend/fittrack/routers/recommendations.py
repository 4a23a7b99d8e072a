# backend/fittrack/routers/recommendations.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, and_
from sqlalchemy.orm import Session, joinedload

from fittrack.db import get_db
from fittrack.models.routine import Routine
from fittrack.models.routine_recommendation import RoutineRecommendation
from fittrack.schemas.recommendation import (
    RecommendationAccept,
    RecommendationCreate,
    RecommendationOut,
    RecommendationStatus,
)
from fittrack.services.assignments import start_assignment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


def _serialize(r: RoutineRecommendation) -> RecommendationOut:
    return RecommendationOut(
        id=r.id,
        trainer_id=r.trainer_id,
        client_id=r.client_id,
        routine_id=r.routine_id,
        routine_name=r.routine.name if r.routine else None,
        message=r.message,
        status=r.status,
        assignment_id=r.assignment_id,
        created_at=r.created_at,
    )


def _get_pending_or_error(db: Session, recommendation_id: int) -> RoutineRecommendation:
    r = db.get(RoutineRecommendation, recommendation_id)
    if not r:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    if r.status != "pending":
        raise HTTPException(status_code=409, detail=f"Recommendation already {r.status}")
    return r


@router.post("", response_model=RecommendationOut, status_code=201)
def recommend_routine(body: RecommendationCreate, db: Session = Depends(get_db)):
    """Trainer suggests one of their routines (or a public one) to a client."""
    routine = db.get(Routine, body.routine_id)
    if not routine:
        raise HTTPException(status_code=404, detail="Routine not found")
    if not routine.is_public and routine.user_id != body.trainer_id:
        raise HTTPException(status_code=403, detail="Routine is not public")

    # one open recommendation per (client, routine)
    open_one = db.execute(
        select(RoutineRecommendation.id).where(
            and_(
                RoutineRecommendation.client_id == body.client_id,
                RoutineRecommendation.routine_id == body.routine_id,
                RoutineRecommendation.status == "pending",
            )
        )
    ).first()
    if open_one:
        raise HTTPException(status_code=409, detail="Routine already recommended to this client")

    r = RoutineRecommendation(
        trainer_id=body.trainer_id,
        client_id=body.client_id,
        routine_id=body.routine_id,
        message=body.message or f'Your trainer has recommended the "{routine.name}" routine for you.',
        status="pending",
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    return _serialize(r)


@router.get("", response_model=List[RecommendationOut])
def list_recommendations(
    client_id: Optional[int] = Query(None),
    trainer_id: Optional[int] = Query(None),
    status: Optional[RecommendationStatus] = Query(None),
    db: Session = Depends(get_db),
):
    """
    GET /recommendations?client_id=2&status=pending   (a client's inbox)
    GET /recommendations?trainer_id=1                 (what a trainer sent)
    """
    q = (
        select(RoutineRecommendation)
        .options(joinedload(RoutineRecommendation.routine))
        .order_by(RoutineRecommendation.created_at.desc(), RoutineRecommendation.id.desc())
    )
    if client_id is not None:
        q = q.where(RoutineRecommendation.client_id == client_id)
    if trainer_id is not None:
        q = q.where(RoutineRecommendation.trainer_id == trainer_id)
    if status is not None:
        q = q.where(RoutineRecommendation.status == status)
    return [_serialize(r) for r in db.execute(q).unique().scalars().all()]


@router.get("/{recommendation_id}", response_model=RecommendationOut)
def get_recommendation(recommendation_id: int, db: Session = Depends(get_db)):
    r = db.get(RoutineRecommendation, recommendation_id)
    if not r:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return _serialize(r)


@router.post("/{recommendation_id}/accept", response_model=RecommendationOut)
def accept_recommendation(
    recommendation_id: int,
    body: Optional[RecommendationAccept] = None,
    db: Session = Depends(get_db),
):
    """Accepting starts an assignment of the recommended routine for the client."""
    body = body or RecommendationAccept()
    r = _get_pending_or_error(db, recommendation_id)
    if r.routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")

    a = start_assignment(db, r.client_id, r.routine, body.plan_type, body.start_date)
    r.status = "accepted"
    r.assignment_id = a.id
    db.commit()
    db.refresh(r)

    logger.info(
        "Client %s accepted recommendation %s (routine %s) as assignment %s",
        r.client_id, r.id, r.routine_id, a.id,
    )
    return _serialize(r)


@router.post("/{recommendation_id}/decline", response_model=RecommendationOut)
def decline_recommendation(recommendation_id: int, db: Session = Depends(get_db)):
    r = _get_pending_or_error(db, recommendation_id)
    r.status = "declined"
    db.commit()
    db.refresh(r)
    return _serialize(r)
