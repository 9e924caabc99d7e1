"""Quiz endpoints: questions, inline validation, submission, history and latest plan."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitplan.api.deps import get_current_viewer
from fitplan.db.session import get_db
from fitplan.models.profile import Profile
from fitplan.models.quiz import HealthProfile, QuizResult
from fitplan.schemas.quiz import (
    AnswerCheck,
    AnswerCheckResult,
    LatestPlanRead,
    NutritionPlanRead,
    QuestionRead,
    QuizResultRead,
    QuizSubmit,
    QuizSubmitResponse,
)
from fitplan.services.nutrition import NutritionInputError, NutritionPlan
from fitplan.services.quiz import (
    Q_TARGET_WEIGHT,
    Q_WEIGHT,
    QUESTIONS,
    QUESTIONS_BY_ID,
    QuizValidationError,
    evaluate_quiz,
    normalize_answers,
    plan_from_snapshot,
    validate_answer,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _plan_read(plan: NutritionPlan) -> NutritionPlanRead:
    return NutritionPlanRead.model_validate(asdict(plan))


def _result_response(result: QuizResult) -> QuizSubmitResponse:
    plan = plan_from_snapshot(result.answers, result.calculations)
    answers = normalize_answers(result.answers)
    target = answers.get(Q_TARGET_WEIGHT)
    weight = answers.get(Q_WEIGHT)
    return QuizSubmitResponse(
        result=QuizResultRead.model_validate(result),
        plan=_plan_read(plan),
        target_weight_kg=target,
        weight_to_target_kg=round(float(weight) - float(target), 1) if weight is not None and target is not None else None,
    )


@router.get("/questions", response_model=list[QuestionRead])
async def list_questions():
    return [QuestionRead.model_validate(q) for q in QUESTIONS]


@router.post("/questions/{question_id}/validate", response_model=AnswerCheckResult)
async def check_answer(question_id: int, payload: AnswerCheck):
    """Inline check for one field, before the whole quiz is submitted."""
    if question_id not in QUESTIONS_BY_ID:
        raise HTTPException(status_code=404, detail="Question not found")
    error = validate_answer(question_id, payload.value)
    return AnswerCheckResult(valid=error is None, error=error)


@router.post("/submit", response_model=QuizSubmitResponse, status_code=201)
async def submit_quiz(
    payload: QuizSubmit,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    """Store an immutable result and overwrite the viewer's latest plan snapshot."""
    try:
        outcome = evaluate_quiz(payload.answers)
    except QuizValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": {str(k): v for k, v in e.errors.items()}}) from e
    except NutritionInputError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    answers = {str(k): v for k, v in outcome.answers.items()}
    calculations = outcome.calculations.to_dict()
    result = QuizResult(user_id=viewer.id, answers=answers, calculations=calculations)
    db.add(result)
    await db.flush()

    snapshot = await db.get(HealthProfile, viewer.id)
    if snapshot:
        snapshot.quiz_result_id = result.id
        snapshot.answers = answers
        snapshot.calculations = calculations
        snapshot.updated_at = datetime.now(timezone.utc)
    else:
        db.add(
            HealthProfile(
                user_id=viewer.id,
                quiz_result_id=result.id,
                answers=answers,
                calculations=calculations,
            )
        )
    await db.flush()
    await db.refresh(result)
    logger.info("Stored quiz result %s for %s", result.id, viewer.id)

    return QuizSubmitResponse(
        result=QuizResultRead.model_validate(result),
        plan=_plan_read(outcome.plan),
        target_weight_kg=outcome.extras.get("target_weight_kg"),
        weight_to_target_kg=outcome.extras.get("weight_to_target_kg"),
    )


@router.get("/history", response_model=list[QuizResultRead])
async def quiz_history(
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(QuizResult).where(QuizResult.user_id == viewer.id).order_by(QuizResult.created_at.desc())
    )
    return result.scalars().all()


@router.get("/results/{result_id}", response_model=QuizSubmitResponse)
async def read_result(
    result_id: uuid.UUID,
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(QuizResult).where(QuizResult.id == result_id, QuizResult.user_id == viewer.id)
    )
    row = result.scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=404, detail="Quiz result not found")
    return _result_response(row)


@router.get("/plan", response_model=LatestPlanRead)
async def latest_plan(
    viewer: Profile = Depends(get_current_viewer),
    db: AsyncSession = Depends(get_db),
):
    """Plan derived from the latest snapshot; 404 before the first quiz."""
    snapshot = await db.get(HealthProfile, viewer.id)
    if not snapshot:
        raise HTTPException(status_code=404, detail="Take the quiz to get your plan")
    plan = plan_from_snapshot(snapshot.answers, snapshot.calculations)
    return LatestPlanRead(
        answers=snapshot.answers,
        calculations=snapshot.calculations,
        plan=_plan_read(plan),
        updated_at=snapshot.updated_at,
    )
