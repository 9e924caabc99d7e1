"""Static diet plan and exercise catalogue."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from fitplan.schemas.catalog import DietPlanRead, ExerciseRead
from fitplan.services import catalog

router = APIRouter()


@router.get("/diet-plans", response_model=list[DietPlanRead])
async def list_diet_plans(
    category: Optional[str] = Query(None),
    difficulty: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
):
    return catalog.list_diet_plans(category=category, difficulty=difficulty, search=search)


@router.get("/diet-plans/{plan_id}", response_model=DietPlanRead)
async def read_diet_plan(plan_id: int):
    plan = catalog.get_diet_plan(plan_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="Diet plan not found")
    return plan


@router.get("/exercises", response_model=list[ExerciseRead])
async def list_exercises(
    category: Optional[str] = Query(None),
    intensity: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
):
    return catalog.list_exercises(category=category, intensity=intensity, search=search)


@router.get("/exercises/{exercise_id}", response_model=ExerciseRead)
async def read_exercise(exercise_id: int):
    exercise = catalog.get_exercise(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise
