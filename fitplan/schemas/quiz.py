"""Quiz and nutrition plan schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fitplan.core.enums import BMIStatus


class QuestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    question: str
    type: Literal["select", "number", "radio"]
    options: Optional[list[str]] = None
    unit: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    required: bool = True
    info: Optional[str] = None


class AnswerCheck(BaseModel):
    value: Any = None


class AnswerCheckResult(BaseModel):
    valid: bool
    error: Optional[str] = None


class QuizSubmit(BaseModel):
    answers: dict[str, Any] = Field(..., description="Answers keyed by question id")


class HealthCalculationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    bmi: float
    bmr: float
    tdee: float


class MacroTargetsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    protein_pct: int
    carbs_pct: int
    fat_pct: int
    protein_g: float
    carbs_g: float
    fat_g: float


class NutritionPlanRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    calculations: HealthCalculationRead
    bmi_status: BMIStatus
    goal: Optional[str] = None
    calorie_target: float
    daily_calories: int
    macros: MacroTargetsRead


class QuizResultRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    answers: dict[str, Any]
    calculations: HealthCalculationRead
    created_at: datetime


class QuizSubmitResponse(BaseModel):
    result: QuizResultRead
    plan: NutritionPlanRead
    target_weight_kg: Optional[float] = None
    weight_to_target_kg: Optional[float] = None


class LatestPlanRead(BaseModel):
    answers: dict[str, Any]
    calculations: HealthCalculationRead
    plan: NutritionPlanRead
    updated_at: datetime
