"""Static catalogue schemas."""

from pydantic import BaseModel


class DietPlanRead(BaseModel):
    id: int
    title: str
    description: str
    category: str
    difficulty: str
    duration: str
    calories: str


class ExerciseRead(BaseModel):
    id: int
    title: str
    description: str
    category: str
    intensity: str
    duration: str
    calories: str
    equipment: list[str]
