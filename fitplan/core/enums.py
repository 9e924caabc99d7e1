"""Shared enums for models and API."""

from enum import Enum


class Sex(str, Enum):
    """Biological sex category used by the Harris-Benedict BMR branch."""

    MALE = "Male"
    FEMALE = "Female"


class ActivityLevel(str, Enum):
    """Five ordered activity levels (label before the quiz option's parenthesis)."""

    SEDENTARY = "Sedentary"
    LIGHTLY_ACTIVE = "Lightly active"
    MODERATELY_ACTIVE = "Moderately active"
    VERY_ACTIVE = "Very active"
    EXTRA_ACTIVE = "Extra active"


class Goal(str, Enum):
    """Primary goal from the quiz."""

    LOSE_WEIGHT = "Lose weight"
    BUILD_MUSCLE = "Build muscle"
    MAINTAIN_WEIGHT = "Maintain weight"
    IMPROVE_HEALTH = "Improve overall health"
    INCREASE_ENERGY = "Increase energy levels"


class BMIStatus(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class ChallengeType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    STREAK = "streak"
    GOAL = "goal"


class ChallengeDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class NotificationFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
