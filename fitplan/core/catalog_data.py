"""Static diet plan and exercise catalogue, hardcoded, no DB queries.

Entries are plain dicts keyed by integer id; the catalog service filters and
validates them into response models.
"""

from typing import Any, Optional

# ── Diet plans: { id: {...} } ────────────────────────────────────────────
DIET_PLANS: dict[int, dict[str, Any]] = {
    1: {
        "title": "Mediterranean Diet",
        "description": "Rich in fruits, vegetables, whole grains, and healthy fats. Perfect for heart health and weight management.",
        "category": "Weight Loss",
        "difficulty": "Medium",
        "duration": "12 weeks",
        "calories": "1800-2200 per day",
    },
    2: {
        "title": "Keto Diet Plan",
        "description": "High fat, low carb approach to trigger ketosis for rapid weight loss and increased energy.",
        "category": "Weight Loss",
        "difficulty": "Hard",
        "duration": "8 weeks",
        "calories": "1600-1800 per day",
    },
    3: {
        "title": "Plant-Based Diet",
        "description": "Focus on plant foods for improved health, weight management, and reduced environmental impact.",
        "category": "Health",
        "difficulty": "Medium",
        "duration": "12 weeks",
        "calories": "2000-2400 per day",
    },
    4: {
        "title": "Intermittent Fasting",
        "description": "Alternate eating and fasting periods to improve metabolism and support weight loss.",
        "category": "Weight Loss",
        "difficulty": "Medium",
        "duration": "10 weeks",
        "calories": "1600-2000 per day",
    },
    5: {
        "title": "DASH Diet",
        "description": "Designed to lower blood pressure through balanced nutrition and reduced sodium intake.",
        "category": "Health",
        "difficulty": "Easy",
        "duration": "16 weeks",
        "calories": "2000-2400 per day",
    },
    6: {
        "title": "Paleo Diet",
        "description": "Based on foods similar to what our ancestors ate during the Paleolithic era, focusing on whole foods.",
        "category": "Weight Loss",
        "difficulty": "Hard",
        "duration": "12 weeks",
        "calories": "1800-2200 per day",
    },
    7: {
        "title": "Flexitarian Diet",
        "description": "A flexible approach to vegetarianism that emphasizes plant-based foods with occasional meat.",
        "category": "Health",
        "difficulty": "Easy",
        "duration": "10 weeks",
        "calories": "1600-2000 per day",
    },
    8: {
        "title": "Low-Carb Diet",
        "description": "Reduce carbohydrate intake while focusing on protein and healthy fats for effective weight loss.",
        "category": "Weight Loss",
        "difficulty": "Medium",
        "duration": "8 weeks",
        "calories": "1500-1800 per day",
    },
    9: {
        "title": "Anti-Inflammatory Diet",
        "description": "Combat inflammation through nutrient-rich foods and balanced nutrition.",
        "category": "Health",
        "difficulty": "Medium",
        "duration": "12 weeks",
        "calories": "1800-2200 per day",
    },
    10: {
        "title": "High-Protein Diet",
        "description": "Build and maintain muscle mass while supporting weight loss through increased protein intake.",
        "category": "Weight Loss",
        "difficulty": "Medium",
        "duration": "10 weeks",
        "calories": "2000-2400 per day",
    },
    11: {
        "title": "Mediterranean-DASH Diet",
        "description": "Combine the best of Mediterranean and DASH diets for heart health and weight management.",
        "category": "Health",
        "difficulty": "Medium",
        "duration": "14 weeks",
        "calories": "2000-2400 per day",
    },
    12: {
        "title": "Whole30 Diet",
        "description": "Reset your nutrition with 30 days of whole foods and elimination of processed ingredients.",
        "category": "Weight Loss",
        "difficulty": "Hard",
        "duration": "4 weeks",
        "calories": "1800-2200 per day",
    },
}

# ── Exercises: { id: {...} } ─────────────────────────────────────────────
EXERCISES: dict[int, dict[str, Any]] = {
    1: {
        "title": "HIIT Cardio Workout",
        "description": "High-intensity interval training to maximize calorie burn in a short amount of time.",
        "duration": "30 min",
        "intensity": "High",
        "category": "Cardio",
        "calories": "300-400",
        "equipment": ["None required (bodyweight exercises)", "Optional: jump rope", "Optional: exercise mat"],
    },
    2: {
        "title": "Full Body Strength Training",
        "description": "Build muscle and increase metabolism with this comprehensive strength workout.",
        "duration": "45 min",
        "intensity": "Medium",
        "category": "Strength",
        "calories": "400-500",
        "equipment": ["Dumbbells", "Bench", "Exercise mat"],
    },
    3: {
        "title": "Yoga for Weight Loss",
        "description": "A flowing yoga sequence designed to burn calories while improving flexibility and mindfulness.",
        "duration": "40 min",
        "intensity": "Low",
        "category": "Flexibility",
        "calories": "200-300",
        "equipment": ["Yoga mat", "Optional: yoga blocks"],
    },
    4: {
        "title": "Fat-Burning Running Plan",
        "description": "Interval running workout designed to maximize fat burning and cardiovascular health.",
        "duration": "35 min",
        "intensity": "High",
        "category": "Cardio",
        "calories": "400-500",
        "equipment": ["Running shoes", "Optional: fitness tracker"],
    },
    5: {
        "title": "Core and Abs Workout",
        "description": "Strengthen your core muscles to improve posture, stability, and create a toned midsection.",
        "duration": "25 min",
        "intensity": "Medium",
        "category": "Strength",
        "calories": "150-200",
        "equipment": ["Exercise mat"],
    },
    6: {
        "title": "Low-Impact Full Body Workout",
        "description": "Joint-friendly exercises that provide a full body workout without high-impact movements.",
        "duration": "30 min",
        "intensity": "Low",
        "category": "Strength",
        "calories": "200-300",
        "equipment": ["Exercise mat", "Optional: light dumbbells"],
    },
    7: {
        "title": "Pilates for Core Strength",
        "description": "Focus on core strength and flexibility with controlled, precise movements.",
        "duration": "35 min",
        "intensity": "Medium",
        "category": "Flexibility",
        "calories": "150-250",
        "equipment": ["Exercise mat", "Optional: pilates ring"],
    },
    8: {
        "title": "Bodyweight Circuit Training",
        "description": "Effective full-body workout using only your body weight for resistance.",
        "duration": "30 min",
        "intensity": "High",
        "category": "Strength",
        "calories": "300-400",
        "equipment": ["None required"],
    },
    9: {
        "title": "Power Walking Routine",
        "description": "Brisk walking workout with intervals to boost calorie burn and endurance.",
        "duration": "40 min",
        "intensity": "Low",
        "category": "Cardio",
        "calories": "200-300",
        "equipment": ["Walking shoes"],
    },
    10: {
        "title": "Resistance Band Workout",
        "description": "Full-body strength training using resistance bands for progressive overload.",
        "duration": "35 min",
        "intensity": "Medium",
        "category": "Strength",
        "calories": "250-350",
        "equipment": ["Resistance bands"],
    },
    11: {
        "title": "Dynamic Stretching Routine",
        "description": "Improve flexibility and mobility with dynamic stretching exercises.",
        "duration": "25 min",
        "intensity": "Low",
        "category": "Flexibility",
        "calories": "100-150",
        "equipment": ["None required"],
    },
    12: {
        "title": "Tabata Training",
        "description": "High-intensity interval training with 20 seconds work and 10 seconds rest.",
        "duration": "20 min",
        "intensity": "High",
        "category": "Cardio",
        "calories": "250-400",
        "equipment": ["Timer", "Exercise mat"],
    },
}


def get_diet_plan(plan_id: int) -> Optional[dict[str, Any]]:
    """Return the diet plan with its id, or None if unknown."""
    plan = DIET_PLANS.get(plan_id)
    return {"id": plan_id, **plan} if plan else None


def get_exercise(exercise_id: int) -> Optional[dict[str, Any]]:
    """Return the exercise with its id, or None if unknown."""
    exercise = EXERCISES.get(exercise_id)
    return {"id": exercise_id, **exercise} if exercise else None
