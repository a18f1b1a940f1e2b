"""
Fitness Constants

Fixed factors used by the energy budget calculator, the dashboard alert
rules and the exercise calorie estimates.
"""

from fitto.utils.enums import ActivityLevel, Gender

# Mifflin-St Jeor sex offsets; anything not male shares the female offset
BMR_OFFSET_MALE = 5
BMR_OFFSET_OTHER = -161

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTRA_ACTIVE: 1.9,
}

# Macro split of the daily calorie budget
CARBS_PERCENTAGE = 0.5
PROTEIN_PERCENTAGE = 0.3
FAT_PERCENTAGE = 0.2

CALORIES_PER_GRAM_CARBS = 4.0
CALORIES_PER_GRAM_PROTEIN = 4.0
CALORIES_PER_GRAM_FAT = 9.0

# Dashboard alert thresholds
UNDER_EATING_RATIO = 0.7
UNDER_EATING_DAYS = 3
HISTORY_WINDOW_DAYS = 14
PLATEAU_DELTA_KG = 0.5
CARDIO_SHARE_THRESHOLD = 0.8
CARDIO_KEYWORDS = ("run", "jog", "bike", "swim")

UNDER_EATING_ALERT = "You might be under-eating. Consider reviewing your meal plan."
PLATEAU_ALERT = "You may have hit a plateau. Consider adjusting your workout or calorie intake."
CARDIO_ALERT = (
    "Great work on cardio! Adding some strength training could improve "
    "muscle tone and metabolism."
)

# Exercise lookup fallback (kcal = MET * kg * 3.5 / 200 * minutes)
MET_VALUES = {
    "running": 9.8,
    "cycling": 7.5,
    "walking": 3.8,
    "basketball": 8.0,
    "stair machine": 8.8,
    "weightlifting": 5.0,
    "swimming": 6.0,
    "yoga": 3.0,
    "cooking": 1.2,
}
DEFAULT_LOOKUP_DURATION_MIN = 30
DEFAULT_BODY_WEIGHT_KG = 70.0

VALID_GENDERS = {g.value for g in Gender}
