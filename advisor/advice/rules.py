"""Advice rules keyed on weather condition, temperature and wind."""

import math
from collections.abc import Iterable

from advisor.models.forecast import WeatherCondition

NO_ADVICE = "No advice as of now!!"
SUNSCREEN_ADVICE = "Use sunscreen lotion."
WINDY_ADVICE = "It's too windy, watch out!"

HOT_THRESHOLD_C = 40
WINDY_THRESHOLD_MS = 10

KELVIN_OFFSET = 273.15

# Provider "main" categories. Lookups are case-insensitive.
CATEGORY_ADVICE: dict[str, str] = {
    "rain": "Carry umbrella.",
    "drizzle": "Carry umbrella.",
    "thunderstorm": "Don't step out! A Storm is brewing!",
    "snow": "Wear warm clothes, roads may be slippery.",
}

# Description-level overrides take precedence over the category phrase.
DESCRIPTION_ADVICE: dict[str, str] = {
    "heavy intensity rain": "Carry umbrella, heavy rain expected.",
    "very heavy rain": "Carry umbrella, heavy rain expected.",
    "extreme rain": "Carry umbrella, heavy rain expected.",
}


def kelvin_to_celsius(kelvin: float) -> int:
    """Convert and round half-up, so 26.5 -> 27 and -0.5 -> 0."""
    return math.floor(kelvin - KELVIN_OFFSET + 0.5)


def condition_advice(condition: WeatherCondition) -> str:
    """Phrase for one condition, or "" when the condition has no rule."""
    phrase = DESCRIPTION_ADVICE.get(condition.description.strip().lower())
    if phrase is None:
        phrase = CATEGORY_ADVICE.get(condition.main.strip().lower())
    return f"{phrase} " if phrase else ""


def build_advice(
    conditions: Iterable[WeatherCondition],
    temperature_c: float,
    wind_speed: float,
) -> str:
    """Concatenate condition, heat and wind advice in that fixed order."""
    advice = "".join(condition_advice(c) for c in conditions)
    if temperature_c > HOT_THRESHOLD_C:
        advice += f"{SUNSCREEN_ADVICE} "
    if wind_speed > WINDY_THRESHOLD_MS:
        advice += f"{WINDY_ADVICE} "
    return advice or NO_ADVICE
