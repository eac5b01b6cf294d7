"""Advisory synthesizer: risk + crop context -> localized advisory."""

from datetime import date, datetime
from typing import Any, Optional, Union

from loguru import logger

from harvestguard.core import templates
from harvestguard.core.actions import generate_action_items
from harvestguard.store.models import (
    Advisory,
    CropBatchState,
    RiskAssessment,
    UrgentRisk,
    WeatherReading,
)
from harvestguard.utils.config import settings
from harvestguard.utils.constants import (
    BANGLA_DIGITS,
    HARVEST_SOON_DAYS,
    LANGUAGES,
    LEVEL_TO_SEVERITY,
)

FACTOR_TO_ADVISORY = {
    "humidity": "humidity",
    "temperature": "heat",
    "rainfall": "rain",
    "wind": "wind",
    "storage": "storage",
    "harvest_timing": "harvest",
}

_TO_BANGLA = str.maketrans("0123456789", BANGLA_DIGITS)


def to_local_digits(text: str, language: str) -> str:
    if language == "bn":
        return text.translate(_TO_BANGLA)
    return text


def format_number(value: float, language: str = "bn", decimals: int = 0) -> str:
    """Format a number in the language's own digits."""
    if decimals == 0:
        text = str(int(value + 0.5) if value >= 0 else -int(-value + 0.5))
    else:
        text = f"{value:.{decimals}f}".rstrip("0").rstrip(".")
    return to_local_digits(text, language)


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def calculate_days_until_harvest(harvest_date: Any, today: Optional[date] = None) -> Optional[int]:
    """Whole days until harvest; 0 when today or overdue, None when unknown."""
    target = _as_date(harvest_date)
    if target is None:
        return None
    today = today or date.today()
    return max(0, (target - today).days)


def _language(language: Optional[str]) -> str:
    language = language or settings.notifications.default_language
    if language not in LANGUAGES:
        logger.warning(f"Unsupported language '{language}', falling back to English")
        return "en"
    return language


def _crop_name(crop: Optional[CropBatchState], language: str) -> str:
    if crop is not None and crop.crop_type:
        return crop.crop_type
    return templates.DEFAULT_CROP_NAME[language]


def _weather_conditions(weather: WeatherReading) -> dict:
    conditions = {
        "temperature": weather.temperature,
        "humidity": weather.humidity,
        "rainfall_mm": weather.rainfall_mm,
        "wind_speed_ms": weather.wind_speed_ms,
    }
    if weather.rain_chance is not None:
        conditions["rain_chance"] = weather.rain_chance
    return conditions


def _summary(
    assessment: RiskAssessment,
    crop: Optional[CropBatchState],
    weather: Optional[WeatherReading],
    language: str,
    today: Optional[date],
) -> str:
    if crop is None or weather is None:
        return assessment.primary_threat

    values = {
        "crop": _crop_name(crop, language),
        "temperature": format_number(weather.temperature, language, 1),
        "humidity": format_number(weather.humidity, language),
        "rainfall": format_number(weather.rainfall_mm, language, 1),
        "wind": format_number(weather.wind_speed_ms, language, 1),
    }

    if crop.is_harvested:
        storage = templates.STORAGE_NAMES[language].get(crop.storage_method, crop.storage_method)
        return templates.STORAGE_SUMMARY[language].format(storage=storage, **values)

    days = calculate_days_until_harvest(crop.expected_harvest_date, today=today)
    harvest = ""
    if days is not None and 0 < days <= HARVEST_SOON_DAYS:
        harvest = templates.HARVEST_CLAUSE[language].format(days=format_number(days, language))
    return templates.GROWING_SUMMARY[language].format(harvest=harvest, **values)


def synthesize_assessment(
    assessment: RiskAssessment,
    crop: Optional[CropBatchState] = None,
    language: Optional[str] = None,
    weather: Optional[WeatherReading] = None,
    today: Optional[date] = None,
) -> Advisory:
    language = _language(language)
    primary = assessment.primary_factor
    advisory_type = FACTOR_TO_ADVISORY[primary.type] if primary else "general"
    severity = LEVEL_TO_SEVERITY[assessment.level]

    conditions = _weather_conditions(weather) if weather is not None else {}
    conditions["score"] = assessment.score

    return Advisory(
        type=advisory_type,
        severity=severity,
        title=templates.TITLES[language][advisory_type][severity],
        message=_summary(assessment, crop, weather, language, today),
        actions=generate_action_items(crop, weather, assessment.level, language),
        conditions=conditions,
        level=assessment.level,
        crop_id=assessment.crop_id or (crop.crop_id if crop else None),
        language=language,
    )


def synthesize_urgent(
    risk: UrgentRisk,
    crop: Optional[CropBatchState] = None,
    language: Optional[str] = None,
    today: Optional[date] = None,
) -> Advisory:
    language = _language(language)

    context = "general"
    if crop is not None and crop.is_harvested:
        context = "stored"
    elif crop is not None:
        days = calculate_days_until_harvest(crop.expected_harvest_date, today=today)
        context = "harvest_soon" if days is not None and days <= HARVEST_SOON_DAYS else "growing"

    tier = "high" if risk.severity == "high" else "other"
    unit = templates.RAIN_UNITS[language][risk.basis or "chance"] if risk.type == "rain" else ""
    message = templates.URGENT_MESSAGES[language][risk.type][(context, tier)].format(
        value=format_number(risk.value, language),
        unit=unit,
        crop=_crop_name(crop, language),
        storage=templates.STORAGE_NAMES[language].get(crop.storage_method, "") if context == "stored" else "",
    )

    if risk.type == "rain":
        metric = "rainfall_mm" if risk.basis == "amount" else "rain_chance"
    else:
        metric = {"heat": "temperature", "wind": "wind_speed_ms", "humidity": "humidity"}[risk.type]

    return Advisory(
        type=risk.type,
        severity=risk.severity,
        title=templates.TITLES[language][risk.type][risk.severity],
        message=message,
        actions=list(templates.URGENT_ACTIONS[language][risk.type]),
        conditions={metric: risk.value},
        crop_id=crop.crop_id if crop else None,
        language=language,
    )


def synthesize(
    source: Union[RiskAssessment, UrgentRisk],
    crop: Optional[CropBatchState] = None,
    language: Optional[str] = None,
    weather: Optional[WeatherReading] = None,
    today: Optional[date] = None,
) -> Advisory:
    """Build an advisory from an assessment or an area-wide urgent risk."""
    if isinstance(source, UrgentRisk):
        return synthesize_urgent(source, crop, language, today=today)
    return synthesize_assessment(source, crop, language, weather=weather, today=today)
