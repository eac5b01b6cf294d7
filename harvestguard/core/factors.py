"""Risk factor analyzer: breaks a score into named contributors."""

from datetime import date
from typing import Iterable, Optional

from loguru import logger

from harvestguard.core.advisory import calculate_days_until_harvest
from harvestguard.core.scoring import (
    FALLBACK_SCORE,
    band_value,
    round_half_up,
    score,
    score_to_risk_level,
    storage_multiplier,
)
from harvestguard.store.models import CropBatchState, RiskAssessment, RiskFactor, WeatherReading
from harvestguard.utils.constants import (
    FACTOR_SEVERITY_BANDS,
    HARVEST_SOON_DAYS,
    HARVEST_TIMING_SEVERITY,
    RISK_LEVEL_RANK,
)

NO_RISK = "No significant risk"
INSUFFICIENT_DATA = "Insufficient data for risk assessment"

STORAGE_DESCRIPTIONS = {
    "humidity": "High humidity ({value}%) increases mold and spoilage risk",
    "temperature": "High temperature ({value}°C) accelerates deterioration",
    "rainfall": "Heavy rainfall ({value}mm) exposes stored grain to moisture",
    "wind": "Strong winds ({value} m/s) may damage storage cover",
}

GROWING_DESCRIPTIONS = {
    "humidity": "High humidity ({value}%) favours fungal disease",
    "temperature": "High temperature ({value}°C) may stress crops",
    "rainfall": "Heavy rainfall ({value}mm) may cause waterlogging and crop damage",
    "wind": "Strong winds ({value} m/s) may damage crops",
}

# factor type -> WeatherReading attribute
WEATHER_FACTORS = {
    "humidity": "humidity",
    "temperature": "temperature",
    "rainfall": "rainfall_mm",
    "wind": "wind_speed_ms",
}


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"


def _weather_factors(weather: WeatherReading, descriptions: dict[str, str]) -> list[RiskFactor]:
    factors = []
    for factor_type, attr in WEATHER_FACTORS.items():
        value = getattr(weather, attr)
        severity = band_value(value, FACTOR_SEVERITY_BANDS[attr])
        if severity > 0:
            factors.append(RiskFactor(
                type=factor_type,
                severity=severity,
                description=descriptions[factor_type].format(value=_num(value)),
            ))
    return factors


def _primary_threat(factors: list[RiskFactor]) -> str:
    if not factors:
        return NO_RISK
    best = factors[0]
    for factor in factors[1:]:
        if factor.severity > best.severity:
            best = factor
    return best.description


def _fallback(crop: Optional[CropBatchState]) -> RiskAssessment:
    logger.warning("Risk assessment called without weather or crop, using conservative default")
    return RiskAssessment(
        level=score_to_risk_level(FALLBACK_SCORE),
        score=FALLBACK_SCORE,
        factors=[],
        primary_threat=INSUFFICIENT_DATA,
        crop_id=crop.crop_id if crop is not None else None,
    )


def _finish(kind: str, crop: CropBatchState, weather: WeatherReading, factors: list[RiskFactor]) -> RiskAssessment:
    value = score(weather, crop)
    assessment = RiskAssessment(
        level=score_to_risk_level(value),
        score=value,
        factors=factors,
        primary_threat=_primary_threat(factors),
        crop_id=crop.crop_id,
    )
    logger.info(
        f"{kind} risk for {crop.crop_type or crop.crop_id}: score={assessment.score} "
        f"level={assessment.level} factors={[(f.type, f.severity) for f in factors]} "
        f"primary='{assessment.primary_threat}'"
    )
    return assessment


def calculate_storage_risk(crop: Optional[CropBatchState], weather: Optional[WeatherReading]) -> RiskAssessment:
    """Assess a harvested crop in storage."""
    if crop is None or weather is None:
        return _fallback(crop)

    factors = _weather_factors(weather, STORAGE_DESCRIPTIONS)

    multiplier = storage_multiplier(crop)
    if multiplier > 1.0:
        factors.append(RiskFactor(
            type="storage",
            severity=round_half_up((multiplier - 1.0) * 100),
            description=f"Storage type '{crop.storage_method}' is vulnerable to weather conditions",
        ))

    return _finish("Storage", crop, weather, factors)


def calculate_growing_risk(
    crop: Optional[CropBatchState],
    weather: Optional[WeatherReading],
    today: Optional[date] = None,
) -> RiskAssessment:
    """Assess a crop still in the field."""
    if crop is None or weather is None:
        return _fallback(crop)

    factors = _weather_factors(weather, GROWING_DESCRIPTIONS)

    days = calculate_days_until_harvest(crop.expected_harvest_date, today=today)
    if days is not None and 0 < days <= HARVEST_SOON_DAYS:
        factors.append(RiskFactor(
            type="harvest_timing",
            severity=HARVEST_TIMING_SEVERITY,
            description=f"Harvest in {days} days - weather events pose higher risk",
        ))

    return _finish("Growing", crop, weather, factors)


def assess(
    crop: Optional[CropBatchState],
    weather: Optional[WeatherReading],
    today: Optional[date] = None,
) -> RiskAssessment:
    if crop is None or weather is None:
        return _fallback(crop)
    if crop.is_harvested:
        return calculate_storage_risk(crop, weather)
    return calculate_growing_risk(crop, weather, today=today)


def determine_overall_risk(assessments: Iterable[RiskAssessment]) -> str:
    """Highest level across assessments; Low when there are none."""
    assessments = list(assessments)
    if not assessments:
        return "Low"

    worst = assessments[0]
    for current in assessments[1:]:
        if RISK_LEVEL_RANK[current.level] > RISK_LEVEL_RANK[worst.level]:
            worst = current

    logger.debug(
        f"Overall risk from {len(assessments)} assessments: {worst.level} ({worst.primary_threat})"
    )
    return worst.level
