"""Urgency prioritizer: the single most pressing area-wide weather risk."""

from typing import Optional

from loguru import logger

from harvestguard.core.scoring import band_value
from harvestguard.store.models import UrgentRisk, WeatherReading
from harvestguard.utils.constants import SEVERITY_RANK, URGENCY_TIERS, URGENCY_TYPE_ORDER
from harvestguard.utils.config import settings


def _humidity_tiers(medium_threshold: float) -> list[tuple[float, str]]:
    high = URGENCY_TIERS["humidity"][0]
    return [high, (medium_threshold, "medium")]


def candidate_risks(weather: WeatherReading, humidity_medium_threshold: Optional[float] = None) -> list[UrgentRisk]:
    """Every risk type that crosses a tier, in tie-break order."""
    if humidity_medium_threshold is None:
        humidity_medium_threshold = settings.urgency.humidity_medium_threshold

    if weather.rain_chance is not None:
        rain = (weather.rain_chance, band_value(weather.rain_chance, URGENCY_TIERS["rain_chance"], None))
    else:
        rain = (weather.rainfall_mm, band_value(weather.rainfall_mm, URGENCY_TIERS["rainfall_mm"], None))

    readings = {
        "rain": rain,
        "heat": (weather.temperature, band_value(weather.temperature, URGENCY_TIERS["heat"], None)),
        "wind": (weather.wind_speed_ms, band_value(weather.wind_speed_ms, URGENCY_TIERS["wind"], None)),
        "humidity": (
            weather.humidity,
            band_value(weather.humidity, _humidity_tiers(humidity_medium_threshold), None),
        ),
    }

    rain_basis = "chance" if weather.rain_chance is not None else "amount"
    return [
        UrgentRisk(
            type=risk_type,
            severity=readings[risk_type][1],
            value=readings[risk_type][0],
            basis=rain_basis if risk_type == "rain" else None,
        )
        for risk_type in URGENCY_TYPE_ORDER
        if readings[risk_type][1] is not None
    ]


def determine_most_urgent_risk(
    weather: Optional[WeatherReading],
    humidity_medium_threshold: Optional[float] = None,
) -> Optional[UrgentRisk]:
    if weather is None:
        return None

    candidates = candidate_risks(weather, humidity_medium_threshold)
    if not candidates:
        return None

    # max() keeps the first of equal tiers, so list order is the tie-break
    urgent = max(candidates, key=lambda r: SEVERITY_RANK[r.severity])
    logger.debug(f"Most urgent risk: {urgent.type}/{urgent.severity} ({urgent.value}) of {len(candidates)} candidates")
    return urgent
