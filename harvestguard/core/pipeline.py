"""Evaluation cycle: weather + crops -> advisories -> dispatch."""

import time
from datetime import date
from typing import Callable, Iterable, Optional

from loguru import logger

from harvestguard.core.advisory import calculate_days_until_harvest, synthesize
from harvestguard.core.factors import assess
from harvestguard.core.scoring import storage_multiplier
from harvestguard.core.urgency import determine_most_urgent_risk
from harvestguard.store.models import Advisory, CropBatchState, RiskAssessment, WeatherReading
from harvestguard.utils.constants import RISK_LEVEL_RANK, SEVERITY_RANK

ALERT_MIN_LEVEL = "Medium"


def _context_crop(crops: list[CropBatchState], today: Optional[date]) -> Optional[CropBatchState]:
    """Growing crop with the nearest harvest, else the most exposed stored crop."""
    growing = [c for c in crops if not c.is_harvested]
    if not growing:
        if not crops:
            return None
        return max(crops, key=storage_multiplier)

    def days(crop):
        value = calculate_days_until_harvest(crop.expected_harvest_date, today=today)
        return value if value is not None else float("inf")

    return min(growing, key=days)


def assess_all(
    weather: WeatherReading,
    crops: Iterable[CropBatchState],
    today: Optional[date] = None,
) -> list[tuple[CropBatchState, RiskAssessment]]:
    return [(crop, assess(crop, weather, today=today)) for crop in crops]


def evaluate(
    farmer_id: str,
    weather: Optional[WeatherReading],
    crops: Optional[Iterable[CropBatchState]],
    language: Optional[str] = None,
    today: Optional[date] = None,
) -> list[Advisory]:
    """Advisories for one farmer, most severe first, one per identity key."""
    if weather is None:
        logger.warning(f"No weather for farmer {farmer_id}, skipping evaluation")
        return []

    crops = list(crops or [])
    advisories = []
    for crop, assessment in assess_all(weather, crops, today=today):
        if RISK_LEVEL_RANK[assessment.level] < RISK_LEVEL_RANK[ALERT_MIN_LEVEL]:
            continue
        advisories.append(synthesize(assessment, crop, language, weather=weather, today=today))

    if not advisories:
        urgent = determine_most_urgent_risk(weather)
        if urgent is not None:
            advisories.append(synthesize(urgent, _context_crop(crops, today), language, today=today))

    seen, unique = set(), []
    for advisory in advisories:
        if advisory.key not in seen:
            seen.add(advisory.key)
            unique.append(advisory)
    unique.sort(key=lambda a: SEVERITY_RANK[a.severity], reverse=True)

    logger.info(f"Evaluated {len(crops)} crops for farmer {farmer_id}: {len(unique)} advisories")
    return unique


def dispatch(advisories: Iterable[Advisory], dispatcher, language: Optional[str] = None) -> list[str]:
    """Hand advisories to a farmer's notification dispatcher."""
    return dispatcher.dispatch(advisories, language)


def run_cycle(
    farmer_id: str,
    fetch_weather: Callable[[str], WeatherReading],
    fetch_crop_batches: Callable[[str], list[CropBatchState]],
    dispatcher,
    language: Optional[str] = None,
) -> list[Advisory]:
    """Fetch, evaluate and dispatch; a failed weather fetch skips the cycle."""
    start = time.time()

    try:
        weather = fetch_weather(farmer_id)
    except Exception as e:
        logger.warning(f"Weather fetch failed for farmer {farmer_id}, skipping cycle: {e}")
        return []

    try:
        crops = fetch_crop_batches(farmer_id)
    except Exception as e:
        logger.warning(f"Crop fetch failed for farmer {farmer_id}, using area-wide risk: {e}")
        crops = []

    advisories = evaluate(farmer_id, weather, crops, language)
    dispatch(advisories, dispatcher, language)

    logger.info(f"Cycle for farmer {farmer_id} completed in {time.time() - start:.2f}s")
    return advisories
