"""Risk scoring engine: weather + crop -> score and level."""

import math
from typing import Optional

from harvestguard.store.models import CropBatchState, WeatherReading
from harvestguard.utils.constants import SCORING_BANDS, STORAGE_VULNERABILITY

# Conservative default when inputs are missing; maps to Medium
FALLBACK_SCORE = 50


def band_value(value: float, bands: list[tuple[float, int]], default=0):
    """Value of the highest band whose inclusive lower bound is reached."""
    for threshold, result in bands:
        if value >= threshold:
            return result
    return default


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def storage_multiplier(crop: CropBatchState) -> float:
    if crop.stage != "harvested" or not crop.storage_method:
        return 1.0
    return STORAGE_VULNERABILITY.get(crop.storage_method, 1.0)


def metric_points(weather: WeatherReading) -> dict[str, int]:
    return {metric: band_value(getattr(weather, metric), bands) for metric, bands in SCORING_BANDS.items()}


def score(weather: Optional[WeatherReading], crop: Optional[CropBatchState]) -> int:
    """Score a crop's exposure to the current weather, 0-100."""
    if weather is None or crop is None:
        return FALLBACK_SCORE

    total = sum(metric_points(weather).values())
    total *= storage_multiplier(crop)
    return round_half_up(min(100.0, total))


def score_to_risk_level(value: int) -> str:
    if value >= 80:
        return "Critical"
    if value >= 60:
        return "High"
    if value >= 40:
        return "Medium"
    return "Low"
