"""Core module."""
from harvestguard.core.advisory import calculate_days_until_harvest, format_number, synthesize
from harvestguard.core.factors import (
    assess,
    calculate_growing_risk,
    calculate_storage_risk,
    determine_overall_risk,
)
from harvestguard.core.formatter import format_output
from harvestguard.core.pipeline import dispatch, evaluate, run_cycle
from harvestguard.core.scoring import score, score_to_risk_level
from harvestguard.core.urgency import determine_most_urgent_risk
