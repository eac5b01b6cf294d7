"""Project-wide constants.

Three threshold tables below look alike but are intentionally separate views
of the same weather metrics: point scoring, factor severity percentiles and
area-wide urgency tiers. Their cut-offs differ on purpose; keep them apart.
"""

RISK_LEVELS = ["Low", "Medium", "High", "Critical"]
RISK_LEVEL_RANK = {level: rank for rank, level in enumerate(RISK_LEVELS)}

SEVERITIES = ["low", "medium", "high"]
SEVERITY_RANK = {severity: rank for rank, severity in enumerate(SEVERITIES)}

LEVEL_TO_SEVERITY = {
    "Low": "low",
    "Medium": "medium",
    "High": "high",
    "Critical": "high",
}

STAGES = ["growing", "harvested"]

STORAGE_METHODS = ["silo", "tin_shed", "jute_bag", "open_space"]

STORAGE_VULNERABILITY = {
    "open_space": 1.5,
    "jute_bag": 1.2,
    "tin_shed": 1.1,
    "silo": 1.0,
}

# Readings that contribute nothing to any table; substituted for missing data
IDEAL_WEATHER = {
    "temperature": 25.0,
    "humidity": 50.0,
    "rainfall_mm": 0.0,
    "wind_speed_ms": 3.0,
}

# Point scoring: (inclusive lower bound, points), highest band first
SCORING_BANDS = {
    "humidity": [(90, 35), (80, 25), (70, 15), (60, 8)],
    "temperature": [(42, 30), (38, 20), (35, 12), (30, 7)],
    "rainfall_mm": [(150, 25), (100, 18), (50, 10), (20, 5)],
    "wind_speed_ms": [(20, 10), (15, 7), (10, 4)],
}

# Factor severity percentiles: (inclusive lower bound, severity 0-100)
FACTOR_SEVERITY_BANDS = {
    "humidity": [(90, 100), (80, 75), (70, 50), (60, 25)],
    "temperature": [(42, 100), (38, 75), (35, 50), (30, 25)],
    "rainfall_mm": [(150, 100), (100, 75), (50, 50), (20, 25)],
    "wind_speed_ms": [(20, 100), (15, 75), (10, 50)],
}

# Evaluation order doubles as the primary-threat tie-break
FACTOR_ORDER = ["humidity", "temperature", "rainfall", "wind", "storage", "harvest_timing"]

HARVEST_TIMING_SEVERITY = 50
HARVEST_SOON_DAYS = 7

# Urgency tiers: (inclusive lower bound, severity), highest tier first
URGENCY_TIERS = {
    "rain_chance": [(70, "high"), (50, "medium")],
    "rainfall_mm": [(50, "high"), (20, "medium")],
    "heat": [(38, "high"), (35, "medium"), (30, "low")],
    "wind": [(15, "high"), (10, "medium")],
    "humidity": [(90, "high"), (80, "medium")],
}
URGENCY_HUMIDITY_MEDIUM_ALT = 75

# Tie-break among equal urgency tiers
URGENCY_TYPE_ORDER = ["rain", "heat", "wind", "humidity"]

SEVERITY_EMOJI = {"high": "🚨", "medium": "⚠️", "low": "ℹ️"}

LANGUAGES = ["bn", "en"]

BANGLA_DIGITS = "০১২৩৪৫৬৭৮৯"

SYNC_RESOURCES = {
    "crop-batch": "/api/crop-batches",
    "health-scan": "/api/health-scans",
    "advisory": "/api/advisories",
}
