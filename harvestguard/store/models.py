"""Data models for weather, crops, assessments and notifications."""

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional

from harvestguard.utils.constants import (
    FACTOR_ORDER,
    IDEAL_WEATHER,
    STAGES,
    STORAGE_METHODS,
)
from harvestguard.utils.errors import CropStateError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO string or date into an aware UTC datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _finite(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def _clamp_percent(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return min(100.0, max(0.0, value))


@dataclass(frozen=True)
class WeatherReading:
    """One weather snapshot. Missing or non-finite values read as ideal."""
    temperature: float = IDEAL_WEATHER["temperature"]
    humidity: float = IDEAL_WEATHER["humidity"]
    rainfall_mm: float = IDEAL_WEATHER["rainfall_mm"]
    wind_speed_ms: float = IDEAL_WEATHER["wind_speed_ms"]
    rain_chance: Optional[float] = None
    captured_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        for name, ideal in IDEAL_WEATHER.items():
            object.__setattr__(self, name, _finite(getattr(self, name), ideal))
        object.__setattr__(self, "humidity", _clamp_percent(self.humidity))
        object.__setattr__(self, "rain_chance", _clamp_percent(_finite(self.rain_chance, None)))
        object.__setattr__(self, "captured_at", parse_datetime(self.captured_at) or utcnow())

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherReading":
        def pick(*keys):
            for key in keys:
                if key in data:
                    return data[key]
            return None

        return cls(
            temperature=pick("temperature"),
            humidity=pick("humidity"),
            rainfall_mm=pick("rainfall_mm", "rainfallMm", "rainfall"),
            wind_speed_ms=pick("wind_speed_ms", "windSpeedMs", "windSpeed", "wind_speed"),
            rain_chance=pick("rain_chance", "rainChance"),
            captured_at=pick("captured_at", "capturedAt", "timestamp"),
        )

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "rainfall_mm": self.rainfall_mm,
            "wind_speed_ms": self.wind_speed_ms,
            "rain_chance": self.rain_chance,
            "captured_at": self.captured_at.isoformat(),
        }


@dataclass
class CropBatchState:
    """A farmer's crop batch, growing or harvested."""
    crop_id: str
    crop_type: str
    stage: str = "growing"
    expected_harvest_date: Optional[Any] = None
    storage_method: Optional[str] = None
    actual_harvest_date: Optional[Any] = None
    weight_kg: Optional[float] = None

    def __post_init__(self):
        if self.stage not in STAGES:
            raise CropStateError(f"Unknown crop stage: {self.stage}")
        if self.stage == "growing":
            if self.storage_method is not None or self.actual_harvest_date is not None:
                raise CropStateError(f"Growing crop {self.crop_id} cannot carry storage fields")
        else:
            if self.expected_harvest_date is not None:
                raise CropStateError(f"Harvested crop {self.crop_id} cannot carry an expected harvest date")
            if self.storage_method not in STORAGE_METHODS:
                raise CropStateError(f"Harvested crop {self.crop_id} needs a storage method, got {self.storage_method}")

    @property
    def is_harvested(self) -> bool:
        return self.stage == "harvested"

    def harvest(self, storage_method: str, on: Optional[date] = None) -> "CropBatchState":
        """One-way growing -> harvested transition."""
        if self.is_harvested:
            raise CropStateError(f"Crop {self.crop_id} is already harvested")
        if storage_method not in STORAGE_METHODS:
            raise CropStateError(f"Unknown storage method: {storage_method}")
        self.stage = "harvested"
        self.expected_harvest_date = None
        self.storage_method = storage_method
        self.actual_harvest_date = on or utcnow().date()
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "CropBatchState":
        """Build from an external record, keeping only the fields of its stage."""
        stage = data.get("stage", "growing")
        fields = {
            "crop_id": str(data.get("crop_id") or data.get("cropId") or data.get("_id") or new_id()),
            "crop_type": data.get("crop_type") or data.get("cropType") or "",
            "stage": stage,
            "weight_kg": _finite(data.get("weight_kg", data.get("weightKg")), None),
        }
        if stage == "harvested":
            fields["storage_method"] = (
                data.get("storage_method") or data.get("storageMethod") or data.get("storageLocation")
            )
            fields["actual_harvest_date"] = data.get("actual_harvest_date") or data.get("actualHarvestDate")
        else:
            fields["expected_harvest_date"] = data.get("expected_harvest_date") or data.get("expectedHarvestDate")
        return cls(**fields)

    def to_dict(self) -> dict:
        result = {
            "crop_id": self.crop_id,
            "crop_type": self.crop_type,
            "stage": self.stage,
            "weight_kg": self.weight_kg,
        }
        if self.is_harvested:
            result["storage_method"] = self.storage_method
            result["actual_harvest_date"] = _iso(self.actual_harvest_date)
        else:
            result["expected_harvest_date"] = _iso(self.expected_harvest_date)
        return result


def _iso(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


@dataclass
class RiskFactor:
    """Named contributor to a risk assessment."""
    type: str
    severity: int
    description: str = ""

    def to_dict(self) -> dict:
        return {"type": self.type, "severity": self.severity, "description": self.description}


@dataclass
class RiskAssessment:
    """Scored risk for one crop under one weather reading."""
    level: str
    score: int
    factors: list[RiskFactor] = field(default_factory=list)
    primary_threat: str = "No significant risk"
    crop_id: Optional[str] = None

    @property
    def primary_factor(self) -> Optional[RiskFactor]:
        if not self.factors:
            return None
        ordered = sorted(self.factors, key=lambda f: FACTOR_ORDER.index(f.type))
        best = ordered[0]
        for factor in ordered[1:]:
            if factor.severity > best.severity:
                best = factor
        return best

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "score": self.score,
            "factors": [f.to_dict() for f in self.factors],
            "primary_threat": self.primary_threat,
            "crop_id": self.crop_id,
        }


@dataclass(frozen=True)
class UrgentRisk:
    """The single most urgent area-wide weather risk."""
    type: str
    severity: str
    value: float
    # rain only: "chance" (forecast %) or "amount" (mm)
    basis: Optional[str] = field(default=None, compare=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "severity": self.severity, "value": self.value}


@dataclass
class Advisory:
    """User-facing advisory. Identity for dedup is type-severity-title."""
    type: str
    severity: str
    title: str
    message: str
    actions: list[str] = field(default_factory=list)
    conditions: dict = field(default_factory=dict)
    level: Optional[str] = None
    crop_id: Optional[str] = None
    language: str = "bn"

    @property
    def key(self) -> str:
        return f"{self.type}-{self.severity}-{self.title}"

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "type": self.type,
            "severity": self.severity,
            "title": self.title,
            "message": self.message,
            "actions": list(self.actions),
            "conditions": dict(self.conditions),
            "level": self.level,
            "crop_id": self.crop_id,
            "language": self.language,
        }


@dataclass
class PendingNotification:
    """Notification waiting for its delay or for connectivity."""
    type: str
    payload: dict
    scheduled_for: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)
    delivered: bool = False
    created_at: datetime = field(default_factory=utcnow)
    key: Optional[str] = None
    require_interaction: bool = False

    @property
    def title(self) -> str:
        return self.payload.get("title", "")

    @property
    def message(self) -> str:
        return self.payload.get("message", "")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "scheduled_for": self.scheduled_for.isoformat(),
            "payload": dict(self.payload),
            "delivered": self.delivered,
            "created_at": self.created_at.isoformat(),
            "key": self.key,
            "require_interaction": self.require_interaction,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PendingNotification":
        return cls(
            id=data.get("id") or new_id(),
            type=data.get("type", "weather-advisory"),
            payload=dict(data.get("payload") or {}),
            scheduled_for=parse_datetime(data.get("scheduled_for")) or utcnow(),
            delivered=bool(data.get("delivered", False)),
            created_at=parse_datetime(data.get("created_at")) or utcnow(),
            key=data.get("key"),
            require_interaction=bool(data.get("require_interaction", False)),
        )


@dataclass
class PendingAction:
    """Create/update/delete awaiting replay against the server."""
    type: str
    resource: str
    data: dict
    id: str = field(default_factory=new_id)
    timestamp: datetime = field(default_factory=utcnow)
    retry_count: int = 0
    last_error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "resource": self.resource,
            "data": dict(self.data),
            "timestamp": self.timestamp.isoformat(),
            "retry_count": self.retry_count,
            "last_error": self.last_error,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PendingAction":
        return cls(
            id=data.get("id") or new_id(),
            type=data["type"],
            resource=data["resource"],
            data=dict(data.get("data") or {}),
            timestamp=parse_datetime(data.get("timestamp")) or utcnow(),
            retry_count=int(data.get("retry_count", 0)),
            last_error=data.get("last_error"),
        )


@dataclass
class NotificationPreferences:
    """Per-category opt-outs."""
    scan_results: bool = True
    pending_scans: bool = True
    weather_advisories: bool = True
    harvest_reminders: bool = True

    def allows(self, category: str) -> bool:
        return bool(getattr(self, category, True))

    def to_dict(self) -> dict:
        return {
            "scan_results": self.scan_results,
            "pending_scans": self.pending_scans,
            "weather_advisories": self.weather_advisories,
            "harvest_reminders": self.harvest_reminders,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "NotificationPreferences":
        data = data or {}
        return cls(**{k: bool(v) for k, v in data.items() if k in cls.__dataclass_fields__})
