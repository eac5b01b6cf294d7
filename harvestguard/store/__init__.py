"""Store module."""
from harvestguard.store.connection import JsonFileStore, MemoryStore, get_store
from harvestguard.store.models import (
    Advisory,
    CropBatchState,
    NotificationPreferences,
    PendingAction,
    PendingNotification,
    RiskAssessment,
    RiskFactor,
    UrgentRisk,
    WeatherReading,
)
