"""Configuration loader for HarvestGuard."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class UrgencyConfig(BaseModel):
    # URGENCY_HUMIDITY_MEDIUM_ALT (75) is the lower alternative boundary
    humidity_medium_threshold: float = 80


class NotificationConfig(BaseModel):
    medium_delay_seconds: float = 300
    pending_scan_interval_hours: float = 24
    harvest_reminder_days: list[int] = [7, 3, 1]
    notified_max_keys: Optional[int] = 1000
    default_language: str = "bn"


class QueueConfig(BaseModel):
    max_entries: int = 50
    max_age_hours: float = 24


class SyncConfig(BaseModel):
    base_url: str = "http://localhost:5000"
    timeout_seconds: int = 30
    max_retries: Optional[int] = 3


class StorageConfig(BaseModel):
    backend: str = "file"
    data_dir: str = "data/state"


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True
    cors_origins: list[str] = ["*"]


class LoggingConfig(BaseModel):
    level: str = "DEBUG"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    rotation: str = "10 MB"
    retention: str = "7 days"
    to_file: bool = True


class AppConfig(BaseModel):
    name: str = "harvestguard"
    version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True


class Settings(BaseModel):
    app: AppConfig = AppConfig()
    logging: LoggingConfig = LoggingConfig()
    urgency: UrgencyConfig = UrgencyConfig()
    notifications: NotificationConfig = NotificationConfig()
    queue: QueueConfig = QueueConfig()
    sync: SyncConfig = SyncConfig()
    storage: StorageConfig = StorageConfig()
    api: APIConfig = APIConfig()


def get_project_root() -> Path:
    return Path(__file__).parent.parent.parent


def load_yaml_config(env: str = "development") -> dict[str, Any]:
    config_path = get_project_root() / "config" / "environments" / f"{env}.yaml"
    if not config_path.exists():
        return {}
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_settings(env: Optional[str] = None) -> Settings:
    env = env or os.getenv("APP_ENV", "development")
    yaml_config = load_yaml_config(env)

    # Override with env vars
    if os.getenv("HARVESTGUARD_DATA_DIR"):
        yaml_config.setdefault("storage", {})["data_dir"] = os.getenv("HARVESTGUARD_DATA_DIR")
    if os.getenv("HARVESTGUARD_STORAGE_BACKEND"):
        yaml_config.setdefault("storage", {})["backend"] = os.getenv("HARVESTGUARD_STORAGE_BACKEND")
    if os.getenv("SYNC_BASE_URL"):
        yaml_config.setdefault("sync", {})["base_url"] = os.getenv("SYNC_BASE_URL")
    if os.getenv("LOG_LEVEL"):
        yaml_config.setdefault("logging", {})["level"] = os.getenv("LOG_LEVEL")

    return Settings(**yaml_config) if yaml_config else Settings()


settings = get_settings()
