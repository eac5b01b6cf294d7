"""Per-farmer notification state."""

import threading
from typing import Optional

from loguru import logger

from harvestguard.notify.queue import OfflineQueue, SyncQueue
from harvestguard.store.connection import KEY_PREFIX, MemoryStore
from harvestguard.store.models import NotificationPreferences
from harvestguard.utils.config import settings


class NotifiedSet:
    """Persisted set of keys, oldest evicted first once max_keys is reached."""

    def __init__(self, store, key: str, max_keys: Optional[int] = None, lock: Optional[threading.RLock] = None):
        self.store = store
        self.key = key
        self.max_keys = max_keys
        self._lock = lock or threading.RLock()
        self._keys: list[str] = self._load()

    def _load(self) -> list[str]:
        try:
            return list(dict.fromkeys(self.store.get(self.key, []) or []))
        except Exception as e:
            logger.error(f"Failed to load {self.key}, starting empty: {e}")
            return []

    def _persist(self) -> None:
        try:
            self.store.put(self.key, self._keys)
        except Exception as e:
            logger.error(f"Failed to persist {self.key}: {e}")

    def add(self, item: str) -> None:
        with self._lock:
            if item in self._keys:
                return
            self._keys.append(item)
            if self.max_keys is not None and len(self._keys) > self.max_keys:
                self._keys = self._keys[-self.max_keys:]
            self._persist()

    def clear(self) -> None:
        with self._lock:
            self._keys = []
            self._persist()

    def __contains__(self, item: str) -> bool:
        with self._lock:
            return item in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(list(self._keys))


class FarmerSession:
    """All mutable notification state for one farmer, behind one lock."""

    def __init__(self, farmer_id: str, store=None, phone: Optional[str] = None, online: bool = True):
        self.farmer_id = farmer_id
        self.store = store if store is not None else MemoryStore()
        self.phone = phone
        self.online = online
        self.lock = threading.RLock()

        max_keys = settings.notifications.notified_max_keys
        self.notified = NotifiedSet(
            self.store, f"{KEY_PREFIX}notified_advisories_{farmer_id}", max_keys, self.lock
        )
        self.reminders = NotifiedSet(
            self.store, f"{KEY_PREFIX}harvest_reminders_{farmer_id}", max_keys, self.lock
        )
        self.queue = OfflineQueue(self.store, farmer_id, lock=self.lock)
        self.sync_queue = SyncQueue(self.store, farmer_id, lock=self.lock)
        self._preferences_key = f"{KEY_PREFIX}notification_preferences_{farmer_id}"

    @property
    def preferences(self) -> NotificationPreferences:
        try:
            return NotificationPreferences.from_dict(self.store.get(self._preferences_key))
        except Exception as e:
            logger.error(f"Failed to load preferences for {self.farmer_id}, using defaults: {e}")
            return NotificationPreferences()

    def update_preferences(self, **changes) -> NotificationPreferences:
        with self.lock:
            current = self.preferences.to_dict()
            current.update({k: bool(v) for k, v in changes.items() if k in current and v is not None})
            try:
                self.store.put(self._preferences_key, current)
            except Exception as e:
                logger.error(f"Failed to persist preferences for {self.farmer_id}: {e}")
            return NotificationPreferences.from_dict(current)

    def set_online(self, online: bool) -> None:
        self.online = online
        logger.info(f"Farmer {self.farmer_id} is {'online' if online else 'offline'}")


class SessionRegistry:
    """One session per farmer; sessions never share state."""

    def __init__(self, store=None):
        self.store = store if store is not None else MemoryStore()
        self._sessions: dict[str, FarmerSession] = {}
        self._lock = threading.Lock()

    def get(self, farmer_id: str, phone: Optional[str] = None) -> FarmerSession:
        with self._lock:
            session = self._sessions.get(farmer_id)
            if session is None:
                session = FarmerSession(farmer_id, self.store, phone=phone)
                self._sessions[farmer_id] = session
            elif phone:
                session.phone = phone
            return session

    def farmers(self) -> list[str]:
        with self._lock:
            return sorted(self._sessions)
