"""Offline notification queue and pending-action sync queue."""

import threading
from datetime import datetime, timedelta
from typing import Optional

from loguru import logger

from harvestguard.store.connection import KEY_PREFIX
from harvestguard.store.models import PendingAction, PendingNotification, parse_datetime, utcnow
from harvestguard.utils.config import settings


class OfflineQueue:
    """Bounded, age-limited notifications awaiting delivery for one farmer.

    State is loaded once from the store and written back after every
    mutation. A failed read starts the queue empty; a failed write is logged
    and the in-memory queue carries on.
    """

    def __init__(
        self,
        store,
        farmer_id: str,
        max_entries: Optional[int] = None,
        max_age_hours: Optional[float] = None,
        lock: Optional[threading.RLock] = None,
    ):
        self.store = store
        self.farmer_id = farmer_id
        self.key = f"{KEY_PREFIX}notification_queue_{farmer_id}"
        self.max_entries = max_entries or settings.queue.max_entries
        self.max_age = timedelta(hours=max_age_hours or settings.queue.max_age_hours)
        self._lock = lock or threading.RLock()
        self._entries: list[PendingNotification] = self._load()

    def _load(self) -> list[PendingNotification]:
        try:
            raw = self.store.get(self.key, []) or []
            return [PendingNotification.from_dict(item) for item in raw]
        except Exception as e:
            logger.error(f"Failed to load notification queue for {self.farmer_id}, starting empty: {e}")
            return []

    def _persist(self) -> None:
        try:
            self.store.put(self.key, [entry.to_dict() for entry in self._entries])
        except Exception as e:
            logger.error(f"Failed to persist notification queue for {self.farmer_id}: {e}")

    def enqueue(self, entry: PendingNotification) -> PendingNotification:
        with self._lock:
            self._entries.append(entry)
            overflow = len(self._entries) - self.max_entries
            if overflow > 0:
                evicted = self._entries[:overflow]
                self._entries = self._entries[overflow:]
                logger.warning(f"Queue for {self.farmer_id} full, evicted {len(evicted)} oldest entries")
            self._persist()
            return entry

    def drain_due(self, now: Optional[datetime] = None) -> list[PendingNotification]:
        """Hand back entries that are due, dropping stale ones unseen."""
        now = parse_datetime(now) or utcnow()
        cutoff = now - self.max_age
        with self._lock:
            fresh = [e for e in self._entries if e.created_at >= cutoff]
            stale = len(self._entries) - len(fresh)
            if stale:
                logger.debug(f"Discarded {stale} stale notifications for {self.farmer_id}")

            due = [e for e in fresh if not e.delivered and e.scheduled_for <= now]
            for entry in due:
                entry.delivered = True

            self._entries = [e for e in fresh if not e.delivered]
            self._persist()
            return due

    def mark_delivered(self, entry_id: str) -> bool:
        """Claim one entry for delivery; False when already delivered or gone."""
        with self._lock:
            entry = self.get(entry_id)
            if entry is None or entry.delivered:
                return False
            entry.delivered = True
            self._entries = [e for e in self._entries if not e.delivered]
            self._persist()
            return True

    def get(self, entry_id: str) -> Optional[PendingNotification]:
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
            return None

    def entries(self) -> list[PendingNotification]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries = []
            self._persist()

    def __len__(self) -> int:
        return len(self._entries)


class SyncQueue:
    """Pending create/update/delete actions; retries are the caller's call."""

    def __init__(self, store, farmer_id: str, lock: Optional[threading.RLock] = None):
        self.store = store
        self.farmer_id = farmer_id
        self.key = f"{KEY_PREFIX}pending_actions_{farmer_id}"
        self._lock = lock or threading.RLock()
        self._actions: list[PendingAction] = self._load()

    def _load(self) -> list[PendingAction]:
        try:
            raw = self.store.get(self.key, []) or []
            return [PendingAction.from_dict(item) for item in raw]
        except Exception as e:
            logger.error(f"Failed to load pending actions for {self.farmer_id}, starting empty: {e}")
            return []

    def _persist(self) -> None:
        try:
            self.store.put(self.key, [action.to_dict() for action in self._actions])
        except Exception as e:
            logger.error(f"Failed to persist pending actions for {self.farmer_id}: {e}")

    def queue_action(self, action_type: str, resource: str, data: dict) -> PendingAction:
        action = PendingAction(type=action_type, resource=resource, data=dict(data))
        with self._lock:
            self._actions.append(action)
            self._persist()
        logger.debug(f"Queued {action_type} {resource} for {self.farmer_id}")
        return action

    def pending(self) -> list[PendingAction]:
        with self._lock:
            return sorted(self._actions, key=lambda a: a.timestamp)

    def record_failure(self, action_id: str, error: str) -> Optional[PendingAction]:
        with self._lock:
            for action in self._actions:
                if action.id == action_id:
                    action.retry_count += 1
                    action.last_error = error
                    self._persist()
                    return action
            return None

    def remove(self, action_id: str) -> None:
        with self._lock:
            self._actions = [a for a in self._actions if a.id != action_id]
            self._persist()

    def clear(self) -> None:
        with self._lock:
            self._actions = []
            self._persist()

    def __len__(self) -> int:
        return len(self._actions)
