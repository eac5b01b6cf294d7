"""Notification dispatcher: dedup, delay, preferences and fallback."""

import threading
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, Optional

from loguru import logger

from harvestguard.core.advisory import calculate_days_until_harvest, format_number
from harvestguard.core.templates import NOTIFICATIONS
from harvestguard.notify.channels import LogChannel, SmsLogChannel, ToastLogChannel
from harvestguard.notify.scheduler import TimerScheduler
from harvestguard.notify.session import FarmerSession, SessionRegistry
from harvestguard.store.models import Advisory, CropBatchState, PendingNotification, utcnow
from harvestguard.utils.config import settings
from harvestguard.utils.constants import SEVERITY_EMOJI

DISABLED = "disabled"
DUPLICATE = "duplicate"
DELIVERED = "delivered"
SCHEDULED = "scheduled"
QUEUED = "queued"
INFORMATIONAL = "informational"


class NotificationDispatcher:
    """Delivers advisories and reminders for a single farmer session."""

    def __init__(
        self,
        session: FarmerSession,
        channel=None,
        fallback=None,
        sms=None,
        scheduler=None,
        clock: Optional[Callable[[], datetime]] = None,
        medium_delay_seconds: Optional[float] = None,
    ):
        self.session = session
        self.channel = channel or LogChannel()
        self.fallback = fallback or ToastLogChannel()
        self.sms = sms or SmsLogChannel()
        self.scheduler = scheduler or TimerScheduler()
        self.clock = clock or utcnow
        self.medium_delay = (
            settings.notifications.medium_delay_seconds if medium_delay_seconds is None else medium_delay_seconds
        )
        self.poll_interval = settings.notifications.pending_scan_interval_hours * 3600
        self.reminder_days = list(settings.notifications.harvest_reminder_days)
        self._poll_handle = None
        self._poll_generation = 0

    def _show(self, title: str, body: str, require_interaction: bool = False, tag: Optional[str] = None) -> bool:
        """Try the interactive channel, fall back to the toast. True if primary delivered."""
        try:
            if self.channel.deliver(title, body, require_interaction=require_interaction, tag=tag):
                return True
            logger.warning(f"Primary channel unavailable for '{title}', using fallback")
        except Exception as e:
            logger.warning(f"Primary channel failed for '{title}': {e}, using fallback")

        try:
            self.fallback.deliver_fallback(title, body)
        except Exception as e:
            logger.error(f"Fallback channel failed for '{title}': {e}")
        return False

    def _allowed(self, category: str) -> bool:
        if self.session.preferences.allows(category):
            return True
        logger.debug(f"{category} disabled for farmer {self.session.farmer_id}")
        return False

    def _language(self, language: Optional[str]) -> str:
        return language or settings.notifications.default_language

    # ---- advisories ----

    def notify_advisory(self, advisory: Advisory, language: Optional[str] = None) -> str:
        if not self._allowed("weather_advisories"):
            return DISABLED

        session = self.session
        title = f"{SEVERITY_EMOJI.get(advisory.severity, '')} {advisory.title}".strip()

        with session.lock:
            if advisory.key in session.notified:
                logger.debug(f"Advisory {advisory.key} already notified for {session.farmer_id}")
                return DUPLICATE

            now = self.clock()
            delay = self.medium_delay if advisory.severity == "medium" else 0
            entry = PendingNotification(
                type="weather-advisory",
                payload={"title": title, "message": advisory.message},
                scheduled_for=now + timedelta(seconds=delay),
                created_at=now,
                key=advisory.key,
                require_interaction=advisory.severity == "high",
            )
            session.notified.add(advisory.key)

            if not session.online:
                session.queue.enqueue(entry)
                status = QUEUED
            elif advisory.severity == "medium":
                session.queue.enqueue(entry)
                status = SCHEDULED
            else:
                status = INFORMATIONAL if advisory.severity == "low" else DELIVERED

        if status == SCHEDULED:
            self.scheduler.call_later(delay, self._deliver_pending, entry.id)
        elif status == DELIVERED:
            self._show(title, advisory.message, require_interaction=True, tag="weather-advisory")
        elif status == INFORMATIONAL:
            try:
                self.fallback.deliver_fallback(title, advisory.message)
            except Exception as e:
                logger.error(f"Fallback channel failed for '{title}': {e}")

        if advisory.level == "Critical" and session.phone:
            try:
                self.sms.send(session.phone, title, advisory.message)
            except Exception as e:
                logger.error(f"SMS escalation failed for {session.farmer_id}: {e}")

        logger.info(f"Advisory {advisory.key} for {session.farmer_id}: {status}")
        return status

    def _deliver_pending(self, entry_id: str) -> None:
        session = self.session
        with session.lock:
            entry = session.queue.get(entry_id)
            if entry is None or entry.delivered:
                return
            if not session.online:
                logger.debug(f"Farmer {session.farmer_id} offline, keeping {entry_id} queued")
                return
            session.queue.mark_delivered(entry_id)
        self._show(entry.title, entry.message, require_interaction=entry.require_interaction, tag=entry.type)

    def dispatch(self, advisories: Iterable[Advisory], language: Optional[str] = None) -> list[str]:
        return [self.notify_advisory(advisory, language) for advisory in advisories]

    def flush_queue(self, now: Optional[datetime] = None) -> list[PendingNotification]:
        """Deliver everything due in the offline queue."""
        if not self.session.online:
            return []
        due = self.session.queue.drain_due(now or self.clock())
        for entry in due:
            self._show(entry.title, entry.message, require_interaction=entry.require_interaction, tag=entry.type)
        if due:
            logger.info(f"Flushed {len(due)} queued notifications for {self.session.farmer_id}")
        return due

    # ---- health scans ----

    def notify_scan_complete(self, disease_label: Optional[str], language: Optional[str] = None) -> bool:
        if not self._allowed("scan_results"):
            return False
        text = NOTIFICATIONS[self._language(language)]
        label = (disease_label or "").lower()
        if "healthy" in label or "সুস্থ" in label:
            self._show(text["scan_healthy_title"], text["scan_healthy_body"], tag="health-scan")
        else:
            self._show(
                text["scan_disease_title"],
                text["scan_disease_body"].format(label=disease_label),
                require_interaction=True,
                tag="health-scan",
            )
        return True

    def notify_pending_scans(self, count: int, language: Optional[str] = None) -> bool:
        if not self._allowed("pending_scans") or count <= 0:
            return False
        language = self._language(language)
        text = NOTIFICATIONS[language]
        self._show(
            text["pending_scans_title"],
            text["pending_scans_body"].format(count=format_number(count, language)),
            require_interaction=True,
            tag="pending-scans",
        )
        return True

    def start_pending_scan_poll(self, check: Callable[[], int], language: Optional[str] = None) -> None:
        """Check now, then every poll interval; replaces any running poll."""
        self.stop_pending_scan_poll()
        with self.session.lock:
            self._poll_generation += 1
            generation = self._poll_generation
        self._poll_tick(generation, check, language)

    def stop_pending_scan_poll(self) -> None:
        with self.session.lock:
            self._poll_generation += 1
            handle, self._poll_handle = self._poll_handle, None
        if handle is not None:
            handle.cancel()

    def _poll_tick(self, generation: int, check: Callable[[], int], language: Optional[str]) -> None:
        if generation != self._poll_generation:
            return
        try:
            self.notify_pending_scans(check(), language)
        except Exception as e:
            logger.warning(f"Pending scan check failed for {self.session.farmer_id}: {e}")
        with self.session.lock:
            if generation == self._poll_generation:
                self._poll_handle = self.scheduler.call_later(
                    self.poll_interval, self._poll_tick, generation, check, language
                )

    # ---- harvest reminders ----

    def notify_harvest_reminder(self, crop: CropBatchState, days: int, language: Optional[str] = None) -> bool:
        if not self._allowed("harvest_reminders") or crop.is_harvested:
            return False
        language = self._language(language)
        text = NOTIFICATIONS[language]
        self._show(
            text["harvest_reminder_title"],
            text["harvest_reminder_body"].format(crop=crop.crop_type, days=format_number(days, language)),
            require_interaction=True,
            tag="harvest-reminder",
        )
        return True

    def schedule_harvest_reminders(
        self,
        crops: Iterable[CropBatchState],
        language: Optional[str] = None,
        today: Optional[date] = None,
    ) -> list[str]:
        """Fire the 7/3/1-day reminders due today, each at most once."""
        if not self._allowed("harvest_reminders"):
            return []

        fired = []
        for crop in crops:
            if crop.is_harvested or not crop.expected_harvest_date:
                continue
            days = calculate_days_until_harvest(crop.expected_harvest_date, today=today)
            if days not in self.reminder_days:
                continue
            key = f"{crop.crop_id}-{days}"
            with self.session.lock:
                if key in self.session.reminders:
                    continue
                self.session.reminders.add(key)
            self.notify_harvest_reminder(crop, days, language)
            fired.append(key)
        return fired


class DispatchService:
    """Shared channels and scheduler, one dispatcher per farmer."""

    def __init__(self, store=None, channel=None, fallback=None, sms=None, scheduler=None, clock=None):
        self.sessions = SessionRegistry(store)
        self.channel = channel or LogChannel()
        self.fallback = fallback or ToastLogChannel()
        self.sms = sms or SmsLogChannel()
        self.scheduler = scheduler or TimerScheduler()
        self.clock = clock
        self._dispatchers: dict[str, NotificationDispatcher] = {}
        self._lock = threading.Lock()

    def for_farmer(self, farmer_id: str, phone: Optional[str] = None) -> NotificationDispatcher:
        session = self.sessions.get(farmer_id, phone=phone)
        with self._lock:
            dispatcher = self._dispatchers.get(farmer_id)
            if dispatcher is None:
                dispatcher = NotificationDispatcher(
                    session,
                    channel=self.channel,
                    fallback=self.fallback,
                    sms=self.sms,
                    scheduler=self.scheduler,
                    clock=self.clock,
                )
                self._dispatchers[farmer_id] = dispatcher
            return dispatcher
