"""Delivery channels for farmer notifications."""

from collections import deque
from typing import Optional, Protocol

from loguru import logger

from harvestguard.utils.errors import DeliveryError


class DeliveryChannel(Protocol):
    def deliver(self, title: str, body: str, require_interaction: bool = False, tag: Optional[str] = None) -> bool:
        ...


class FallbackChannel(Protocol):
    def deliver_fallback(self, title: str, body: str) -> None:
        ...


class LogChannel:
    """Interactive channel that records notifications to the log."""

    def __init__(self, available: bool = True, history: int = 100):
        self.available = available
        self.sent = deque(maxlen=history)

    def deliver(self, title: str, body: str, require_interaction: bool = False, tag: Optional[str] = None) -> bool:
        if not self.available:
            return False
        self.sent.append({"title": title, "body": body, "require_interaction": require_interaction, "tag": tag})
        logger.info(f"[notify:{tag or 'general'}] {title} - {body}")
        return True


class ToastLogChannel:
    """Non-interactive in-app toast; always succeeds."""

    def __init__(self, history: int = 100):
        self.sent = deque(maxlen=history)

    def deliver_fallback(self, title: str, body: str) -> None:
        self.sent.append({"title": title, "body": body})
        logger.info(f"[toast] {title} - {body}")


class SmsLogChannel:
    """Simulated SMS gateway for critical alerts."""

    def __init__(self, history: int = 100):
        self.sent = deque(maxlen=history)

    def send(self, phone: str, title: str, message: str) -> None:
        if not phone or not phone.strip("+").isdigit():
            raise DeliveryError(f"Invalid phone number: {phone!r}")
        self.sent.append({"phone": phone, "title": title, "message": message})
        logger.warning(
            "\n".join([
                "=" * 60,
                f"SMS ALERT -> {phone}",
                title,
                message,
                "=" * 60,
            ])
        )
