"""
Lazy access to the pickup slot settings.

Business logic reads slot configuration through `slot_settings` instead of
touching `django.conf.settings` directly, so there is one place that applies
defaults and type coercion.
"""
from dataclasses import dataclass
from typing import Any, Optional
import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver

logger = logging.getLogger(__name__)

DEFAULTS = {
    "PREP_BUFFER_MINUTES": 10,
    "SLOT_MINUTES": 15,
    "WINDOW_HOURS": 2,
    "SLOT_LIMIT": 3,
    "ADMISSION_MAX_RETRIES": 3,
    "ADMISSION_RETRY_BACKOFF_SECONDS": 0.05,
}


@dataclass(frozen=True)
class SlotPolicy:
    prep_buffer_minutes: int
    slot_minutes: int
    window_hours: int
    slot_limit: int
    admission_max_retries: int
    admission_retry_backoff_seconds: float


class SlotSettings:
    """
    A LAZY singleton holding the current SlotPolicy.
    Settings are read on first access and re-read after reload().
    """

    _instance: Optional["SlotSettings"] = None

    def __new__(cls) -> "SlotSettings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._policy = None
        return cls._instance

    @property
    def policy(self) -> SlotPolicy:
        if self._policy is None:
            self._policy = self._load()
        return self._policy

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not found normally
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return getattr(self.policy, name)
        except AttributeError:
            raise AttributeError(f"'SlotSettings' object has no attribute '{name}'")

    def reload(self) -> None:
        self._policy = None

    @staticmethod
    def _load() -> SlotPolicy:
        values = dict(DEFAULTS)
        values.update(getattr(settings, "PICKUP_SLOTS", {}) or {})

        try:
            policy = SlotPolicy(
                prep_buffer_minutes=int(values["PREP_BUFFER_MINUTES"]),
                slot_minutes=int(values["SLOT_MINUTES"]),
                window_hours=int(values["WINDOW_HOURS"]),
                slot_limit=int(values["SLOT_LIMIT"]),
                admission_max_retries=int(values["ADMISSION_MAX_RETRIES"]),
                admission_retry_backoff_seconds=float(values["ADMISSION_RETRY_BACKOFF_SECONDS"]),
            )
        except (TypeError, ValueError) as e:
            raise ImproperlyConfigured(f"Invalid PICKUP_SLOTS setting: {e}")

        if policy.slot_minutes <= 0:
            raise ImproperlyConfigured("PICKUP_SLOTS['SLOT_MINUTES'] must be positive")
        if policy.slot_limit < 0 or policy.prep_buffer_minutes < 0 or policy.window_hours < 0:
            raise ImproperlyConfigured("PICKUP_SLOTS values cannot be negative")
        if policy.admission_max_retries < 1:
            raise ImproperlyConfigured("PICKUP_SLOTS['ADMISSION_MAX_RETRIES'] must be at least 1")

        logger.debug(f"Loaded pickup slot policy: {policy}")
        return policy


slot_settings = SlotSettings()


@receiver(setting_changed)
def reload_slot_settings(setting, **kwargs):
    if setting == "PICKUP_SLOTS":
        slot_settings.reload()
