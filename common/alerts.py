"""
User-facing alerts for failed requests.

An error is surfaced exactly once as an Alert; alerts hide themselves after
ALERT_AUTO_HIDE_SECONDS. Nothing here retries.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from core.constants import AlertSeverity, ERROR_MESSAGES
from core.exceptions import ApiError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Alert:
    title: str
    message: str
    severity: str
    status_code: Optional[int] = None
    code: Optional[str] = None
    field_errors: Optional[dict] = None
    created_at: float = 0.0
    auto_hide_seconds: float = 5.0

    def is_expired(self, now=None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.created_at >= self.auto_hide_seconds


def get_error_title(status_code) -> str:
    if status_code == 400:
        return 'Bad Request'
    if status_code == 401:
        return 'Unauthorized'
    if status_code == 403:
        return 'Forbidden'
    if status_code == 404:
        return 'Not Found'
    if status_code == 409:
        return 'Conflict'
    if status_code == 422:
        return 'Validation Error'
    if status_code == 429:
        return 'Too Many Requests'
    if status_code and status_code >= 500:
        return 'Server Error'
    return 'Error'


def get_severity(status_code) -> str:
    if status_code == 404:
        return AlertSeverity.INFO
    if status_code in (401, 403):
        return AlertSeverity.WARNING
    if status_code == 409:
        return AlertSeverity.CONFLICT
    if status_code and status_code >= 500:
        return AlertSeverity.CRITICAL
    return AlertSeverity.ERROR


def get_error_message(error) -> str:
    """Server message first, then the error-code table, then a status-based default"""
    explicit = getattr(error, 'message', None)
    default = getattr(type(error), 'default_message', None)
    if explicit and explicit != default:
        return explicit

    code = getattr(error, 'code', None)
    if code and code in ERROR_MESSAGES:
        return ERROR_MESSAGES[code]

    status_code = getattr(error, 'status_code', None)
    if status_code == 401:
        return 'Please log in to continue.'
    if status_code == 403:
        return 'You do not have permission.'
    if status_code == 404:
        return 'The requested resource was not found.'
    if status_code == 409:
        return 'There is a conflict with the current state.'
    if status_code and status_code >= 500:
        return 'Server error. Please try again later.'
    if status_code and status_code >= 400:
        return 'Invalid request. Please try again.'
    return explicit or ERROR_MESSAGES['UNKNOWN_ERROR']


class AlertCenter:
    """Queue of alerts waiting to be shown"""

    def __init__(self, auto_hide_seconds=None, clock=time.monotonic):
        if auto_hide_seconds is None:
            auto_hide_seconds = getattr(settings, 'ALERT_AUTO_HIDE_SECONDS', 5.0)
        self.auto_hide_seconds = auto_hide_seconds
        self._clock = clock
        self._alerts = []
        self._lock = threading.Lock()

    def show(self, error, context=None) -> Alert:
        status_code = getattr(error, 'status_code', None)
        alert = Alert(
            title=context or get_error_title(status_code),
            message=get_error_message(error),
            severity=get_severity(status_code),
            status_code=status_code,
            code=getattr(error, 'code', None),
            field_errors=dict(error.field_errors) if isinstance(error, ValidationError) else None,
            created_at=self._clock(),
            auto_hide_seconds=self.auto_hide_seconds,
        )
        with self._lock:
            self._alerts.append(alert)
        kind = error.error_type if isinstance(error, ApiError) else type(error).__name__
        logger.warning(f"[{kind.upper()} Error - {alert.title}] {alert.message}")
        return alert

    def active(self):
        """Alerts not yet auto-hidden"""
        now = self._clock()
        with self._lock:
            self._alerts = [alert for alert in self._alerts if not alert.is_expired(now)]
            return list(self._alerts)

    def drain(self):
        """Hand every pending alert to the caller once"""
        with self._lock:
            alerts, self._alerts = self._alerts, []
        return alerts
