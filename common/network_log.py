"""
In-memory log of recent backend requests, for debugging from the console.
"""
import threading
import time
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Any

MASKED_HEADERS = {'authorization'}


@dataclass(frozen=True)
class NetworkLogEntry:
    id: str
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    started_at: float = 0.0
    status: Optional[int] = None
    duration_ms: Optional[int] = None
    error: Optional[str] = None


def mask_headers(headers):
    return {
        key: ('***' if key.lower() in MASKED_HEADERS else value)
        for key, value in (headers or {}).items()
    }


class NetworkLog:
    """Keeps the newest ``max_logs`` requests, newest first"""

    def __init__(self, max_logs=50):
        self.max_logs = max_logs
        self._entries = deque(maxlen=max_logs)
        self._lock = threading.Lock()

    def add(self, entry_id, method, url, headers=None, params=None):
        entry = NetworkLogEntry(
            id=entry_id,
            method=method.upper(),
            url=url,
            headers=mask_headers(headers),
            params=dict(params or {}),
            started_at=time.monotonic(),
        )
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def update(self, entry_id, status=None, error=None):
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.id == entry_id:
                    duration_ms = int((time.monotonic() - entry.started_at) * 1000)
                    self._entries[index] = replace(entry, status=status, error=error, duration_ms=duration_ms)
                    return self._entries[index]
        return None

    def entries(self):
        with self._lock:
            return list(self._entries)

    def clear(self):
        with self._lock:
            self._entries.clear()


network_log = NetworkLog()
