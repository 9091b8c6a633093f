"""
Background statistics refresh.

Failures here never reach the user: they are logged and the previously
fetched numbers stay in place.
"""
import threading

from api.client import PgApiClient
from core.exceptions import ApiError
from core.services import BaseService
from core.store import AppContext

STATS_ENDPOINTS = {
    'expenses': '/expenses/stats',
    'visitors': '/visitors/stats',
    'tenants': '/tenant-status/statistics',
}


class StatsRefresher(BaseService):
    """Keeps the latest statistics payload per endpoint"""

    def __init__(self, client=None, context=None, endpoints=None):
        super().__init__()
        self.client = client or PgApiClient()
        self.context = context or AppContext.from_settings()
        self.endpoints = dict(endpoints or STATS_ENDPOINTS)
        self._stats = {}
        self._lock = threading.Lock()

    def refresh(self):
        """Fetch every endpoint once; returns the names that were updated"""
        updated = []
        for name, path in self.endpoints.items():
            try:
                data = self.client.get_resource(path, scope=self.context.scope)
            except ApiError as e:
                self.log_error(
                    f"Statistics refresh failed for {name}, keeping previous values",
                    path=path, error_type=e.error_type, status_code=e.status_code,
                )
                continue
            with self._lock:
                self._stats[name] = data
            updated.append(name)
        self.log_info("Statistics refreshed", updated=updated)
        return updated

    def get(self, name):
        with self._lock:
            return self._stats.get(name)

    def snapshot(self):
        with self._lock:
            return dict(self._stats)
