"""
Application context.

Holds the request scope and the list slices shared between screens. All
writes go through dispatch(); readers get immutable snapshots.
"""
import logging
import threading
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Tuple, Any

from django.conf import settings

from core.dto import ScopeContext

logger = logging.getLogger(__name__)


class Action:
    SCOPE_UPDATED = 'scope/updated'
    LOCATION_SELECTED = 'scope/location_selected'
    LIST_REPLACED = 'list/replaced'
    LIST_APPENDED = 'list/appended'
    LIST_CLEARED = 'list/cleared'


@dataclass(frozen=True)
class ListSnapshot:
    items: Tuple[Any, ...] = ()
    page: int = 1
    has_more: bool = True
    total: int = 0


class AppContext:
    """
    Explicit replacement for process-wide store slices.

    Pass one instance to every controller that needs scope or shared lists.
    """

    def __init__(self, scope=None):
        self._lock = threading.RLock()
        self._scope = scope or ScopeContext()
        self._slices = {}
        self._listeners = []

    @classmethod
    def from_settings(cls):
        """Build the initial scope from settings.PG_API"""
        config = getattr(settings, 'PG_API', {})
        return cls(ScopeContext(
            organization_id=config.get('ORGANIZATION_ID'),
            pg_location_id=config.get('PG_LOCATION_ID'),
            user_id=config.get('USER_ID'),
            access_token=config.get('AUTH_TOKEN') or None,
        ))

    @property
    def scope(self) -> ScopeContext:
        with self._lock:
            return self._scope

    def get_slice(self, name) -> ListSnapshot:
        with self._lock:
            return self._slices.get(name, ListSnapshot())

    def snapshot(self):
        with self._lock:
            return MappingProxyType({
                'scope': self._scope,
                'slices': MappingProxyType(dict(self._slices)),
            })

    def subscribe(self, listener):
        """Register listener(action, payload); returns a callable that unsubscribes"""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return unsubscribe

    def dispatch(self, action, **payload):
        """Single entry point for every state change"""
        with self._lock:
            self._reduce(action, payload)
            listeners = list(self._listeners)
        for listener in listeners:
            listener(action, payload)

    def select_location(self, pg_location_id):
        self.dispatch(Action.LOCATION_SELECTED, pg_location_id=pg_location_id)

    def _reduce(self, action, payload):
        if action == Action.SCOPE_UPDATED:
            self._scope = replace(self._scope, **payload)
        elif action == Action.LOCATION_SELECTED:
            self._scope = replace(self._scope, pg_location_id=payload['pg_location_id'])
        elif action == Action.LIST_REPLACED:
            self._slices[payload['slice']] = ListSnapshot(
                items=tuple(payload['items']),
                page=payload['page'],
                has_more=payload['has_more'],
                total=payload.get('total', 0),
            )
        elif action == Action.LIST_APPENDED:
            current = self._slices.get(payload['slice'], ListSnapshot())
            self._slices[payload['slice']] = ListSnapshot(
                items=current.items + tuple(payload['items']),
                page=payload['page'],
                has_more=payload['has_more'],
                total=payload.get('total', current.total),
            )
        elif action == Action.LIST_CLEARED:
            self._slices.pop(payload['slice'], None)
        else:
            raise ValueError(f"Unknown action '{action}'")
        logger.debug(f"Dispatched {action}")
