"""
List-filter-pagination controller.

One ListController drives one list screen: it owns the screen's FilterState,
its PageCursor and its ListReconciler, and turns user intents (apply filters,
pull to refresh, scroll to the end) into fetches through PgApiClient.

Fetch lifecycle:
    IDLE -> LOADING -> LOADED | FAILED

Reset fetches (initial load, refresh, filter change) request page 1 and
replace the list. Append fetches request the next page and extend it; they
are skipped while another fetch is in flight or when the server reported no
further pages. Every reset bumps the filter epoch and results stamped with an
older epoch are dropped, so a slow append can never land on top of a newer
first page.
"""
import itertools
import threading

from django.conf import settings

from api.client import PgApiClient
from api.filters import FilterState
from common.alerts import AlertCenter
from core.constants import ListState, Pagination
from core.dto import FetchTicket, PageCursor
from core.exceptions import ApiError
from core.services import BaseService
from core.store import Action, AppContext
from listing.post_filters import apply_post_filters
from listing.reconciler import ListReconciler

SCOPE_ACTIONS = (Action.SCOPE_UPDATED, Action.LOCATION_SELECTED)


class ListController(BaseService):
    """Controller for one list screen (see module docstring)"""

    def __init__(self, screen, client=None, context=None, alerts=None,
                 page_size=None, today=None, reload_on_scope_change=True):
        super().__init__()
        self.screen = screen
        self.client = client or PgApiClient()
        self.context = context or AppContext.from_settings()
        self.alerts = alerts or AlertCenter()
        max_page_size = getattr(settings, 'PG_API', {}).get('MAX_PAGE_SIZE', Pagination.MAX_PAGE_SIZE)
        self.page_size = min(page_size or screen.page_size, max_page_size)
        self.filters = FilterState(screen.filter_keys, choices=screen.choices, today=today)
        self.cursor = PageCursor()
        self.reconciler = ListReconciler(screen.key_field)
        self.state = ListState.IDLE
        self.last_error = None
        self.total = 0
        self.reload_on_scope_change = reload_on_scope_change

        self._lock = threading.RLock()
        self._epoch = 0
        self._ticket_ids = itertools.count(1)
        self._in_flight = set()
        self._unsubscribe = self.context.subscribe(self._on_context_action)

    @property
    def items(self):
        with self._lock:
            return self.reconciler.items

    @property
    def epoch(self):
        return self._epoch

    # Filters

    def set_filter(self, key, value):
        """Change one filter; nothing is fetched until apply_filters()"""
        with self._lock:
            self.filters.set_filter(key, value)

    def count_active(self):
        return self.filters.count_active()

    def query_params(self):
        return self.filters.to_query_projection(exclude=self.screen.client_side_keys)

    def clear_all(self, reload=False):
        """Reset every filter and the cursor; optionally reload page 1"""
        with self._lock:
            self.filters.clear_all()
            self.cursor.reset()
            self._epoch += 1
        self.log_info("Filters cleared", screen=self.screen.name)
        if reload:
            return self.refresh()
        return False

    # Fetch intents

    def load(self):
        """Initial load on mount"""
        return self._run(reset=True)

    def refresh(self):
        """Pull-to-refresh"""
        return self._run(reset=True)

    def apply_filters(self):
        """Filter change: back to page 1 with replace semantics, has_more forced True"""
        with self._lock:
            self.cursor.has_more = True
        return self._run(reset=True)

    def load_more(self):
        """
        Scroll reached the end of the list.

        Returns False without any request when there is nothing more to load
        or a fetch is already in flight.
        """
        with self._lock:
            if not self.cursor.has_fetched and not self.cursor.is_loading:
                initial = True
            else:
                initial = False
        if initial:
            return self._run(reset=True)
        return self._run(reset=False)

    # Transitions

    def begin_fetch(self, reset):
        """
        Start a fetch and return its ticket, or None when an append is not allowed.
        """
        with self._lock:
            if reset:
                self._epoch += 1
                page = 1
            else:
                if not self.cursor.has_more or self.cursor.is_loading:
                    self.logger.debug(
                        f"Append skipped for {self.screen.name}: "
                        f"has_more={self.cursor.has_more} is_loading={self.cursor.is_loading}"
                    )
                    return None
                page = self.cursor.current_page + 1

            ticket = FetchTicket(
                id=next(self._ticket_ids),
                page=page,
                reset=reset,
                epoch=self._epoch,
                params=self.query_params(),
            )
            self._in_flight.add(ticket.id)
            self.cursor.is_loading = True
            self.state = ListState.LOADING
            return ticket

    def complete_fetch(self, ticket, result):
        """Apply a fetched page; returns False when the ticket is stale"""
        with self._lock:
            self._finish(ticket)
            if ticket.epoch != self._epoch:
                self.log_info(
                    "Discarding stale page",
                    screen=self.screen.name, page=ticket.page, epoch=ticket.epoch, current_epoch=self._epoch
                )
                return False

            visible = apply_post_filters(result.items, self.screen.post_filters, self.filters)
            if ticket.reset:
                added = self.reconciler.replace(visible)
            else:
                added = self.reconciler.append(visible)

            self.cursor.current_page = ticket.page
            self.cursor.has_more = result.has_more
            self.cursor.has_fetched = True
            self.total = result.pagination.total if result.pagination else len(self.reconciler)
            self.last_error = None
            self.state = ListState.LOADING if self.cursor.is_loading else ListState.LOADED
            publish = (
                Action.LIST_REPLACED if ticket.reset else Action.LIST_APPENDED,
                added,
                self.cursor.current_page,
                self.cursor.has_more,
                self.total,
            )

        self.log_info(
            "Page loaded",
            screen=self.screen.name, page=ticket.page, reset=ticket.reset,
            received=len(result.items), shown=len(added), has_more=publish[3],
        )
        if self.screen.scope_slice:
            action, items, page, has_more, total = publish
            self.context.dispatch(
                action, slice=self.screen.scope_slice,
                items=items, page=page, has_more=has_more, total=total,
            )
        return True

    def fail_fetch(self, ticket, error):
        """Record a failed fetch; the displayed list is left untouched"""
        with self._lock:
            self._finish(ticket)
            if ticket.epoch != self._epoch:
                self.log_info("Ignoring failure of stale fetch", screen=self.screen.name, page=ticket.page)
                return False
            self.last_error = error
            self.state = ListState.LOADING if self.cursor.is_loading else ListState.FAILED

        self.log_error(
            f"Failed to load {self.screen.title}",
            screen=self.screen.name, page=ticket.page, error_type=getattr(error, 'error_type', None),
            status_code=getattr(error, 'status_code', None),
        )
        self.alerts.show(error)
        return True

    def summary(self):
        with self._lock:
            return {
                'screen': self.screen.name,
                'state': self.state,
                'page': self.cursor.current_page,
                'has_more': self.cursor.has_more,
                'is_loading': self.cursor.is_loading,
                'shown': len(self.reconciler),
                'total': self.total,
                'active_filters': self.filters.count_active(),
            }

    def close(self):
        self._unsubscribe()

    def _run(self, reset):
        ticket = self.begin_fetch(reset)
        if ticket is None:
            return False
        try:
            result = self.client.fetch_page(
                self.screen.endpoint,
                page=ticket.page,
                limit=self.page_size,
                projection=ticket.params,
                scope=self.context.scope,
            )
        except ApiError as e:
            self.fail_fetch(ticket, e)
            return False
        except Exception:
            with self._lock:
                self._finish(ticket)
            raise
        return self.complete_fetch(ticket, result)

    def _finish(self, ticket):
        self._in_flight.discard(ticket.id)
        self.cursor.is_loading = bool(self._in_flight)
        if not self.cursor.is_loading and self.state == ListState.LOADING:
            self.state = ListState.LOADED if self.cursor.has_fetched else ListState.IDLE

    def _on_context_action(self, action, payload):
        if action not in SCOPE_ACTIONS:
            return
        with self._lock:
            self.cursor.reset()
            self._epoch += 1
        self.log_info("Scope changed, reloading", screen=self.screen.name, action=action)
        if self.reload_on_scope_change:
            self.refresh()
