import pytest
from datetime import date

from common.alerts import AlertCenter
from core.constants import PaymentStatus
from core.dto import PaginationMeta, ResultPage, ScopeContext
from core.store import AppContext
from listing.controller import ListController
from listing.screens import ScreenDefinition


def make_page(keys, page=1, total_pages=1, limit=20, total=None):
    items = [{'s_no': key, 'amount_paid': 1000 + key} for key in keys]
    return ResultPage(
        items=items,
        pagination=PaginationMeta(
            total=total if total is not None else len(items),
            page=page,
            limit=limit,
            total_pages=total_pages,
        ),
    )


class FakeClient:
    """
    Stands in for PgApiClient: returns queued results (or raises queued errors)
    and records every call.
    """

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def queue(self, *results):
        self.results.extend(results)

    def fetch_page(self, path, page, limit, projection=None, scope=None):
        self.calls.append({'path': path, 'page': page, 'limit': limit, 'projection': dict(projection or {}), 'scope': scope})
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def payment_screen():
    return ScreenDefinition(
        name='test_payments',
        title='Test Payments',
        endpoint='/tenant-payments',
        filter_keys=('status', 'quick_filter', 'start_date', 'end_date', 'month', 'year', 'room_id'),
        choices={'status': PaymentStatus.CHOICES},
        scope_slice='payments/test',
    )


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def context():
    return AppContext(ScopeContext(organization_id=1, pg_location_id=2, user_id=3))


@pytest.fixture
def alerts():
    return AlertCenter(auto_hide_seconds=5)


@pytest.fixture
def today():
    return date(2024, 6, 15)


@pytest.fixture
def controller(payment_screen, fake_client, context, alerts, today):
    controller = ListController(
        payment_screen,
        client=fake_client,
        context=context,
        alerts=alerts,
        today=lambda: today,
    )
    yield controller
    controller.close()
