import pytest
from datetime import date
from unittest.mock import Mock

from api.client import PgApiClient
from common.network_log import NetworkLog
from core.dto import ScopeContext


def make_response(status_code=200, body=None, reason='OK'):
    """Build a stand-in for requests.Response"""
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    """Mocked requests.Session; set session.get.return_value / side_effect per test."""
    return Mock()


@pytest.fixture
def network_log():
    return NetworkLog(max_logs=5)


@pytest.fixture
def client(session, network_log):
    return PgApiClient(base_url='https://pg.example.com/api/', timeout=7, session=session, log=network_log)


@pytest.fixture
def scope():
    return ScopeContext(organization_id=3, pg_location_id=11, user_id=42, access_token='secret-token')


@pytest.fixture
def today():
    return date(2024, 3, 31)
