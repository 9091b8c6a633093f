"""
Fetch adapter tests.

Tests cover:
- Scope headers and query parameters of list requests
- Parsing of list and resource envelopes
- Mapping of transport and HTTP failures onto the error taxonomy
- Network log bookkeeping
"""

import pytest
import requests

from api.client import needs_location_header
from core.dto import ScopeContext
from core.exceptions import (
    ApiTimeoutError,
    NetworkError,
    ServerError,
    UnknownError,
    ValidationError,
)

from .conftest import make_response


LIST_BODY = {
    'success': True,
    'data': [{'s_no': 1, 'amount_paid': 5000}, {'s_no': 2, 'amount_paid': 4500}],
    'pagination': {'total': 45, 'page': 1, 'limit': 20, 'totalPages': 3},
}


class TestFetchPage:

    def test_sends_scope_headers_and_params(self, client, session, scope):
        session.get.return_value = make_response(body=LIST_BODY)

        client.fetch_page('/advance-payments', page=2, limit=20, projection={'status': 'PAID'}, scope=scope)

        session.get.assert_called_once()
        args, kwargs = session.get.call_args
        assert args[0] == 'https://pg.example.com/api/advance-payments'
        assert kwargs['params'] == {'page': 2, 'limit': 20, 'status': 'PAID'}
        assert kwargs['timeout'] == 7
        headers = kwargs['headers']
        assert headers['X-Organization-Id'] == '3'
        assert headers['X-PG-Location-Id'] == '11'
        assert headers['X-User-Id'] == '42'
        assert headers['Authorization'] == 'Bearer secret-token'
        assert len(headers['X-Request-ID']) == 8

    def test_returns_result_page(self, client, session, scope):
        session.get.return_value = make_response(body=LIST_BODY)

        page = client.fetch_page('/tenant-payments', page=1, limit=20, scope=scope)

        assert [item['s_no'] for item in page.items] == [1, 2]
        assert page.pagination.total == 45
        assert page.pagination.total_pages == 3
        assert page.has_more is True

    def test_missing_pagination_means_no_more_pages(self, client, session, scope):
        session.get.return_value = make_response(body={'success': True, 'data': [{'s_no': 1}]})

        page = client.fetch_page('/visitors', page=1, limit=20, scope=scope)

        assert page.pagination is None
        assert page.has_more is False

    def test_has_more_only_pagination(self, client, session, scope):
        session.get.return_value = make_response(body={
            'success': True,
            'data': [],
            'pagination': {'page': 2, 'limit': 10, 'total': 30, 'hasMore': True},
        })

        page = client.fetch_page('/expenses', page=2, limit=10, scope=scope)

        assert page.has_more is True

    def test_location_scoped_path_without_location_fails_without_request(self, client, session):
        with pytest.raises(ValidationError) as exc:
            client.fetch_page('/tenants', page=1, limit=10, scope=ScopeContext(organization_id=1))

        assert exc.value.code == 'MISSING_SCOPE'
        session.get.assert_not_called()

    def test_unscoped_path_allowed_without_location(self, client, session):
        session.get.return_value = make_response(body={'success': True, 'data': []})

        client.fetch_page('/visitors', page=1, limit=10, scope=ScopeContext())

        headers = session.get.call_args.kwargs['headers']
        assert 'X-PG-Location-Id' not in headers
        assert 'Authorization' not in headers

    def test_malformed_body_is_unknown_error(self, client, session, scope):
        session.get.return_value = make_response(body={'success': True, 'data': 'nope'})

        with pytest.raises(UnknownError):
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)

    def test_invalid_json_is_unknown_error(self, client, session, scope):
        session.get.return_value = make_response(body=ValueError('bad json'))

        with pytest.raises(UnknownError):
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)


class TestFailures:

    def test_connection_error_is_network_error(self, client, session, scope):
        session.get.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(NetworkError) as exc:
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)
        assert exc.value.is_retryable is True

    def test_timeout_is_timeout_error(self, client, session, scope):
        session.get.side_effect = requests.exceptions.ReadTimeout('slow')

        with pytest.raises(ApiTimeoutError):
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)

    def test_server_error_carries_envelope(self, client, session, scope):
        session.get.return_value = make_response(status_code=500, reason='Internal Server Error', body={
            'success': False,
            'statusCode': 500,
            'message': 'Database unavailable',
            'error': {'code': 'DATABASE_ERROR'},
            'timestamp': '2024-03-31T10:00:00Z',
            'path': '/api/v1/visitors',
        })

        with pytest.raises(ServerError) as exc:
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)

        error = exc.value
        assert error.status_code == 500
        assert error.message == 'Database unavailable'
        assert error.code == 'DATABASE_ERROR'
        assert error.path == '/api/v1/visitors'
        assert error.timestamp == '2024-03-31T10:00:00Z'
        assert error.is_retryable is True

    def test_not_found_is_not_retryable(self, client, session, scope):
        session.get.return_value = make_response(status_code=404, body={
            'statusCode': 404, 'message': 'Not found', 'error': 'Not Found',
        })

        with pytest.raises(ServerError) as exc:
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)
        assert exc.value.status_code == 404
        assert exc.value.code == 'Not Found'
        assert exc.value.is_retryable is False

    def test_field_details_become_validation_error(self, client, session, scope):
        session.get.return_value = make_response(status_code=400, body={
            'success': False,
            'statusCode': 400,
            'message': ['start_date must be a date', 'limit too large'],
            'error': {
                'code': 'VALIDATION_ERROR',
                'details': [
                    {'field': 'start_date', 'message': 'must be a date'},
                    {'field': 'limit', 'message': 'too large'},
                ],
            },
        })

        with pytest.raises(ValidationError) as exc:
            client.fetch_page('/visitors', page=1, limit=500, scope=scope)

        assert exc.value.field_errors == {'start_date': 'must be a date', 'limit': 'too large'}
        assert exc.value.message == 'start_date must be a date; limit too large'
        assert exc.value.status_code == 400

    def test_error_without_json_body(self, client, session, scope):
        session.get.return_value = make_response(status_code=502, reason='Bad Gateway', body=ValueError('html'))

        with pytest.raises(ServerError) as exc:
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)
        assert exc.value.status_code == 502
        assert exc.value.message == 'Bad Gateway'


class TestNetworkLog:

    def test_request_is_logged_with_masked_token(self, client, session, scope, network_log):
        session.get.return_value = make_response(body=LIST_BODY)

        client.fetch_page('/refund-payments', page=1, limit=20, scope=scope)

        entry = network_log.entries()[0]
        assert entry.method == 'GET'
        assert entry.url.endswith('/refund-payments')
        assert entry.status == 200
        assert entry.headers['Authorization'] == '***'
        assert entry.duration_ms is not None

    def test_failed_request_is_logged_with_error(self, client, session, scope, network_log):
        session.get.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(NetworkError):
            client.fetch_page('/visitors', page=1, limit=10, scope=scope)

        assert network_log.entries()[0].error == 'refused'

    def test_log_is_bounded(self, client, session, scope, network_log):
        session.get.return_value = make_response(body=LIST_BODY)

        for page in range(1, 9):
            client.fetch_page('/visitors', page=page, limit=10, scope=scope)

        entries = network_log.entries()
        assert len(entries) == 5
        assert entries[0].params['page'] == 8


class TestResource:

    def test_get_resource_returns_data(self, client, session, scope):
        session.get.return_value = make_response(body={'success': True, 'data': {'total_visitors': 12}})

        assert client.get_resource('/visitors/stats', scope=scope) == {'total_visitors': 12}


@pytest.mark.parametrize('path, expected', [
    ('/tenants', True),
    ('/tenants/12', True),
    ('/advance-payments?page=2', True),
    ('/tenant-payments', True),
    ('/tenant-status/statistics', False),
    ('/visitors', False),
    ('/expenses', False),
])
def test_needs_location_header(path, expected):
    assert needs_location_header(path) is expected
