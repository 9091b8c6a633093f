"""
HTTP client for the PG management backend.

One call, one request: no retries and no caching happen here. Failures are
raised as the ApiError kinds from core.exceptions and left to the caller.
"""
import logging
import re

import requests
from django.conf import settings

from api.serializers import (
    ErrorEnvelopeSerializer,
    ListEnvelopeSerializer,
    ResourceEnvelopeSerializer,
)
from common.logging_config import fetch_id_context
from common.network_log import network_log
from core.constants import LOCATION_SCOPED_PREFIXES, ScopeHeader
from core.dto import PaginationMeta, ResultPage, ScopeContext
from core.exceptions import (
    ApiTimeoutError,
    NetworkError,
    ServerError,
    UnknownError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_LOCATION_SCOPED = re.compile(r'^/({})(/|$)'.format('|'.join(re.escape(p) for p in LOCATION_SCOPED_PREFIXES)))


def needs_location_header(path):
    return bool(_LOCATION_SCOPED.match((path or '').split('?')[0]))


def extract_field_errors(details):
    """Field errors arrive either as [{field, message}, ...] or as a {field: message} mapping"""
    if isinstance(details, list):
        return {
            item['field']: item.get('message', '')
            for item in details
            if isinstance(item, dict) and item.get('field')
        }
    if isinstance(details, dict):
        return dict(details)
    return {}


class PgApiClient:
    """
    Thin wrapper over a requests.Session.

    Scope identifiers travel as headers (X-Organization-Id, X-PG-Location-Id,
    X-User-Id); the bearer token, when present, as Authorization.
    """

    def __init__(self, base_url=None, timeout=None, session=None, log=None):
        config = getattr(settings, 'PG_API', {})
        self.base_url = (base_url or config.get('BASE_URL', '')).rstrip('/')
        self.timeout = timeout if timeout is not None else config.get('TIMEOUT', 30)
        self.session = session or requests.Session()
        self.network_log = log or network_log

    def build_headers(self, scope: ScopeContext, fetch_id=None) -> dict:
        headers = {'Accept': 'application/json'}
        if scope.access_token:
            headers['Authorization'] = f'Bearer {scope.access_token}'
        if scope.user_id:
            headers[ScopeHeader.USER] = str(scope.user_id)
        if scope.organization_id:
            headers[ScopeHeader.ORGANIZATION] = str(scope.organization_id)
        if scope.pg_location_id:
            headers[ScopeHeader.PG_LOCATION] = str(scope.pg_location_id)
        if fetch_id:
            headers[ScopeHeader.REQUEST_ID] = fetch_id
        return headers

    def fetch_page(self, path, page, limit, projection=None, scope=None) -> ResultPage:
        """
        GET one page of a list endpoint.

        Args:
            path: Resource path, e.g. '/advance-payments'
            page: 1-based page number
            limit: Page size
            projection: Filter query parameters from FilterState.to_query_projection()
            scope: ScopeContext forwarded as headers

        Returns:
            ResultPage with the items and pagination metadata

        Raises:
            NetworkError, ApiTimeoutError, ServerError, ValidationError, UnknownError
        """
        params = {'page': page, 'limit': limit}
        params.update(projection or {})
        body = self._get(path, params, scope or ScopeContext())

        serializer = ListEnvelopeSerializer(data=body)
        if not serializer.is_valid():
            raise UnknownError(
                message="Malformed list response",
                code="MALFORMED_RESPONSE",
                details=serializer.errors,
                path=path,
            )
        envelope = serializer.validated_data
        if envelope['success'] is False:
            raise ServerError(message=body.get('message') or ServerError.default_message, path=path)

        pagination = envelope.get('pagination')
        meta = None
        if pagination:
            meta = PaginationMeta(
                total=pagination['total'],
                page=pagination['page'],
                limit=pagination['limit'],
                total_pages=pagination['totalPages'],
            )
        return ResultPage(items=list(envelope['data']), pagination=meta)

    def get_resource(self, path, params=None, scope=None):
        """GET a single-resource endpoint and return its ``data``"""
        body = self._get(path, params or {}, scope or ScopeContext())
        serializer = ResourceEnvelopeSerializer(data=body)
        if not serializer.is_valid():
            raise UnknownError(
                message="Malformed response",
                code="MALFORMED_RESPONSE",
                details=serializer.errors,
                path=path,
            )
        if serializer.validated_data['success'] is False:
            raise ServerError(message=body.get('message') or ServerError.default_message, path=path)
        return serializer.validated_data.get('data')

    def _get(self, path, params, scope):
        if needs_location_header(path) and not scope.pg_location_id:
            raise ValidationError(
                message=f"Missing required headers: {ScopeHeader.PG_LOCATION}",
                code="MISSING_SCOPE",
                path=path,
            )

        url = f"{self.base_url}{path}"
        with fetch_id_context() as fetch_id:
            headers = self.build_headers(scope, fetch_id)
            self.network_log.add(fetch_id, 'GET', url, headers=headers, params=params)
            logger.info(f"GET {path} params={params}")
            try:
                response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            except requests.exceptions.Timeout as e:
                self.network_log.update(fetch_id, error=str(e))
                logger.warning(f"GET {path} timed out after {self.timeout}s")
                raise ApiTimeoutError(path=path) from e
            except requests.exceptions.RequestException as e:
                self.network_log.update(fetch_id, error=str(e))
                logger.warning(f"GET {path} failed: {e}")
                raise NetworkError(path=path) from e

            self.network_log.update(fetch_id, status=response.status_code)
            if not 200 <= response.status_code < 300:
                raise self._error_from_response(response, path)

            try:
                return response.json()
            except ValueError as e:
                raise UnknownError(message="Response is not valid JSON", code="MALFORMED_RESPONSE", path=path) from e

    def _error_from_response(self, response, path):
        status_code = response.status_code
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            logger.warning(f"GET {path} -> {status_code} without error envelope")
            return ServerError(
                message=response.reason or ServerError.default_message,
                status_code=status_code,
                path=path,
            )

        data = dict(body)
        if isinstance(data.get('error'), str):
            data['error'] = {'code': data['error']}
        serializer = ErrorEnvelopeSerializer(data=data)
        envelope = serializer.validated_data if serializer.is_valid() else {}

        message = envelope.get('message')
        if isinstance(message, list):
            message = '; '.join(str(part) for part in message)
        error = envelope.get('error') or {}
        details = error.get('details')
        field_errors = extract_field_errors(details)

        kwargs = dict(
            message=message or None,
            code=error.get('code') or None,
            status_code=envelope.get('statusCode') or status_code,
            path=envelope.get('path') or path,
            timestamp=envelope.get('timestamp'),
        )
        logger.warning(f"GET {path} -> {status_code}: {message}")
        if field_errors and 400 <= status_code < 500:
            return ValidationError(details=details, field_errors=field_errors, **kwargs)
        return ServerError(details=details, **kwargs)
