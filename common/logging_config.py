"""
Logging configuration with fetch ID support
"""
import logging
import threading
import uuid
from contextlib import contextmanager

_fetch_context = threading.local()


def new_fetch_id():
    """Short 8-character correlation id"""
    return str(uuid.uuid4())[:8]


def current_fetch_id():
    return getattr(_fetch_context, 'fetch_id', None)


@contextmanager
def fetch_id_context(fetch_id=None):
    """
    Bind a fetch ID to the current thread for the duration of one request.
    The ID is sent as X-Request-ID and shows up in every log line emitted meanwhile.
    """
    fetch_id = fetch_id or new_fetch_id()
    previous = current_fetch_id()
    _fetch_context.fetch_id = fetch_id
    try:
        yield fetch_id
    finally:
        if previous is None:
            try:
                delattr(_fetch_context, 'fetch_id')
            except AttributeError:
                pass
        else:
            _fetch_context.fetch_id = previous


class FetchIDFilter(logging.Filter):
    """
    Logging filter to add fetch ID to log records
    """
    def filter(self, record):
        fetch_id = getattr(record, 'fetch_id', None) or current_fetch_id()
        record.fetch_id = fetch_id or 'N/A'
        return True
