"""
Client-side filters for screens whose endpoint does not filter server-side yet.

They only see the page that was just fetched, so totals and has-more keep
describing the unfiltered server data.
"""
from datetime import date, datetime

from django.utils.dateparse import parse_date, parse_datetime


def to_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    try:
        parsed = parse_datetime(text)
        if parsed is not None:
            return parsed.date()
        return parse_date(text[:10])
    except ValueError:
        return None


class PostFilter:
    """Base predicate; ``keys`` are the FilterSet keys it consumes"""
    keys = ()

    def is_active(self, filters):
        return any(filters.get(key) is not None for key in self.keys)

    def matches(self, item, filters):
        raise NotImplementedError


class DateRangeFilter(PostFilter):
    """Keeps items whose ``field`` date falls within start_date..end_date (inclusive)"""
    keys = ('start_date', 'end_date')

    def __init__(self, field):
        self.field = field

    def matches(self, item, filters):
        day = to_date(item.get(self.field))
        if day is None:
            return False
        start = filters.get('start_date')
        end = filters.get('end_date')
        if start is not None and day < start:
            return False
        if end is not None and day > end:
            return False
        return True


class EqualsFilter(PostFilter):
    def __init__(self, key, field=None):
        self.keys = (key,)
        self.key = key
        self.field = field or key

    def matches(self, item, filters):
        return item.get(self.field) == filters.get(self.key)


class TextSearchFilter(PostFilter):
    """Case-insensitive substring match over several fields"""
    keys = ('search',)

    def __init__(self, fields):
        self.fields = tuple(fields)

    def matches(self, item, filters):
        needle = str(filters.get('search')).lower()
        return any(
            needle in str(item.get(field) or '').lower()
            for field in self.fields
        )


def apply_post_filters(items, post_filters, filter_state):
    """Return the items of one page that pass every active post filter"""
    active = [f for f in post_filters if f.is_active(filter_state)]
    if not active:
        return list(items)
    return [item for item in items if all(f.matches(item, filter_state) for f in active)]
