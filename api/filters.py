"""
Filter state for list screens.

A FilterSet is an explicit record of every filter a list screen can apply.
FilterState wraps it with the screen's allowed keys and enforces the date
exclusivity rule: a quick filter / explicit date range and a month/year
selection are never authoritative at the same time.
"""
import calendar
from dataclasses import dataclass, fields
from datetime import date, timedelta
from typing import Optional

from django.utils import timezone

from core.constants import QuickFilter
from core.exceptions import ValidationError
from core.validators import FilterValidator


@dataclass
class FilterSet:
    status: Optional[str] = None
    quick_filter: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    month: Optional[int] = None
    year: Optional[int] = None
    room_id: Optional[int] = None
    bed_id: Optional[int] = None
    tenant_id: Optional[int] = None
    search: Optional[str] = None
    expense_type: Optional[str] = None
    payment_method: Optional[str] = None
    converted_to_tenant: Optional[bool] = None
    pending_rent: Optional[bool] = None
    pending_advance: Optional[bool] = None
    partial_rent: Optional[bool] = None


FILTER_KEYS = tuple(f.name for f in fields(FilterSet))

FIELD_KINDS = {
    'status': 'choice',
    'quick_filter': 'quick',
    'start_date': 'date',
    'end_date': 'date',
    'month': 'month',
    'year': 'year',
    'room_id': 'id',
    'bed_id': 'id',
    'tenant_id': 'id',
    'search': 'text',
    'expense_type': 'text',
    'payment_method': 'choice',
    'converted_to_tenant': 'flag',
    'pending_rent': 'flag',
    'pending_advance': 'flag',
    'partial_rent': 'flag',
}

# Values that mean "no filter" for their key
EMPTY_VALUES = {
    'status': 'ALL',
    'quick_filter': QuickFilter.NONE,
}

DATE_RANGE_KEYS = ('quick_filter', 'start_date', 'end_date')
MONTH_YEAR_KEYS = ('month', 'year')


def shift_month(day: date, months: int) -> date:
    """Move a date by whole months, clamping the day to the target month's length"""
    index = day.month - 1 + months
    year = day.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def quick_filter_range(quick_filter: str, today: date):
    """Return the (start, end) dates a quick filter stands for"""
    if quick_filter == QuickFilter.TODAY:
        return today, today
    if quick_filter == QuickFilter.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if quick_filter in (QuickFilter.LAST_WEEK, QuickFilter.LAST_7_DAYS):
        return today - timedelta(days=7), today
    if quick_filter == QuickFilter.LAST_30_DAYS:
        return today - timedelta(days=30), today
    if quick_filter == QuickFilter.LAST_MONTH:
        return shift_month(today, -1), today
    if quick_filter == QuickFilter.THIS_MONTH:
        return today.replace(day=1), today
    if quick_filter == QuickFilter.PREVIOUS_MONTH:
        first_this_month = today.replace(day=1)
        last_previous = first_this_month - timedelta(days=1)
        return last_previous.replace(day=1), last_previous
    raise ValidationError(
        message=f"Unknown quick filter '{quick_filter}'",
        code="INVALID_CHOICE",
        field_errors={'quick_filter': "Invalid choice"}
    )


class FilterState:
    """
    Current filter selection of one list screen.

    Only the keys passed as ``allowed_keys`` may be set. ``choices`` maps
    choice-type keys (status, payment_method) to their CHOICES lists.
    ``today`` is a callable so quick filters resolve against the current day.
    """

    def __init__(self, allowed_keys=FILTER_KEYS, choices=None, today=None):
        unknown = set(allowed_keys) - set(FILTER_KEYS)
        if unknown:
            raise ValueError(f"Unknown filter keys: {sorted(unknown)}")
        self.allowed_keys = tuple(allowed_keys)
        self.choices = choices or {}
        self._today = today or timezone.localdate
        self.values = FilterSet()

    def get(self, key):
        return getattr(self.values, key)

    def is_set(self, key) -> bool:
        return getattr(self.values, key) is not None

    def set_filter(self, key, value):
        """Store a filter value, clearing whichever date group it conflicts with"""
        if key not in self.allowed_keys:
            raise ValidationError(
                message=f"Filter '{key}' is not available on this list",
                code="UNKNOWN_FILTER",
                field_errors={key: "Unknown filter"}
            )

        value = self._normalize(key, value)
        if value is None:
            if key == 'quick_filter' and self.values.quick_filter is not None:
                # the dates came from the quick filter
                self._clear(DATE_RANGE_KEYS)
            setattr(self.values, key, None)
            return

        if key == 'quick_filter':
            start, end = quick_filter_range(value, self._today())
            self._clear(MONTH_YEAR_KEYS)
            self.values.quick_filter = value
            self.values.start_date = start
            self.values.end_date = end
        elif key in ('start_date', 'end_date'):
            self._clear(MONTH_YEAR_KEYS + ('quick_filter',))
            setattr(self.values, key, value)
        elif key in MONTH_YEAR_KEYS:
            self._clear(DATE_RANGE_KEYS)
            setattr(self.values, key, value)
        else:
            setattr(self.values, key, value)

    def clear_all(self):
        self.values = FilterSet()

    def count_active(self) -> int:
        """
        Number of active filters for the badge.

        A date range counts once however many ends are set, and month/year
        counts once and only when both are selected.
        """
        count = 0
        for key in self.allowed_keys:
            if key in ('start_date', 'end_date') or key in MONTH_YEAR_KEYS:
                continue
            if self.is_set(key):
                count += 1
        if self.is_set('start_date') or self.is_set('end_date'):
            count += 1
        if self.is_set('month') and self.is_set('year'):
            count += 1
        return count

    def to_query_projection(self, exclude=()) -> dict:
        """
        Flat query parameters for the fetch adapter.

        An explicit date range (including one set by a quick filter) wins over
        month/year; month/year is only sent when both are selected. Keys in
        ``exclude`` are left out (filters a screen applies client-side).
        """
        projection = {}
        values = self.values
        has_range = values.start_date is not None or values.end_date is not None

        for key in self.allowed_keys:
            if key in exclude or key == 'quick_filter':
                continue
            value = getattr(values, key)
            if value is None:
                continue
            if key in MONTH_YEAR_KEYS:
                continue
            if key in ('start_date', 'end_date'):
                projection[key] = value.isoformat()
            elif isinstance(value, bool):
                projection[key] = 'true' if value else 'false'
            else:
                projection[key] = value

        month_year_allowed = all(k in self.allowed_keys and k not in exclude for k in MONTH_YEAR_KEYS)
        if (not has_range and month_year_allowed
                and values.month is not None and values.year is not None):
            projection['month'] = calendar.month_name[values.month]
            projection['year'] = values.year

        return projection

    def _clear(self, keys):
        for key in keys:
            setattr(self.values, key, None)

    def _normalize(self, key, value):
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if value == '':
                return None
        if key in EMPTY_VALUES and str(value).upper() == EMPTY_VALUES[key]:
            return None

        kind = FIELD_KINDS[key]
        if kind == 'date':
            return FilterValidator.validate_date(key, value)
        if kind == 'month':
            return FilterValidator.validate_month(value)
        if kind == 'year':
            return FilterValidator.validate_year(value)
        if kind == 'id':
            return FilterValidator.validate_id(key, value)
        if kind == 'flag':
            return FilterValidator.validate_flag(key, value)
        if kind == 'quick':
            return FilterValidator.validate_choice(key, value, QuickFilter.CHOICES)
        if kind == 'choice' and key in self.choices:
            return FilterValidator.validate_choice(key, value, self.choices[key])
        return value
