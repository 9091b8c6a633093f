"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
import calendar
from datetime import date, datetime
from django.utils.dateparse import parse_date
from core.exceptions import ValidationError


class FilterValidator:
    """Normalizes raw filter values (typed or CLI strings) into their canonical types"""

    TRUE_VALUES = {'true', '1', 'yes', 'y'}
    FALSE_VALUES = {'false', '0', 'no', 'n'}

    @staticmethod
    def validate_date(key: str, value):
        """Accept a date, a datetime or an ISO string"""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            parsed = parse_date(str(value).strip())
        except ValueError:
            parsed = None
        if parsed is None:
            raise ValidationError(
                message=f"'{value}' is not a valid date (expected YYYY-MM-DD)",
                code="INVALID_DATE",
                field_errors={key: "Invalid date"}
            )
        return parsed

    @staticmethod
    def validate_month(value) -> int:
        """Accept 1-12 or an English month name"""
        if isinstance(value, str) and not value.strip().isdigit():
            names = {name.lower(): index for index, name in enumerate(calendar.month_name) if name}
            names.update({name.lower(): index for index, name in enumerate(calendar.month_abbr) if name})
            month = names.get(value.strip().lower())
        else:
            try:
                month = int(value)
            except (TypeError, ValueError):
                month = None
        if month is None or not 1 <= month <= 12:
            raise ValidationError(
                message=f"'{value}' is not a valid month",
                code="INVALID_MONTH",
                field_errors={'month': "Month must be 1-12 or a month name"}
            )
        return month

    @staticmethod
    def validate_year(value) -> int:
        try:
            year = int(value)
        except (TypeError, ValueError):
            year = None
        if year is None or not 1900 <= year <= 9999:
            raise ValidationError(
                message=f"'{value}' is not a valid year",
                code="INVALID_YEAR",
                field_errors={'year': "Invalid year"}
            )
        return year

    @staticmethod
    def validate_id(key: str, value) -> int:
        try:
            identifier = int(value)
        except (TypeError, ValueError):
            identifier = None
        if identifier is None or identifier < 1:
            raise ValidationError(
                message=f"{key} must be a positive integer",
                code="INVALID_ID",
                field_errors={key: "Must be a positive integer"}
            )
        return identifier

    @classmethod
    def validate_flag(cls, key: str, value) -> bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in cls.TRUE_VALUES:
            return True
        if text in cls.FALSE_VALUES:
            return False
        raise ValidationError(
            message=f"{key} must be true or false",
            code="INVALID_FLAG",
            field_errors={key: "Must be true or false"}
        )

    @staticmethod
    def validate_choice(key: str, value, choices) -> str:
        """Validate value against a CHOICES list of (value, label) pairs"""
        allowed = [choice for choice, _label in choices]
        text = str(value).strip().upper()
        if text not in allowed:
            raise ValidationError(
                message=f"'{value}' is not a valid {key}. Choose from: {', '.join(allowed)}",
                code="INVALID_CHOICE",
                field_errors={key: "Invalid choice"}
            )
        return text
