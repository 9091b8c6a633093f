from datetime import date, datetime

import pytest

from core.constants import PaymentStatus
from core.exceptions import ValidationError
from core.validators import FilterValidator


class TestDates:

    def test_accepts_date_datetime_and_iso_string(self):
        assert FilterValidator.validate_date('start_date', '2024-02-29') == date(2024, 2, 29)
        assert FilterValidator.validate_date('start_date', datetime(2024, 1, 2, 9, 30)) == date(2024, 1, 2)
        assert FilterValidator.validate_date('start_date', date(2024, 1, 2)) == date(2024, 1, 2)

    @pytest.mark.parametrize('value', ['2023-02-29', '02/01/2024', 'soon'])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError) as excinfo:
            FilterValidator.validate_date('end_date', value)

        assert excinfo.value.code == 'INVALID_DATE'
        assert 'end_date' in excinfo.value.field_errors


class TestMonthYear:

    @pytest.mark.parametrize('value, expected', [(3, 3), ('12', 12), ('March', 3), ('sep', 9)])
    def test_month(self, value, expected):
        assert FilterValidator.validate_month(value) == expected

    @pytest.mark.parametrize('value', [0, 13, 'Marchember', None])
    def test_invalid_month(self, value):
        with pytest.raises(ValidationError):
            FilterValidator.validate_month(value)

    def test_year(self):
        assert FilterValidator.validate_year('2024') == 2024
        with pytest.raises(ValidationError):
            FilterValidator.validate_year('24th')


class TestScalars:

    def test_ids_must_be_positive(self):
        assert FilterValidator.validate_id('room_id', '4') == 4
        with pytest.raises(ValidationError):
            FilterValidator.validate_id('room_id', 0)

    @pytest.mark.parametrize('value, expected', [(True, True), ('yes', True), ('0', False), ('False', False)])
    def test_flags(self, value, expected):
        assert FilterValidator.validate_flag('pending_rent', value) is expected

    def test_bad_flag(self):
        with pytest.raises(ValidationError):
            FilterValidator.validate_flag('pending_rent', 'maybe')

    def test_choice_is_uppercased(self):
        assert FilterValidator.validate_choice('status', ' partial ', PaymentStatus.CHOICES) == 'PARTIAL'

    def test_choice_error_lists_options(self):
        with pytest.raises(ValidationError) as excinfo:
            FilterValidator.validate_choice('status', 'LOST', PaymentStatus.CHOICES)

        assert 'PENDING' in excinfo.value.message
