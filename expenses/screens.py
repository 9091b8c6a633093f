"""
Expense list screen.

The /expenses endpoint only paginates, so the date range, expense type and
payment method are applied to each fetched page on the client.
"""
from core.constants import PaymentMethod
from listing.post_filters import DateRangeFilter, EqualsFilter
from listing.screens import ScreenDefinition, register_screen

expenses = register_screen(ScreenDefinition(
    name='expenses',
    title='Expenses',
    endpoint='/expenses',
    filter_keys=('quick_filter', 'start_date', 'end_date', 'expense_type', 'payment_method'),
    choices={'payment_method': PaymentMethod.CHOICES},
    client_side_keys=('start_date', 'end_date', 'expense_type', 'payment_method'),
    post_filters=(
        DateRangeFilter('paid_date'),
        EqualsFilter('expense_type'),
        EqualsFilter('payment_method'),
    ),
    page_size=10,
    columns=('s_no', 'expense_type', 'amount', 'paid_to', 'paid_date', 'payment_method'),
))
