"""
Payment list screens: rent, advance and refund payments.
All three share the same filters and publish their lists to the app context.
"""
from core.constants import PaymentStatus
from listing.screens import ScreenDefinition, register_screen

PAYMENT_FILTER_KEYS = (
    'status',
    'quick_filter',
    'start_date',
    'end_date',
    'month',
    'year',
    'room_id',
    'bed_id',
)

PAYMENT_COLUMNS = ('s_no', 'tenant_id', 'room_id', 'bed_id', 'amount_paid', 'payment_date', 'payment_method', 'status')


rent_payments = register_screen(ScreenDefinition(
    name='rent_payments',
    title='Rent Payments',
    endpoint='/tenant-payments',
    filter_keys=PAYMENT_FILTER_KEYS,
    choices={'status': PaymentStatus.CHOICES},
    scope_slice='payments/rent',
    columns=PAYMENT_COLUMNS,
))

advance_payments = register_screen(ScreenDefinition(
    name='advance_payments',
    title='Advance Payments',
    endpoint='/advance-payments',
    filter_keys=PAYMENT_FILTER_KEYS + ('tenant_id',),
    choices={'status': PaymentStatus.CHOICES},
    scope_slice='payments/advance',
    columns=PAYMENT_COLUMNS,
))

refund_payments = register_screen(ScreenDefinition(
    name='refund_payments',
    title='Refund Payments',
    endpoint='/refund-payments',
    filter_keys=PAYMENT_FILTER_KEYS + ('tenant_id',),
    choices={'status': PaymentStatus.CHOICES},
    scope_slice='payments/refund',
    columns=PAYMENT_COLUMNS,
))
