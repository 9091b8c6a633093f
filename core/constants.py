"""
Application-wide constants.
Centralized constants following DRY principle.
"""

# Payment Status (rent / advance / refund)
class PaymentStatus:
    ALL = 'ALL'
    PAID = 'PAID'
    PARTIAL = 'PARTIAL'
    PENDING = 'PENDING'
    FAILED = 'FAILED'

    CHOICES = [
        (ALL, 'All'),
        (PAID, 'Paid'),
        (PARTIAL, 'Partial'),
        (PENDING, 'Pending'),
        (FAILED, 'Failed'),
    ]


# Tenant Status
class TenantStatus:
    ALL = 'ALL'
    ACTIVE = 'ACTIVE'
    INACTIVE = 'INACTIVE'
    CHECKED_OUT = 'CHECKED_OUT'

    CHOICES = [
        (ALL, 'All'),
        (ACTIVE, 'Active'),
        (INACTIVE, 'Inactive'),
        (CHECKED_OUT, 'Checked Out'),
    ]


# Expense payment methods
class PaymentMethod:
    GPAY = 'GPAY'
    PHONEPE = 'PHONEPE'
    CASH = 'CASH'
    BANK_TRANSFER = 'BANK_TRANSFER'

    CHOICES = [
        (GPAY, 'GPay'),
        (PHONEPE, 'PhonePe'),
        (CASH, 'Cash'),
        (BANK_TRANSFER, 'Bank Transfer'),
    ]


# Quick date shortcuts
class QuickFilter:
    NONE = 'NONE'
    TODAY = 'TODAY'
    YESTERDAY = 'YESTERDAY'
    LAST_WEEK = 'LAST_WEEK'
    LAST_MONTH = 'LAST_MONTH'
    LAST_7_DAYS = 'LAST_7_DAYS'
    LAST_30_DAYS = 'LAST_30_DAYS'
    THIS_MONTH = 'THIS_MONTH'
    PREVIOUS_MONTH = 'PREVIOUS_MONTH'

    CHOICES = [
        (NONE, 'None'),
        (TODAY, 'Today'),
        (YESTERDAY, 'Yesterday'),
        (LAST_WEEK, 'Last 1 Week'),
        (LAST_MONTH, 'Last 1 Month'),
        (LAST_7_DAYS, 'Last 7 Days'),
        (LAST_30_DAYS, 'Last 30 Days'),
        (THIS_MONTH, 'This Month'),
        (PREVIOUS_MONTH, 'Previous Month'),
    ]


# List lifecycle
class ListState:
    IDLE = 'IDLE'
    LOADING = 'LOADING'
    LOADED = 'LOADED'
    FAILED = 'FAILED'


# Alert severity
class AlertSeverity:
    INFO = 'INFO'
    WARNING = 'WARNING'
    CONFLICT = 'CONFLICT'
    ERROR = 'ERROR'
    CRITICAL = 'CRITICAL'


# Request scoping headers
class ScopeHeader:
    ORGANIZATION = 'X-Organization-Id'
    PG_LOCATION = 'X-PG-Location-Id'
    USER = 'X-User-Id'
    REQUEST_ID = 'X-Request-ID'


# Paths that are rejected client-side without a PG location header
LOCATION_SCOPED_PREFIXES = (
    'tenants',
    'rooms',
    'beds',
    'advance-payments',
    'refund-payments',
    'payments',
    'tenant-payments',
    'pending-payments',
)

# Status codes flagged retryable (never retried automatically)
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

# User-facing messages keyed by server error code
ERROR_MESSAGES = {
    'ERR_001': 'Invalid request. Please check your input.',
    'ERR_002': 'Resource not found.',
    'ERR_003': 'Unauthorized. Please log in again.',
    'ERR_004': 'Forbidden. You do not have permission.',
    'ERR_005': 'This resource already exists.',
    'ERR_006': 'Validation failed. Please check your input.',
    'ERR_007': 'Too many requests. Please try again later.',
    'ERR_500': 'Server error. Please try again later.',
    'ERR_501': 'Service unavailable. Please try again later.',
    'NETWORK_ERROR': 'Network error. Please check your connection.',
    'TIMEOUT': 'Request timeout. Please try again.',
    'UNKNOWN_ERROR': 'An unexpected error occurred.',
    'ALREADY_EXISTS': 'This record already exists.',
    'RESOURCE_NOT_FOUND': 'The requested resource was not found.',
    'VALIDATION_ERROR': 'Validation failed. Please check your input.',
    'UNAUTHORIZED': 'You are not authorized to perform this action.',
    'FORBIDDEN': 'You do not have permission to access this resource.',
    'CONFLICT': 'There is a conflict with the current state.',
    'DATABASE_ERROR': 'Database error occurred. Please try again.',
}


# Pagination
class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
