"""
Tenant list screen. Search text is matched on the client against name, phone and tenant id.
"""
from core.constants import TenantStatus
from listing.post_filters import TextSearchFilter
from listing.screens import ScreenDefinition, register_screen

tenants = register_screen(ScreenDefinition(
    name='tenants',
    title='Tenants',
    endpoint='/tenants',
    filter_keys=('status', 'room_id', 'search', 'pending_rent', 'pending_advance', 'partial_rent'),
    choices={'status': TenantStatus.CHOICES},
    client_side_keys=('search',),
    post_filters=(TextSearchFilter(('name', 'phone_no', 'tenant_id')),),
    page_size=10,
    columns=('s_no', 'tenant_id', 'name', 'phone_no', 'room_id', 'bed_id', 'check_in_date', 'status'),
))
