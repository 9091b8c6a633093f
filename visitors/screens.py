"""
Visitor list screen. Search and the converted-to-tenant flag are both sent to the server.
"""
from listing.screens import ScreenDefinition, register_screen

visitors = register_screen(ScreenDefinition(
    name='visitors',
    title='Visitors',
    endpoint='/visitors',
    filter_keys=('search', 'converted_to_tenant'),
    columns=('s_no', 'visitor_name', 'phone_no', 'purpose', 'visited_date', 'convertedTo_tenant'),
))
