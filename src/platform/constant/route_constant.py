# API Route Constants

# Reservation routes
RESERVATION_BASE = '/reservations'
RESERVATION_CREATE = RESERVATION_BASE
RESERVATION_LIST = RESERVATION_BASE
RESERVATION_COUNT = f'{RESERVATION_BASE}/count'
RESERVATION_GET = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_RELEASE = f'{RESERVATION_BASE}/{{reservation_id}}'
RESERVATION_CANCEL = f'{RESERVATION_BASE}/{{reservation_id}}/cancel'

# Payment routes
PAYMENT_BASE = '/payments'
PAYMENT_CREATE = PAYMENT_BASE

# Ticket routes
TICKET_BASE = '/tickets'
TICKET_CREATE = TICKET_BASE
EVENT_BASE = '/events'
EVENT_TICKETS = f'{EVENT_BASE}/{{event_id}}/tickets'

# System routes
HEALTH = '/health'
METRICS = '/metrics'
