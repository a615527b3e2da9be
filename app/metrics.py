"""Prometheus metrics."""

from prometheus_client import Counter, Histogram

api_requests_total = Counter('api_requests_total', 'Total API requests', ['method', 'endpoint', 'status'])
api_request_duration = Histogram('api_request_duration_seconds', 'API request duration')
meetings_booked = Counter('meetings_booked_total', 'Total meetings booked')
booking_conflicts = Counter('booking_conflicts_total', 'Booking attempts rejected because the slot was taken')
meetings_cancelled = Counter('meetings_cancelled_total', 'Total meetings cancelled')
notifications_failed = Counter('notifications_failed_total', 'Booking notifications that could not be sent')
