"""
Prometheus metrics for the license key service.

Custom metrics for business logic and error monitoring.
"""

from prometheus_client import Counter, Histogram

# Authentication metrics
verification_codes_issued_total = Counter(
    "verification_codes_issued_total",
    "Total one-time login codes issued",
)

admin_logins_total = Counter(
    "admin_logins_total",
    "Total successful admin logins",
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
)

licenses_extended_total = Counter(
    "licenses_extended_total",
    "Total license extensions",
)

licenses_deleted_total = Counter(
    "licenses_deleted_total",
    "Total licenses deleted",
)

licenses_activated_total = Counter(
    "licenses_activated_total",
    "Total licenses activated by their first successful verification",
)

license_verifications_total = Counter(
    "license_verifications_total",
    "Total public license verifications",
    ["outcome"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)
