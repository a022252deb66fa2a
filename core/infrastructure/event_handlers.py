"""
Event handlers for domain events.

These handlers process domain events for side effects that are not part
of the business operation itself: structured logging and Prometheus metrics.
"""

import logging

from accounts.domain.events import AdminAuthenticated, AdminCreated, VerificationCodeIssued
from core import metrics
from core.domain.events import DomainEvent, EventHandler
from licenses.domain.events import (
    LicenseActivated,
    LicenseCreated,
    LicenseDeleted,
    LicenseExtended,
    LicenseUpdated,
)

logger = logging.getLogger(__name__)

ALL_EVENTS = (
    AdminCreated,
    VerificationCodeIssued,
    AdminAuthenticated,
    LicenseCreated,
    LicenseUpdated,
    LicenseExtended,
    LicenseDeleted,
    LicenseActivated,
)


class EventLogHandler(EventHandler):
    """Writes every domain event to the application log."""

    async def handle(self, event: DomainEvent) -> None:
        logger.info(
            "Domain event: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.to_dict(),
        )


class MetricsEventHandler(EventHandler):
    """Keeps business counters in step with domain events."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, VerificationCodeIssued):
            metrics.verification_codes_issued_total.inc()
        elif isinstance(event, AdminAuthenticated):
            metrics.admin_logins_total.inc()
        elif isinstance(event, LicenseCreated):
            metrics.licenses_created_total.inc()
        elif isinstance(event, LicenseExtended):
            metrics.licenses_extended_total.inc()
        elif isinstance(event, LicenseDeleted):
            metrics.licenses_deleted_total.inc()
        elif isinstance(event, LicenseActivated):
            metrics.licenses_activated_total.inc()


_log_handler = EventLogHandler()
_metrics_handler = MetricsEventHandler()


def register_event_handlers():
    """Register all event handlers with the event bus."""
    from core.infrastructure.events import event_bus

    for event_type in ALL_EVENTS:
        event_bus.subscribe(event_type, _log_handler)
        event_bus.subscribe(event_type, _metrics_handler)

    logger.info("Event handlers registered")
