"""
App configuration for License Key Service.
"""

import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class LicenseKeyServiceConfig(AppConfig):
    """App configuration for LicenseKeyService."""

    name = "LicenseKeyService"
    verbose_name = "License Key Service"

    def ready(self):
        """Wire event handlers and, when enabled, tracing."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if getattr(settings, "OBSERVABILITY_ENABLED", False):
            from core.instrumentation import setup_opentelemetry

            logger.info("Setting up observability...")
            setup_opentelemetry()
