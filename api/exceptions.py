"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Domain exceptions map to HTTP statuses by error code; every error body has
the shape {"error": {"code": ..., "message": ...}}.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core import metrics
from core.domain.exceptions import DomainException, ResendThrottledError
from core.middleware.metrics import normalize_endpoint

logger = logging.getLogger(__name__)

DOMAIN_ERROR_STATUS = {
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "INVALID_SECRET_KEY": status.HTTP_401_UNAUTHORIZED,
    "NO_CODE_REQUESTED": status.HTTP_400_BAD_REQUEST,
    "CODE_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "CODE_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "INCORRECT_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "INVALID_LICENSE_KEY_FORMAT": status.HTTP_400_BAD_REQUEST,
    "MISSING_EXPIRY": status.HTTP_400_BAD_REQUEST,
    "RESEND_THROTTLED": status.HTTP_429_TOO_MANY_REQUESTS,
    "DELIVERY_FAILED": status.HTTP_503_SERVICE_UNAVAILABLE,
    "ADMIN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "LICENSE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USERNAME_TAKEN": status.HTTP_409_CONFLICT,
    "EMAIL_TAKEN": status.HTTP_409_CONFLICT,
    "DUPLICATE_KEY": status.HTTP_409_CONFLICT,
    "SETUP_DISABLED": status.HTTP_403_FORBIDDEN,
}


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)
    endpoint = _get_endpoint(context)

    if isinstance(exc, DomainException):
        metrics.errors_total.labels(error_type=exc.code, endpoint=endpoint).inc()
        response = _handle_domain_exception(exc, trace_id)
    elif isinstance(exc, Http404):
        metrics.errors_total.labels(error_type="NOT_FOUND", endpoint=endpoint).inc()
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail) if isinstance(response.data, dict) else response.data
        response.data = {"error": {"code": code, "message": str(detail)}}
        metrics.errors_total.labels(error_type=code, endpoint=endpoint).inc()
    else:
        metrics.errors_total.labels(error_type="INTERNAL_ERROR", endpoint=endpoint).inc()
        response = _handle_unexpected_exception(exc, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _get_endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    return normalize_endpoint(request.path) if request else "unknown"


def _handle_domain_exception(exc: DomainException, trace_id: Optional[str]) -> Response:
    """Handle domain-specific exceptions."""
    status_code = DOMAIN_ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)

    logger.warning("Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
    response = Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)
    if isinstance(exc, ResendThrottledError) and exc.retry_after is not None:
        response["Retry-After"] = str(exc.retry_after)
    return response


def _handle_unexpected_exception(exc: Exception, trace_id: Optional[str]) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
