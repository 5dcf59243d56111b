"""Sentry error tracking configuration and initialization."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from pinreport.core.logging import get_logger

logger = get_logger(__name__)

# Guard against multiple initializations
_sentry_initialized = False

# Request body keys that carry customer data (names, phones, notes)
SENSITIVE_BODY_KEYS = frozenset(
    {
        "sales",
        "repair_orders",
        "cash_transactions",
        "production_orders",
        "materials",
        "products",
    }
)


def init_sentry() -> None:
    """
    Initialize Sentry SDK for error tracking.

    Only initializes if SENTRY_DSN environment variable is set and looks like a
    URL, so local development and CI run without Sentry. Safe to call twice.

    Configuration:
    - Performance monitoring disabled
    - No default PII; posted record collections are scrubbed before sending
    - Logging integration disabled to avoid duplication with structlog
    """
    global _sentry_initialized

    if _sentry_initialized:
        return

    sentry_dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return

    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN appears to be invalid or placeholder, error tracking disabled",
        )
        return

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            traces_sample_rate=0.0,
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),
            ],
            before_send=filter_sensitive_data,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Failed to initialize Sentry due to invalid DSN, error tracking disabled",
            error=str(exc),
        )
        return

    _sentry_initialized = True
    logger.info("sentry.initialized", message="Sentry error tracking enabled", environment=environment)


def filter_sensitive_data(event: dict, hint: dict) -> dict:
    """
    Drop posted record collections from Sentry events.

    Report requests carry customer names, phones and notes; only the period
    selection and sort are kept.
    """
    request = event.get("request")
    if isinstance(request, dict) and isinstance(request.get("data"), dict):
        request["data"] = {
            key: ("[Filtered]" if key in SENSITIVE_BODY_KEYS else value)
            for key, value in request["data"].items()
        }
    return event
