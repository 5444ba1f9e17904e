"""Sentry error tracking configuration and initialization."""

import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.utils import BadDsn

from parkmeter.core.logging import get_logger

logger = get_logger(__name__)

_sentry_initialized = False


def init_sentry() -> bool:
    """
    Initialize Sentry SDK when SENTRY_DSN holds a usable URL.

    Without a DSN (local development, tests) nothing is initialized.
    Safe to call more than once.

    Returns:
        True if Sentry is enabled after the call
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    sentry_dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not sentry_dsn:
        logger.info("sentry.disabled", message="Sentry DSN not found, error tracking disabled")
        return False

    # Placeholders such as "xxx" in CI are not DSNs
    if not sentry_dsn.startswith(("https://", "http://")):
        logger.info(
            "sentry.disabled",
            message="Sentry DSN looks like a placeholder, error tracking disabled",
        )
        return False

    environment = os.getenv("ENVIRONMENT", "development")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=environment,
            traces_sample_rate=0.0,
            # Plates are personal data
            send_default_pii=False,
            integrations=[
                FastApiIntegration(transaction_style="endpoint"),
                LoggingIntegration(level=None, event_level=None),
            ],
            before_send=_drop_plate_values,
        )
    except BadDsn as exc:
        logger.warning(
            "sentry.init_failed",
            message="Invalid Sentry DSN, error tracking disabled",
            error=str(exc),
        )
        return False

    _sentry_initialized = True
    logger.info("sentry.initialized", environment=environment)
    return True


def _drop_plate_values(event: dict, hint: dict) -> dict:
    """Remove plate values from extra data before the event leaves the process."""
    extra = event.get("extra")
    if isinstance(extra, dict):
        event["extra"] = {k: v for k, v in extra.items() if "plate" not in str(k).lower()}
    return event
