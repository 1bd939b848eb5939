"""Sentry error monitoring for the prompt history API."""

import structlog
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

logger = structlog.get_logger()

_SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}
_REDACTED = "[REDACTED]"


def _scrub_sensitive_data(event: dict, hint: dict) -> dict:
    """Keep prompt text and credentials out of error reports.

    Request bodies carry document content and diffs, so they are dropped
    whole; only auth headers are redacted.
    """
    request = event.get("request") or {}
    if "data" in request:
        request["data"] = _REDACTED
    headers = request.get("headers") or {}
    for header in list(headers):
        if header.lower() in _SENSITIVE_HEADERS:
            headers[header] = _REDACTED
    return event


def init_sentry(
    dsn: str | None,
    environment: str = "development",
    release: str | None = None,
) -> bool:
    """Initialise Sentry before the app is built; returns whether it is enabled."""
    if not dsn:
        logger.info("sentry_disabled", reason="SENTRY_DSN not set")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=0.1 if environment == "production" else 1.0,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
        send_default_pii=False,
        max_request_body_size="never",
        before_send=_scrub_sensitive_data,
    )
    logger.info("sentry_initialized", environment=environment)
    return True
