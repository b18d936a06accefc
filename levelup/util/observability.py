"""Logfire setup and instrumentation.

Domain services emit structured events and spans directly:

    logfire.info("Account linked", account_id=account.id, created=True)

    with logfire.span("account_service.link", identity_key=key):
        ...
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from levelup.config import ServiceName, Settings

# Request fields that carry third-party credentials or session ids
REDACTED_FIELDS = frozenset(
    {"id_token", "auth_code", "access_token", "token", "session_id", "credentials"}
)


def configure_logfire(settings: Settings, service: ServiceName) -> None:
    """Configure Logfire for one of the two services.

    Spans go to Logfire cloud when ``OBSERVABILITY__SEND_TO_LOGFIRE`` says so,
    or, when that is unset, whenever a token is configured. The console
    always gets output.
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name=f"levelup-{service}",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        service=service,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def redact_request_values(values: dict[str, Any]) -> dict[str, Any]:
    """Replace credential fields of parsed request models with a marker."""
    redacted = {}
    for name, value in values.items():
        if name in REDACTED_FIELDS:
            redacted[name] = "[redacted]"
        elif hasattr(value, "model_dump"):
            redacted[name] = redact_request_values(value.model_dump())
        else:
            redacted[name] = value
    return redacted


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request handled by ``app`` without recording credentials."""

    def _map_request_attributes(request, attributes):
        result = {**attributes}
        if "values" in result:
            result["values"] = redact_request_values(result["values"])
        if request.client:
            result["client_host"] = request.client.host
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued by the PostgreSQL account store."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace outbound calls to identity providers and the recall broker."""
    logfire.instrument_httpx()
