from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

TELEMETRY_CATEGORIES = {"selection", "api_call_result", "registry", "error"}
_FORBIDDEN_CONTEXT_KEYS = {"email", "password", "token", "access_token", "authorization"}


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    action: str
    timestamp_utc: str
    trace_id: str | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def build_event(
    *,
    category: str,
    name: str,
    action: str,
    trace_id: str | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    if category not in TELEMETRY_CATEGORIES:
        raise ValueError(f"Unsupported telemetry category: {category}")
    illegal = sorted(key for key in (context or {}) if key.lower() in _FORBIDDEN_CONTEXT_KEYS)
    if illegal:
        raise ValueError(f"Credential-like keys are forbidden in telemetry context: {illegal}")
    return TelemetryEvent(
        category=category,
        name=name,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        trace_id=trace_id,
        success=success,
        error_code=error_code,
        context=context,
    )
