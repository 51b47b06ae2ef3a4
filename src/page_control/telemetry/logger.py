from __future__ import annotations

import json
import os
from pathlib import Path

from .events import TelemetryEvent


class TelemetryLogger:
    """Appends events as JSON lines; disabled unless asked for."""

    def __init__(self, *, enabled: bool | None = None, log_file: str | Path | None = None) -> None:
        self.enabled = enabled if enabled is not None else _env_telemetry_enabled()
        self.log_file = Path(log_file) if log_file else Path("artifacts") / "telemetry" / "page_control.jsonl"
        self.emitted = 0

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as fp:
            fp.write(json.dumps(event.to_dict(), sort_keys=True) + "\n")
        self.emitted += 1
        return True


def _env_telemetry_enabled() -> bool:
    value = os.getenv("PAGE_CONTROL_TELEMETRY_ENABLED", "0").strip().lower()
    return value in {"1", "true", "yes", "on"}
