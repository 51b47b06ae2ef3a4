import json
import logging
from datetime import datetime, timezone


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    action: str,
    outcome: str,
    *,
    pages: int | None = None,
    trace_id: str | None = None,
    error_code: str | None = None,
) -> None:
    """One JSON line per provisioning step."""
    logger.info(
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": "INFO",
                "module": "page_control",
                "action": action,
                "pages": pages,
                "trace_id": trace_id,
                "error_code": error_code,
                "outcome": outcome,
            }
        )
    )
