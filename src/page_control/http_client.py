from __future__ import annotations

import time
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportFailure

TRACE_HEADER = "X-Trace-ID"
_TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Trace-Id", "x-trace-id")


@dataclass
class TraceContext:
    trace_id: str | None = None

    def ensure(self) -> str:
        if not self.trace_id:
            self.trace_id = str(uuid.uuid4())
        return self.trace_id

    def absorb(self, headers: Mapping[str, str], payload: object = None) -> None:
        if isinstance(payload, Mapping):
            candidate = payload.get("trace_id")
            if isinstance(candidate, str) and candidate:
                self.trace_id = candidate
                return
        for key in _TRACE_HEADER_ALIASES:
            candidate = headers.get(key)
            if candidate:
                self.trace_id = candidate
                return


@dataclass
class LastOperation:
    operation: str
    duration_ms: int
    result: str
    status_code: int
    trace_id: str | None


@dataclass
class HttpClient:
    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.trace is None:
            self.trace = TraceContext()
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | list[Any] | None = None,
        params: dict[str, Any] | None = None,
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        """Send one request; there is no retry, a failed call surfaces immediately."""
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        trace_id = self.trace.ensure()
        request_headers[TRACE_HEADER] = trace_id

        started = time.monotonic()
        try:
            response = self.session.request(
                method=method.upper(),
                url=self._build_url(path),
                headers=request_headers,
                json=json_body,
                params=params,
                timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            self._record(operation, started, "transport_error", 0)
            raise TransportFailure(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                trace_id=trace_id,
                status_code=0,
                raw_payload=None,
            ) from exc

        payload = self._decode(response)
        self.trace.absorb(response.headers, payload)
        if response.ok:
            self._record(operation, started, "success", response.status_code)
            return payload

        self._record(operation, started, "error", response.status_code)
        if not isinstance(payload, Mapping):
            payload = {"message": response.text} if response.text.strip() else {}
        raise map_error(response.status_code, payload, self.trace.trace_id, reason=response.reason)

    @staticmethod
    def _decode(response: requests.Response) -> dict[str, Any] | list[Any] | None:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    def _record(self, operation: str, started: float, result: str, status_code: int) -> None:
        self.last_operation = LastOperation(
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            status_code=status_code,
            trace_id=self.trace.trace_id if self.trace else None,
        )
