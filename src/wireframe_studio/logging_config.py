from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

from google.cloud import logging as cloud_logging

SERVICE_NAME = "wireframe-studio"

# Trace resource of the request being served, e.g. projects/<id>/traces/<trace>
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, in the shape Cloud Logging parses from stdout.

    Fields passed through ``extra=`` (``section_id``, ``wireframe_id``, ...)
    are lifted to the top level so they can be filtered on directly.
    """

    def __init__(self, *, service: str = SERVICE_NAME) -> None:
        super().__init__()
        self._service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
            "service": self._service,
            "logger": record.name,
            "logging.googleapis.com/sourceLocation": {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        trace_id = trace_id_var.get()
        if trace_id:
            entry["logging.googleapis.com/trace"] = trace_id

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def trace_from_header(header: str | None, project_id: str | None) -> str | None:
    """Turn an ``X-Cloud-Trace-Context`` value into a Cloud Logging trace resource.

    The header looks like ``TRACE_ID/SPAN_ID;o=1``; only the trace id is kept.
    Without a project the bare trace id is returned.
    """
    if not header:
        return None
    trace = header.split("/", 1)[0].strip()
    if not trace:
        return None
    return f"projects/{project_id}/traces/{trace}" if project_id else trace


def setup_logging(
    *,
    environment: str = "dev",
    project_id: str | None = None,
    use_cloud_logging: bool = True,
) -> None:
    """Configure logging for the API process.

    Args:
        environment: Environment name (dev, staging, prod)
        project_id: GCP project ID for Cloud Logging
        use_cloud_logging: Whether to attach the Cloud Logging client outside dev
    """
    log_level = logging.DEBUG if environment == "dev" else logging.INFO

    if use_cloud_logging and project_id and environment != "dev":
        client = cloud_logging.Client(project=project_id)
        client.setup_logging(log_level=log_level)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logging.basicConfig(level=log_level, handlers=[handler])

    for name in ("google", "urllib3", "httpx", "httpcore", "multipart"):
        logging.getLogger(name).setLevel(logging.WARNING)


def set_trace_id(trace_id: str | None) -> None:
    trace_id_var.set(trace_id)


def get_trace_id() -> str | None:
    return trace_id_var.get()


__all__ = [
    "SERVICE_NAME",
    "StructuredFormatter",
    "get_trace_id",
    "set_trace_id",
    "setup_logging",
    "trace_from_header",
]
