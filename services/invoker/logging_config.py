"""JSON logging for the invoker, correlated with its GenAI spans.

Every line carries the trace and span ids of the invocation span active when
it was emitted. Invocation context (requested model, region) is passed as
``extra={"attributes": {...}}`` and lands as top-level keys next to them, so
an access-denied line can be searched by model id and joined to its trace.
"""

import logging
import json
from opentelemetry import trace
from datetime import datetime, timezone

# LogRecord attribute holding per-call invocation context
ATTRIBUTES_KEY = "attributes"


class OTelJSONFormatter(logging.Formatter):
    """One JSON object per record, with trace correlation and invocation attributes."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_dict = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "service.name": self.service_name,
        }

        ctx = trace.get_current_span().get_span_context()
        if ctx.is_valid:
            log_dict["trace_id"] = format(ctx.trace_id, "032x")
            log_dict["span_id"] = format(ctx.span_id, "016x")

        log_dict.update(getattr(record, ATTRIBUTES_KEY, None) or {})

        if record.exc_info:
            log_dict["error.type"] = record.exc_info[0].__name__
            log_dict["error.message"] = str(record.exc_info[1])

        return json.dumps(log_dict)


def configure_logging(service_name: str, level: str = "INFO"):
    """Send every logger's records to stderr as correlated JSON."""
    handler = logging.StreamHandler()
    handler.setFormatter(OTelJSONFormatter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    return root
