import json
import logging

import pydantic

logger = logging.getLogger(__name__)

DEFAULT_SEVERITY = "INFO"

# Fields kept in the output even when empty
REQUIRED_FIELDS = ("message", "severity")


def make_trace_id(trace_id: str, project_id: str) -> str:
    """
    Build the fully-qualified trace name Cloud Logging uses to link a log entry with a trace.
    The project is not validated: an empty project gives "projects//traces/<trace_id>".
    """
    return f"projects/{project_id}/traces/{trace_id}"


class LogEntry(pydantic.BaseModel):
    """
    A structured log record in the JSON format expected by Cloud Logging.
    https://cloud.google.com/logging/docs/structured-logging#special-payload-fields
    """
    message: str = ""
    severity: str = ""
    trace: str = pydantic.Field("", serialization_alias="logging.googleapis.com/trace")
    span_id: str = pydantic.Field("", serialization_alias="logging.googleapis.com/spanId")
    component: str = ""

    def to_dict(self) -> dict:
        data = self.model_dump(by_alias=True)
        data["severity"] = self.severity or DEFAULT_SEVERITY
        return {key: value for key, value in data.items() if value or key in REQUIRED_FIELDS}

    def __str__(self):
        try:
            return json.dumps(self.to_dict(), separators=(",", ":"))
        except (TypeError, ValueError) as e:
            logger.error(f"Error serializing log entry: {e}")
            return ""


def format_entry(message, severity="", trace="", span_id="", component="") -> str:
    return str(
        LogEntry(
            message=message,
            severity=severity,
            trace=trace,
            span_id=span_id,
            component=component,
        )
    )
