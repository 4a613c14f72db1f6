import logging

import requests
from opentelemetry import trace

from sample_client import tracing
from sample_client.entries import LogEntry, make_trace_id
from sample_client.logging_settings import ENTRIES_LOGGER_NAME


logger = logging.getLogger(__name__)
entries_logger = logging.getLogger(ENTRIES_LOGGER_NAME)

REQUEST_SPAN_NAME = "requestServer"


class RequestError(Exception):
    pass


def request_server(session: requests.Session, tracer: trace.Tracer, settings) -> int:
    """
    Sends a single GET request to the configured endpoint inside a "requestServer" span.
    The trace context is injected in the request headers by the requests instrumentation.
    Returns the response status code.
    """
    with tracer.start_as_current_span(REQUEST_SPAN_NAME) as current_span:
        tracing.instrumentation.enrich_span_with_environment(
            span=current_span,
            environment=settings.trace_environment,
        )
        trace_id, span_id = tracing.instrumentation.get_trace_ids(current_span)
        entries_logger.info(
            LogEntry(
                severity="INFO",
                message="Request Server",
                component=settings.app_name,
                trace=make_trace_id(trace_id, settings.project_id),
                span_id=span_id,
            )
        )

        try:
            request = session.prepare_request(requests.Request("GET", settings.endpoint))
        except (requests.RequestException, ValueError) as e:
            raise RequestError(f"Error building request for endpoint '{settings.endpoint}': {e}") from e

        try:
            response = session.send(request)
        except requests.RequestException as e:
            raise RequestError(f"Error requesting {settings.endpoint}: {e}") from e

        # Release the connection, the body isn't used
        response.close()
        logger.info(
            f"Response received from {settings.endpoint}: {response.status_code}",
            extra={"status_code": response.status_code, "trace_id": trace_id},
        )
        return response.status_code
