from opentelemetry import trace


def enrich_span_with_environment(span, environment):
    """
    Tag the span with the deployment environment (when configured).
    """
    if environment:
        span.set_attribute("environment", environment)


def get_trace_ids(span):
    """
    Returns the (trace_id, span_id) of a span as lowercase hex strings.
    """
    span_context = span.get_span_context()
    return trace.format_trace_id(span_context.trace_id), trace.format_span_id(span_context.span_id)
