from . import config
from . import instrumentation
from .config import TRACER_NAME, TracingSetupError, configured_tracing
