import logging
from pathlib import Path

import pydantic
from environs import Env
from marshmallow.validate import OneOf

logger = logging.getLogger(__name__)

PROPAGATOR_CHOICES = ["tracecontext", "cloud_trace", "tracecontext,cloud_trace"]


class Settings(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    project_id: str = ""
    endpoint: str = ""
    app_name: str = ""
    service_name: str = "sample-client"
    trace_environment: str = ""
    trace_propagator: str = "tracecontext"
    logging_level: int = logging.INFO


def read_env_file(env, env_file):
    path = Path(env_file)
    if not path.is_file():
        logger.info(f"Not found .env file: {path}. Using the process environment.")
        return False
    # Variables already set in the environment take precedence
    env.read_env(str(path), recurse=False, override=False)
    logger.debug(f"Loaded environment from {path}")
    return True


def load_settings(env_file=".env") -> Settings:
    env = Env()
    if env_file:
        read_env_file(env, env_file)

    return Settings(
        project_id=env.str("PROJECT_ID", ""),
        endpoint=env.str("ENDPOINT", ""),
        app_name=env.str("APP_NAME", ""),
        service_name=env.str("SERVICE_NAME", "sample-client"),
        trace_environment=env.str("TRACE_ENVIRONMENT", ""),
        trace_propagator=env.str(
            "TRACE_PROPAGATOR", "tracecontext", validate=OneOf(PROPAGATOR_CHOICES)
        ),
        logging_level=env.log_level("LOGGING_LEVEL", logging.INFO),
    )
