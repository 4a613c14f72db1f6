import argparse
import logging

import requests
from environs import EnvError

from sample_client import logging_settings, tracing
from sample_client.client import RequestError, request_server
from sample_client.settings import load_settings


logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Sends a traced GET request to ENDPOINT and logs an entry correlated with the trace."
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Optional file with environment variables (default: .env)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging_settings.init()

    try:
        settings = load_settings(env_file=args.env_file)
    except EnvError as e:
        logger.critical(f"Invalid configuration: {e}")
        return 1
    logging_settings.set_level(settings.logging_level)

    try:
        with tracing.configured_tracing(settings) as tracer_provider:
            tracer = tracer_provider.get_tracer(tracing.TRACER_NAME)
            with requests.Session() as session:
                request_server(session=session, tracer=tracer, settings=settings)
    except tracing.TracingSetupError as e:
        logger.critical(f"Error initializing tracing: {e}")
        return 1
    except RequestError as e:
        logger.exception(f"Request failed: {e}")
        return 1
    return 0
