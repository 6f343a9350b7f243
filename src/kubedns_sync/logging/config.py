"""
Logging setup for the kubedns-sync command line tools.

Logging is configured from a YAML dictConfig file when one is given,
otherwise from the DEBUG and QUIET environment variables.
"""

import logging
import logging.config
import os

import yaml

from kubedns_sync.logging.filters import SuppressRepeatedErrorsFilter

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


def setup_logging(logging_config: str | None = None) -> None:
    """
    Configure the root logger.

    Args:
        logging_config: Path to a YAML logging.config dictConfig file
    """
    if logging_config:
        with open(logging_config, "r") as f:
            logging.config.dictConfig(yaml.safe_load(f))
        return

    # verbosity flags
    debug = os.environ.get("DEBUG")
    quiet = os.environ.get("QUIET")

    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SuppressRepeatedErrorsFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
