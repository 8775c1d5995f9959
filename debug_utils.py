import logging
import os

LOGGER_NAME = "bbgo_dashboard"


def setup_logging():
    level = logging.DEBUG if os.environ.get("BBGO_DASHBOARD_DEBUG") == "1" else logging.INFO
    logging.basicConfig(level=level)
    logging.getLogger(LOGGER_NAME).setLevel(level)


def debug_log(msg):
    logging.getLogger(LOGGER_NAME).debug(msg)
