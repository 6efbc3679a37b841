"""
logger.py

Logging formats shared by the command line tool
"""
import logging

LOGGING_FORMAT = "[%(asctime)s] [%(levelname)s] [%(filename)18s:%(lineno)3s - %(funcName)18s() ] [%(message)s]"
LOGGING_FORMAT_SHORT = "[%(asctime)s] [%(levelname)5s] [%(name)10s] [%(message)s]"


def configure_logging(verbose=False):
    """Initialize root logger, debug format is used when verbose"""
    if verbose:
        logging.basicConfig(format=LOGGING_FORMAT, level=logging.DEBUG)
    else:
        logging.basicConfig(format=LOGGING_FORMAT_SHORT, level=logging.INFO)
