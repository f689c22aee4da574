import logging
import sys

from customresource import config

from .format import DefaultFormatter, RequestContextFilter

# default levels for third-party and noisy internal loggers
default_log_levels = {
    "asyncio": logging.INFO,
    "plux": logging.WARNING,
    "requests": logging.WARNING,
    "urllib3": logging.WARNING,
}

trace_log_levels = {
    "requests": logging.DEBUG,
    "urllib3": logging.DEBUG,
}


def get_log_level_from_config():
    # overriding the log level if CFN_LOG has been set
    if config.CFN_LOG:
        log_level = str(config.CFN_LOG).upper()
        if log_level.lower() in config.TRACE_LOG_LEVELS:
            log_level = "DEBUG"
        if log_level == "WARN":
            log_level = "WARNING"
        return logging.getLevelName(log_level)

    return logging.DEBUG if config.DEBUG else logging.INFO


def setup_logging_from_config():
    log_level = get_log_level_from_config()
    setup_logging(log_level)

    if config.is_trace_logging_enabled():
        for name, level in trace_log_levels.items():
            logging.getLogger(name).setLevel(level)


def create_default_handler(log_level: int):
    log_handler = logging.StreamHandler(stream=sys.stderr)
    log_handler.setLevel(log_level)
    log_handler.setFormatter(DefaultFormatter())
    log_handler.addFilter(RequestContextFilter())
    return log_handler


def setup_logging(log_level=logging.INFO) -> None:
    """
    Configures the python logging environment for the custom resource handler.

    :param log_level: the optional log level.
    """
    log_handler = create_default_handler(log_level)

    # replace any existing handlers
    logging.basicConfig(level=log_level, handlers=[log_handler], force=True)

    logging.root.setLevel(log_level)
    logging.getLogger("customresource").setLevel(log_level)
    for logger, level in default_log_levels.items():
        logging.getLogger(logger).setLevel(level)
