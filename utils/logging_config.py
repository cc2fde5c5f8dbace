import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Logs one DEBUG line per failed field; only useful when chasing a layout change
MAPPING_LOGGER = 'utils.document_mapper'


def _config_value(name, default):
    """Read *name* from the optional ``config`` module."""
    try:
        import config
    except ImportError:
        return default
    return getattr(config, name, default)


def _attach(root_logger, handler, level, formatter):
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def setup_logging(log_file=None, log_level=None, mapping_trace=None):
    """
    Setup logging for the client, the mappers and the REST layer

    Called once by the entry point (``python -m shinden``); library code
    only creates module loggers.

    Args:
        log_file: Log file path (falls back to LOG_FILE from config, no file if unset)
        log_level: Log level name (falls back to LOG_LEVEL from config, then INFO)
        mapping_trace: Keep the per-field mapping failure trace at DEBUG level
            (falls back to MAPPING_TRACE from config, then False)
    """
    if log_level is None:
        log_level = _config_value('LOG_LEVEL', 'INFO')
    if log_file is None:
        log_file = _config_value('LOG_FILE', None)
    if mapping_trace is None:
        mapping_trace = _config_value('MAPPING_TRACE', False)

    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    _attach(root_logger, logging.StreamHandler(), numeric_level, formatter)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        _attach(root_logger, logging.FileHandler(log_file, mode='a', encoding='utf-8'),
                numeric_level, formatter)

    logging.getLogger(MAPPING_LOGGER).setLevel(logging.NOTSET if mapping_trace else logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return root_logger


def get_logger(name):
    """
    Get a logger with the specified name

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
