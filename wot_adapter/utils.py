import sys
import logging
import traceback
import typing


def get_default_logger(name : str, log_level : int = logging.INFO, log_file = None,
                format : str = '%(levelname)-8s - %(asctime)s:%(msecs)03d - %(name)s - %(message)s' ) -> logging.Logger:
    """
    the default logger used by the package, when arguments are not modified.
    StreamHandler is always created, pass log_file for a FileHandler as well.
    A logger which already has handlers is only updated with the log level.

    Parameters
    ----------
    name: str 
        name of logger
    log_level: int 
        log level
    log_file: str
        valid path to file
    format: str
        log format

    Returns
    -------
    logging.Logger:
        created logger
    """
    logger = logging.getLogger(name) 
    logger.setLevel(log_level)
    if logger.handlers:
        return logger
    default_handler = logging.StreamHandler(sys.stdout)
    default_handler.setFormatter(logging.Formatter(format, datefmt='%Y-%m-%dT%H:%M:%S'))
    logger.addHandler(default_handler)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(format, datefmt='%Y-%m-%dT%H:%M:%S'))
        logger.addHandler(file_handler)
    return logger


def format_exception_as_json(exc : BaseException) -> typing.Dict[str, typing.Any]: 
    """
    return exception as a JSON serializable dictionary
    """
    return {
        "message" : str(exc),
        "type" : type(exc).__name__,
        "traceback" : "".join(traceback.format_exception(exc)).splitlines(),
        "notes" : exc.__notes__ if hasattr(exc, "__notes__") else None 
    }


__all__ = [
    get_default_logger.__name__,
    format_exception_as_json.__name__
]
