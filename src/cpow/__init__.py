"""cpow - complex powers over interchangeable numeric backends."""

import logging

from rich.logging import RichHandler

DEFAULT_FORMAT = "%(message)s"
DEFAULT_LOGGER_NAME = "cpow"


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: int = logging.INFO,
    format_string: str = DEFAULT_FORMAT,
    force_reconfigure: bool = False,
) -> None:
    """
    Configure a cpow logger with a Rich console handler.

    Loggers that already carry a handler are left alone unless
    force_reconfigure is set, so repeated calls never stack handlers.

    Args:
        name: Logger name. Defaults to "cpow". Child loggers such as
            "cpow.evaluator" inherit nothing from this call unless configured.
        level: Logging level as an integer (logging.INFO, logging.DEBUG, etc.).
        format_string: Format string for log messages. Rich renders the time
            and level columns itself, so the default only carries the message.
        force_reconfigure: If True, drop existing handlers and configure again.

    Example:
        >>> setup_logger(level=logging.DEBUG)
        >>> logging.getLogger("cpow").debug("Selected backend: native")
    """
    logger = logging.getLogger(name)

    if not logger.handlers or force_reconfigure:
        if force_reconfigure and logger.handlers:
            logger.handlers.clear()

        handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter(format_string))
        logger.addHandler(handler)

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

    # Always set the level (even if logger already has handlers)
    logger.setLevel(level)


def get_logger(name: str = DEFAULT_LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """Return a logger configured through setup_logger()."""
    setup_logger(name, level=level)
    return logging.getLogger(name)


from cpow.common import (  # noqa: E402
    BackendMismatchError,
    ComplexOperand,
    CpowError,
    DomainError,
    EvaluationFailure,
    NotConstantError,
    PolarForm,
    PrecisionMode,
)
from cpow.config import Settings, get_settings, load_settings, set_settings, use_settings  # noqa: E402
from cpow.evaluator import ComplexPowerEvaluator, complex_power, power  # noqa: E402

__all__ = [
    "DEFAULT_LOGGER_NAME",
    "BackendMismatchError",
    "ComplexOperand",
    "ComplexPowerEvaluator",
    "CpowError",
    "DomainError",
    "EvaluationFailure",
    "NotConstantError",
    "PolarForm",
    "PrecisionMode",
    "Settings",
    "complex_power",
    "get_logger",
    "get_settings",
    "load_settings",
    "power",
    "set_settings",
    "setup_logger",
    "use_settings",
]
