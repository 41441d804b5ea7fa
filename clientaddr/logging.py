"""
Logging for clientaddr.

Nothing is printed unless the application asks for it: the "clientaddr"
logger carries only a NullHandler and does not propagate. Forwarding
headers that fail to parse are routine on the public internet, so they
are reported through log_error(), at DEBUG level or to a custom error
handler, and never raised to the caller.

Examples:
    import logging
    from clientaddr import configure_logging
    configure_logging(logging.DEBUG)

    # Send rejected headers somewhere else, e.g. structlog
    import structlog
    from clientaddr import set_error_handler

    def report_rejected(name, exc, ctx):
        structlog.get_logger().info("header_rejected", module=name, error=str(exc), **ctx)

    set_error_handler(report_rejected)
"""

import logging
from typing import Any, Callable, Optional

ErrorHandler = Callable[[str, Exception, dict], None]

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_package_logger = logging.getLogger('clientaddr')
_package_logger.addHandler(logging.NullHandler())
_package_logger.propagate = False

_error_handler: Optional[ErrorHandler] = None


def get_logger(name: str) -> logging.Logger:
    """Logger for a clientaddr module (pass __name__)"""
    return logging.getLogger(name)


def set_error_handler(handler: Optional[ErrorHandler]) -> None:
    """
    Route rejected forwarding headers to a callable.

    The handler is called as handler(module_name, exception, context),
    where context holds the header name and the rejection reason. This
    is the place to count or alert on spoofing attempts. Pass None to go
    back to DEBUG logging.
    """
    global _error_handler
    _error_handler = handler


def configure_logging(
    level: int = logging.INFO,
    handler: Optional[logging.Handler] = None,
    format_string: Optional[str] = None
) -> None:
    """
    Send clientaddr log records to a handler.

    Args:
        level: Minimum level to emit
        handler: Destination, a StreamHandler on stderr by default
        format_string: Record format, DEFAULT_FORMAT by default
    """
    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    _package_logger.handlers.clear()
    _package_logger.addHandler(handler)
    _package_logger.setLevel(level)


def disable_logging() -> None:
    """Drop configured handlers and the error handler, back to silence"""
    global _error_handler
    _error_handler = None
    _package_logger.handlers.clear()
    _package_logger.addHandler(logging.NullHandler())


def log_error(logger_name: str, exception: Exception, **context: Any) -> None:
    """
    Report an error that was recovered from while handling a request.

    Args:
        logger_name: Module reporting the error
        exception: The recovered exception
        **context: Details passed on to the error handler, e.g. header and reason

    Example:
        log_error(__name__, error, header='forwarded', reason='INVALID_ADDRESS')
    """
    description = f"{exception.__class__.__name__}: {exception}"

    if _error_handler is None:
        _package_logger.debug(f"[{logger_name}] {description} {context}")
        return

    try:
        _error_handler(logger_name, exception, context)
    except Exception:
        # The request still resolves when the handler is broken
        _package_logger.debug(f"[{logger_name}] error handler failed while reporting {description}")


def is_logging_enabled() -> bool:
    """True once a real handler or an error handler has been configured"""
    return _error_handler is not None or any(
        not isinstance(h, logging.NullHandler) for h in _package_logger.handlers
    )
