import logging
import os
import inspect
from functools import wraps
from typing import Any, Callable, List, NamedTuple, TypeVar, cast, Optional


F = TypeVar("F", bound=Callable[..., Any])

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
LOGGER_NAME = "OverlayTimer"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogSettings(NamedTuple):
    enabled: bool
    directory: str
    filename: str
    level: str
    console: bool


_LOGGER: Optional[logging.Logger] = None
_ACTIVE_SETTINGS: Optional[LogSettings] = None


def read_settings() -> LogSettings:
    # Imported here because config_helper logs its own import.
    from modules.helpers.config_helper import ConfigHelper

    return LogSettings(
        enabled=ConfigHelper.getboolean("Logging", "enabled", fallback=False),
        directory=ConfigHelper.get("Logging", "directory", fallback="logs") or "logs",
        filename=ConfigHelper.get("Logging", "filename", fallback="overlay_timer.log") or "overlay_timer.log",
        level=ConfigHelper.get("Logging", "level", fallback="INFO") or "INFO",
        console=ConfigHelper.getboolean("Logging", "console", fallback=False),
    )


def resolve_log_path(settings: LogSettings) -> str:
    if os.path.isabs(settings.filename):
        return settings.filename
    directory = settings.directory
    if not os.path.isabs(directory):
        directory = os.path.join(PROJECT_ROOT, directory)
    return os.path.join(directory, settings.filename)


def _build_handlers(settings: LogSettings) -> List[logging.Handler]:
    if not settings.enabled:
        return [logging.NullHandler()]

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    log_path = resolve_log_path(settings)
    os.makedirs(os.path.dirname(log_path), exist_ok=True)
    handlers: List[logging.Handler] = [logging.FileHandler(log_path, encoding="utf-8")]
    if settings.console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def ensure_logger() -> tuple[logging.Logger, bool]:
    """Return the overlay logger, rebuilding its handlers when the config changed."""
    global _LOGGER, _ACTIVE_SETTINGS

    settings = read_settings()
    if _LOGGER is None:
        _LOGGER = logging.getLogger(LOGGER_NAME)
        _LOGGER.propagate = False

    if settings != _ACTIVE_SETTINGS:
        _ACTIVE_SETTINGS = settings
        for handler in list(_LOGGER.handlers):
            _LOGGER.removeHandler(handler)
            handler.close()
        for handler in _build_handlers(settings):
            _LOGGER.addHandler(handler)
        if settings.enabled:
            _LOGGER.setLevel(getattr(logging, settings.level.upper(), logging.INFO))
            _LOGGER.info("logging_helper.configure - Writing to %s", resolve_log_path(settings))
        else:
            _LOGGER.setLevel(logging.CRITICAL)

    return _LOGGER, settings.enabled


def _caller_name(depth: int) -> str:
    frame = inspect.currentframe()
    target = frame
    try:
        for _ in range(depth + 1):
            if target is None:
                return "unknown"
            target = target.f_back
        if target is None:
            return "unknown"
        module = target.f_globals.get("__name__", "")
        name = target.f_code.co_name
        return f"{module}.{name}" if module else name
    finally:
        del frame
        del target


def _log(level: int, message: str, func_name: Optional[str]) -> None:
    logger, enabled = ensure_logger()
    if not enabled:
        return
    # _log -> public helper -> caller
    logger.log(level, "%s - %s", func_name or _caller_name(2), message)


def log_debug(message: str, *, func_name: Optional[str] = None) -> None:
    _log(logging.DEBUG, message, func_name)


def log_info(message: str, *, func_name: Optional[str] = None) -> None:
    _log(logging.INFO, message, func_name)


def log_warning(message: str, *, func_name: Optional[str] = None) -> None:
    _log(logging.WARNING, message, func_name)


def log_exception(message: str, *, func_name: Optional[str] = None) -> None:
    logger, enabled = ensure_logger()
    if not enabled:
        return
    logger.exception("%s - %s", func_name or _caller_name(1), message)


def log_module_import(module_name: str) -> None:
    _log(logging.DEBUG, "module imported", module_name)


def log_function(func: F) -> F:
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger, enabled = ensure_logger()
        if not enabled:
            return func(*args, **kwargs)

        func_name = func.__qualname__
        logger.debug("%s - started", func_name)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            logger.exception("%s - failed: %s", func_name, exc)
            raise
        logger.debug("%s - completed", func_name)
        return result

    return cast(F, wrapper)


def initialize_logging() -> bool:
    logger, enabled = ensure_logger()
    if enabled:
        logger.info("logging_helper.initialize - Logging ready")
    return enabled


__all__ = [
    "ensure_logger",
    "initialize_logging",
    "log_debug",
    "log_exception",
    "log_function",
    "log_info",
    "log_module_import",
    "log_warning",
]
