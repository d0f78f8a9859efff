"""telelog wiring for the mask engine.

Every public edit runs inside ``span("mask::<operation>")``. Notable outcomes
go through ``record_event``: ``mask.rejected`` for refused input,
``mask.paste_rollback`` when a paste is undone, and
``mask.configuration_error`` before a construction error propagates. The
telelog configuration is derived from ``MASK_ENGINE_*`` environment variables
the first time a logger is requested.
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "MASK_ENGINE_"
ROOT_LOGGER = "mask_engine"

_CONFIG: Optional[Any] = None
_LOGGERS: Dict[str, Any] = {}


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def build_config() -> Any:
    """Build a ``telelog.Config`` from the ``MASK_ENGINE_*`` environment.

    ``LOG_LEVEL`` (default ``INFO``), ``DISABLE_CONSOLE``, ``NO_COLOR``,
    ``LOG_JSON``, ``LOG_FILE`` and ``PROFILE`` (default on) are honoured.
    """

    config = tl.Config()
    config.with_min_level((_env("LOG_LEVEL") or "INFO").upper())
    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))
    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = _env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    config.with_profiling(_env_flag("PROFILE", True))
    return config


def configure(config: Optional[Any] = None) -> None:
    """Install ``config`` (or a fresh environment-derived one) for new loggers."""

    global _CONFIG
    _CONFIG = config if config is not None else build_config()
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _CONFIG
    key = name or ROOT_LOGGER
    if key not in _LOGGERS:
        if _CONFIG is None:
            _CONFIG = build_config()
        _LOGGERS[key] = tl.Logger.with_config(key, _CONFIG)
    return _LOGGERS[key]


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value) if isinstance(value, (dict, list, tuple, set)) else str(value)


def _log(logger: Any, level: str, message: str, payload: Mapping[str, Any]) -> None:
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(str(key), _render(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(payload)}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Mapping[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    payload = {"event": name, **(data or {})}
    _log(get_logger(logger_name), level.lower(), f"event::{name}", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
) -> Iterator[None]:
    """Profile the block as ``name``, tracked under ``component`` when given.

    ``metadata`` is attached as logger context while the block runs. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    context = {key: _render(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)
    try:
        with ExitStack() as stack:
            if component:
                stack.enter_context(log.track_component(component))
            stack.enter_context(log.profile(name))
            yield
    except Exception as exc:
        failure = {"span": name, **context, "reason": str(exc)}
        if component:
            failure["component"] = component
        _log(log, "error", "span::fail", failure)
        raise
    finally:
        for key in context:
            log.remove_context(key)


__all__ = [
    "ENV_PREFIX",
    "ROOT_LOGGER",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
