from contextlib import contextmanager
from types import SimpleNamespace

import pytest

from mask_engine import InputMask
from mask_engine.engine.mask import LOGGER_NAME
from mask_engine.formatting import MaskConfigurationError
from mask_engine.runtime import telemetry

ENV_NAMES = ("LOG_LEVEL", "DISABLE_CONSOLE", "NO_COLOR", "LOG_JSON", "LOG_FILE", "PROFILE")


class FakeConfig:
    def __init__(self) -> None:
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("with_"):
            raise AttributeError(name)

        def _record(*args):
            self.calls.append((name, args))
            return self

        return _record


class FakeLogger:
    def __init__(self, name, config) -> None:
        self.name = name
        self.config = config
        self.records = []
        self.context = {}
        self.profiled = []
        self.components = []

    def debug_with(self, message, pairs) -> None:
        self.records.append(("debug", message, dict(pairs)))

    def info_with(self, message, pairs) -> None:
        self.records.append(("info", message, dict(pairs)))

    def error_with(self, message, pairs) -> None:
        self.records.append(("error", message, dict(pairs)))

    def add_context(self, key, value) -> None:
        self.context[key] = value

    def remove_context(self, key) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name):
        self.profiled.append(name)
        yield

    @contextmanager
    def track_component(self, name):
        self.components.append(name)
        yield

    def find(self, message):
        return [record for record in self.records if record[1] == message]


@pytest.fixture
def loggers(monkeypatch):
    created = {}

    def with_config(name, config):
        created[name] = FakeLogger(name, config)
        return created[name]

    for name in ENV_NAMES:
        monkeypatch.delenv(f"{telemetry.ENV_PREFIX}{name}", raising=False)
    monkeypatch.setattr(
        telemetry,
        "tl",
        SimpleNamespace(Config=FakeConfig, Logger=SimpleNamespace(with_config=with_config)),
    )
    monkeypatch.setattr(telemetry, "_CONFIG", None)
    monkeypatch.setattr(telemetry, "_LOGGERS", {})
    return created


def test_default_config(loggers) -> None:
    config = telemetry.build_config()

    assert ("with_min_level", ("INFO",)) in config.calls
    assert ("with_console_output", (True,)) in config.calls
    assert ("with_colored_output", (True,)) in config.calls
    assert ("with_profiling", (True,)) in config.calls
    assert not any(name == "with_json_format" for name, _ in config.calls)


def test_config_from_environment(loggers, monkeypatch, tmp_path) -> None:
    log_file = str(tmp_path / "mask.log")
    monkeypatch.setenv("MASK_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("MASK_ENGINE_NO_COLOR", "1")
    monkeypatch.setenv("MASK_ENGINE_LOG_JSON", "true")
    monkeypatch.setenv("MASK_ENGINE_LOG_FILE", log_file)
    monkeypatch.setenv("MASK_ENGINE_PROFILE", "0")

    config = telemetry.build_config()

    assert ("with_min_level", ("DEBUG",)) in config.calls
    assert ("with_colored_output", (False,)) in config.calls
    assert ("with_json_format", (True,)) in config.calls
    assert ("with_file_output", (log_file,)) in config.calls
    assert ("with_profiling", (False,)) in config.calls


def test_configured_config_is_used_by_new_loggers(loggers) -> None:
    config = FakeConfig()
    telemetry.configure(config)

    logger = telemetry.get_logger("mask_engine.custom")

    assert logger.config is config
    assert telemetry.get_logger("mask_engine.custom") is logger
    assert telemetry.get_logger().name == telemetry.ROOT_LOGGER


def test_rejected_input_is_recorded(loggers) -> None:
    mask = InputMask(pattern="11-11")

    assert mask.input("x") is False

    engine = loggers[LOGGER_NAME]
    [(level, _, payload)] = engine.find("event::mask.rejected")
    assert level == "debug"
    assert payload["operation"] == "input"
    assert payload["char"] == "x"
    assert engine.profiled == ["mask::input"]
    assert engine.components == ["mask"]


def test_paste_rollback_is_recorded(loggers) -> None:
    mask = InputMask(pattern="11-11")

    assert mask.paste("1x") is False

    engine = loggers[LOGGER_NAME]
    [(level, _, payload)] = engine.find("event::mask.paste_rollback")
    assert level == "debug"
    assert payload["reason"] == "invalid_character"
    assert payload["text"] == "x"
    assert engine.context == {}


def test_failing_span_logs_and_reraises(loggers) -> None:
    mask = InputMask(pattern="11-11")

    with pytest.raises(MaskConfigurationError):
        mask.set_pattern("11\\")

    engine = loggers[LOGGER_NAME]
    [(level, _, payload)] = engine.find("span::fail")
    assert level == "error"
    assert payload["span"] == "mask::set_pattern"
    assert payload["component"] == "mask"
    assert payload["pattern"] == "11\\"
    assert "ends with a raw" in payload["reason"]
    assert engine.context == {}
    assert mask.pattern.source == "11-11"


def test_configuration_error_is_recorded(loggers) -> None:
    with pytest.raises(MaskConfigurationError):
        InputMask(pattern="---")

    [(level, _, payload)] = loggers[LOGGER_NAME].find("event::mask.configuration_error")
    assert level == "error"
    assert payload["source"] == "---"
