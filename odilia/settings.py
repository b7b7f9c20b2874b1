"""Read-only view of the screen reader's configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional


def _require(data: Any, key: str, section: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"{section} must be a mapping, got {data!r}")
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{section}: missing field {key!r}") from None


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def _i8(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not -128 <= value <= 127:
        raise ValueError(f"{name} must be between -128 and 127, got {value}")
    return value


class PunctuationSpellingMode(Enum):
    """How much punctuation is spoken."""

    SOME = "Some"
    MOST = "Most"
    NONE = "None"
    ALL = "All"


@dataclass
class SpeechSettings:
    """Speech related configuration."""

    rate: int = 50
    pitch: int = 0
    volume: int = 100
    module: str = "espeak-ng"
    language: str = "en-US"
    person: str = "English (America)+Max"
    punctuation: PunctuationSpellingMode = PunctuationSpellingMode.SOME

    def __post_init__(self) -> None:
        for name in ("rate", "pitch", "volume"):
            _i8(getattr(self, name), name)
        for name in ("module", "language", "person"):
            _str(getattr(self, name), name)
        if not isinstance(self.punctuation, PunctuationSpellingMode):
            raise ValueError(f"invalid punctuation mode: {self.punctuation!r}")

    def _to_dict(self) -> dict[str, Any]:
        return {
            "rate": self.rate,
            "pitch": self.pitch,
            "volume": self.volume,
            "module": self.module,
            "language": self.language,
            "person": self.person,
            "punctuation": self.punctuation.value,
        }

    @classmethod
    def _from_dict(cls, data: Any) -> SpeechSettings:
        values = {
            key: _require(data, key, "speech")
            for key in ("rate", "pitch", "volume", "module", "language", "person")
        }
        punctuation = _require(data, "punctuation", "speech")
        try:
            mode = PunctuationSpellingMode(punctuation)
        except ValueError:
            raise ValueError(f"invalid punctuation mode: {punctuation!r}") from None
        return cls(punctuation=mode, **values)


def default_log_path() -> Path:
    """Return the default log file path in the state directory, creating its folder."""
    state_home = os.environ.get("XDG_STATE_HOME", "")
    base = Path(state_home) if state_home and os.path.isabs(state_home) else (
        Path.home() / ".local" / "state"
    )
    directory = base / "odilia"
    directory.mkdir(parents=True, exist_ok=True)
    return directory / "odilia.log"


class LogTarget(Enum):
    """Where log messages go."""

    File = "File"
    Tty = "Tty"
    Syslog = "Syslog"


@dataclass(frozen=True)
class LoggingKind:
    """A log destination; a file destination carries its path."""

    target: LogTarget
    path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.target is LogTarget.File:
            if self.path is None:
                raise ValueError("a file logger needs a path")
            object.__setattr__(self, "path", Path(self.path))
        elif self.path is not None:
            raise ValueError(f"{self.target.name} logger takes no path")

    @classmethod
    def file(cls, path: os.PathLike[str] | str) -> LoggingKind:
        return cls(LogTarget.File, Path(path))

    @classmethod
    def tty(cls) -> LoggingKind:
        return cls(LogTarget.Tty)

    @classmethod
    def syslog(cls) -> LoggingKind:
        return cls(LogTarget.Syslog)

    def _to_value(self) -> Any:
        if self.target is LogTarget.File:
            return {"File": str(self.path)}
        return self.target.value

    @classmethod
    def _from_value(cls, value: Any) -> LoggingKind:
        if value == "Tty":
            return cls.tty()
        if value == "Syslog":
            return cls.syslog()
        if isinstance(value, Mapping) and set(value) == {"File"}:
            return cls.file(_str(value["File"], "log file path"))
        raise ValueError(f"invalid logger: {value!r}")


@dataclass
class LogSettings:
    """Logging related configuration."""

    level: str = "info"
    logger: LoggingKind = field(default_factory=lambda: LoggingKind.file(default_log_path()))

    def _to_dict(self) -> dict[str, Any]:
        return {"level": self.level, "logger": self.logger._to_value()}

    @classmethod
    def _from_dict(cls, data: Any) -> LogSettings:
        level = _str(_require(data, "level", "log"), "level")
        logger = LoggingKind._from_value(_require(data, "logger", "log"))
        return cls(level=level, logger=logger)


@dataclass(frozen=True)
class InputMethod:
    """The input method: the keyboard, or a custom program when ``command`` is set."""

    command: Optional[str] = None

    @property
    def is_keyboard(self) -> bool:
        return self.command is None

    def _to_value(self) -> Any:
        return "Keyboard" if self.command is None else {"Custom": self.command}

    @classmethod
    def _from_value(cls, value: Any) -> InputMethod:
        if value == "Keyboard":
            return cls()
        if isinstance(value, Mapping) and set(value) == {"Custom"}:
            return cls(_str(value["Custom"], "custom input method"))
        raise ValueError(f"invalid input method: {value!r}")


@dataclass
class InputSettings:
    """Input related configuration."""

    method: InputMethod = field(default_factory=InputMethod)


@dataclass
class ApplicationConfig:
    """The whole configuration, one section per subsystem."""

    speech: SpeechSettings = field(default_factory=SpeechSettings)
    log: LogSettings = field(default_factory=LogSettings)
    input: InputSettings = field(default_factory=InputSettings)

    def to_dict(self) -> dict[str, Any]:
        """Return the serializable form."""
        return {
            "speech": self.speech._to_dict(),
            "log": self.log._to_dict(),
            "input": {"method": self.input.method._to_value()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApplicationConfig:
        """Build from the serializable form; every section must be present."""
        speech = SpeechSettings._from_dict(_require(data, "speech", "config"))
        log = LogSettings._from_dict(_require(data, "log", "config"))
        method = InputMethod._from_value(
            _require(_require(data, "input", "config"), "method", "input")
        )
        return cls(speech=speech, log=log, input=InputSettings(method=method))