"""INI configuration with forgiving lookups for missing sections and keys."""

from __future__ import annotations

import configparser
import functools
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

_log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.ini"


@dataclass(frozen=True)
class Section:
    """Key/value pairs of one INI section; unknown keys read as ""."""

    values: Mapping[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.values.get(key, "")

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class Config:
    """All sections of a configuration; unknown sections read as empty."""

    sections: Mapping[str, Section] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Section:
        return self.sections.get(name, Section())

    def __contains__(self, name: object) -> bool:
        return name in self.sections

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    @classmethod
    def parse(cls, text: str) -> Config:
        """Parse INI text. Keys are case-sensitive and values are taken literally."""
        parser = configparser.ConfigParser(
            interpolation=None,
            delimiters=("=",),
            default_section="",
            strict=True,
        )
        parser.optionxform = str  # keep keys case-sensitive
        try:
            parser.read_string(text)
        except configparser.Error as exc:
            raise ValueError(f"invalid configuration: {exc}") from exc
        sections = {
            name: Section(dict(sorted(parser.items(name, raw=True))))
            for name in sorted(parser.sections())
        }
        return cls(sections)

    @classmethod
    def load(cls, path: str | Path) -> Config:
        """Read and parse the INI file at ``path``."""
        path = Path(path)
        _log.info("config path: %s", path)
        config = cls.parse(path.read_text(encoding="utf-8"))
        for name, section in config.sections.items():
            _log.debug("[%s]", name)
            for key, value in section.values.items():
                _log.debug("%s=%s", key, value)
        return config


@functools.lru_cache(maxsize=None)
def default_config() -> Config:
    """The process-wide configuration, read once from config.ini in the working directory."""
    return Config.load(Path.cwd() / CONFIG_FILE_NAME)