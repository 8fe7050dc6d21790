# framing.py
# Envelope framing constants (promoter / terminator / marker) and loading them from JSON

from dataclasses import dataclass, fields, replace
import json
import os

from errors import ConfigError

VERSION = "1.1"
PROMOTER = "ATGCATGC"
TERMINATOR = "TTAATTAA"
MARKER = "GGCCGGCC"

FRAMING_ENV = "DNA_CODEC_FRAMING"
_VALID_BASES = set("ACGT")


@dataclass(frozen=True)
class Framing:
    promoter: str = PROMOTER
    terminator: str = TERMINATOR
    marker: str = MARKER
    version: str = VERSION

    @property
    def suffix(self) -> str:
        return self.terminator + self.marker

    def validate(self) -> "Framing":
        for name in ("promoter", "terminator", "marker"):
            value = getattr(self, name)
            if not value:
                raise ConfigError(f"{name} must not be empty")
            if set(value) - _VALID_BASES:
                raise ConfigError(f"{name} must only contain A/C/G/T, got {value!r}")
        return self


DEFAULT_FRAMING = Framing()


def load_framing(path) -> Framing:
    """
    Read a JSON object with any of promoter, terminator, marker, version.
    Missing keys keep their defaults.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid framing file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Framing file {path} must contain a JSON object")

    known = {f.name for f in fields(Framing)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown framing keys: {', '.join(sorted(unknown))}")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ConfigError(f"{key} must be a string")
    return replace(DEFAULT_FRAMING, **data).validate()


def framing_from_env(environ=None) -> Framing:
    environ = os.environ if environ is None else environ
    path = environ.get(FRAMING_ENV)
    if not path:
        return DEFAULT_FRAMING
    return load_framing(path)
