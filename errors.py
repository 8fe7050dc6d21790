# errors.py
# Exception types raised by the DNA codec core


class DnaCodecError(ValueError):
    """Base class for every failure raised while encoding or decoding."""


class MalformedEnvelope(DnaCodecError):
    """Promoter, terminator or marker missing, or the payload layout is broken."""


class InvalidSymbol(DnaCodecError):
    """A character outside the base table was found in a nucleotide sequence."""

    def __init__(self, symbol: str, position: int):
        super().__init__(f"Invalid nucleotide {symbol!r} at position {position}")
        self.symbol = symbol
        self.position = position


class UnrecognizedTag(DnaCodecError):
    """Decoded bytes do not start with a known payload tag."""


class EmptyField(DnaCodecError):
    """A file payload decoded with an empty filename or empty content."""


class ConfigError(DnaCodecError):
    """Framing configuration could not be loaded or is invalid."""
