#!/usr/bin/env python3
# envelope.py
# Tagged payloads (STRING / FILE) framed as PROMOTER + body + TERMINATOR + MARKER

from dataclasses import dataclass
from typing import Tuple, Union
import logging
import re

from errors import EmptyField, InvalidSymbol, MalformedEnvelope, UnrecognizedTag
from framing import DEFAULT_FRAMING, Framing
from nucleotides import (
    DEFAULT_TABLE,
    BaseTable,
    decode_nucleotides_to_bytes,
    encode_bytes_to_nucleotides,
)

logger = logging.getLogger(__name__)

STRING_TAG = b"STRING:"
FILE_TAG = b"FILE:"
NAME_DELIM = b":"

_UNESCAPE_RE = re.compile(r"%(25|3A)", re.IGNORECASE)


@dataclass(frozen=True)
class StringPayload:
    content: bytes


@dataclass(frozen=True)
class FilePayload:
    name: str
    content: bytes


Payload = Union[StringPayload, FilePayload]


def escape_name(name: str) -> str:
    # ':' ends the name field, so it (and the escape char) can't appear raw
    return name.replace("%", "%25").replace(":", "%3A")


def unescape_name(name: str) -> str:
    return _UNESCAPE_RE.sub(lambda m: "%" if m.group(1) == "25" else ":", name)


# ----------------------------
# Framing
# ----------------------------
def frame(body: str, framing: Framing = DEFAULT_FRAMING) -> str:
    return framing.promoter + body + framing.terminator + framing.marker


def strip_framing(seq: str, framing: Framing = DEFAULT_FRAMING) -> str:
    """Validate and remove promoter / terminator / marker, returning the body."""
    head, tail = framing.promoter, framing.suffix
    if len(seq) < len(head) + len(tail):
        raise MalformedEnvelope(f"Sequence too short for framing ({len(seq)} bases)")
    if not seq.startswith(head):
        raise MalformedEnvelope(f"Missing promoter {head}")
    if not seq.endswith(tail):
        raise MalformedEnvelope(f"Missing terminator + marker {tail}")
    return seq[len(head):len(seq) - len(tail)]


# ----------------------------
# Tags
# ----------------------------
def tag_payload(payload: Payload) -> bytes:
    if isinstance(payload, StringPayload):
        return STRING_TAG + payload.content
    if isinstance(payload, FilePayload):
        header = FILE_TAG + escape_name(payload.name).encode("utf-8") + NAME_DELIM
        return header + payload.content
    raise TypeError(f"Unsupported payload type: {type(payload).__name__}")


def parse_payload(raw: bytes) -> Payload:
    """
    Tag dispatch on decoded bytes.
    FILE layout: FILE:<name>:<content>, the name ending at the first ':' after the tag.
    """
    if raw.startswith(STRING_TAG):
        return StringPayload(raw[len(STRING_TAG):])

    if raw.startswith(FILE_TAG):
        start = len(FILE_TAG)
        end = raw.find(NAME_DELIM, start)
        if end == -1:
            raise MalformedEnvelope("File payload has no filename delimiter")
        name_bytes, content = raw[start:end], raw[end + 1:]
        if not name_bytes:
            raise EmptyField("File payload has an empty filename")
        if not content:
            raise EmptyField("File payload has empty content")
        try:
            name = name_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedEnvelope(f"Filename is not valid UTF-8: {e}") from e
        return FilePayload(unescape_name(name), content)

    raise UnrecognizedTag(f"Unknown payload header: {raw[:8]!r}")


# ----------------------------
# Wrap / unwrap
# ----------------------------
def wrap(payload: Payload, framing: Framing = DEFAULT_FRAMING, table: BaseTable = DEFAULT_TABLE) -> str:
    body = encode_bytes_to_nucleotides(tag_payload(payload), table)
    return frame(body, framing)


def wrap_as_string(message: bytes, framing: Framing = DEFAULT_FRAMING, table: BaseTable = DEFAULT_TABLE) -> str:
    return wrap(StringPayload(bytes(message)), framing, table)


def wrap_as_file(name: str, content: bytes, framing: Framing = DEFAULT_FRAMING,
                 table: BaseTable = DEFAULT_TABLE) -> str:
    # decode rejects these, so never emit them
    if not name:
        raise EmptyField("File payload needs a filename")
    if not content:
        raise EmptyField("File payload needs non-empty content")
    return wrap(FilePayload(name, bytes(content)), framing, table)


def unwrap(seq: str, framing: Framing = DEFAULT_FRAMING, table: BaseTable = DEFAULT_TABLE) -> Payload:
    body = strip_framing(seq, framing)
    try:
        raw = decode_nucleotides_to_bytes(body, table)
    except InvalidSymbol as e:
        # report the position within the whole sequence, not the body
        raise InvalidSymbol(e.symbol, e.position + len(framing.promoter)) from None
    payload = parse_payload(raw)
    logger.debug("Unwrapped %s (%d body bases)", type(payload).__name__, len(body))
    return payload


# ----------------------------
# Caller-facing operations
# ----------------------------
def encode_string(message: bytes, framing: Framing = DEFAULT_FRAMING, table: BaseTable = DEFAULT_TABLE) -> str:
    return wrap_as_string(message, framing, table)


def decode_string(seq: str, framing: Framing = DEFAULT_FRAMING, table: BaseTable = DEFAULT_TABLE) -> bytes:
    payload = unwrap(seq, framing, table)
    if not isinstance(payload, StringPayload):
        raise UnrecognizedTag("Expected a STRING payload, found a FILE payload")
    return payload.content


def encode_file(name: str, content: bytes, framing: Framing = DEFAULT_FRAMING,
                table: BaseTable = DEFAULT_TABLE) -> str:
    return wrap_as_file(name, content, framing, table)


def decode_file(seq: str, framing: Framing = DEFAULT_FRAMING,
                table: BaseTable = DEFAULT_TABLE) -> Tuple[str, bytes]:
    payload = unwrap(seq, framing, table)
    if not isinstance(payload, FilePayload):
        raise UnrecognizedTag("Expected a FILE payload, found a STRING payload")
    return payload.name, payload.content
