from __future__ import annotations

import pytest

from envelope import (
    FilePayload,
    StringPayload,
    decode_file,
    decode_string,
    encode_file,
    encode_string,
    escape_name,
    frame,
    parse_payload,
    strip_framing,
    unescape_name,
    unwrap,
    wrap_as_file,
    wrap_as_string,
)
from errors import EmptyField, InvalidSymbol, MalformedEnvelope, UnrecognizedTag
from framing import Framing
from nucleotides import BaseTable, encode_bytes_to_nucleotides, keyed_table, padding_length

HEAD = "ATGCATGC"
TAIL = "TTAATTAA" + "GGCCGGCC"


def string_padding(message: bytes) -> bytes:
    return b" " * padding_length(len(b"STRING:") + len(message))


@pytest.mark.parametrize("message", [b"", b"A", b"hi", b"hello world", "héllo ✓".encode("utf-8"), bytes(range(256))])
def test_string_round_trip(message):
    seq = encode_string(message)
    assert seq.startswith(HEAD) and seq.endswith(TAIL)
    assert decode_string(seq) == message + string_padding(message)


def test_golden_string_envelope():
    assert encode_string(b"A") == HEAD + "CCATCCCACCAGCAGCCATGCACTATGGCAACAGAA" + TAIL


@pytest.mark.parametrize(
    "name,content",
    [("report.txt", b"hello"), ("data.bin", bytes(range(256))), ("é.txt", b"x"), ("a:b.txt", b"xyz"), ("100%.txt", b"abc")],
)
def test_file_round_trip(name, content):
    header_len = len(b"FILE:" + escape_name(name).encode("utf-8") + b":")
    got_name, got_content = decode_file(encode_file(name, content))
    assert got_name == name
    assert got_content == content + b" " * padding_length(header_len + len(content))


def test_plain_names_keep_original_layout():
    seq = wrap_as_file("report.txt", b"hello")
    assert seq == frame(encode_bytes_to_nucleotides(b"FILE:report.txt:hello"))


def test_escape_name():
    assert escape_name("a:b%c") == "a%3Ab%25c"
    assert unescape_name("a%3Ab%25c") == "a:b%c"
    assert unescape_name("a%3ab") == "a:b"
    assert unescape_name("100%20") == "100%20"


def test_tag_dispatch_file():
    assert parse_payload(b"FILE:report.txt:hello") == FilePayload("report.txt", b"hello")


def test_tag_dispatch_string():
    assert parse_payload(b"STRING:hi:there") == StringPayload(b"hi:there")


def test_file_content_may_contain_colons():
    assert parse_payload(b"FILE:a.txt:k:v") == FilePayload("a.txt", b"k:v")


def test_unrecognized_tag():
    with pytest.raises(UnrecognizedTag):
        parse_payload(b"BLOB:abc")
    with pytest.raises(UnrecognizedTag):
        unwrap(HEAD + TAIL)


@pytest.mark.parametrize("raw", [b"FILE::hello", b"FILE:name.txt:"])
def test_empty_fields(raw):
    with pytest.raises(EmptyField):
        parse_payload(raw)


def test_file_without_name_delimiter():
    with pytest.raises(MalformedEnvelope):
        parse_payload(b"FILE:noname")


@pytest.mark.parametrize(
    "seq",
    [
        "",
        HEAD,
        "TTGCATGC" + "CAAC" + TAIL,
        HEAD + "CAAC" + "TTAATTAC" + "GGCCGGCC",
        HEAD + "CAAC" + "TTAATTAA" + "GGCCGGCA",
        HEAD + TAIL[:-1],
    ],
)
def test_malformed_envelope(seq):
    with pytest.raises(MalformedEnvelope):
        unwrap(seq)


def test_invalid_symbol_in_body():
    with pytest.raises(InvalidSymbol) as exc:
        unwrap(HEAD + "CAXC" + TAIL)
    assert exc.value.symbol == "X"
    assert exc.value.position == len(HEAD) + 2


@pytest.mark.parametrize("prefix,suffix", [(" \t", ""), ("", "\n"), ("\n", " ")])
def test_surrounding_whitespace_is_malformed(prefix, suffix):
    seq = prefix + encode_string(b"abc") + suffix
    with pytest.raises(MalformedEnvelope):
        strip_framing(seq)
    with pytest.raises(MalformedEnvelope):
        unwrap(seq)


@pytest.mark.parametrize("name,content", [("abc", b""), ("", b"hello")])
def test_encode_file_rejects_empty_fields(name, content):
    with pytest.raises(EmptyField):
        encode_file(name, content)
    with pytest.raises(EmptyField):
        wrap_as_file(name, content)


def test_decode_string_rejects_file_payload():
    with pytest.raises(UnrecognizedTag):
        decode_string(encode_file("a.txt", b"x"))


def test_decode_file_rejects_string_payload():
    with pytest.raises(UnrecognizedTag):
        decode_file(encode_string(b"x"))


def test_custom_framing_is_injected():
    framing = Framing(promoter="AAAA", terminator="CCCC", marker="GGGG")
    seq = wrap_as_string(b"hey", framing)
    assert seq.startswith("AAAA") and seq.endswith("CCCCGGGG")
    assert unwrap(seq, framing) == StringPayload(b"hey" + string_padding(b"hey"))
    with pytest.raises(MalformedEnvelope):
        unwrap(seq)


def test_keyed_table_round_trip():
    table = keyed_table("pw")
    seq = encode_string(b"secret", table=table)
    assert decode_string(seq, table=table) == b"secret" + string_padding(b"secret")


def test_permuted_table_changes_body_only():
    table = BaseTable(("T", "G", "C", "A"))
    seq = encode_string(b"secret", table=table)
    assert seq != encode_string(b"secret")
    assert seq.startswith(HEAD) and seq.endswith(TAIL)
    with pytest.raises(UnrecognizedTag):
        decode_string(seq)
