#!/usr/bin/env python3
# nucleotides.py
# Bytes ⇄ nucleotide stream (2 bits per base, MSB first)
# Mapping: 00→A, 01→C, 10→G, 11→T   (keyed permutations via keyed_table(password))

from typing import Iterable, Tuple
import hashlib
import logging

from errors import InvalidSymbol

logger = logging.getLogger(__name__)

BASES = ("A", "C", "G", "T")
TWO_BITS = ("00", "01", "10", "11")
PAD_BYTE = b" "


class BaseTable:
    """
    Bijective 2-bit ⇄ base table.
    Built from one ordered tuple of the four bases (index = 2-bit value);
    the reverse direction is derived from it so the two can't drift apart.
    """

    def __init__(self, bases: Iterable[str] = BASES):
        bases = tuple(bases)
        if sorted(bases) != sorted(BASES):
            raise ValueError(f"Base table must be a permutation of {BASES}, got {bases}")
        self.bases: Tuple[str, ...] = bases
        self._bits_to_base = dict(zip(TWO_BITS, bases))
        self._base_to_bits = {v: k for k, v in self._bits_to_base.items()}

    def base_of(self, bits2: str) -> str:
        if bits2 not in self._bits_to_base:
            raise ValueError(f"bits must be a 2-character bit string, got {bits2!r}")
        return self._bits_to_base[bits2]

    def bits_of(self, base: str, position: int = 0) -> str:
        try:
            return self._base_to_bits[base]
        except KeyError:
            raise InvalidSymbol(base, position) from None

    def __eq__(self, other):
        return isinstance(other, BaseTable) and self.bases == other.bases

    def __hash__(self):
        return hash(self.bases)

    def __repr__(self):
        return f"BaseTable({''.join(self.bases)})"


DEFAULT_TABLE = BaseTable()


def keyed_table(password: str) -> BaseTable:
    """Deterministic permutation of the bases derived from SHA-256(password)."""
    if not isinstance(password, str):
        raise TypeError("password must be a string")
    h = hashlib.sha256(password.encode("utf-8")).digest()
    bases_perm = list(BASES)
    for i in range(len(bases_perm) - 1, 0, -1):
        j = h[i] % (i + 1)
        bases_perm[i], bases_perm[j] = bases_perm[j], bases_perm[i]
    return BaseTable(bases_perm)


def nucleotide_of(bits2: str, table: BaseTable = DEFAULT_TABLE) -> str:
    return table.base_of(bits2)


def bits_of(symbol: str, table: BaseTable = DEFAULT_TABLE) -> str:
    return table.bits_of(symbol)


def padding_length(n: int) -> int:
    """Number of pad bytes pad_to_codons appends to an n-byte buffer."""
    pad = 0
    while (4 * (n + pad)) % 3 != 0:
        pad += 1
    return pad


def pad_to_codons(data: bytes) -> bytes:
    # Pad with spaces so the nucleotide count (4 per byte) is a multiple of 3
    return data + PAD_BYTE * padding_length(len(data))


def bytes_to_bitstring(b: bytes) -> str:
    return "".join(f"{byte:08b}" for byte in b)


def bitstring_to_bytes(bits: str) -> bytes:
    extra = len(bits) % 8
    if extra:
        # trailing partial byte can't be recovered; it is dropped
        logger.warning("Dropping %d trailing bits that do not form a whole byte", extra)
        bits = bits[:-extra]
    return bytes(int(bits[i:i+8], 2) for i in range(0, len(bits), 8))


def bits_to_nucleotides(bits: str, table: BaseTable = DEFAULT_TABLE) -> str:
    if len(bits) % 2 != 0:
        raise ValueError("Bitstring length not multiple of 2")
    return "".join(table.base_of(bits[i:i+2]) for i in range(0, len(bits), 2))


def nucleotides_to_bits(seq: str, table: BaseTable = DEFAULT_TABLE) -> str:
    return "".join(table.bits_of(base, pos) for pos, base in enumerate(seq))


def encode_bytes_to_nucleotides(data: bytes, table: BaseTable = DEFAULT_TABLE) -> str:
    """
    Pad `data` to codon alignment and pack it into bases.
    Output length is always 4 × len(padded data).
    """
    padded = pad_to_codons(bytes(data))
    seq = bits_to_nucleotides(bytes_to_bitstring(padded), table)
    logger.debug("Encoded %d bytes (%d after padding) into %d bases", len(data), len(padded), len(seq))
    return seq


def decode_nucleotides_to_bytes(seq: str, table: BaseTable = DEFAULT_TABLE) -> bytes:
    """
    Unpack bases back into bytes.
    Pad spaces added by encode_bytes_to_nucleotides are left in place.
    """
    data = bitstring_to_bytes(nucleotides_to_bits(seq, table))
    logger.debug("Decoded %d bases into %d bytes", len(seq), len(data))
    return data
