#!/usr/bin/env python3
# dna_codec.py
# Command line: strings and files ⇄ framed DNA sequences
#   -e MESSAGE     encode a string
#   -d SEQUENCE    decode a string
#   -i FILE        encode FILE to FILE.dna
#   -o FILE.dna    decode a .dna file back to its original name

from typing import Optional
import argparse
import logging
import os
import sys

from envelope import decode_file, decode_string, encode_file, encode_string
from errors import DnaCodecError, EmptyField
from framing import Framing, framing_from_env, load_framing
from nucleotides import DEFAULT_TABLE, BaseTable, keyed_table

logger = logging.getLogger("dna_codec")

DNA_SUFFIX = ".dna"


def do_string_encode(message: str, framing: Framing, table: BaseTable) -> str:
    encoded = encode_string(message.encode("utf-8"), framing, table)
    print(f"{framing.version} || Encoded: {encoded}")
    return encoded


def do_string_decode(seq: str, framing: Framing, table: BaseTable) -> str:
    decoded = decode_string(seq, framing, table).decode("utf-8", errors="replace")
    print(f"Decoded: {decoded}")
    return decoded


def do_file_encode(path: str, framing: Framing, table: BaseTable) -> str:
    with open(path, "rb") as f:
        content = f.read()
    encoded = encode_file(os.path.basename(path), content, framing, table)

    out_path = path + DNA_SUFFIX
    with open(out_path, "w", encoding="ascii") as f:
        f.write(encoded)
    logger.info("Wrote %d bases to %s", len(encoded), out_path)
    print(f"Encoded to file: {out_path}")
    return out_path


def do_file_decode(path: str, framing: Framing, table: BaseTable, output_dir: str = ".") -> str:
    if not path.endswith(DNA_SUFFIX):
        raise ValueError("Invalid file suffix, expecting .dna file.")

    # latin-1 keeps one char per byte so stray bytes surface as InvalidSymbol
    with open(path, "r", encoding="latin-1") as f:
        # .dna files may end with a newline
        seq = f.read().strip()
    name, content = decode_file(seq, framing, table)

    # never write outside output_dir, whatever path the sender stored
    base = os.path.basename(name.replace("\\", "/"))
    if not base or base in (".", ".."):
        raise EmptyField(f"Unusable filename in DNA content: {name!r}")
    out_path = os.path.join(output_dir, base)
    with open(out_path, "wb") as f:
        f.write(content)
    print(f"Decoded to file: {out_path}")
    return out_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Strings and files ⇄ framed DNA sequences")
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-e", dest="encode_string", metavar="MESSAGE", help="Encode a string")
    mode.add_argument("-d", dest="decode_string", metavar="SEQUENCE", help="Decode a DNA sequence to a string")
    mode.add_argument("-i", dest="encode_file", metavar="FILE", help="Encode FILE into FILE.dna")
    mode.add_argument("-o", dest="decode_file", metavar="FILE.dna", help="Decode a .dna file to its original file")
    parser.add_argument("--framing", help="JSON file overriding promoter/terminator/marker", default=None)
    parser.add_argument("--password", help="Password for a keyed base mapping", default=None)
    parser.add_argument("--output-dir", help="Where -o writes the decoded file", default=".")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        framing = load_framing(args.framing) if args.framing else framing_from_env()
        table = keyed_table(args.password) if args.password else DEFAULT_TABLE

        if args.encode_string is not None:
            do_string_encode(args.encode_string, framing, table)
        elif args.decode_string is not None:
            do_string_decode(args.decode_string, framing, table)
        elif args.encode_file is not None:
            do_file_encode(args.encode_file, framing, table)
        else:
            do_file_decode(args.decode_file, framing, table, args.output_dir)
    except DnaCodecError as e:
        print(f"Codec error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
