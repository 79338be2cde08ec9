"""Command line front end for the SHA-256 implementation in `sha256.py`.

Usage:
    python sha256_cli.py "message"
    python sha256_cli.py -f path/to/file
    python sha256_cli.py --check data/vectors.yaml

Without flags, the argument is interpreted as a UTF-8 string and hashed.
With `-f`, the raw bytes of the named file are hashed. With `--check`, a
YAML file of known vectors is verified. String values must be quoted, or
YAML may read digits as numbers. Each entry looks like

    - message: "abc"          # UTF-8 text, or
      hex: "616263"           # raw bytes as hex
      repeat: 1               # optional, defaults to 1
      sha256: "ba7816bf..."   # expected lowercase hex digest
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Tuple

import yaml

from padding import DataTooLarge
from sha256 import sha256_hex


class VectorFileError(ValueError):
    """A known-vector file could not be read or is malformed."""


def load_vectors(path: str) -> List[Tuple[str, bytes, str]]:
    """Load known vectors from a YAML file.

    Returns a list of ``(label, message_bytes, expected_hex)`` tuples.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise VectorFileError(f"Error reading vector file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise VectorFileError(f"Invalid YAML in '{path}': {e}") from e

    if not isinstance(raw, list):
        raise VectorFileError(f"'{path}' must contain a list of vectors")

    vectors: List[Tuple[str, bytes, str]] = []
    for idx, entry in enumerate(raw):
        vectors.append(_parse_vector(idx, entry))
    return vectors


def _parse_vector(idx: int, entry: Dict) -> Tuple[str, bytes, str]:
    if not isinstance(entry, dict):
        raise VectorFileError(f"Vector {idx}: expected a mapping, got {type(entry).__name__}")

    expected = entry.get("sha256")
    if not isinstance(expected, str):
        raise VectorFileError(f"Vector {idx}: quote the 'sha256' value so YAML reads it as a string")
    if len(expected) != 64:
        raise VectorFileError(f"Vector {idx}: 'sha256' must be a 64-character hex string")

    if "message" in entry and "hex" in entry:
        raise VectorFileError(f"Vector {idx}: give either 'message' or 'hex', not both")
    if "message" in entry:
        # An empty `message:` loads as None.
        text = "" if entry["message"] is None else entry["message"]
        if not isinstance(text, str):
            raise VectorFileError(f"Vector {idx}: quote the 'message' value so YAML reads it as a string")
        chunk = text.encode("utf-8")
        label = repr(text) if len(text) <= 40 else repr(text[:37] + "...")
    elif "hex" in entry:
        # Unquoted digits load as int (0012 is octal in YAML 1.1).
        hex_str = entry["hex"]
        if not isinstance(hex_str, str):
            raise VectorFileError(f"Vector {idx}: quote the 'hex' value so YAML reads it as a string")
        try:
            chunk = bytes.fromhex(hex_str)
        except ValueError as e:
            raise VectorFileError(f"Vector {idx}: bad 'hex' value: {e}") from e
        label = f"hex:{hex_str[:16]}{'...' if len(hex_str) > 16 else ''}"
    else:
        raise VectorFileError(f"Vector {idx}: missing 'message' or 'hex'")

    repeat = entry.get("repeat", 1)
    if not isinstance(repeat, int) or repeat < 0:
        raise VectorFileError(f"Vector {idx}: 'repeat' must be a non-negative integer")
    if repeat != 1:
        label = f"{label} x {repeat}"

    return label, chunk * repeat, expected.lower()


def check_vectors(path: str) -> int:
    """Verify every vector in `path`, printing one line each. Returns exit status."""
    vectors = load_vectors(path)

    failed = 0
    for label, message, expected in vectors:
        got = sha256_hex(message)
        if got == expected:
            print(f"PASS {label}")
        else:
            failed += 1
            print(f"FAIL {label}")
            print(f"  expected: {expected}")
            print(f"  got:      {got}")

    print(f"{len(vectors) - failed} passed, {failed} failed")
    return 0 if failed == 0 else 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sha256-fips",
        description="Compute SHA-256 digests (FIPS 180-4) without hashlib",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "message",
        nargs="?",
        help="Text to hash (UTF-8 encoded)",
    )
    mode.add_argument(
        "-f",
        "--file",
        metavar="PATH",
        help="Hash the raw bytes of a file",
    )
    mode.add_argument(
        "--check",
        metavar="VECTORS",
        help="Verify a YAML file of known vectors",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = _build_parser().parse_args(argv)

    try:
        if args.check is not None:
            return check_vectors(args.check)

        if args.file is not None:
            try:
                with open(args.file, "rb") as f:
                    data = f.read()
            except OSError as e:
                sys.stderr.write(f"Error reading file '{args.file}': {e}\n")
                return 1
        else:
            data = args.message.encode("utf-8")

        print(sha256_hex(data))
        return 0
    except (DataTooLarge, VectorFileError) as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
