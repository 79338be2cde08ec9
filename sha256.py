"""SHA-256 digest computation (FIPS 180-4).

This module provides:

- `sha256_state(data) -> tuple[int, ...]`: the final 8-word hash state.
- `sha256(data) -> bytes`: the 32-byte digest.
- `sha256_hex(data) -> str`: the 64-character lowercase hex digest.
- `Sha256`: a small digest object wrapping the 8 state words.

The heavy lifting is split between `padding.pad_message` and
`compress.compress_block`; this module only chains them together.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from compress import MASK32, STATE_WORDS, compress_block
from padding import DataTooLarge, pad_message

__all__ = [
    "H_INITIAL",
    "DataTooLarge",
    "Sha256",
    "sha256",
    "sha256_hex",
    "sha256_state",
]


# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
H_INITIAL: Tuple[int, ...] = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

DIGEST_SIZE = 32


def sha256_state(data) -> Tuple[int, ...]:
    """Compute the final SHA-256 hash state of `data`.

    1. Pad the message into 16-word blocks.
    2. Starting from `H_INITIAL`, compress every block in order; each block
       depends on the state left by the one before it.
    3. Return the 8 state words.

    Raises `DataTooLarge` for inputs longer than ``padding.MAX_INPUT_BYTES``.
    """
    blocks = pad_message(data)

    state: List[int] = list(H_INITIAL)
    for block in blocks:
        compress_block(state, block)

    return tuple(state)


def _state_to_bytes(state: Iterable[int]) -> bytes:
    return b"".join(word.to_bytes(4, byteorder="big") for word in state)


def sha256(data) -> bytes:
    """Compute the SHA-256 digest of `data` as 32 bytes."""
    return _state_to_bytes(sha256_state(data))


def sha256_hex(data) -> str:
    """Compute the SHA-256 digest of `data` as a lowercase hex string."""
    return Sha256(data).hexdigest()


class Sha256:
    """Digest of a complete message.

    Construction hashes the whole input at once:

        >>> Sha256(b"abc").hexdigest()
        'ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad'

    Raises `DataTooLarge` for inputs longer than ``padding.MAX_INPUT_BYTES``.
    """

    digest_size = DIGEST_SIZE
    name = "sha256"

    __slots__ = ("_words",)

    def __init__(self, data) -> None:
        self._words: Tuple[int, ...] = sha256_state(data)

    @classmethod
    def from_words(cls, words: Iterable[int]) -> "Sha256":
        """Wrap an already computed 8-word state."""
        words = tuple(words)
        if len(words) != STATE_WORDS:
            raise ValueError(f"Expected {STATE_WORDS} words, got {len(words)}")
        for word in words:
            if not 0 <= word <= MASK32:
                raise ValueError(f"Word {word!r} is not an unsigned 32-bit value")

        obj = cls.__new__(cls)
        obj._words = words
        return obj

    @property
    def words(self) -> Tuple[int, ...]:
        return self._words

    def digest(self) -> bytes:
        return _state_to_bytes(self._words)

    def hexdigest(self) -> str:
        """Render as 64 lowercase hex characters, most significant word first."""
        return "".join(f"{word:08x}" for word in self._words)

    def __str__(self) -> str:
        return self.hexdigest()

    def __repr__(self) -> str:
        return f"Sha256.from_words(({', '.join(f'0x{w:08x}' for w in self._words)}))"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Sha256):
            return NotImplemented
        return self._words == other._words

    def __hash__(self) -> int:
        return hash(self._words)
