"""SHA-256 message padding.

The message is followed by a single '1' bit, then '0' bits, then the
original length in bits as a 64-bit big-endian integer, so that the whole
stream is a multiple of 512 bits. The stream is returned already cut into
blocks of 16 big-endian 32-bit words, ready for `compress.compress_block`.
"""

from __future__ import annotations

from typing import List, Sequence


BLOCK_BYTES = 64
LENGTH_FIELD_BYTES = 8

# Conservative bound: 2**58 bytes, well under the 2**64-bit length limit.
MAX_INPUT_BYTES = 1 << 58


class DataTooLarge(ValueError):
    """Raised when an input is longer than ``MAX_INPUT_BYTES``.

    The condition is a property of the input, so retrying will not help.
    """

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"Input of {length} bytes exceeds the maximum of {limit} bytes"
        )
        self.length = length
        self.limit = limit


def check_length(length: int) -> None:
    """Raise `DataTooLarge` if `length` bytes cannot be hashed."""
    if length > MAX_INPUT_BYTES:
        raise DataTooLarge(length, MAX_INPUT_BYTES)


def block_count(length: int) -> int:
    """Number of 512-bit blocks needed for a message of `length` bytes.

    Room is needed for the message, one delimiter byte and the 8-byte
    length field; 55 bytes is the most that fits in a single block.
    """
    return (length + 1 + LENGTH_FIELD_BYTES + BLOCK_BYTES - 1) // BLOCK_BYTES


def pad_message(data) -> List[List[int]]:
    """Pad `data` and split it into 16-word blocks.

    ``data`` may be ``bytes``, ``bytearray``, ``memoryview`` or anything
    else ``bytes()`` accepts. The length is checked before the input is
    copied, so an oversized input fails without being read.

    Raises:
        DataTooLarge: if ``len(data) > MAX_INPUT_BYTES``.
        TypeError: if ``data`` is a ``str``.
    """
    if isinstance(data, str):
        raise TypeError("Cannot hash str; encode it to bytes first")

    check_length(len(data))
    message = bytes(data)
    length = len(message)

    num_blocks = block_count(length)
    words = [0] * (num_blocks * 16)

    # Whole words straight from the message, big-endian.
    full_words = length // 4
    for i in range(full_words):
        words[i] = int.from_bytes(message[4 * i : 4 * i + 4], byteorder="big")

    # Trailing bytes share their word with the 0x80 delimiter. When the
    # length is a multiple of 4 the delimiter starts word `full_words`.
    tail = message[4 * full_words :] + b"\x80"
    words[full_words] = int.from_bytes(tail.ljust(4, b"\x00"), byteorder="big")

    bit_length = length * 8
    words[-2] = (bit_length >> 32) & 0xFFFFFFFF
    words[-1] = bit_length & 0xFFFFFFFF

    return [words[16 * i : 16 * (i + 1)] for i in range(num_blocks)]


def blocks_to_bytes(blocks: Sequence[Sequence[int]]) -> bytes:
    """Serialise padded blocks back into the padded byte stream."""
    return b"".join(
        word.to_bytes(4, byteorder="big") for block in blocks for word in block
    )
