"""SHA-256 compression engine.

Everything that happens to a single 512-bit block lives here: the six
logical functions from FIPS 180-4 section 4.1.2, message schedule expansion,
the 64-round mixing loop and the final fold of the working variables back
into the running hash state.

One round, with `a..h` the working variables, `k` the round constant and
`w` the message schedule word:

    t1 = h + S1(e) + ch(e, f, g) + k + w
    t2 = S0(a) + maj(a, b, c)

    h' = g    g' = f    f' = e    e' = d + t1
    d' = c    c' = b    b' = a    a' = t1 + t2

All additions are performed modulo 2**32.
"""

from __future__ import annotations

from typing import List, MutableSequence, Sequence, Tuple


MASK32 = 0xFFFFFFFF

# First 32 bits of the fractional parts of the cube roots of the first
# 64 primes (FIPS 180-4, section 4.2.2).
K_VALUES: Tuple[int, ...] = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

ROUNDS = 64
BLOCK_WORDS = 16
STATE_WORDS = 8


def _rotr(x: int, n: int) -> int:
    """Right-rotate a 32-bit word `x` by `n` bits."""
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def _shr(x: int, n: int) -> int:
    """Logical right shift of a 32-bit word `x` by `n` bits."""
    return (x & MASK32) >> n


def ch(x: int, y: int, z: int) -> int:
    """Choose: each bit of `x` selects the bit from `y` (1) or `z` (0)."""
    return ((x & y) ^ (~x & z)) & MASK32


def maj(x: int, y: int, z: int) -> int:
    """Majority vote of the three words, bit by bit."""
    return (x & y) ^ (x & z) ^ (y & z)


def big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def small_sigma0(x: int) -> int:
    """SHA-256 function σ0 used in the message schedule."""
    return _rotr(x, 7) ^ _rotr(x, 18) ^ _shr(x, 3)


def small_sigma1(x: int) -> int:
    """SHA-256 function σ1 used in the message schedule."""
    return _rotr(x, 17) ^ _rotr(x, 19) ^ _shr(x, 10)


def build_message_schedule(block: Sequence[int]) -> List[int]:
    """Expand a 16-word block into the 64-word message schedule w[0..63].

    Parameters
    ----------
    block : Sequence[int]
        Sixteen 32-bit words, as produced by ``padding.pad_message``.

    Returns
    -------
    list[int]
        A fresh 64-word schedule. The first 16 words are the block itself.
    """
    if len(block) != BLOCK_WORDS:
        raise ValueError(f"Expected {BLOCK_WORDS}-word block, got {len(block)}")

    w: List[int] = [0] * ROUNDS
    for i in range(BLOCK_WORDS):
        w[i] = block[i] & MASK32

    for i in range(BLOCK_WORDS, ROUNDS):
        w[i] = (
            small_sigma1(w[i - 2]) + w[i - 7] + small_sigma0(w[i - 15]) + w[i - 16]
        ) & MASK32

    return w


def compression(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    w: int,
    k: int,
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        32-bit working variables before the round.
    w : int
        Message schedule word `w[i]`.
    k : int
        Round constant `K_VALUES[i]`.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Working variables after the round, all reduced modulo 2**32.
    """
    t1 = (h + big_sigma1(e) + ch(e, f, g) + k + w) & MASK32
    t2 = (big_sigma0(a) + maj(a, b, c)) & MASK32

    return (
        (t1 + t2) & MASK32,
        a,
        b,
        c,
        (d + t1) & MASK32,
        e,
        f,
        g,
    )


def compress64(
    a: int,
    b: int,
    c: int,
    d: int,
    e: int,
    f: int,
    g: int,
    h: int,
    ws: Sequence[int],
) -> Tuple[int, int, int, int, int, int, int, int]:
    """Run the full 64-round loop for one block.

    Parameters
    ----------
    a, b, c, d, e, f, g, h : int
        Initial working variables (the current hash state).
    ws : Sequence[int]
        The 64-word message schedule `w[0..63]` for this block.

    Returns
    -------
    (a, b, c, d, e, f, g, h) : tuple[int, ...]
        Working variables after 64 rounds. These still have to be added
        into the hash state, see `compress_block`.
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress64 expects {ROUNDS} message schedule words, got {len(ws)}")

    work = (a, b, c, d, e, f, g, h)
    for i in range(ROUNDS):
        work = compression(*work, ws[i], K_VALUES[i])
    return work


def compress_block(state: MutableSequence[int], block: Sequence[int]) -> None:
    """Fold one 16-word block into the 8-word running `state`, in place.

    The state is read to seed the working variables and then updated with
    ``state[j] = (state[j] + working[j]) mod 2**32``.
    """
    if len(state) != STATE_WORDS:
        raise ValueError(f"Hash state must have {STATE_WORDS} words, got {len(state)}")

    ws = build_message_schedule(block)
    work = compress64(*state, ws)

    for j in range(STATE_WORDS):
        state[j] = (state[j] + work[j]) & MASK32
