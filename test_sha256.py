import hashlib
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
import yaml

import padding
from sha256 import (
    H_INITIAL,
    DataTooLarge,
    Sha256,
    sha256,
    sha256_hex,
    sha256_state,
)


VECTORS_PATH = Path(__file__).parent / "data" / "vectors.yaml"

TEST_VECTORS = [
    (b"", "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"),
    (b"Hello, world!", "315f5bdb76d078c43b8ac0064e4a0164612b1fce77c869345bfc94c75894edd3"),
    (b"abc", "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"),
    (
        b"abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq",
        "248d6a61d20638b8e5c026930c3e6039a33ce45964ff2167f6ecedd419db06c1",
    ),
]


def _yaml_vectors():
    with open(VECTORS_PATH, "r", encoding="utf-8") as f:
        entries = yaml.safe_load(f)
    return [
        (bytes.fromhex(e["hex"]) if "hex" in e else e["message"].encode("utf-8"), e["sha256"])
        for e in entries
    ]


@pytest.mark.parametrize("message,expected", TEST_VECTORS)
def test_known_vectors(message, expected):
    assert sha256_hex(message) == expected
    assert Sha256(message).hexdigest() == expected


@pytest.mark.parametrize("message,expected", _yaml_vectors())
def test_vector_file(message, expected):
    assert sha256_hex(message) == expected


@pytest.mark.parametrize("length", [0, 1, 3, 4, 55, 56, 57, 63, 64, 65, 119, 120, 128, 1000])
def test_matches_hashlib_around_block_boundaries(length):
    message = bytes((i * 31 + length) & 0xFF for i in range(length))
    assert sha256(message) == hashlib.sha256(message).digest()


def test_empty_input_state_words():
    assert sha256_state(b"") == (
        0xE3B0C442,
        0x98FC1C14,
        0x9AFBF4C8,
        0x996FB924,
        0x27AE41E4,
        0x649B934C,
        0xA495991B,
        0x7852B855,
    )


def test_initial_state_is_not_modified():
    before = tuple(H_INITIAL)
    sha256(b"abc")
    sha256(b"x" * 200)
    assert H_INITIAL == before


def test_deterministic():
    message = b"test message"
    assert sha256(message) == sha256(message)
    assert Sha256(message) == Sha256(message)


@pytest.mark.parametrize("message", [b"", b"a", b"x" * 64, bytes(range(256))])
def test_digest_is_always_256_bits(message):
    digest = Sha256(message)
    hex_str = digest.hexdigest()

    assert len(digest.digest()) == 32
    assert len(hex_str) == 64
    assert hex_str == hex_str.lower()
    assert int(hex_str, 16) >= 0
    assert len(digest.words) == 8


def test_hexdigest_word_order():
    digest = Sha256.from_words([0x1, 0x2, 0x3, 0x4, 0x5, 0x6, 0x7, 0xABCDEF01])
    assert digest.hexdigest() == (
        "00000001" "00000002" "00000003" "00000004"
        "00000005" "00000006" "00000007" "abcdef01"
    )
    assert str(digest) == digest.hexdigest()
    assert digest.digest() == bytes.fromhex(digest.hexdigest())


def test_wrapper_equality_and_hash():
    a = Sha256(b"abc")
    b = Sha256.from_words(a.words)

    assert a == b
    assert hash(a) == hash(b)
    assert a != Sha256(b"abd")
    assert a != a.hexdigest()
    assert len({a, b}) == 1


@pytest.mark.parametrize(
    "words",
    [
        [0] * 7,
        [0] * 9,
        [0] * 7 + [1 << 32],
        [0] * 7 + [-1],
    ],
)
def test_from_words_rejects_bad_state(words):
    with pytest.raises(ValueError):
        Sha256.from_words(words)


@pytest.mark.parametrize("data", [bytearray(b"abc"), memoryview(b"abc")])
def test_bytes_like_inputs(data):
    assert sha256(data) == sha256(b"abc")


def test_str_input_is_rejected():
    with pytest.raises(TypeError):
        Sha256("abc")


def test_oversized_input_never_yields_digest(monkeypatch):
    monkeypatch.setattr(padding, "MAX_INPUT_BYTES", 16)

    for entry_point in (sha256_state, sha256, sha256_hex, Sha256):
        with pytest.raises(DataTooLarge):
            entry_point(b"y" * 17)

    assert sha256_hex(b"y" * 16) == hashlib.sha256(b"y" * 16).hexdigest()


def test_avalanche():
    message = bytearray(b"The quick brown fox jumps over the lazy dog")
    base = int.from_bytes(sha256(bytes(message)), byteorder="big")

    for bit in (0, 7, 100, 8 * len(message) - 1):
        flipped = bytearray(message)
        flipped[bit // 8] ^= 0x80 >> (bit % 8)
        other = int.from_bytes(sha256(bytes(flipped)), byteorder="big")

        changed = bin(base ^ other).count("1")
        # Expected around 128 of 256, with a spread of about 8.
        assert 64 < changed < 192


def test_independent_digests_in_parallel():
    messages = [bytes([i]) * (i * 13) for i in range(16)]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(sha256, messages))

    assert results == [hashlib.sha256(m).digest() for m in messages]


def test_size_bound_is_only_defined_in_padding():
    import sha256 as sha256_module

    assert not hasattr(sha256_module, "MAX_INPUT_BYTES")
    assert padding.MAX_INPUT_BYTES == 1 << 58
