from __future__ import annotations

import base64
import hashlib
import hmac
from collections import Counter

import pytest

from crypto_provider import (
    KEY_BYTES,
    EntropySource,
    FairCommitment,
    SecureRandomInt,
    calculate_hmac,
    verify,
)
from errors import InvariantViolation


class ScriptedEntropy(EntropySource):
    def __init__(self, chunks: list[bytes]) -> None:
        super().__init__()
        self.chunks = list(chunks)

    def read(self, num_bytes: int) -> bytes:
        chunk = self.chunks.pop(0)
        assert len(chunk) == num_bytes
        return chunk


def test_draw_rejects_samples_above_largest_multiple() -> None:
    # span 3: the limit is 2**31 - 2, so 0x7FFFFFFF must be redrawn
    entropy = ScriptedEntropy([
        b"\xff\xff\xff\x7f",
        b"\xff\xff\xff\xff",
        b"\x05\x00\x00\x00",
    ])
    assert SecureRandomInt(entropy).draw(10, 12) == 12
    assert entropy.chunks == []


def test_draw_clears_top_bit() -> None:
    entropy = ScriptedEntropy([b"\x04\x00\x00\x80"])
    assert SecureRandomInt(entropy).draw(0, 5) == 4


def test_draw_single_value_range() -> None:
    assert SecureRandomInt().draw(7, 7) == 7


def test_draw_min_greater_than_max_is_invariant_violation() -> None:
    with pytest.raises(InvariantViolation):
        SecureRandomInt().draw(5, 4)


def test_choice_from_empty_sequence_is_invariant_violation() -> None:
    with pytest.raises(InvariantViolation):
        SecureRandomInt().choice([])


def test_draw_is_uniform_for_range_not_dividing_two_pow_31() -> None:
    n = 7
    samples = 70_000
    rng = SecureRandomInt()
    counts = Counter(rng.draw(0, n - 1) for _ in range(samples))
    assert set(counts) == set(range(n))
    expected = samples / n
    for value in range(n):
        assert abs(counts[value] - expected) < expected * 0.05


def test_commit_reveal_verifies_for_every_trial() -> None:
    committer = FairCommitment()
    for min_val, max_val in [(0, 1), (0, 5), (3, 3), (-4, 9)]:
        for _ in range(200):
            commitment = committer.commit(min_val, max_val)
            value, key = committer.reveal(commitment)
            assert min_val <= value <= max_val
            assert len(key) == KEY_BYTES
            assert verify(commitment.tag, value, key)


def test_tag_is_hmac_sha256_of_decimal_string() -> None:
    commitment = FairCommitment().commit(0, 5)
    value, key = FairCommitment.reveal(commitment)
    expected = hmac.new(key, str(value).encode("utf-8"), hashlib.sha256).hexdigest().upper()
    assert commitment.tag_hex == expected
    assert len(commitment.tag_hex) == 64
    assert base64.b64decode(commitment.key_text) == key


def test_tampered_reveal_fails_verification() -> None:
    commitment = FairCommitment().commit(0, 5)
    value, key = FairCommitment.reveal(commitment)
    assert not verify(commitment.tag, (value + 1) % 6, key)
    assert not verify(commitment.tag, value, bytes(KEY_BYTES))


def test_fresh_key_per_commitment_hides_equal_values() -> None:
    committer = FairCommitment()
    commitments = [committer.commit(4, 4) for _ in range(20)]
    assert len({c.key for c in commitments}) == 20
    assert len({c.tag for c in commitments}) == 20


def test_repr_does_not_leak_secret() -> None:
    commitment = FairCommitment().commit(0, 5)
    text = repr(commitment)
    assert commitment.key_text not in text
    assert commitment.key.hex() not in text
    assert commitment.tag_hex in text


def test_calculate_hmac_known_vector() -> None:
    key = b"k" * KEY_BYTES
    assert calculate_hmac(key, 3) == hmac.new(key, b"3", hashlib.sha256).digest()
