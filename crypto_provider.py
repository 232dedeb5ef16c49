import base64
import hashlib
import hmac
import logging
import secrets
import threading
from dataclasses import dataclass
from typing import Sequence, TypeVar

from errors import InvariantViolation

logger = logging.getLogger(__name__)

KEY_BYTES = 32
_SAMPLE_BYTES = 4
_SAMPLE_SPACE = 2 ** 31

T = TypeVar("T")

# ==============================================================================
# Entropy Source
# ==============================================================================

class EntropySource:
    """
    Process-wide access point to the operating system CSPRNG.
    Each read acquires the source, takes the bytes and releases it again;
    no state is kept between reads.
    """

    def __init__(self):
        self._lock = threading.Lock()

    def read(self, num_bytes: int) -> bytes:
        with self._lock:
            return secrets.token_bytes(num_bytes)


DEFAULT_ENTROPY = EntropySource()

# ==============================================================================
# Unbiased Random Integers
# ==============================================================================

class SecureRandomInt:
    def __init__(self, entropy: EntropySource = DEFAULT_ENTROPY):
        self.entropy = entropy

    def draw(self, min_val: int, max_val: int) -> int:
        """
        Returns an integer uniformly distributed over [min_val, max_val].

        Samples are 31-bit values; a sample at or above the largest multiple
        of the range size that fits in 2**31 is thrown away and redrawn, so
        every value in the range is equally likely.
        """
        if min_val > max_val:
            raise InvariantViolation(f"min ({min_val}) must not exceed max ({max_val})")
        span = max_val - min_val + 1
        if span > _SAMPLE_SPACE:
            raise InvariantViolation(f"range of {span} values exceeds 2**31")
        limit = (_SAMPLE_SPACE // span) * span
        while True:
            sample = int.from_bytes(self.entropy.read(_SAMPLE_BYTES), "little") & (_SAMPLE_SPACE - 1)
            if sample < limit:
                return min_val + sample % span

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise InvariantViolation("cannot choose from an empty sequence")
        return items[self.draw(0, len(items) - 1)]

# ==============================================================================
# Commit / Reveal
# ==============================================================================

def calculate_hmac(key: bytes, value: int) -> bytes:
    message_bytes = str(value).encode('utf-8')
    return hmac.new(key, message_bytes, hashlib.sha256).digest()


def verify(tag: bytes, value: int, key: bytes) -> bool:
    """Recomputes the HMAC of a revealed value and compares it to the published tag."""
    return hmac.compare_digest(calculate_hmac(key, value), tag)


@dataclass(frozen=True)
class Commitment:
    value: int
    key: bytes
    tag: bytes
    min_val: int
    max_val: int

    @property
    def tag_hex(self) -> str:
        return self.tag.hex().upper()

    @property
    def key_text(self) -> str:
        return base64.b64encode(self.key).decode('ascii')

    def __repr__(self) -> str:
        # value and key stay out of logs and tracebacks until revealed
        return f"Commitment(range={self.min_val}..{self.max_val}, tag={self.tag_hex})"


class FairCommitment:
    def __init__(self, random_int: SecureRandomInt | None = None, entropy: EntropySource = DEFAULT_ENTROPY):
        self.entropy = entropy
        self.random_int = random_int if random_int is not None else SecureRandomInt(entropy)

    def generate_key(self) -> bytes:
        return self.entropy.read(KEY_BYTES)

    def commit(self, min_val: int, max_val: int) -> Commitment:
        key = self.generate_key()
        value = self.random_int.draw(min_val, max_val)
        commitment = Commitment(value, key, calculate_hmac(key, value), min_val, max_val)
        logger.debug("commitment issued for %d..%d: HMAC=%s", min_val, max_val, commitment.tag_hex)
        return commitment

    @staticmethod
    def reveal(commitment: Commitment) -> tuple[int, bytes]:
        logger.debug("revealing %s: value=%d", commitment, commitment.value)
        return commitment.value, commitment.key
