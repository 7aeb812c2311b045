import hashlib
import logging
from collections import namedtuple

from codec import decode, encode
from crypto_math import extended_gcd, gcd, power_mod, rabin_prime
from errors import (
    InvalidKeySizeError,
    InvalidParameterError,
    OversizedPlaintextError,
    TagMismatchError,
)

# --- Configuration ---
# The tag is a checksum of this label, truncated to TAG_BITS bits.
TAG_LABEL = "Michael O. Rabin"
TAG_BITS = 32
MIN_TAG_BITS = 8
MAX_TAG_BITS = 256

# Public modulus n, private factors (p, q), and the security size requested.
RabinKeyPair = namedtuple("RabinKeyPair", ["n", "private_key", "bits"])


# --- Tag Derivation ---
# SHA-256 of the label read as an integer, keeping only the low `bits` bits.
def make_tag(label=TAG_LABEL, bits=TAG_BITS):
    sha = hashlib.sha256()
    sha.update(label.encode())
    return int(sha.hexdigest(), 16) & ((1 << bits) - 1)


# Both primes have bits + tag_bits bits, so n >= 2^(2*(bits + tag_bits) - 2).
# Any plaintext shorter than this many bits fits under such an n with its tag.
def message_capacity_bits(bits, tag_bits=TAG_BITS):
    return 2 * bits + tag_bits - 2


class RabinCipher:
    """
    Rabin public-key encryption with a fixed tag.

    Encryption appends a tag of `tag_bits` bits to the plaintext and squares
    the result mod n. Squaring has four roots mod n = p*q; decryption computes
    all four by CRT and keeps the one whose low bits equal the tag.
    The tag is fixed at construction and never changes afterwards.
    """

    def __init__(self, tag_bits=TAG_BITS, label=TAG_LABEL, tag=None):
        if isinstance(tag_bits, bool) or not isinstance(tag_bits, int):
            raise InvalidParameterError(f"Tag width must be an integer, got {tag_bits!r}")
        if not MIN_TAG_BITS <= tag_bits <= MAX_TAG_BITS:
            raise InvalidParameterError(
                f"Tag width must be between {MIN_TAG_BITS} and {MAX_TAG_BITS} bits, got {tag_bits}"
            )

        if tag is None:
            tag = make_tag(label, tag_bits)
        elif not 0 <= tag < (1 << tag_bits):
            raise InvalidParameterError(f"Tag {tag} does not fit in {tag_bits} bits")

        self._tag_bits = tag_bits
        self._tag = tag

    @property
    def tag(self):
        return self._tag

    @property
    def tag_bits(self):
        return self._tag_bits

    # --- Key Generation ---
    def generate_keys(self, bits, safe=False, max_attempts=None):
        """
        Generate a key pair for a `bits`-bit security size.

        p and q are distinct primes = 3 mod 4 drawn from [2^(x-1), 2^x - 1]
        with x = bits + tag_bits, leaving room for the tag. With safe=True
        each prime is a safe prime 2p' + 1, which takes far longer to find.
        max_attempts bounds every prime search (None searches until found).
        """
        if isinstance(bits, bool) or not isinstance(bits, int) or bits <= 0:
            raise InvalidKeySizeError(bits)

        x = bits + self._tag_bits
        low, high = 1 << (x - 1), (1 << x) - 1
        logging.debug(f"Generating Rabin key: {bits} security bits, {x}-bit primes, safe={safe}")

        p = rabin_prime(safe, low, high, max_attempts)
        q = rabin_prime(safe, low, high, max_attempts)
        while p == q:
            logging.debug("Drew the same prime twice, regenerating q")
            q = rabin_prime(safe, low, high, max_attempts)

        n = p * q
        logging.debug(f"Rabin modulus has {n.bit_length()} bits")
        return RabinKeyPair(n, (p, q), bits)

    # --- Plaintext Limit ---
    # Largest m with m * 2^W + tag < n. Negative when n cannot hold even the tag.
    def max_plaintext(self, n):
        return (n - 1 - self._tag) >> self._tag_bits

    # --- Encrypt ---
    def encrypt(self, m, n):
        if n < 1:
            raise InvalidParameterError(f"Modulus must be positive, got {n}")
        if m < 0:
            raise InvalidParameterError(f"Plaintext must be non-negative, got {m}")

        limit = self.max_plaintext(n)
        if m > limit:
            raise OversizedPlaintextError(m, limit)

        # Insert tag and square (mod n)
        tagged = (m << self._tag_bits) | self._tag
        return power_mod(tagged, 2, n)

    # --- Decrypt ---
    def decrypt(self, c, private_key):
        p, q = self._check_private_key(private_key)
        if c < 0:
            raise InvalidParameterError(f"Ciphertext must be non-negative, got {c}")

        n = p * q
        _, (y_p, y_q) = extended_gcd(p, q)

        # Square roots mod p and mod q (closed form since p = q = 3 mod 4)
        m_p = power_mod(c, (p + 1) // 4, p)
        m_q = power_mod(c, (q + 1) // 4, q)

        # Combine with CRT into the two conjugate pairs of roots mod n
        x = (y_p * p * m_q + y_q * q * m_p) % n
        y = (y_p * p * m_q - y_q * q * m_p) % n

        mask = (1 << self._tag_bits) - 1
        for candidate in (x, n - x, y, n - y):
            if candidate & mask == self._tag:
                return candidate >> self._tag_bits

        raise TagMismatchError(c)

    # --- Text Helpers ---
    def encrypt_text(self, text, n):
        return self.encrypt(encode(text), n)

    def decrypt_text(self, c, private_key):
        return decode(self.decrypt(c, private_key))

    @staticmethod
    def _check_private_key(private_key):
        if isinstance(private_key, RabinKeyPair):
            private_key = private_key.private_key
        try:
            p, q = private_key
        except (TypeError, ValueError):
            raise InvalidParameterError("Private key must be a pair of primes (p, q)") from None

        for prime in (p, q):
            if not isinstance(prime, int) or prime < 3 or prime % 4 != 3:
                raise InvalidParameterError(f"Private key factor {prime!r} is not congruent to 3 mod 4")
        if p == q or gcd(p, q) != 1:
            raise InvalidParameterError("Private key factors must be distinct and coprime")
        return p, q


# --- Process-wide Default ---
# Built once at import; the module-level helpers below all share its tag.
DEFAULT_CIPHER = RabinCipher()


def generate_key(safe, bits, max_attempts=None):
    """Return (n, (p, q)) for a `bits`-bit security size using the default tag."""
    key = DEFAULT_CIPHER.generate_keys(bits, safe=safe, max_attempts=max_attempts)
    return key.n, key.private_key


def encrypt(m, n):
    return DEFAULT_CIPHER.encrypt(m, n)


def decrypt(c, private_key):
    return DEFAULT_CIPHER.decrypt(c, private_key)


def encrypt_text(text, n):
    return DEFAULT_CIPHER.encrypt_text(text, n)


def decrypt_text(c, private_key):
    return DEFAULT_CIPHER.decrypt_text(c, private_key)


# --- Test Block ---
if __name__ == "__main__":
    print("Generating Rabin keys (128 bits)...")
    n, private_key = generate_key(False, 128)
    print(f"Public Key (n): {n}")

    msg = "Hi"
    c = encrypt_text(msg, n)
    print(f"En[{msg}] = {c}")
    print(f"De[{c}] = {decrypt_text(c, private_key)}")
