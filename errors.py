# --- Rabin Error Taxonomy ---
# Every failure raised by the toolkit derives from RabinError, so callers can
# catch the whole family at once or pick out a single case.


class RabinError(Exception):
    """Base class for all Rabin cryptosystem errors."""


class InvalidParameterError(RabinError, ValueError):
    """An arithmetic precondition was violated (bad modulus, exponent, range or key)."""


class InvalidKeySizeError(InvalidParameterError):
    """The requested security bit-length is not a positive integer."""

    def __init__(self, bits):
        self.bits = bits
        super().__init__(f"Key size must be a positive integer number of bits, got {bits!r}")


class OversizedPlaintextError(RabinError, ValueError):
    """The tagged plaintext does not fit under the public modulus."""

    def __init__(self, plaintext, limit):
        self.plaintext = plaintext
        self.limit = limit
        super().__init__(
            f"Plaintext of {plaintext.bit_length()} bits exceeds the largest "
            f"value this modulus can carry ({limit.bit_length()} bits)"
        )


class TagMismatchError(RabinError):
    """None of the four square roots carries the tag: wrong key or corrupted ciphertext."""

    def __init__(self, ciphertext):
        self.ciphertext = ciphertext
        super().__init__("No square root of the ciphertext carries the expected tag")


class PrimeSearchExhaustedError(RabinError, RuntimeError):
    """A bounded prime search ran out of attempts."""

    def __init__(self, what, max_attempts):
        self.max_attempts = max_attempts
        super().__init__(f"No {what} found within {max_attempts} attempts")
