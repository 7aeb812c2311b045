# --- Text <-> Integer Codec ---
# A string is read as a base-256 number, first character least significant.
# Each character code is XORed with a fixed mask so that ordinary text does
# not map onto small or sparse integers.

# --- Configuration ---
XOR_MASK = 0xAA
BASE = 256


def encode(text):
    """Map a string of byte-range characters to a single integer."""
    total = 0
    weight = 1
    for char in text:
        code = ord(char)
        if code >= BASE:
            raise ValueError(f"Character {char!r} is outside the byte range and cannot be encoded")
        total += weight * (code ^ XOR_MASK)
        weight *= BASE
    # A final char that maps to digit 0 would vanish as a leading zero
    if text and ord(text[-1]) == XOR_MASK:
        raise ValueError(f"A trailing {chr(XOR_MASK)!r} cannot be encoded: it would be lost on decoding")
    return total


def decode(number):
    """Inverse of encode: peel off base-256 digits until nothing is left."""
    if number < 0:
        raise ValueError(f"Cannot decode a negative integer: {number}")

    chars = []
    while number > 0:
        number, digit = divmod(number, BASE)
        chars.append(chr(digit ^ XOR_MASK))
    return "".join(chars)
