import argparse
import logging

from errors import RabinError
from rabin import DEFAULT_CIPHER

PROMPT = ">> "


# --- Ask for the key size ---
def read_bits():
    while True:
        answer = input("How many bits? ").strip()
        if answer.isdigit() and int(answer) > 0:
            return int(answer)
        print("[ERROR] Please enter a positive whole number.")


# --- Encrypt / Decrypt one line ---
def process_line(cipher, key, line):
    try:
        c = cipher.encrypt_text(line, key.n)
        print(f"En[{line}] = {c}")
        print(f"De[{c}] = {cipher.decrypt_text(c, key.private_key)}")
    except (RabinError, ValueError) as e:
        print(f"[ERROR] {e}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Interactive Rabin encrypt/decrypt loop")
    parser.add_argument("--bits", type=int, help="security size in bits (asked for when omitted)")
    parser.add_argument("--safe", action="store_true", help="use safe primes (much slower)")
    parser.add_argument("--verbose", action="store_true", help="log key generation details")
    return parser.parse_args(argv)


# ==========================================
#              MAIN LOOP
# ==========================================
def main(argv=None):
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(message)s")

    cipher = DEFAULT_CIPHER
    if args.bits is not None:
        bits = args.bits
    else:
        try:
            bits = read_bits()
        except EOFError:
            print()
            print("[ERROR] No key size given.")
            return 1

    try:
        key = cipher.generate_keys(bits, safe=args.safe)
    except RabinError as e:
        print(f"[ERROR] {e}")
        return 1

    print(f"n = {key.n}")
    print(f"k = {key.private_key}")

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            break
        if line == "quit":
            break
        process_line(cipher, key, line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
