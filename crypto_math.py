import random

from errors import InvalidParameterError, PrimeSearchExhaustedError

# --- Configuration ---
# Number of Miller-Rabin trials. Each trial lets a composite through with
# probability at most 1/4, so 100 trials leave an error of at most 4^-100.
MILLER_RABIN_ROUNDS = 100


# --- Modular Exponentiation ---
# Computes a^d mod n by repeated squaring: walk the bits of the exponent,
# multiply the accumulator in when the bit is set, square the running power.
def power_mod(a, d, n):
    if n < 1:
        raise InvalidParameterError(f"Modulus must be positive, got {n}")
    if d < 0:
        raise InvalidParameterError(f"Exponent must be non-negative, got {d}")

    value = 1 % n
    power = a % n
    while d > 0:
        if d & 1:
            value = (value * power) % n
        power = (power * power) % n
        d >>= 1
    return value


# --- Greatest Common Divisor ---
def gcd(a, b):
    while b != 0:
        a, b = b, a % b
    return abs(a)


# --- Extended Euclidean Algorithm ---
# Finds (g, (s, t)) such that: s*a + t*b = g = gcd(a, b)
# Remainders and both Bezout coefficients are advanced in lockstep.
def extended_gcd(a, b):
    r, r_next = a, b
    s, s_next = 1, 0
    t, t_next = 0, 1
    while r_next != 0:
        quotient = r // r_next
        r, r_next = r_next, r - quotient * r_next
        s, s_next = s_next, s - quotient * s_next
        t, t_next = t_next, t - quotient * t_next
    return r, (s, t)


# --- Miller-Rabin Witness ---
# Returns True when base a proves n composite.
def witness(a, n):
    # n - 1 = u * 2^t with u odd
    u, t = n - 1, 0
    while u % 2 == 0:
        t += 1
        u >>= 1

    x = power_mod(a, u, n)
    for _ in range(t):
        y = power_mod(x, 2, n)
        # Non-trivial square root of 1
        if y == 1 and x != 1 and x != n - 1:
            return True
        x = y
    return x != 1


# --- Miller-Rabin Primality Test ---
# Probabilistic: a composite survives each round with probability <= 1/4.
def is_prime(n, k=MILLER_RABIN_ROUNDS):
    if n < 2 or (n != 2 and n % 2 == 0):
        return False
    if n < 4:
        return True

    for _ in range(k):
        a = random.randint(2, n - 2)
        if witness(a, n):
            return False
    return True


def _check_range(low, high):
    if low > high:
        raise InvalidParameterError(f"Empty search range [{low}, {high}]")
    if high < 2:
        raise InvalidParameterError(f"No primes in range [{low}, {high}]")


def _spend_attempt(attempts, max_attempts, what):
    attempts += 1
    if max_attempts is not None and attempts > max_attempts:
        raise PrimeSearchExhaustedError(what, max_attempts)
    return attempts


# --- Prime Number Generator ---
# Uniform draws from [low, high] until one passes the test. About half the
# draws are even; an odd draw near N is prime with probability ~ 2/ln(N).
def random_prime(low, high, max_attempts=None):
    _check_range(low, high)
    attempts = 0
    while True:
        attempts = _spend_attempt(attempts, max_attempts, "random prime")
        guess = random.randint(low, high)
        if is_prime(guess):
            return guess


# --- Safe Prime Generator ---
# A safe prime is 2p + 1 where p is prime (p is then a Sophie Germain prime).
# p is drawn from [low, high], so the result lies in [2*low + 1, 2*high + 1].
# Both conditions must hold at once, costing roughly ln(high)^2 draws.
def safe_prime(low, high, max_attempts=None):
    _check_range(low, high)
    attempts = 0
    while True:
        attempts = _spend_attempt(attempts, max_attempts, "safe prime")
        p = random_prime(low, high, max_attempts)
        if is_prime(2 * p + 1):
            return 2 * p + 1


# --- Rabin Prime Generator ---
# Rabin primes satisfy p = 3 mod 4, so (p + 1) / 4 is an integer and a square
# root mod p has the closed form c^((p + 1) / 4).
def rabin_prime(safe, low, high, max_attempts=None):
    generate = safe_prime if safe else random_prime
    attempts = 0
    while True:
        attempts = _spend_attempt(attempts, max_attempts, "Rabin prime")
        p = generate(low, high, max_attempts)
        if p % 4 == 3:
            return p
