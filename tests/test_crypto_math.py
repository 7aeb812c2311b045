import random
import unittest

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from crypto_math import (
    extended_gcd,
    gcd,
    is_prime,
    power_mod,
    rabin_prime,
    random_prime,
    safe_prime,
    witness,
)
from errors import InvalidParameterError, PrimeSearchExhaustedError


def trial_division_is_prime(n):
    if n < 2:
        return False
    f = 2
    while f * f <= n:
        if n % f == 0:
            return False
        f += 1
    return True


class TestPowerMod(unittest.TestCase):
    """Test cases for square-and-multiply exponentiation."""

    def setUp(self):
        random.seed(1234)

    def test_matches_builtin_pow(self):
        for _ in range(200):
            a = random.randrange(0, 2**96)
            d = random.randrange(0, 2**64)
            n = random.randrange(2, 2**80)
            self.assertEqual(power_mod(a, d, n), pow(a, d, n))

    def test_zero_exponent_is_one(self):
        for n in (2, 3, 97, 2**61 - 1):
            for a in (0, 1, 5, n - 1, n + 3):
                self.assertEqual(power_mod(a, 0, n), 1)

    def test_modulus_one(self):
        self.assertEqual(power_mod(12345, 0, 1), 0)
        self.assertEqual(power_mod(12345, 7, 1), 0)

    def test_result_in_range(self):
        self.assertEqual(power_mod(-3, 3, 10), (-27) % 10)

    def test_rejects_bad_modulus(self):
        with self.assertRaises(InvalidParameterError):
            power_mod(2, 3, 0)
        with self.assertRaises(InvalidParameterError):
            power_mod(2, 3, -7)

    def test_rejects_negative_exponent(self):
        with self.assertRaises(InvalidParameterError):
            power_mod(2, -1, 7)


class TestEuclid(unittest.TestCase):
    """Test cases for gcd and extended_gcd."""

    def test_gcd(self):
        self.assertEqual(gcd(12, 18), 6)
        self.assertEqual(gcd(17, 5), 1)
        self.assertEqual(gcd(0, 9), 9)

    def test_bezout_identity(self):
        random.seed(99)
        for _ in range(200):
            a = random.randrange(1, 2**64)
            b = random.randrange(1, 2**64)
            g, (s, t) = extended_gcd(a, b)
            self.assertEqual(g, gcd(a, b))
            self.assertEqual(s * a + t * b, g)

    def test_coprime_primes(self):
        p, q = 1000000007, 998244353
        g, (s, t) = extended_gcd(p, q)
        self.assertEqual(g, 1)
        self.assertEqual(s * p + t * q, 1)


class TestPrimality(unittest.TestCase):
    """Test cases for the Miller-Rabin test."""

    def setUp(self):
        random.seed(42)

    def test_small_values(self):
        self.assertFalse(is_prime(-7))
        self.assertFalse(is_prime(0))
        self.assertFalse(is_prime(1))
        self.assertTrue(is_prime(2))
        self.assertTrue(is_prime(3))
        self.assertFalse(is_prime(4))
        self.assertTrue(is_prime(5))

    def test_agrees_with_trial_division(self):
        for n in range(0, 1500):
            self.assertEqual(is_prime(n), trial_division_is_prime(n), n)

    def test_carmichael_numbers(self):
        for n in (561, 1105, 1729, 2465, 2821, 6601, 8911):
            self.assertFalse(is_prime(n))
        self.assertTrue(witness(2, 561))

    def test_known_large_primes(self):
        self.assertTrue(is_prime(2**61 - 1))
        self.assertTrue(is_prime(2**127 - 1))
        self.assertFalse(is_prime((2**61 - 1) * (2**31 - 1)))

    def test_prime_has_no_witness(self):
        for a in range(2, 50):
            self.assertFalse(witness(a, 1000000007))


class TestPrimeGeneration(unittest.TestCase):
    """Test cases for random, safe and Rabin prime search."""

    def setUp(self):
        random.seed(7)

    def test_random_prime_in_range(self):
        for _ in range(20):
            p = random_prime(1000, 5000)
            self.assertTrue(1000 <= p <= 5000)
            self.assertTrue(trial_division_is_prime(p))

    def test_safe_prime(self):
        for _ in range(10):
            s = safe_prime(100, 2000)
            self.assertTrue(trial_division_is_prime(s))
            self.assertTrue(trial_division_is_prime((s - 1) // 2))
            self.assertTrue(201 <= s <= 4001)

    def test_rabin_prime(self):
        for safe in (False, True):
            for _ in range(10):
                p = rabin_prime(safe, 2**20, 2**21 - 1)
                self.assertEqual(p % 4, 3)
                self.assertTrue(trial_division_is_prime(p))

    def test_empty_range_rejected(self):
        with self.assertRaises(InvalidParameterError):
            random_prime(10, 5)
        with self.assertRaises(InvalidParameterError):
            random_prime(0, 1)

    def test_max_attempts_guard(self):
        # No primes between 24 and 28
        with self.assertRaises(PrimeSearchExhaustedError):
            random_prime(24, 28, max_attempts=5)
        # 5 is the only prime here and 5 = 1 mod 4
        with self.assertRaises(PrimeSearchExhaustedError):
            rabin_prime(False, 4, 6, max_attempts=10)

    def test_max_attempts_guard_on_safe_search(self):
        with self.assertRaises(PrimeSearchExhaustedError):
            safe_prime(24, 28, max_attempts=5)
        with self.assertRaises(PrimeSearchExhaustedError):
            rabin_prime(True, 24, 28, max_attempts=5)

    def test_max_attempts_is_enough_when_generous(self):
        p = random_prime(2, 3, max_attempts=1000)
        self.assertIn(p, (2, 3))


if __name__ == '__main__':
    unittest.main()
