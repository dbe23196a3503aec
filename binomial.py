"""
Binomial coefficients C(a, b) modulo an arbitrary positive integer n.

Three algorithms, from naive to efficient:

1. direct_binomial_mod_n: exact C(a, b), reduced at the very end
   - The running value grows to the full size of C(a, b) (hundreds of
     thousands of digits for a ~ 10^5)
2. basic_binomial_mod_n: the same product reduced mod n at every step
   - Factors shared with n cannot be inverted, so they are pulled out into an
     exact adjustment and multiplied back in at the end
   - Still O(min(b, a - b)) steps
3. compute_binomial_mod_n: generalized Lucas theorem (Granville) + CRT
   - n = p1^s1 * ... * pk^sk by trial division
   - C(a, b) mod p^s from the base-p digits of a and b: one window of s
     digits per position, so O(log_p a) window evaluations
   - The p-free part of each window factorial comes from a table of
     (k!)_p mod p^s, memoized per prime power
   - Kummer's theorem gives the power of p: one factor per borrow when
     subtracting b from a in base p
   - Residues are recombined with the Chinese Remainder Theorem

PERFORMANCE:
- C(306255, 151923) mod 343: the efficient method touches 7 windows, while
  the direct method multiplies ~150000 times into a 90000-digit integer
- Cost of the efficient method is dominated by factoring n (trial division)
  and by the first table build for each new prime power

Call clear_caches() to drop the memoized tables between independent runs.
"""
from functools import lru_cache
from typing import NamedTuple

import factorization
from factorization import PrimePower, prime_factorization
from number_theory import Congruence, effective_crt, gcd, modular_inverse

# Largest p^s for which (k!)_p mod p^s is tabulated; bigger moduli recompute
# each window factorial directly
_UNIT_FACTORIAL_TABLE_LIMIT = 1 << 20


class BinomialResidue(NamedTuple):
    """
    One digit level of C(a, b) mod p^s.

    residue is the p-free part mod p^s, primes the number of factors of p the
    caller has to reinsert.
    """
    residue: int
    primes: int


def clear_caches():
    """Clear all memoization caches. Useful between independent runs."""
    _unit_factorial_table.cache_clear()
    factorization.clear_caches()


# ============================================================================
# BASELINE ALGORITHMS
# ============================================================================

def basic_binomial(a: int, b: int) -> int:
    """
    Exact C(a, b) by incremental multiply/divide.

    Computing 10 choose 5 runs 10 / 1 * 9 / 2 * 8 / 3 ...: after step i the
    running value is C(a, i), so every division is exact and the numerator
    never gets ahead of the result.
    """
    if b < 0 or b > a:
        return 0

    result = 1
    for i in range(1, min(b, a - b) + 1):
        result *= a - i + 1
        result //= i
    return result


def direct_binomial_mod_n(a: int, b: int, n: int) -> int:
    """C(a, b) mod n computed exactly and reduced once."""
    if n < 1:
        raise ValueError(f"modulus must be positive, got {n}")
    return basic_binomial(a, b) % n


def basic_binomial_mod_n(a: int, b: int, n: int) -> int:
    """
    C(a, b) mod n with intermediate modular reduction.

    Each numerator and denominator factor is stripped of the primes it shares
    with n before being multiplied (or inverted) mod n. The stripped parts are
    kept exactly in an adjustment; the n-smooth part of i! always divides the
    n-smooth part of the first i numerator factors, so the adjustment stays an
    integer.
    """
    if n < 1:
        raise ValueError(f"modulus must be positive, got {n}")
    if b < 0 or b > a:
        return 0

    result = 1
    adjustment = 1
    for i in range(1, min(b, a - b) + 1):
        top = a - i + 1
        common = gcd(top, n)
        while common != 1:
            top //= common
            adjustment *= common
            common = gcd(top, n)
        result *= top % n

        bottom = i
        common = gcd(bottom, n)
        while common != 1:
            bottom //= common
            adjustment //= common
            common = gcd(bottom, n)
        result *= modular_inverse(bottom % n, n)

        result %= n

    return result * adjustment % n


# ============================================================================
# GENERALIZED LUCAS THEOREM (PRIME POWERS)
# ============================================================================

@lru_cache(maxsize=32)
def _unit_factorial_table(prime_power: PrimePower) -> tuple[int, ...]:
    """(k!)_p mod p^s for every k < p^s, in contiguous memory."""
    prime = prime_power.prime
    modulus = prime_power.value

    table = [1] * modulus
    acc = 1
    for k in range(1, modulus):
        if k % prime:
            acc = acc * k % modulus
        table[k] = acc
    return tuple(table)


def unit_factorial(n: int, prime_power: PrimePower) -> int:
    """
    Product of the integers in [1, n] not divisible by p, mod p^s.

    n is reduced mod p^s first: the caller accounts for the sign of every
    complete block of p^s integers it drops (see prime_power_binomial).
    """
    prime = prime_power.prime
    modulus = prime_power.value
    n %= modulus

    if modulus <= _UNIT_FACTORIAL_TABLE_LIMIT:
        return _unit_factorial_table(prime_power)[n]

    acc = 1
    for k in range(1, n + 1):
        if k % prime:
            acc = acc * k % modulus
    return acc


def _block_sign_is_negative(prime_power: PrimePower) -> bool:
    """
    Whether the units of Z/p^s multiply to -1.

    True for odd p and for 4; the unit group mod 2^s (s >= 3) is not cyclic and
    its product is +1. Mod 2 the two signs coincide.
    """
    if prime_power.prime != 2:
        return True
    return prime_power.exponent == 2


def prime_power_binomial(a: int, b: int, prime_power: PrimePower, borrow: int = 0) -> BinomialResidue:
    """
    Evaluate one base-p digit level of C(a, b) mod p^s.

    With r the remaining difference (a - b - borrow), a! / (b! r!) factors as

        p^(a//p - b//p - r//p) * (a//p)! / ((b//p)! (r//p)!) * (a!)_p / ((b!)_p (r!)_p)

    where (x!)_p is the product of the integers up to x that p does not divide.
    This level contributes the last factor, which only depends on a, b and r
    modulo p^s up to a sign: each full block of p^s consecutive units
    multiplies to -1 (or +1 for p = 2, s >= 3). The power of p is the borrow
    out of the lowest digit and feeds the next level.

    Args:
        a, b: base-p suffixes of the original a and b, with a >= b
        prime_power: the modulus p^s
        borrow: borrow into this digit from the level below (0 or 1)

    Returns:
        BinomialResidue(p-free residue mod p^s, borrow out of this digit)
    """
    prime = prime_power.prime
    modulus = prime_power.value
    rest = a - b - borrow

    denominator = unit_factorial(b, prime_power) * unit_factorial(rest, prime_power) % modulus
    residue = unit_factorial(a, prime_power) * modular_inverse(denominator, modulus) % modulus

    # a block of p^s wrapped when b and rest were reduced but a was not
    if a // modulus - b // modulus - rest // modulus and _block_sign_is_negative(prime_power):
        residue = -residue % modulus

    return BinomialResidue(residue, a // prime - b // prime - rest // prime)


def prime_power_binomial_mod(a: int, b: int, prime_power: PrimePower) -> int:
    """
    C(a, b) mod p^s for arbitrarily large a >= b >= 0.

    Peels one base-p digit of a and b per step, multiplying in the p-free
    residue of each level and counting the borrows, then reinserts p^borrows.
    For s = 1 this reduces to Lucas' theorem; a borrow makes the result 0.
    """
    prime, exponent = prime_power
    modulus = prime_power.value

    result = 1
    primes = 0
    borrow = 0
    while a > 0:
        level = prime_power_binomial(a, b, prime_power, borrow)
        result = result * level.residue % modulus
        borrow = level.primes
        primes += borrow
        if primes >= exponent:
            return 0
        a //= prime
        b //= prime

    return result * pow(prime, primes, modulus) % modulus


def compute_binomial_mod_n(a: int, b: int, n: int) -> int:
    """
    C(a, b) mod n using prime-power factorization, generalized Lucas and CRT.

    Args:
        a, b: arbitrary-precision integers
        n: positive modulus; its prime factors must be small enough for
           trial division

    Returns:
        C(a, b) mod n, which is 0 when b < 0 or b > a

    Raises:
        ValueError: if n < 1
    """
    if n < 1:
        raise ValueError(f"modulus must be positive, got {n}")
    if b < 0 or b > a:
        return 0

    congruences: list[Congruence] = []
    for prime_power in prime_factorization(n):
        residue = prime_power_binomial_mod(a, b, prime_power)
        congruences.append(Congruence(residue, prime_power.value))

    return effective_crt(congruences)


# Example usage
if __name__ == "__main__":
    a, b, n = 306255, 151923, 7 ** 3
    print(f"C({a}, {b}) mod {n} =", compute_binomial_mod_n(a, b, n))
