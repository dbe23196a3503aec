"""
Modular arithmetic primitives shared by the binomial evaluators.

- extended_euclid: gcd plus Bezout coefficients, with quotients truncated toward
  zero so negative inputs produce the same coefficients as a BigInteger-style
  division would
- modular_inverse: inverse mod n built on the solver above
- is_prime: deterministic Miller-Rabin for 64-bit inputs (memoized)
- effective_crt: Chinese Remainder Theorem over pairwise-coprime moduli
"""
from functools import lru_cache
from typing import NamedTuple


class Congruence(NamedTuple):
    """x ≡ residue (mod modulus)."""
    residue: int
    modulus: int


def _truncated_quotient(a: int, b: int) -> int:
    """a / b rounded toward zero (Python's // rounds toward -inf)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def extended_euclid(a: int, b: int) -> tuple[int, int, int]:
    """
    Extended Euclidean algorithm.

    Returns (r, s, t) with a*s + b*t == r == gcd(a, b) and r >= 0.
    extended_euclid(0, 0) degenerates to (0, 1, 0).
    """
    r0, s0, t0 = a, 1, 0
    r1, s1, t1 = b, 0, 1

    while r1 != 0:
        q = _truncated_quotient(r0, r1)
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1

    if r0 < 0:
        return -r0, -s0, -t0
    return r0, s0, t0


def gcd(a: int, b: int) -> int:
    return extended_euclid(a, b)[0]


def modular_inverse(a: int, n: int) -> int:
    """
    Inverse of a modulo n, normalized into [0, n).

    gcd(a, n) must be 1. This is not checked: for non-coprime arguments the
    returned value is meaningless.
    """
    _, inverse, _ = extended_euclid(a, n)
    # |inverse| < n but it may be negative
    return (inverse + n) % n


# Miller–Rabin primality test (memoized)
@lru_cache(maxsize=128)
def is_prime(n: int, bases: tuple[int, ...] = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)) -> bool:
    if n < 2:
        return False
    for p in (2, 3, 5, 7, 11, 13, 17, 19, 23):
        if n == p:
            return True
        if n % p == 0:
            return False

    # n - 1 = d * 2^s
    d: int = n - 1
    s: int = 0
    while (d & 1) == 0:
        d >>= 1
        s += 1

    def check(a):
        x: int = pow(a, d, n)
        if x == 1 or x == n - 1:
            return True
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                return True
        return False

    for a in bases:
        if a % n == 0:
            continue
        if not check(a):
            return False
    return True


def effective_crt(congruences: list[Congruence]) -> int:
    """
    Solve a system of congruences with pairwise-coprime moduli.

    Args:
        congruences: (residue, modulus) pairs, e.g. [(3, 5), (4, 7)]

    Returns:
        The unique x in [0, M) satisfying every congruence, where M is the
        product of the moduli. For [(3, 5), (4, 7)] this is 18. An empty
        system returns 0, the only residue mod 1.
    """
    overall_modulus = 1
    for _, modulus in congruences:
        overall_modulus *= modulus

    result = 0
    for residue, modulus in congruences:
        # product of the other moduli
        others = overall_modulus // modulus
        result += residue * others * modular_inverse(others, modulus)
        result %= overall_modulus

    return result % overall_modulus
