"""
Prime-power factorization of a modulus by trial division.

The binomial evaluator splits n into prime powers p^s and works in each Z/p^s
separately, so the factorization is returned as ordered (prime, exponent)
pairs rather than a flat list of prime factors.

Trial division advances the candidate by one and stops once candidate^2
exceeds the remaining cofactor. That is O(sqrt(n)) and fine for moduli built
from small primes, but it is not meant for cryptographic-size n: a modulus
with a large prime factor makes factoring the dominant cost.

Results are memoized with an LRU cache; call clear_caches() to free it.
"""
from functools import lru_cache
from typing import NamedTuple


class PrimePower(NamedTuple):
    """p^s, the modulus of one branch of the computation."""
    prime: int
    exponent: int

    @property
    def value(self) -> int:
        return self.prime ** self.exponent


def clear_caches():
    """Clear the memoized factorizations."""
    _prime_factorization_cached.cache_clear()


@lru_cache(maxsize=256)
def _prime_factorization_cached(n: int) -> tuple[PrimePower, ...]:
    """Cached factorization implementation (returns tuple for hashability)."""
    factors: list[PrimePower] = []

    candidate = 2
    while n != 1:
        if candidate * candidate > n:
            # whatever is left has no divisor <= its square root
            factors.append(PrimePower(n, 1))
            break

        exponent = 0
        while n % candidate == 0:
            n //= candidate
            exponent += 1
        if exponent > 0:
            factors.append(PrimePower(candidate, exponent))

        candidate += 1

    return tuple(factors)


def prime_factorization(n: int) -> list[PrimePower]:
    """
    Factorize n into prime powers.

    Args:
        n: Positive integer to factorize

    Returns:
        List of PrimePower in strictly increasing prime order; the product of
        their values is n. prime_factorization(1) is empty.

    Raises:
        ValueError: if n < 1
    """
    if n < 1:
        raise ValueError(f"cannot factor {n}: n must be a positive integer")
    return list(_prime_factorization_cached(n))


# Example usage
if __name__ == "__main__":
    n = 2 ** 4 * 3 ** 2 * 7 ** 3 * 101
    print("Prime powers of", n, ":", [(p, s) for p, s in prime_factorization(n)])
