"""
Pascal's square modulo a prime power.

Cell (row, col) holds C(row + col, col) mod p^s: the first row and column are
1 and every other cell is the sum of the cell above and the cell to its left.
Written to a text file as a fixed-width grid, optionally keeping only the
leading base-p digit of each residue, which exposes the self-similar pattern
behind the generalized Lucas theorem.
"""
import argparse
import sys
from pathlib import Path

import numpy as np

from number_theory import is_prime

# Cumulative sums are kept in int64 while they provably fit
_INT64_SAFE = 1 << 62


def pascal_square(size: int, modulus: int) -> np.ndarray:
    """
    Build the size x size Pascal's square mod modulus.

    Each row is the running sum of the row above: with row[0] == 1 on every
    row, row[c] = row[c-1] + above[c] unrolls to sum(above[:c+1]).
    """
    if size < 1:
        raise ValueError(f"size must be positive, got {size}")
    if modulus < 2:
        raise ValueError(f"modulus must be at least 2, got {modulus}")

    # row sums stay below size * modulus before reduction
    dtype = np.int64 if size * modulus < _INT64_SAFE else object
    square = np.ones((size, size), dtype=dtype)
    for row in range(1, size):
        square[row] = np.cumsum(square[row - 1]) % modulus
    return square


def leading_digits(square: np.ndarray, prime: int, exponent: int) -> np.ndarray:
    """Keep only the leading base-p digit of residues mod p^s."""
    return square // prime ** (exponent - 1)


def square_filename(modulus: int, leading_only: bool) -> str:
    suffix = "_LastDigit" if leading_only else ""
    return f"Mod{modulus}{suffix}.txt"


def write_square(square: np.ndarray, path: Path | str):
    """
    Write the grid with every value right-aligned in a field one wider than
    the largest value.
    """
    width = len(str(int(square.max()))) + 1
    with open(path, "w") as file:
        for row in square:
            file.write("".join(f"{int(value):>{width}}" for value in row))
            file.write("\n")


def generate(prime: int, exponent: int, size: int, leading_only: bool = False,
             directory: Path | str = ".") -> Path:
    """
    Build Pascal's square mod prime^exponent and write it under directory.

    Returns:
        Path of the written file

    Raises:
        ValueError: if prime is not prime, exponent < 1 or size < 1
    """
    if not is_prime(prime):
        raise ValueError(f"{prime} is not prime")
    if exponent < 1:
        raise ValueError(f"exponent must be at least 1, got {exponent}")

    modulus = prime ** exponent
    square = pascal_square(size, modulus)
    if leading_only:
        square = leading_digits(square, prime, exponent)

    path = Path(directory) / square_filename(modulus, leading_only)
    write_square(square, path)
    return path


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Write Pascal's square mod p^s to a text file.")
    parser.add_argument("--prime", type=int, help="prime p")
    parser.add_argument("--power", type=int, help="exponent s")
    parser.add_argument("--size", type=int, help="number of rows/columns to generate")
    parser.add_argument("--leading", dest="leading", action="store_true",
                        help="keep only the leading base-p digit")
    parser.add_argument("--all-digits", dest="leading", action="store_false",
                        help="keep every base-p digit")
    parser.add_argument("--output-dir", default=".", help="directory for the Mod*.txt file")
    # prompt when neither digit flag is given
    parser.set_defaults(leading=None)
    args = parser.parse_args(argv)

    try:
        if args.prime is None or args.power is None:
            print("Pascal's Square Mod (in form p^s, where p is prime):")
        prime = args.prime if args.prime is not None else int(input("Prime: "))
        power = args.power if args.power is not None else int(input("Power: "))
        if args.leading is None:
            answer = input("Leftmost digit (l) or all digits (a) in base p? ")
            leading_only = answer.strip().lower() == "l"
        else:
            leading_only = args.leading
        size = args.size if args.size is not None else int(input("Number of rows/columns to generate: "))

        path = generate(prime, power, size, leading_only, args.output_dir)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Wrote {path}")


if __name__ == "__main__":
    main()
