"""
Tests for the Pascal's square generator.

Tests verify:
1. Correctness: every cell equals C(row + col, col) mod p^s
2. Leading-digit mode and file naming
3. File layout: fixed-width, right-aligned columns
4. Command line: flags and interactive prompts
"""

import math

import numpy as np
import pytest

from pascal_square import (
    pascal_square,
    leading_digits,
    square_filename,
    write_square,
    generate,
    main,
)


# ============================================================================
# PART 1: GRID CONTENTS
# ============================================================================

class TestPascalSquare:
    """Test the grid values."""

    @pytest.mark.parametrize("size,modulus", [(5, 7), (30, 343), (40, 8), (25, 1000)])
    def test_cells_are_binomials(self, size, modulus):
        square = pascal_square(size, modulus)
        assert square.shape == (size, size)
        for row in range(size):
            for col in range(size):
                assert square[row, col] == math.comb(row + col, col) % modulus

    def test_first_row_and_column_are_one(self):
        square = pascal_square(10, 5)
        assert np.all(square[0] == 1)
        assert np.all(square[:, 0] == 1)

    def test_symmetric(self):
        square = pascal_square(20, 27)
        assert np.array_equal(square, square.T)

    def test_huge_modulus_uses_python_ints(self):
        """Moduli too large for int64 sums fall back to object arrays"""
        modulus = 2 ** 62
        square = pascal_square(6, modulus)
        assert square.dtype == object
        assert square[5, 5] == math.comb(10, 5)

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            pascal_square(0, 7)
        with pytest.raises(ValueError):
            pascal_square(5, 1)


class TestLeadingDigits:
    """Test leading base-p digit extraction."""

    def test_divides_by_lower_digits(self):
        square = pascal_square(12, 25)
        assert np.array_equal(leading_digits(square, 5, 2), square // 5)

    def test_exponent_one_is_identity(self):
        square = pascal_square(12, 7)
        assert np.array_equal(leading_digits(square, 7, 1), square)

    def test_values_are_digits(self):
        square = leading_digits(pascal_square(30, 3 ** 4), 3, 4)
        assert square.min() >= 0
        assert square.max() <= 2


# ============================================================================
# PART 2: FILE OUTPUT
# ============================================================================

class TestWriteSquare:
    """Test the text layout."""

    def test_filename(self):
        assert square_filename(343, False) == "Mod343.txt"
        assert square_filename(25, True) == "Mod25_LastDigit.txt"

    def test_single_digit_width(self, tmp_path):
        path = tmp_path / "grid.txt"
        write_square(np.array([[1, 1, 1], [1, 2, 3], [1, 3, 6]]), path)
        assert path.read_text() == " 1 1 1\n 1 2 3\n 1 3 6\n"

    def test_width_follows_largest_value(self, tmp_path):
        path = tmp_path / "grid.txt"
        write_square(np.array([[1, 10], [10, 1]]), path)
        assert path.read_text() == "  1 10\n 10  1\n"

    def test_all_zero_grid(self, tmp_path):
        path = tmp_path / "grid.txt"
        write_square(np.zeros((2, 2), dtype=np.int64), path)
        assert path.read_text() == " 0 0\n 0 0\n"


class TestGenerate:
    """Test the end-to-end file generation."""

    def test_writes_mod_file(self, tmp_path):
        path = generate(7, 1, 4, directory=tmp_path)
        assert path == tmp_path / "Mod7.txt"
        assert path.read_text().splitlines() == [
            " 1 1 1 1",
            " 1 2 3 4",
            " 1 3 6 3",
            " 1 4 3 6",
        ]

    def test_leading_digit_file(self, tmp_path):
        path = generate(3, 2, 9, leading_only=True, directory=tmp_path)
        assert path.name == "Mod9_LastDigit.txt"
        rows = [[int(v) for v in line.split()] for line in path.read_text().splitlines()]
        expected = leading_digits(pascal_square(9, 9), 3, 2)
        assert rows == expected.tolist()

    @pytest.mark.parametrize("prime,exponent,size", [(4, 1, 5), (1, 2, 5), (7, 0, 5), (7, 1, 0)])
    def test_invalid_input(self, tmp_path, prime, exponent, size):
        with pytest.raises(ValueError):
            generate(prime, exponent, size, directory=tmp_path)


# ============================================================================
# PART 3: COMMAND LINE
# ============================================================================

class TestMain:
    """Test the command-line entry point."""

    def test_flags(self, tmp_path, capsys):
        main(["--prime", "5", "--power", "2", "--size", "6", "--leading", "--output-dir", str(tmp_path)])
        assert (tmp_path / "Mod25_LastDigit.txt").exists()
        assert "Mod25_LastDigit.txt" in capsys.readouterr().out

    def test_all_digits_flag(self, tmp_path):
        main(["--prime", "2", "--power", "3", "--size", "4", "--all-digits", "--output-dir", str(tmp_path)])
        assert (tmp_path / "Mod8.txt").exists()

    def test_prompts_for_missing_values(self, tmp_path, monkeypatch, capsys):
        answers = iter(["7", "3", "a", "10"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        main(["--output-dir", str(tmp_path)])
        assert (tmp_path / "Mod343.txt").exists()
        assert "Pascal's Square Mod" in capsys.readouterr().out

    def test_malformed_input_exits(self, tmp_path, monkeypatch, capsys):
        answers = iter(["seven"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        with pytest.raises(SystemExit) as exit_info:
            main(["--output-dir", str(tmp_path)])
        assert exit_info.value.code == 1
        assert "Error" in capsys.readouterr().out

    def test_non_prime_exits(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["--prime", "6", "--power", "1", "--size", "3", "--all-digits", "--output-dir", str(tmp_path)])
        assert "not prime" in capsys.readouterr().out
