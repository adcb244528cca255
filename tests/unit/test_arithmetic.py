"""Unit tests for the algebraic arithmetic engine."""

import logging
import math
from fractions import Fraction

import pytest

from qbar import (AlgebraicNum, DivisionByZeroError, add, sub, mul, div, neg, inv, pow_int, pow_rational, root,
                  sqrt, conj, real, imag, abs, abs2, sgn, floor, ceil, evaluate, root_of_unity)
from qbar.kernel.polynomial import key


class TestBinaryOperations:
    def test_sum_of_square_roots(self, sqrt2, sqrt3):
        total = sqrt2 + sqrt3
        assert key(total.minpoly()) == (1, 0, -10, 0, 1)
        assert math.isclose(float(total), math.sqrt(2) + math.sqrt(3))

    def test_sum_picks_the_right_conjugate(self, sqrt2, sqrt3):
        assert math.isclose(float(sqrt2 - sqrt3), math.sqrt(2) - math.sqrt(3))
        assert math.isclose(float(sqrt3 - sqrt2), math.sqrt(3) - math.sqrt(2))

    def test_cancellation(self, sqrt2):
        assert (sqrt2 + 1) - sqrt2 == 1
        assert sqrt2 - sqrt2 == 0
        assert (sqrt2 + sqrt2) == 2*sqrt2

    def test_products(self, sqrt2, sqrt3):
        assert sqrt2*sqrt2 == 2
        assert key((sqrt2*sqrt3).minpoly()) == (1, 0, -6)
        assert mul(0, sqrt2).is_zero()
        assert mul(sqrt2, Fraction(1, 2)) == sqrt2/2

    def test_division(self, sqrt2, sqrt3):
        assert (sqrt2*sqrt3)/sqrt3 == sqrt2
        assert div(1, sqrt2) == sqrt2/2
        assert 6/sqrt3 == 2*sqrt3

    def test_division_by_zero(self, sqrt2):
        with pytest.raises(DivisionByZeroError):
            sqrt2/0
        with pytest.raises(ZeroDivisionError):
            div(sqrt2, sqrt2 - sqrt2)
        with pytest.raises(DivisionByZeroError):
            inv(AlgebraicNum(0))

    def test_plain_numbers(self):
        assert add(1, 2) == 3
        assert sub(Fraction(1, 2), 0.25) == Fraction(1, 4)
        assert mul(1j, 1j) == -1

    def test_config_of_left_operand(self, sqrt2):
        from qbar import PrecisionConfig
        config = PrecisionConfig(default_prec=96)
        a = AlgebraicNum(sqrt2, config)
        assert (a + sqrt(3)).config() is config
        assert (1 + a).config() is config

    def test_logs_resultant_work(self, sqrt2, sqrt3, caplog):
        with caplog.at_level(logging.DEBUG, logger='qbar.kernel.arithmetic'):
            add(sqrt2, sqrt3)
        assert any('sum of numbers' in record.getMessage() for record in caplog.records)


class TestUnaryOperations:
    def test_neg_and_inv(self, sqrt2):
        assert neg(sqrt2).sign_real() == -1
        assert key(inv(sqrt2).minpoly()) == (2, 0, -1)
        assert inv(inv(sqrt2)) == sqrt2
        assert inv(AlgebraicNum(Fraction(2, 3))) == Fraction(3, 2)

    def test_integer_powers(self, sqrt2, i):
        assert sqrt2**2 == 2
        assert sqrt2**3 == 2*sqrt2
        assert sqrt2**0 == 1
        assert sqrt2**-2 == Fraction(1, 2)
        assert i**2 == -1
        assert i**4 == 1
        assert root_of_unity(3)**3 == 1
        assert pow_int(AlgebraicNum(0), 0) == 1
        with pytest.raises(DivisionByZeroError):
            pow_int(0, -1)

    def test_fifth_root_of_two(self):
        r = root(2, 5)
        assert key(r.minpoly()) == (1, 0, 0, 0, 0, -2)
        assert r.is_real()
        assert math.isclose(float(r), 1.148698354997035)

    def test_real_branch_for_odd_roots(self):
        assert root(-8, 3) == -2
        assert AlgebraicNum(-8)**Fraction(1, 3) == -2
        assert root(-2, 3).is_real()
        assert root(-2, 3).sign_real() == -1

    def test_principal_branch(self, i):
        assert sqrt(-1) == i
        assert sqrt(-4) == 2*i
        assert AlgebraicNum(-1)**Fraction(1, 2) == i
        w = sqrt(i)
        assert w.sign_real() == 1
        assert w.sign_imag() == 1
        assert w*w == i
        assert root(AlgebraicNum(-1j), 2).sign_imag() == -1

    def test_rational_powers(self):
        assert AlgebraicNum(4)**Fraction(3, 2) == 8
        assert AlgebraicNum(4)**Fraction(-1, 2) == Fraction(1, 2)
        assert pow_rational(0, Fraction(1, 3)).is_zero()
        with pytest.raises(DivisionByZeroError):
            pow_rational(0, Fraction(-1, 3))

    def test_root_index(self):
        with pytest.raises(ValueError):
            root(2, 0)
        assert root(2, 1) == 2


class TestProjections:
    def test_parts(self):
        z = AlgebraicNum(3 + 4j)
        assert real(z) == 3
        assert imag(z) == 4
        assert abs(z) == 5
        assert abs2(z) == 25
        assert conj(z) == AlgebraicNum(3 - 4j)
        assert sgn(z) == z/5
        assert abs(sgn(z)) == 1

    def test_parts_of_irrational(self, sqrt2, i):
        z = sqrt2 + i
        assert real(z) == sqrt2
        assert imag(z) == 1
        assert abs(z) == sqrt(3)
        assert conj(conj(z)) == z

    def test_real_numbers(self, sqrt2):
        assert abs(-sqrt2) == sqrt2
        assert sgn(-sqrt2) == -1
        assert sgn(AlgebraicNum(0)).is_zero()
        assert imag(sqrt2) == 0

    def test_floor_and_ceil(self, sqrt2):
        assert floor(sqrt2) == 1
        assert ceil(sqrt2) == 2
        assert floor(-sqrt2) == -2
        assert ceil(-sqrt2) == -1
        assert floor(AlgebraicNum(Fraction(7, 2))) == 3
        assert ceil(AlgebraicNum(-3)) == -3
        assert floor(AlgebraicNum(2.5 + 1j)) == 2

    def test_floor_and_ceil_beyond_double_precision(self, sqrt2):
        big = 2**60
        assert floor(sub(big + 1, sqrt2)) == big - 1
        assert ceil(sqrt2 + big) == big + 2
        assert floor(-(sqrt2 + big)) == -big - 2
        assert ceil(AlgebraicNum(big + 1) - sqrt2) == big


class TestEvaluate:
    def test_polynomial_at_root(self, sqrt2):
        assert evaluate([1, 0, -2], sqrt2).is_zero()
        assert evaluate([1, 1], sqrt2) == sqrt2 + 1
        assert evaluate([Fraction(1, 2), 0, 0], sqrt2) == 1

    def test_constant_and_rational_point(self):
        assert evaluate([5], AlgebraicNum(7)) == 5
        assert evaluate([1, 0, 1], Fraction(1, 2)) == Fraction(5, 4)
