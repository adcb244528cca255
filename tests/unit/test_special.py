"""Unit tests for roots of unity and trigonometric values at rational multiples of pi."""

from fractions import Fraction

import pytest

from qbar import (AlgebraicNum, DivisionByZeroError, NotRootOfUnityError, PiMultiple, PI, sin, cos, tan,
                  root_of_unity, exp_pi_i, cos_pi, sin_pi, tan_pi, asin_pi, acos_pi, atan_pi, is_root_of_unity,
                  root_of_unity_as_args, log_pi_i, sqrt)
from qbar.kernel.polynomial import key


class TestRootsOfUnity:
    def test_small_orders(self, i):
        assert root_of_unity(1) == 1
        assert root_of_unity(2) == -1
        assert root_of_unity(4) == i
        assert root_of_unity(4, 3) == -i
        assert root_of_unity(4, 2) == -1

    def test_reduced_by_gcd(self):
        z = root_of_unity(12, 4)
        assert key(z.minpoly()) == (1, 1, 1)
        assert z == root_of_unity(3)
        assert root_of_unity(5, 7) == root_of_unity(5, 2)

    def test_primitive_fifth_root(self):
        z = root_of_unity(5)
        assert key(z.minpoly()) == (1, 1, 1, 1, 1)
        assert z.sign_real() == 1
        assert z.sign_imag() == 1
        assert z**5 == 1

    def test_invalid_order(self):
        with pytest.raises(ValueError):
            root_of_unity(0)

    def test_exp_pi_i(self, i):
        assert exp_pi_i(Fraction(1, 2)) == i
        assert exp_pi_i(1) == -1
        assert exp_pi_i(Fraction(-1, 3)) == root_of_unity(6, 5)


class TestTrigonometry:
    def test_rational_values(self):
        assert cos_pi(0) == 1
        assert cos_pi(1) == -1
        assert cos_pi(Fraction(1, 2)) == 0
        assert cos_pi(Fraction(1, 3)) == Fraction(1, 2)
        assert cos_pi(Fraction(2, 3)) == Fraction(-1, 2)
        assert sin_pi(Fraction(1, 6)) == Fraction(1, 2)
        assert sin_pi(Fraction(-1, 2)) == -1

    def test_quadratic_values(self, sqrt2):
        assert cos_pi(Fraction(1, 4)) == sqrt2/2
        assert sin_pi(Fraction(3, 4)) == sqrt2/2
        assert cos_pi(Fraction(5, 4)) == -sqrt2/2
        assert cos_pi(Fraction(1, 6)) == sqrt(3)/2
        assert key(cos_pi(Fraction(1, 5)).minpoly()) == (4, -2, -1)

    def test_cubic_value(self):
        c = cos_pi(Fraction(2, 7))
        assert key(c.minpoly()) == (8, 4, -4, -1)
        assert c.sign_real() == 1

    def test_tangent(self):
        assert tan_pi(Fraction(1, 4)) == 1
        assert tan_pi(Fraction(-1, 4)) == -1
        assert tan_pi(Fraction(1, 3)) == sqrt(3)
        assert tan_pi(0) == 0
        with pytest.raises(DivisionByZeroError):
            tan_pi(Fraction(1, 2))
        with pytest.raises(DivisionByZeroError):
            tan_pi(Fraction(-3, 2))

    def test_pi_multiples(self, sqrt2):
        assert cos(PI/4) == sqrt2/2
        assert sin(PI/6) == Fraction(1, 2)
        assert tan(PI*Fraction(1, 4)) == 1
        assert sin(-PI/2) == -1
        assert cos(2*PI) == 1
        assert PI/3 == PiMultiple(Fraction(1, 3))
        assert PI/4 + PI/4 == PI/2
        with pytest.raises(TypeError):
            cos(0.5)
        with pytest.raises(TypeError):
            sin(Fraction(1, 2))


class TestRecognition:
    def test_is_root_of_unity(self, i, sqrt2):
        assert is_root_of_unity(i)
        assert is_root_of_unity(-1)
        assert is_root_of_unity(root_of_unity(15, 4))
        assert not is_root_of_unity(sqrt2)
        assert not is_root_of_unity(AlgebraicNum(Fraction(3, 5) + Fraction(4, 5)*1j))
        assert not is_root_of_unity(2)

    def test_as_args(self):
        assert root_of_unity_as_args(root_of_unity(12, 5)) == (12, 5)
        assert root_of_unity_as_args(root_of_unity(12, 4)) == (3, 1)
        assert root_of_unity_as_args(1) == (1, 0)
        assert root_of_unity_as_args(-1) == (2, 1)
        with pytest.raises(NotRootOfUnityError):
            root_of_unity_as_args(sqrt(2))

    def test_log_pi_i(self, i):
        assert log_pi_i(1) == 0
        assert log_pi_i(-1) == 1
        assert log_pi_i(i) == Fraction(1, 2)
        assert log_pi_i(-i) == Fraction(-1, 2)
        assert log_pi_i(root_of_unity(6, 5)) == Fraction(-1, 3)


class TestInverseTrigonometry:
    def test_acos(self, sqrt2):
        assert acos_pi(Fraction(1, 2)) == Fraction(1, 3)
        assert acos_pi(-1) == 1
        assert acos_pi(0) == Fraction(1, 2)
        assert acos_pi(sqrt2/2) == Fraction(1, 4)

    def test_asin(self, sqrt2):
        assert asin_pi(1) == Fraction(1, 2)
        assert asin_pi(Fraction(-1, 2)) == Fraction(-1, 6)
        assert asin_pi(-sqrt2/2) == Fraction(-1, 4)

    def test_atan(self):
        assert atan_pi(1) == Fraction(1, 4)
        assert atan_pi(0) == 0
        assert atan_pi(-sqrt(3)) == Fraction(-1, 3)

    def test_not_rational_multiple_of_pi(self, i):
        with pytest.raises(NotRootOfUnityError):
            acos_pi(Fraction(1, 3))
        with pytest.raises(NotRootOfUnityError):
            acos_pi(2)
        with pytest.raises(ValueError):
            asin_pi(i)
        with pytest.raises(NotRootOfUnityError):
            atan_pi(2)
