"""Unit tests for the integer polynomial helpers."""

from fractions import Fraction

import pytest
from sympy import Poly

from qbar.kernel.polynomial import (X, normalize, from_coefficients, coefficients, key, height, linear,
                                    rational_root, irreducible_factors, sum_poly, product_poly, image_poly,
                                    power_poly, negate_poly, reverse_poly, affine_poly, radical_poly,
                                    cyclotomic, chebyshev_t)


class TestNormalize:
    def test_primitive_positive(self):
        assert key(normalize(Poly(-4*X**2 + 8, X))) == (1, 0, -2)

    def test_rational_coefficients(self):
        assert key(from_coefficients([Fraction(1, 2), Fraction(-1, 3)])) == (3, -2)
        assert key(from_coefficients([0.5, 1])) == (1, 2)

    def test_other_generator(self):
        from sympy import Symbol
        y = Symbol('y')
        assert key(normalize(Poly(y**2 - 2, y))) == (1, 0, -2)

    def test_zero_polynomial(self):
        with pytest.raises(ValueError):
            normalize(Poly(0, X))

    def test_linear_and_rational_root(self):
        p = linear(6, -4)
        assert key(p) == (2, 3)
        assert rational_root(p) == Fraction(-3, 2)

    def test_height(self):
        assert height(from_coefficients([3, 0, -7, 1])) == 7
        assert coefficients(from_coefficients([3, 0, -7, 1])) == [3, 0, -7, 1]


class TestFactoring:
    def test_multiplicities(self):
        p = Poly((X - 1)**2*(X**2 - 2), X)
        factors = {key(f): m for f, m in irreducible_factors(p)}
        assert factors == {(1, -1): 2, (1, 0, -2): 1}

    def test_content_is_dropped(self):
        factors = irreducible_factors(Poly(6*X**2 - 6, X))
        assert sorted(key(f) for f, _ in factors) == [(1, -1), (1, 1)]


class TestConstructions:
    def test_sum(self):
        assert key(sum_poly(from_coefficients([1, 0, -2]), from_coefficients([1, 0, -3]))) == (1, 0, -10, 0, 1)

    def test_product(self):
        p = product_poly(from_coefficients([1, 0, -2]), from_coefficients([1, 0, -3]))
        assert key(p) == (1, 0, -12, 0, 36)

    def test_image(self):
        p = image_poly(from_coefficients([1, 0, -2]), Poly(X**2 + 1, X))
        assert key(p) == (1, -6, 9)

    def test_power(self):
        assert key(power_poly(from_coefficients([1, 0, 0, -2]), 3)) == (1, -6, 12, -8)

    def test_negate_and_reverse(self):
        p = from_coefficients([1, 2, 3])
        assert key(negate_poly(p)) == (1, -2, 3)
        assert key(reverse_poly(p)) == (3, 2, 1)
        with pytest.raises(ValueError):
            reverse_poly(from_coefficients([1, 0]))

    def test_affine(self):
        ## roots of x^2 - 2 mapped by a -> 2a + 1: (x - 1)^2 - 8
        assert key(affine_poly(from_coefficients([1, 0, -2]), 2, 1)) == (1, -2, -7)

    def test_radical(self):
        assert key(radical_poly(from_coefficients([1, -2]), 5)) == (1, 0, 0, 0, 0, -2)

    def test_special_polynomials(self):
        assert key(cyclotomic(4)) == (1, 0, 1)
        assert key(cyclotomic(6)) == (1, -1, 1)
        assert coefficients(chebyshev_t(3)) == [4, 0, -3, 0]
