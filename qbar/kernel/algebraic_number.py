
import cmath
import math
import numbers
import sys
from fractions import Fraction

from mpmath import mp

from qbar.kernel.errors import InternalConsistencyError
from qbar.kernel.interval import Box
from qbar.kernel.isolation import refine_root
from qbar.kernel.polynomial import from_coefficients, linear, key, height, rational_root, to_rational
from qbar.kernel.precision import DEFAULT_CONFIG, working_precision


class AlgebraicNum:
    def __init__(self, value=0, config=None):
        """ An exact algebraic number, stored as its minimal polynomial (irreducible, primitive,
            integer coefficients, positive leading coefficient) together with a Box isolating
            one of the roots of that polynomial. value may be an int, a Fraction, a finite float
            or complex (converted exactly), or another AlgebraicNum. For example:

            >>> AlgebraicNum(Fraction(3, 4)).minpoly()
            Poly(4*x - 3, x, domain='ZZ')
            >>> AlgebraicNum(1 + 2j).minpoly()
            Poly(x**2 - 2*x + 5, x, domain='ZZ')

            Other numbers are built by arithmetic, by roots(), by the special value generators
            or by guess().
        """
        if isinstance(value, AlgebraicNum):
            self._minpoly = value._minpoly
            self._box = value._box
            if config is None:
                config = value._config
        else:
            self._minpoly, self._box = _exact(value)
        self._config = DEFAULT_CONFIG if config is None else config
        self._conjugates = None

    @classmethod
    def _from_root(cls, minpoly, box, config=None):
        """ the root of the (normalized, irreducible) polynomial minpoly isolated by box.
        """
        num = cls.__new__(cls)
        num._minpoly = minpoly
        num._box = box
        num._config = DEFAULT_CONFIG if config is None else config
        num._conjugates = None
        return num

    def config(self):
        return self._config

    def minpoly(self):
        return self._minpoly

    def degree(self):
        return self._minpoly.degree()

    def box(self):
        """ the currently stored isolating box (of whatever width).
        """
        return self._box

    def refine(self, bits):
        """ shrink the stored box until its width is at most 2^-bits * max(1, |self|).
        """
        box = self._box
        if not box.is_narrower_than(bits):
            box = refine_root(self._minpoly, box, bits, self._config)
            self._box = box
        return box

    def enclosure(self, bits=None):
        if bits is None:
            bits = self._config.default_prec()
        return self.refine(bits)

    def numeric(self, bits=None):
        """ project to mpmath intervals: a real iv.mpf if self is real, otherwise the pair
            (real part, imaginary part).
        """
        box = self.enclosure(bits)
        if box.is_real():
            return box.real()
        return box.real(), box.imag()

    ## Structural queries

    def is_rational(self):
        return self.degree() == 1

    def rational(self):
        """ the value as a Fraction. Only defined for rational numbers.
        """
        if not self.is_rational():
            raise ValueError('{} is not rational.'.format(self))
        return rational_root(self._minpoly)

    def is_zero(self):
        return key(self._minpoly) == (1, 0)

    def is_one(self):
        return key(self._minpoly) == (1, -1)

    def is_integer(self):
        return self.is_rational() and self._minpoly.LC() == 1

    def is_algebraic_integer(self):
        return self._minpoly.LC() == 1

    def is_real(self):
        return self._box.is_real()

    def height(self):
        return height(self._minpoly)

    def height_bits(self):
        return self.height().bit_length()

    def denominator(self):
        """ the smallest positive integer d such that d*self is an algebraic integer, i.e. the
            leading coefficient of the minimal polynomial.
        """
        return int(self._minpoly.LC())

    def numerator(self):
        return self*self.denominator()

    def conjugates(self):
        """ all roots of the minimal polynomial in root order (self among them).
        """
        if self._conjugates is None:
            from qbar.kernel.roots import roots
            self._conjugates = tuple(roots(self._minpoly, config=self._config))
        return list(self._conjugates)

    ## Signs

    def sign_real(self):
        """ sign of the real part: -1, 0 or 1.
        """
        if self.is_rational():
            q = self.rational()
            return (q > 0) - (q < 0)
        if self.is_real():
            ## an irrational real number is never 0, so refinement decides the sign
            for prec in self._config.escalation():
                s = self.enclosure(prec).sign_real()
                if s is not None:
                    return s
            raise InternalConsistencyError('could not decide the sign of {}.'.format(self))
        for prec in self._config.escalation(None, self._config.compare_prec()):
            s = self.enclosure(prec).sign_real()
            if s is not None:
                return s
        return arithmetic.real(self).sign_real()

    def sign_imag(self):
        """ sign of the imaginary part. Nonreal boxes never meet the real axis.
        """
        if self.is_real():
            return 0
        return self._box.sign_imag()

    def csgn(self):
        """ the sign of the real part, or of the imaginary part if the real part vanishes.
        """
        s = self.sign_real()
        if s == 0:
            return self.sign_imag()
        return s

    def sgn(self):
        return arithmetic.sgn(self)

    ## Derived numbers

    def real(self):
        return arithmetic.real(self)

    def imag(self):
        return arithmetic.imag(self)

    def conj(self):
        return arithmetic.conj(self)

    def abs(self):
        return arithmetic.abs(self)

    def abs2(self):
        return arithmetic.abs2(self)

    def inv(self):
        return arithmetic.inv(self)

    def sqrt(self):
        return arithmetic.sqrt(self)

    def root(self, n):
        return arithmetic.root(self, n)

    def floor(self):
        return arithmetic.floor(self)

    def ceil(self):
        return arithmetic.ceil(self)

    ## Conversions

    def __complex__(self):
        with working_precision(53):
            z = self.enclosure(53).mid()
        return complex(z)

    def __float__(self):
        if not self.is_real():
            raise TypeError('cannot convert the nonreal number {} to float.'.format(self))
        with working_precision(53):
            x = self.enclosure(53).mid()
        return float(x)

    def __int__(self):
        if not self.is_integer():
            raise ValueError('{} is not an integer.'.format(self))
        return int(self.rational())

    def __bool__(self):
        return not self.is_zero()

    def __repr__(self):
        if self.is_rational():
            return 'AlgebraicNum({})'.format(self.rational())
        with working_precision(24):
            z = self.enclosure(24).mid()
            approx = mp.nstr(z, 6)
        return 'Root {} of {}'.format(approx, self._minpoly.as_expr())

    def __str__(self):
        if self.is_rational():
            return str(self.rational())
        return self.__repr__()

    ## Operators

    def __eq__(self, other):
        if not _is_number(other):
            return NotImplemented
        if not _is_finite(other):
            return False
        return comparison.is_equal(self, other)

    def __ne__(self, other):
        if not _is_number(other):
            return NotImplemented
        if not _is_finite(other):
            return True
        return not comparison.is_equal(self, other)

    def __hash__(self):
        """ equal to the hash of an equal int, Fraction, float or complex.
        """
        if self.is_rational():
            return hash(self.rational())
        parts = self._gaussian_parts()
        if parts is not None:
            return _complex_hash(*parts)
        return hash(key(self._minpoly))

    def _gaussian_parts(self):
        """ (re, im) as Fractions if self = re + im*i with rational re and im, otherwise None.
        """
        if self.degree() != 2 or self.is_real():
            return None
        c2, c1, c0 = key(self._minpoly)
        re = Fraction(-c1, 2*c2)
        im2 = Fraction(c0, c2) - re*re
        n, d = math.isqrt(im2.numerator), math.isqrt(im2.denominator)
        if n*n != im2.numerator or d*d != im2.denominator:
            return None
        return re, self.sign_imag()*Fraction(n, d)

    def __lt__(self, other):
        if not _is_number(other):
            return NotImplemented
        return comparison.cmp_real(self, other) < 0

    def __le__(self, other):
        if not _is_number(other):
            return NotImplemented
        return comparison.cmp_real(self, other) <= 0

    def __gt__(self, other):
        if not _is_number(other):
            return NotImplemented
        return comparison.cmp_real(self, other) > 0

    def __ge__(self, other):
        if not _is_number(other):
            return NotImplemented
        return comparison.cmp_real(self, other) >= 0

    def __add__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.add(self, other)

    def __radd__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.add(other, self)

    def __sub__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.sub(self, other)

    def __rsub__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.sub(other, self)

    def __mul__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.mul(self, other)

    def __rmul__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.mul(other, self)

    def __truediv__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.div(self, other)

    def __rtruediv__(self, other):
        if not _is_number(other):
            return NotImplemented
        return arithmetic.div(other, self)

    def __pow__(self, exponent):
        if isinstance(exponent, AlgebraicNum):
            if not exponent.is_rational():
                raise TypeError('exponent {} is not rational.'.format(exponent))
            exponent = exponent.rational()
        if isinstance(exponent, numbers.Integral):
            return arithmetic.pow_int(self, int(exponent))
        if isinstance(exponent, Fraction):
            return arithmetic.pow_rational(self, exponent)
        return NotImplemented

    def __neg__(self):
        return arithmetic.neg(self)

    def __pos__(self):
        return self

    def __abs__(self):
        return arithmetic.abs(self)


def _is_number(value):
    return isinstance(value, (AlgebraicNum, numbers.Number))

def _is_finite(value):
    if isinstance(value, (float, complex)):
        return cmath.isfinite(value)
    return True

def _complex_hash(re, im):
    ## the numeric hash of Python's complex type, applied to exact parts
    h = hash(re) + sys.hash_info.imag*hash(im)
    m = 2**(sys.hash_info.width - 1)
    h = (h & (m - 1)) - (h & m)
    return -2 if h == -1 else h

def _exact(value):
    """ minimal polynomial and isolating box of an exact int, Fraction, float or complex value.
    """
    if isinstance(value, complex):
        re, im = _exact_real(value.real), _exact_real(value.imag)
    else:
        re, im = _exact_real(value), Fraction(0)
    if im == 0:
        return linear(re.numerator, re.denominator), Box.from_fraction(re)
    ## (x - re)^2 + im^2
    p = from_coefficients([1, -2*re, re*re + im*im])
    return p, Box.from_fraction(re, im)

def _exact_real(value):
    if isinstance(value, bool):
        return Fraction(int(value))
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ValueError('cannot convert {} to an algebraic number.'.format(value))
        return Fraction(value)
    if isinstance(value, (numbers.Rational, Fraction)):
        return Fraction(value.numerator, value.denominator)
    try:
        c = to_rational(value)
    except (TypeError, ValueError):
        raise TypeError('cannot convert {!r} to an algebraic number.'.format(value))
    return Fraction(int(c.p), int(c.q))


## the engines implement the operators above and need AlgebraicNum themselves
from qbar.kernel import arithmetic, comparison  # noqa: E402
