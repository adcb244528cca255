
from fractions import Fraction

from mpmath import mp, iv

from qbar.kernel.errors import IntervalError


def interval_from_fraction(q):
    q = Fraction(q)
    if q.denominator == 1:
        return iv.mpf(q.numerator)
    return iv.mpf(q.numerator)/iv.mpf(q.denominator)

def fraction_of(x):
    """ the exact value of the lower endpoint of the interval x, independent of the working precision.
    """
    sign, man, exp, _ = x._mpi_[0]
    if sign:
        man = -man
    return Fraction(man)*Fraction(2)**exp

def _sqr(x):
    y = abs(x)
    return y*y

def _sign(x):
    """ sign of the real interval x, or None if x contains zero (and is not exactly zero).
    """
    if x.a > 0:
        return 1
    if x.b < 0:
        return -1
    if x.a >= 0 and x.b <= 0:
        return 0
    return None

def _upper(x):
    """ a degenerate interval which is an upper bound for every point of x.
    """
    return x.b

def _midpoint(x):
    return (mp.mpf(x.a) + mp.mpf(x.b))/2

def _pow2(e):
    return iv.mpf(mp.ldexp(mp.mpf(1), e))


class Box:
    def __init__(self, re, im=None):
        """ A closed complex rectangle re + im*I, where re and im are mpmath.iv intervals.
            im=None means the box lies on the real axis, i.e. the imaginary part is exactly zero.
            Arithmetic is outward rounded at the current iv precision, so the result of an
            operation always encloses the exact result for all points of the operands.
        """
        self._re = re
        self._im = im

    @classmethod
    def from_fraction(cls, re, im=None):
        if im is None or Fraction(im) == 0:
            return cls(interval_from_fraction(re))
        return cls(interval_from_fraction(re), interval_from_fraction(im))

    @classmethod
    def from_point(cls, z):
        """ box around the exact binary value of an mpmath number (or Python int/float/complex).
        """
        if isinstance(z, (complex, mp.mpc)):
            if z.imag != 0:
                return cls(iv.mpf(z.real), iv.mpf(z.imag))
            z = z.real
        return cls(iv.mpf(z))

    @classmethod
    def around(cls, center, radius, real=False):
        """ smallest box (up to rounding) containing the disc of the given radius (an iv interval)
            around every point of the box center.
        """
        r = _upper(radius)*iv.mpf([-1, 1])
        if real:
            return cls(center.real() + r)
        return cls(center.real() + r, center.imag() + r)

    def real(self):
        return self._re

    def imag(self):
        if self._im is None:
            return iv.mpf(0)
        return self._im

    def is_real(self):
        return self._im is None

    def __repr__(self):
        if self._im is None:
            return 'Box({})'.format(self._re)
        return 'Box({}, {})'.format(self._re, self._im)

    def __neg__(self):
        if self._im is None:
            return Box(-self._re)
        return Box(-self._re, -self._im)

    def conjugate(self):
        if self._im is None:
            return self
        return Box(self._re, -self._im)

    def __add__(self, other):
        other = _as_box(other)
        if self._im is None and other._im is None:
            return Box(self._re + other._re)
        return Box(self._re + other._re, self.imag() + other.imag())

    __radd__ = __add__

    def __sub__(self, other):
        return self + (-_as_box(other))

    def __rsub__(self, other):
        return _as_box(other) - self

    def __mul__(self, other):
        other = _as_box(other)
        a, b = self._re, self._im
        c, d = other._re, other._im
        if b is None and d is None:
            return Box(a*c)
        if b is None:
            return Box(a*c, a*d)
        if d is None:
            return Box(a*c, b*c)
        return Box(a*c - b*d, a*d + b*c)

    __rmul__ = __mul__

    def inverse(self):
        if self._im is None:
            if _sign(self._re) in (None, 0):
                raise IntervalError('cannot invert a real interval containing zero.')
            return Box(1/self._re)
        d = self.abs2()
        if not d.a > 0:
            raise IntervalError('cannot invert a box containing zero.')
        return Box(self._re/d, -self._im/d)

    def __truediv__(self, other):
        return self*_as_box(other).inverse()

    def __rtruediv__(self, other):
        return _as_box(other)*self.inverse()

    def __pow__(self, n):
        if n < 0:
            return (self**(-n)).inverse()
        result = Box(iv.mpf(1))
        base = self
        while n:
            if n & 1:
                result = result*base
            n >>= 1
            if n:
                base = base*base
        return result

    def abs2(self):
        """ interval enclosing |z|^2 for z in the box.
        """
        if self._im is None:
            return _sqr(self._re)
        return _sqr(self._re) + _sqr(self._im)

    def abs(self):
        if self._im is None:
            return abs(self._re)
        return iv.sqrt(self.abs2())

    def magnitude(self):
        """ a degenerate interval bounding |z| from above on the box.
        """
        return _upper(abs(self._re) + abs(self.imag()))

    def width(self):
        """ a degenerate interval bounding the larger side length of the box from above.
        """
        w = _upper(self._re.b - self._re.a)
        if self._im is not None:
            v = _upper(self._im.b - self._im.a)
            if v > w:
                w = v
        return w

    def is_narrower_than(self, bits):
        """ check whether the width of the box is at most 2^-bits * max(1, |z|).
        """
        scale = self.magnitude()
        if scale.b < 1:
            scale = iv.mpf(1)
        target = _pow2(-bits)*scale
        return self.width().b <= target.a

    def mid(self):
        """ an (inexact) mpmath point near the center of the box, at the current mp precision.
        """
        if self._im is None:
            return _midpoint(self._re)
        return mp.mpc(_midpoint(self._re), _midpoint(self._im))

    def sign_real(self):
        return _sign(self._re)

    def sign_imag(self):
        if self._im is None:
            return 0
        return _sign(self._im)

    def contains_zero(self):
        return self.sign_real() in (None, 0) and self.sign_imag() in (None, 0)

    def meets_real_axis(self):
        return self._im is None or _sign(self._im) is None

    def overlaps(self, other):
        if not _overlap(self._re, other._re):
            return False
        return _overlap(self.imag(), other.imag())

    def contains(self, other):
        """ check whether other lies inside self.
        """
        if not _inside(other._re, self._re):
            return False
        return _inside(other.imag(), self.imag())

    def project_real(self):
        """ the real box with the same real part.
        """
        return Box(self._re)


def _overlap(x, y):
    return x.a <= y.b and y.a <= x.b

def _inside(x, y):
    return y.a <= x.a and x.b <= y.b

def _as_box(value):
    if isinstance(value, Box):
        return value
    if isinstance(value, Fraction):
        return Box(interval_from_fraction(value))
    return Box(iv.mpf(value))

def evaluate(coefficients, box):
    """ interval Horner evaluation of the polynomial with the given integer coefficients
        (highest degree first) on the box.
    """
    result = Box(iv.mpf(coefficients[0]))
    for c in coefficients[1:]:
        result = result*box + Box(iv.mpf(c))
    return result
