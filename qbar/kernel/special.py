
import logging
import math
from fractions import Fraction

from mpmath import mp, iv
from sympy import totient

from qbar.kernel import arithmetic
from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.comparison import is_equal, cmp_abs
from qbar.kernel.errors import DivisionByZeroError, NotRootOfUnityError
from qbar.kernel.interval import Box
from qbar.kernel.isolation import select_root
from qbar.kernel.polynomial import key, cyclotomic, chebyshev_t, irreducible_factors, normalize
from qbar.kernel.precision import DEFAULT_CONFIG, working_precision


_logger = logging.getLogger(__name__)


class PiMultiple:
    def __init__(self, r=1):
        """ The real number pi*r for a rational r, the argument type of sin, cos and tan.
            PI/3, 2*PI and PiMultiple(Fraction(1, 5)) are all PiMultiples.
        """
        if isinstance(r, PiMultiple):
            r = r.rational()
        self._r = Fraction(r)

    def rational(self):
        return self._r

    def __repr__(self):
        return 'PiMultiple({})'.format(self._r)

    def __eq__(self, other):
        return isinstance(other, PiMultiple) and self._r == other._r

    def __hash__(self):
        return hash((PiMultiple, self._r))

    def __neg__(self):
        return PiMultiple(-self._r)

    def __add__(self, other):
        if not isinstance(other, PiMultiple):
            return NotImplemented
        return PiMultiple(self._r + other._r)

    def __sub__(self, other):
        if not isinstance(other, PiMultiple):
            return NotImplemented
        return PiMultiple(self._r - other._r)

    def __mul__(self, other):
        if not isinstance(other, (int, Fraction)):
            return NotImplemented
        return PiMultiple(self._r*other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not isinstance(other, (int, Fraction)):
            return NotImplemented
        return PiMultiple(self._r/other)


PI = PiMultiple(1)


def _config(config):
    return DEFAULT_CONFIG if config is None else config


## Roots of unity

def root_of_unity(n, k=1, config=None):
    """ exp(2*pi*i*k/n). Its minimal polynomial is the cyclotomic polynomial of n/gcd(n, k).
    """
    config = _config(config)
    n, k = int(n), int(k)
    if n < 1:
        raise ValueError('root_of_unity needs n >= 1, got {}.'.format(n))
    k = k % n
    g = math.gcd(n, k)
    n, k = n//g, k//g
    if n == 1:
        return AlgebraicNum(1, config)
    if n == 2:
        return AlgebraicNum(-1, config)

    def approx(bits):
        t = 2*iv.pi*k/n
        return Box(iv.cos(t), iv.sin(t))
    f, box = select_root([cyclotomic(n)], approx, config)
    return AlgebraicNum._from_root(normalize(f), box, config)

def exp_pi_i(r, config=None):
    """ exp(pi*i*r) for rational r.
    """
    r = Fraction(r)
    return root_of_unity(2*r.denominator, r.numerator, config)


## Trigonometric values at rational multiples of pi

def cos_pi(r, config=None):
    """ cos(pi*r) for rational r, a root of T_q(x) - (-1)^p for r = p/q.
    """
    config = _config(config)
    r = Fraction(r) % 2
    p, q = r.numerator, r.denominator
    if q == 1:
        return AlgebraicNum(1 if p == 0 else -1, config)
    if q == 2:
        return AlgebraicNum(0, config)
    if q == 3:
        return AlgebraicNum(Fraction(1, 2) if p in (1, 5) else Fraction(-1, 2), config)
    poly = chebyshev_t(q) - (-1)**p
    factors = [f for f, _ in irreducible_factors(poly)]

    def approx(bits):
        return Box(iv.cos(iv.pi*p/q))
    f, box = select_root(factors, approx, config)
    return AlgebraicNum._from_root(normalize(f), box, config)

def sin_pi(r, config=None):
    return cos_pi(Fraction(1, 2) - Fraction(r), config)

def tan_pi(r, config=None):
    r = Fraction(r)
    if (r - Fraction(1, 2)).denominator == 1:
        raise DivisionByZeroError('tan(pi*{}) is infinite.'.format(r))
    return arithmetic.div(sin_pi(r, config), cos_pi(r, config))

def _pi_rational(x):
    if not isinstance(x, PiMultiple):
        raise TypeError('expected a PiMultiple, got {!r}.'.format(x))
    return x.rational()

def cos(x, config=None):
    return cos_pi(_pi_rational(x), config)

def sin(x, config=None):
    return sin_pi(_pi_rational(x), config)

def tan(x, config=None):
    return tan_pi(_pi_rational(x), config)


## Recognition of roots of unity

def _order(a):
    """ the multiplicative order of a if a is a root of unity, otherwise None.
        Phi_n has degree phi(n) >= sqrt(n/2), so n <= 2*deg^2 + 2 suffices.
    """
    if not a.is_algebraic_integer():
        return None
    d = a.degree()
    k = key(a.minpoly())
    for n in range(1, 2*d*d + 3):
        if totient(n) == d and key(cyclotomic(n)) == k:
            return n
    return None

def is_root_of_unity(a):
    return _order(arithmetic._coerce(a)) is not None

def root_of_unity_as_args(a):
    """ the pair (n, k) with a = exp(2*pi*i*k/n), n minimal and 0 <= k < n.
    """
    a = arithmetic._coerce(a)
    n = _order(a)
    if n is None:
        raise NotRootOfUnityError('{} is not a root of unity.'.format(a))
    if n <= 2:
        return n, n - 1
    config = a.config()
    bits = config.default_prec() + n.bit_length()
    with working_precision(bits):
        theta = mp.arg(a.enclosure(bits).mid())
        guess = int(mp.nint(theta*n/(2*mp.pi))) % n
    order = [guess] + [k for k in range(n) if k != guess]
    for k in order:
        if math.gcd(n, k) == 1 and is_equal(a, root_of_unity(n, k, config)):
            return n, k
    raise NotRootOfUnityError('no k matches the root of unity {} of order {}.'.format(a, n))

def log_pi_i(a):
    """ the rational r in (-1, 1] with a = exp(pi*i*r).
    """
    n, k = root_of_unity_as_args(a)
    r = Fraction(2*k, n)
    if r > 1:
        r -= 2
    return r


## Inverse trigonometric functions

def _unit_sqrt(a):
    """ sqrt(1 - a^2) for real a with |a| <= 1.
    """
    if not a.is_real() or cmp_abs(a, 1) > 0:
        raise NotRootOfUnityError('{} is not the cosine of a real angle.'.format(a))
    return arithmetic.sqrt(arithmetic.sub(1, arithmetic.mul(a, a)))

def acos_pi(a):
    """ the rational r in [0, 1] with cos(pi*r) = a.
    """
    a = arithmetic._coerce(a)
    i = AlgebraicNum(1j, a.config())
    z = arithmetic.add(a, arithmetic.mul(i, _unit_sqrt(a)))
    if not is_root_of_unity(z):
        raise NotRootOfUnityError('acos({}) is not a rational multiple of pi.'.format(a))
    r = log_pi_i(z)
    _logger.debug('acos(%s) = %s*pi', a, r)
    return r

def asin_pi(a):
    """ the rational r in [-1/2, 1/2] with sin(pi*r) = a.
    """
    return Fraction(1, 2) - acos_pi(a)

def atan_pi(a):
    """ the rational r in (-1/2, 1/2) with tan(pi*r) = a.
    """
    a = arithmetic._coerce(a)
    if not a.is_real():
        raise NotRootOfUnityError('{} is not the tangent of a real angle.'.format(a))
    i = AlgebraicNum(1j, a.config())
    w = arithmetic.add(1, arithmetic.mul(i, a))
    z = arithmetic.div(w, arithmetic.abs(w))
    if not is_root_of_unity(z):
        raise NotRootOfUnityError('atan({}) is not a rational multiple of pi.'.format(a))
    return log_pi_i(z)
