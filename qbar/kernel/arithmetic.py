
import builtins
import logging
import math
from fractions import Fraction

from mpmath import mp, iv
from sympy import Poly, Rational

from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.errors import DivisionByZeroError, AmbiguousRootError, InternalConsistencyError
from qbar.kernel.interval import Box, evaluate as evaluate_box, fraction_of
from qbar.kernel.isolation import isolate_roots, select_root
from qbar.kernel.polynomial import (X, normalize, coefficients, irreducible_factors, sum_poly, product_poly,
                                    image_poly, power_poly, negate_poly, reverse_poly, affine_poly, radical_poly,
                                    to_rational)
from qbar.kernel.precision import working_precision


_logger = logging.getLogger(__name__)


def _coerce(a, b=None):
    """ convert the operands to AlgebraicNum. Plain numbers take the configuration of the
        other operand.
    """
    if b is None:
        return a if isinstance(a, AlgebraicNum) else AlgebraicNum(a)
    if isinstance(a, AlgebraicNum):
        if not isinstance(b, AlgebraicNum):
            b = AlgebraicNum(b, a.config())
        return a, b
    if isinstance(b, AlgebraicNum):
        return AlgebraicNum(a, b.config()), b
    return AlgebraicNum(a), AlgebraicNum(b)

def _rational(q, config):
    return AlgebraicNum(Fraction(q), config)

def _select(factors, approx, config):
    """ the root, among the roots of the given irreducible factors, enclosed by approx(bits).
    """
    f, box = select_root([normalize(f) for f in factors], approx, config)
    return AlgebraicNum._from_root(normalize(f), box, config)

def _candidates(p):
    return [f for f, _ in irreducible_factors(p)]

def _affine(a, u, v):
    """ u*a + v for rational u != 0 and v. The image of an irreducible polynomial under an
        affine substitution is irreducible.
    """
    config = a.config()
    u, v = Fraction(u), Fraction(v)
    if a.is_rational():
        return _rational(u*a.rational() + v, config)
    p = affine_poly(a.minpoly(), u, v)

    def approx(bits):
        return a.enclosure(bits)*u + v
    return _select([p], approx, config)


## Binary operations

def add(a, b):
    a, b = _coerce(a, b)
    config = a.config()
    if b.is_rational():
        return _affine(a, 1, b.rational())
    if a.is_rational():
        return AlgebraicNum(_affine(b, 1, a.rational()), config)
    _logger.debug('sum of numbers of degrees %d and %d', a.degree(), b.degree())

    def approx(bits):
        return a.enclosure(bits) + b.enclosure(bits)
    return _select(_candidates(sum_poly(a.minpoly(), b.minpoly())), approx, config)

def sub(a, b):
    a, b = _coerce(a, b)
    return add(a, neg(b))

def mul(a, b):
    a, b = _coerce(a, b)
    config = a.config()
    if b.is_rational():
        if b.is_zero():
            return _rational(0, config)
        return _affine(a, b.rational(), 0)
    if a.is_rational():
        if a.is_zero():
            return _rational(0, config)
        return AlgebraicNum(_affine(b, a.rational(), 0), config)
    _logger.debug('product of numbers of degrees %d and %d', a.degree(), b.degree())

    def approx(bits):
        return a.enclosure(bits)*b.enclosure(bits)
    return _select(_candidates(product_poly(a.minpoly(), b.minpoly())), approx, config)

def div(a, b):
    a, b = _coerce(a, b)
    if b.is_zero():
        raise DivisionByZeroError('division of {} by zero.'.format(a))
    if b.is_rational():
        return _affine(a, 1/b.rational(), 0)
    return mul(a, inv(b))


## Unary operations

def neg(a):
    a = _coerce(a)
    if a.is_rational():
        return _rational(-a.rational(), a.config())
    ## negation maps the isolating box exactly onto an isolating box
    return AlgebraicNum._from_root(negate_poly(a.minpoly()), -a.box(), a.config())

def inv(a):
    a = _coerce(a)
    if a.is_zero():
        raise DivisionByZeroError('zero has no inverse.')
    if a.is_rational():
        return _rational(1/a.rational(), a.config())

    def approx(bits):
        return a.enclosure(bits).inverse()
    return _select([reverse_poly(a.minpoly())], approx, a.config())

def pow_int(a, n):
    a = _coerce(a)
    n = int(n)
    config = a.config()
    if n == 0:
        return _rational(1, config)
    if n < 0:
        if a.is_zero():
            raise DivisionByZeroError('zero raised to the negative power {}.'.format(n))
        return inv(pow_int(a, -n))
    if n == 1:
        return a
    if a.is_rational():
        return _rational(a.rational()**n, config)

    def approx(bits):
        return a.enclosure(bits + n.bit_length())**n
    return _select(_candidates(power_poly(a.minpoly(), n)), approx, config)

def pow_rational(a, r):
    """ a^(p/q) = root(a, q)^p, with the branch of root().
    """
    a = _coerce(a)
    r = Fraction(r)
    if r.denominator == 1:
        return pow_int(a, r.numerator)
    if a.is_zero():
        if r < 0:
            raise DivisionByZeroError('zero raised to the negative power {}.'.format(r))
        return a
    return pow_int(root(a, r.denominator), r.numerator)

def root(a, n):
    """ the n-th root of a. If a is a negative real number and n is odd the real root is
        returned, otherwise the principal root, whose argument lies in (-pi/n, pi/n].
    """
    a = _coerce(a)
    n = int(n)
    if n < 1:
        raise ValueError('the root index must be a positive integer, got {}.'.format(n))
    config = a.config()
    if n == 1 or a.is_zero() or a.is_one():
        return a
    real_branch = a.is_real() and n % 2 == 1
    candidates = _candidates(radical_poly(a.minpoly(), n))
    for prec in config.escalation():
        with working_precision(prec):
            target = _principal_root(a.enclosure(prec), n, prec, real_branch)
        hits = []
        for f in candidates:
            for b in isolate_roots(f, prec, config):
                if b.overlaps(target):
                    hits.append((f, b))
        if len(hits) == 1:
            f, b = hits[0]
            result = AlgebraicNum._from_root(normalize(f), b, config)
            _check_root(result, a, n)
            return result
        _logger.debug('%d candidate %d-th roots at %d bits', len(hits), n, prec)
    raise AmbiguousRootError('max precision reached: cannot isolate the {}-th root of {}.'.format(n, a))

def _principal_root(box, n, prec, real_branch):
    """ a box around the numerical n-th root of the center of box on the chosen branch.
    """
    z = box.mid()
    if real_branch:
        x = mp.mpf(mp.re(z))
        w = mp.root(builtins.abs(x), n)
        if x < 0:
            w = -w
    else:
        w = mp.root(z, n)
    radius = iv.mpf(mp.ldexp(1 + builtins.abs(w), -(prec//2)))
    return Box.around(Box.from_point(w), radius, real=real_branch)

def _check_root(r, a, n):
    """ r^n is a root of the minimal polynomial of a; it is a itself when the enclosure of r^n
        meets no isolating box of that polynomial other than the one of a.
    """
    config = a.config()
    for prec in config.escalation():
        boxes = isolate_roots(a.minpoly(), prec, config)
        with working_precision(prec):
            image = r.enclosure(prec + n.bit_length())**n
        mine = [b for b in boxes if b.overlaps(a.enclosure(prec))]
        touched = [b for b in boxes if b.overlaps(image)]
        if len(mine) == 1 and len(touched) == 1:
            if mine[0] is touched[0]:
                return
            break
    raise InternalConsistencyError('{} is not a {}-th root of {}.'.format(r, n, a))

def sqrt(a):
    return root(a, 2)


## Projections

def conj(a):
    a = _coerce(a)
    if a.is_real():
        return a
    return AlgebraicNum._from_root(a.minpoly(), a.box().conjugate(), a.config())

def real(a):
    a = _coerce(a)
    if a.is_real():
        return a
    return _affine(add(a, conj(a)), Fraction(1, 2), 0)

def imag(a):
    a = _coerce(a)
    if a.is_real():
        return _rational(0, a.config())
    ## (a - conj(a)) / 2i
    return mul(sub(a, conj(a)), AlgebraicNum(complex(0, -0.5), a.config()))

def abs2(a):
    a = _coerce(a)
    if a.is_real():
        return mul(a, a)
    return mul(a, conj(a))

def abs(a):
    a = _coerce(a)
    if a.is_real():
        if a.sign_real() < 0:
            return neg(a)
        return a
    return sqrt(abs2(a))

def sgn(a):
    """ a/|a|, or 0 for a = 0.
    """
    a = _coerce(a)
    if a.is_zero():
        return a
    if a.is_real():
        return _rational(a.sign_real(), a.config())
    return div(a, abs(a))

def floor(a):
    """ the floor of the real part of a, as an int.
    """
    x = real(_coerce(a))
    if x.is_rational():
        return math.floor(x.rational())
    for prec in x.config().escalation():
        lo, hi = _integer_bounds(x.enclosure(prec), math.floor)
        if lo == hi:
            return lo
    raise InternalConsistencyError('cannot decide the floor of {}.'.format(x))

def ceil(a):
    """ the ceiling of the real part of a, as an int.
    """
    x = real(_coerce(a))
    if x.is_rational():
        return math.ceil(x.rational())
    for prec in x.config().escalation():
        lo, hi = _integer_bounds(x.enclosure(prec), math.ceil)
        if lo == hi:
            return lo
    raise InternalConsistencyError('cannot decide the ceiling of {}.'.format(x))

def _integer_bounds(box, rounding):
    interval = box.real()
    return rounding(fraction_of(interval.a)), rounding(fraction_of(interval.b))


## Polynomial evaluation

def evaluate(f, a):
    """ f(a) for a polynomial f with rational coefficients, given as a sympy Poly or expression
        in x, or as a coefficient list (highest degree first).
    """
    a = _coerce(a)
    config = a.config()
    if isinstance(f, (list, tuple)):
        f = Poly([to_rational(c) for c in f], X)
    elif not isinstance(f, Poly):
        f = Poly(f, X)
    if f.is_zero:
        return _rational(0, config)
    if f.degree() == 0:
        return _rational(Fraction(str(f.LC())), config)
    f = Poly(f.as_expr(), X, domain='QQ')
    if a.is_rational():
        value = f.eval(Rational(a.rational().numerator, a.rational().denominator))
        return _rational(Fraction(int(value.p), int(value.q)), config)
    den, g = f.clear_denoms(convert=True)
    den = int(den)
    cs = coefficients(g)

    def approx(bits):
        box = a.enclosure(bits + f.degree().bit_length())
        return evaluate_box(cs, box)/den
    return _select(_candidates(image_poly(a.minpoly(), f)), approx, config)
