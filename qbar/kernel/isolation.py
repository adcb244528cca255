
import logging
from fractions import Fraction
from functools import lru_cache

from mpmath import mp, iv

from qbar.kernel.errors import AmbiguousRootError, InternalConsistencyError, IntervalError
from qbar.kernel.interval import Box, evaluate
from qbar.kernel.polynomial import coefficients, key, rational_root
from qbar.kernel.precision import DEFAULT_CONFIG, working_precision


_logger = logging.getLogger(__name__)


def isolate_roots(p, bits, config=DEFAULT_CONFIG):
    """ Return a tuple of pairwise disjoint boxes, one around each root of the squarefree integer
        polynomial p. Boxes of real roots lie on the real axis, all other boxes avoid it.
        The precision is doubled (starting from bits) until the isolation can be certified.
    """
    k = key(p)
    for prec in config.escalation(bits):
        boxes = _isolate(k, prec)
        if boxes is not None:
            return boxes
        _logger.debug('isolation of degree %d polynomial failed at %d bits', len(k) - 1, prec)
    raise AmbiguousRootError('max precision reached: the roots of {} could not be isolated.'.format(p.as_expr()))


@lru_cache(maxsize=1024)
def _isolate(k, prec):
    if len(k) == 2:
        return (Box.from_fraction(Fraction(-k[1], k[0])),)
    with working_precision(prec):
        approx = _approximate_roots(k, prec)
        if approx is None:
            return None
        boxes = _inclusion_boxes(k, approx)
        if boxes is None:
            return None
        return _certify(boxes)

def _approximate_roots(k, prec):
    """ approximations of all roots, closed under complex conjugation. Real roots are mpf, the
        others mpc.
    """
    n = len(k) - 1
    try:
        roots = mp.polyroots(list(k), maxsteps=100 + 20*n, extraprec=prec)
    except (mp.NoConvergence, ZeroDivisionError):
        return None
    tol = mp.ldexp(1, -(prec//2))
    reals = []
    upper = []
    lower = 0
    for z in roots:
        z = mp.mpc(z)
        if abs(z.imag) <= tol*(1 + abs(z)):
            reals.append(mp.mpf(z.real))
        elif z.imag > 0:
            upper.append(z)
        else:
            lower += 1
    if lower != len(upper):
        return None
    return reals + upper + [mp.conj(z) for z in upper]

def _inclusion_boxes(k, approx):
    """ Gerschgorin discs of the Weierstrass matrix diag(z_i) - W e^T, whose eigenvalues are the
        roots of the polynomial: the disc i has center z_i - W_i and radius (n-1)|W_i|.
    """
    n = len(approx)
    points = [Box.from_point(z) for z in approx]
    lead = Box(iv.mpf(k[0]))
    boxes = []
    for i, z in enumerate(points):
        den = lead
        for j, w in enumerate(points):
            if j != i:
                den = den*(z - w)
        try:
            w_i = evaluate(k, z)/den
        except IntervalError:
            return None
        boxes.append(Box.around(z - w_i, (n - 1)*w_i.abs()))
    return boxes

def _certify(boxes):
    """ Pairwise disjoint discs contain exactly one root each. A box meeting the real axis holds a
        real root if its mirror image meets no other box.
    """
    n = len(boxes)
    for i in range(n - 1):
        for j in range(i + 1, n):
            if boxes[i].overlaps(boxes[j]):
                return None
    result = []
    for i, b in enumerate(boxes):
        if b.meets_real_axis():
            mirror = b.conjugate()
            for j in range(n):
                if j != i and mirror.overlaps(boxes[j]):
                    return None
            result.append(b.project_real())
        else:
            result.append(b)
    return tuple(result)


def isolate(p, approx, bits, config=DEFAULT_CONFIG):
    """ Return the isolating box of the unique root of p whose box meets the box approx.
        Raises AmbiguousRootError if several roots do, InternalConsistencyError if none does.
    """
    hits = [b for b in isolate_roots(p, bits, config) if b.overlaps(approx)]
    if len(hits) == 1:
        return hits[0]
    if not hits:
        raise InternalConsistencyError('no root of {} meets {}.'.format(p.as_expr(), approx))
    raise AmbiguousRootError('{} roots of {} meet {}.'.format(len(hits), p.as_expr(), approx))


def select_root(factors, approx, config=DEFAULT_CONFIG, start=None):
    """ Return (factor, box): the root, among the roots of the irreducible factors, whose box meets
        approx(bits), a rigorous enclosure of the wanted value computed at the given precision.
        approx may raise IntervalError, in which case the precision is increased.
    """
    for prec in config.escalation(start):
        try:
            with working_precision(prec):
                target = approx(prec)
        except IntervalError:
            _logger.debug('approximation undecided at %d bits', prec)
            continue
        hits = []
        for f in factors:
            with working_precision(prec):
                if not evaluate(coefficients(f), target).contains_zero():
                    continue
            for b in isolate_roots(f, prec, config):
                if b.overlaps(target):
                    hits.append((f, b))
        if len(hits) == 1:
            return hits[0]
        if not hits:
            raise InternalConsistencyError('no candidate root meets the enclosure {}.'.format(target))
        _logger.debug('%d candidate roots at %d bits, increasing precision', len(hits), prec)
    raise AmbiguousRootError('max precision reached: the result cannot be told apart from its conjugates.')


def refine_root(p, box, bits, config=DEFAULT_CONFIG):
    """ Shrink the isolating box of a root of p until is_narrower_than(bits) holds.
        Newton steps are used first; a Newton box is accepted only when it lies inside the old
        box, otherwise all roots are isolated again at a higher precision.
    """
    if box.is_narrower_than(bits):
        return box
    k = key(p)
    n = len(k) - 1
    if n == 1:
        for prec in config.escalation(bits + 8, max(config.max_prec(), 2*bits + 8)):
            with working_precision(prec):
                new = Box.from_fraction(rational_root(p))
                if new.is_narrower_than(bits):
                    return new
        raise InternalConsistencyError('cannot refine a rational enclosure.')
    current = box
    start = bits + n.bit_length() + 8
    for prec in config.escalation(start, max(config.max_prec(), 2*start)):
        with working_precision(prec):
            z = _newton(k, current, config.newton_steps())
            candidate = None
            if z is not None:
                candidate = _newton_box(k, z, current.is_real())
            if candidate is not None and current.contains(candidate):
                current = candidate
            else:
                found = [b for b in isolate_roots(p, prec, config) if b.overlaps(current)]
                if len(found) == 1:
                    current = found[0]
            if current.is_narrower_than(bits):
                return current
        _logger.debug('refinement to %d bits not reached at %d bits', bits, prec)
    raise InternalConsistencyError('max precision reached while refining a root of {}.'.format(p.as_expr()))

def _newton(k, box, steps):
    z = box.mid()
    real = box.is_real()
    try:
        for _ in range(steps):
            y, dy = mp.polyval(list(k), z, derivative=True)
            if dy == 0:
                return None
            z = z - y/dy
            if real:
                z = mp.re(z)
    except ZeroDivisionError:
        return None
    return z

def _newton_box(k, z, real):
    """ a box certified to contain a root of the polynomial near z.
        Complex case: some root lies within n|p(z)/p'(z)| of z.
        Real case: the interval around z has a sign change of p at its endpoints.
    """
    n = len(k) - 1
    dk = [c*(n - i) for i, c in enumerate(k[:-1])]
    zb = Box.from_point(z)
    try:
        q = evaluate(k, zb)/evaluate(dk, zb)
    except IntervalError:
        return None
    radius = 2*n*q.abs()
    if not real:
        return Box.around(zb, radius)
    interval = Box.around(zb, radius, real=True)
    lo = evaluate(k, Box(interval.real().a)).sign_real()
    hi = evaluate(k, Box(interval.real().b)).sign_real()
    if lo is None or hi is None:
        return None
    if lo == 0:
        return Box(interval.real().a)
    if hi == 0:
        return Box(interval.real().b)
    if lo == hi:
        return None
    return interval
