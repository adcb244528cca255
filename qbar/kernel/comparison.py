
import logging
from functools import cmp_to_key

from qbar.kernel import arithmetic
from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.errors import NonrealComparisonError, AmbiguousRootError
from qbar.kernel.isolation import isolate_roots
from qbar.kernel.polynomial import key
from qbar.kernel.precision import working_precision


_logger = logging.getLogger(__name__)


def _coerce(a, b):
    return arithmetic._coerce(a, b)

def _same_minpoly(a, b):
    return key(a.minpoly()) == key(b.minpoly())


## Equality

def is_equal(a, b):
    """ exact equality: the same minimal polynomial and the same root of it. The root is
        identified by matching both enclosures against one isolation of the polynomial.
    """
    a, b = _coerce(a, b)
    if a is b:
        return True
    if not _same_minpoly(a, b):
        return False
    if a.is_rational():
        return True
    if a.is_real() != b.is_real():
        return False
    if a.sign_imag() != b.sign_imag():
        return False
    ## isolating boxes of the same polynomial: disjoint means different roots, nested means equal
    if not a.box().overlaps(b.box()):
        return False
    if a.box().contains(b.box()) or b.box().contains(a.box()):
        return True
    config = a.config()
    for prec in config.escalation():
        boxes = isolate_roots(a.minpoly(), prec, config)
        ea, eb = a.enclosure(prec), b.enclosure(prec)
        hits_a = [i for i, box in enumerate(boxes) if box.overlaps(ea)]
        hits_b = [i for i, box in enumerate(boxes) if box.overlaps(eb)]
        if len(hits_a) == 1 and len(hits_b) == 1:
            return hits_a[0] == hits_b[0]
        _logger.debug('equality test undecided at %d bits', prec)
    raise AmbiguousRootError('max precision reached while comparing {} and {}.'.format(a, b))

def _is_conjugate(a, b):
    return _same_minpoly(a, b) and is_equal(a, arithmetic.conj(b))


## Ordering family

def _compare(a, b, project, exact):
    """ compare project(enclosure) of both numbers, where project maps a Box to a real
        interval. Enclosures are refined up to compare_prec(); if they still overlap, the sign
        of the exact algebraic difference exact(a, b) decides.
    """
    config = a.config()
    for prec in config.escalation(None, config.compare_prec()):
        with working_precision(prec):
            x = project(a.enclosure(prec))
            y = project(b.enclosure(prec))
            if x.b < y.a:
                return -1
            if y.b < x.a:
                return 1
            if x.a >= y.b and x.b <= y.a:
                return 0
    _logger.debug('falling back to exact comparison at %d bits', config.compare_prec())
    return exact(a, b).sign_real()

def _real_part(box):
    return box.real()

def _imag_part(box):
    return box.imag()

def _abs_value(box):
    return box.abs()

def _abs_real_part(box):
    return abs(box.real())

def _abs_imag_part(box):
    return abs(box.imag())

def _difference(projection):
    def exact(a, b):
        return arithmetic.sub(projection(a), projection(b))
    return exact

def _abs_of(projection):
    def absolute(a):
        return arithmetic.abs(projection(a))
    return absolute


def cmp_real(a, b):
    """ the real order. Raises NonrealComparisonError unless both numbers are real.
    """
    a, b = _coerce(a, b)
    if not a.is_real() or not b.is_real():
        raise NonrealComparisonError('cannot order the nonreal numbers {} and {}.'.format(a, b))
    if a.is_rational() and b.is_rational():
        return _cmp(a.rational(), b.rational())
    if _same_minpoly(a, b) and is_equal(a, b):
        return 0
    return _compare(a, b, _real_part, arithmetic.sub)

def cmp_re(a, b):
    a, b = _coerce(a, b)
    if a.is_real() and b.is_real():
        return cmp_real(a, b)
    if _same_minpoly(a, b) and (is_equal(a, b) or _is_conjugate(a, b)):
        return 0
    return _compare(a, b, _real_part, _difference(arithmetic.real))

def cmp_im(a, b):
    a, b = _coerce(a, b)
    if a.is_real() and b.is_real():
        return 0
    if _same_minpoly(a, b) and is_equal(a, b):
        return 0
    return _compare(a, b, _imag_part, _difference(arithmetic.imag))

def cmp_abs(a, b):
    a, b = _coerce(a, b)
    if a.is_rational() and b.is_rational():
        return _cmp(abs(a.rational()), abs(b.rational()))
    if _same_minpoly(a, b) and (is_equal(a, b) or _is_conjugate(a, b)):
        return 0
    return _compare(a, b, _abs_value, _difference(arithmetic.abs2))

def cmp_abs_re(a, b):
    a, b = _coerce(a, b)
    if a.is_rational() and b.is_rational():
        return _cmp(abs(a.rational()), abs(b.rational()))
    if _same_minpoly(a, b) and (is_equal(a, b) or _is_conjugate(a, b)):
        return 0
    return _compare(a, b, _abs_real_part, _difference(_abs_of(arithmetic.real)))

def cmp_abs_im(a, b):
    a, b = _coerce(a, b)
    if a.is_real() and b.is_real():
        return 0
    if _same_minpoly(a, b) and (is_equal(a, b) or _is_conjugate(a, b)):
        return 0
    return _compare(a, b, _abs_imag_part, _difference(_abs_of(arithmetic.imag)))

def _cmp(x, y):
    return (x > y) - (x < y)


def is_less(a, b):
    return cmp_real(a, b) < 0

def is_less_real(a, b):
    return cmp_re(a, b) < 0

def is_equal_real(a, b):
    return cmp_re(a, b) == 0

def is_less_imag(a, b):
    return cmp_im(a, b) < 0

def is_equal_imag(a, b):
    return cmp_im(a, b) == 0

def is_less_abs(a, b):
    return cmp_abs(a, b) < 0

def is_equal_abs(a, b):
    return cmp_abs(a, b) == 0

def is_less_abs_real(a, b):
    return cmp_abs_re(a, b) < 0

def is_equal_abs_real(a, b):
    return cmp_abs_re(a, b) == 0

def is_less_abs_imag(a, b):
    return cmp_abs_im(a, b) < 0

def is_equal_abs_imag(a, b):
    return cmp_abs_im(a, b) == 0


## Root order

def cmp_root_order(a, b):
    """ the total order used to sort roots: real numbers first, in descending order, then
        nonreal numbers by descending real part, ascending absolute imaginary part, and
        the upper half plane before the lower one (so conjugate pairs are adjacent).
    """
    a, b = _coerce(a, b)
    if is_equal(a, b):
        return 0
    if a.is_real():
        if b.is_real():
            return -cmp_real(a, b)
        return -1
    if b.is_real():
        return 1
    c = cmp_re(a, b)
    if c:
        return -c
    c = cmp_abs_im(a, b)
    if c:
        return c
    return (b.sign_imag() - a.sign_imag())//2

def is_less_root_order(a, b):
    return cmp_root_order(a, b) < 0

root_order_key = cmp_to_key(cmp_root_order)


def sort_roots(numbers):
    return sorted(numbers, key=root_order_key)
