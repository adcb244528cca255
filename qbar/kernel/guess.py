
import logging

import flint
from mpmath import mp

from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.comparison import is_equal, sort_roots
from qbar.kernel.errors import NoCandidateFoundError
from qbar.kernel.interval import Box, fraction_of
from qbar.kernel.isolation import isolate_roots
from qbar.kernel.polynomial import from_coefficients, irreducible_factors, height
from qbar.kernel.precision import DEFAULT_CONFIG, working_precision


_logger = logging.getLogger(__name__)


def guess(enclosure, max_degree, max_bits=None, config=None):
    """ Reconstruct an algebraic number from a rigorous enclosure: an mpmath iv.mpf interval,
        a pair (real part, imaginary part) of such intervals, or a Box.

        Returns the number of lowest degree (at most max_degree), then lowest height, whose
        minimal polynomial has coefficients of at most max_bits bits and which provably lies
        inside the enclosure. A zero-width enclosure is only guessable as its own (dyadic)
        value, and only if that value fits max_degree and max_bits (unbounded when None). Raises NoCandidateFoundError if no such number is found.

        >>> guess(iv.mpf([0.1 - 1e-10, 0.1 + 1e-10]), 2)
        AlgebraicNum(1/10)
    """
    config = DEFAULT_CONFIG if config is None else config
    box = as_box(enclosure)
    if box.width().b == 0:
        return _point_guess(box, max_degree, max_bits, config)
    available = _available_bits(box)
    if max_bits is None:
        max_bits = max(available, config.default_prec())
    with working_precision(available + 64):
        z = box.mid()
        magnitude = max(1, int(mp.ceil(mp.log(1 + abs(z), 2))))
    for d in range(1, max_degree + 1):
        prec = available - d*magnitude - 2*d
        if prec < 8:
            _logger.debug('enclosure too wide for degree %d relations', d)
            break
        found = []
        for f in _relations(z, d, prec, available + 64):
            if height(f).bit_length() > max_bits:
                continue
            for g, _ in irreducible_factors(f):
                if g.degree() <= max_degree:
                    found.extend(_inside(g, box, config))
        if found:
            best = min((r.degree(), r.height()) for r in found)
            found = [r for r in found if (r.degree(), r.height()) == best]
            return sort_roots(_distinct(found))[0]
    raise NoCandidateFoundError('no algebraic number of degree <= {} and height <= 2^{} found in {}.'.format(
        max_degree, max_bits, box))

def as_box(enclosure):
    if isinstance(enclosure, Box):
        return enclosure
    if isinstance(enclosure, (tuple, list)):
        re, im = enclosure
        if im.a >= 0 and im.b <= 0:
            return Box(re)
        return Box(re, im)
    return Box(enclosure)

def _point_guess(box, max_degree, max_bits, config):
    """ a zero-width enclosure holds exactly one number, which must fit the budget itself.
    """
    x = _point_value(box, config)
    if x.degree() > max_degree or (max_bits is not None and x.height_bits() > max_bits):
        raise NoCandidateFoundError('the point {} needs degree {} and {} bits.'.format(
            box, x.degree(), x.height_bits()))
    return x

def _point_value(box, config):
    re = fraction_of(box.real().a)
    im = fraction_of(box.imag().a)
    if im == 0:
        return AlgebraicNum(re, config)
    p = from_coefficients([1, -2*re, re*re + im*im])
    return AlgebraicNum._from_root(p, Box.from_fraction(re, im), config)

def _available_bits(box):
    """ number of correct bits that the width of the enclosure supports.
    """
    width = mp.mpf(box.width().b)
    return max(0, int(mp.floor(-mp.log(width, 2))))

def _relations(z, d, prec, working):
    """ candidate integer polynomials of degree <= d, read off the rows of the LLL reduced
        lattice [e_i | 2^prec Re z^i | 2^prec Im z^i].
    """
    with working_precision(working):
        scale = mp.ldexp(1, prec)
        nonreal = isinstance(z, mp.mpc) and z.imag != 0
        power = mp.mpf(1)
        rows = []
        for i in range(d + 1):
            row = [1 if j == i else 0 for j in range(d + 1)]
            row.append(int(mp.nint(scale*mp.re(power))))
            if nonreal:
                row.append(int(mp.nint(scale*mp.im(power))))
            rows.append(row)
            power = power*z
    reduced = flint.fmpz_mat(rows).lll()
    candidates = []
    for i in range(reduced.nrows()):
        cs = [int(reduced[i, j]) for j in range(d + 1)]
        if not any(cs[1:]):
            continue
        f = from_coefficients(list(reversed(cs)))
        _logger.debug('degree %d candidate %s', d, f.as_expr())
        candidates.append(f)
    return candidates

def _inside(f, box, config):
    """ the roots of the irreducible polynomial f that provably lie inside box.
    """
    result = []
    for b in isolate_roots(f, config.default_prec(), config):
        if not b.overlaps(box):
            continue
        r = AlgebraicNum._from_root(f, b, config)
        for prec in config.escalation():
            e = r.enclosure(prec)
            if box.contains(e):
                result.append(r)
                break
            if not box.overlaps(e):
                break
    return result

def _distinct(numbers):
    result = []
    for r in numbers:
        if not any(is_equal(r, s) for s in result):
            result.append(r)
    return result
