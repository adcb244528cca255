
import logging
from fractions import Fraction

from sympy import Matrix, Poly

from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.comparison import sort_roots
from qbar.kernel.errors import AmbiguousRootError, InvalidRootIndexError
from qbar.kernel.interval import Box
from qbar.kernel.isolation import isolate_roots
from qbar.kernel.polynomial import X, normalize, from_coefficients, irreducible_factors, to_rational
from qbar.kernel.precision import DEFAULT_CONFIG, working_precision


_logger = logging.getLogger(__name__)


def as_polynomial(poly):
    """ a normalized integer polynomial in x from a coefficient list (highest degree first,
        rational entries), a sympy Poly or a sympy expression in one variable.
    """
    if isinstance(poly, (list, tuple)):
        return from_coefficients(poly)
    if not isinstance(poly, Poly):
        poly = Poly(poly)
    if len(poly.gens) != 1:
        raise ValueError('{} is not a univariate polynomial.'.format(poly.as_expr()))
    return normalize(poly)

def _conjugates(f, config):
    boxes = isolate_roots(f, config.default_prec(), config)
    return [AlgebraicNum._from_root(f, b, config) for b in boxes]

def roots(poly, multiplicities=True, config=None):
    """ all complex roots of a nonconstant polynomial with rational coefficients, in root
        order. With multiplicities=True each root is repeated according to its multiplicity.
    """
    config = DEFAULT_CONFIG if config is None else config
    p = as_polynomial(poly)
    if p.degree() < 1:
        raise ValueError('a constant polynomial has no roots.')
    result = []
    for f, m in irreducible_factors(p):
        _logger.debug('isolating the roots of the factor %s (multiplicity %d)', f.as_expr(), m)
        conjugates = _conjugates(f, config)
        for _ in range(m if multiplicities else 1):
            result.extend(conjugates)
    return sort_roots(result)

def root_of(poly, index, config=None):
    """ the root with the given (0-based) position among the distinct roots of poly in
        root order.
    """
    rs = roots(poly, multiplicities=False, config=config)
    if not 0 <= index < len(rs):
        raise InvalidRootIndexError('root index {} out of range for {} distinct roots.'.format(index, len(rs)))
    return rs[index]

def nearest_root(poly, approx, config=None):
    """ the root of poly closest to the (float or complex) value approx.
    """
    config = DEFAULT_CONFIG if config is None else config
    rs = roots(poly, multiplicities=False, config=config)
    point = _point(approx)
    if len(rs) == 1:
        return rs[0]
    for prec in config.escalation():
        with working_precision(prec):
            distances = [(r.enclosure(prec) - point).abs2() for r in rs]
        for i, d in enumerate(distances):
            if all(d.b < e.a for j, e in enumerate(distances) if j != i):
                return rs[i]
        _logger.debug('nearest root undecided at %d bits', prec)
    raise AmbiguousRootError('several roots of {} are equally close to {}.'.format(as_polynomial(poly).as_expr(), approx))

def _point(approx):
    if isinstance(approx, AlgebraicNum):
        return approx.enclosure()
    if isinstance(approx, (int, Fraction)):
        return Box.from_fraction(approx)
    return Box.from_point(complex(approx))

def eigenvalues(matrix, multiplicities=True, config=None):
    """ the eigenvalues of a square matrix with rational entries (the roots of its
        characteristic polynomial), in root order.
    """
    m = Matrix(matrix).applyfunc(to_rational)
    if not m.is_square:
        raise ValueError('eigenvalues of a non-square {}x{} matrix.'.format(m.rows, m.cols))
    charpoly = m.charpoly(X)
    return roots(Poly(charpoly.as_expr(), X), multiplicities, config)
