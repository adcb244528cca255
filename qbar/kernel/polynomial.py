
from fractions import Fraction
from functools import lru_cache

from sympy import Poly, Symbol, Dummy, Rational, ZZ, QQ
from sympy import cyclotomic_poly, chebyshevt_poly


X = Symbol('x')
_T = Dummy('t')


def to_rational(c):
    """ convert an int, Fraction, exact float or sympy rational to a sympy Rational.
    """
    if isinstance(c, float):
        c = Fraction(c)
    if isinstance(c, Fraction):
        return Rational(c.numerator, c.denominator)
    c = Rational(c)
    if not c.is_Rational:
        raise TypeError('coefficient {} is not rational.'.format(c))
    return c

def normalize(p):
    """ return the primitive integer polynomial with positive leading coefficient that is
        a rational multiple of p.
    """
    if not isinstance(p, Poly):
        p = Poly(p, X)
    if p.gens != (X,):
        p = Poly(p.as_expr().subs(p.gen, X), X)
    if p.is_zero:
        raise ValueError('the zero polynomial has no roots.')
    domain = p.get_domain()
    if domain != ZZ:
        if domain != QQ:
            p = Poly(p.as_expr(), X, domain=QQ)
        p = p.clear_denoms(convert=True)[1]
    p = p.primitive()[1]
    if p.LC() < 0:
        p = -p
    return p

def from_coefficients(coefficients):
    """ integer polynomial from rational coefficients, highest degree first.
    """
    return normalize(Poly([to_rational(c) for c in coefficients], X, domain=QQ))

def coefficients(p):
    """ integer coefficients of p as Python ints, highest degree first.
    """
    return [int(c) for c in p.all_coeffs()]

def key(p):
    return tuple(coefficients(p))

def height(p):
    return max(abs(c) for c in coefficients(p))

def linear(numerator, denominator):
    """ the minimal polynomial denominator*x - numerator of a rational number.
    """
    q = Fraction(numerator, denominator)
    return Poly([q.denominator, -q.numerator], X, domain=ZZ)

def rational_root(p):
    """ the root of a polynomial of degree one, as a Fraction.
    """
    b, a = coefficients(p)
    return Fraction(-a, b)


@lru_cache(maxsize=512)
def _factor(k):
    p = Poly(list(k), X, domain=ZZ)
    _, factors = p.factor_list()
    return tuple((key(normalize(f)), m) for f, m in factors if f.degree() > 0)

def irreducible_factors(p):
    """ the distinct irreducible factors of p (normalized) with their multiplicities.
    """
    return [(Poly(list(k), X, domain=ZZ), m) for k, m in _factor(key(normalize(p)))]


## The constructions below return polynomials whose roots contain all values
## op(alpha, beta) for roots alpha of pa and beta of pb. They are not irreducible
## in general and have to be factored before a root is selected.

def sum_poly(pa, pb):
    """ res_t(pa(t), pb(x - t)).
    """
    fa = Poly(pa.as_expr().subs(X, _T), _T, X)
    fb = Poly(pb.as_expr().subs(X, X - _T), _T, X)
    return normalize(fa.resultant(fb).as_expr())

def product_poly(pa, pb):
    """ res_t(pa(t), t^m pb(x/t)), m = deg pb.
    """
    m = pb.degree()
    cs = list(reversed(coefficients(pb)))
    fa = Poly(pa.as_expr().subs(X, _T), _T, X)
    fb = Poly(sum(c*X**k*_T**(m - k) for k, c in enumerate(cs)), _T, X)
    return normalize(fa.resultant(fb).as_expr())

def image_poly(pa, f):
    """ res_t(pa(t), x - f(t)) for a polynomial f with rational coefficients (a sympy Poly in x).
    """
    fa = Poly(pa.as_expr().subs(X, _T), _T, X)
    fb = Poly(X - f.as_expr().subs(X, _T), _T, X)
    return normalize(fa.resultant(fb).as_expr())

def power_poly(pa, n):
    if n == 1:
        return pa
    return image_poly(pa, Poly(X**n, X))

def negate_poly(p):
    return normalize(p.as_expr().subs(X, -X))

def reverse_poly(p):
    """ the polynomial whose roots are the inverses of the roots of p (p(0) must not vanish).
    """
    cs = coefficients(p)
    if cs[-1] == 0:
        raise ValueError('cannot invert the roots of a polynomial vanishing at zero.')
    return normalize(Poly(list(reversed(cs)), X, domain=ZZ))

def affine_poly(p, u, v):
    """ the polynomial whose roots are u*alpha + v for the roots alpha of p (u, v rational, u != 0).
    """
    u, v = to_rational(u), to_rational(v)
    return normalize(Poly(p.as_expr().subs(X, (X - v)/u), X, domain=QQ))

def radical_poly(p, n):
    """ p(x^n): its roots are all n-th roots of the roots of p.
    """
    return normalize(p.as_expr().subs(X, X**n))

@lru_cache(maxsize=256)
def cyclotomic(n):
    return cyclotomic_poly(n, X, polys=True)

@lru_cache(maxsize=256)
def chebyshev_t(n):
    return chebyshevt_poly(n, X, polys=True)
