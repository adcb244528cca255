
from contextlib import contextmanager

from mpmath import mp, iv


class PrecisionConfig:
    def __init__(self, default_prec=64, max_prec=16384, compare_prec=256, newton_steps=8):
        """ Working-precision settings (in bits) shared by the numbers built with this config.

            default_prec: precision of the first isolation attempt of every operation.
            max_prec: ceiling for precision escalation. Reaching it raises AmbiguousRootError.
            compare_prec: precision up to which comparisons try to separate enclosures
                before falling back to exact arithmetic on the difference.
            newton_steps: Newton iterations per refinement round.
        """
        if default_prec < 16:
            raise ValueError('default_prec must be at least 16 bits.')
        if max_prec < default_prec:
            raise ValueError('max_prec must not be smaller than default_prec.')
        self._default_prec = default_prec
        self._max_prec = max_prec
        self._compare_prec = max(default_prec, min(compare_prec, max_prec))
        self._newton_steps = newton_steps

    def default_prec(self):
        return self._default_prec

    def max_prec(self):
        return self._max_prec

    def compare_prec(self):
        return self._compare_prec

    def newton_steps(self):
        return self._newton_steps

    def escalation(self, start=None, stop=None):
        """ yield start, 2*start, 4*start, ... up to (and including) the ceiling stop,
            which defaults to max_prec(). Callers asking for more than max_prec() bits pass a larger stop.
        """
        prec = self._default_prec if start is None else max(start, 16)
        stop = self._max_prec if stop is None else stop
        while prec < stop:
            yield prec
            prec = 2*prec
        yield stop

    def __eq__(self, other):
        return isinstance(other, PrecisionConfig) and self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def _key(self):
        return (self._default_prec, self._max_prec, self._compare_prec, self._newton_steps)

    def __repr__(self):
        return 'PrecisionConfig(default_prec={}, max_prec={}, compare_prec={}, newton_steps={})'.format(*self._key())


DEFAULT_CONFIG = PrecisionConfig()

GUARD_BITS = 20


@contextmanager
def working_precision(bits):
    """ Run the enclosed mpmath computations (both point and interval contexts) at the given precision.
        The interval context has no workprec of its own, so its precision is restored by hand.
    """
    prec = bits + GUARD_BITS
    with mp.workprec(prec):
        saved = iv.prec
        iv.prec = prec
        try:
            yield
        finally:
            iv.prec = saved
