
class QbarError(Exception):
    def __init__(self, msg=None):
        if msg:
            self.message = msg
        else:
            self.message = None
        super().__init__(msg)

    def __str__(self):
        return '{0}: {1}'.format(type(self).__name__, self.message)

class NonrealComparisonError(QbarError, TypeError):
    """ Raised when the real order is applied to a nonreal number.
    """

class DivisionByZeroError(QbarError, ZeroDivisionError):
    pass

class InvalidRootIndexError(QbarError, IndexError):
    pass

class AmbiguousRootError(QbarError):
    """ Raised when the maximal precision is reached and an approximation still meets
        more than one root.
    """

class NoCandidateFoundError(QbarError):
    pass

class InternalConsistencyError(QbarError):
    """ An isolation invariant was violated. This always indicates a bug.
    """

class NotRootOfUnityError(QbarError, ValueError):
    pass

class IntervalError(QbarError):
    """ An interval operation cannot be decided at the current precision (e.g. division
        by an interval containing zero). Callers retry with more precision.
    """
