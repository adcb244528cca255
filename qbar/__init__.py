
from qbar.kernel.errors import (QbarError, NonrealComparisonError, DivisionByZeroError, InvalidRootIndexError,
                                AmbiguousRootError, NoCandidateFoundError, InternalConsistencyError,
                                NotRootOfUnityError)
from qbar.kernel.precision import PrecisionConfig, DEFAULT_CONFIG
from qbar.kernel.interval import Box
from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.arithmetic import (add, sub, mul, div, neg, inv, pow_int, pow_rational, root, sqrt, conj, real,
                                    imag, abs, abs2, sgn, floor, ceil, evaluate)
from qbar.kernel.comparison import (is_equal, cmp_real, cmp_re, cmp_im, cmp_abs, cmp_abs_re, cmp_abs_im, is_less,
                                    is_less_real, is_equal_real, is_less_imag, is_equal_imag, is_less_abs,
                                    is_equal_abs, is_less_abs_real, is_equal_abs_real, is_less_abs_imag,
                                    is_equal_abs_imag, cmp_root_order, is_less_root_order, root_order_key,
                                    sort_roots)
from qbar.kernel.roots import roots, root_of, nearest_root, eigenvalues
from qbar.kernel.special import (PiMultiple, PI, sin, cos, tan, root_of_unity, exp_pi_i, cos_pi, sin_pi, tan_pi,
                                 asin_pi, acos_pi, atan_pi, is_root_of_unity, root_of_unity_as_args, log_pi_i)
from qbar.kernel.guess import guess
