
from qbar.kernel.algebraic_number import AlgebraicNum
from qbar.kernel.arithmetic import sqrt
from qbar.kernel.roots import root_of
from qbar.kernel.special import root_of_unity


I = AlgebraicNum(1j)

GOLDEN_RATIO = (1 + sqrt(5))/2

OMEGA = root_of_unity(3)

## z^3 + 2z^2 + z + 1 is (z^2 + z)^2 + z divided by z: its roots are the parameters c of the
## quadratic maps z^2 + c whose critical point has period 3.

AIRPLANE = root_of([1, 2, 1, 1], 0)

RABBIT = root_of([1, 2, 1, 1], 1)

CORABBIT = root_of([1, 2, 1, 1], 2)
