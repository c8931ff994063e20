from __future__ import annotations

import math

from planimeter.utils.angles import two_sum


class CompensatedSum:
    """Running sum held as a leading word plus an error word.

    ``s + t`` carries roughly twice the precision of a float, so summing many edge contributions does not drift
    the way a plain ``+=`` counter does. See D. M. Priest, "Algorithms for arbitrary precision floating point
    arithmetic", Proc. 10th Symposium on Computer Arithmetic (1991).
    """

    __slots__ = ("_s", "_t")

    def __init__(self, value: float = 0.0) -> None:
        self._s = float(value)
        self._t = 0.0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._s!r}, error={self._t!r})"

    def __float__(self) -> float:
        return self._s

    def reset(self, value: float = 0.0) -> None:
        self._s = float(value)
        self._t = 0.0

    def add(self, delta: float) -> None:
        y, u = two_sum(delta, self._t)
        self._s, self._t = two_sum(y, self._s)
        # Keep the leading word non-zero whenever the sum is non-zero
        if self._s == 0:
            self._s = u
        else:
            self._t += u

    def value(self, extra: float = 0.0) -> float:
        """Current sum, or the sum plus ``extra`` without changing the accumulator."""
        if extra == 0:
            return self._s
        trial = self.copy()
        trial.add(extra)
        return trial._s

    def negate(self) -> None:
        self._s = -self._s
        self._t = -self._t

    def remainder(self, y: float) -> None:
        self._s = math.remainder(self._s, y)
        self.add(0.0)

    def copy(self) -> CompensatedSum:
        dup = CompensatedSum(self._s)
        dup._t = self._t
        return dup
