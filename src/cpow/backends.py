"""Numeric backends supplying the primitives of complex power evaluation.

Two backends implement the same protocol:

* ``NativeBackend`` computes with Python floats and the ``math`` module.
* ``ArbitraryPrecisionBackend`` computes with ``mpmath.mpf`` at a fixed number
  of decimal digits.

Each backend only accepts values of its own representation. Values are
brought in with ``coerce`` and every primitive checks its arguments, so a
value that was never assigned, or one built by the other backend, fails with
a defined error instead of propagating into the trigonometric step.
"""

from __future__ import annotations

import contextlib
import math
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import mpmath
import sympy as sp

from cpow.common import BackendMismatchError, CpowError, DomainError, Numeric, PrecisionMode
from cpow.decompose import as_real_constant

if TYPE_CHECKING:
    from cpow.config import Settings


@runtime_checkable
class NumericBackend(Protocol):
    @property
    def mode(self) -> PrecisionMode: ...

    def precision(self) -> contextlib.AbstractContextManager[Any]: ...

    def coerce(self, value: Any) -> Numeric: ...

    def zero(self) -> Numeric: ...

    def multiply(self, a: Numeric, b: Numeric) -> Numeric: ...

    def pow(self, base: Numeric, exponent: Numeric) -> Numeric: ...

    def sqrt(self, a: Numeric) -> Numeric: ...

    def hypot(self, a: Numeric, b: Numeric) -> Numeric: ...

    def atan2(self, y: Numeric, x: Numeric) -> Numeric: ...

    def sin(self, a: Numeric) -> Numeric: ...

    def cos(self, a: Numeric) -> Numeric: ...

    def to_sympy(self, value: Numeric) -> sp.Expr: ...


class _BaseBackend(ABC):
    """Argument checking shared by both backends."""

    mode: PrecisionMode
    numeric_type: type

    def _check(self, *values: Numeric) -> None:
        for value in values:
            if value is None:
                raise DomainError(f"{self.mode} backend received an undefined value")
            if not isinstance(value, self.numeric_type):
                raise BackendMismatchError(
                    f"{self.mode} backend expects {self.numeric_type.__name__}, got {type(value).__name__}"
                )
            if not self._is_finite(value):
                raise DomainError(f"{self.mode} backend received a non-finite value: {value}")

    @abstractmethod
    def _is_finite(self, value: Numeric) -> bool: ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class NativeBackend(_BaseBackend):
    """Python floats and the math module."""

    mode: PrecisionMode = "native"
    numeric_type = float

    def precision(self) -> contextlib.AbstractContextManager[Any]:
        return contextlib.nullcontext()

    def _is_finite(self, value: Numeric) -> bool:
        return math.isfinite(value)

    def coerce(self, value: Any) -> float:
        if isinstance(value, mpmath.mpf):
            raise BackendMismatchError("native backend cannot coerce an mpmath value")
        constant = as_real_constant(value)
        try:
            converted = float(constant)
        except OverflowError as e:
            raise DomainError(f"{constant} is out of the float range") from e
        if not math.isfinite(converted):
            raise DomainError(f"{constant} is out of the float range")
        return converted

    def zero(self) -> float:
        return 0.0

    def multiply(self, a: float, b: float) -> float:
        self._check(a, b)
        return a * b

    def pow(self, base: float, exponent: float) -> float:
        self._check(base, exponent)
        if base == 0.0 and exponent < 0:
            raise DomainError(f"Zero cannot be raised to the negative power {exponent}")
        if base < 0.0:
            raise DomainError(f"Real power of the negative base {base} is not defined")
        try:
            return math.pow(base, exponent)
        except OverflowError as e:
            raise DomainError(f"{base} ** {exponent} is out of the float range") from e

    def sqrt(self, a: float) -> float:
        self._check(a)
        if a < 0.0:
            raise DomainError(f"Square root of negative value {a}")
        return math.sqrt(a)

    def hypot(self, a: float, b: float) -> float:
        self._check(a, b)
        try:
            modulus = math.hypot(a, b)
        except OverflowError as e:
            raise DomainError(f"Modulus of ({a}, {b}) is out of the float range") from e
        if math.isinf(modulus):
            raise DomainError(f"Modulus of ({a}, {b}) is out of the float range")
        return modulus

    def atan2(self, y: float, x: float) -> float:
        self._check(y, x)
        return math.atan2(y, x)

    def sin(self, a: float) -> float:
        self._check(a)
        return math.sin(a)

    def cos(self, a: float) -> float:
        self._check(a)
        return math.cos(a)

    def to_sympy(self, value: float) -> sp.Expr:
        self._check(value)
        return sp.Float(value)


class ArbitraryPrecisionBackend(_BaseBackend):
    """mpmath floats at a fixed number of decimal digits.

    Primitives must be called inside ``precision()``, which sets the mpmath
    working precision for the block and restores the previous one on exit.
    """

    mode: PrecisionMode = "arbitrary"
    numeric_type = mpmath.mpf

    def __init__(self, dps: int = 50) -> None:
        if dps < 1:
            raise CpowError(f"dps must be a positive integer, got {dps}")
        self.dps = dps

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dps={self.dps})"

    @contextlib.contextmanager
    def precision(self) -> Iterator[None]:
        with mpmath.workdps(self.dps):
            yield

    def _is_finite(self, value: Numeric) -> bool:
        return bool(mpmath.isfinite(value))

    def coerce(self, value: Any) -> mpmath.mpf:
        if isinstance(value, mpmath.mpf):
            self._check(value)
            return +value  # rounds to the working precision
        if isinstance(value, float) and math.isfinite(value):
            # repr is the shortest decimal literal that round-trips the float
            return mpmath.mpf(repr(value))
        constant = as_real_constant(value)
        return mpmath.mpf(str(constant.evalf(self.dps)))

    def zero(self) -> mpmath.mpf:
        return mpmath.mpf(0)

    def multiply(self, a: mpmath.mpf, b: mpmath.mpf) -> mpmath.mpf:
        self._check(a, b)
        return mpmath.fmul(a, b)

    def pow(self, base: mpmath.mpf, exponent: mpmath.mpf) -> mpmath.mpf:
        self._check(base, exponent)
        if base == 0 and exponent < 0:
            raise DomainError(f"Zero cannot be raised to the negative power {exponent}")
        if base < 0:
            raise DomainError(f"Real power of the negative base {base} is not defined")
        return mpmath.power(base, exponent)

    def sqrt(self, a: mpmath.mpf) -> mpmath.mpf:
        self._check(a)
        if a < 0:
            raise DomainError(f"Square root of negative value {a}")
        return mpmath.sqrt(a)

    def hypot(self, a: mpmath.mpf, b: mpmath.mpf) -> mpmath.mpf:
        self._check(a, b)
        return mpmath.hypot(a, b)

    def atan2(self, y: mpmath.mpf, x: mpmath.mpf) -> mpmath.mpf:
        self._check(y, x)
        return mpmath.atan2(y, x)

    def sin(self, a: mpmath.mpf) -> mpmath.mpf:
        self._check(a)
        return mpmath.sin(a)

    def cos(self, a: mpmath.mpf) -> mpmath.mpf:
        self._check(a)
        return mpmath.cos(a)

    def to_sympy(self, value: mpmath.mpf) -> sp.Expr:
        self._check(value)
        return sp.Float(mpmath.nstr(value, self.dps), self.dps)


def backend_for(mode: PrecisionMode, settings: Settings | None = None) -> NumericBackend:
    """Select the backend for a precision mode.

    Args:
        mode: "native" or "arbitrary"
        settings: Source of the working precision for the arbitrary backend.
            Defaults to the active settings.

    Raises:
        CpowError: If the mode is unknown
    """
    if mode == "native":
        return NativeBackend()
    if mode == "arbitrary":
        if settings is None:
            from cpow.config import get_settings

            settings = get_settings()
        return ArbitraryPrecisionBackend(dps=settings.dps)
    raise CpowError(f"Unknown precision mode: {mode!r}")
