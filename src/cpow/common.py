from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

PrecisionMode = Literal["native", "arbitrary"]
PRECISION_MODES: tuple[PrecisionMode, ...] = ("native", "arbitrary")

# float under "native", mpmath.mpf under "arbitrary", sympy constants before coercion
Numeric = Any


class CpowError(Exception): ...


class NotConstantError(CpowError):
    """Raised when an operand or exponent cannot be reduced to a numeric constant.

    Callers are expected to fall back to symbolic exponentiation.
    """


class BackendMismatchError(CpowError):
    """Raised when a value built by one numeric backend reaches another."""


class DomainError(CpowError):
    """Raised when a backend primitive receives an undefined or out-of-domain input."""


@dataclass(frozen=True)
class ComplexOperand:
    """A complex constant ``real + imaginary*i``.

    Attributes:
        real: Real component
        imaginary: Imaginary component
    """

    real: Numeric
    imaginary: Numeric


@dataclass(frozen=True)
class PolarForm:
    """Polar representation of a complex constant.

    Attributes:
        radius: Modulus, never negative
        angle: Principal argument in (-pi, pi]
    """

    radius: Numeric
    angle: Numeric


@dataclass
class EvaluationFailure:
    """Failure information for evaluation errors"""

    error_message: str  # Overall error message
    expression: str  # The power expression that failed
    error_type: str  # Name of the raised CpowError subclass
