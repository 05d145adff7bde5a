from __future__ import annotations

import logging
from typing import Any, Self

import sympy as sp
from returns.result import Failure, Result, Success

from cpow.backends import NumericBackend, backend_for
from cpow.common import ComplexOperand, CpowError, EvaluationFailure, PrecisionMode
from cpow.config import Settings, get_settings
from cpow.decompose import constant_exponent, decompose
from cpow.functions import is_zero
from cpow.polar import reconstruct, to_polar

logger = logging.getLogger(__name__)


class ComplexPowerEvaluator:
    """Evaluates powers of complex constants through polar form.

    The evaluator is bound to one NumericBackend for its whole lifetime, so a
    single evaluation never mixes float and arbitrary-precision values. The
    backend is chosen once, either explicitly or from a PrecisionMode, and is
    passed to every stage of the pipeline.

    The evaluation process:
    1. Split the operand into real and imaginary constants
    2. Coerce both parts and the exponent into the backend representation
    3. Convert to polar form (radius, angle)
    4. Raise the radius to the exponent, scale the angle and rebuild the
       rectangular form

    Attributes:
        backend: The NumericBackend supplying the arithmetic primitives
        settings: Settings used to build symbolic results (zero tolerance)
    """

    def __init__(self, backend: NumericBackend, settings: Settings | None = None):
        """Initialize the evaluator with a numeric backend.

        Args:
            backend: Backend performing the arithmetic
            settings: Settings for symbolic results. Defaults to the settings
                active at construction time.
        """
        self.backend = backend
        self.settings = settings or get_settings()

    @classmethod
    def for_mode(cls, mode: PrecisionMode | None = None, settings: Settings | None = None) -> Self:
        """Build an evaluator for a precision mode.

        Args:
            mode: "native" or "arbitrary". Defaults to the mode of ``settings``.
            settings: Settings to read the mode and working precision from.
                Defaults to the active settings, read once here.

        Raises:
            CpowError: If the mode is unknown
        """
        settings = settings or get_settings()
        return cls(backend_for(mode or settings.mode, settings), settings)

    def evaluate(self, operand: Any, exponent: Any) -> ComplexOperand:
        """Compute ``operand ** exponent`` in rectangular form.

        Args:
            operand: Complex constant, as a sympy expression, Python number or
                ComplexOperand
            exponent: Real numeric constant

        Returns:
            ComplexOperand holding backend values. Components that should be
            zero may carry rounding noise.

        Raises:
            NotConstantError: If the operand or exponent is not a numeric constant
            BackendMismatchError: If the operand carries values of another backend
            DomainError: If an input is non-finite, the exponent is complex, or
                zero is raised to a negative power
        """
        parts = decompose(operand)
        power = constant_exponent(exponent)

        with self.backend.precision():
            base = ComplexOperand(
                real=self.backend.coerce(parts.real),
                imaginary=self.backend.coerce(parts.imaginary),
            )
            polar = to_polar(base, self.backend)
            logger.debug(f"{self.backend!r}: ({base.real}, {base.imaginary}) -> r={polar.radius}, theta={polar.angle}")

            result = reconstruct(polar, self.backend.coerce(power), self.backend)
            logger.debug(f"{self.backend!r}: ^{power} -> ({result.real}, {result.imaginary})")
            return result

    def to_expr(self, result: ComplexOperand) -> sp.Expr:
        """Build the symbolic value of an evaluation result.

        A component smaller than ``zero_tolerance`` relative to the modulus of
        the result is dropped, so a power landing on an axis becomes a pure
        real or pure imaginary value.
        """
        with self.backend.precision():
            tol = self.settings.zero_tolerance * max(1, self.backend.hypot(result.real, result.imaginary))

            real = sp.S.Zero if is_zero(result.real, tol) else self.backend.to_sympy(result.real)
            imaginary = sp.S.Zero if is_zero(result.imaginary, tol) else self.backend.to_sympy(result.imaginary)
            return real + imaginary * sp.I

    def evaluate_expr(self, operand: Any, exponent: Any) -> sp.Expr:
        """Compute ``operand ** exponent`` as a sympy expression."""
        return self.to_expr(self.evaluate(operand, exponent))


def complex_power(
    operand: Any,
    exponent: Any,
    mode: PrecisionMode | None = None,
    settings: Settings | None = None,
) -> ComplexOperand:
    """Compute ``operand ** exponent`` with the backend of ``mode``.

    The active settings are read once, when no explicit mode or settings are given.

    Example:
        >>> result = complex_power(2 * sp.I, 4, mode="arbitrary")
        >>> round(float(result.real))
        16
    """
    return ComplexPowerEvaluator.for_mode(mode, settings).evaluate(operand, exponent)


def power(
    operand: Any,
    exponent: Any,
    mode: PrecisionMode | None = None,
    settings: Settings | None = None,
) -> Result[sp.Expr, EvaluationFailure]:
    """Evaluate a complex power for an expression evaluator.

    Errors are returned instead of raised, so the caller can choose between
    aborting and falling back to symbolic exponentiation.

    Returns:
        Success containing the symbolic result, or Failure describing the
        CpowError that stopped the evaluation.
    """
    expression = f"({operand})**({exponent})"
    try:
        return Success(ComplexPowerEvaluator.for_mode(mode, settings).evaluate_expr(operand, exponent))
    except CpowError as e:
        logger.warning(f"Cannot evaluate {expression}: {e}")
        return Failure(EvaluationFailure(error_message=str(e), expression=expression, error_type=type(e).__name__))
