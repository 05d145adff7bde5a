from __future__ import annotations

import logging
from typing import Any

import sympy as sp

from cpow.common import ComplexOperand, DomainError, NotConstantError

logger = logging.getLogger(__name__)


def as_real_constant(value: Any) -> sp.Expr:
    """Sympify a value and make sure it is a finite real numeric constant.

    Raises:
        NotConstantError: If the value is undefined or has free symbols
        DomainError: If the value is infinite, NaN or not real
    """
    if value is None:
        raise NotConstantError("Value is undefined")

    try:
        expr = sp.sympify(value)
    except (sp.SympifyError, TypeError) as e:
        raise NotConstantError(f"Cannot interpret {value!r} as a number: {e}") from e

    if expr.free_symbols or not expr.is_number:
        raise NotConstantError(f"{expr} is not a numeric constant")
    if expr.has(sp.nan, sp.zoo, sp.oo, -sp.oo):
        raise DomainError(f"{expr} is not finite")
    if expr.is_real is False:
        raise DomainError(f"{expr} is not a real number")
    return expr


def _part(value: Any) -> Any:
    constant = as_real_constant(value)
    # Plain numbers are handed to the backend untouched so it can coerce them exactly
    return constant if isinstance(value, (str, sp.Basic)) else value


def decompose(operand: Any) -> ComplexOperand:
    """Split a complex constant into its real and imaginary parts.

    Args:
        operand: A sympy expression such as ``2*I`` or ``3 + 4*I``, a Python
            number or ``complex``, or a ComplexOperand.

    Returns:
        ComplexOperand whose parts are finite real constants.

    Raises:
        NotConstantError: If either part cannot be reduced to a numeric constant
        DomainError: If either part is infinite or NaN
    """
    if isinstance(operand, ComplexOperand):
        return ComplexOperand(real=_part(operand.real), imaginary=_part(operand.imaginary))

    if operand is None:
        raise NotConstantError("Operand is undefined")

    try:
        expr = sp.sympify(operand)
    except (sp.SympifyError, TypeError) as e:
        raise NotConstantError(f"Cannot interpret {operand!r} as a number: {e}") from e

    if expr.free_symbols:
        names = ", ".join(sorted(str(s) for s in expr.free_symbols))
        raise NotConstantError(f"{expr} depends on free symbols: {names}")

    real, imaginary = expr.as_real_imag()
    logger.debug(f"Decomposed {expr} into real={real}, imaginary={imaginary}")
    return ComplexOperand(real=as_real_constant(real), imaginary=as_real_constant(imaginary))


def constant_exponent(exponent: Any) -> Any:
    """Validate a power exponent as a real numeric constant.

    Raises:
        NotConstantError: If the exponent has free symbols
        DomainError: If the exponent is complex or not finite
    """
    if exponent is None:
        raise NotConstantError("Exponent is undefined")

    try:
        expr = sp.sympify(exponent)
    except (sp.SympifyError, TypeError) as e:
        raise NotConstantError(f"Cannot interpret {exponent!r} as a number: {e}") from e

    if not expr.free_symbols and expr.is_number and expr.is_real is False:
        raise DomainError(f"Complex exponents are not supported: {expr}")
    return _part(exponent)
