"""Polar conversion and De Moivre reconstruction.

Both stages receive their inputs as named-field value types and call the
backend primitives with fields read by name, so the arguments of ``atan2``
are always ``(operand.imaginary, operand.real)``.
"""

from __future__ import annotations

from cpow.backends import NumericBackend
from cpow.common import ComplexOperand, Numeric, PolarForm


def to_polar(operand: ComplexOperand, backend: NumericBackend) -> PolarForm:
    """Convert a complex constant to polar form.

    The origin maps to ``PolarForm(0, 0)`` without calling ``atan2``, since its
    angle is indeterminate.

    Args:
        operand: Complex constant whose parts are already coerced by ``backend``
        backend: Numeric backend supplying the primitives

    Returns:
        PolarForm with ``radius >= 0`` and ``angle`` in (-pi, pi]
    """
    # hypot neither underflows nor overflows where squaring the parts would
    radius = backend.hypot(operand.real, operand.imaginary)

    if operand.real == 0 and operand.imaginary == 0:
        zero = backend.zero()
        return PolarForm(radius=zero, angle=zero)

    angle = backend.atan2(operand.imaginary, operand.real)
    return PolarForm(radius=radius, angle=angle)


def reconstruct(polar: PolarForm, exponent: Numeric, backend: NumericBackend) -> ComplexOperand:
    """Raise a polar form to a real exponent and return it in rectangular form.

    Computes ``r^n * (cos(n*theta) + i*sin(n*theta))``. Rounding noise in a
    component that should be zero is returned unchanged.

    Raises:
        DomainError: If a zero radius is raised to a negative exponent
    """
    new_radius = backend.pow(polar.radius, exponent)
    new_angle = backend.multiply(polar.angle, exponent)

    return ComplexOperand(
        real=backend.multiply(new_radius, backend.cos(new_angle)),
        imaginary=backend.multiply(new_radius, backend.sin(new_angle)),
    )
