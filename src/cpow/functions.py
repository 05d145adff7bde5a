from cpow.common import Numeric

EPSILON = 1e-9


def is_zero(a: Numeric, tol: float = EPSILON) -> bool:
    """
    Check if a given number is effectively zero.
    This function compares the absolute value of the input number to a small
    threshold value (EPSILON) to determine if it is close enough to zero to be
    considered zero. Works for both float and mpmath.mpf values.
    Args:
        a: The number to check.
    Returns:
        bool: True if the number is effectively zero, False otherwise.
    """

    return bool(abs(a) < tol)
