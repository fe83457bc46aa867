"""Polynomial operations on ascending coefficient vectors.

Coefficients are galois arrays in ascending order [a0, a1, ..., a_{n-1}].
Conversions between coefficient and evaluation form go through
EvaluationDomain; callers should not need to know that an FFT is involved.
"""

from primitives.ntt import EvaluationDomain


def to_coefficients(field_type, evaluations):
    """Interpolate values given on the canonical domain of their length."""
    domain = EvaluationDomain(field_type, len(evaluations))
    return domain.ifft(evaluations)


def to_evaluations(field_type, coefficients):
    """Evaluate a polynomial on the canonical domain of its length."""
    domain = EvaluationDomain(field_type, len(coefficients))
    return domain.fft(coefficients)


def evaluate(coeffs, x):
    """Horner evaluation of sum(coeffs[i] * x^i)."""
    field_type = type(coeffs)
    acc = field_type(0)
    for c in reversed(coeffs):
        acc = acc * x + c
    return acc


def kate_division(coeffs, point):
    """Divide a(X) - a(point) by (X - point).

    Synthetic division from the leading coefficient down. The quotient has
    len(coeffs) - 1 coefficients and a0 is never read, so the result is the
    same whether or not a(point) has been subtracted first.

    Args:
        coeffs: Dividend coefficients, ascending
        point: Evaluation point b

    Returns:
        Quotient coefficients, ascending
    """
    field_type = type(coeffs)
    n = len(coeffs)
    if n == 0:
        raise ValueError("Cannot divide an empty polynomial")

    quotient = field_type.Zeros(n - 1)
    carry = field_type(0)
    for i in range(n - 1, 0, -1):
        lead = coeffs[i] + carry
        quotient[i - 1] = lead
        carry = lead * point
    return quotient
