"""Radix-2 evaluation domain over a prime scalar field."""

import numpy as np

from primitives.field import root_of_unity, to_field
from primitives.pow2 import is_pow_2, log2

# --- Evaluation Domain ---

class EvaluationDomain:
    """Multiplicative subgroup of size 2^k with forward and inverse FFT.

    The roots are enumerated as 1, w, w^2, ..., w^(n-1). Everything that aligns
    data to the domain (table quotients, Lagrange bases) relies on this order.
    """

    def __init__(self, field_type, size: int) -> None:
        if not is_pow_2(size):
            raise ValueError(f"Domain size must be a power of 2, got {size}")

        self.field = field_type
        self.size = size
        self.n_bits = log2(size)

        self.omega = root_of_unity(field_type, size)
        self.omega_inv = self.omega ** -1
        self.ifft_divisor = field_type(size) ** -1

        self._roots = _precompute_roots(field_type, self.omega, size)

    def __repr__(self) -> str:
        return f"EvaluationDomain(size={self.size}, omega={int(self.omega)})"

    def roots(self):
        """Domain elements in enumeration order."""
        return self._roots.copy()

    def element(self, i: int):
        """The i-th root w^i."""
        return self._roots[i % self.size]

    def fft(self, coeffs, omega=None):
        """Forward FFT: coefficients -> evaluations at w^0..w^(n-1)."""
        return _radix2(self._check_input(coeffs), self.omega if omega is None else omega)

    def ifft(self, evals, omega_inv=None, divisor=None):
        """Inverse FFT: evaluations -> coefficients.

        omega_inv and divisor default to the domain's own; passing them
        explicitly mirrors callers that carry precomputed values.
        """
        evals = self._check_input(evals)
        omega_inv = self.omega_inv if omega_inv is None else omega_inv
        divisor = self.ifft_divisor if divisor is None else divisor
        return _radix2(evals, omega_inv) * divisor

    def _check_input(self, values):
        arr = values if isinstance(values, self.field) else to_field(self.field, values)
        if arr.ndim != 1 or arr.shape[0] != self.size:
            raise ValueError(f"Expected {self.size} values, got shape {arr.shape}")
        return arr


# --- Helpers ---

def _precompute_roots(field_type, omega, n_roots: int):
    """Precompute roots of unity: roots[k] = omega^k."""
    roots = field_type.Zeros(n_roots)
    roots[0] = field_type(1)
    for i in range(1, n_roots):
        roots[i] = roots[i - 1] * omega
    return roots


def _bit_reverse_indices(n: int) -> np.ndarray:
    bits = log2(n)
    return np.array([int(format(i, f"0{bits}b")[::-1], 2) if bits else 0 for i in range(n)])


def _radix2(values, omega):
    """Iterative decimation-in-time Cooley-Tukey transform."""
    field_type = type(values)
    n = values.shape[0]
    if n == 1:
        return values.copy()

    a = values[_bit_reverse_indices(n)]
    m = 1
    while m < n:
        w_m = omega ** (n // (2 * m))
        twiddles = _precompute_roots(field_type, w_m, m)

        blocks = a.reshape(n // (2 * m), 2 * m)
        even = blocks[:, :m]
        odd = blocks[:, m:] * twiddles

        out = field_type.Zeros((n // (2 * m), 2 * m))
        out[:, :m] = even + odd
        out[:, m:] = even - odd
        a = out.reshape(n)
        m *= 2
    return a
