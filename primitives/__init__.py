"""Primitives - Low-level field, curve and polynomial building blocks."""

from primitives.curve import (
    BLS12_381,
    BN254,
    PairingEngine,
    PyEccEngine,
    get_engine,
)
from primitives.field import (
    FR_BLS12_381,
    FR_BN254,
    root_of_unity,
    to_field,
)
from primitives.msm import best_multiexp
from primitives.ntt import EvaluationDomain
from primitives.polynomial import evaluate, kate_division
from primitives.pow2 import is_pow_2, log2

__all__ = [
    # Field
    "FR_BN254",
    "FR_BLS12_381",
    "root_of_unity",
    "to_field",
    # Curves
    "PairingEngine",
    "PyEccEngine",
    "BN254",
    "BLS12_381",
    "get_engine",
    # Domain / polynomials
    "EvaluationDomain",
    "evaluate",
    "kate_division",
    # MSM
    "best_multiexp",
    # Sizing
    "is_pow_2",
    "log2",
]
