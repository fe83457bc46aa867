"""
Expression AST for gate and lookup inputs.

An expression is a polynomial over circuit column queries. The only thing the
lookup layer needs from it is its degree, so that the constraint system can
size the extended evaluation domain, plus a way to evaluate it against a
witness for sanity checks.

Leaves:

  Constant   A field constant (degree 0).
  Selector   A per-row on/off switch (degree 1).
  Fixed      A fixed column queried at a rotation (degree 1).
  Advice     A witness column queried at a rotation (degree 1).
  Instance   A public-input column queried at a rotation (degree 1).

Internal nodes:

  Negated    -e              degree(e)
  Sum        a + b           max(degree(a), degree(b))
  Product    a * b           degree(a) + degree(b)
  Scaled     e * constant    degree(e)

Python operators build the tree:

    a = Advice(0)
    s = Selector(0)
    expr = s * (a - 1)           # Product(Selector, Sum(Advice, Negated(Constant)))
    expr.degree()                # 2
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union


class Expression:
    """Base class for all expression nodes."""

    def degree(self) -> int:
        raise NotImplementedError("Subclass must implement degree")

    def evaluate(self, resolve: Callable[["Expression"], Any]) -> Any:
        """Evaluate the tree over the integers.

        resolve maps each non-constant leaf to an integer. The result is not
        reduced; callers reduce it modulo their field order.
        """
        raise NotImplementedError("Subclass must implement evaluate")

    def __add__(self, other: ExprLike) -> Expression:
        return Sum(self, _lift(other))

    def __radd__(self, other: ExprLike) -> Expression:
        return Sum(_lift(other), self)

    def __sub__(self, other: ExprLike) -> Expression:
        return Sum(self, Negated(_lift(other)))

    def __rsub__(self, other: ExprLike) -> Expression:
        return Sum(_lift(other), Negated(self))

    def __mul__(self, other: ExprLike) -> Expression:
        if isinstance(other, int):
            return Scaled(self, other)
        return Product(self, _lift(other))

    def __rmul__(self, other: ExprLike) -> Expression:
        if isinstance(other, int):
            return Scaled(self, other)
        return Product(_lift(other), self)

    def __neg__(self) -> Expression:
        return Negated(self)


ExprLike = Union[Expression, int]


def _lift(value: ExprLike) -> Expression:
    if isinstance(value, Expression):
        return value
    if isinstance(value, int):
        return Constant(value)
    raise TypeError(f"Cannot use {type(value).__name__} in an expression")


# ═══════════════════════════════════════════════════════════════════
# Leaf nodes
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Constant(Expression):
    """A field constant, stored as an integer."""
    value: int

    def degree(self) -> int:
        return 0

    def evaluate(self, resolve):
        return self.value


@dataclass(frozen=True)
class Selector(Expression):
    index: int
    simple: bool = True

    def degree(self) -> int:
        return 1

    def evaluate(self, resolve):
        return resolve(self)


@dataclass(frozen=True)
class Fixed(Expression):
    column_index: int
    rotation: int = 0

    def degree(self) -> int:
        return 1

    def evaluate(self, resolve):
        return resolve(self)


@dataclass(frozen=True)
class Advice(Expression):
    column_index: int
    rotation: int = 0
    phase: int = 0

    def degree(self) -> int:
        return 1

    def evaluate(self, resolve):
        return resolve(self)


@dataclass(frozen=True)
class Instance(Expression):
    column_index: int
    rotation: int = 0

    def degree(self) -> int:
        return 1

    def evaluate(self, resolve):
        return resolve(self)


# ═══════════════════════════════════════════════════════════════════
# Internal nodes
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Negated(Expression):
    expr: Expression

    def degree(self) -> int:
        return self.expr.degree()

    def evaluate(self, resolve):
        return -self.expr.evaluate(resolve)


@dataclass(frozen=True)
class Sum(Expression):
    left: Expression
    right: Expression

    def degree(self) -> int:
        return max(self.left.degree(), self.right.degree())

    def evaluate(self, resolve):
        return self.left.evaluate(resolve) + self.right.evaluate(resolve)


@dataclass(frozen=True)
class Product(Expression):
    left: Expression
    right: Expression

    def degree(self) -> int:
        return self.left.degree() + self.right.degree()

    def evaluate(self, resolve):
        return self.left.evaluate(resolve) * self.right.evaluate(resolve)


@dataclass(frozen=True)
class Scaled(Expression):
    expr: Expression
    factor: int

    def degree(self) -> int:
        return self.expr.degree()

    def evaluate(self, resolve):
        return self.expr.evaluate(resolve) * self.factor
