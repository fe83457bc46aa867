"""Multi-scalar multiplication: sum(scalars[i] * points[i])."""

from typing import Optional, Sequence

from primitives.curve import PairingEngine, Point

# Below this many terms the bucket method does not pay for its doublings
PIPPENGER_THRESHOLD = 32


def naive_multiexp(engine: PairingEngine, scalars: Sequence[int], points: Sequence[Point], identity: Point) -> Point:
    """Scalar-multiply and add term by term, skipping zero scalars."""
    result = identity
    for scalar, point in zip(scalars, points):
        if scalar != 0:
            result = engine.add(result, engine.mul(point, scalar))
    return result


def pippenger_multiexp(engine: PairingEngine, scalars: Sequence[int], points: Sequence[Point], identity: Point) -> Point:
    """Bucket method with c-bit windows, most significant window first."""
    c = _window_size(len(scalars))
    mask = (1 << c) - 1
    n_bits = max(s.bit_length() for s in scalars)
    n_windows = (n_bits + c - 1) // c

    result = identity
    for w in range(n_windows - 1, -1, -1):
        for _ in range(c):
            result = engine.add(result, result)

        buckets = [identity] * mask
        shift = w * c
        for scalar, point in zip(scalars, points):
            digit = (scalar >> shift) & mask
            if digit:
                buckets[digit - 1] = engine.add(buckets[digit - 1], point)

        # sum_k k * bucket[k] via running sums
        running = identity
        window_sum = identity
        for bucket in reversed(buckets):
            running = engine.add(running, bucket)
            window_sum = engine.add(window_sum, running)
        result = engine.add(result, window_sum)
    return result


def best_multiexp(
    engine: PairingEngine,
    scalars,
    points: Sequence[Point],
    identity: Optional[Point] = None,
) -> Point:
    """Compute sum(scalars[i] * points[i]).

    Args:
        engine: Curve the points live on
        scalars: Integers or scalar field elements
        points: Group elements, same length as scalars
        identity: Group identity, required when the input is empty

    Returns:
        The combined group element (identity for empty input)
    """
    if len(scalars) != len(points):
        raise ValueError(f"scalars and points must have same length: {len(scalars)} != {len(points)}")
    if identity is None:
        if len(points) == 0:
            raise ValueError("identity is required for an empty multiexp")
        identity = engine.identity_like(points[0])

    order = engine.scalar_field.order
    ints = [int(s) % order for s in scalars]
    terms = [(s, p) for s, p in zip(ints, points) if s != 0]
    if not terms:
        return identity

    live_scalars = [s for s, _ in terms]
    live_points = [p for _, p in terms]
    if len(terms) < PIPPENGER_THRESHOLD:
        return naive_multiexp(engine, live_scalars, live_points, identity)
    return pippenger_multiexp(engine, live_scalars, live_points, identity)


def _window_size(n: int) -> int:
    if n < 32:
        return 3
    return max(4, n.bit_length() - 2)
