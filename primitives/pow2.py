"""Power-of-two helpers used to size tables and drive the FFT."""


def is_pow_2(x: int) -> bool:
    """True when x is a positive power of two."""
    return x > 0 and (x & (x - 1)) == 0


def log2(x: int) -> int:
    """Floor of log2(x) for x >= 1."""
    if x < 1:
        raise ValueError(f"log2 undefined for {x}")
    return x.bit_length() - 1
