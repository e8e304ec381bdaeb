"""Histogram bucket generation.

Pure functions producing tuples of bucket upper bounds. Arguments are
validated before anything is computed so a bad parameterization fails at
metric-creation time rather than at observation time.

Linear and powers-of-ten buckets are accumulated in decimal arithmetic so
that values such as ``0.075`` come out exactly as written rather than as
``0.07500000000000001``.
"""

from __future__ import annotations

from decimal import Decimal

from .errors import ErrorCode, InvalidArgumentError

# Default upper bounds used when a histogram is created without buckets.
# The backend adds the +Inf bucket itself.
DEFAULT_BUCKETS: tuple[float, ...] = (
    0.005,
    0.01,
    0.025,
    0.05,
    0.075,
    0.1,
    0.25,
    0.5,
    0.75,
    1.0,
    2.5,
    5.0,
    7.5,
    10.0,
)


def _invalid(message: str, **details: float) -> InvalidArgumentError:
    return InvalidArgumentError(message, details=details, code=ErrorCode.E101_INVALID_BUCKETS)


def exponential_buckets(start: float, factor: float, count: int) -> tuple[float, ...]:
    """Create ``count`` buckets where each bound is ``factor`` times the previous.

    Args:
        start: Upper bound of the first bucket (must be > 0)
        factor: Growth factor between consecutive buckets (must be > 1)
        count: Number of buckets (must be >= 1)

    Returns:
        Tuple of bucket upper bounds, ``start * factor**i`` for ``i`` in
        ``range(count)``

    Raises:
        InvalidArgumentError: If any argument is out of range
    """
    if count < 1:
        raise _invalid("exponential_buckets needs a positive count", count=count)
    if start <= 0:
        raise _invalid("exponential_buckets needs a positive start value", start=start)
    if factor <= 1:
        raise _invalid("exponential_buckets needs a factor greater than 1", factor=factor)

    buckets: list[float] = []
    bound = float(start)
    for _ in range(count):
        buckets.append(bound)
        bound *= factor
    return tuple(buckets)


def linear_buckets(start: float, width: float, count: int) -> tuple[float, ...]:
    """Create ``count`` buckets spaced ``width`` apart, the first at ``start``.

    The sign of ``width`` is not checked; a zero or negative width yields a
    non-increasing tuple that the backend refuses when the histogram is built.

    Raises:
        InvalidArgumentError: If ``count`` is less than 1
    """
    if count < 1:
        raise _invalid("linear_buckets needs a positive count", count=count)

    step = Decimal(repr(float(width)))
    bound = Decimal(repr(float(start)))
    buckets: list[float] = []
    for _ in range(count):
        buckets.append(float(bound))
        bound += step
    return tuple(buckets)


def powers_of_ten_divided_buckets(
    start_power: int, end_power: int, divisions: int
) -> tuple[float, ...]:
    """Divide each power of ten in ``[start_power, end_power)`` into equal buckets.

    For power ``p`` the bounds are ``10**(p + 1) * k / divisions`` for
    ``k = 1..divisions``, so ``(-2, 2, 4)`` gives
    ``0.025, 0.05, 0.075, 0.1, 0.25, ..., 75, 100``. A bound that does not
    exceed the previous one (possible once ``divisions`` reaches 10) is
    skipped so the result stays strictly increasing.

    Raises:
        InvalidArgumentError: If ``divisions`` is less than 1 or the power
            range is empty
    """
    if divisions < 1:
        raise _invalid("powers_of_ten_divided_buckets needs a positive division count", divisions=divisions)
    if end_power <= start_power:
        raise _invalid(
            "powers_of_ten_divided_buckets needs end_power greater than start_power",
            start_power=start_power,
            end_power=end_power,
        )

    ten = Decimal(10)
    buckets: list[float] = []
    for power in range(start_power, end_power):
        upper = ten ** (power + 1)
        for k in range(1, divisions + 1):
            candidate = float(upper * k / divisions)
            if buckets and candidate <= buckets[-1]:
                continue
            buckets.append(candidate)
    return tuple(buckets)
