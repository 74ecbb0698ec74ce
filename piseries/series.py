"""
Approximate pi with a truncated Leibniz series::

    pi = 4 * (1 - 1/3 + 1/5 - 1/7 + ...)

The series converges slowly: after *N* terms the error is at most
``4 / (2 * N + 1)``.

>>> approximate_pi(1)
4.0
>>> round(approximate_pi(2), 4)
2.6667
>>> round(approximate_pi(), 4)
3.1403

"""

import numbers


# Increase to improve accuracy.
DEFAULT_LIMIT = 800


def term_sign(index):
    """Return +1 for even and -1 for odd term indices."""
    return 1 if index % 2 == 0 else -1


def term_magnitude(index):
    """Return the unsigned term ``1 / (2 * index + 1)``."""
    return 1.0 / (2 * index + 1)


def remainder_bound(limit):
    """Upper bound for ``abs(math.pi - approximate_pi(limit))``.

    >>> remainder_bound(0)
    4.0
    """
    return 4.0 / (2 * limit + 1)


def check_limit(limit):
    # bool is a subclass of int, but True terms make no sense.
    if not isinstance(limit, numbers.Integral) or isinstance(limit, bool):
        raise ValueError(f"limit must be an integer: {limit!r}")
    if limit < 0:
        raise ValueError(f"limit must not be negative: {limit}")


class PartialSum:
    """
    Running sum of the signed odd reciprocals ``1 - 1/3 + 1/5 - ...``.

    After *index* calls to :meth:`add_next_term`, *value* holds the sum of
    the first *index* terms (before scaling by 4).
    """

    def __init__(self):
        self.value = 0.0
        self.index = 0
        self.sign = 1

    def add_next_term(self):
        """Add the term at position *index* and return it."""
        denominator = 2 * self.index + 1
        term = 1.0 / denominator
        term *= self.sign
        self.value += term
        self.sign = -self.sign
        self.index += 1
        return term

    def scaled(self):
        return self.value * 4.0

    def __repr__(self):
        return f"PartialSum(value={self.value!r}, index={self.index})"


def approximate_pi(limit=DEFAULT_LIMIT):
    """Sum the first *limit* terms of the series and return 4 times the sum.

    Terms are added in ascending order, so the result is reproducible bit
    for bit. Raises ValueError if *limit* is not a non-negative integer.
    """
    check_limit(limit)
    partial_sum = PartialSum()
    for _ in range(limit):
        partial_sum.add_next_term()
    return partial_sum.scaled()
