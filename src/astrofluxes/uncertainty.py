"""Numbers with an optional symmetric uncertainty."""

from dataclasses import dataclass
from numbers import Real

import numpy as np

from astrofluxes.exceptions import MissingArgumentError, TypeMismatchError


def _as_float(x, argument):
    if isinstance(x, bool) or not isinstance(x, Real):
        raise TypeMismatchError(argument, "a real number", x, "UncertainValue")
    return float(x)


@dataclass(frozen=True)
class UncertainValue:
    """A value with an optional one-sigma error.

    ``error`` is None when the value carries no uncertainty at all, which is
    distinct from an explicit error of zero.
    """

    value: float
    error: float | None = None

    def __post_init__(self):
        if self.value is None:
            raise MissingArgumentError("value", "UncertainValue")
        value = _as_float(self.value, "value")
        if not np.isfinite(value):
            raise ValueError(f"UncertainValue: value must be finite, got {value}")
        object.__setattr__(self, "value", value)

        if self.error is not None:
            error = _as_float(self.error, "error")
            if not error >= 0:
                raise ValueError(f"UncertainValue: error must be >= 0, got {error}")
            object.__setattr__(self, "error", error)

    @classmethod
    def coerce(cls, quantity, error=None):
        """Build an UncertainValue from a bare number or a (value, error) pair.

        An UncertainValue is returned unchanged. ``error`` is only used for
        bare numbers.
        """
        if quantity is None:
            raise MissingArgumentError("quantity", "UncertainValue.coerce")
        if isinstance(quantity, cls):
            return quantity
        if isinstance(quantity, tuple):
            if len(quantity) != 2:
                raise ValueError(
                    "UncertainValue.coerce: expected a (value, error) pair, "
                    f"got {len(quantity)} items"
                )
            return cls(*quantity)
        return cls(quantity, error)

    @property
    def variance(self):
        """Square of the error, or None without an error."""
        if self.error is None:
            return None
        return self.error**2

    def __neg__(self):
        return UncertainValue(-self.value, self.error)

    def __mul__(self, factor):
        if isinstance(factor, UncertainValue):
            return NotImplemented
        factor = _as_float(factor, "factor")
        error = None if self.error is None else abs(factor) * self.error
        return UncertainValue(factor * self.value, error)

    __rmul__ = __mul__

    def __float__(self):
        return self.value

    def __str__(self):
        if self.error is None:
            return f"{self.value:g}"
        return f"{self.value:g} +/- {self.error:g}"
