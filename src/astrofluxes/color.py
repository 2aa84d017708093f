"""Two-band color measurements."""

from astrofluxes.exceptions import MissingArgumentError, TypeMismatchError
from astrofluxes.flux import check_time
from astrofluxes.uncertainty import UncertainValue
from astrofluxes.waveband import Waveband


class Color:
    """A color between a lower (shorter wavelength) and an upper waveband.

    When a collection expands a color, the lower band is assigned
    ``+quantity`` relative to the upper band and the upper band
    ``-quantity`` relative to the lower one.
    """

    def __init__(self, lower, upper, quantity, datetime=None):
        """Initialize the Color.

        Args:
            lower (Waveband):
                Shorter-wavelength band.
            upper (Waveband):
                Longer-wavelength band.
            quantity (float, tuple or UncertainValue):
                Color in magnitudes. A bare number is given a zero error.
            datetime (astropy.time.Time, optional):
                Observation time.

        Raises:
            MissingArgumentError:
                If lower, upper or quantity is None.
            TypeMismatchError:
                If a band is not a Waveband or datetime is not a Time.
        """
        for name, band in (("lower", lower), ("upper", upper)):
            if band is None:
                raise MissingArgumentError(name, "Color")
            if not isinstance(band, Waveband):
                raise TypeMismatchError(name, "a Waveband", band, "Color")
        if quantity is None:
            raise MissingArgumentError("quantity", "Color")

        self._lower = lower
        self._upper = upper
        self._quantity = UncertainValue.coerce(quantity, error=0.0)
        self._datetime = check_time(datetime, operation="Color")

    @property
    def quantity(self):
        """The color value."""
        return self._quantity.value

    @property
    def error(self):
        """Uncertainty on the color value."""
        return self._quantity.error

    @property
    def uncertain_value(self):
        return self._quantity

    @property
    def lower(self):
        return self._lower

    @property
    def upper(self):
        return self._upper

    @property
    def datetime(self):
        return self._datetime

    @property
    def label(self):
        """Provenance label, ``"<upper>-<lower>"``."""
        return f"{self._upper}-{self._lower}"

    def __repr__(self):
        parts = ["Color:"]
        parts.append(f"  lower: {self._lower}")
        parts.append(f"  upper: {self._upper}")
        parts.append(f"  quantity: {self._quantity}")
        if self._datetime is not None:
            parts.append(f"  datetime: {self._datetime.isot}")
        return "\n".join(parts)
