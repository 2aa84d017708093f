"""Single photometric flux measurements.

A Flux holds one measured quantity for one waveband under a named type
label (``"mag"``, ``"jy"``, ...). No conversion is done between types:
what goes in under one label can only be read back under that label.
"""

from dataclasses import dataclass

from astropy.time import Time

from astrofluxes.exceptions import (
    MissingArgumentError,
    TypeMismatchError,
    UnknownTypeError,
)
from astrofluxes.quality import Quality
from astrofluxes.uncertainty import UncertainValue
from astrofluxes.waveband import Waveband


def check_time(value, argument="datetime", operation="Flux"):
    """Raise TypeMismatchError unless value is None or an astropy Time."""
    if value is not None and not isinstance(value, Time):
        raise TypeMismatchError(argument, "an astropy Time", value, operation)
    return value


@dataclass(frozen=True)
class FluxOptions:
    """Optional provenance for a Flux.

    Attributes:
        quality (Quality, optional):
            Quality flags, e.g. ``Quality(derived=True)``.
        reference_waveband (Waveband, optional):
            Band the value is measured relative to. Only collections set
            this, when they expand a color into a pair of magnitudes.
        datetime (astropy.time.Time, optional):
            Observation time.
    """

    quality: Quality | None = None
    reference_waveband: Waveband | None = None
    datetime: Time | None = None

    def __post_init__(self):
        if self.quality is not None and not isinstance(self.quality, Quality):
            raise TypeMismatchError("quality", "a Quality", self.quality, "FluxOptions")
        if self.reference_waveband is not None and not isinstance(
            self.reference_waveband, Waveband
        ):
            raise TypeMismatchError(
                "reference_waveband",
                "a Waveband",
                self.reference_waveband,
                "FluxOptions",
            )
        check_time(self.datetime, operation="FluxOptions")


class Flux:
    """A flux measurement for one waveband.

    The type label is case-insensitive: a flux built with ``"mag"`` answers
    ``quantity("MAG")``.
    """

    def __init__(self, quantity, type, waveband, options=None, **option_fields):
        """Initialize the Flux.

        Args:
            quantity (float, tuple or UncertainValue):
                The measured value, optionally with its error as a
                ``(value, error)`` pair or an UncertainValue.
            type (str):
                Type label of the quantity. Any string.
            waveband (Waveband):
                Band of the measurement.
            options (FluxOptions, optional):
                Quality, reference waveband and timestamp.
            **option_fields:
                The FluxOptions fields as keywords, instead of ``options``.

        Raises:
            MissingArgumentError:
                If quantity, type or waveband is None.
            TypeMismatchError:
                If waveband is not a Waveband, or an option has the wrong type.
        """
        if quantity is None:
            raise MissingArgumentError("quantity", "Flux")
        if type is None:
            raise MissingArgumentError("type", "Flux")
        if waveband is None:
            raise MissingArgumentError("waveband", "Flux")
        if not isinstance(type, str):
            raise TypeMismatchError("type", "a string", type, "Flux")
        if not isinstance(waveband, Waveband):
            raise TypeMismatchError("waveband", "a Waveband", waveband, "Flux")

        if options is None:
            options = FluxOptions(**option_fields)
        elif option_fields:
            raise TypeError("Flux: pass either options or option keywords, not both")
        elif not isinstance(options, FluxOptions):
            raise TypeMismatchError("options", "a FluxOptions", options, "Flux")

        self._values = {type.upper(): UncertainValue.coerce(quantity)}
        self._waveband = waveband
        self._quality = options.quality
        self._reference_waveband = options.reference_waveband
        self._datetime = options.datetime

    def quantity(self, type):
        """Return the value stored under a type label.

        Returns None when ``type`` is None.

        Raises:
            UnknownTypeError:
                If nothing was stored under ``type``.
        """
        number = self._lookup(type)
        return None if number is None else number.value

    def error(self, type):
        """Return the error of the value stored under a type label, or None."""
        number = self._lookup(type)
        return None if number is None else number.error

    def uncertain_value(self, type):
        """Return the UncertainValue stored under a type label."""
        return self._lookup(type)

    def _lookup(self, type):
        if type is None:
            return None
        key = type.upper()
        if key not in self._values:
            raise UnknownTypeError(type, self._values)
        return self._values[key]

    @property
    def types(self):
        """Type labels held by this flux, upper-cased."""
        return tuple(self._values)

    @property
    def waveband(self):
        return self._waveband

    @property
    def quality(self):
        return self._quality

    @property
    def reference_waveband(self):
        return self._reference_waveband

    @property
    def is_synthetic(self):
        """True for magnitudes expanded from a color."""
        return self._reference_waveband is not None

    @property
    def datetime(self):
        """Observation time, or None."""
        return self._datetime

    @datetime.setter
    def datetime(self, value):
        self._datetime = check_time(value, operation="Flux.datetime")

    def __repr__(self):
        parts = ["Flux:"]
        for key, number in self._values.items():
            parts.append(f"  {key}: {number}")
        parts.append(f"  waveband: {self._waveband}")
        if self._reference_waveband is not None:
            parts.append(f"  reference_waveband: {self._reference_waveband}")
        if self._quality is not None:
            parts.append(f"  quality: {self._quality!r}")
        if self._datetime is not None:
            parts.append(f"  datetime: {self._datetime.isot}")
        return "\n".join(parts)
