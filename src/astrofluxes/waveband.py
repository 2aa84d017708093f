"""Spectral band identifiers.

A Waveband is a thin identity for a photometric band: either a named filter
(``"J"``, ``"Ks"``, ``"r"``) or a central wavelength. Its canonical string,
``natural``, is what flux collections group on.
"""

from numbers import Real

import astropy.units as u

from astrofluxes.exceptions import MissingArgumentError, TypeMismatchError


class Waveband:
    """A photometric band, named by filter or by wavelength.

    Two wavebands are equal when their canonical strings are equal, so
    ``Waveband("J") == Waveband(filter="J")``. Collections bucket wavebands
    by the first character of that string; see ``bucket_key``.
    """

    __slots__ = ("_filter", "_wavelength")

    def __init__(self, filter=None, wavelength=None):
        """Initialize the waveband.

        Args:
            filter (str, optional):
                Name of the filter, e.g. ``"J"``.
            wavelength (astropy.units.Quantity or float, optional):
                Central wavelength. Any spectral unit is accepted (frequency
                and wavenumber are converted); a bare number is taken to be
                in microns.

        Raises:
            MissingArgumentError:
                If neither a filter nor a wavelength is given.
            ValueError:
                If both are given, or the filter name is empty.
            TypeMismatchError:
                If the filter is not a string or the wavelength is not a
                spectral quantity.
        """
        if filter is None and wavelength is None:
            raise MissingArgumentError("filter", "Waveband")
        if filter is not None and wavelength is not None:
            raise ValueError("Waveband: give either a filter or a wavelength, not both")

        if filter is not None:
            if not isinstance(filter, str):
                raise TypeMismatchError("filter", "a string", filter, "Waveband")
            if not filter.strip():
                raise ValueError("Waveband: filter name must not be empty")
            self._filter = filter.strip()
            self._wavelength = None
        else:
            self._filter = None
            self._wavelength = self._to_micron(wavelength)

    @staticmethod
    def _to_micron(wavelength):
        if not isinstance(wavelength, u.Quantity):
            if isinstance(wavelength, bool) or not isinstance(wavelength, Real):
                raise TypeMismatchError(
                    "wavelength",
                    "a spectral Quantity or number",
                    wavelength,
                    "Waveband",
                )
            wavelength = wavelength * u.um
        try:
            return wavelength.to(u.um, equivalencies=u.spectral())
        except u.UnitConversionError:
            raise TypeMismatchError(
                "wavelength", "a spectral Quantity", wavelength, "Waveband"
            ) from None

    @classmethod
    def coerce(cls, value, argument="waveband", operation="Waveband.coerce"):
        """Convert an API argument into a Waveband.

        Args:
            value (Waveband or str):
                A Waveband is returned unchanged; a string is used as the
                filter name of a new Waveband.
            argument (str):
                Name of the argument, for error messages.
            operation (str):
                Name of the calling operation, for error messages.

        Returns:
            Waveband
        """
        if value is None:
            raise MissingArgumentError(argument, operation)
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(filter=value)
        raise TypeMismatchError(argument, "a Waveband or filter name", value, operation)

    @property
    def filter(self):
        """Filter name, or None for wavelength-defined bands."""
        return self._filter

    @property
    def wavelength(self):
        """Central wavelength in microns, or None for filter-defined bands."""
        return self._wavelength

    @property
    def natural(self):
        """Canonical descriptive string for the band."""
        if self._filter is not None:
            return self._filter
        return f"{self._wavelength.value:g}um"

    @property
    def bucket_key(self):
        """Grouping key used by flux collections: first character of ``natural``.

        Bands whose names share a first letter (``K`` and ``Ks``) share a key.
        """
        return self.natural[0]

    def __eq__(self, other):
        if not isinstance(other, Waveband):
            return NotImplemented
        return self.natural == other.natural

    def __hash__(self):
        return hash(self.natural)

    def __str__(self):
        return self.natural

    def __repr__(self):
        if self._filter is not None:
            return f"Waveband(filter={self._filter!r})"
        return f"Waveband(wavelength={self._wavelength!r})"
