"""Collections of fluxes and colors, with derivation of unmeasured values.

A FluxCollection stores raw Flux measurements together with Color relations.
Every Color is expanded on the way in into two synthetic magnitudes, one per
band, each pointing at the other band through its ``reference_waveband``:

    Color(lower=J, upper=K, quantity=10)
        -> Flux(+10 mag, J, reference_waveband=K)
        -> Flux(-10 mag, K, reference_waveband=J)

Entries are grouped into buckets keyed by the first character of the band's
canonical name. A query for a band that was never measured directly walks
those reference links until it reaches a raw measurement (the anchor),
summing magnitudes along the way and adding errors in quadrature.

Colors of colors are not resolved: a color whose bands cannot both be tied
to an anchor is reported as not found.
"""

import copy
from types import MappingProxyType

import numpy as np

from astrofluxes.color import Color
from astrofluxes.exceptions import MissingArgumentError, TypeMismatchError
from astrofluxes.flux import Flux, check_time
from astrofluxes.logger import logger
from astrofluxes.quality import Quality
from astrofluxes.settings import Settings
from astrofluxes.uncertainty import UncertainValue
from astrofluxes.waveband import Waveband


def _in_epoch(flux, datetime):
    """Whether a stored flux satisfies a datetime-scoped query.

    Entries without a timestamp match every query; timestamped entries only
    match the exact time asked for.
    """
    if datetime is None or flux.datetime is None:
        return True
    return bool(flux.datetime == datetime)


class FluxCollection:
    """A mutable collection of Flux and Color measurements.

    Buckets keep insertion order and are never de-duplicated, so every scan
    returns the first matching entry in the order it was added.
    """

    def __init__(self, *items, settings=None):
        """Initialize the collection.

        Args:
            *items (Flux or Color):
                Measurements to add, in order.
            settings (Settings, optional):
                Defaults for queries and color expansion. A default Settings
                is created when omitted.
        """
        if settings is None:
            settings = Settings()
        elif not isinstance(settings, Settings):
            raise TypeMismatchError(
                "settings", "a Settings", settings, "FluxCollection"
            )
        self.settings = settings

        self._buckets = {}
        self._filters = []
        self._colors = []
        self.pushfluxes(*items)

    def __repr__(self):
        parts = ["FluxCollection:"]
        for key in self.whatwavebands():
            bucket = self._buckets[key]
            n_raw = sum(not flux.is_synthetic for flux in bucket)
            parts.append(f"  {key}: {n_raw} raw, {len(bucket) - n_raw} synthetic")
        return "\n".join(parts)

    def __len__(self):
        return sum(len(bucket) for bucket in self._buckets.values())

    def __iter__(self):
        for key in self.whatwavebands():
            yield from self._buckets[key]

    @property
    def magnitude_type(self):
        return self.settings.magnitude_type

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def pushfluxes(self, *items):
        """Add Flux and Color measurements to the collection.

        Fluxes are copied into the bucket of their waveband. Colors are
        expanded into a pair of synthetic magnitudes tagged
        ``Quality(derived=True)``.

        Returns:
            FluxCollection: self, for chaining.

        Raises:
            TypeMismatchError:
                If an item is neither a Flux nor a Color.
        """
        for item in items:
            if isinstance(item, Flux):
                self._add_flux(item)
            elif isinstance(item, Color):
                self._add_color(item)
            else:
                raise TypeMismatchError(
                    "item", "a Flux or Color", item, "FluxCollection.pushfluxes"
                )
        return self

    def _add_flux(self, flux):
        key = flux.waveband.bucket_key
        self._buckets.setdefault(key, []).append(copy.copy(flux))
        if not flux.is_synthetic:
            self._filters.append(key)

    def _add_color(self, color):
        quality = Quality(derived=True)
        number = color.uncertain_value

        lower_flux = Flux(
            number,
            self.magnitude_type,
            color.lower,
            quality=quality,
            reference_waveband=color.upper,
            datetime=color.datetime,
        )
        upper_flux = Flux(
            -1.0 * number,
            self.magnitude_type,
            color.upper,
            quality=quality,
            reference_waveband=color.lower,
            datetime=color.datetime,
        )
        self._buckets.setdefault(color.lower.bucket_key, []).append(lower_flux)
        self._buckets.setdefault(color.upper.bucket_key, []).append(upper_flux)
        self._colors.append(color.label)
        logger.debug(f"Expanded color {color.label} = {number}")

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------
    def flux(self, waveband, type=None, derived=None, datetime=None):
        """Return the flux for a waveband, measured or derived.

        A raw measurement holding ``type`` is returned directly, first match
        in insertion order. Failing that, and only when ``derived`` is true
        and ``type`` is the magnitude type, a magnitude is derived from the
        stored colors.

        Args:
            waveband (Waveband or str):
                Band to look up. A string is taken as a filter name.
            type (str, optional):
                Flux type label. Defaults to ``settings.magnitude_type``.
            derived (bool, optional):
                Whether to derive a magnitude from colors when nothing was
                measured. Defaults to ``settings.derived``.
            datetime (astropy.time.Time, optional):
                Restrict the lookup to entries taken at this time. Entries
                with no timestamp match any time.

        Returns:
            Flux or None:
                The stored flux, a new derived flux tagged
                ``Quality(derived=True)``, or None if no answer exists.
        """
        waveband = Waveband.coerce(waveband, "waveband", "FluxCollection.flux")
        check_time(datetime, operation="FluxCollection.flux")
        if type is None:
            type = self.magnitude_type
        elif not isinstance(type, str):
            raise TypeMismatchError("type", "a string", type, "FluxCollection.flux")
        if derived is None:
            derived = self.settings.derived

        result = self._measured(waveband, type, datetime)
        if result is not None or not derived:
            return result
        if type.upper() != self.magnitude_type.upper():
            # Derivation only ever produces magnitudes
            return None
        return self._derive(waveband, datetime, path=())

    def _measured(self, waveband, type, datetime):
        key = type.upper()
        for flux in self._buckets.get(waveband.bucket_key, []):
            if flux.is_synthetic or key not in flux.types:
                continue
            if _in_epoch(flux, datetime):
                return flux
        return None

    def _anchored(self, flux, waveband):
        """Whether a synthetic entry leads somewhere other than straight back.

        The reference bucket must hold more than one entry, or its single
        entry must not itself point back at ``waveband``.
        """
        ref_bucket = self._buckets.get(flux.reference_waveband.bucket_key, [])
        if len(ref_bucket) > 1:
            return True
        return len(ref_bucket) == 1 and ref_bucket[0].reference_waveband != waveband

    def _derive(self, waveband, datetime, path):
        if waveband in path:
            # A deterministic walk that re-enters its own path can only loop
            logger.debug(f"Derivation of {waveband} revisits its own path; giving up")
            return None

        edge = None
        for flux in self._buckets.get(waveband.bucket_key, []):
            if (
                flux.is_synthetic
                and _in_epoch(flux, datetime)
                and self._anchored(flux, waveband)
            ):
                edge = flux
                break
        if edge is None:
            logger.debug(f"No color links {waveband} to another band")
            return None

        mag_type = self.magnitude_type
        step = edge.uncertain_value(mag_type)
        reference = edge.reference_waveband
        anchor = self._measured(reference, mag_type, datetime)
        if anchor is None:
            anchor = self._derive(reference, datetime, path + (waveband,))
        if anchor is None:
            logger.debug(f"No anchor for {waveband} through {reference}")
            return None
        anchor_value = anchor.uncertain_value(mag_type)

        total = step.value + anchor_value.value
        variances = [v for v in (step.variance, anchor_value.variance) if v is not None]
        error = float(np.sqrt(sum(variances))) if variances else None

        timestamp = None
        if datetime is not None:
            timestamp = anchor.datetime
            if timestamp is None:
                timestamp = edge.datetime

        logger.debug(f"Derived {waveband} = {total:g} via {reference}")
        return Flux(
            UncertainValue(total, error),
            mag_type,
            waveband,
            quality=Quality(derived=True),
            datetime=timestamp,
        )

    def color(self, lower, upper, datetime=None):
        """Return the color between two wavebands, stored or derived.

        A color stored between the two bands is returned as stored.
        Otherwise both bands are resolved with ``flux(..., derived=True)``
        and the color is ``lower - upper``, errors added in quadrature.

        Args:
            lower (Waveband or str):
                Shorter-wavelength band.
            upper (Waveband or str):
                Longer-wavelength band.
            datetime (astropy.time.Time, optional):
                Restrict the lookup to entries taken at this time.

        Returns:
            Color or None:
                None if either band cannot be resolved. Relations between
                colors that share no band are not searched.
        """
        lower = Waveband.coerce(lower, "lower", "FluxCollection.color")
        upper = Waveband.coerce(upper, "upper", "FluxCollection.color")
        check_time(datetime, operation="FluxCollection.color")
        mag_type = self.magnitude_type

        for flux in self._buckets.get(lower.bucket_key, []):
            if not flux.is_synthetic or not _in_epoch(flux, datetime):
                continue
            if flux.reference_waveband.bucket_key == upper.bucket_key:
                return Color(
                    lower,
                    upper,
                    flux.uncertain_value(mag_type),
                    datetime=flux.datetime,
                )

        upper_mag = self.flux(upper, type=mag_type, derived=True, datetime=datetime)
        lower_mag = self.flux(lower, type=mag_type, derived=True, datetime=datetime)
        if upper_mag is None or lower_mag is None:
            logger.debug(f"Cannot resolve color {upper}-{lower}")
            return None

        value = lower_mag.quantity(mag_type) - upper_mag.quantity(mag_type)
        lower_err = lower_mag.error(mag_type)
        upper_err = upper_mag.error(mag_type)
        error = None
        if lower_err is not None and upper_err is not None:
            error = float(np.hypot(lower_err, upper_err))

        timestamp = None
        if lower_mag.datetime is not None and upper_mag.datetime is not None:
            timestamp = lower_mag.datetime
        return Color(lower, upper, UncertainValue(value, error), datetime=timestamp)

    # ------------------------------------------------------------------
    # Bulk access
    # ------------------------------------------------------------------
    def allfluxes(self):
        """Return a read-only mapping of bucket key to the fluxes it holds."""
        return MappingProxyType(
            {key: tuple(bucket) for key, bucket in self._buckets.items()}
        )

    def fluxesbywaveband(self, waveband):
        """Return every flux, raw and synthetic, in a waveband's bucket."""
        waveband = Waveband.coerce(
            waveband, "waveband", "FluxCollection.fluxesbywaveband"
        )
        return list(self._buckets.get(waveband.bucket_key, []))

    def whatwavebands(self):
        """Return the bucket keys in lexical order."""
        return sorted(self._buckets)

    def original_colors(self):
        """Return the labels of the colors added, in insertion order."""
        return list(self._colors)

    def original_filters(self):
        """Return the bucket keys of the raw fluxes added, in insertion order."""
        return list(self._filters)

    def merge(self, other):
        """Append every flux of another collection to this one.

        Flux entries are not de-duplicated, so merging the same collection
        twice stores its measurements twice. The provenance lists are
        merged without repeats.

        Returns:
            FluxCollection: self.
        """
        if not isinstance(other, FluxCollection):
            raise TypeMismatchError(
                "other", "a FluxCollection", other, "FluxCollection.merge"
            )

        # Snapshot first so merging a collection into itself terminates
        buckets = {key: list(bucket) for key, bucket in other._buckets.items()}
        filters = list(other._filters)
        colors = list(other._colors)

        n_merged = 0
        for key, bucket in buckets.items():
            target = self._buckets.setdefault(key, [])
            target.extend(copy.copy(flux) for flux in bucket)
            n_merged += len(bucket)
        for item in filters:
            if item not in self._filters:
                self._filters.append(item)
        for item in colors:
            if item not in self._colors:
                self._colors.append(item)

        logger.info(f"Merged {n_merged} fluxes across {len(buckets)} wavebands")
        return self

    def datestamp(self, timestamp):
        """Set the timestamp of every stored flux to a copy of ``timestamp``.

        Existing timestamps are overwritten.

        Returns:
            FluxCollection: self.
        """
        if timestamp is None:
            raise MissingArgumentError("timestamp", "FluxCollection.datestamp")
        check_time(timestamp, "timestamp", "FluxCollection.datestamp")
        for flux in self:
            flux.datetime = timestamp.copy()
        logger.info(f"Datestamped {len(self)} fluxes with {timestamp.isot}")
        return self


Fluxes = FluxCollection
