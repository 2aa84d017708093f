"""Tests for magnitude and color retrieval on FluxCollection."""

import math

import pytest

from astrofluxes import (
    Color,
    Flux,
    FluxCollection,
    MissingArgumentError,
    TypeMismatchError,
    Waveband,
)


class TestRegression:
    """Raw J=1, raw H=4, colors J-K=10 and H-K=13."""

    def test_direct_magnitudes(self, regression_fluxes):
        assert regression_fluxes.flux("J").quantity("mag") == 1.0
        assert regression_fluxes.flux("H", derived=False).quantity("mag") == 4.0

    def test_direct_match_wins_over_derivation(self, regression_fluxes):
        direct = regression_fluxes.flux("H")
        derived = regression_fluxes.flux("H", derived=True)
        assert derived is direct
        assert derived.quality is None

    def test_stored_color(self, regression_fluxes):
        color = regression_fluxes.color(lower="J", upper="K")
        assert color.quantity == 10.0
        assert color.lower == Waveband("J")
        assert color.upper == Waveband("K")

    def test_reversed_stored_color(self, regression_fluxes):
        assert regression_fluxes.color(lower="K", upper="J").quantity == -10.0

    def test_derived_color(self, regression_fluxes):
        color = regression_fluxes.color(lower="J", upper="H")
        assert color.quantity == pytest.approx(-3.0)

    def test_unmeasured_band_is_derived(self, regression_fluxes):
        assert regression_fluxes.flux("K") is None
        k_mag = regression_fluxes.flux("K", derived=True)
        assert k_mag.quantity("mag") == pytest.approx(-9.0)
        assert k_mag.quality.derived
        assert k_mag.waveband == Waveband("K")

    def test_idempotent(self, regression_fluxes):
        first = regression_fluxes.flux("K", derived=True)
        second = regression_fluxes.flux("K", derived=True)
        assert first.quantity("mag") == second.quantity("mag")
        assert first.error("mag") == second.error("mag")


class TestFluxDerivation:
    """Tests for deriving magnitudes through colors."""

    def test_single_hop_with_errors(self, band_j, band_k):
        fluxes = FluxCollection(
            Flux((1.0, 0.1), "mag", band_j), Color(band_j, band_k, (10.0, 0.2))
        )
        k_mag = fluxes.flux(band_k, derived=True)
        assert k_mag.quantity("mag") == pytest.approx(-9.0)
        assert k_mag.error("mag") == pytest.approx(math.sqrt(0.05))
        assert k_mag.datetime is None

    def test_lower_band_from_upper_anchor(self, band_j, band_k):
        fluxes = FluxCollection(Color(band_j, band_k, 10.0), Flux(5.0, "mag", band_k))
        assert fluxes.flux("J", derived=True).quantity("mag") == pytest.approx(15.0)

    def test_two_hops(self, band_j, band_h, band_k):
        fluxes = FluxCollection(
            Flux((1.0, 0.1), "mag", band_j),
            Color(band_j, band_k, (10.0, 0.2)),
            Color(band_h, band_k, (13.0, 0.3)),
        )
        h_mag = fluxes.flux("H", derived=True)
        assert h_mag.quantity("mag") == pytest.approx(4.0)
        assert h_mag.error("mag") == pytest.approx(math.sqrt(0.14))

    def test_color_only_pair_has_no_anchor(self, band_j, band_k):
        fluxes = FluxCollection(Color(band_j, band_k, 10.0))
        assert fluxes.flux("J", derived=True) is None
        assert fluxes.flux("K", derived=True) is None

    def test_two_colors_without_anchor(self, band_j, band_h, band_k):
        fluxes = FluxCollection(
            Color(band_j, band_k, 10.0), Color(band_h, band_k, 13.0)
        )
        assert fluxes.flux("J", derived=True) is None
        assert fluxes.flux("K", derived=True) is None

    def test_color_cycle_without_anchor_terminates(self):
        j, k, l = Waveband("J"), Waveband("K"), Waveband("L")
        fluxes = FluxCollection(Color(j, k, 1.0), Color(k, l, 2.0), Color(l, j, -3.0))
        assert fluxes.flux(j, derived=True) is None
        assert fluxes.color(j, l) is not None  # stored through the L-J relation

    def test_absent_band(self, regression_fluxes):
        assert regression_fluxes.flux("V", derived=True) is None

    def test_first_raw_match_in_insertion_order(self, band_j):
        fluxes = FluxCollection(Flux(1.0, "mag", band_j), Flux(2.0, "mag", band_j))
        assert fluxes.flux("J").quantity("mag") == 1.0

    def test_type_must_match(self, band_j, band_k):
        fluxes = FluxCollection(
            Flux(100.0, "jy", band_j),
            Color(band_j, band_k, 10.0),
            Flux(5.0, "mag", band_k),
        )
        assert fluxes.flux("J") is None
        assert fluxes.flux("J", type="JY").quantity("jy") == 100.0
        assert fluxes.flux("J", type="jy", derived=True).quantity("jy") == 100.0
        assert fluxes.flux("K", type="jy", derived=True) is None
        assert fluxes.flux("J", derived=True).quantity("mag") == pytest.approx(15.0)


class TestDatetimeScoping:
    """Tests for datetime-scoped lookups."""

    def test_raw_lookup_by_time(self, band_j, epoch, later_epoch):
        fluxes = FluxCollection(
            Flux(1.0, "mag", band_j, datetime=epoch),
            Flux(2.0, "mag", band_j, datetime=later_epoch),
        )
        assert fluxes.flux("J").quantity("mag") == 1.0
        assert fluxes.flux("J", datetime=later_epoch).quantity("mag") == 2.0

    def test_unmatched_time_is_not_found(self, band_j, epoch, later_epoch):
        fluxes = FluxCollection(Flux(1.0, "mag", band_j, datetime=epoch))
        assert fluxes.flux("J", datetime=later_epoch) is None

    def test_untimed_entries_match_any_time(self, band_h, epoch):
        fluxes = FluxCollection(Flux(4.0, "mag", band_h))
        assert fluxes.flux("H", datetime=epoch).quantity("mag") == 4.0

    def test_derivation_uses_edge_at_that_time(
        self, band_j, band_k, epoch, later_epoch
    ):
        fluxes = FluxCollection(
            Flux(1.0, "mag", band_j),
            Color(band_j, band_k, 10.0, datetime=epoch),
            Color(band_j, band_k, 11.0, datetime=later_epoch),
        )
        k_now = fluxes.flux("K", derived=True, datetime=epoch)
        k_later = fluxes.flux("K", derived=True, datetime=later_epoch)
        assert k_now.quantity("mag") == pytest.approx(-9.0)
        assert k_now.datetime == epoch
        assert k_later.quantity("mag") == pytest.approx(-10.0)
        assert k_later.datetime == later_epoch

    def test_derived_timestamp_comes_from_anchor(self, band_j, band_k, epoch):
        fluxes = FluxCollection(
            Flux(1.0, "mag", band_j, datetime=epoch), Color(band_j, band_k, 10.0)
        )
        k_mag = fluxes.flux("K", derived=True, datetime=epoch)
        assert k_mag.datetime == epoch

    def test_stored_color_by_time(self, band_j, band_k, epoch, later_epoch):
        fluxes = FluxCollection(
            Color(band_j, band_k, 10.0, datetime=epoch),
            Color(band_j, band_k, 11.0, datetime=later_epoch),
        )
        assert fluxes.color("J", "K").quantity == 10.0
        color = fluxes.color("J", "K", datetime=later_epoch)
        assert color.quantity == 11.0
        assert color.datetime == later_epoch

    def test_derived_color_timestamp(self, band_j, band_h, epoch):
        fluxes = FluxCollection(
            Flux(1.0, "mag", band_j, datetime=epoch),
            Flux(4.0, "mag", band_h, datetime=epoch),
        )
        color = fluxes.color("J", "H", datetime=epoch)
        assert color.quantity == pytest.approx(-3.0)
        assert color.datetime == epoch


class TestColor:
    """Tests for FluxCollection.color."""

    def test_stored_color_keeps_error(self, band_j, band_k):
        fluxes = FluxCollection(Color(band_j, band_k, (10.0, 0.2)))
        color = fluxes.color(band_j, band_k)
        assert color.error == 0.2

    def test_derived_color_error_in_quadrature(self, band_j, band_h, band_k):
        fluxes = FluxCollection(
            Flux((1.0, 0.1), "mag", band_j),
            Color(band_j, band_k, (10.0, 0.2)),
            Color(band_h, band_k, (13.0, 0.3)),
        )
        color = fluxes.color("J", "H")
        assert color.quantity == pytest.approx(-3.0)
        assert color.error == pytest.approx(math.sqrt(0.15))

    def test_derived_color_without_errors(self, band_j, band_h):
        fluxes = FluxCollection(Flux(1.0, "mag", band_j), Flux(4.0, "mag", band_h))
        assert fluxes.color("J", "H").error is None

    def test_unresolvable_color(self, band_j, band_h, band_k):
        """Colors of colors are not chained."""
        fluxes = FluxCollection(
            Color(band_j, band_k, 10.0), Color(band_h, band_k, 13.0)
        )
        assert fluxes.color("J", "H") is None

    def test_missing_bands(self, regression_fluxes):
        with pytest.raises(MissingArgumentError):
            regression_fluxes.color(None, "K")
        with pytest.raises(MissingArgumentError):
            regression_fluxes.color("J", None)


class TestArguments:
    """Malformed queries raise; well-formed ones without an answer do not."""

    def test_flux_requires_waveband(self, regression_fluxes):
        with pytest.raises(MissingArgumentError):
            regression_fluxes.flux(None)

    def test_flux_rejects_bad_waveband(self, regression_fluxes):
        with pytest.raises(TypeMismatchError):
            regression_fluxes.flux(1.25)

    def test_flux_rejects_bad_datetime(self, regression_fluxes):
        with pytest.raises(TypeMismatchError):
            regression_fluxes.flux("J", datetime="2005-06-01")

    def test_color_rejects_bad_datetime(self, regression_fluxes):
        with pytest.raises(TypeMismatchError):
            regression_fluxes.color("J", "K", datetime=2453523.0)

    def test_flux_rejects_bad_type(self, regression_fluxes):
        with pytest.raises(TypeMismatchError):
            regression_fluxes.flux("J", type=1)


class TestBucketCollisions:
    """Bands sharing a first letter share a bucket.

    This documents current behaviour rather than endorsing it.
    """

    def test_raw_flux_answers_for_colliding_band(self):
        fluxes = FluxCollection(Flux(5.0, "mag", Waveband("K")))
        ks_mag = fluxes.flux("Ks")
        assert ks_mag.quantity("mag") == 5.0
        assert ks_mag.waveband == Waveband("K")

    def test_stored_color_found_through_colliding_band(self):
        fluxes = FluxCollection(Color(Waveband("J"), Waveband("Ks"), 2.0))
        assert fluxes.color("J", "K").quantity == 2.0

    def test_colliding_bands_share_whatwavebands_entry(self):
        fluxes = FluxCollection(
            Flux(5.0, "mag", Waveband("K")), Flux(5.1, "mag", Waveband("Ks"))
        )
        assert fluxes.whatwavebands() == ["K"]
        assert fluxes.original_filters() == ["K", "K"]
