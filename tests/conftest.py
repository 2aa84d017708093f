"""Shared pytest fixtures for astrofluxes tests."""

import pytest
from astropy.time import Time

from astrofluxes import Color, Flux, FluxCollection, Waveband


@pytest.fixture
def band_j():
    return Waveband(filter="J")


@pytest.fixture
def band_h():
    return Waveband(filter="H")


@pytest.fixture
def band_k():
    return Waveband(filter="K")


@pytest.fixture
def epoch():
    """Standard observation time."""
    return Time("2005-06-01T12:00:00", scale="utc")


@pytest.fixture
def later_epoch():
    """A second observation time, one day after ``epoch``."""
    return Time("2005-06-02T12:00:00", scale="utc")


@pytest.fixture
def regression_fluxes(band_j, band_h, band_k):
    """Raw J=1 and H=4 with colors J-K=10 and H-K=13."""
    return FluxCollection(
        Flux(1.0, "mag", band_j),
        Flux(4.0, "mag", band_h),
        Color(lower=band_j, upper=band_k, quantity=10.0),
        Color(lower=band_h, upper=band_k, quantity=13.0),
    )
