"""Photometric fluxes and colors, with derivation of unmeasured magnitudes."""

from astrofluxes.color import Color
from astrofluxes.exceptions import (
    FluxError,
    MissingArgumentError,
    TypeMismatchError,
    UnknownTypeError,
)
from astrofluxes.flux import Flux, FluxOptions
from astrofluxes.fluxes import FluxCollection, Fluxes
from astrofluxes.logger import logger
from astrofluxes.quality import Quality
from astrofluxes.settings import Settings
from astrofluxes.uncertainty import UncertainValue
from astrofluxes.waveband import Waveband

__all__ = [
    "Color",
    "Flux",
    "FluxOptions",
    "FluxCollection",
    "Fluxes",
    "Quality",
    "Settings",
    "UncertainValue",
    "Waveband",
    "FluxError",
    "MissingArgumentError",
    "TypeMismatchError",
    "UnknownTypeError",
    "logger",
]
