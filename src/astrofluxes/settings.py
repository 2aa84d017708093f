"""Configuration management for flux collections.

This module provides the Settings class holding the defaults a
FluxCollection uses when it expands colors and answers queries. Settings
can be loaded from a TOML file and overridden with a dictionary of custom
values, the dictionary taking precedence.

Example TOML structure:
    [fluxes]
    magnitude_type = "mag"
    derived = false

    [logging]
    level = "DEBUG"
"""

import logging
import tomllib

from astrofluxes.logger import logger


class Settings:
    """Configuration for FluxCollection behaviour.

    Attributes:
        magnitude_type (str):
            Type label of the magnitudes synthesized from colors, of derived
            results, and the default type for ``FluxCollection.flux``.
        derived (bool):
            Default for the ``derived`` argument of ``FluxCollection.flux``.
        log_level (str):
            Level applied to the package logger by ``apply_logging``.
    """

    def __init__(self, toml_file=None, custom_settings=None):
        """Initialize Settings with default values and optional configuration.

        Args:
            toml_file (str or pathlib.Path, optional):
                Path to a TOML configuration file, loaded after the defaults.
            custom_settings (dict, optional):
                Dictionary of setting overrides, applied after the TOML file.

        Raises:
            AttributeError:
                If custom_settings contains keys that are not settings.
        """
        # Default settings
        self.magnitude_type = "mag"
        self.derived = False
        self.log_level = "INFO"

        if toml_file:
            self.load_settings(toml_file)

        if custom_settings:
            for key, value in custom_settings.items():
                if hasattr(self, key):
                    setattr(self, key, value)
                else:
                    raise AttributeError(f"{key} is not a valid setting.")

        if not isinstance(self.magnitude_type, str) or not self.magnitude_type:
            raise ValueError("magnitude_type must be a non-empty string")

    def __repr__(self):
        """Return a string representation of the Settings object."""
        attrs = vars(self)
        parts = ["Settings:"]
        for key, value in attrs.items():
            parts.append(f"  {key}: {value}")
        return "\n".join(parts)

    def load_settings(self, toml_file):
        """Load configuration settings from a TOML file.

        Only settings present in the file are updated; the rest keep their
        current values.

        Args:
            toml_file (str or pathlib.Path):
                Path to the TOML configuration file to load.
        """
        with open(toml_file, "rb") as file:
            config = tomllib.load(file)

        if "fluxes" in config:
            fluxes = config["fluxes"]
            if magnitude_type := fluxes.get("magnitude_type"):
                self.magnitude_type = magnitude_type
            if (derived := fluxes.get("derived")) is not None:
                self.derived = derived

        if "logging" in config:
            if level := config["logging"].get("level"):
                self.log_level = level

    def apply_logging(self):
        """Set the package logger to ``log_level``."""
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"{self.log_level} is not a valid logging level.")
        logger.setLevel(level)
