"""Sphinx configuration file."""

from importlib.metadata import version as get_version

project = "astrofluxes"
copyright = "2026, astrofluxes developers"
author = "astrofluxes developers"
release = get_version("astrofluxes")
version = ".".join(release.split(".")[:2])  # e.g. "1.0" from "1.0.1"

# -- General configuration ---------------------------------------------------

extensions = [
    "myst_parser",
    "autoapi.extension",
    "sphinx.ext.autodoc",
    "sphinx.ext.viewcode",
    "sphinx.ext.napoleon",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

autoapi_dirs = ["../src"]
autodoc_typehints = "description"

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_book_theme"
html_static_path = ["_static"]
master_doc = "index"
html_title = "astrofluxes - Photometric Fluxes and Colors"
