"""Sphinx configuration file for atomstore documentation."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path("../../src").resolve()))

project = "atomstore"
copyright = "2025, atomstore developers"  # noqa: A001
author = "atomstore developers"
release = "0.1.0"

extensions = [
  "sphinx.ext.autodoc",
  "sphinx.ext.viewcode",
  "sphinx.ext.napoleon",
  "sphinx.ext.intersphinx",
  "sphinx_autodoc_typehints",
]

# Google-style docstrings
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True

autodoc_typehints = "description"
autodoc_member_order = "bysource"

html_theme = "sphinx_book_theme"

intersphinx_mapping = {
  "python": ("https://docs.python.org/3", None),
  "jax": ("https://jax.readthedocs.io/en/latest/", None),
  "numpy": ("https://numpy.org/doc/stable/", None),
  "biotite": ("https://www.biotite-python.org/", None),
}

main_doc = "index"
