"""Sphinx configuration for strangerstrings documentation."""

import strangerstrings

project = "strangerstrings"
author = "strangerstrings contributors"
copyright = f"2025, {author}"
release = strangerstrings.__version__
version = ".".join(release.split(".")[:2])

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.intersphinx",
    "sphinx_copybutton",
]

exclude_patterns = ["_build"]

# The pipeline stage pages list each stage's functions and result types;
# re-exports from strangerstrings/__init__.py are documented where defined.
autosummary_generate = True
autosummary_imported_members = False
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}
autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_preserve_defaults = True

html_theme = "furo"
html_title = f"strangerstrings {release}"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
}
