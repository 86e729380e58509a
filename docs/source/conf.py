import sys
from pathlib import Path

sys.path.insert(0, str(Path("..", "..", "src").resolve()))

project = "hexgrid-polyfill"
copyright = "2026, hexgrid-polyfill developers"
author = "hexgrid-polyfill developers"
release = "v0.1.0"
version = "v0.1.0"

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
]

exclude_patterns = [
    "_build",
    "Thumbs.db",
    ".DS_Store",
    ".venv",
]
intersphinx_mapping = {
    "python": ("https://docs.python.org/3/", None),
    "shapely": ("https://shapely.readthedocs.io/en/stable/", None),
}

templates_path = ["_templates"]

always_document_param_types = True
html_theme = "alabaster"
