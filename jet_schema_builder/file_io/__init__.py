"""File I/O related utilities.

Loading schema documents and rendering files from templates.
"""

from .schema_loader import fetch_schema, load_schema, load_schema_file
from .stub_generator import generate_stub
from .template_renderer import TemplateRenderer

__all__ = [
    "fetch_schema",
    "load_schema",
    "load_schema_file",
    "generate_stub",
    "TemplateRenderer",
]
