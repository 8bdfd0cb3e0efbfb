"""
goutline - Structural outlines of Go source files

Reports a file's package, imports, types, functions/methods, variables and
constants with byte positions, as JSON for editor integrations.

Quick start:
    pip install goutline
    goutline -f main.go

    from goutline import outline_file
    root = outline_file("main.go")
"""

__version__ = "0.2.0"
__all__ = [
    "__version__",
    "Declaration",
    "DeclarationKind",
    "build_outline",
    "outline_file",
    "outline_source",
    "parse_source",
    "parse_overlay_archive",
    "resolve_source",
]

from goutline.outline import (  # noqa: E402
    Declaration,
    DeclarationKind,
    build_outline,
    outline_file,
    outline_source,
)
from goutline.parser import parse_source  # noqa: E402
from goutline.source import parse_overlay_archive, resolve_source  # noqa: E402
