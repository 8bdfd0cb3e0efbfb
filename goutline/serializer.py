"""
goutline.serializer — Render an outline for consumers.

JSON (default) is what editor integrations read: an array holding the single
package node. Text is an indented listing for people:

    package main  1-412
      import "fmt"  15-20
      function Run (*Server)  200-410
"""
import json
from typing import TextIO

from goutline.outline import Declaration


class JsonSerializer:
    """Compact JSON, or indented when ``indent`` is given."""

    name = "json"

    def __init__(self, indent: int | None = None):
        self.indent = indent

    def render(self, root: Declaration) -> str:
        if self.indent is None:
            text = json.dumps([root.to_dict()], ensure_ascii=False, separators=(",", ":"))
        else:
            text = json.dumps([root.to_dict()], ensure_ascii=False, indent=self.indent)
        return text + "\n"

    def dump(self, root: Declaration, stream: TextIO) -> None:
        stream.write(self.render(root))


class TextSerializer:
    name = "text"

    def __init__(self, indent: int | None = None):
        self.indent = indent or 2

    def _lines(self, node: Declaration, depth: int) -> list[str]:
        line = f"{' ' * (self.indent * depth)}{node.kind.value} {node.label}"
        if node.receiver_type is not None:
            line += f" ({node.receiver_type})"
        line += f"  {node.start}-{node.end}"
        lines = [line]
        for child in node.children:
            lines.extend(self._lines(child, depth + 1))
        return lines

    def render(self, root: Declaration) -> str:
        return "\n".join(self._lines(root, 0)) + "\n"

    def dump(self, root: Declaration, stream: TextIO) -> None:
        stream.write(self.render(root))


SERIALIZERS = {
    JsonSerializer.name: JsonSerializer,
    TextSerializer.name: TextSerializer,
}


def get_serializer(name: str, indent: int | None = None):
    """Look up a serializer by format name."""
    try:
        return SERIALIZERS[name](indent=indent)
    except KeyError:
        raise ValueError(f"unknown output format: {name}") from None
