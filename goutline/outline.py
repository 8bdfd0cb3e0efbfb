"""
goutline.outline — Build the declaration outline of a Go file.

The outline is a single root node for the package whose children are the
file's top-level declarations, in source order:

    package main               -> package "main"
    import "fmt"               ->   import "\\"fmt\\""
    type Server struct{...}    ->   type "Server"
    var a, b = 1, 2            ->   variable "a", variable "b"
    const Max = 10             ->   constant "Max"
    func (s *Server) Run()     ->   function "Run" (receiverType "*Server")

Only top-level structure is reported: function bodies, struct fields and
interface methods are not expanded. Anything outside this taxonomy aborts
the run instead of producing a partial outline.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from goutline.config import log
from goutline.errors import UnknownDeclaration, UnknownSpec
from goutline.parser import SourceFile, node_end, node_start, node_text, parse_source
from goutline.receiver import render_receiver
from goutline.source import resolve_source


class DeclarationKind(str, Enum):
    PACKAGE = "package"
    IMPORT = "import"
    TYPE = "type"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"


@dataclass
class Declaration:
    """One node of the outline tree."""
    label: str
    kind: DeclarationKind
    start: int
    end: int
    receiver_type: str | None = None
    children: list["Declaration"] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Wire shape: receiverType only when set, children only when non-empty."""
        data = {"label": self.label, "type": self.kind.value}
        if self.receiver_type is not None:
            data["receiverType"] = self.receiver_type
        data["start"] = self.start
        data["end"] = self.end
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


# tree-sitter node types
FUNCTION_DECLARATIONS = ("function_declaration", "method_declaration")
GROUPED_DECLARATIONS = ("import_declaration", "type_declaration", "var_declaration", "const_declaration")
SPEC_LISTS = ("import_spec_list", "type_spec_list", "var_spec_list", "const_spec_list")
TYPE_SPECS = ("type_spec", "type_alias")
VALUE_SPECS = ("var_spec", "const_spec")


def _specs(decl) -> list:
    """Specs of a grouped declaration, flattening ``( ... )`` lists."""
    specs = []
    for child in decl.named_children:
        if child.type == "comment":
            continue
        if child.type in SPEC_LISTS:
            specs.extend(spec for spec in child.named_children if spec.type != "comment")
        else:
            specs.append(child)
    return specs


def _function(decl, source: bytes) -> Declaration:
    receiver_type = render_receiver(decl, source)
    return Declaration(
        label=node_text(decl.child_by_field_name("name"), source),
        kind=DeclarationKind.FUNCTION,
        start=node_start(decl),
        end=node_end(decl),
        receiver_type=receiver_type or None,
    )


def _grouped(decl, source: bytes) -> list[Declaration]:
    value_kind = DeclarationKind.CONSTANT if decl.type == "const_declaration" else DeclarationKind.VARIABLE
    declarations = []

    for spec in _specs(decl):
        if spec.type == "import_spec":
            declarations.append(Declaration(
                label=node_text(spec.child_by_field_name("path"), source),
                kind=DeclarationKind.IMPORT,
                start=node_start(spec),
                end=node_end(spec),
            ))
        elif spec.type in TYPE_SPECS:
            declarations.append(Declaration(
                label=node_text(spec.child_by_field_name("name"), source),
                kind=DeclarationKind.TYPE,
                start=node_start(spec),
                end=node_end(spec),
            ))
        elif spec.type in VALUE_SPECS:
            for name in spec.children_by_field_name("name"):
                declarations.append(Declaration(
                    label=node_text(name, source),
                    kind=value_kind,
                    start=node_start(name),
                    end=node_end(name),
                ))
        else:
            raise UnknownSpec(spec.type)

    return declarations


def build_outline(parsed: SourceFile) -> Declaration:
    """
    Classify the top-level declarations of a parsed file.

    Raises:
        RenderError: a method receiver could not be rendered.
        UnknownSpec: a grouped declaration holds an unsupported spec.
        UnknownDeclaration: a top-level construct is neither a function
            nor a grouped declaration.
    """
    children = []
    for decl in parsed.declarations:
        if decl.type in FUNCTION_DECLARATIONS:
            children.append(_function(decl, parsed.source))
        elif decl.type in GROUPED_DECLARATIONS:
            children.extend(_grouped(decl, parsed.source))
        else:
            raise UnknownDeclaration(node_start(decl), decl.type)

    log(f"outlined {parsed.path}: {len(children)} declarations")
    return Declaration(
        label=parsed.package_name,
        kind=DeclarationKind.PACKAGE,
        start=parsed.start,
        end=parsed.end,
        children=children,
    )


def outline_source(source: bytes, path: str = "<source>", imports_only: bool = False) -> Declaration:
    """Parse Go source bytes and build their outline."""
    return build_outline(parse_source(source, path, imports_only=imports_only))


def outline_file(
    path: str,
    imports_only: bool = False,
    modified: bool = False,
    stdin: BinaryIO | None = None,
) -> Declaration:
    """Resolve, parse and outline one file (the whole pipeline short of output)."""
    source = resolve_source(path, use_overlay=modified, stdin=stdin)
    return outline_source(source, path, imports_only=imports_only)
