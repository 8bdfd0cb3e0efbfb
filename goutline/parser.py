"""
goutline.parser — Go syntax trees via tree-sitter.

Wraps the tree-sitter Go grammar from tree-sitter-language-pack and hands the
outline builder a SourceFile: the package name, the top-level declaration
nodes in source order (comments dropped) and the span that was parsed.

Positions are 1-based byte offsets: a node covering bytes [s, e) of the
source is reported as start=s+1, end=e+1.
"""
from dataclasses import dataclass, field

from goutline.config import log
from goutline.errors import ParseFailure

# ============================================================================
# DEPENDENCY DETECTION
# ============================================================================

try:
    import tree_sitter_language_pack as tslp
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

GO_LANGUAGE = "go"
INSTALL_HINT = "tree-sitter Go grammar not installed (pip install tree-sitter-language-pack)"

_go_parser = None


def _get_go_parser(path: str):
    global _go_parser
    if _go_parser is None:
        try:
            _go_parser = tslp.get_parser(GO_LANGUAGE)
        except Exception as e:
            raise ParseFailure(path, f"could not load Go grammar: {e}") from e
    return _go_parser


# ============================================================================
# POSITIONS & TEXT
# ============================================================================

def node_start(node) -> int:
    return node.start_byte + 1


def node_end(node) -> int:
    return node.end_byte + 1


def node_text(node, source: bytes) -> str:
    """Get the exact source text a node covers."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _first_syntax_error(node):
    """Depth-first search for the first ERROR or MISSING node."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def _syntax_error_reason(nodes) -> str:
    for node in nodes:
        bad = _first_syntax_error(node)
        if bad is not None:
            if bad.is_missing:
                return f"missing {bad.type} @ {node_start(bad)}"
            return f"syntax error @ {node_start(bad)}"
    return "syntax error"


# ============================================================================
# PARSING
# ============================================================================

@dataclass
class SourceFile:
    """A parsed Go file, reduced to what the outline needs."""
    path: str
    source: bytes
    package_name: str
    declarations: list = field(default_factory=list)
    start: int = 1
    end: int = 1


def parse_source(source: bytes, path: str = "<source>", imports_only: bool = False) -> SourceFile:
    """
    Parse Go source into a SourceFile.

    With ``imports_only`` parsing stops after the leading import
    declarations: anything past them is neither returned nor checked for
    syntax errors, and the file span ends with the last import.

    Raises:
        ParseFailure: the region that was parsed is not valid Go, or the
            tree-sitter Go grammar is unavailable.
    """
    if not TREE_SITTER_AVAILABLE:
        raise ParseFailure(path, INSTALL_HINT)

    tree = _get_go_parser(path).parse(source)
    root = tree.root_node
    top_level = [child for child in root.named_children if child.type != "comment"]

    if not top_level or top_level[0].type != "package_clause":
        raise ParseFailure(path, "expected 'package' clause")
    package_node = top_level[0]
    rest = top_level[1:]

    if imports_only:
        declarations = []
        for node in rest:
            if node.type != "import_declaration":
                # An import the grammar could not recover still belongs to the import section
                if node.type == "ERROR" and node_text(node, source).lstrip().startswith("import"):
                    raise ParseFailure(path, f"syntax error @ {node_start(node)}")
                break
            declarations.append(node)
        region = [package_node] + declarations
        if any(node.has_error for node in region):
            raise ParseFailure(path, _syntax_error_reason(region))
        end = node_end(region[-1])
    else:
        if root.has_error:
            raise ParseFailure(path, _syntax_error_reason([root]))
        for node in rest:
            if node.type == "package_clause":
                raise ParseFailure(path, f"unexpected 'package' clause @ {node_start(node)}")
        declarations = rest
        end = len(source) + 1

    name_node = package_node.named_children[0] if package_node.named_children else None
    if name_node is None:
        raise ParseFailure(path, "package clause without a name")
    package_name = node_text(name_node, source)

    log(f"parsed {path}: package {package_name}, {len(declarations)} top-level declarations"
        f"{' (imports only)' if imports_only else ''}")

    return SourceFile(
        path=path,
        source=source,
        package_name=package_name,
        declarations=declarations,
        start=1,
        end=end,
    )
