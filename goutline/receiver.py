"""
goutline.receiver — Render method receiver types back to Go source text.

A small recursive printer over tree-sitter type nodes. Only the receiver's
type is rendered (the receiver variable name is dropped), with pointer
markers and type argument lists kept:

    func (s *Server) Run()        ->  "*Server"
    func (l *List[T]) Push(v T)   ->  "*List[T]"
    func (m Map[K,V]) Len() int   ->  "Map[K, V]"

Any type expression the grammar accepts is printed, including ones a method
can't legally be declared on (``func (s []int) M()`` -> ``"[]int"``); there
is no type checking here.
"""
from goutline.errors import RenderError
from goutline.parser import node_start, node_text

IDENTIFIER_TYPES = ("type_identifier", "identifier", "package_identifier", "field_identifier")
PARAMETER_TYPES = ("parameter_declaration", "variadic_parameter_declaration")
MEMBER_LISTS = ("field_declaration_list", "method_spec_list")


def _named(node) -> list:
    return [child for child in node.named_children if child.type != "comment"]


def _single_child(node):
    children = _named(node)
    if len(children) != 1:
        raise RenderError(node.type, node_start(node))
    return children[0]


def _field(node, name: str):
    child = node.child_by_field_name(name)
    if child is None:
        raise RenderError(node.type, node_start(node))
    return child


def _collapsed(node, source: bytes) -> str:
    """Source text with runs of whitespace folded to single spaces."""
    return " ".join(node_text(node, source).split())


def _members(node) -> list:
    members = []
    for child in _named(node):
        if child.type in MEMBER_LISTS:
            members.extend(_named(child))
        else:
            members.append(child)
    return members


def _render_parameters(node, source: bytes) -> str:
    rendered = []
    for param in _named(node):
        if param.type not in PARAMETER_TYPES:
            raise RenderError(param.type, node_start(param))
        type_text = render_type(_field(param, "type"), source)
        names = [node_text(name, source) for name in param.children_by_field_name("name")]
        if param.type == "variadic_parameter_declaration":
            type_text = "..." + type_text
        rendered.append(", ".join(names) + " " + type_text if names else type_text)
    return "(" + ", ".join(rendered) + ")"


def _render_channel(node, source: bytes) -> str:
    value = render_type(_field(node, "value"), source)
    tokens = [child.type for child in node.children if not child.is_named]
    if tokens[:1] == ["<-"]:
        return "<-chan " + value
    if "<-" in tokens:
        return "chan<- " + value
    return "chan " + value


def render_type(node, source: bytes) -> str:
    """Render a type expression node as canonical Go source text."""
    kind = node.type

    if kind in IDENTIFIER_TYPES:
        return node_text(node, source)

    if kind == "pointer_type":
        return "*" + render_type(_single_child(node), source)

    if kind == "parenthesized_type":
        return "(" + render_type(_single_child(node), source) + ")"

    if kind == "negated_type":
        return "~" + render_type(_single_child(node), source)

    if kind == "qualified_type":
        return render_type(_field(node, "package"), source) + "." + render_type(_field(node, "name"), source)

    if kind == "generic_type":
        return render_type(_field(node, "type"), source) + render_type(_field(node, "type_arguments"), source)

    if kind == "type_arguments":
        arguments = _named(node)
        if not arguments:
            raise RenderError(kind, node_start(node))
        return "[" + ", ".join(render_type(arg, source) for arg in arguments) + "]"

    if kind == "type_elem":
        terms = _named(node)
        if not terms:
            raise RenderError(kind, node_start(node))
        return " | ".join(render_type(term, source) for term in terms)

    if kind == "slice_type":
        return "[]" + render_type(_field(node, "element"), source)

    if kind == "array_type":
        length = _collapsed(_field(node, "length"), source)
        return "[" + length + "]" + render_type(_field(node, "element"), source)

    if kind == "map_type":
        key = render_type(_field(node, "key"), source)
        return "map[" + key + "]" + render_type(_field(node, "value"), source)

    if kind == "channel_type":
        return _render_channel(node, source)

    if kind == "function_type":
        text = "func" + _render_parameters(_field(node, "parameters"), source)
        result = node.child_by_field_name("result")
        if result is not None:
            if result.type == "parameter_list":
                text += " " + _render_parameters(result, source)
            else:
                text += " " + render_type(result, source)
        return text

    if kind in ("struct_type", "interface_type"):
        keyword = kind[:-len("_type")]
        members = [_collapsed(member, source) for member in _members(node)]
        if not members:
            return keyword + "{}"
        return keyword + "{ " + "; ".join(members) + " }"

    raise RenderError(kind, node_start(node))


def render_receiver(decl, source: bytes) -> str:
    """
    Receiver type of a method declaration, or "" for a plain function.

    Raises:
        RenderError: the receiver clause has no parameter, or its type node
            is malformed.
    """
    receiver = decl.child_by_field_name("receiver")
    if receiver is None:
        return ""

    parameters = [child for child in receiver.named_children if child.type in PARAMETER_TYPES]
    if not parameters:
        raise RenderError(receiver.type, node_start(receiver))

    return render_type(_field(parameters[0], "type"), source)
