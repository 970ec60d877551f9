"""Tree-sitter based document symbol extraction for Go and TypeScript."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tree_sitter import Language as TSLanguage
from tree_sitter import Node, Parser
from tree_sitter_go import language as get_go_language
from tree_sitter_typescript import language_tsx, language_typescript

from model.symbols import Language, Range, Symbol, SymbolKind
from utils import language_for_path

if TYPE_CHECKING:
    from pathlib import Path

_PARSERS: dict[Language, Parser] = {}

_GO_CONST_SPECS = ("const_spec",)
_GO_VAR_SPECS = ("var_spec",)
_GO_SPEC_LISTS = ("const_spec_list", "var_spec_list")
_GO_INTERFACE_METHODS = ("method_elem", "method_spec")

_TS_MEMBER_KINDS: dict[str, SymbolKind] = {
    "property_signature": SymbolKind.PROPERTY,
    "public_field_definition": SymbolKind.PROPERTY,
    "method_signature": SymbolKind.METHOD,
    "abstract_method_signature": SymbolKind.METHOD,
    "method_definition": SymbolKind.METHOD,
}
_TS_FUNCTION_VALUES = ("arrow_function", "function_expression", "function")


def _get_parser(language: Language) -> Parser:
    """Initialize and return the Tree-sitter parser for ``language``."""
    parser = _PARSERS.get(language)
    if parser is None:
        if language is Language.GO:
            lang = TSLanguage(get_go_language())
        elif language is Language.TYPESCRIPT_REACT:
            lang = TSLanguage(language_tsx())
        else:
            lang = TSLanguage(language_typescript())
        parser = Parser(lang)
        _PARSERS[language] = parser

    return parser


def parse_source(source_bytes: bytes, language: Language) -> Node:
    """Parse ``source_bytes`` and return the root node."""
    return _get_parser(language).parse(source_bytes).root_node


def _node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="ignore")


def _node_range(node: Node) -> Range:
    return Range.from_points(tuple(node.start_point), tuple(node.end_point))


def _make_symbol(
    name: str,
    kind: SymbolKind,
    language: Language,
    path: Path,
    node: Node,
    name_node: Node,
    detail: str = "",
    children: list[Symbol] | None = None,
) -> Symbol:
    return Symbol(
        name=name,
        kind=kind,
        language=language,
        path=path,
        range=_node_range(node),
        selection_range=_node_range(name_node),
        detail=detail,
        children=children or [],
    )


# Go


def _go_receiver_type(node: Node) -> str:
    """Return the bare receiver type name of a method (``*Store[T]`` -> ``Store``)."""
    receiver = node.child_by_field_name("receiver")
    if receiver is None:
        return ""
    for param in receiver.named_children:
        if param.type != "parameter_declaration":
            continue
        type_text = _node_text(param.child_by_field_name("type"))
        return type_text.lstrip("*").split("[", 1)[0].strip()
    return ""


def _go_struct_fields(struct_node: Node, path: Path) -> list[Symbol]:
    fields: list[Symbol] = []
    for field_list in struct_node.named_children:
        if field_list.type != "field_declaration_list":
            continue
        for decl in field_list.named_children:
            if decl.type != "field_declaration":
                continue
            name_nodes = decl.children_by_field_name("name")
            if not name_nodes:
                # Embedded field: gopls names it after its type.
                type_node = decl.child_by_field_name("type")
                if type_node is None:
                    continue
                embedded = _node_text(type_node).lstrip("*").rsplit(".", 1)[-1]
                fields.append(
                    _make_symbol(
                        embedded, SymbolKind.FIELD, Language.GO, path, decl, type_node
                    )
                )
                continue
            for name_node in name_nodes:
                fields.append(
                    _make_symbol(
                        _node_text(name_node),
                        SymbolKind.FIELD,
                        Language.GO,
                        path,
                        decl,
                        name_node,
                    )
                )
    return fields


def _go_interface_methods(interface_node: Node, path: Path) -> list[Symbol]:
    methods: list[Symbol] = []
    for child in interface_node.named_children:
        if child.type not in _GO_INTERFACE_METHODS:
            continue
        name_node = child.child_by_field_name("name")
        if name_node is None:
            continue
        methods.append(
            _make_symbol(
                _node_text(name_node),
                SymbolKind.METHOD,
                Language.GO,
                path,
                child,
                name_node,
            )
        )
    return methods


def _is_grouped(decl: Node) -> bool:
    """True for a parenthesised `const (...)`, `var (...)` or `type (...)` block."""
    return any(c.type == "(" for c in decl.children) or any(
        c.type in _GO_SPEC_LISTS for c in decl.named_children
    )


def _go_type_symbols(decl: Node, path: Path) -> list[Symbol]:
    specs = [c for c in decl.named_children if c.type in ("type_spec", "type_alias")]
    grouped = _is_grouped(decl)
    symbols: list[Symbol] = []
    for spec in specs:
        name_node = spec.child_by_field_name("name")
        if name_node is None:
            continue
        # A bare spec shares the `type` keyword line; use the whole declaration.
        span_node = spec if grouped else decl
        type_node = spec.child_by_field_name("type")
        type_kind = type_node.type if type_node is not None else ""

        if spec.type == "type_spec" and type_kind == "struct_type":
            kind = SymbolKind.STRUCT
            children = _go_struct_fields(type_node, path)
        elif spec.type == "type_spec" and type_kind == "interface_type":
            kind = SymbolKind.INTERFACE
            children = _go_interface_methods(type_node, path)
        else:
            kind = SymbolKind.TYPE_ALIAS
            children = []

        symbols.append(
            _make_symbol(
                _node_text(name_node),
                kind,
                Language.GO,
                path,
                span_node,
                name_node,
                children=children,
            )
        )
    return symbols


def _go_value_symbols(decl: Node, path: Path, kind: SymbolKind) -> list[Symbol]:
    spec_types = _GO_CONST_SPECS if kind is SymbolKind.CONSTANT else _GO_VAR_SPECS
    specs: list[Node] = []
    for child in decl.named_children:
        if child.type in spec_types:
            specs.append(child)
        elif child.type in _GO_SPEC_LISTS:
            specs.extend(c for c in child.named_children if c.type in spec_types)

    grouped = _is_grouped(decl)
    symbols: list[Symbol] = []
    for spec in specs:
        span_node = spec if grouped else decl
        for name_node in spec.children_by_field_name("name"):
            name = _node_text(name_node)
            if name == "_":
                continue
            symbols.append(
                _make_symbol(name, kind, Language.GO, path, span_node, name_node)
            )
    return symbols


def _extract_go(root: Node, path: Path) -> list[Symbol]:
    symbols: list[Symbol] = []
    for node in root.named_children:
        if node.type == "function_declaration":
            name_node = node.child_by_field_name("name")
            if name_node is not None:
                symbols.append(
                    _make_symbol(
                        _node_text(name_node),
                        SymbolKind.FUNCTION,
                        Language.GO,
                        path,
                        node,
                        name_node,
                    )
                )
        elif node.type == "method_declaration":
            name_node = node.child_by_field_name("name")
            if name_node is not None:
                symbols.append(
                    _make_symbol(
                        _node_text(name_node),
                        SymbolKind.METHOD,
                        Language.GO,
                        path,
                        node,
                        name_node,
                        detail=_go_receiver_type(node),
                    )
                )
        elif node.type == "type_declaration":
            symbols.extend(_go_type_symbols(node, path))
        elif node.type == "const_declaration":
            symbols.extend(_go_value_symbols(node, path, SymbolKind.CONSTANT))
        elif node.type == "var_declaration":
            symbols.extend(_go_value_symbols(node, path, SymbolKind.VARIABLE))
    return symbols


# TypeScript


def _ts_member_name(name_node: Node) -> str:
    text = _node_text(name_node)
    if name_node.type == "string":
        return text.strip("\"'`")
    return text


def _ts_members(body: Node | None, language: Language, path: Path) -> list[Symbol]:
    if body is None:
        return []
    members: list[Symbol] = []
    for child in body.named_children:
        kind = _TS_MEMBER_KINDS.get(child.type)
        if kind is None:
            continue
        name_node = child.child_by_field_name("name")
        if name_node is None:
            continue
        members.append(
            _make_symbol(
                _ts_member_name(name_node), kind, language, path, child, name_node
            )
        )
    return members


def _ts_implemented_interfaces(class_node: Node) -> list[str]:
    names: list[str] = []
    for heritage in class_node.named_children:
        if heritage.type != "class_heritage":
            continue
        for clause in heritage.named_children:
            if clause.type != "implements_clause":
                continue
            for type_node in clause.named_children:
                name = _node_text(type_node).split("<", 1)[0].strip()
                if name:
                    names.append(name.rsplit(".", 1)[-1])
    return names


def _ts_lexical_symbols(
    decl: Node, span_node: Node, language: Language, path: Path
) -> list[Symbol]:
    is_const = decl.type == "lexical_declaration" and _node_text(
        decl.child(0)
    ) == "const"
    symbols: list[Symbol] = []
    for declarator in decl.named_children:
        if declarator.type != "variable_declarator":
            continue
        name_node = declarator.child_by_field_name("name")
        if name_node is None or name_node.type != "identifier":
            continue
        value = declarator.child_by_field_name("value")
        if value is not None and value.type in _TS_FUNCTION_VALUES:
            kind = SymbolKind.FUNCTION
        elif is_const:
            kind = SymbolKind.CONSTANT
        else:
            kind = SymbolKind.VARIABLE
        symbols.append(
            _make_symbol(
                _node_text(name_node), kind, language, path, span_node, name_node
            )
        )
    return symbols


def _ts_declaration_symbols(
    decl: Node, span_node: Node, language: Language, path: Path
) -> list[Symbol]:
    if decl.type in ("lexical_declaration", "variable_declaration"):
        return _ts_lexical_symbols(decl, span_node, language, path)

    name_node = decl.child_by_field_name("name")
    if name_node is None:
        return []
    name = _node_text(name_node)

    if decl.type in ("function_declaration", "function_signature"):
        return [
            _make_symbol(name, SymbolKind.FUNCTION, language, path, span_node, name_node)
        ]

    if decl.type in ("class_declaration", "abstract_class_declaration"):
        return [
            _make_symbol(
                name,
                SymbolKind.CLASS,
                language,
                path,
                span_node,
                name_node,
                detail=", ".join(_ts_implemented_interfaces(decl)),
                children=_ts_members(
                    decl.child_by_field_name("body"), language, path
                ),
            )
        ]

    if decl.type == "interface_declaration":
        return [
            _make_symbol(
                name,
                SymbolKind.INTERFACE,
                language,
                path,
                span_node,
                name_node,
                children=_ts_members(
                    decl.child_by_field_name("body"), language, path
                ),
            )
        ]

    if decl.type == "type_alias_declaration":
        value = decl.child_by_field_name("value")
        members = (
            _ts_members(value, language, path)
            if value is not None and value.type == "object_type"
            else []
        )
        return [
            _make_symbol(
                name,
                SymbolKind.TYPE_ALIAS,
                language,
                path,
                span_node,
                name_node,
                children=members,
            )
        ]

    return []


def _extract_typescript(root: Node, language: Language, path: Path) -> list[Symbol]:
    symbols: list[Symbol] = []
    for node in root.named_children:
        if node.type == "export_statement":
            decl = node.child_by_field_name("declaration")
            if decl is not None:
                symbols.extend(_ts_declaration_symbols(decl, node, language, path))
            continue
        symbols.extend(_ts_declaration_symbols(node, node, language, path))
    return symbols


def extract_symbols_from_source(
    source_bytes: bytes, path: Path, language: Language
) -> list[Symbol]:
    """Extract the top-level symbol tree of an in-memory document."""
    root_node = parse_source(source_bytes, language)
    if language is Language.GO:
        return _extract_go(root_node, path)
    return _extract_typescript(root_node, language, path)


def extract_symbols_treesitter(file_path: Path) -> list[Symbol]:
    """Extract the document symbol tree of a Go or TypeScript file.

    Function bodies are never descended, so nested closures do not show up as
    declarations. Struct fields, interface members and class members are
    reported as children of their container.

    Args:
        file_path: Path of a ``.go``, ``.ts`` or ``.tsx`` file

    Returns:
        Top-level symbols in source order, or an empty list for unreadable
        files and unsupported suffixes.
    """
    language = language_for_path(file_path)
    if language is None:
        return []

    try:
        source_bytes = file_path.read_bytes()
    except OSError:
        return []

    return extract_symbols_from_source(source_bytes, file_path, language)
