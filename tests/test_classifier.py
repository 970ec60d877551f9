from __future__ import annotations

from pathlib import Path

import pytest

from match.classifier import classify
from model.infos import (
    EnumConstInfo,
    EnumTypeInfo,
    FieldInfo,
    InterfaceInfo,
    InterfaceMethodInfo,
    SymbolInfo,
)
from model.symbols import Location, Position, SymbolKind
from symbol_fakes import GO_API_LINES, TS_API_LINES, api_workspace, position_of


@pytest.mark.asyncio
async def test_go_function_declaration() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 18, "GetArticle"))

    assert isinstance(info, SymbolInfo)
    assert info.name == "GetArticle"
    assert info.kind is SymbolKind.FUNCTION
    assert info.exported is True


@pytest.mark.asyncio
async def test_go_unexported_function() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 22, "helper", 2))

    assert isinstance(info, SymbolInfo)
    assert info.exported is False


@pytest.mark.asyncio
async def test_go_struct_is_data_shape_interface() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 8, "Article"))

    assert isinstance(info, InterfaceInfo)
    assert info.symbol.kind is SymbolKind.STRUCT
    assert info.has_methods is False
    assert info.exported is True


@pytest.mark.asyncio
async def test_go_interface_with_methods() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 14, "UserService"))

    assert isinstance(info, InterfaceInfo)
    assert info.has_methods is True


@pytest.mark.asyncio
async def test_go_interface_method() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 15, "GetUser"))

    assert isinstance(info, InterfaceMethodInfo)
    assert info.name == "GetUser"
    assert info.interface.name == "UserService"
    assert info.exported is True


@pytest.mark.asyncio
async def test_go_field_carries_json_tag() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 11, "Email"))

    assert isinstance(info, FieldInfo)
    assert info.parent.name == "Article"
    assert info.json_tag == "email"


@pytest.mark.asyncio
async def test_go_untagged_field() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 9, "ID"))

    assert isinstance(info, FieldInfo)
    assert info.json_tag is None


@pytest.mark.asyncio
async def test_go_enum_const_and_type() -> None:
    source, go_path, _ = api_workspace()

    const = await classify(source, go_path, position_of(GO_API_LINES, 4, "StatusActive"))
    alias = await classify(source, go_path, position_of(GO_API_LINES, 2, "Status"))

    assert isinstance(const, EnumConstInfo)
    assert const.name == "StatusActive"
    assert isinstance(alias, EnumTypeInfo)
    assert alias.name == "Status"


@pytest.mark.asyncio
async def test_plain_constant_is_not_classified() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(
        source, go_path, position_of(GO_API_LINES, 6, "DefaultPageSize")
    )

    assert info is None


@pytest.mark.asyncio
async def test_blank_line_is_not_classified() -> None:
    source, go_path, _ = api_workspace()

    assert await classify(source, go_path, Position(line=1, character=0)) is None


@pytest.mark.asyncio
async def test_unsupported_file_is_not_classified() -> None:
    source, _, _ = api_workspace()

    info = await classify(source, Path("/ws/api/readme.md"), Position(line=0, character=0))

    assert info is None


@pytest.mark.asyncio
async def test_ts_enum_type_selected_by_alias_name() -> None:
    source, _, ts_path = api_workspace()

    info = await classify(source, ts_path, position_of(TS_API_LINES, 0, "Status"))

    assert isinstance(info, EnumTypeInfo)
    assert info.name == "Status"
    assert info.symbol.kind is SymbolKind.TYPE_ALIAS


@pytest.mark.asyncio
async def test_ts_enum_type_without_symbol_gets_synthetic_alias() -> None:
    source, _, ts_path = api_workspace()
    source.symbols[ts_path] = [
        s for s in source.symbols[ts_path] if s.name != "Status"
    ]

    info = await classify(source, ts_path, position_of(TS_API_LINES, 0, "Status"))

    assert isinstance(info, EnumTypeInfo)
    assert info.symbol.range.start == Position(line=0, character=0)
    assert info.symbol.range.end.character == len(TS_API_LINES[0])


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["StatusActive", "StatusInactive", "typeof"])
async def test_ts_enum_type_selected_anywhere_on_declaration_line(name: str) -> None:
    source, _, ts_path = api_workspace()
    definition = position_of(TS_API_LINES, 2, "StatusActive")
    source.definitions[(ts_path, 0)] = [Location.at(ts_path, definition)]

    info = await classify(source, ts_path, position_of(TS_API_LINES, 0, name))

    assert isinstance(info, EnumTypeInfo)
    assert info.name == "Status"


@pytest.mark.asyncio
async def test_ts_enum_type_member_without_definition() -> None:
    source, _, ts_path = api_workspace()

    info = await classify(source, ts_path, position_of(TS_API_LINES, 0, "StatusActive"))

    assert isinstance(info, EnumTypeInfo)
    assert info.symbol.kind is SymbolKind.TYPE_ALIAS


@pytest.mark.asyncio
async def test_ts_interface_and_property() -> None:
    source, _, ts_path = api_workspace()

    interface = await classify(source, ts_path, position_of(TS_API_LINES, 6, "Article"))
    prop = await classify(source, ts_path, position_of(TS_API_LINES, 9, "email"))

    assert isinstance(interface, InterfaceInfo)
    assert interface.has_methods is False
    assert interface.exported is True
    assert isinstance(prop, FieldInfo)
    assert prop.json_tag is None


@pytest.mark.asyncio
async def test_usage_site_resolves_through_definition() -> None:
    source, go_path, _ = api_workspace()
    declaration = position_of(GO_API_LINES, 18, "GetArticle")
    source.definitions[(go_path, 25)] = [Location.at(go_path, declaration)]

    info = await classify(source, go_path, position_of(GO_API_LINES, 25, "GetArticle"))

    assert isinstance(info, SymbolInfo)
    assert info.name == "GetArticle"
    assert info.location.range.start == declaration


@pytest.mark.asyncio
async def test_field_usage_resolves_through_definition() -> None:
    source, go_path, _ = api_workspace()
    declaration = position_of(GO_API_LINES, 11, "Email")
    source.definitions[(go_path, 26)] = [Location.at(go_path, declaration)]

    info = await classify(source, go_path, position_of(GO_API_LINES, 26, "Email"))

    assert isinstance(info, FieldInfo)
    assert info.name == "Email"
    assert info.json_tag == "email"


@pytest.mark.asyncio
async def test_usage_without_definition_is_not_classified() -> None:
    source, go_path, _ = api_workspace()

    info = await classify(source, go_path, position_of(GO_API_LINES, 25, "GetArticle"))

    assert info is None


@pytest.mark.asyncio
async def test_unreadable_document_is_not_classified() -> None:
    source, go_path, _ = api_workspace()
    source.failing.add(go_path)

    info = await classify(source, go_path, position_of(GO_API_LINES, 18, "GetArticle"))

    assert info is None
