from __future__ import annotations

import pytest

from model.symbols import Language
from naming.conventions import candidate_names, capitalize_first, lowercase_first


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("getArticle", "GetArticle"),
        ("GetArticle", "GetArticle"),
        ("id", "Id"),
        ("x", "X"),
        ("", ""),
        ("_private", "_private"),
    ],
)
def test_capitalize_first(name: str, expected: str) -> None:
    assert capitalize_first(name) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("GetArticle", "getArticle"),
        ("getArticle", "getArticle"),
        ("ID", "iD"),
        ("", ""),
    ],
)
def test_lowercase_first(name: str, expected: str) -> None:
    assert lowercase_first(name) == expected


@pytest.mark.parametrize(
    "name", ["getArticle", "GetArticle", "ID", "userID", "x", "", "_x", "Ünïcode"]
)
def test_casing_round_trip_only_touches_first_character(name: str) -> None:
    assert lowercase_first(capitalize_first(name)) == lowercase_first(name)
    assert capitalize_first(lowercase_first(name)) == capitalize_first(name)
    assert capitalize_first(name)[1:] == name[1:]


def test_candidate_names_for_typescript_target_lowercases_first() -> None:
    assert candidate_names("GetArticle", Language.TYPESCRIPT) == [
        "getArticle",
        "GetArticle",
    ]


def test_candidate_names_for_go_target_capitalizes_first() -> None:
    assert candidate_names("getArticle", Language.GO) == ["GetArticle", "getArticle"]


def test_candidate_names_without_conversion_is_single_name() -> None:
    assert candidate_names("GetArticle", Language.GO) == ["GetArticle"]
    assert candidate_names("article", Language.TYPESCRIPT_REACT) == ["article"]
