from __future__ import annotations

from pathlib import Path

from model.symbols import Language, SymbolKind
from parse.treesitter_identifiers import extract_identifier_ranges
from parse.treesitter_symbols import (
    extract_symbols_from_source,
    extract_symbols_treesitter,
)

GO_SOURCE = """package api

type Status = string

const (
	StatusActive   Status = "active"
	StatusInactive Status = "inactive"
)

type Article struct {
	ID    string `json:"id"`
	Title string
}

type UserService interface {
	GetUser(id string) User
}

type userStore struct{}

func (s *userStore) GetUser(id string) User {
	return User{}
}

func GetArticle(id string) Article {
	inner := func() {}
	_ = inner
	return Article{ID: id}
}
"""

TS_SOURCE = """export interface UserService {
  getUser(id: string): User;
  name: string;
}

export class UserClient implements UserService {
  name = "client";
  getUser(id: string): User {
    return {} as User;
  }
}

export type Status = typeof StatusActive | typeof StatusInactive;

export const StatusActive = "active";
export const fetchUser = async (id: string) => id;
let counter = 0;
function helper() {}
"""


def _outline(symbols) -> list[tuple[str, SymbolKind]]:
    return [(s.name, s.kind) for s in symbols]


def test_go_declarations() -> None:
    path = Path("api/article.go")

    symbols = extract_symbols_from_source(GO_SOURCE.encode(), path, Language.GO)

    assert _outline(symbols) == [
        ("Status", SymbolKind.TYPE_ALIAS),
        ("StatusActive", SymbolKind.CONSTANT),
        ("StatusInactive", SymbolKind.CONSTANT),
        ("Article", SymbolKind.STRUCT),
        ("UserService", SymbolKind.INTERFACE),
        ("userStore", SymbolKind.STRUCT),
        ("GetUser", SymbolKind.METHOD),
        ("GetArticle", SymbolKind.FUNCTION),
    ]
    assert all(s.language is Language.GO and s.path == path for s in symbols)


def test_go_containers_and_receivers() -> None:
    symbols = {
        s.name: s
        for s in extract_symbols_from_source(
            GO_SOURCE.encode(), Path("api/article.go"), Language.GO
        )
    }

    article = symbols["Article"]
    assert _outline(article.children) == [
        ("ID", SymbolKind.FIELD),
        ("Title", SymbolKind.FIELD),
    ]
    assert article.range.start.line == 9
    assert article.selection_range.start.line == 9
    assert article.selection_range.start.character == len("type ")
    assert article.children[0].range.start.line == 10

    assert _outline(symbols["UserService"].children) == [
        ("GetUser", SymbolKind.METHOD)
    ]
    assert symbols["GetUser"].detail == "userStore"
    assert symbols["GetArticle"].children == []


def test_go_const_block_specs_have_their_own_lines() -> None:
    symbols = {
        s.name: s
        for s in extract_symbols_from_source(
            GO_SOURCE.encode(), Path("api/article.go"), Language.GO
        )
    }

    assert symbols["StatusActive"].range.start.line == 5
    assert symbols["StatusInactive"].range.start.line == 6


def test_typescript_declarations() -> None:
    path = Path("api/user.ts")

    symbols = extract_symbols_from_source(TS_SOURCE.encode(), path, Language.TYPESCRIPT)

    assert _outline(symbols) == [
        ("UserService", SymbolKind.INTERFACE),
        ("UserClient", SymbolKind.CLASS),
        ("Status", SymbolKind.TYPE_ALIAS),
        ("StatusActive", SymbolKind.CONSTANT),
        ("fetchUser", SymbolKind.FUNCTION),
        ("counter", SymbolKind.VARIABLE),
        ("helper", SymbolKind.FUNCTION),
    ]


def test_typescript_members_and_implements() -> None:
    symbols = {
        s.name: s
        for s in extract_symbols_from_source(
            TS_SOURCE.encode(), Path("api/user.ts"), Language.TYPESCRIPT
        )
    }

    assert _outline(symbols["UserService"].children) == [
        ("getUser", SymbolKind.METHOD),
        ("name", SymbolKind.PROPERTY),
    ]
    client = symbols["UserClient"]
    assert client.detail == "UserService"
    assert _outline(client.children) == [
        ("name", SymbolKind.PROPERTY),
        ("getUser", SymbolKind.METHOD),
    ]
    # Exported declarations span the whole export statement.
    assert symbols["StatusActive"].range.start.character == 0
    assert symbols["StatusActive"].selection_range.start.character == len(
        "export const "
    )


def test_extract_from_file_picks_grammar_by_suffix(tmp_path: Path) -> None:
    tsx = tmp_path / "Page.tsx"
    tsx.write_text(
        "export function Page() {\n  return <div>hi</div>;\n}\n", encoding="utf-8"
    )
    (tmp_path / "notes.md").write_text("# notes\n", encoding="utf-8")

    symbols = extract_symbols_treesitter(tsx)

    assert _outline(symbols) == [("Page", SymbolKind.FUNCTION)]
    assert symbols[0].language is Language.TYPESCRIPT_REACT
    assert extract_symbols_treesitter(tmp_path / "notes.md") == []
    assert extract_symbols_treesitter(tmp_path / "missing.go") == []


def test_identifier_ranges_skip_comments_and_strings(tmp_path: Path) -> None:
    path = tmp_path / "client.ts"
    path.write_text(
        "\n".join(
            [
                "// getUser is documented here",
                "export interface UserService {",
                "  getUser(id: string): User;",
                "}",
                'const label = "getUser";',
                "client.getUser(label);",
            ]
        ),
        encoding="utf-8",
    )

    ranges = extract_identifier_ranges(path, "getUser")

    assert [(r.start.line, r.start.character) for r in ranges] == [(2, 2), (5, 7)]


def test_identifier_ranges_absent_name(tmp_path: Path) -> None:
    path = tmp_path / "article.go"
    path.write_text("package api\n", encoding="utf-8")

    assert extract_identifier_ranges(path, "GetArticle") == []


SINGLE_SPEC_BLOCKS = """package api

type Status = string

const (
	StatusActive Status = "active"
)

type (
	Code = int
)

const Limit = 10
"""


def test_go_single_spec_block_uses_spec_line() -> None:
    symbols = {
        s.name: s
        for s in extract_symbols_from_source(
            SINGLE_SPEC_BLOCKS.encode(), Path("api/status.go"), Language.GO
        )
    }

    assert symbols["StatusActive"].range.start.line == 5
    assert symbols["StatusActive"].range.start.character == 1
    assert symbols["Code"].range.start.line == 9
    assert symbols["Status"].range.start.line == 2
    assert symbols["Limit"].range.start.line == 12
    assert symbols["Limit"].range.start.character == 0
