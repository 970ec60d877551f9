"""Shared language-detection utilities."""

from __future__ import annotations

from pathlib import Path

from model.symbols import Language

_SUFFIX_LANGUAGES: dict[str, Language] = {
    ".go": Language.GO,
    ".ts": Language.TYPESCRIPT,
    ".tsx": Language.TYPESCRIPT_REACT,
}

GO_PATTERNS = ("*.go",)
TYPESCRIPT_PATTERNS = ("*.ts", "*.tsx")


def language_for_path(file_path: str | Path) -> Language | None:
    """Map a file path to its language by suffix.

    Examples:
        >>> language_for_path("api/article.go")
        <Language.GO: 'go'>
        >>> language_for_path("web/Article.tsx")
        <Language.TYPESCRIPT_REACT: 'typescriptreact'>
        >>> language_for_path("README.md") is None
        True
    """
    return _SUFFIX_LANGUAGES.get(Path(file_path).suffix.lower())


def counterpart_language(language: Language) -> Language:
    """Return the language a cross-language lookup should search."""
    return Language.GO if language.is_typescript else Language.TYPESCRIPT


def sibling_patterns(target_language: Language) -> tuple[str, ...]:
    """Glob patterns for files of ``target_language`` in one directory."""
    return TYPESCRIPT_PATTERNS if target_language.is_typescript else GO_PATTERNS
