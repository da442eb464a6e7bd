"""
Snippet Language Detection.

Guesses the language of a snippet from its content when none was given.
Patterns are tried in priority order and the first match wins; a plain
keyword scan follows, and anything left over is "text".
"""

import re

DEFAULT_LANGUAGE = "text"

LANGUAGE_PATTERNS: dict[str, re.Pattern[str]] = {
    "java": re.compile(r"(public class|import java\.|System\.out|@Override)", re.IGNORECASE),
    "python": re.compile(r"(def\s+\w+\s*\(|import\s+\w+|from\s+\w+\s+import)", re.IGNORECASE),
    "javascript": re.compile(r"(function\s+\w+\s*\(|const\s+\w+\s*=|let\s+\w+\s*=|=>)", re.IGNORECASE),
    "typescript": re.compile(r"(interface\s+\w+|type\s+\w+\s*=|as\s+\w+|:\s*\w+\[?\]?)", re.IGNORECASE),
    "html": re.compile(r"(<!DOCTYPE html>|<html>|<body>|<div>|<span>|<a href=)", re.IGNORECASE),
    "css": re.compile(r"(body\s*\{|margin:|padding:|@media|#\w+\s*\{|\.\w+\s*\{)", re.IGNORECASE),
    "sql": re.compile(
        r"(SELECT\s+.*?\s+FROM|INSERT\s+INTO|UPDATE\s+.*?\s+SET|DELETE\s+FROM)",
        re.IGNORECASE,
    ),
    "c": re.compile(r"(#include\s*<|int\s+main\s*\(|void\s+\w+\s*\(|printf\s*\()", re.IGNORECASE),
    "csharp": re.compile(r"(using\s+System;|namespace\s+\w+|public\s+class)", re.IGNORECASE),
    "ruby": re.compile(r"(def\s+\w+\s*\(|require\s+\"\w+\"|puts\s+)", re.IGNORECASE),
    "go": re.compile(r"(package\s+\w+|import\s+\(|func\s+\w+\s*\(|fmt\.)", re.IGNORECASE),
    "rust": re.compile(r"(fn\s+\w+\s*\(|let\s+mut|pub\s+struct|use\s+\w+::|impl)", re.IGNORECASE),
}

# Substring fallback, checked in this order against lower-cased content.
KEYWORD_FALLBACK: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("java", ("public class", "system.out.println")),
    ("python", ("def ", "import ")),
    ("javascript", ("function", "const ", "=>")),
    ("c", ("#include", "printf")),
    ("sql", ("select ", "from ")),
    ("html", ("<html", "<div")),
    ("css", ("@media", "margin:")),
)


def detect_language(content: str | None) -> str:
    """Return the first language whose pattern matches, or "text"."""
    if content is None or not content.strip():
        return DEFAULT_LANGUAGE

    for language, pattern in LANGUAGE_PATTERNS.items():
        if pattern.search(content):
            return language

    lowered = content.lower()
    for language, keywords in KEYWORD_FALLBACK:
        if any(keyword in lowered for keyword in keywords):
            return language

    return DEFAULT_LANGUAGE


def resolve_language(language: str | None, content: str | None) -> str:
    """Explicit language wins; otherwise detect from content."""
    if language is not None and language.strip():
        return language.strip()
    return detect_language(content)
