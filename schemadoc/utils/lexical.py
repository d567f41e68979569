# schemadoc/utils/lexical.py
"""Lexical helpers shared by the dialect parsers."""

import re

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_SQL_LINE_COMMENT = re.compile(r"--.*$", re.MULTILINE)
_JS_LINE_COMMENT = re.compile(r"(?:^|(?<=\s))//.*$", re.MULTILINE)
_WHITESPACE = re.compile(r"\s+")

_OPENERS = "([{"
_CLOSERS = ")]}"


def clean_sql(sql: str) -> str:
    """Remove SQL comments and collapse whitespace into single spaces.

    Args:
        sql: Raw SQL text.

    Returns:
        A single-line version of the SQL without comments.
    """
    # Remove /* ... */ style comments
    sql = _BLOCK_COMMENT.sub(" ", sql)
    # Remove -- style comments
    sql = _SQL_LINE_COMMENT.sub("", sql)
    return _WHITESPACE.sub(" ", sql).strip()


def strip_js_comments(source: str) -> str:
    """Remove // and /* */ comments from TypeScript or Prisma source.

    Line structure is kept so that line-oriented scanning still works.
    """
    source = _BLOCK_COMMENT.sub(" ", source)
    return _JS_LINE_COMMENT.sub("", source)


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split text on a separator that sits outside any brackets or quotes.

    Args:
        text: The clause to split, e.g. the body of a CREATE TABLE.
        sep: Single-character separator.

    Returns:
        Stripped, non-empty fragments in source order.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None

    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
        elif char == sep and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def split_statements(sql: str) -> list[str]:
    """Split SQL on semicolons that sit outside quoted strings.

    Brackets are not tracked, so an unbalanced statement does not swallow
    the ones after it.
    """
    statements: list[str] = []
    current: list[str] = []
    quote: str | None = None

    for char in sql:
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"', "`"):
            quote = char
        elif char == ";":
            statements.append("".join(current))
            current = []
            continue
        current.append(char)

    statements.append("".join(current))
    return [s.strip() for s in statements if s.strip()]


def find_closing(text: str, start: int, opener: str = "{", closer: str = "}") -> int:
    """Return the index of the bracket closing the one at ``start``.

    Quoted strings are skipped. Returns -1 when the bracket is never closed.
    """
    depth = 0
    quote: str | None = None
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if char == quote and text[index - 1] != "\\":
                quote = None
            continue
        if char in ("'", '"', "`"):
            quote = char
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return index
    return -1


def strip_identifier(name: str) -> str:
    """Drop quoting and any schema qualifier from an identifier."""
    name = name.strip()
    if "." in name:
        name = name.rsplit(".", 1)[-1]
    return name.strip().strip('"`[]')


def split_identifier_list(raw: str) -> list[str]:
    """Split ``a, "b", `c``` into bare identifiers."""
    names = []
    for part in split_top_level(raw):
        token = part.split(" ", 1)[0]
        name = strip_identifier(token)
        if name:
            names.append(name)
    return names
