"""Identifier vocabulary and the category precedence table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from jinjahl.tokens import Category

KEYWORDS: frozenset[str] = frozenset(
    {
        "if", "elif", "else", "endif",
        "for", "endfor", "in",
        "block", "endblock",
        "extends", "include", "import", "from",
        "macro", "endmacro", "call", "endcall",
        "filter", "endfilter",
        "set", "endset",
        "with", "endwith",
        "autoescape", "endautoescape",
        "trans", "endtrans", "pluralize",
        "do", "break", "continue",
        "scoped", "recursive", "ignore", "missing",
        "as", "not", "and", "or", "is",
    }
)  # fmt: skip

# Matched case-sensitively
BOOLEANS: frozenset[str] = frozenset({"true", "false", "True", "False", "none", "None"})

BUILTINS: frozenset[str] = frozenset(
    {
        "abs", "attr", "batch", "capitalize", "center", "default", "d", "dictsort",
        "escape", "e", "filesizeformat", "first", "float", "forceescape",
        "format", "groupby", "indent", "int", "join", "last", "length", "list",
        "lower", "map", "max", "min", "pprint", "random", "reject", "rejectattr",
        "replace", "reverse", "round", "safe", "select", "selectattr", "slice",
        "sort", "string", "striptags", "sum", "title", "tojson", "trim", "truncate",
        "unique", "upper", "urlencode", "urlize", "wordcount", "wordwrap", "xmlattr",
        "range", "lipsum", "dict", "cycler", "joiner", "namespace",
    }
)  # fmt: skip

METHODS: frozenset[str] = frozenset(
    {
        "append", "extend", "insert", "remove", "pop", "clear", "index", "count",
        "copy", "split", "rsplit", "strip", "lstrip", "rstrip", "startswith",
        "endswith", "find", "rfind", "upper", "lower", "capitalize", "title",
        "swapcase", "isdigit", "isalpha", "isalnum", "isspace", "isupper", "islower",
        "ljust", "rjust", "center", "zfill", "format", "encode", "decode",
        "keys", "values", "items", "get", "update", "setdefault", "fromkeys",
        "sort", "sorted", "reverse", "reversed", "min", "max", "sum", "len",
        "enumerate", "zip", "filter", "map", "reduce", "any", "all",
    }
)  # fmt: skip


@dataclass(frozen=True, slots=True)
class IdentifierRule:
    """One entry of the precedence table: the first matching rule wins."""

    category: Category
    matches: Callable[[str, bool], bool]


IDENTIFIER_RULES: tuple[IdentifierRule, ...] = (
    IdentifierRule(Category.KEYWORD, lambda name, _call: name.lower() in KEYWORDS),
    IdentifierRule(Category.BOOLEAN, lambda name, _call: name in BOOLEANS),
    IdentifierRule(Category.BUILTIN, lambda name, _call: name.lower() in BUILTINS),
    IdentifierRule(Category.METHOD, lambda name, _call: name.lower() in METHODS),
    IdentifierRule(Category.FUNCTION, lambda _name, call: call),
)


def classify_identifier(name: str, is_call: bool) -> Category:
    """Return the category of an identifier; variable when no rule matches."""
    for rule in IDENTIFIER_RULES:
        if rule.matches(name, is_call):
            return rule.category
    return Category.VARIABLE
