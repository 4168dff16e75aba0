"""Command-line tokenizing and syntax colouring for the live input line.

``tokenize`` is a single left-to-right scan that tags every slice of the line;
joining the token texts always reproduces the input exactly. Colouring maps
those tags onto Pygments token types so any Pygments style can paint them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexer import Lexer
from pygments.styles import get_style_by_name
from pygments.token import Token as PygmentsToken
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
OPERATORS_BY_LENGTH: tuple[str, ...] = ("||", "&&", ">>", "|", "&", ">", "<", ";")
REDIRECT_OPERATORS = frozenset({">", ">>", "<"})
_WORD_BREAK_CHARS = frozenset("|&><;\"'")


class TokenType(Enum):
    COMMAND = "command"
    FLAG = "flag"
    PATH = "path"
    STRING = "string"
    NUMBER = "number"
    OPERATOR = "operator"
    WHITESPACE = "whitespace"
    TEXT = "text"


@dataclass(frozen=True)
class Token:
    text: str
    token_type: TokenType


_PYGMENTS_TYPES = {
    TokenType.COMMAND: PygmentsToken.Name.Function,
    TokenType.FLAG: PygmentsToken.Name.Attribute,
    TokenType.PATH: PygmentsToken.Name.Namespace,
    TokenType.STRING: PygmentsToken.Literal.String,
    TokenType.NUMBER: PygmentsToken.Literal.Number,
    TokenType.OPERATOR: PygmentsToken.Operator,
    TokenType.WHITESPACE: PygmentsToken.Text.Whitespace,
    TokenType.TEXT: PygmentsToken.Text,
}

_FORMATTERS: dict[str, Terminal256Formatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def _is_number(word: str) -> bool:
    digits = word[1:] if word.startswith("-") else word
    return bool(digits) and all(ch.isdigit() or ch == "." for ch in digits)


def classify_word(word: str, expect_command: bool) -> TokenType:
    """Tag one bare word given the scanner's expect-command flag."""
    if word.startswith("--"):
        return TokenType.FLAG
    if word.startswith("-") and any(not (ch.isdigit() or ch == ".") for ch in word[1:]):
        return TokenType.FLAG
    if _is_number(word):
        return TokenType.NUMBER
    if "/" in word or word.startswith("./") or word.startswith("~/"):
        return TokenType.PATH
    if expect_command:
        return TokenType.COMMAND
    return TokenType.TEXT


def _scan_operator(line: str, pos: int) -> str | None:
    for op in OPERATORS_BY_LENGTH:
        if line.startswith(op, pos):
            return op
    return None


def _scan_token(line: str, pos: int, expect_command: bool) -> tuple[Token, int, bool]:
    """Consume one token at ``pos``.

    Returns ``(token, next_pos, expect_command)``.
    """
    ch = line[pos]
    if ch.isspace():
        end = pos
        while end < len(line) and line[end].isspace():
            end += 1
        return Token(line[pos:end], TokenType.WHITESPACE), end, expect_command

    op = _scan_operator(line, pos)
    if op is not None:
        return Token(op, TokenType.OPERATOR), pos + len(op), op not in REDIRECT_OPERATORS

    if ch in {'"', "'"}:
        close = line.find(ch, pos + 1)
        end = len(line) if close < 0 else close + 1
        return Token(line[pos:end], TokenType.STRING), end, False

    end = pos
    while end < len(line) and not line[end].isspace() and line[end] not in _WORD_BREAK_CHARS:
        end += 1
    word = line[pos:end]
    return Token(word, classify_word(word, expect_command)), end, False


def tokenize(line: str) -> list[Token]:
    """Split ``line`` into typed tokens covering every character in order."""
    tokens: list[Token] = []
    pos = 0
    expect_command = True
    while pos < len(line):
        token, pos, expect_command = _scan_token(line, pos, expect_command)
        tokens.append(token)
    return tokens


class CommandLineLexer(Lexer):
    """Pygments adapter over :func:`tokenize`."""

    name = "jerm command line"
    aliases = ["jerm"]

    def __init__(self, **options) -> None:
        options.setdefault("stripnl", False)
        options.setdefault("ensurenl", False)
        super().__init__(**options)

    def get_tokens_unprocessed(self, text):
        index = 0
        for token in tokenize(text):
            yield index, _PYGMENTS_TYPES[token.token_type], token.text
            index += len(token.text)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    if not style:
        return DEFAULT_STYLE
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    formatter = Terminal256Formatter(style=style)
    _FORMATTERS[style] = formatter
    return formatter


def colorize_command_line(line: str, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return ``line`` with ANSI colours for each token.

    Stripping escape sequences from the result yields ``line`` again.
    """
    if no_color or not line:
        return line
    formatter = _formatter_for_style(normalize_style(style))
    return pygments_highlight(line, CommandLineLexer(), formatter)


__all__ = [
    "TokenType",
    "Token",
    "tokenize",
    "classify_word",
    "CommandLineLexer",
    "normalize_style",
    "colorize_command_line",
    "DEFAULT_STYLE",
]
