"""
  cmdlisp Reader, Lexer and Parser

- Streaming, lazy tokenizing
- Emits Python primitives instead of Cons cells:

    - nil            -> Nil
    - #t / #true     -> True
    - #f / #false    -> False
    - lists          -> Python list
    - dotted lists   -> (list_part, tail)
    - symbols        -> Symbol
    - strings        -> str
    - numbers        -> int/float

Two entry points turn source text into expressions:

    parse_string             raw text: fast single-expression path, then a
                             paren/string aware scanner for multi-expression
                             and multi-line input
    parse_string_normalized  strips ';' comments and folds lines first;
                             string literals may span lines and keep
                             their newlines
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from cmdlisp import SExpression
from cmdlisp.errors import ParseError
from cmdlisp.types.symbol import Symbol
from cmdlisp.types.value import Nil

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<atom>[^\s()";]+)'  # numbers, booleans, nil, symbols
    r")",
    re.DOTALL,
)

INT_RE = re.compile(r"[+-]?\d+")
FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

BOOLEANS: dict[str, bool] = {
    "#t": True,
    "#true": True,
    "#f": False,
    "#false": False,
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples. Comments are dropped."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            rest = source[pos:]
            if rest.isspace():
                return
            if rest.lstrip().startswith('"'):
                raise ParseError(f"Unterminated string literal: {rest.strip()}")
            raise ParseError(f"Unexpected input at {pos}: {rest.strip()!r}")
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            if m.group(nm) is not None:
                if nm != "comment":
                    yield nm, m.group(nm)
                break


def unescape(literal: str) -> str:
    """Decode the body of a double-quoted string token."""
    body = literal[1:-1]
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\" and i + 1 < len(body):
            nxt = body[i + 1]
            if nxt not in ESCAPES:
                raise ParseError(f"Unknown escape sequence \\{nxt} in {literal}")
            out.append(ESCAPES[nxt])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def parse_atom(token: str) -> SExpression:
    if token.lower() == "nil":
        return Nil
    if token in BOOLEANS:
        return BOOLEANS[token]
    if token.startswith("#"):
        raise ParseError(f"Malformed literal: {token}")
    if INT_RE.fullmatch(token):
        return int(token)
    if FLOAT_RE.fullmatch(token):
        return float(token)
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def at_end(self) -> bool:
        return self.peek()[0] is None

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise ParseError("Unexpected end of input")

        if tok_type == "atom":
            return parse_atom(tok_val)

        if tok_type == "string":
            return unescape(tok_val)

        if tok_type == "rparen":
            raise ParseError("Unexpected ')'")

        # List or dotted list
        items: list[SExpression] = []
        while True:
            nxt_type, nxt_val = self.peek()
            if nxt_type is None:
                raise ParseError("Unmatched '('")
            if nxt_type == "rparen":
                self.advance()
                return items
            if nxt_type == "atom" and nxt_val == ".":
                if not items:
                    raise ParseError("Dotted list requires at least one element before '.'")
                self.advance()
                tail = self.parse_expr()
                if self.peek()[0] != "rparen":
                    raise ParseError("Expected ')' after dotted tail")
                self.advance()
                return items, tail  # tuple for a dotted list
            items.append(self.parse_expr())

    def parse_all(self) -> Iterator[SExpression]:
        while not self.at_end():
            yield self.parse_expr()


def read_all(source: str) -> list[SExpression]:
    """Read every expression in `source`."""
    return list(TokenStream(lex(source)).parse_all())


def read_one(source: str) -> SExpression:
    """Read exactly one expression; empty input or trailing data is an error."""
    stream = TokenStream(lex(source))
    if stream.at_end():
        raise ParseError("No expression found")
    expr = stream.parse_expr()
    if not stream.at_end():
        raise ParseError(f"Unexpected trailing input after expression: {stream.peek()[1]}")
    return expr


def parse_string(source: str) -> list[SExpression]:
    """Parse raw text into top-level expressions.

    The whole trimmed input is first tried as one expression. Failing that a
    scanner walks the text tracking paren depth, string boundaries and escapes;
    each time the depth returns to zero the accumulated text is read as one
    complete expression.
    """
    trimmed = source.strip()

    try:
        return [read_one(trimmed)]
    except ParseError:
        pass

    results: list[SExpression] = []
    current: list[str] = []
    depth = 0
    in_string = False
    escape_next = False

    for ch in trimmed:
        current.append(ch)
        if escape_next:
            escape_next = False
            continue
        if ch == "\\" and in_string:
            escape_next = True
        elif ch == '"':
            in_string = not in_string
        elif ch == "(" and not in_string:
            depth += 1
        elif ch == ")" and not in_string:
            depth -= 1
            if depth < 0:
                raise ParseError(f"Unbalanced parentheses: {''.join(current).strip()}")
            if depth == 0:
                fragment = "".join(current).strip()
                if fragment:
                    try:
                        results.append(read_one(fragment))
                    except ParseError as e:
                        raise ParseError(f"Parse error in expression '{fragment}': {e}") from e
                current = []

    remaining = "".join(current).strip()
    if remaining:
        if depth != 0:
            raise ParseError(f"Unbalanced parentheses: {remaining}")
        try:
            exprs = read_all(remaining)
        except ParseError as e:
            raise ParseError(f"Parse error in expression '{remaining}': {e}") from e
        # A comment-only remainder reads as nothing
        if len(exprs) > 1:
            raise ParseError(f"Parse error in expression '{remaining}': more than one expression")
        results.extend(exprs)

    if not results:
        raise ParseError("No valid expressions found")
    return results


def _scan_line(line: str, in_string: bool) -> tuple[str, bool]:
    """Cut `line` at its first ';' outside a string literal.

    `in_string` is the string state at the start of the line; the state at
    the end of the (possibly cut) line is returned alongside the text.
    """
    escape_next = False
    for i, ch in enumerate(line):
        if escape_next:
            escape_next = False
        elif ch == "\\" and in_string:
            escape_next = True
        elif ch == '"':
            in_string = not in_string
        elif ch == ";" and not in_string:
            return line[:i], False
    return line, in_string


def strip_comment(line: str) -> str:
    """Drop a ';' comment from one line, ignoring ';' inside string literals."""
    return _scan_line(line, False)[0]


def format_sexpr(source: str) -> str:
    """Fold possibly multi-line, commented source into a single line.

    Newlines inside a string literal are kept, along with the whitespace
    around them, and a ';' on a continuation line of such a string is text.
    """
    out: list[str] = []
    in_string = False
    for line in source.splitlines():
        continued = in_string
        text, in_string = _scan_line(line, in_string)
        if continued:
            out.append("\n" + (text if in_string else text.rstrip()))
            continue
        text = text.lstrip() if in_string else text.strip()
        if text:
            out.append((" " if out else "") + text)
    return "".join(out)


def parse_string_normalized(source: str) -> list[SExpression]:
    """Strip comments, fold lines, then parse. Empty input yields []."""
    normalized = format_sexpr(source)
    if not normalized:
        return []
    logger.debug("normalized input: %s", normalized)
    return parse_string(normalized)
