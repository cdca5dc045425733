"""A small SQL tokenizer and a cursor-style parser built on top of it."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterator

_TOKEN_RE = re.compile(
    r"""
    (?P<quoted>
        `(?:[^`]|``)*`?
      | \[(?:[^\]]|\]\])*\]?
      | '(?:[^']|'')*'?
      | "(?:[^"]|"")*"?
    )
    | (?P<space>\s+)
    | (?P<unquoted>[\w$]+)
    | (?P<punctuation>.)
    """,
    re.VERBOSE | re.DOTALL,
)


class TokenKind(enum.Enum):
    """The category of a token."""

    QUOTED = "quoted"
    UNQUOTED = "unquoted"
    SPACE = "space"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class Token:
    """A piece of SQL text together with its category."""

    kind: TokenKind
    text: str

    def is_space(self) -> bool:
        return self.kind is TokenKind.SPACE

    def is_quoted(self) -> bool:
        return self.kind is TokenKind.QUOTED

    def is_unquoted(self) -> bool:
        return self.kind is TokenKind.UNQUOTED

    def is_punctuation(self) -> bool:
        return self.kind is TokenKind.PUNCTUATION

    def __str__(self) -> str:
        return self.text


def tokenize(text: str) -> Iterator[Token]:
    """Split ``text`` into tokens; joining their texts gives back ``text``."""
    for match in _TOKEN_RE.finditer(text):
        kind = TokenKind(match.lastgroup)
        yield Token(kind, match.group())


class Parser:
    """Walks the tokens of a SQL string, skipping whitespace."""

    def __init__(self, text: str) -> None:
        self._tokens = tokenize(text)
        self._curr: Token | None = None
        self._last: Token | None = None

    def curr(self) -> Token | None:
        """The current token, advancing to the first one if needed."""
        if self._curr is not None:
            return self._curr
        return self.next()

    def last(self) -> Token | None:
        """The token that was current before the last advance."""
        return self._last

    def next(self) -> Token | None:
        """Advance past the current token and return the new one."""
        if self._curr is not None:
            self._last = self._curr
            self._curr = None
        tok = next(self._tokens, None)
        if tok is not None:
            if tok.is_space():
                tok = next(self._tokens, None)
            self._curr = tok
        return self._curr

    def next_if_unquoted(self, word: str) -> bool:
        """Advance if the current token is the unquoted word, ignoring case."""
        tok = self.curr()
        if tok is not None and tok.is_unquoted() and tok.text.lower() == word.lower():
            self.next()
            return True
        return False

    def next_if_quoted_any(self) -> Token | None:
        """Consume and return the current token if it is quoted."""
        tok = self.curr()
        if tok is not None and tok.is_quoted():
            self.next()
            return self.last()
        return None

    def next_if_unquoted_any(self) -> Token | None:
        """Consume and return the current token if it is unquoted."""
        tok = self.curr()
        if tok is not None and tok.is_unquoted():
            self.next()
            return self.last()
        return None

    def next_if_punctuation(self, word: str) -> bool:
        """Advance if the current token is exactly the given punctuation."""
        tok = self.curr()
        if tok is not None and tok.is_punctuation() and tok.text == word:
            self.next()
            return True
        return False

    def curr_is_unquoted(self) -> bool:
        tok = self.curr()
        return tok is not None and tok.is_unquoted()

    def curr_as_str(self) -> str:
        """Text of the current token; raises ValueError at end of input."""
        tok = self.curr()
        if tok is None:
            raise ValueError("no current token")
        return tok.text