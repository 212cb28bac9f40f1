"""Argument lexer: converts the raw remainder of a magic line into tokens.

The lexer is a single-pass scanner over the text that follows the magic
keyword.  At every scan position it tries the grammar alternatives in a
fixed precedence order:

1. ``{`` opens a JSON-object token that runs to the *last* ``}`` in the
   remaining input (greedy, newlines included).  Without a closing brace
   the ``{`` is scanned as an ordinary word character.  Because the span
   crosses lines, ``{"a": 1}`` and ``{"b": 2}`` on two separate lines
   form one token that fails to decode; a scan that stopped at the line
   end would keep the first object and drop the second line.
2. A run of non-whitespace, non-``"`` characters becomes a ``KEY_VALUE``
   token when an ``=`` can be reached from it (optional whitespace around
   the ``=`` is allowed), otherwise a ``WORD`` token.  Values may contain
   double-quoted segments, which preserve their internal whitespace.
3. A ``"`` with a matching closing ``"`` becomes a ``QUOTED`` token,
   together with any non-whitespace text glued to it.

Whitespace and unterminated quotes are skipped one character at a time.
The lexer never raises: every input yields a (possibly empty) token list.

Escaped quotes are not recognised; ``"`` always opens or closes a segment.
"""
from __future__ import annotations

from typing import Final

from magicline.grammar.tokens import ArgToken, ArgTokenKind

_QUOTE: Final[str] = '"'
_ASSIGN: Final[str] = "="


def _is_run_char(ch: str) -> bool:
    """Return True for characters allowed in an unquoted run."""
    return ch != _QUOTE and not ch.isspace()


class ArgumentLexer:
    """Single-pass argument lexer.

    Parameters
    ----------
    source:
        The raw argument text (everything after the magic keyword).
    """

    __slots__ = ("_source", "_pos", "_tokens")

    def __init__(self, source: str) -> None:
        self._source: str = source
        self._pos: int = 0
        self._tokens: list[ArgToken] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self) -> list[ArgToken]:
        """Scan the entire source and return the tokens in source order.

        Returns
        -------
        list[ArgToken]
            Ordered list of argument tokens; empty for blank input.
        """
        while self._pos < len(self._source):
            self._scan_one()
        return self._tokens

    # ------------------------------------------------------------------
    # Internal scanner
    # ------------------------------------------------------------------

    def _char_at(self, index: int) -> str:
        """Return the character at ``index`` or ``""`` past the end."""
        return self._source[index] if index < len(self._source) else ""

    def _emit(self, kind: ArgTokenKind, start: int) -> None:
        """Append a token spanning ``[start, pos)``."""
        self._tokens.append(
            ArgToken(
                kind=kind,
                value=self._source[start : self._pos],
                start=start,
                end=self._pos,
            )
        )

    def _scan_one(self) -> None:
        """Scan exactly one token, or skip one unusable character."""
        start = self._pos
        ch = self._char_at(start)

        if ch.isspace():
            self._pos += 1
            return

        if ch == "{" and self._scan_json_object(start):
            return

        if ch == _QUOTE:
            if not self._scan_quoted(start):
                # Unterminated quote: nothing can start here.
                self._pos += 1
            return

        self._scan_word_or_pair(start)

    # ------------------------------------------------------------------
    # Token-specific scanners
    # ------------------------------------------------------------------

    def _scan_json_object(self, start: int) -> bool:
        """Consume ``{`` through the last ``}`` of the input, if there is one."""
        close = self._source.rfind("}", start + 1)
        if close == -1:
            return False
        self._pos = close + 1
        self._emit(ArgTokenKind.JSON_OBJECT, start)
        return True

    def _scan_quoted(self, start: int) -> bool:
        """Consume one or more quoted segments with trailing text."""
        if self._closing_quote(start) == -1:
            return False
        self._pos = self._skip_quoted_groups(start)
        self._emit(ArgTokenKind.QUOTED, start)
        return True

    def _scan_word_or_pair(self, start: int) -> None:
        """Consume a ``key=value`` pair or a bare word."""
        run_end = self._skip_run(start)
        assign = self._find_assignment(start, run_end)
        if assign is not None:
            self._pos = self._skip_value(self._skip_whitespace(assign + 1))
            self._emit(ArgTokenKind.KEY_VALUE, start)
        else:
            self._pos = self._skip_quoted_groups(run_end)
            self._emit(ArgTokenKind.WORD, start)

    def _find_assignment(self, start: int, run_end: int) -> int | None:
        """Return the offset of the ``=`` that makes this run a pair.

        The longest key wins: an ``=`` after the whole run (optionally
        preceded by whitespace) is preferred, otherwise the last ``=``
        inside the run.  The key must be at least one character long.
        """
        after = self._skip_whitespace(run_end)
        if self._char_at(after) == _ASSIGN:
            return after
        inner = self._source.rfind(_ASSIGN, start + 1, run_end)
        return inner if inner != -1 else None

    # ------------------------------------------------------------------
    # Cursor helpers (pure: they return offsets, never move ``_pos``)
    # ------------------------------------------------------------------

    def _skip_whitespace(self, index: int) -> int:
        while index < len(self._source) and self._source[index].isspace():
            index += 1
        return index

    def _skip_run(self, index: int) -> int:
        while index < len(self._source) and _is_run_char(self._source[index]):
            index += 1
        return index

    def _closing_quote(self, index: int) -> int:
        """Return the offset of the quote closing the one at ``index``, or -1."""
        return self._source.find(_QUOTE, index + 1)

    def _skip_quoted_groups(self, index: int) -> int:
        """Skip any number of ``"..."`` segments, each with glued trailing text."""
        while self._char_at(index) == _QUOTE:
            close = self._closing_quote(index)
            if close == -1:
                break
            index = self._skip_run(close + 1)
        return index

    def _skip_value(self, index: int) -> int:
        """Skip a value: any mix of quoted segments and unquoted runs."""
        while True:
            if self._char_at(index) == _QUOTE:
                close = self._closing_quote(index)
                if close == -1:
                    return index
                index = close + 1
                continue
            run_end = self._skip_run(index)
            if run_end == index:
                return index
            index = run_end


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def tokenize(source: str) -> list[ArgToken]:
    """Tokenize raw magic-command argument text.

    Parameters
    ----------
    source:
        Argument text following the magic keyword.

    Returns
    -------
    list[ArgToken]
        Argument tokens in source order.

    Example
    -------
    ::

        from magicline.lexer import tokenize
        tokens = tokenize('Microsoft.Quantum.Foo shots=100 name="my run"')
    """
    return ArgumentLexer(source).tokenize()
