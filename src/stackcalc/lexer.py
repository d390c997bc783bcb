# src/stackcalc/lexer.py
import logging

from .calc_token import *
from .config import config
from .diagnostics import Diagnostics, ErrorKind

logger = logging.getLogger(__name__)

_OPERATOR_CHARS = frozenset(b"+-*/=%&|<>!^~")

_WHITESPACE = frozenset(b" \t\n\r\v\f")

_SINGLE_CHAR_TOKENS = {
    ord("("): LPAREN,
    ord(")"): RPAREN,
    ord(";"): SEMICOLON,
}

# Statement keywords of the wider language that the evaluator does not
# implement. They are rejected here instead of being read as identifiers.
_UNSUPPORTED_KEYWORDS = {"if", "else", "while", "for", "return"}


def printable(byte):
    """Render a single byte for an error message."""
    char = chr(byte)
    if 0x20 <= byte < 0x7F:
        return f"'{char}'"
    return f"'\\x{byte:02x}'"


class Lexer:
    def __init__(self, cursor, trace=None):
        self.cursor = cursor
        self.trace = config.trace_tokens if trace is None else trace
        # incremental line tracking for token positions
        self._line = 1
        self._line_start = 0
        self._scanned = 0

    def next_token(self, diagnostics: Diagnostics) -> Token:
        self.skip_whitespace()

        cursor = self.cursor
        start = cursor.position
        ch = cursor.peek_byte()

        if ch is None:
            tok = self._make(EOF, start, start)
        elif self.is_letter(ch):
            tok = self.read_identifier(diagnostics)
        elif ch == ord('"'):
            tok = self.read_string(diagnostics)
        elif self.is_digit(ch) or (ch == ord("-") and self.is_digit(cursor.peek_byte(1))):
            tok = self.read_number()
        elif ch in _OPERATOR_CHARS:
            tok = self.read_operator()
        elif ch in _SINGLE_CHAR_TOKENS:
            cursor.advance()
            tok = self._make(_SINGLE_CHAR_TOKENS[ch], start, start + 1)
        else:
            cursor.advance()
            tok = self._make(ILLEGAL, start, start + 1)
            diagnostics.push(
                f"unexpected character: {printable(ch)} (0x{ch:02x}) at line {tok.line}, column {tok.column}",
                ErrorKind.LEXICAL,
            )

        if self.trace:
            logger.debug("token %r", tok)
        return tok

    def tokens(self, diagnostics: Diagnostics):
        """Yield tokens up to and including EOF, stopping early on a lexical error."""
        while True:
            tok = self.next_token(diagnostics)
            yield tok
            if tok.type == EOF or diagnostics:
                return

    def read_identifier(self, diagnostics):
        start = self.cursor.position
        self.cursor.skip_while(self.is_alnum)
        tok = self._make(IDENT, start, self.cursor.position)
        if tok.literal in _UNSUPPORTED_KEYWORDS:
            diagnostics.push(f"'{tok.literal}' statements not implemented", ErrorKind.UNSUPPORTED)
        return tok

    def read_string(self, diagnostics):
        cursor = self.cursor
        start = cursor.position
        cursor.advance()  # opening quote
        escaped = False
        while True:
            ch = cursor.read_byte()
            if ch is None:
                tok = self._make(STRING, start, cursor.position)
                diagnostics.push(
                    f"unterminated string literal starting at line {tok.line}, column {tok.column}",
                    ErrorKind.LEXICAL,
                )
                return tok
            if escaped:
                escaped = False
            elif ch == ord("\\"):
                escaped = True
            elif ch == ord('"'):
                return self._make(STRING, start, cursor.position)

    def read_number(self):
        cursor = self.cursor
        start = cursor.position
        if cursor.peek_byte() == ord("-"):
            cursor.advance()
        cursor.skip_while(self.is_digit)

        token_type = INT
        # a trailing '.' without digits is not part of the literal
        if cursor.peek_byte() == ord(".") and self.is_digit(cursor.peek_byte(1)):
            token_type = FLOAT
            cursor.advance()
            cursor.skip_while(self.is_digit)
        return self._make(token_type, start, cursor.position)

    def read_operator(self):
        start = self.cursor.position
        self.cursor.skip_while(lambda ch: ch in _OPERATOR_CHARS)
        return self._make(OPERATOR, start, self.cursor.position)

    def skip_whitespace(self):
        self.cursor.skip_while(lambda ch: ch in _WHITESPACE)

    def is_letter(self, ch):
        return ch is not None and (ord("a") <= ch <= ord("z") or ord("A") <= ch <= ord("Z"))

    def is_digit(self, ch):
        return ch is not None and ord("0") <= ch <= ord("9")

    def is_alnum(self, ch):
        return self.is_letter(ch) or self.is_digit(ch)

    def _make(self, token_type, start, end):
        line, column = self._locate(start)
        literal = self.cursor.slice(start, end).decode("utf-8", errors="replace")
        return Token(token_type, start, end, literal, line, column)

    def _locate(self, offset):
        data = self.cursor.data
        if offset < self._scanned:
            # only reached if a caller rewinds the cursor
            return self.cursor.line_column(offset)
        for index in range(self._scanned, offset):
            if data[index] == 0x0A:
                self._line += 1
                self._line_start = index + 1
        self._scanned = offset
        return self._line, offset - self._line_start + 1
