# src/stackcalc/calc_token.py
"""Token kinds and the Token record."""

IDENT = "IDENTIFIER"
STRING = "STRING"
INT = "INTEGER"
FLOAT = "FLOAT"
OPERATOR = "OPERATOR"
LPAREN = "PAREN_OPEN"
RPAREN = "PAREN_CLOSE"
SEMICOLON = "STATEMENT_END"
EOF = "EOF"
ILLEGAL = "UNKNOWN"


class Token:
    __slots__ = ("type", "start", "end", "literal", "line", "column")

    def __init__(self, type, start, end, literal="", line=0, column=0):
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)
        object.__setattr__(self, "literal", literal)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "column", column)

    def __setattr__(self, name, value):
        raise AttributeError("Token is immutable")

    @property
    def span(self):
        return (self.start, self.end)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.start, self.end, self.literal) == (other.type, other.start, other.end, other.literal)

    def __hash__(self):
        return hash((self.type, self.start, self.end, self.literal))

    def __repr__(self):
        return f"[{self.type} {self.literal!r} @{self.line}:{self.column}]"
