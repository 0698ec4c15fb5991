# internals/postlexer.py
"""
Postlexer implementing Go's automatic semicolon insertion.

Go source rarely spells out ';'. The Go lexer turns a newline into a ';'
when the last token on the line is one of:

- an identifier or a basic literal (integer, string, rune)
- one of the keywords break, continue, fallthrough, return
- one of the tokens ++ -- ) ] }

The grammar therefore only knows _SEMI; this postlexer consumes every
NEWLINE token the lexer produces and emits _SEMI where Go would insert one.
A final _SEMI is emitted at end of input under the same rule.

Examples:
---------
    x := 1          → x := 1 ;
    f(a,            → f(a,        (newline after ',' is dropped)
      b)            →   b) ;
    }               → } ;
"""

from lark import Token


# Token types that end a statement when followed by a newline
_TRIGGER_TYPES = frozenset({"NAME", "INT", "STRING", "RAW_STRING", "CHAR"})

# Keyword and punctuation lexemes with the same effect
_TRIGGER_VALUES = frozenset({"break", "continue", "fallthrough", "return", "++", "--", ")", "]", "}"})


class SemicolonInserter:
    """Postlexer that turns significant newlines into _SEMI tokens."""

    NL_type = "NEWLINE"
    SEMI_type = "_SEMI"

    # Keep NEWLINE in the lexer even though no grammar rule references it
    always_accept = (NL_type,)

    def process(self, stream):
        last = None
        for token in stream:
            if token.type == self.NL_type:
                if last is not None and self._ends_statement(last):
                    last = Token.new_borrow_pos(self.SEMI_type, "\n", token)
                    yield last
                continue
            last = token
            yield token

        if last is not None and self._ends_statement(last):
            yield Token.new_borrow_pos(self.SEMI_type, "\n", last)

    @staticmethod
    def _ends_statement(token: Token) -> bool:
        return token.type in _TRIGGER_TYPES or token.value in _TRIGGER_VALUES
