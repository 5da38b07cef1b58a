from errors import RechSyntaxError
from token_table import (
    Token, TOKEN_TABLE, TABLE_KEYS,
    COMMENT, NUMBER, STRING, IDENT, EOF, EOF_VALUE,
)


WHITESPACE = " \n\t\r\f\v"
NUMERIC_CHARS = "0123456789."
IDENT_EXTRA_CHARS = "0123456789_$"


def is_identifier_char(ch):
    # any unicode letter, ascii digit, underscore or dollar sign
    return ch.isalpha() or ch in IDENT_EXTRA_CHARS


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def advance_by(self, n):
        for _ in range(n):
            self.advance()

    def skip_comment(self):
        # the newline itself is consumed too
        while self.current_char is not None:
            ch = self.current_char
            self.advance()
            if ch == "\n":
                break

    def match_table(self):
        for key in TABLE_KEYS:
            if self.text.startswith(key, self.pos):
                return key
        return None

    def read_number(self):
        # no validation: "1.2.3" is accepted here and truncated by the parser
        start_line, start_col = self.line, self.column
        result = ""
        while self.current_char is not None and self.current_char in NUMERIC_CHARS:
            result += self.current_char
            self.advance()
        return Token(NUMBER, result, line=start_line, column=start_col)

    def read_string(self):
        start_line, start_col = self.line, self.column
        self.advance()  # skip opening quote
        result = ""

        while self.current_char != '"':
            if self.current_char is None or self.current_char == "\n":
                raise RechSyntaxError('Ожидалось "', start_line, start_col)
            result += self.current_char
            self.advance()

        self.advance()  # skip closing quote
        return Token(STRING, result, line=start_line, column=start_col)

    def read_identifier(self):
        start_line, start_col = self.line, self.column
        result = ""
        while self.current_char is not None and is_identifier_char(self.current_char):
            result += self.current_char
            self.advance()
        return Token(IDENT, result, line=start_line, column=start_col)

    def get_next_token(self):
        while self.current_char is not None:

            if self.current_char in WHITESPACE:
                self.advance()
                continue

            # operators, punctuation, keywords and the comment marker
            key = self.match_table()
            if key is not None:
                if TOKEN_TABLE[key] == COMMENT:
                    self.skip_comment()
                    continue
                start_line, start_col = self.line, self.column
                self.advance_by(len(key))
                return Token(TOKEN_TABLE[key], key, line=start_line, column=start_col)

            if self.current_char in NUMERIC_CHARS:
                return self.read_number()

            if self.current_char == '"':
                return self.read_string()

            if is_identifier_char(self.current_char):
                return self.read_identifier()

            # unknown symbols are dropped
            self.advance()

        return Token(EOF, EOF_VALUE, line=self.line, column=self.column)

    def generate_tokens(self):
        tokens = []
        while True:
            tok = self.get_next_token()
            tokens.append(tok)
            if tok.type == EOF:
                return tokens
