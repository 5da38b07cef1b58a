class Token:
    def __init__(self, type, value, line=1, column=1):
        self.type = type
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self):
        if self.type == EOF:
            return f"{self.type}"
        return f"{self.type}({self.value})"


# keywords
LET = "LET"
IF = "IF"
ELSE = "ELSE"
PRINT = "PRINT"
RETURN = "RETURN"
NULL = "NULL"

# operators
MATH = "MATH"
COMPARISON = "COMPARISON"
ASSIGN = "ASSIGN"
BANG = "BANG"

# punctuation
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
SEMICOLON = "SEMICOLON"

COMMENT = "COMMENT"

# literals
NUMBER = "NUMBER"
STRING = "STRING"
IDENT = "IDENT"

EOF = "EOF"
EOF_VALUE = "\0"


# Fixed substrings the lexer recognises before trying literals.
TOKEN_TABLE = {
    "пусть": LET,
    "если": IF,
    "иначе": ELSE,
    "напечатать": PRINT,
    "вернуть": RETURN,
    "ничто": NULL,

    "+": MATH,
    "-": MATH,
    "*": MATH,
    "/": MATH,
    "%": MATH,

    "==": COMPARISON,
    "===": COMPARISON,
    "!=": COMPARISON,
    "!==": COMPARISON,
    "<": COMPARISON,
    ">": COMPARISON,
    "<=": COMPARISON,
    ">=": COMPARISON,

    "=": ASSIGN,
    "!": BANG,

    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
    ";": SEMICOLON,

    "//": COMMENT,
}

# longest first, so "!==" wins over "!=" over "!"
TABLE_KEYS = sorted(TOKEN_TABLE, key=len, reverse=True)
