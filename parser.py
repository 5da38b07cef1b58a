import re

from ast_nodes import (
    Program, BlockStatement, IfStatement, ReturnStatement, PrintStatement, VarDeclaration,
    MathOperation, ComparisonOperation, AssignmentOperation, UnaryMinusExpression,
    Identifier, NumericLiteral, StringLiteral, NullLiteral,
)
from errors import RechSyntaxError
from token_table import (
    LET, IF, ELSE, PRINT, RETURN, NULL,
    MATH, COMPARISON, ASSIGN,
    LPAREN, RPAREN, LBRACE, RBRACE, SEMICOLON,
    NUMBER, STRING, IDENT, EOF,
)


COMPARISON_OPERATORS = ("==", "===", "<", ">", "<=", ">=", "!=", "!==")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")

_NUMERIC_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_numeric(text):
    # Longest valid prefix wins: "1.2.3" -> 1.2, "5." -> 5.0, "." -> nan
    m = _NUMERIC_PREFIX.match(text)
    if not m:
        return float("nan")
    return float(m.group(0))


class Parser:
    def __init__(self, tokens):
        if not tokens or tokens[-1].type != EOF:
            raise RechSyntaxError("Поток токенов должен заканчиваться EOF")
        self.tokens = tokens
        self.pos = 0

    # ---------- TOKEN ACCESS ----------
    def peek(self, ahead=0):
        idx = self.pos + ahead
        if idx >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[idx]

    def dequeue(self):
        tok = self.peek()
        self.pos += 1
        return tok

    # move to next token, but only if it matches what we expect
    def eat(self, token_type, message):
        if self.peek().type != token_type:
            self.error_here(message)
        return self.dequeue()

    def error_here(self, message):
        tok = self.peek()
        raise RechSyntaxError(message, tok.line, tok.column)

    def is_eof(self):
        return self.peek().type == EOF

    def expect_semicolon(self):
        self.eat(SEMICOLON, "Выражения должны заканчиваться символом ;")

    # ---------- TOP LEVEL ----------
    def generate_ast(self):
        body = []
        while not self.is_eof():
            body.append(self.statement())
        return Program(body)

    # ---------- STATEMENTS ----------
    def statement(self):
        tok_type = self.peek().type

        if tok_type == LBRACE:
            return self.block()
        if tok_type == IF:
            return self.if_statement()
        if tok_type == PRINT:
            return self.print_statement()
        if tok_type == RETURN:
            return self.return_statement()
        if tok_type == LET:
            return self.var_declaration()

        return self.expression_statement()

    def block(self):
        tok = self.dequeue()  # opening brace
        body = []
        while not self.is_eof() and self.peek().type != RBRACE:
            body.append(self.statement())
        if self.is_eof():
            self.error_here("Ожидалось }")
        self.dequeue()  # closing brace

        node = BlockStatement(body)
        node.line = tok.line
        return node

    def if_statement(self):
        # Grammar:
        #   IF ( comparison ) block (ELSE (if_statement | block))?
        # Else-if chains are nested IfStatement nodes in else_branch.
        tok = self.dequeue()

        if self.peek().type != LPAREN:
            self.error_here("Ожидалось (")
        condition = self.parenthesized()
        if self.peek().type != LBRACE:
            self.error_here("Ожидалось {")
        if not isinstance(condition, ComparisonOperation):
            raise RechSyntaxError("Неверное сравнение в блоке ЕСЛИ - ИНАЧЕ", tok.line, tok.column)

        body = self.block()

        else_branch = None
        if self.peek().type == ELSE:
            self.dequeue()
            if self.peek().type == IF:
                else_branch = self.if_statement()
            elif self.peek().type == LBRACE:
                else_branch = self.block()
            else:
                self.error_here("Синтаксическая ошибка в блоке ЕСЛИ - ИНАЧЕ")

        node = IfStatement(condition, body, else_branch)
        node.line = tok.line
        return node

    def print_statement(self):
        tok = self.dequeue()
        value = self.expr()
        self.expect_semicolon()

        node = PrintStatement(value)
        node.line = tok.line
        return node

    def return_statement(self):
        tok = self.dequeue()
        value = None
        if self.peek().type != SEMICOLON:
            value = self.expr()
        self.expect_semicolon()

        node = ReturnStatement(value)
        node.line = tok.line
        return node

    def var_declaration(self):
        tok = self.dequeue()
        if self.peek().type != IDENT or self.peek(1).type != ASSIGN:
            self.error_here("Неверное объявление переменной")
        assignment = self.assignment()
        self.expect_semicolon()

        node = VarDeclaration(assignment.left, assignment)
        node.line = tok.line
        return node

    def expression_statement(self):
        # assignment is only recognised as the first operation of a statement
        if self.peek(1).type == ASSIGN:
            node = self.assignment()
        else:
            node = self.expr()
        self.expect_semicolon()
        return node

    def assignment(self):
        if self.peek().type != IDENT:
            self.error_here("Неправильное присвоение")
        identifier = self.identifier()
        self.dequeue()  # the equals sign
        value = self.expr()

        node = AssignmentOperation(identifier, value)
        node.line = identifier.line
        return node

    # ---------- EXPRESSIONS ----------
    # expr -> comparison
    def expr(self):
        return self.comparison()

    # comparison -> additive ((==|===|!=|!==|<|<=|>|>=) additive)*
    def comparison(self):
        return self.binary_operation(ComparisonOperation, COMPARISON, COMPARISON_OPERATORS, self.additive)

    # additive -> multiplicative ((+|-) multiplicative)*
    def additive(self):
        return self.binary_operation(MathOperation, MATH, ADDITIVE_OPERATORS, self.multiplicative)

    # multiplicative -> primary ((*|/|%) primary)*
    def multiplicative(self):
        return self.binary_operation(MathOperation, MATH, MULTIPLICATIVE_OPERATORS, self.primary)

    def binary_operation(self, node_class, token_type, operators, lower):
        node = lower()
        while self.peek().type == token_type and self.peek().value in operators:
            op_token = self.dequeue()
            right = lower()
            node = node_class(node, right, op_token.value)
            node.line = op_token.line
        return node

    # primary -> - primary | NUMBER | STRING | NULL | IDENT | ( expr )
    def primary(self):
        tok = self.peek()

        if tok.type == MATH and tok.value == "-":
            return self.unary_minus()
        if tok.type == NUMBER:
            self.dequeue()
            node = NumericLiteral(parse_numeric(tok.value))
            node.line = tok.line
            return node
        if tok.type == STRING:
            self.dequeue()
            node = StringLiteral(tok.value)
            node.line = tok.line
            return node
        if tok.type == NULL:
            self.dequeue()
            node = NullLiteral(tok.value)
            node.line = tok.line
            return node
        if tok.type == LPAREN:
            return self.parenthesized()
        if tok.type == IDENT:
            return self.identifier()

        shown = "конец файла" if tok.type == EOF else tok.value
        self.error_here(f"Неожиданный символ: {shown}")

    def unary_minus(self):
        tok = self.dequeue()
        node = UnaryMinusExpression(self.primary())
        node.line = tok.line
        return node

    def parenthesized(self):
        self.dequeue()  # opening paren
        node = self.expr()
        self.eat(RPAREN, "Ожидалось ).")
        return node

    def identifier(self):
        tok = self.dequeue()
        node = Identifier(tok.value)
        node.line = tok.line
        return node
