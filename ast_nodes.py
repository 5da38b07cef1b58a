class ASTNode:
    # Optional source line (1-based). Parser may set this.
    line: int | None = None


class Program(ASTNode):
    def __init__(self, body):
        self.body = body  # list of statements, in evaluation order


class BlockStatement(ASTNode):
    def __init__(self, body):
        self.body = body


class IfStatement(ASTNode):
    def __init__(self, condition, body, else_branch=None):
        self.condition = condition      # ComparisonOperation
        self.body = body                # BlockStatement
        self.else_branch = else_branch  # BlockStatement | IfStatement | None


class ReturnStatement(ASTNode):
    def __init__(self, value=None):
        self.value = value  # expr | None


class PrintStatement(ASTNode):
    def __init__(self, value):
        self.value = value


class VarDeclaration(ASTNode):
    def __init__(self, identifier, init):
        self.identifier = identifier  # Identifier
        self.init = init              # AssignmentOperation for the same identifier


class BinaryOperation(ASTNode):
    def __init__(self, left, right, operator):
        self.left = left
        self.right = right
        self.operator = operator


class MathOperation(BinaryOperation):
    pass


class ComparisonOperation(BinaryOperation):
    pass


class AssignmentOperation(ASTNode):
    def __init__(self, left, right):
        self.left = left    # Identifier
        self.right = right


class UnaryMinusExpression(ASTNode):
    def __init__(self, arg):
        self.arg = arg


class Identifier(ASTNode):
    def __init__(self, symbol):
        self.symbol = symbol


class NumericLiteral(ASTNode):
    def __init__(self, value):
        self.value = value  # float


class StringLiteral(ASTNode):
    def __init__(self, value):
        self.value = value


class NullLiteral(ASTNode):
    def __init__(self, value):
        self.value = value
