import math

from ast_nodes import (
    Program, BlockStatement, IfStatement, ReturnStatement, PrintStatement, VarDeclaration,
    MathOperation, ComparisonOperation, AssignmentOperation, UnaryMinusExpression,
    Identifier, NumericLiteral, StringLiteral, NullLiteral,
)
from errors import RechEvalError
import values
from values import Value, UNSET, NULL, display


class Completion:
    """Outcome of executing one statement.

    A returning completion stops every enclosing block and the program loop.
    """

    __slots__ = ("returning", "value")

    def __init__(self, returning=False, value=None):
        self.returning = returning
        self.value = value  # Value | None, only meaningful when returning

    def __repr__(self):
        if not self.returning:
            return "Completion(normal)"
        return f"Completion(return {self.value!r})"


NORMAL = Completion()


def divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def remainder(a: float, b: float) -> float:
    # truncated remainder, sign follows the dividend
    if b == 0 or math.isinf(a) or math.isnan(a) or math.isnan(b):
        return math.nan
    if math.isinf(b):
        return a
    return math.fmod(a, b)


MATH_OPERATORS = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": divide,
    "%": remainder,
}

# loose and strict spellings behave the same
COMPARISON_OPERATORS = {
    "==": lambda a, b: a == b,
    "===": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "!==": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "<=": lambda a, b: a <= b,
    ">=": lambda a, b: a >= b,
}


class Interpreter:
    def __init__(self, output=None, trace=False):
        self.output = output or print
        self.trace = trace

    def run_program(self, program):
        """Run `program` against a fresh variable store.

        Returns the value of the first top-level return, or None when the
        program ran to its end or returned without a value.
        """
        if not isinstance(program, Program):
            raise RechEvalError("Ожидался узел Program")

        self.output("Старт программы...")
        completion = self.execute(program, {})
        self.output("Программа завершена!")

        result = completion.value if completion.returning else None
        if result is not None:
            self.output(f"Результат: {display(result)}")
        return result

    def execute(self, program, store):
        # store is the global variable mapping; the REPL passes the same one every time
        return self.exec_body(program.body, store)

    # -------- statements --------
    def exec_body(self, statements, store):
        for stmt in statements:
            completion = self.exec_stmt(stmt, store)
            if completion.returning:
                return completion
        return NORMAL

    def exec_stmt(self, node, store):
        if self.trace:
            self.output(f"TRACE line={getattr(node, 'line', None)} {node.__class__.__name__}")
        try:
            return self._exec_stmt(node, store)
        except RechEvalError as e:
            # innermost statement wins
            if e.line is None:
                e.line = getattr(node, "line", None)
            raise

    def _exec_stmt(self, node, store):
        if isinstance(node, IfStatement):
            return self.exec_if(node, store)

        if isinstance(node, BlockStatement):
            return self.exec_body(node.body, store)

        if isinstance(node, VarDeclaration):
            name = node.identifier.symbol
            if name in store:
                raise RechEvalError(f"Повторное объявление переменной {name}")
            # visible (as unset) while its own initializer runs
            store[name] = UNSET
            self.eval_assignment(node.init, store)
            return NORMAL

        if isinstance(node, PrintStatement):
            value = self.eval_expr(node.value, store)
            self.output("вывод:", display(value))
            return NORMAL

        if isinstance(node, ReturnStatement):
            value = None
            if node.value is not None:
                value = self.eval_expr(node.value, store)
            # returning an unset variable counts as returning nothing
            if value is UNSET:
                value = None
            return Completion(returning=True, value=value)

        if isinstance(node, AssignmentOperation):
            self.eval_assignment(node, store)
            return NORMAL

        # expression statement; the value is discarded
        self.eval_expr(node, store)
        return NORMAL

    def exec_if(self, node, store):
        if self.eval_comparison(node.condition, store) is values.TRUE:
            return self.exec_body(node.body.body, store)
        if isinstance(node.else_branch, BlockStatement):
            return self.exec_body(node.else_branch.body, store)
        if isinstance(node.else_branch, IfStatement):
            return self.exec_if(node.else_branch, store)
        return NORMAL

    # -------- expressions --------
    def eval_expr(self, node, store) -> Value:
        if isinstance(node, Identifier):
            if node.symbol not in store:
                raise RechEvalError(f"Неизвестный идентификатор {node.symbol}")
            return store[node.symbol]

        if isinstance(node, NumericLiteral):
            return values.number(node.value)

        if isinstance(node, StringLiteral):
            return values.string(node.value)

        if isinstance(node, NullLiteral):
            return NULL

        if isinstance(node, MathOperation):
            return self.eval_math(node, store)

        if isinstance(node, UnaryMinusExpression):
            arg = self.eval_expr(node.arg, store)
            if arg.kind != values.NUMBER:
                raise RechEvalError("Невозможно выполнить математическое отрицание")
            return values.number(-arg.payload)

        if isinstance(node, ComparisonOperation):
            return self.eval_comparison(node, store)

        raise RechEvalError(f"Неизвестное значение: {node.__class__.__name__}")

    def eval_assignment(self, node, store):
        name = node.left.symbol
        if name not in store:
            raise RechEvalError(f"Неизвестный идентификатор {name}")
        store[name] = self.eval_expr(node.right, store)

    def eval_math(self, node, store) -> Value:
        left = self.eval_expr(node.left, store)
        right = self.eval_expr(node.right, store)
        if left.kind != values.NUMBER or right.kind != values.NUMBER:
            raise RechEvalError("Математические операции возможны только с числами")

        op = MATH_OPERATORS.get(node.operator)
        if op is None:
            raise RechEvalError(f"Неизвестный математический оператор: {node.operator}")
        return values.number(op(left.payload, right.payload))

    def eval_comparison(self, node, store) -> Value:
        left = self.eval_expr(node.left, store)
        right = self.eval_expr(node.right, store)
        if left.kind != values.NUMBER or right.kind != values.NUMBER:
            raise RechEvalError("Неправильное сравнение")

        op = COMPARISON_OPERATORS.get(node.operator)
        if op is None:
            raise RechEvalError(f"Неизвестный оператор сравнения: {node.operator}")
        return values.boolean(op(left.payload, right.payload))
