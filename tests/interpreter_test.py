import math

import pytest

import values
from ast_nodes import (
    ASTNode, Program, MathOperation, ComparisonOperation, AssignmentOperation, Identifier, NumericLiteral,
)
from errors import RechEvalError
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser


class Recorder:
    def __init__(self):
        self.lines = []

    def __call__(self, *items):
        self.lines.append(" ".join(str(i) for i in items))

    @property
    def printed(self):
        return [line[len("вывод: "):] for line in self.lines if line.startswith("вывод: ")]


def parse(source):
    return Parser(Lexer(source).generate_tokens()).generate_ast()


def run(source, **kwargs):
    out = Recorder()
    result = Interpreter(output=out, **kwargs).run_program(parse(source))
    return result, out


def run_error(source):
    with pytest.raises(RechEvalError) as info:
        run(source)
    return info.value


def test_declare_and_return():
    result, out = run("пусть x = 1; вернуть x + 1;")
    assert result == values.number(2)
    assert out.lines[-1] == "Результат: 2"


def test_output_order():
    result, out = run("напечатать 1 + 2; напечатать \"привет\"; вернуть 7;")
    assert out.lines == [
        "Старт программы...",
        "вывод: 3",
        "вывод: привет",
        "Программа завершена!",
        "Результат: 7",
    ]


def test_no_result_line_without_return():
    result, out = run("напечатать 1;")
    assert result is None
    assert out.lines[-1] == "Программа завершена!"


def test_no_result_line_for_empty_return():
    result, out = run("вернуть; напечатать 1;")
    assert result is None
    assert out.printed == []
    assert out.lines == ["Старт программы...", "Программа завершена!"]


def test_returning_unset_value_prints_no_result_line():
    result, out = run("пусть x = x; вернуть x;")
    assert result is None
    assert out.lines == ["Старт программы...", "Программа завершена!"]


def test_zero_is_a_defined_result():
    result, out = run("вернуть 0;")
    assert result == values.number(0)
    assert out.lines[-1] == "Результат: 0"


def test_return_in_nested_if_halts_program():
    source = """
    напечатать 1;
    если (1 < 2) {
        если (2 < 3) {
            вернуть 5;
            напечатать 2;
        }
        напечатать 3;
    }
    напечатать 4;
    вернуть 6;
    """
    result, out = run(source)
    assert out.printed == ["1"]
    assert result == values.number(5)


def test_first_return_wins_inside_block():
    result, out = run("{ вернуть 1; } вернуть 2;")
    assert result == values.number(1)


def test_if_else_branches():
    source = """
    пусть x = 5;
    если (x < 3) { напечатать "мало"; }
    иначе если (x < 10) { напечатать "средне"; }
    иначе { напечатать "много"; }
    если (x > 100) { напечатать "никогда"; }
    """
    result, out = run(source)
    assert out.printed == ["средне"]


def test_else_block_runs_when_false():
    result, out = run("если (1 > 2) { напечатать 1; } иначе { напечатать 2; }")
    assert out.printed == ["2"]


def test_comparisons_produce_language_booleans():
    source = """
    напечатать 1 < 2;
    напечатать 2 <= 1;
    напечатать 2 == 2;
    напечатать 2 === 2;
    напечатать 2 != 2;
    напечатать 2 !== 3;
    напечатать 3 >= 3;
    напечатать 3 > 4;
    """
    result, out = run(source)
    assert out.printed == ["истина", "ложь", "истина", "истина", "ложь", "истина", "истина", "ложь"]


def test_arithmetic():
    source = """
    напечатать 2 + 3 * 4;
    напечатать (2 + 3) * 4;
    напечатать 10 - 4 - 3;
    напечатать 1 / 2;
    напечатать -3 + 1;
    напечатать 7 % 3;
    напечатать -7 % 3;
    """
    result, out = run(source)
    assert out.printed == ["14", "20", "3", "0.5", "-2", "1", "-1"]


def test_division_by_zero_follows_float_semantics():
    result, out = run("напечатать 1 / 0; напечатать -1 / 0; напечатать 0 / 0; напечатать 5 % 0;")
    assert out.printed == ["Infinity", "-Infinity", "NaN", "NaN"]


def test_assignment_overwrites_value():
    result, out = run("пусть x = 1; x = x + 41; напечатать x; x = \"текст\"; напечатать x;")
    assert out.printed == ["42", "текст"]


def test_declarations_in_blocks_are_global():
    result, out = run("{ пусть a = 1; } напечатать a;")
    assert out.printed == ["1"]


def test_duplicate_declaration_fails():
    err = run_error("пусть x = 1; пусть x = 2;")
    assert "x" in err.message


def test_duplicate_declaration_in_block_fails():
    run_error("пусть x = 1; { пусть x = 2; }")


def test_undefined_identifier_read_fails():
    err = run_error("напечатать y;")
    assert err.message == "Неизвестный идентификатор y"


def test_undefined_identifier_assignment_fails():
    err = run_error("y = 1;")
    assert err.message == "Неизвестный идентификатор y"


def test_self_reference_in_initializer_reads_unset():
    result, out = run("пусть x = x; напечатать x;")
    assert out.printed == ["неопределено"]


def test_self_reference_in_arithmetic_fails():
    run_error("пусть x = x + 1;")


def test_math_requires_numbers():
    err = run_error('напечатать 1 + "a";')
    assert err.message == "Математические операции возможны только с числами"
    run_error('напечатать "a" * "b";')


def test_unary_minus_requires_number():
    err = run_error('напечатать -"a";')
    assert err.message == "Невозможно выполнить математическое отрицание"


def test_comparison_requires_numbers():
    err = run_error('если ("a" == "a") { }')
    assert err.message == "Неправильное сравнение"
    run_error("пусть b = 1 < 2; если (b == 1) { }")


def test_null_literal():
    result, out = run("напечатать ничто; пусть n = ничто; вернуть n;")
    assert out.printed == ["ничто"]
    assert result is values.NULL
    run_error("напечатать ничто + 1;")


def test_unknown_node_kind_fails():
    class Bogus(ASTNode):
        pass

    with pytest.raises(RechEvalError) as info:
        Interpreter(output=Recorder()).run_program(Program([Bogus()]))
    assert "Bogus" in info.value.message


def test_assignment_is_only_executed_as_a_statement():
    interp = Interpreter(output=Recorder())
    store = {"x": values.number(1)}
    completion = interp.execute(parse("x = 5;"), store)
    assert not completion.returning
    assert store["x"] == values.number(5)

    nested = AssignmentOperation(Identifier("x"), NumericLiteral(2.0))
    with pytest.raises(RechEvalError) as info:
        interp.eval_expr(nested, store)
    assert "AssignmentOperation" in info.value.message


def test_unknown_operator_fails():
    interp = Interpreter(output=Recorder())
    with pytest.raises(RechEvalError):
        interp.eval_expr(MathOperation(NumericLiteral(1.0), NumericLiteral(2.0), "^"), {})
    with pytest.raises(RechEvalError):
        interp.eval_expr(ComparisonOperation(NumericLiteral(1.0), NumericLiteral(2.0), "<>"), {})


def test_error_carries_statement_line():
    err = run_error("пусть x = 1;\n\nнапечатать x + z;")
    assert err.line == 3
    assert "в строке 3" in err.format()


def test_error_aborts_without_end_marker():
    out = Recorder()
    with pytest.raises(RechEvalError):
        Interpreter(output=out).run_program(parse("напечатать 1; напечатать q; напечатать 2;"))
    assert out.printed == ["1"]
    assert "Программа завершена!" not in out.lines


def test_interpreter_is_reusable_across_runs():
    out = Recorder()
    interp = Interpreter(output=out)
    program = parse("пусть x = 1; вернуть x;")
    assert interp.run_program(program) == values.number(1)
    assert interp.run_program(program) == values.number(1)


def test_execute_keeps_store_between_programs():
    interp = Interpreter(output=Recorder())
    store = {}
    interp.execute(parse("пусть x = 2;"), store)
    completion = interp.execute(parse("вернуть x * 3;"), store)
    assert completion.returning
    assert completion.value == values.number(6)


def test_trace_reports_each_statement():
    result, out = run("пусть x = 1;\nнапечатать x;", trace=True)
    traces = [line for line in out.lines if line.startswith("TRACE")]
    assert traces == ["TRACE line=1 VarDeclaration", "TRACE line=2 PrintStatement"]


def test_run_program_rejects_non_program():
    with pytest.raises(RechEvalError):
        Interpreter(output=Recorder()).run_program(NumericLiteral(1.0))


def test_number_display():
    assert values.display(values.number(2.0)) == "2"
    assert values.display(values.number(-0.0)) == "0"
    assert values.display(values.number(1.25)) == "1.25"
    assert values.display(values.number(math.inf)) == "Infinity"
    assert values.display(values.number(math.nan)) == "NaN"


def test_exponent_display_has_no_zero_padding():
    assert values.display(values.number(1e-7)) == "1e-7"
    assert values.display(values.number(-2.5e-10)) == "-2.5e-10"
    assert values.display(values.number(1e21)) == "1e+21"
