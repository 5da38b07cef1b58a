import json
import sys
import traceback

from colorama import Fore, Style, just_fix_windows_console

from errors import RechError
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser
from values import display
from token_table import EOF


USAGE = """Usage:
  rech tokens <file.rech>
  rech parse <file.rech> [--json]
  rech run <file.rech> [--trace]
  rech repl [--trace]
  (optional) --debug to show Python traceback"""


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t in ("Program", "BlockStatement"):
        d["body"] = [ast_to_dict(s) for s in node.body]
    elif t == "IfStatement":
        d["condition"] = ast_to_dict(node.condition)
        d["body"] = ast_to_dict(node.body)
        d["else"] = ast_to_dict(node.else_branch)
    elif t in ("ReturnStatement", "PrintStatement"):
        d["value"] = ast_to_dict(node.value)
    elif t == "VarDeclaration":
        d["identifier"] = ast_to_dict(node.identifier)
        d["init"] = ast_to_dict(node.init)
    elif t in ("MathOperation", "ComparisonOperation"):
        d["operator"] = node.operator
        d["left"] = ast_to_dict(node.left)
        d["right"] = ast_to_dict(node.right)
    elif t == "AssignmentOperation":
        d["left"] = ast_to_dict(node.left)
        d["right"] = ast_to_dict(node.right)
    elif t == "UnaryMinusExpression":
        d["arg"] = ast_to_dict(node.arg)
    elif t == "Identifier":
        d["symbol"] = node.symbol
    elif t in ("NumericLiteral", "StringLiteral", "NullLiteral"):
        d["value"] = node.value
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def red(text):
    return f"{Fore.RED}{text}{Style.RESET_ALL}"


def report_error(e, debug):
    if debug:
        traceback.print_exc()
    elif isinstance(e, RechError):
        print(red(e.format()))
    else:
        print(red(str(e)))


def read_source(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def cmd_tokens(path, debug=False):
    try:
        tokens = Lexer(read_source(path)).generate_tokens()
    except Exception as e:
        report_error(e, debug)
        sys.exit(1)

    for tok in tokens:
        print(f"{tok.line}:{tok.column}  {tok!r}")


def cmd_parse(path, as_json=False, debug=False):
    try:
        tokens = Lexer(read_source(path)).generate_tokens()
        program = Parser(tokens).generate_ast()
    except Exception as e:
        report_error(e, debug)
        sys.exit(1)

    tree = ast_to_dict(program)
    if as_json:
        print(json.dumps(tree, ensure_ascii=False, indent=1))
    else:
        print(pretty(tree))


def cmd_run(path, trace=False, debug=False):
    try:
        tokens = Lexer(read_source(path)).generate_tokens()
        program = Parser(tokens).generate_ast()
        Interpreter(trace=trace).run_program(program)
    except Exception as e:
        report_error(e, debug)
        sys.exit(1)


def _count_braces_delta(line: str) -> int:
    # Minimal brace balancer for REPL multiline input.
    # Ignores braces inside "..." strings and after //.
    delta = 0
    in_string = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "/" and line.startswith("//", i) and not in_string:
            break
        if ch == '"':
            in_string = not in_string
        elif not in_string:
            if ch == "{":
                delta += 1
            elif ch == "}":
                delta -= 1
        i += 1
    return delta


def run_snippet(interpreter, source, store):
    # First, try parsing as a normal program (statements).
    tokens = Lexer(source).generate_tokens()
    try:
        program = Parser(tokens).generate_ast()
    except RechError as parse_err:
        # If that fails, try parsing as a single expression and auto-print it.
        try:
            parser = Parser(tokens)
            expr = parser.expr()
            if parser.peek().type != EOF:
                raise parse_err
        except RechError:
            raise parse_err
        print(display(interpreter.eval_expr(expr, store)))
        return

    completion = interpreter.execute(program, store)
    if completion.returning and completion.value is not None:
        print(f"Результат: {display(completion.value)}")


def cmd_repl(trace=False, debug=False):
    interpreter = Interpreter(trace=trace)
    store = {}  # one global store for the whole session

    print("Rech REPL. Type :q to quit.")

    buffer_lines = []
    brace_depth = 0
    while True:
        prompt = "rech> " if not buffer_lines else "...> "
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if not buffer_lines and stripped in (":q", ":quit", "выход"):
            break

        if not stripped and not buffer_lines:
            continue

        buffer_lines.append(line)
        brace_depth += _count_braces_delta(line)

        # Wait for block completion if braces aren't balanced yet.
        if brace_depth > 0:
            continue

        source = "\n".join(buffer_lines) + "\n"
        buffer_lines = []
        brace_depth = 0

        try:
            run_snippet(interpreter, source, store)
        except Exception as e:
            report_error(e, debug)


def main():
    just_fix_windows_console()

    args = sys.argv[1:]
    debug = "--debug" in args
    trace = "--trace" in args
    as_json = "--json" in args
    args = [a for a in args if a not in ("--debug", "--trace", "--json")]

    if not args:
        print(USAGE)
        sys.exit(1)

    cmd = args[0]

    if cmd == "repl":
        if len(args) != 1 or as_json:
            print(USAGE)
            sys.exit(1)
        cmd_repl(trace=trace, debug=debug)
        return

    if len(args) != 2:
        print(USAGE)
        sys.exit(1)

    path = args[1]

    if cmd == "tokens":
        if trace or as_json:
            print("tokens does not accept --trace or --json.")
            sys.exit(1)
        cmd_tokens(path, debug=debug)
    elif cmd == "parse":
        if trace:
            print("parse does not accept --trace.")
            sys.exit(1)
        cmd_parse(path, as_json=as_json, debug=debug)
    elif cmd == "run":
        if as_json:
            print("run does not accept --json.")
            sys.exit(1)
        cmd_run(path, trace=trace, debug=debug)
    else:
        print(f"Unknown command: {cmd}")
        sys.exit(1)


if __name__ == "__main__":
    main()
