class RechError(Exception):
    pass


class RechSyntaxError(RechError):
    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def format(self, indent: str = "") -> str:
        text = f"{indent}Синтаксическая ошибка: {self.message}"
        if self.line is not None:
            text += f" (строка {self.line}, позиция {self.column})"
        return text

    def __str__(self) -> str:
        return self.format()


class RechEvalError(RechError):
    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line  # line of the statement being executed, if known

    def format(self, indent: str = "") -> str:
        lines = [f"{indent}Ошибка выполнения: {self.message}"]
        if self.line is not None:
            lines.append(f"{indent}  в строке {self.line}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()
