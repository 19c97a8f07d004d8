MARKER = "त्रुटिः"


class PaaniniError(Exception):
    kind = "Error"

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def location(self) -> str:
        if self.line is None:
            return ""
        if self.column is None:
            return f" at line {self.line}"
        return f" at line {self.line}, col {self.column}"

    def __str__(self) -> str:
        return f"{MARKER} {self.kind}: {self.message}{self.location()}"


# ---------- lexical ----------
class PaaniniLexicalError(PaaniniError):
    kind = "Lexical error"


class UnterminatedStringError(PaaniniLexicalError):
    kind = "Unterminated string"


class IndentationMismatchError(PaaniniLexicalError):
    kind = "Indentation mismatch"


class MalformedBlockError(PaaniniLexicalError):
    kind = "Malformed block"


# ---------- syntax ----------
class PaaniniSyntaxError(PaaniniError):
    kind = "Syntax error"


class AssignmentTargetError(PaaniniSyntaxError):
    kind = "Assignment target error"


class PrintSyntaxError(PaaniniSyntaxError):
    kind = "Print syntax error"


class ForSyntaxError(PaaniniSyntaxError):
    kind = "For syntax error"


class ConditionSyntaxError(PaaniniSyntaxError):
    kind = "Condition error"


class CallArityError(PaaniniSyntaxError):
    kind = "Call error"


# ---------- runtime ----------
class PaaniniRuntimeError(PaaniniError):
    kind = "Runtime error"


class OperatorTypeError(PaaniniRuntimeError):
    kind = "Type error"


class UnsupportedComparisonError(PaaniniRuntimeError):
    kind = "Condition error"


class LoopLimitError(PaaniniRuntimeError):
    kind = "Loop limit exceeded"


class NameResolutionError(PaaniniRuntimeError):
    kind = "Name error"


class SessionClosedError(PaaniniError):
    kind = "Session error"
