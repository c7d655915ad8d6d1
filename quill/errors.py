from .position import Span


class QuillError(Exception):
    """Diagnostic produced by the Quill pipeline.

    Errors travel as values inside ``Err`` results; the pipeline itself
    never raises them. They subclass ``Exception`` so that a host can
    raise one through ``Err.unwrap()``.
    """
    name = 'Error'

    def __init__(self, span: Span, details: str):
        super().__init__(f"{self.name}: {details}")
        self.span = span
        self.details = details

    def as_string(self) -> str:
        pos = self.span.left
        return f"{pos.filename}:{pos.line + 1}:{pos.column + 1}: {self.details}"


class QuillSyntaxError(QuillError):
    name = 'SyntaxError'


class RedeclarationError(QuillError):
    name = 'RedeclarationError'


class UndeclaredAssignmentError(QuillError):
    name = 'UndeclaredAssignmentError'


class NonFunctionCallError(QuillError):
    name = 'NonFunctionCallError'


class TypeMismatchError(QuillError):
    name = 'TypeMismatchError'


class DivideByZeroError(QuillError):
    name = 'DivideByZeroError'


class UnhandledNodeError(QuillError):
    """An AST node reached the interpreter without a matching case."""
    name = 'UnhandledNodeError'
