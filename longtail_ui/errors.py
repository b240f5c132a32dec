from __future__ import annotations


class StyleError(Exception):
    """Base class for styling failures surfaced at the point of misuse."""


class ValidationError(StyleError, ValueError):
    def __init__(self, modifier: str, parameter: str, message: str) -> None:
        super().__init__(f"{modifier}: `{parameter}` {message}")
        self.modifier = modifier
        self.parameter = parameter


class TypeMismatchError(StyleError, TypeError):
    def __init__(self, subject: str, expected: type, actual: type) -> None:
        super().__init__(f"{subject} targets `{expected.__name__}`, got `{actual.__name__}`")
        self.subject = subject
        self.expected = expected
        self.actual = actual


class MissingContextDefault(StyleError, LookupError):
    def __init__(self, key_name: str) -> None:
        super().__init__(f"context key `{key_name}` has no value in scope and no default")
        self.key_name = key_name
