"""
Errors raised while building a query.

All of them are caller errors (bad template or bad arguments) and abort the
build before any SQL is returned.
"""


class QueryBuildError(ValueError):
    """Base class for template and argument errors."""


class UnsupportedValueType(QueryBuildError, TypeError):
    """A value has no SQL literal representation."""

    def __init__(
        self, value: object, context: str = "value", message: str | None = None
    ) -> None:
        self.value = value
        super().__init__(
            message
            or f"Unsupported {context} type: {type(value).__name__}. "
            "Expected None, int, float, bool or str."
        )


class ExpectedArray(QueryBuildError, TypeError):
    """The ``?a`` or ``?#`` placeholder received something it cannot iterate."""

    def __init__(
        self, value: object, specifier: str, message: str | None = None
    ) -> None:
        self.value = value
        self.specifier = specifier
        super().__init__(
            message
            or f"Placeholder ?{specifier} expected a list or mapping, "
            f"got {type(value).__name__}."
        )


class ArgumentCountMismatch(QueryBuildError):
    """Strict mode: placeholders and bound arguments do not line up."""

    def __init__(self, placeholders: int, arguments: int) -> None:
        self.placeholders = placeholders
        self.arguments = arguments
        super().__init__(
            f"Template has {placeholders} placeholder(s) but {arguments} "
            "argument(s) were bound."
        )
