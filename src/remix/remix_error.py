"""Exception classes for Remix evaluation with detailed context."""

import difflib
from typing import List, Optional


class RemixError(Exception):
    """Base exception for Remix errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        source_file: str = ""
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            line: Line number (1-indexed) of the originating node
            column: Column number (1-indexed) of the originating node
            source_file: Name of the file the originating node came from
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.line = line
        self.column = column
        self.source_file = source_file

        super().__init__(self._format_detailed_message())

    def has_location(self) -> bool:
        """Check if this error knows where it came from."""
        return self.line is not None

    def set_location(self, line: int | None, column: int | None, source_file: str = "") -> None:
        """
        Attach a source location to an error that does not have one yet.

        Args:
            line: Line number (1-indexed)
            column: Column number (1-indexed)
            source_file: Source file name
        """
        if self.has_location() or line is None:
            return

        self.line = line
        self.column = column
        self.source_file = source_file
        self.args = (self._format_detailed_message(),)

    def _format_location(self) -> str:
        """Format the source location as file:line:column."""
        parts = []
        if self.source_file:
            parts.append(self.source_file)

        parts.append(f"line {self.line}")
        if self.column is not None:
            parts.append(f"column {self.column}")

        return ", ".join(parts)

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None:
            parts.append(f"Location: {self._format_location()}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)

    def __str__(self) -> str:
        return self._format_detailed_message()


class RemixInternalError(RemixError):
    """
    Defects in the language implementation or its host.

    These indicate a bug upstream of the program being run (parser, validation or
    host natives), not a bug in the program itself.
    """


class RemixEvalError(RemixError):
    """Program errors raised while evaluating. Many would be caught by a type system."""


class RemixTypeMismatchError(RemixEvalError):
    """A value of the wrong type was used, e.g. a non-boolean condition."""


class RemixArityError(RemixEvalError):
    """A lambda was called with the wrong number of arguments."""

    def __init__(self, expected_count: int, actual_count: int, name: str = "<lambda>", **kwargs):
        self.expected_count = expected_count
        self.actual_count = actual_count
        plural = "" if expected_count == 1 else "s"
        super().__init__(
            message=f"Function '{name}' expects {expected_count} argument{plural}, got {actual_count}",
            **kwargs
        )


class RemixNotCallableError(RemixEvalError):
    """Something that is not a lambda or native function was called."""


class RemixDuplicateFieldError(RemixEvalError):
    """A struct literal names the same field more than once."""


class RemixUnresolvedIdentifierError(RemixEvalError):
    """An identifier has no binding in the namespace it selects."""


class RemixCircularBindingError(RemixEvalError):
    """A lazy binding needed its own value in order to compute it."""


class RemixNativeError(RemixEvalError):
    """A host-supplied native function failed."""


class RemixDepthError(RemixEvalError):
    """Evaluation nested deeper than the configured limit."""


class RemixCompileError(RemixError):
    """The compile step rejected the program."""

    def __init__(self, messages: List, **kwargs):
        self.messages = list(messages)
        details = "\n".join(f"  {m.format()}" for m in self.messages)
        super().__init__(
            message=f"Program failed validation with {len(self.messages)} error(s)",
            context=f"\n{details}" if details else None,
            **kwargs
        )


class ErrorMessageBuilder:
    """Helper class for building detailed error messages."""

    @staticmethod
    def suggest_similar_names(target: str, available_names: List[str], max_suggestions: int = 3) -> List[str]:
        """Suggest similar names using fuzzy matching."""
        if not target or not available_names:
            return []

        return difflib.get_close_matches(target, available_names, n=max_suggestions, cutoff=0.6)

    @staticmethod
    def format_name_list(names: List[str], limit: int = 10) -> str:
        """Format a sorted, clipped list of names for an error context line."""
        ordered = sorted(names)
        shown = ", ".join(f"'{name}'" for name in ordered[:limit])
        if len(ordered) > limit:
            shown += ", ..."

        return shown
