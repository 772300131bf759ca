"""Shared fixtures and utilities for Remix tests."""

from typing import Any, List

import pytest

from remix import Remix, RemixNativeFunction, RemixTuple, RemixValue
from remix.remix_ast import RemixASTNode


@pytest.fixture
def remix():
    """Create a fresh Remix instance for each test."""
    return Remix()


@pytest.fixture
def remix_custom():
    """Factory for Remix instances with custom configuration."""
    def _create_remix(max_depth: int = 100) -> Remix:
        return Remix(max_depth=max_depth)
    return _create_remix


class CallRecorder:
    """Native function that records every call, for observing evaluation order and laziness."""

    def __init__(self, name: str, result: RemixValue | None = None):
        self.name = name
        self.calls: List[List[RemixValue]] = []
        self._result = result

    def handler(self, args: List[RemixValue], _invoke: Any) -> RemixValue:
        self.calls.append(list(args))
        if self._result is not None:
            return self._result

        return args[0] if args else RemixTuple(())

    def native(self) -> RemixNativeFunction:
        return RemixNativeFunction(self.name, self.handler)


class RemixTestHelpers:
    """Helper utilities for Remix testing."""

    @staticmethod
    def assert_evaluates_to(remix: Remix, program: RemixASTNode, expected: str, **prelude: Any) -> None:
        """Assert that a program evaluates to a value with the expected description."""
        result = remix.run_and_format(program, **prelude)
        assert result == expected, f"Expected '{expected}', got '{result}'"

    @staticmethod
    def assert_python_result(remix: Remix, program: RemixASTNode, expected: Any, **prelude: Any) -> None:
        """Assert that a program evaluates to the expected Python object."""
        result = remix.run(program, **prelude).to_python()
        assert result == expected, f"Expected Python result {expected!r}, got {result!r}"

    @staticmethod
    def failing_native(name: str = "explode") -> RemixNativeFunction:
        """Native that fails the test if it is ever called."""
        def handler(args: List[RemixValue], _invoke: Any) -> RemixValue:
            pytest.fail(f"native '{name}' should never be called")

        return RemixNativeFunction(name, handler)

    @staticmethod
    def recorder(name: str = "record", result: RemixValue | None = None) -> CallRecorder:
        """Create a call recorder."""
        return CallRecorder(name, result)


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return RemixTestHelpers
