"""Standard host prelude for Remix programs."""

import logging
from typing import Callable, Dict, List

from remix.remix_error import RemixArityError, RemixTypeMismatchError
from remix.remix_value import (
    RemixInvokeCallback, RemixLambda, RemixList, RemixNativeFunction, RemixNumber, RemixTuple, RemixValue
)


class RemixPrelude:
    """
    Builds the native functions a host usually exposes to programs.

    Lexical natives: add, apply, map.
    Contextual natives: print.
    """

    def __init__(self, writer: Callable[[str], None] = print) -> None:
        """
        Initialize the prelude.

        Args:
            writer: Where the print native sends its output
        """
        self._writer = writer
        self._logger = logging.getLogger("RemixPrelude")

    def get_bindings(self) -> Dict[str, RemixValue]:
        """Get the natives injected into the lexical namespace."""
        return {
            'add': RemixNativeFunction('add', self._native_add),
            'apply': RemixNativeFunction('apply', self._native_apply),
            'map': RemixNativeFunction('map', self._native_map),
        }

    def get_context(self) -> Dict[str, RemixValue]:
        """Get the natives injected into the contextual namespace."""
        return {
            'print': RemixNativeFunction('print', self._native_print),
        }

    def _check_arity(self, name: str, args: List[RemixValue], count: int) -> None:
        if len(args) != count:
            raise RemixArityError(
                count,
                len(args),
                name=name,
                received=f"Arguments provided: {', '.join(a.describe() for a in args) or '(no arguments)'}"
            )

    def _ensure_callable(self, name: str, value: RemixValue) -> None:
        if not isinstance(value, (RemixLambda, RemixNativeFunction)):
            raise RemixTypeMismatchError(
                message=f"'{name}' first argument must be a function",
                received=f"First argument: {value.describe()} ({value.type_name()})",
                expected="A lambda or a native function"
            )

    def _native_add(self, args: List[RemixValue], _invoke: RemixInvokeCallback) -> RemixValue:
        """Add two numbers."""
        self._check_arity('add', args, 2)

        total = 0.0
        for i, arg in enumerate(args):
            if not isinstance(arg, RemixNumber):
                raise RemixTypeMismatchError(
                    message="Cannot add non-numbers",
                    received=f"Argument {i + 1}: {arg.describe()} ({arg.type_name()})",
                    expected="Number",
                    example="add(2, 3) → 5"
                )

            total += arg.value

        return RemixNumber(total)

    def _native_apply(self, args: List[RemixValue], invoke: RemixInvokeCallback) -> RemixValue:
        """Call a function with the remaining arguments."""
        if not args:
            raise RemixArityError(1, 0, name='apply', suggestion="apply needs a function to call")

        self._ensure_callable('apply', args[0])
        return invoke(args[0], args[1:])

    def _native_map(self, args: List[RemixValue], invoke: RemixInvokeCallback) -> RemixValue:
        """Call a function on every element of a list, collecting the results."""
        self._check_arity('map', args, 2)
        func, items = args
        self._ensure_callable('map', func)

        if not isinstance(items, RemixList):
            raise RemixTypeMismatchError(
                message="'map' second argument must be a list",
                received=f"Second argument: {items.describe()} ({items.type_name()})",
                expected="List of values",
                example="map(lambda(x) { add(x, 1) }, [1, 2, 3]) → [2, 3, 4]"
            )

        return RemixList(tuple(invoke(func, [item]) for item in items.elements))

    def _native_print(self, args: List[RemixValue], _invoke: RemixInvokeCallback) -> RemixValue:
        """Write each argument's description, returning the empty tuple."""
        text = " ".join(arg.describe() for arg in args)
        self._logger.debug("print: %s", text)
        self._writer(text)
        return RemixTuple(())
