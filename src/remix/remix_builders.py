"""Helpers for building Remix AST nodes and native functions.

Parsers and hosts can use these instead of calling the node constructors directly.
Every builder accepts optional keyword-only location metadata.
"""

from typing import Iterable

from remix.remix_ast import (
    RemixASTNode, RemixASTString, RemixASTNumber, RemixASTBoolean, RemixASTIdentifier,
    RemixASTTuple, RemixASTList, RemixASTStruct, RemixASTConditional, RemixASTLambda,
    RemixASTCall, RemixASTBind, RemixASTBinding, RemixASTSandbox
)
from remix.remix_value import RemixNativeFunction, RemixNativeHandler


def string(
    value: str, *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTString:
    """Build a string literal."""
    return RemixASTString(value, line=line, column=column, source_file=source_file)


def number(
    value: float, *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTNumber:
    """Build a number literal."""
    return RemixASTNumber(float(value), line=line, column=column, source_file=source_file)


def boolean(
    value: bool, *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTBoolean:
    """Build a boolean literal."""
    return RemixASTBoolean(value, line=line, column=column, source_file=source_file)


def ident(
    name: str, *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTIdentifier:
    """Build a lexical identifier."""
    return RemixASTIdentifier(name, False, line=line, column=column, source_file=source_file)


def context(
    name: str, *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTIdentifier:
    """Build a contextual identifier."""
    return RemixASTIdentifier(name, True, line=line, column=column, source_file=source_file)


def tuple_of(
    elements: Iterable[RemixASTNode], *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTTuple:
    """Build a tuple expression."""
    return RemixASTTuple(tuple(elements), line=line, column=column, source_file=source_file)


def list_of(
    elements: Iterable[RemixASTNode], *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTList:
    """Build a list expression."""
    return RemixASTList(tuple(elements), line=line, column=column, source_file=source_file)


def struct(
    fields: Iterable[RemixASTBinding], *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTStruct:
    """Build a struct expression from field bindings."""
    return RemixASTStruct(tuple(fields), line=line, column=column, source_file=source_file)


def conditional(
    condition: RemixASTNode,
    pass_branch: RemixASTNode,
    fail_branch: RemixASTNode,
    *,
    line: int | None = None,
    column: int | None = None,
    source_file: str = ""
) -> RemixASTConditional:
    """Build a conditional expression."""
    return RemixASTConditional(condition, pass_branch, fail_branch, line=line, column=column, source_file=source_file)


def lambda_of(
    parameters: Iterable[RemixASTIdentifier],
    body: RemixASTNode,
    *,
    line: int | None = None,
    column: int | None = None,
    source_file: str = ""
) -> RemixASTLambda:
    """Build a lambda expression."""
    return RemixASTLambda(tuple(parameters), body, line=line, column=column, source_file=source_file)


def call(
    callee: RemixASTNode,
    args: Iterable[RemixASTNode] = (),
    *,
    line: int | None = None,
    column: int | None = None,
    source_file: str = ""
) -> RemixASTCall:
    """Build a call expression."""
    return RemixASTCall(callee, tuple(args), line=line, column=column, source_file=source_file)


def bind(
    bindings: Iterable[RemixASTBinding],
    body: RemixASTNode,
    *,
    line: int | None = None,
    column: int | None = None,
    source_file: str = ""
) -> RemixASTBind:
    """Build a bind expression."""
    return RemixASTBind(tuple(bindings), body, line=line, column=column, source_file=source_file)


def assign(
    identifier: RemixASTIdentifier,
    value: RemixASTNode,
    *,
    line: int | None = None,
    column: int | None = None,
    source_file: str = ""
) -> RemixASTBinding:
    """Build one binding, for a bind expression or a struct field."""
    return RemixASTBinding(identifier, value, line=line, column=column, source_file=source_file)


def sandbox(
    body: RemixASTNode, *, line: int | None = None, column: int | None = None, source_file: str = ""
) -> RemixASTSandbox:
    """Build a sandbox expression."""
    return RemixASTSandbox(body, line=line, column=column, source_file=source_file)


def native(handler: RemixNativeHandler, name: str | None = None) -> RemixNativeFunction:
    """
    Wrap a Python callable as a native function value.

    Args:
        handler: Callable taking (args, invoke) and returning a RemixValue
        name: Display name; defaults to the handler's __name__
    """
    return RemixNativeFunction(name or getattr(handler, '__name__', '<native>'), handler)
