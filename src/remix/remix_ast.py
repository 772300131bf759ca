"""Remix AST Node hierarchy - parser output with source location metadata.

The parser is an external collaborator: it must build a single tree of these nodes.
The evaluator never modifies a node once built.

Key differences from RemixValue:
- AST nodes have source location metadata (line, column, source_file)
- AST nodes describe computations; runtime values are their results
- Runtime values carry no location metadata
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Tuple


def escape_string(s: str) -> str:
    """Escape a string for display format."""
    result = []
    for char in s:
        if char == '"':
            result.append('\\"')

        elif char == '\\':
            result.append('\\\\')

        elif char == '\n':
            result.append('\\n')

        elif char == '\t':
            result.append('\\t')

        elif char == '\r':
            result.append('\\r')

        elif ord(char) < 32:  # Other control characters
            result.append(f'\\u{ord(char):04x}')

        else:
            result.append(char)

    return ''.join(result)


@dataclass(frozen=True)
class RemixASTNode(ABC):
    """
    Abstract base class for all Remix AST nodes.

    All AST nodes are immutable and carry source location metadata
    for error reporting and debugging.

    Source location fields are keyword-only so node fields can be given positionally.
    """
    # Source location metadata (keyword-only)
    line: int | None = field(default=None, kw_only=True)
    column: int | None = field(default=None, kw_only=True)
    source_file: str = field(default="", kw_only=True)

    @abstractmethod
    def node_name(self) -> str:
        """Return the node kind name for error messages."""

    @abstractmethod
    def describe(self) -> str:
        """Describe the node in a compact, readable form."""


@dataclass(frozen=True)
class RemixASTString(RemixASTNode):
    """String literal."""
    value: str

    def node_name(self) -> str:
        return "string literal"

    def describe(self) -> str:
        return f'"{escape_string(self.value)}"'


@dataclass(frozen=True)
class RemixASTNumber(RemixASTNode):
    """Number literal. All numbers are floating point."""
    value: float

    def node_name(self) -> str:
        return "number literal"

    def describe(self) -> str:
        if float(self.value).is_integer():
            return str(int(self.value))

        return str(self.value)


@dataclass(frozen=True)
class RemixASTBoolean(RemixASTNode):
    """Boolean literal."""
    value: bool

    def node_name(self) -> str:
        return "boolean literal"

    def describe(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class RemixASTIdentifier(RemixASTNode):
    """
    A name to resolve.

    Contextual identifiers resolve against the dynamically scoped namespace,
    all others against the lexical one.
    """
    name: str
    contextual: bool = False

    def node_name(self) -> str:
        return "contextual identifier" if self.contextual else "identifier"

    def describe(self) -> str:
        return f"@{self.name}" if self.contextual else self.name


@dataclass(frozen=True)
class RemixASTTuple(RemixASTNode):
    """Tuple expression."""
    elements: Tuple[RemixASTNode, ...] = ()

    def node_name(self) -> str:
        return "tuple"

    def describe(self) -> str:
        return f"({', '.join(e.describe() for e in self.elements)})"


@dataclass(frozen=True)
class RemixASTList(RemixASTNode):
    """List expression."""
    elements: Tuple[RemixASTNode, ...] = ()

    def node_name(self) -> str:
        return "list"

    def describe(self) -> str:
        return f"[{', '.join(e.describe() for e in self.elements)}]"


@dataclass(frozen=True)
class RemixASTBinding(RemixASTNode):
    """One `identifier = value` pair, used by bind expressions and struct fields."""
    identifier: RemixASTIdentifier
    value: RemixASTNode

    def node_name(self) -> str:
        return "binding"

    def describe(self) -> str:
        return f"{self.identifier.describe()} = {self.value.describe()}"


@dataclass(frozen=True)
class RemixASTStruct(RemixASTNode):
    """Struct expression. Field names must be unique."""
    fields: Tuple[RemixASTBinding, ...] = ()

    def node_name(self) -> str:
        return "struct"

    def describe(self) -> str:
        return f"{{{', '.join(f.describe() for f in self.fields)}}}"


@dataclass(frozen=True)
class RemixASTConditional(RemixASTNode):
    """Conditional expression. Only the chosen branch is evaluated."""
    condition: RemixASTNode
    pass_branch: RemixASTNode
    fail_branch: RemixASTNode

    def node_name(self) -> str:
        return "conditional"

    def describe(self) -> str:
        return (
            f"if {self.condition.describe()} then {self.pass_branch.describe()} "
            f"else {self.fail_branch.describe()}"
        )


@dataclass(frozen=True)
class RemixASTLambda(RemixASTNode):
    """Lambda expression."""
    parameters: Tuple[RemixASTIdentifier, ...]
    body: RemixASTNode

    def node_name(self) -> str:
        return "lambda"

    def describe(self) -> str:
        params = ", ".join(p.describe() for p in self.parameters)
        return f"lambda({params}) {{ {self.body.describe()} }}"


@dataclass(frozen=True)
class RemixASTCall(RemixASTNode):
    """Call expression. The callee is any expression that evaluates to a function."""
    callee: RemixASTNode
    arguments: Tuple[RemixASTNode, ...] = ()

    def node_name(self) -> str:
        return "call"

    def describe(self) -> str:
        callee = self.callee.describe()
        if isinstance(self.callee, RemixASTLambda):
            callee = f"({callee})"

        return f"{callee}({', '.join(a.describe() for a in self.arguments)})"


@dataclass(frozen=True)
class RemixASTBind(RemixASTNode):
    """Bind expression: lazy, mutually visible bindings followed by a body."""
    bindings: Tuple[RemixASTBinding, ...]
    body: RemixASTNode

    def node_name(self) -> str:
        return "bind"

    def describe(self) -> str:
        return f"bind [{', '.join(b.describe() for b in self.bindings)}] in {self.body.describe()}"


@dataclass(frozen=True)
class RemixASTSandbox(RemixASTNode):
    """Sandbox expression: evaluates its body without any contextual bindings."""
    body: RemixASTNode

    def node_name(self) -> str:
        return "sandbox"

    def describe(self) -> str:
        return f"sandbox({self.body.describe()})"
