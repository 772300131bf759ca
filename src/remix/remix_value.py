"""Remix Value hierarchy - runtime value types for the language.

Runtime values are what evaluation produces. They do NOT carry source location
metadata - that's only in RemixASTNode.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from remix.remix_ast import RemixASTNode, escape_string
from remix.remix_error import RemixCircularBindingError


class RemixValue(ABC):
    """
    Abstract base class for all Remix values.

    All Remix values are immutable apart from the one-time memoization inside RemixThunk.
    """

    @abstractmethod
    def to_python(self) -> Any:
        """Convert to Python value for host code."""

    @abstractmethod
    def type_name(self) -> str:
        """Return Remix type name for error messages."""

    @abstractmethod
    def describe(self) -> str:
        """Describe the value."""


@dataclass(frozen=True)
class RemixString(RemixValue):
    """Represents string values."""
    value: str

    def to_python(self) -> str:
        return self.value

    def type_name(self) -> str:
        return "string"

    def describe(self) -> str:
        return f'"{escape_string(self.value)}"'


@dataclass(frozen=True)
class RemixNumber(RemixValue):
    """Represents numbers. There is a single floating-point representation."""
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'value', float(self.value))

    def to_python(self) -> float:
        return self.value

    def type_name(self) -> str:
        return "number"

    def describe(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))

        return str(self.value)


@dataclass(frozen=True)
class RemixBoolean(RemixValue):
    """Represents boolean values."""
    value: bool

    def to_python(self) -> bool:
        return self.value

    def type_name(self) -> str:
        return "boolean"

    def describe(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class RemixTuple(RemixValue):
    """Represents fixed-size tuples of values."""
    elements: Tuple[RemixValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'elements', tuple(self.elements))

    def to_python(self) -> Tuple[Any, ...]:
        return tuple(elem.to_python() for elem in self.elements)

    def type_name(self) -> str:
        return "tuple"

    def describe(self) -> str:
        return f"({', '.join(elem.describe() for elem in self.elements)})"


@dataclass(frozen=True)
class RemixList(RemixValue):
    """Represents lists of values."""
    elements: Tuple[RemixValue, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, 'elements', tuple(self.elements))

    def to_python(self) -> List[Any]:
        return [elem.to_python() for elem in self.elements]

    def type_name(self) -> str:
        return "list"

    def describe(self) -> str:
        return f"[{', '.join(elem.describe() for elem in self.elements)}]"


@dataclass(frozen=True)
class RemixStruct(RemixValue):
    """
    Represents structs: named fields with no meaningful ordering.

    Two structs are equal when they have the same names bound to equal values.
    """
    fields: Dict[str, RemixValue] = field(default_factory=dict)

    __hash__ = None  # type: ignore[assignment]

    def to_python(self) -> Dict[str, Any]:
        return {name: value.to_python() for name, value in self.fields.items()}

    def type_name(self) -> str:
        return "struct"

    def describe(self) -> str:
        fields = ", ".join(f"{name}: {value.describe()}" for name, value in self.fields.items())
        return f"{{{fields}}}"


@dataclass(frozen=True, eq=False)
class RemixLambda(RemixValue):
    """
    Represents a user-defined function (closure).

    The lexical namespace is a snapshot taken when the lambda expression was evaluated.
    Contextual bindings are not captured; they come from the call site.
    Lambdas compare by identity only.
    """
    parameters: Tuple[str, ...]
    body: RemixASTNode
    lexical: Dict[str, RemixValue] = field(repr=False)
    name: str = "<lambda>"

    def to_python(self) -> 'RemixLambda':
        """Functions return themselves as Python values."""
        return self

    def type_name(self) -> str:
        return "lambda"

    def describe(self) -> str:
        return f"<lambda ({', '.join(self.parameters)})>"


# The re-entry capability handed to native handlers: invoke(callee, args) -> value
RemixInvokeCallback = Callable[[RemixValue, List[RemixValue]], RemixValue]

# Native handler contract: handler(args, invoke) -> value
RemixNativeHandler = Callable[[List[RemixValue], RemixInvokeCallback], RemixValue]


class RemixNativeFunction(RemixValue):
    """
    Represents a host-supplied function that programs cannot define themselves.

    Natives compare by identity only.
    """

    def __init__(self, name: str, handler: RemixNativeHandler):
        """
        Initialize a native function.

        Args:
            name: Function name for display and error messages
            handler: Python callable taking the argument values and an invoke callback
        """
        self.name = name
        self.handler = handler

    def to_python(self) -> 'RemixNativeFunction':
        return self

    def type_name(self) -> str:
        return "native-function"

    def describe(self) -> str:
        return f"<native {self.name}>"

    def __repr__(self) -> str:
        return f"RemixNativeFunction({self.name!r})"


class RemixThunk(RemixValue):
    """
    Lazy cell for one binding of a bind expression.

    Pairs an expression with the environment it was bound in and evaluates it on the
    first force. The result is cached, so the expression runs at most once however
    often the name is resolved. Thunks never escape environment lookup.
    """

    def __init__(
        self,
        name: str,
        expression: RemixASTNode,
        environment: Any,  # RemixEnvironment, avoiding circular import
        evaluate: Callable[[RemixASTNode, Any, int], RemixValue]
    ):
        self._name = name
        self._expression = expression
        self._environment = environment
        self._evaluate = evaluate
        self._forcing = False
        self._value: RemixValue | None = None

    @property
    def name(self) -> str:
        """Name of the binding this cell backs."""
        return self._name

    def is_forced(self) -> bool:
        """Check if the cell already holds its value."""
        return self._value is not None

    def force(self, depth: int = 0) -> RemixValue:
        """
        Return the bound value, evaluating the expression on first use.

        Args:
            depth: Evaluation depth of the reference that forced the cell

        Returns:
            The memoized value

        Raises:
            RemixCircularBindingError: If the expression needs its own value to compute it
        """
        if self._value is not None:
            return self._value

        if self._forcing:
            raise RemixCircularBindingError(
                message=f"Binding '{self._name}' depends on its own value",
                received=f"Binding: {self._name} = {self._expression.describe()}",
                suggestion="Wrap the self-reference in a lambda, or bind it to something that does not need itself",
                example="bind [loop = lambda(n) { loop(n) }] in ...",
                line=self._expression.line,
                column=self._expression.column,
                source_file=self._expression.source_file
            )

        self._forcing = True
        try:
            value = self._evaluate(self._expression, self._environment, depth)

        finally:
            self._forcing = False

        self._value = value

        # Drop the references so the defining scope can be collected.
        self._environment = None
        return value

    def to_python(self) -> Any:
        return self.force().to_python()

    def type_name(self) -> str:
        return f"thunk({self._name})"

    def describe(self) -> str:
        if self._value is not None:
            return self._value.describe()

        return f"<thunk {self._name}>"
