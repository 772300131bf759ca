"""Environment management for Remix lexical and contextual scoping."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

from remix.remix_ast import RemixASTNode
from remix.remix_error import ErrorMessageBuilder, RemixUnresolvedIdentifierError
from remix.remix_value import RemixThunk, RemixValue


@dataclass(frozen=True)
class RemixEnvironment:
    """
    Immutable pair of namespaces: lexical and contextual.

    Lexical bindings follow the static nesting of the program and are captured by
    lambdas. Contextual bindings thread through the call chain at evaluation time
    and are never captured. Every operation that adds bindings returns a new
    environment; the namespaces of an existing environment are never changed.
    """
    lexical: Dict[str, RemixValue] = field(default_factory=dict)
    contextual: Dict[str, RemixValue] = field(default_factory=dict)

    def _namespace(self, contextual: bool) -> Dict[str, RemixValue]:
        return self.contextual if contextual else self.lexical

    def lookup(self, name: str, contextual: bool = False, depth: int = 0) -> RemixValue:
        """
        Look up a name in one namespace, forcing it if it is a lazy binding.

        There is no fallback between namespaces.

        Args:
            name: Name to resolve
            contextual: True to resolve in the contextual namespace
            depth: Evaluation depth of the lookup, passed on to a lazy binding

        Returns:
            The bound value (never a thunk)

        Raises:
            RemixUnresolvedIdentifierError: If the name is not bound in that namespace
        """
        namespace = self._namespace(contextual)
        if name in namespace:
            value = namespace[name]
            if isinstance(value, RemixThunk):
                return value.force(depth)

            return value

        kind = "contextual" if contextual else "lexical"
        shown_name = f"@{name}" if contextual else name
        available = list(namespace.keys())
        similar = ErrorMessageBuilder.suggest_similar_names(name, available)

        if similar:
            suggestion = f"Did you mean: {', '.join(similar)}?"

        elif self.has_binding(name, not contextual):
            other = "lexical" if contextual else "contextual"
            suggestion = f"'{name}' is bound in the {other} namespace; namespaces never fall back to each other"

        else:
            suggestion = f"Check spelling or bind '{shown_name}' in an enclosing bind expression"

        raise RemixUnresolvedIdentifierError(
            message=f"Could not resolve {kind} identifier '{shown_name}'",
            context=(
                f"Available {kind} bindings: {ErrorMessageBuilder.format_name_list(available)}"
                if available else f"No {kind} bindings available in current scope"
            ),
            suggestion=suggestion
        )

    def has_binding(self, name: str, contextual: bool = False) -> bool:
        """
        Check if a name is bound in one namespace.

        Args:
            name: Name to check
            contextual: True to check the contextual namespace

        Returns:
            True if the name is bound, False otherwise
        """
        return name in self._namespace(contextual)

    def get_available_bindings(self, contextual: bool = False) -> List[str]:
        """Get all binding names in one namespace."""
        return list(self._namespace(contextual).keys())

    def extend(
        self,
        bindings: Sequence[Tuple[str, RemixASTNode, bool]],
        evaluate: Callable[[RemixASTNode, 'RemixEnvironment', int], RemixValue]
    ) -> 'RemixEnvironment':
        """
        Return new environment with one lazy binding per (name, expression, contextual) entry.

        The new environment is built before any binding is evaluated and every lazy cell
        closes over it, so sibling bindings can refer to each other in any order. A later
        binding of the same name in the same namespace replaces the earlier one.

        Args:
            bindings: Ordered (name, expression, contextual) triples
            evaluate: Callback that evaluates an expression in an environment, given the
                depth of the lookup that forced it

        Returns:
            New environment containing the lazy bindings
        """
        lexical = dict(self.lexical)
        contextual = dict(self.contextual)
        extended = RemixEnvironment(lexical, contextual)

        for name, expression, is_contextual in bindings:
            namespace = contextual if is_contextual else lexical
            namespace[name] = RemixThunk(name, expression, extended, evaluate)

        return extended

    def with_parameters(
        self,
        lexical: Dict[str, RemixValue],
        parameters: Sequence[str],
        arguments: Sequence[RemixValue]
    ) -> 'RemixEnvironment':
        """
        Build the environment a lambda body runs in.

        Args:
            lexical: The lambda's captured lexical namespace
            parameters: Parameter names
            arguments: Already-evaluated argument values, one per parameter

        Returns:
            New environment with the captured lexical namespace plus eager parameter
            bindings, and this environment's contextual namespace
        """
        call_lexical = dict(lexical)
        call_lexical.update(zip(parameters, arguments))
        return RemixEnvironment(call_lexical, self.contextual)

    def clear_contextual(self) -> 'RemixEnvironment':
        """Return an environment with the same lexical namespace and no contextual bindings."""
        return RemixEnvironment(self.lexical, {})

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"RemixEnvironment(lexical: {list(self.lexical.keys())}, "
            f"contextual: {list(self.contextual.keys())})"
        )
