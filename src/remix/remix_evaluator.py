"""Evaluator for Remix Abstract Syntax Trees with detailed error messages."""

from typing import Dict

from remix.remix_ast import (
    RemixASTNode, RemixASTString, RemixASTNumber, RemixASTBoolean, RemixASTIdentifier,
    RemixASTTuple, RemixASTList, RemixASTStruct, RemixASTConditional, RemixASTLambda,
    RemixASTCall, RemixASTBind, RemixASTBinding, RemixASTSandbox
)
from remix.remix_call_stack import RemixCallStack
from remix.remix_environment import RemixEnvironment
from remix.remix_error import (
    RemixDepthError, RemixDuplicateFieldError, RemixError, RemixInternalError,
    RemixNotCallableError, RemixTypeMismatchError
)
from remix.remix_invoker import RemixInvoker
from remix.remix_value import (
    RemixValue, RemixString, RemixNumber, RemixBoolean, RemixTuple, RemixList, RemixStruct,
    RemixLambda, RemixNativeFunction
)


class RemixEvaluator:
    """
    Evaluates Remix Abstract Syntax Trees.

    Evaluation is structural recursion over the tree. The environment is passed
    explicitly through every step; the only evaluator state is the diagnostic call
    stack and the depth limit.
    """

    def __init__(self, max_depth: int = 150, invoker: RemixInvoker | None = None):
        """
        Initialize evaluator.

        Args:
            max_depth: Maximum nesting depth (syntax nesting plus call depth). The default
                is reached before the default Python recursion limit
            invoker: Invoker used for calls; one bound to this evaluator is created if omitted
        """
        self.max_depth = max_depth
        self.invoker = invoker if invoker is not None else RemixInvoker(self._evaluate_expression)
        self.call_stack: RemixCallStack = self.invoker.call_stack

    def evaluate(
        self,
        node: RemixASTNode,
        env: RemixEnvironment | None = None,
        depth: int = 0
    ) -> RemixValue:
        """
        Evaluate an AST.

        Args:
            node: Expression to evaluate
            env: Environment for name lookups; empty if omitted
            depth: Starting depth

        Returns:
            Evaluation result as RemixValue

        Raises:
            RemixError: If evaluation fails
        """
        if env is None:
            env = RemixEnvironment()

        try:
            return self._evaluate_expression(node, env, depth)

        except RemixError:
            raise

        except RecursionError as e:
            raise RemixDepthError(
                message="Evaluation exhausted the host stack",
                context=f"Call stack:\n{self.call_stack.format_stack_trace()}",
                suggestion="Check for unbounded recursion, or reduce nesting depth"
            ) from e

        except Exception as e:
            raise RemixInternalError(
                message=f"Unexpected error during evaluation: {e}",
                context=f"Call stack:\n{self.call_stack.format_stack_trace()}",
                suggestion="This is an internal error - please report this issue"
            ) from e

    def _evaluate_expression(self, node: RemixASTNode, env: RemixEnvironment, depth: int) -> RemixValue:
        """Evaluate one node, tagging any error with the node's source location."""
        if depth > self.max_depth:
            raise RemixDepthError(
                message=f"Expression too deeply nested (max depth: {self.max_depth})",
                context=f"Call stack:\n{self.call_stack.format_stack_trace()}",
                suggestion="Reduce nesting depth or increase max_depth limit"
            )

        try:
            return self._dispatch(node, env, depth)

        except RemixError as e:
            e.set_location(
                getattr(node, 'line', None), getattr(node, 'column', None), getattr(node, 'source_file', "")
            )
            raise

    def _dispatch(self, node: RemixASTNode, env: RemixEnvironment, depth: int) -> RemixValue:
        """Internal expression evaluation with type dispatch."""
        if isinstance(node, RemixASTString):
            return RemixString(node.value)

        if isinstance(node, RemixASTNumber):
            return RemixNumber(node.value)

        if isinstance(node, RemixASTBoolean):
            return RemixBoolean(node.value)

        if isinstance(node, RemixASTIdentifier):
            return env.lookup(node.name, node.contextual, depth)

        if isinstance(node, RemixASTTuple):
            return RemixTuple(tuple(self._evaluate_expression(e, env, depth + 1) for e in node.elements))

        if isinstance(node, RemixASTList):
            return RemixList(tuple(self._evaluate_expression(e, env, depth + 1) for e in node.elements))

        if isinstance(node, RemixASTStruct):
            return self._evaluate_struct(node, env, depth)

        if isinstance(node, RemixASTConditional):
            return self._evaluate_conditional(node, env, depth)

        if isinstance(node, RemixASTLambda):
            return self._make_lambda(node, env)

        if isinstance(node, RemixASTBind):
            return self._evaluate_bind(node, env, depth)

        if isinstance(node, RemixASTCall):
            return self._evaluate_call(node, env, depth)

        if isinstance(node, RemixASTSandbox):
            return self._evaluate_expression(node.body, env.clear_contextual(), depth + 1)

        if isinstance(node, RemixASTBinding):
            raise RemixInternalError(
                message="Binding evaluated outside of a bind or struct expression",
                received=f"Binding: {node.describe()}",
                suggestion="This is a parser bug - bindings only appear inside bind and struct expressions"
            )

        raise RemixInternalError(
            message=f"Unexpected node type: {type(node).__name__}",
            expected="A Remix AST node",
            suggestion="This is a parser bug - please report this issue"
        )

    def _evaluate_struct(self, node: RemixASTStruct, env: RemixEnvironment, depth: int) -> RemixStruct:
        """
        Evaluate a struct expression.

        Field names are checked before any field is evaluated; fields are then
        evaluated in declaration order.
        """
        names = [f.identifier.name for f in node.fields]
        if len(names) != len(set(names)):
            duplicates = sorted({name for name in names if names.count(name) > 1})
            raise RemixDuplicateFieldError(
                message="Struct field names must be unique",
                received=f"Duplicate fields: {', '.join(duplicates)}",
                expected="Each field name at most once",
                example="Correct: {a = 1, b = 2}\nIncorrect: {a = 1, a = 2}",
                suggestion="Use different names for each field"
            )

        fields: Dict[str, RemixValue] = {}
        for f in node.fields:
            fields[f.identifier.name] = self._evaluate_expression(f.value, env, depth + 1)

        return RemixStruct(fields)

    def _evaluate_conditional(self, node: RemixASTConditional, env: RemixEnvironment, depth: int) -> RemixValue:
        """Evaluate a conditional. Only the chosen branch is evaluated."""
        condition = self._evaluate_expression(node.condition, env, depth + 1)

        if not isinstance(condition, RemixBoolean):
            raise RemixTypeMismatchError(
                message=f"Expected a boolean value, got: {condition.type_name()}",
                received=f"Condition: {condition.describe()} ({condition.type_name()})",
                expected="Boolean value (true or false)",
                suggestion="Conditions must evaluate to a boolean"
            )

        branch = node.pass_branch if condition.value else node.fail_branch
        return self._evaluate_expression(branch, env, depth + 1)

    def _make_lambda(self, node: RemixASTLambda, env: RemixEnvironment, name: str | None = None) -> RemixLambda:
        """Create a closure over the current lexical namespace only."""
        return RemixLambda(
            parameters=tuple(p.name for p in node.parameters),
            body=node.body,
            lexical=env.lexical,
            name=name or "<lambda>"
        )

    def _evaluate_bind(self, node: RemixASTBind, env: RemixEnvironment, depth: int) -> RemixValue:
        """
        Evaluate a bind expression.

        Every binding becomes a lazy cell in one new environment, so bindings can refer
        to each other in any order. The body is evaluated in that environment.
        """
        # Lambdas bound by name carry the name into error messages and stack traces
        lambda_names = {
            id(b.value): b.identifier.name for b in node.bindings if isinstance(b.value, RemixASTLambda)
        }

        # A cell is evaluated one level below the reference that forces it, not below the bind
        def force(expression: RemixASTNode, bound_env: RemixEnvironment, forced_at: int) -> RemixValue:
            if isinstance(expression, RemixASTLambda):
                return self._make_lambda(expression, bound_env, lambda_names.get(id(expression)))

            return self._evaluate_expression(expression, bound_env, forced_at + 1)

        bound_env = env.extend(
            [(b.identifier.name, b.value, b.identifier.contextual) for b in node.bindings],
            force
        )

        return self._evaluate_expression(node.body, bound_env, depth + 1)

    def _evaluate_call(self, node: RemixASTCall, env: RemixEnvironment, depth: int) -> RemixValue:
        """Evaluate a call: callee first, then arguments left to right, then invoke."""
        callee = self._evaluate_expression(node.callee, env, depth + 1)

        if not isinstance(callee, (RemixLambda, RemixNativeFunction)):
            raise RemixNotCallableError(
                message=f"Attempted to call a non-callable value: {callee.type_name()}",
                received=f"Trying to call: {callee.describe()} ({callee.type_name()})",
                expected="A lambda or a native function",
                suggestion=f"'{node.callee.describe()}' is not a function - check what it is bound to"
            )

        args = [self._evaluate_expression(arg, env, depth + 1) for arg in node.arguments]
        return self.invoker.invoke(callee, args, env, depth + 1)
