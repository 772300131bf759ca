"""Invoker for Remix: one call contract for user lambdas and host natives."""

from typing import Callable, List

from remix.remix_ast import RemixASTNode
from remix.remix_call_stack import RemixCallStack
from remix.remix_environment import RemixEnvironment
from remix.remix_error import (
    RemixArityError, RemixError, RemixInternalError, RemixNativeError, RemixNotCallableError
)
from remix.remix_value import (
    RemixInvokeCallback, RemixLambda, RemixNativeFunction, RemixThunk, RemixValue
)


# Evaluation entry point the invoker re-enters for lambda bodies: (node, env, depth) -> value
RemixEvaluateFunction = Callable[[RemixASTNode, RemixEnvironment, int], RemixValue]


class RemixInvoker:
    """
    Calls lambdas and native functions.

    Natives receive an explicit invoke callback so they can call back into lambdas
    (or other natives) to implement higher-order behaviour such as apply or map.
    """

    # Longest body description recorded in a call frame
    MAX_FRAME_EXPRESSION = 60

    def __init__(self, evaluate: RemixEvaluateFunction, call_stack: RemixCallStack | None = None):
        """
        Initialize invoker.

        Args:
            evaluate: Function used to evaluate lambda bodies
            call_stack: Call stack to record lambda frames on
        """
        self._evaluate = evaluate
        self.call_stack = call_stack if call_stack is not None else RemixCallStack()

    def invoke(
        self,
        callee: RemixValue,
        args: List[RemixValue],
        env: RemixEnvironment,
        depth: int = 0
    ) -> RemixValue:
        """
        Call a lambda or native function with already-evaluated arguments.

        Args:
            callee: Value to call
            args: Argument values
            env: Environment at the call site; only its contextual namespace is used
            depth: Current evaluation depth

        Returns:
            Result of the call

        Raises:
            RemixNotCallableError: If callee is not a lambda or native function
            RemixArityError: If a lambda receives the wrong number of arguments
            RemixNativeError: If a native function fails
        """
        if isinstance(callee, RemixNativeFunction):
            return self._call_native_function(callee, args, env, depth)

        if isinstance(callee, RemixLambda):
            return self._call_lambda(callee, args, env, depth)

        raise RemixNotCallableError(
            message=f"Attempted to call a non-callable value: {callee.type_name()}",
            received=f"Trying to call: {callee.describe()} ({callee.type_name()})",
            expected="A lambda or a native function",
            suggestion="Only lambdas and host-provided functions can be called"
        )

    def make_callback(self, env: RemixEnvironment, depth: int) -> RemixInvokeCallback:
        """
        Build the invoke capability handed to a native function.

        Calls made through the callback see the contextual bindings active where the
        native itself was called.

        Args:
            env: Environment at the native's call site
            depth: Evaluation depth of the native call

        Returns:
            Callback taking (callee, args) and returning the call's result
        """
        def invoke(callee: RemixValue, args: List[RemixValue]) -> RemixValue:
            return self.invoke(callee, list(args), env, depth + 1)

        return invoke

    def _call_native_function(
        self,
        func: RemixNativeFunction,
        args: List[RemixValue],
        env: RemixEnvironment,
        depth: int
    ) -> RemixValue:
        """
        Call a native function with its handler.

        Args:
            func: Native function to call
            args: Argument values
            env: Environment at the call site
            depth: Current evaluation depth

        Returns:
            Function result
        """
        callback = self.make_callback(env, depth)

        try:
            result = func.handler(list(args), callback)

        except RemixError:
            # Re-raise Remix errors as-is, including those from nested invocations
            raise

        except RecursionError:
            raise

        except Exception as e:
            arg_list = ", ".join(arg.describe() for arg in args) if args else "(no arguments)"
            raise RemixNativeError(
                message=f"Error in native function '{func.name}': {e}",
                received=f"Arguments: {arg_list}",
                context=f"{type(e).__name__} raised by the host implementation",
                suggestion="Check the arguments passed to the native function"
            ) from e

        if not isinstance(result, RemixValue) or isinstance(result, RemixThunk):
            raise RemixInternalError(
                message=f"Native function '{func.name}' returned an invalid value",
                received=f"Returned: {result!r} ({type(result).__name__})",
                expected="A Remix runtime value",
                suggestion="This is a bug in the host - native handlers must return RemixValue instances"
            )

        return result

    def _call_lambda(
        self,
        func: RemixLambda,
        args: List[RemixValue],
        env: RemixEnvironment,
        depth: int
    ) -> RemixValue:
        """
        Call a lambda with already-evaluated argument values.

        The body sees the lambda's captured lexical namespace plus its parameters, and
        the contextual namespace of the caller.

        Args:
            func: Lambda to call
            args: Argument values
            env: Environment at the call site
            depth: Current evaluation depth

        Returns:
            Function result
        """
        if len(args) != len(func.parameters):
            param_list = ", ".join(func.parameters) if func.parameters else "(no parameters)"
            arg_list = ", ".join(arg.describe() for arg in args) if args else "(no arguments)"
            count = len(func.parameters)

            raise RemixArityError(
                count,
                len(args),
                name=func.name,
                received=f"Arguments provided: {arg_list}",
                expected=f"Parameters expected: {param_list}",
                suggestion=f"Provide exactly {count} argument{'s' if count != 1 else ''}"
            )

        call_env = env.with_parameters(func.lexical, func.parameters, args)

        expression = func.body.describe()
        if len(expression) > self.MAX_FRAME_EXPRESSION:
            expression = expression[:self.MAX_FRAME_EXPRESSION - 3] + "..."

        self.call_stack.push(
            function_name=func.name,
            arguments=dict(zip(func.parameters, args)),
            expression=expression,
            line=func.body.line
        )

        try:
            return self._evaluate(func.body, call_env, depth + 1)

        finally:
            self.call_stack.pop()
