"""Remix package: the evaluation core of a small embeddable expression language."""

# Main API
from remix.remix import Remix, RemixInterpreterOutput

# Exceptions (for error handling)
from remix.remix_error import (
    RemixError, RemixInternalError, RemixEvalError, RemixTypeMismatchError, RemixArityError,
    RemixNotCallableError, RemixDuplicateFieldError, RemixUnresolvedIdentifierError,
    RemixCircularBindingError, RemixNativeError, RemixDepthError, RemixCompileError
)

# AST node types
from remix.remix_ast import (
    RemixASTNode, RemixASTString, RemixASTNumber, RemixASTBoolean, RemixASTIdentifier,
    RemixASTTuple, RemixASTList, RemixASTStruct, RemixASTConditional, RemixASTLambda,
    RemixASTCall, RemixASTBind, RemixASTBinding, RemixASTSandbox
)

# Value types
from remix.remix_value import (
    RemixValue, RemixString, RemixNumber, RemixBoolean, RemixTuple, RemixList, RemixStruct,
    RemixLambda, RemixNativeFunction, RemixThunk
)

# Lower-level components (for advanced usage)
from remix.remix_environment import RemixEnvironment
from remix.remix_evaluator import RemixEvaluator
from remix.remix_invoker import RemixInvoker
from remix.remix_call_stack import RemixCallStack
from remix.remix_compiler import RemixCompiler, RemixCompilerMessage, RemixCompilerOptions, RemixCompilerOutput
from remix.remix_prelude import RemixPrelude


__all__ = [
    # Main API
    "Remix", "RemixInterpreterOutput",

    # Exceptions
    "RemixError", "RemixInternalError", "RemixEvalError", "RemixTypeMismatchError", "RemixArityError",
    "RemixNotCallableError", "RemixDuplicateFieldError", "RemixUnresolvedIdentifierError",
    "RemixCircularBindingError", "RemixNativeError", "RemixDepthError", "RemixCompileError",

    # AST node types
    "RemixASTNode", "RemixASTString", "RemixASTNumber", "RemixASTBoolean", "RemixASTIdentifier",
    "RemixASTTuple", "RemixASTList", "RemixASTStruct", "RemixASTConditional", "RemixASTLambda",
    "RemixASTCall", "RemixASTBind", "RemixASTBinding", "RemixASTSandbox",

    # Value types
    "RemixValue", "RemixString", "RemixNumber", "RemixBoolean", "RemixTuple", "RemixList", "RemixStruct",
    "RemixLambda", "RemixNativeFunction", "RemixThunk",

    # Lower-level components
    "RemixEnvironment", "RemixEvaluator", "RemixInvoker", "RemixCallStack",
    "RemixCompiler", "RemixCompilerMessage", "RemixCompilerOptions", "RemixCompilerOutput",
    "RemixPrelude",
]
