"""Main Remix class: compiles and runs parsed programs against a host prelude."""

import logging
from dataclasses import dataclass
from typing import List, Mapping

from remix.remix_ast import RemixASTNode
from remix.remix_compiler import RemixCompiler, RemixCompilerMessage, RemixCompilerOptions, RemixCompilerOutput
from remix.remix_environment import RemixEnvironment
from remix.remix_error import RemixCompileError, RemixError
from remix.remix_evaluator import RemixEvaluator
from remix.remix_value import RemixValue


@dataclass
class RemixInterpreterOutput:
    """Result of interpreting a compiled program."""
    warnings: List[RemixCompilerMessage]
    value: RemixValue


class Remix:
    """
    Remix evaluation core.

    Takes an already-parsed program and the host's prelude, and evaluates the
    program to a single value. Evaluation is all-or-nothing: any failure raises a
    RemixError and no partial result is produced.
    """

    def __init__(self, max_depth: int = 150):
        """
        Initialize Remix.

        Args:
            max_depth: Maximum evaluation depth (syntax nesting plus call depth)
        """
        self.max_depth = max_depth
        self.compiler = RemixCompiler()
        self._logger = logging.getLogger("Remix")

    def compile(
        self,
        program: RemixASTNode,
        bindings: Mapping[str, RemixValue] | None = None,
        context: Mapping[str, RemixValue] | None = None
    ) -> RemixCompilerOutput:
        """
        Validate a program and pair it with its prelude.

        Args:
            program: Parsed program
            bindings: Host values for the lexical namespace
            context: Host values for the contextual namespace

        Returns:
            Compiler output; check its errors before interpreting it
        """
        options = RemixCompilerOptions(bindings=bindings or {}, context=context or {})
        compiled = self.compiler.compile(program, options)

        for warning in compiled.warnings:
            self._logger.debug("Remix compile warning: %s", warning.format())

        return compiled

    def interpret(self, compiled: RemixCompilerOutput) -> RemixInterpreterOutput:
        """
        Evaluate a compiled program.

        Args:
            compiled: Output of compile()

        Returns:
            The compiler warnings and the program's value

        Raises:
            RemixCompileError: If the compiled program has errors
            RemixError: If evaluation fails
        """
        if compiled.errors:
            raise RemixCompileError(compiled.errors)

        env = RemixEnvironment(dict(compiled.bindings), dict(compiled.context))
        evaluator = RemixEvaluator(max_depth=self.max_depth)
        value = evaluator.evaluate(compiled.program, env)

        return RemixInterpreterOutput(warnings=compiled.warnings, value=value)

    def run(
        self,
        program: RemixASTNode,
        bindings: Mapping[str, RemixValue] | None = None,
        context: Mapping[str, RemixValue] | None = None
    ) -> RemixValue:
        """
        Compile and evaluate a program.

        Args:
            program: Parsed program
            bindings: Host values for the lexical namespace
            context: Host values for the contextual namespace

        Returns:
            The value of the program

        Raises:
            RemixCompileError: If the program fails validation
            RemixError: If evaluation fails
        """
        self._logger.debug("Running Remix program: %s at line %s", program.node_name(), program.line)

        try:
            value = self.interpret(self.compile(program, bindings, context)).value

        except RemixError as e:
            self._logger.warning("Remix program failed: %s", e.message, exc_info=True)
            raise

        self._logger.debug("Remix program result: %s", value.describe())
        return value

    def run_and_format(
        self,
        program: RemixASTNode,
        bindings: Mapping[str, RemixValue] | None = None,
        context: Mapping[str, RemixValue] | None = None
    ) -> str:
        """
        Compile and evaluate a program, returning the described result.

        Args:
            program: Parsed program
            bindings: Host values for the lexical namespace
            context: Host values for the contextual namespace

        Returns:
            String representation of the result

        Raises:
            RemixCompileError: If the program fails validation
            RemixError: If evaluation fails
        """
        return self.run(program, bindings, context).describe()
