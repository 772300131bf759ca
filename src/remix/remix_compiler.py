"""Remix compile step - validates a parsed program before it is run.

The compiler does not transform the tree. It walks it once, reporting problems
that the parser's grammar does not rule out, and packages the program with the
host prelude so it can be handed to the interpreter.

Only malformed trees are errors. Problems that the evaluator reports when (and
only if) the offending node is evaluated, such as duplicate struct fields or
calls of literals, are warnings here.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from remix.remix_ast import (
    RemixASTNode, RemixASTString, RemixASTNumber, RemixASTBoolean, RemixASTIdentifier,
    RemixASTTuple, RemixASTList, RemixASTStruct, RemixASTConditional, RemixASTLambda,
    RemixASTCall, RemixASTBind, RemixASTSandbox
)
from remix.remix_value import RemixValue


@dataclass(frozen=True)
class RemixCompilerMessage:
    """A single error or warning found while compiling."""
    message: str
    line: int | None = None
    column: int | None = None
    source_file: str = ""

    def format(self) -> str:
        """Format the message with its location, if known."""
        if self.line is None:
            return self.message

        location = f"{self.source_file}:" if self.source_file else ""
        location += f"{self.line}"
        if self.column is not None:
            location += f":{self.column}"

        return f"{location}: {self.message}"


@dataclass
class RemixCompilerOptions:
    """
    Host prelude for a program.

    Attributes:
        bindings: Values injected into the lexical namespace
        context: Values injected into the contextual namespace
    """
    bindings: Mapping[str, RemixValue] = field(default_factory=dict)
    context: Mapping[str, RemixValue] = field(default_factory=dict)


@dataclass
class RemixCompilerOutput:
    """A validated program, ready to interpret."""
    errors: List[RemixCompilerMessage]
    warnings: List[RemixCompilerMessage]
    program: RemixASTNode
    bindings: Dict[str, RemixValue]
    context: Dict[str, RemixValue]


class RemixCompiler:
    """Validates programs and pairs them with their prelude."""

    # Node kinds whose values can never be called
    _NEVER_CALLABLE = (RemixASTString, RemixASTNumber, RemixASTBoolean, RemixASTTuple, RemixASTList, RemixASTStruct)

    def compile(self, program: RemixASTNode, options: RemixCompilerOptions | None = None) -> RemixCompilerOutput:
        """
        Validate a program.

        Args:
            program: Root of the parsed program
            options: Host prelude; empty if omitted

        Returns:
            Compiler output holding any errors and warnings, the unchanged program, and the prelude
        """
        if options is None:
            options = RemixCompilerOptions()

        errors: List[RemixCompilerMessage] = []
        warnings: List[RemixCompilerMessage] = []
        self._check(program, errors, warnings)

        return RemixCompilerOutput(
            errors=errors,
            warnings=warnings,
            program=program,
            bindings=dict(options.bindings),
            context=dict(options.context)
        )

    def _message(self, text: str, node: RemixASTNode) -> RemixCompilerMessage:
        return RemixCompilerMessage(
            message=text,
            line=getattr(node, 'line', None),
            column=getattr(node, 'column', None),
            source_file=getattr(node, 'source_file', "")
        )

    def _check(
        self,
        node: RemixASTNode,
        errors: List[RemixCompilerMessage],
        warnings: List[RemixCompilerMessage]
    ) -> None:
        """Check one node and everything below it."""
        # Iterative walk so that deep programs cannot exhaust the host stack here
        pending = [node]
        while pending:
            current = pending.pop()

            if isinstance(current, (RemixASTString, RemixASTNumber, RemixASTBoolean, RemixASTIdentifier)):
                continue

            if isinstance(current, (RemixASTTuple, RemixASTList)):
                pending.extend(reversed(current.elements))
                continue

            if isinstance(current, RemixASTStruct):
                names = [f.identifier.name for f in current.fields]
                for name in sorted({n for n in names if names.count(n) > 1}):
                    warnings.append(self._message(f"Duplicate struct field '{name}'", current))

                pending.extend(reversed([f.value for f in current.fields]))
                continue

            if isinstance(current, RemixASTConditional):
                pending.extend([current.fail_branch, current.pass_branch, current.condition])
                continue

            if isinstance(current, RemixASTLambda):
                params = [p.name for p in current.parameters]
                for name in sorted({p for p in params if params.count(p) > 1}):
                    errors.append(self._message(f"Duplicate lambda parameter '{name}'", current))

                for p in current.parameters:
                    if p.contextual:
                        errors.append(self._message(f"Lambda parameter '{p.describe()}' cannot be contextual", p))

                pending.append(current.body)
                continue

            if isinstance(current, RemixASTCall):
                if isinstance(current.callee, self._NEVER_CALLABLE):
                    warnings.append(self._message(
                        f"Cannot call a {current.callee.node_name()}: {current.callee.describe()}",
                        current
                    ))

                pending.extend(reversed(current.arguments))
                pending.append(current.callee)
                continue

            if isinstance(current, RemixASTBind):
                seen = set()
                for b in current.bindings:
                    key = (b.identifier.name, b.identifier.contextual)
                    if key in seen:
                        warnings.append(self._message(
                            f"'{b.identifier.describe()}' is bound more than once; the last binding wins", b
                        ))

                    seen.add(key)

                pending.append(current.body)
                pending.extend(reversed([b.value for b in current.bindings]))
                continue

            if isinstance(current, RemixASTSandbox):
                pending.append(current.body)
                continue

            errors.append(self._message(f"Unknown node type: {type(current).__name__}", current))
