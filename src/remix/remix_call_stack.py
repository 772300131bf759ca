"""Call stack tracking for Remix lambda calls, used for detailed error messages."""

from dataclasses import dataclass
from typing import Dict, List

from remix.remix_value import RemixValue


class RemixCallStack:
    """
    Call stack for tracking function calls and providing detailed error messages.

    This is diagnostic state only: evaluation never reads it to decide anything.
    """

    @dataclass
    class CallFrame:
        """Represents a single function call frame."""
        function_name: str
        arguments: Dict[str, RemixValue]
        expression: str
        line: int | None

    def __init__(self) -> None:
        """Initialize empty call stack."""
        self.frames: List[RemixCallStack.CallFrame] = []

    def push(
        self,
        function_name: str,
        arguments: Dict[str, RemixValue],
        expression: str = "",
        line: int | None = None
    ) -> None:
        """
        Push a new call frame onto the stack.

        Args:
            function_name: Name of the function being called
            arguments: Dictionary of parameter names to values
            expression: Description of the function body
            line: Line of the function body in its source, if known
        """
        frame = RemixCallStack.CallFrame(
            function_name=function_name,
            arguments=arguments,
            expression=expression,
            line=line
        )
        self.frames.append(frame)

    def pop(self) -> 'RemixCallStack.CallFrame | None':
        """
        Pop the top call frame from the stack.

        Returns:
            The popped frame, or None if stack is empty
        """
        if self.frames:
            return self.frames.pop()

        return None

    def depth(self) -> int:
        """Get the current call stack depth."""
        return len(self.frames)

    def format_stack_trace(self, max_frames: int = 10) -> str:
        """
        Format the call stack as a string for error messages.

        Args:
            max_frames: Maximum number of frames to include

        Returns:
            Formatted stack trace string
        """
        if not self.frames:
            return "  (no function calls)"

        lines = []
        frames_to_show = self.frames[-max_frames:] if len(self.frames) > max_frames else self.frames

        if len(self.frames) > max_frames:
            lines.append(f"  ... ({len(self.frames) - max_frames} more frames)")

        for i, frame in enumerate(frames_to_show):
            indent = "  " + "  " * i
            args_str = ", ".join(f"{k}={v.describe()}" for k, v in frame.arguments.items())
            location = f" [line {frame.line}]" if frame.line is not None else ""
            lines.append(f"{indent}{frame.function_name}({args_str}){location}")

            if frame.expression:
                lines.append(f"{indent}  -> {frame.expression}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"RemixCallStack(depth={len(self.frames)})"
