"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputValidationError

# String literals, template literals and comments, whose braces are not code
_LITERAL_OR_COMMENT = re.compile(
    r"//[^\n]*"
    r"|/\*.*?\*/"
    r"|'(?:\\.|[^'\\\n])*'"
    r"|\"(?:\\.|[^\"\\\n])*\""
    r"|`(?:\\.|[^`\\])*`",
    re.DOTALL,
)


def strip_literals_and_comments(content: str) -> str:
    """Remove string literals, template literals and comments from TypeScript source."""
    return _LITERAL_OR_COMMENT.sub("", content)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate_typescript: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_typescript: Optional validation function for TypeScript code
        """
        self._validate_typescript = validate_typescript or self._default_validate_typescript

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self.validate(content)

            temp_path.replace(path)

        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> bool:
        """Write content only if the file doesn't exist.

        Returns:
            True if file was written

        Raises:
            FileExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content, validate)
        return True

    def validate(self, content: str) -> None:
        """Run the configured validation on generated code.

        Raises:
            OutputValidationError: If validation fails
        """
        self._validate_typescript(content)

    def _default_validate_typescript(self, content: str) -> None:
        """Default TypeScript validation.

        Raises:
            OutputValidationError: If validation fails
        """
        # Braces inside quoted enum values, urls and doc comments do not count
        code = strip_literals_and_comments(content)

        # Basic structural checks (no full parsing without a TypeScript compiler)
        if "export " not in code:
            raise OutputValidationError("Generated TypeScript code has no exported declarations")

        depth = 0
        for char in code:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth < 0:
                    raise OutputValidationError("Generated TypeScript code closes a brace that was never opened")
        if depth:
            raise OutputValidationError(f"Generated TypeScript code has {depth} unclosed braces")
