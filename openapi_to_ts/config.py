"""
Configuration for the code generator.

Mirrors the ``ts-codegen.config.json`` file: which documents to read,
which URLs to fetch, and how to write the generated files.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "ts-codegen.config.json"

# camelCase keys used by existing config files
_KEY_ALIASES = {
    "actionCreatorImport": "action_creator_import",
    "typeWithPrefix": "type_with_prefix",
    "addGenerationComment": "add_generation_comment",
    "outputConfig": "output_config",
}


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Raise error if file exists
    FORCE = "force"  # Default: overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to sanity-check code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.FORCE
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodegenConfig:
    """Configuration options for code generation."""

    # Directory receiving one .ts file per document
    output: str = ".output"

    # Import statement prepended to every generated file
    action_creator_import: str = ""

    # HTTP timeout in seconds when fetching clients
    timeout: float = 10.0

    # Local JSON documents
    data: list[str] = field(default_factory=list)

    # URLs of remote JSON documents
    clients: list[str] = field(default_factory=list)

    # Prefix interfaces with "I" and type aliases with "T"
    type_with_prefix: bool = False

    # Add generation comment at top of file
    add_generation_comment: bool = True

    output_config: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodegenConfig:
        """Create a config from a dictionary."""
        config = CodegenConfig()
        for k, v in d.items():
            k = _KEY_ALIASES.get(k, k)
            if k == "output_config" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.FORCE)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output_config = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "timeout" and v is not None:
                config.timeout = float(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "output": self.output,
            "action_creator_import": self.action_creator_import,
            "timeout": self.timeout,
            "data": self.data,
            "clients": self.clients,
            "type_with_prefix": self.type_with_prefix,
            "add_generation_comment": self.add_generation_comment,
            "output_config": {
                "mode": self.output_config.mode.value,
                "validate_before_write": self.output_config.validate_before_write,
                "atomic_write": self.output_config.atomic_write,
            },
        }


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> CodegenConfig:
    """Load a config file, falling back to defaults when it does not exist.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    path = Path(path)
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return CodegenConfig()

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config file: {e}", source=str(path)) from e

    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a JSON object", source=str(path))

    try:
        return CodegenConfig.from_dict(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid config value: {e}", source=str(path)) from e
