"""
Backends module.

Contains language-specific code generation backends.
"""

from __future__ import annotations

from .typescript_backend import TypeScriptBackend

__all__ = [
    "TypeScriptBackend",
]
