"""
Pipeline - Swagger / OpenAPI to TypeScript generator.

This module provides a multi-phase architecture for generating TypeScript
declarations and client stubs from an API document:

1. Phase 1 (Adapter): Normalize Swagger 2.0 / OpenAPI 3.0 into one shape
2. Phase 2 (Resolver): Walk every schema into type expressions and the registry
3. Phase 3 (Client configs): Resolve paths into request-function signatures
4. Phase 4 (Backend): Render declarations and clients with Jinja2 templates
5. Phase 5 (Writer): Atomically write one file per document
"""

from __future__ import annotations

from .adapter import DataType, UnifiedInputs, get_unified_inputs
from .atomic_writer import AtomicWriter
from .backends import TypeScriptBackend
from .client_configs import ClientConfig, get_client_configs
from .generator import BatchReport, GenerationFailure, PipelineGenerator, run_batch
from .registry import Declaration, DeclarationRegistry, DeclKind
from .resolver import ResolveContext, SchemaResolver
from .scanner import ScanResult, scan

__all__ = [
    "AtomicWriter",
    "BatchReport",
    "ClientConfig",
    "DataType",
    "DeclKind",
    "Declaration",
    "DeclarationRegistry",
    "GenerationFailure",
    "PipelineGenerator",
    "ResolveContext",
    "ScanResult",
    "SchemaResolver",
    "TypeScriptBackend",
    "UnifiedInputs",
    "get_client_configs",
    "get_unified_inputs",
    "run_batch",
    "scan",
]
