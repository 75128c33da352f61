"""OpenAPI to TypeScript Generator

A Python package for generating TypeScript declarations and API client
stubs from Swagger 2.0 and OpenAPI 3.0 documents.
"""

__version__ = "1.0.0"

from .config import CodegenConfig, OutputConfig, OutputMode
from .errors import CodegenError, ErrorKind, InvalidDocumentError
from .pipeline import (
    AtomicWriter,
    DeclarationRegistry,
    PipelineGenerator,
    SchemaResolver,
    run_batch,
    scan,
)

__all__ = [
    "PipelineGenerator",
    "CodegenConfig",
    "OutputConfig",
    "OutputMode",
    "CodegenError",
    "ErrorKind",
    "InvalidDocumentError",
    "DeclarationRegistry",
    "SchemaResolver",
    "AtomicWriter",
    "run_batch",
    "scan",
]
