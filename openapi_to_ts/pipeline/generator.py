"""
Pipeline generator and batch runner.

``PipelineGenerator`` turns one parsed document into TypeScript source.
``run_batch`` drives it over every document named by a configuration,
writing one file per document and recording failures without aborting
the rest of the batch.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx

from ..config import CodegenConfig, OutputConfig, OutputMode
from ..errors import CodegenError, ErrorKind
from ..utils import get_filename
from .adapter import get_unified_inputs
from .atomic_writer import AtomicWriter
from .backends import TypeScriptBackend
from .loader import fetch_document, load_document
from .scanner import ScanResult, scan

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates TypeScript for a single document."""

    def __init__(self, document: dict[str, Any], config: CodegenConfig | None = None, generation_comment: str = ""):
        """
        Initialize the generator.

        Args:
            document: The parsed Swagger 2.0 / OpenAPI 3.0 document
            config: Code generation configuration
            generation_comment: Header comment, used when enabled in the config
        """
        self.document = document
        self.config = config or CodegenConfig()
        self.generation_comment = generation_comment
        self._scan_result: ScanResult | None = None

    def scan(self) -> ScanResult:
        if self._scan_result is None:
            self._scan_result = scan(self.document, type_with_prefix=self.config.type_with_prefix)
        return self._scan_result

    def generate(self) -> str:
        """Generate the TypeScript module for the document."""
        result = self.scan()
        backend = TypeScriptBackend(result.registry, self.config.action_creator_import)
        comment = self.generation_comment if self.config.add_generation_comment else ""
        return backend.generate(result.client_configs, result.declarations, comment)

    def output_path(self) -> Path:
        """Output file for the document, named after its base path."""
        base_path = get_unified_inputs(self.document).base_path
        return Path(self.config.output) / f"{get_filename(base_path)}.ts"


@dataclass
class GenerationFailure:
    """A document that could not be generated."""

    source: str = ""
    kind: ErrorKind = ErrorKind.INVALID_DOCUMENT
    message: str = ""


@dataclass
class BatchReport:
    """Outcome of a batch run."""

    written: list[Path] = field(default_factory=list)
    failures: list[GenerationFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def write_output(writer: AtomicWriter, path: Path, content: str, output_config: OutputConfig) -> None:
    """Write generated code honoring the output mode.

    Raises:
        FileExistsError: If the file exists in ERROR_IF_EXISTS mode
        OutputValidationError: If validation fails
    """
    validate = output_config.validate_before_write
    if output_config.atomic_write:
        if output_config.mode == OutputMode.ERROR_IF_EXISTS:
            writer.write_if_not_exists(path, content, validate=validate)
        else:
            writer.write(path, content, validate=validate)
        return

    if output_config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
        raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
    if validate:
        writer.validate(content)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _generate_one(
    source: str,
    load: Callable[[], dict[str, Any]],
    config: CodegenConfig,
    writer: AtomicWriter,
    report: BatchReport,
    generation_comment: str,
) -> None:
    try:
        document = load()
        generator = PipelineGenerator(document, config, generation_comment)
        code = generator.generate()
        path = generator.output_path()
        write_output(writer, path, code, config.output_config)
    except CodegenError as e:
        logger.error("Skipping %s (%s): %s", source, e.kind.value, e.message)
        report.failures.append(GenerationFailure(source=e.source or source, kind=e.kind, message=e.message))
        return
    except OSError as e:
        # Existing output in ERROR_IF_EXISTS mode, or an unwritable output path
        logger.error("Skipping %s: %s", source, e)
        report.failures.append(GenerationFailure(source=source, kind=ErrorKind.INVALID_OUTPUT, message=str(e)))
        return

    logger.info("Generated %s from %s", path, source)
    report.written.append(path)


def run_batch(config: CodegenConfig, http_client: httpx.Client | None = None, generation_comment: str = "") -> BatchReport:
    """
    Generate every document named by the configuration.

    Local ``data`` files are processed first, then remote ``clients``.

    Args:
        config: Code generation configuration
        http_client: Optional HTTP client used to fetch clients
        generation_comment: Header comment for generated files

    Returns:
        BatchReport listing written files and failures
    """
    report = BatchReport()
    writer = AtomicWriter()

    for path in config.data:
        _generate_one(str(path), functools.partial(load_document, path), config, writer, report, generation_comment)

    for url in config.clients:
        load = functools.partial(fetch_document, url, config.timeout, http_client)
        _generate_one(url, load, config, writer, report, generation_comment)

    if report.failures:
        logger.warning("%d of %d documents failed", len(report.failures), len(config.data) + len(config.clients))
    return report
