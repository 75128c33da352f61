"""Load Swagger / OpenAPI documents from local files or HTTP URLs.

All three entry points return the parsed document as a dictionary and
raise a :class:`~openapi_to_ts.errors.CodegenError` subclass on failure,
so a batch run can record the failure and continue.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from ..errors import DocumentFetchError, InvalidDocumentError

logger = logging.getLogger(__name__)


def parse_document(text: Any, source: str = "") -> dict[str, Any]:
    """Parse JSON text into a document dictionary.

    Args:
        text: The raw JSON text.
        source: File path or URL, used in error messages.

    Returns:
        The parsed document.

    Raises:
        InvalidDocumentError: If the text is not a JSON object.
    """
    if not isinstance(text, str):
        raise InvalidDocumentError("Document content is not text", source=source)

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(f"Invalid JSON document: {e}", source=source) from e

    if not isinstance(document, dict):
        raise InvalidDocumentError("Document root must be a JSON object", source=source)
    return document


def load_document(path: str | Path) -> dict[str, Any]:
    """Load a document from a local JSON file.

    Raises:
        InvalidDocumentError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidDocumentError(f"Cannot read document: {e}", source=str(path)) from e

    logger.debug("Loaded %s", path)
    return parse_document(text, source=str(path))


def fetch_document(url: str, timeout: float = 10.0, client: httpx.Client | None = None) -> dict[str, Any]:
    """Fetch a document from an HTTP(S) URL.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.
        client: Optional client to reuse (tests pass one with a mock transport).

    Returns:
        The parsed document.

    Raises:
        DocumentFetchError: If the request fails or returns an error status.
        InvalidDocumentError: If the response body is not a JSON object.
    """
    try:
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as owned_client:
                response = owned_client.get(url)
        else:
            response = client.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DocumentFetchError(f"HTTP {e.response.status_code} fetching document", source=url) from e
    except httpx.RequestError as e:
        raise DocumentFetchError(f"Failed to fetch document: {e}", source=url) from e

    logger.debug("Fetched %s", url)
    return parse_document(response.text, source=url)
