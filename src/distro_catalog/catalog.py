"""Catalog loading.

A catalog is loaded once at process startup and shared read-only by every
scoring call. Loading fails fast: an unreadable, malformed or empty catalog
raises ``CatalogLoadError`` here instead of producing bad matches later.
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .schema import DistroCatalog

logger = logging.getLogger(__name__)

MAX_DISTRO_COUNT = 500  # a real catalog holds tens of entries
DEFAULT_CATALOG_RESOURCE = "distros.json"


class CatalogLoadError(Exception):
    """Raised when a catalog cannot be loaded."""


def load_catalog(path: Union[str, Path]) -> DistroCatalog:
    """Load and validate a catalog JSON file.

    Args:
        path: Path to a catalog JSON file.

    Returns:
        The validated, immutable catalog.

    Raises:
        CatalogLoadError: If the file is missing, not JSON, or fails validation.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogLoadError(f"Could not read catalog file {path}: {exc}")

    catalog = parse_catalog(raw, source=str(path))
    logger.info("Loaded catalog %s with %d distros", path, catalog.total_distros)
    return catalog


def load_default_catalog() -> DistroCatalog:
    """Load the catalog shipped with the package."""
    raw = resources.files("distro_catalog").joinpath("data").joinpath(DEFAULT_CATALOG_RESOURCE).read_text(
        encoding="utf-8"
    )
    return parse_catalog(raw)


def parse_catalog(raw: str, source: str = "") -> DistroCatalog:
    """Parse catalog JSON text into a validated catalog."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Catalog is not valid JSON: {exc}")

    _validate_catalog_structure(data)

    if source:
        data = {**data, "source": source}

    try:
        return DistroCatalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogLoadError(f"Catalog failed schema validation: {exc}")


def validate_catalog_file(path: Union[str, Path]) -> tuple[bool, list[str]]:
    """Validate a catalog file without raising.

    Returns:
        Tuple of (is_valid, list of issues).
    """
    try:
        load_catalog(path)
    except CatalogLoadError as exc:
        return False, [str(exc)]
    return True, []


def _validate_catalog_structure(data) -> None:
    """Check the essential shape of a catalog before full validation.

    Checks performed:
    - Top-level must be a dict
    - Must contain a 'distros' key with a non-empty list value
    - Distro count must be <= MAX_DISTRO_COUNT
    - Each entry must be an object with a 'distro_id'
    """
    if not isinstance(data, dict):
        raise CatalogLoadError("Catalog must be a JSON object with a 'distros' key.")

    if "distros" not in data:
        raise CatalogLoadError("Catalog is missing the required 'distros' field.")

    distros = data["distros"]
    if not isinstance(distros, list):
        raise CatalogLoadError("'distros' must be a JSON array.")

    if len(distros) == 0:
        raise CatalogLoadError("Catalog contains no distros.")

    if len(distros) > MAX_DISTRO_COUNT:
        raise CatalogLoadError(
            f"Catalog contains {len(distros)} distros, which exceeds "
            f"the maximum of {MAX_DISTRO_COUNT}."
        )

    for i, entry in enumerate(distros):
        if not isinstance(entry, dict):
            raise CatalogLoadError(f"Distro entry at index {i} is not a JSON object.")
        if "distro_id" not in entry:
            raise CatalogLoadError(f"Distro entry at index {i} is missing 'distro_id'.")
