"""
Test manifest loader — reads a manifest file and merges CLI seeds.

Precedence for url / saveResultsTo / entryPoint / copyTo: values in
the manifest file win over the command-line seeds. The deployment
folder (``target``/``copyTo``) is resolved separately by the test
orchestrator, where invocation-time flags win.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ux4tools.core.errors import ManifestInvalid
from ux4tools.core.models.manifest import DEFAULT_COPY_TO, TestManifest

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yml", ".yaml"}


def _read_document(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestInvalid(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ManifestInvalid(f"Invalid testing manifest {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestInvalid(f"Expected an object in {path}, got {type(data).__name__}")
    return data


def load_manifest(path: str | Path | None, seeds: dict[str, Any] | None = None) -> TestManifest:
    """Load a manifest and merge it over command-line seeds.

    Args:
        path: Manifest file (JSON, or YAML by extension).
        seeds: CLI values keyed by manifest field name (``url``,
            ``saveResultsTo``, ``entryPoint``, ``copyTo``).

    Raises:
        ManifestInvalid: Missing file, bad document, or no url/entryPoint.
    """
    if not path or not Path(path).is_file():
        raise ManifestInvalid(
            "Please provide a valid <manifest>.json file using the --manifest option.\n"
            "E.g. ux4 test run --manifest testing/test-manifest.json"
        )

    path = Path(path)
    seeds = seeds or {}
    merged: dict[str, Any] = {
        "url": seeds.get("url"),
        "saveResultsTo": seeds.get("saveResultsTo"),
        "entryPoint": seeds.get("entryPoint"),
        "copyTo": seeds.get("copyTo") or DEFAULT_COPY_TO,
    }
    merged.update(_read_document(path))
    merged["filename"] = str(path)

    if not merged.get("url"):
        raise ManifestInvalid(
            "No URL specified. Provide --url on the command line, or add a url entry to your test manifest"
        )
    if not merged.get("entryPoint"):
        raise ManifestInvalid(
            "No entryPoint specified. Provide --entry-point on the command line, "
            "or add an entryPoint to your test manifest"
        )

    try:
        manifest = TestManifest.model_validate(merged)
    except ValidationError as e:
        raise ManifestInvalid(f"Invalid testing manifest {path}: {e}") from e

    if not manifest.save_results_to:
        logger.warning("saveResultsTo not specified. No results will be saved")

    logger.debug("Loaded manifest %s (%d test sets)", path, len(manifest.test_sets_to_run))
    return manifest
