"""
Results persistence — write a test report to disk.

Layout under ``saveResultsTo``::

    <YYYYMMDDHHMMSS>/report.json     (unless storeOnlyLatestResults)
    <YYYYMMDDHHMMSS>/report.html
    <YYYYMMDDHHMMSS>/consoleoutput.txt
    latest/...                        (always; replaced on every run)
"""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime
from pathlib import Path

from ux4tools.core.errors import DeploymentError
from ux4tools.core.models.manifest import TestManifest
from ux4tools.core.models.report import TestReport

logger = logging.getLogger(__name__)

LATEST_FOLDER = "latest"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

REPORT_JSON = "report.json"
REPORT_HTML = "report.html"
CONSOLE_OUTPUT = "consoleoutput.txt"


def _write_report(report: TestReport, folder: Path) -> None:
    try:
        folder.mkdir(parents=True, exist_ok=True)
        (folder / REPORT_JSON).write_text(
            json.dumps(report.json_report, indent="\t", default=str), encoding="utf-8"
        )
        (folder / REPORT_HTML).write_text(report.html_report, encoding="utf-8")
        (folder / CONSOLE_OUTPUT).write_text(report.transcript, encoding="utf-8")
    except OSError as e:
        raise DeploymentError(f"Folder '{folder}' does not exist and cannot be created: {e}") from e


def save_results(
    report: TestReport,
    manifest: TestManifest,
    base_dir: Path,
    now: datetime | None = None,
) -> list[Path]:
    """Persist a report according to the manifest's results settings.

    Args:
        report: The report to write.
        manifest: Supplies ``saveResultsTo`` and ``storeOnlyLatestResults``.
        base_dir: Resolves a relative ``saveResultsTo``.
        now: Timestamp for the per-run folder.

    Returns:
        Folders written, empty when ``saveResultsTo`` is not set.
    """
    if not manifest.save_results_to:
        return []

    root = base_dir / manifest.save_results_to
    folders = []

    if not manifest.store_only_latest_results:
        stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        folders.append(root / stamp)

    latest = root / LATEST_FOLDER
    if latest.exists():
        try:
            shutil.rmtree(latest)
        except OSError as e:
            raise DeploymentError(f"Cannot replace previous results in '{latest}': {e}") from e
    folders.append(latest)

    for folder in folders:
        _write_report(report, folder)
        logger.debug("Wrote test results to %s", folder)

    logger.info("Results saved to %s", folders[0])
    return folders
