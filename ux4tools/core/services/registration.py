"""
Installation registration — best-effort telemetry for installed apps.

One JSON record per install is POSTed to the ``database`` endpoint in
the tool config. Callers treat every failure as a warning.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.request

from ux4tools.core.constants import REQUEST_TIMEOUT
from ux4tools.core.errors import RegistrationFailure
from ux4tools.core.models.app_config import AppConfig

logger = logging.getLogger(__name__)


def build_record(app_config: AppConfig, user: str | None) -> dict[str, str]:
    """The registration payload for an application."""
    return {
        "userID": user or "",
        "ux4Version": app_config.ux4version or "",
        "appVersion": app_config.version,
        "appName": app_config.name,
        "appDisplayName": app_config.display_name,
    }


def register_install(
    endpoint: str | None,
    app_config: AppConfig,
    user: str | None,
    timeout: int = REQUEST_TIMEOUT,
) -> dict[str, str]:
    """Submit an installation record.

    Returns:
        The record that was sent.

    Raises:
        RegistrationFailure: No endpoint configured, or delivery failed.
    """
    if not endpoint:
        raise RegistrationFailure(
            "No registration endpoint configured (ux4 config set database <url>)"
        )

    record = build_record(app_config, user)
    url = endpoint if "://" in endpoint else f"http://{endpoint}"
    body = json.dumps(record).encode("utf-8")

    logger.debug("Registering install of %s with %s", record["appName"], url)
    try:
        req = urllib.request.Request(
            url,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json", "User-Agent": "ux4-tools"},
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = resp.getcode()
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise RegistrationFailure(f"Failed to register installation: {e}") from e

    if status >= 400:
        raise RegistrationFailure(f"Failed to register installation: HTTP {status}")

    logger.info("Registered %s (UX4 %s)", record["appName"], record["ux4Version"])
    return record
