"""
Domain models — Pydantic types for UX4 Tools.

    from ux4tools.core.models import AppConfig, TestManifest, TestReport
"""

from ux4tools.core.models.app_config import AppConfig
from ux4tools.core.models.manifest import TestManifest
from ux4tools.core.models.report import TestReport

__all__ = [
    "AppConfig",
    "TestManifest",
    "TestReport",
]
