"""
Version resolution — pick a concrete build from a version specifier.

Pure functions over a flat catalog of ``major.minor.patch`` names plus
the two catalog sources (HTTP ``versions.json`` and a local directory
listing). Resolution never raises: "no match" is the only failure
signal, and it is up to the caller to turn that into an error.

Specifier grammar::

    latest
    [^~]?<major>[.<minor>][.<patch>]     (any component may be * x X)

    ^1.2    → major == 1, minor >= 2, patch >= 0
    ~1.2.3  → major == 1, minor == 2, patch >= 3
    2.x     → major == 2
"""

from __future__ import annotations

import http.client
import json
import logging
import re
import urllib.request
from dataclasses import dataclass
from pathlib import Path

from ux4tools.core.constants import CATALOG_PATH, REQUEST_TIMEOUT
from ux4tools.core.errors import CatalogUnavailable

logger = logging.getLogger(__name__)

LATEST = "latest"

SEMVER_RE = re.compile(r"^([0-9]+)\.([0-9]+)\.([0-9]+)\Z")
_SPECIFIER_RE = re.compile(r"^([\^~])?([0-9*xX]+)(\.([0-9*xX]+))?(\.([0-9*xX]+))?\Z")


@dataclass(frozen=True)
class AvailableVersion:
    """One concrete build in the catalog."""

    name: str
    major: int
    minor: int
    patch: int

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @classmethod
    def parse(cls, name: object) -> AvailableVersion | None:
        """Parse a strict ``major.minor.patch`` string, or return None."""
        if not isinstance(name, str):
            return None
        m = SEMVER_RE.match(name)
        if not m:
            return None
        return cls(name, int(m.group(1)), int(m.group(2)), int(m.group(3)))


@dataclass(frozen=True)
class Requirement:
    """Constraint on a single version component."""

    op: str  # "eq" or "gte"
    value: int = 0

    def matches(self, part: int) -> bool:
        if self.op == "eq":
            return part == self.value
        return part >= self.value


_ANY = Requirement("gte", 0)


def sorted_catalog(available: object) -> list[AvailableVersion]:
    """Parse and sort a catalog, highest first. Unparseable entries are dropped."""
    if not isinstance(available, (list, tuple, set, frozenset)):
        return []
    parsed = [v for v in (AvailableVersion.parse(a) for a in available) if v is not None]
    parsed.sort(key=lambda v: v.key, reverse=True)
    return parsed


def parse_specifier(specifier: object) -> tuple[Requirement, Requirement, Requirement] | None:
    """Turn a specifier into (major, minor, patch) requirements.

    Returns None when the specifier does not match the grammar.
    ``latest`` is handled by :func:`resolve_version`, not here.
    """
    if not isinstance(specifier, str):
        return None
    m = _SPECIFIER_RE.match(specifier)
    if not m:
        return None

    prefix = m.group(1)
    compat = prefix == "^"
    close = prefix == "~"

    def _component(raw: str | None, relaxed: bool) -> Requirement:
        if raw is None or not raw.isdigit():
            return _ANY
        return Requirement("gte" if relaxed else "eq", int(raw))

    major = _component(m.group(2), relaxed=False)
    minor = _component(m.group(4), relaxed=compat)
    patch = _component(m.group(6), relaxed=compat or close)
    return major, minor, patch


def resolve_version(specifier: object, available: object) -> str | None:
    """Resolve a specifier against a catalog of version names.

    Args:
        specifier: ``"latest"`` or a ``[^~]major[.minor][.patch]`` string.
        available: Iterable of catalog entries; non-semver entries are ignored.

    Returns:
        The highest matching version name, or None.
    """
    catalog = sorted_catalog(available)

    if specifier == LATEST:
        return catalog[0].name if catalog else None

    requirements = parse_specifier(specifier)
    if requirements is None:
        return None

    major, minor, patch = requirements
    for candidate in catalog:
        if (
            major.matches(candidate.major)
            and minor.matches(candidate.minor)
            and patch.matches(candidate.patch)
        ):
            return candidate.name
    return None


def compare_versions(a: object, b: object) -> int:
    """Compare two strict semver strings.

    Returns 1 if ``a`` is newer, -1 if ``b`` is newer, 0 if equal or
    if either side does not parse.
    """
    va = AvailableVersion.parse(a)
    vb = AvailableVersion.parse(b)
    if va is None or vb is None:
        return 0
    if va.key == vb.key:
        return 0
    return 1 if va.key > vb.key else -1


# ═══════════════════════════════════════════════════════════════════
#  Catalog sources
# ═══════════════════════════════════════════════════════════════════


def catalog_url(address: str) -> str:
    """URL of the version catalog served next to the build repository."""
    base = address.rstrip("/")
    if "://" not in base:
        base = f"http://{base}"
    return base + CATALOG_PATH


def parse_catalog(payload: object) -> list[str]:
    """Normalise a decoded ``versions.json`` document to a list of names.

    Arrays are taken as-is. Objects contribute their keys.
    """
    if isinstance(payload, list):
        return [str(v) for v in payload]
    if isinstance(payload, dict):
        return [str(k) for k in payload]
    return []


def fetch_catalog(address: str, timeout: int = REQUEST_TIMEOUT) -> list[str]:
    """Download the list of available builds from ``address``.

    Raises:
        CatalogUnavailable: On any network or decoding failure.
    """
    url = catalog_url(address)
    logger.debug("Fetching version catalog from %s", url)
    try:
        req = urllib.request.Request(url, headers={"User-Agent": "ux4-tools"})
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            body = resp.read().decode("utf-8")
        versions = parse_catalog(json.loads(body))
    except (OSError, ValueError, http.client.HTTPException) as e:
        raise CatalogUnavailable(f"Cannot load version list from {address}: {e}") from e

    logger.info("Catalog at %s lists %d versions", address, len(versions))
    return versions


def list_local_catalog(directory: Path) -> list[str]:
    """Names of the version sub-directories of a local build folder."""
    if not directory.is_dir():
        return []
    return sorted(p.name for p in directory.iterdir() if p.is_dir())


def load_catalog(address: str, from_dir: bool = False) -> list[str]:
    """Catalog for a build source: directory listing or remote versions.json."""
    if from_dir:
        versions = list_local_catalog(Path(address).expanduser())
        logger.debug("Local catalog at %s lists %d versions", address, len(versions))
        return versions
    return fetch_catalog(address)
