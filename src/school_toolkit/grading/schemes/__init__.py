"""
Module: grading.schemes

Purpose:
    Registry of grading schemes. A scheme bundles the percentage grade
    table, the aggregate classification table, the best-of count and the
    core subjects used by the division penalty. Schemes are JSON
    manifests, so band tables are configuration rather than constants.

Key Functions:
    - get_scheme(code): Registered scheme by code (default if None)
    - load_scheme(path): Load and validate a manifest from disk
    - scheme_from_dict(data): Build a scheme from manifest data
    - register_scheme(scheme): Inject a custom scheme at runtime

Key Classes:
    - GradingScheme: Validated, immutable scheme
    - UnsupportedSchemeError: Unknown scheme code
    - SchemeValidationError: Manifest failed validation

Layout:
    Each bundled scheme lives in ``schemes/<code>/scheme.json``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from school_toolkit.core.errors import SchoolToolkitError
from school_toolkit.core.models.grades import (
    ClassificationBand,
    ClassificationScale,
    GradeBand,
    GradeScale,
)
from school_toolkit.core.schemas.validator import (
    SCHEME_SCHEMA_VERSION,
    ValidationError,
    validate_scheme_manifest,
)

logger = logging.getLogger(__name__)

MANIFEST_NAME = "scheme.json"


class SchemeError(SchoolToolkitError, RuntimeError):
    """Base class for grading-scheme errors."""


class UnsupportedSchemeError(SchemeError):
    """Raised when a scheme code is not registered."""


class SchemeValidationError(SchemeError):
    """Raised when a scheme manifest fails validation."""


@dataclass(frozen=True)
class GradingScheme:
    """
    A complete grading convention.

    Attributes:
        code: Short identifier ("uneb")
        name: Human-readable name
        grade_scale: Percentage -> grade table
        classification_scale: Aggregate -> division table
        best_of: Number of best subjects counted in the aggregate
        core_subjects: Lower-case name fragments of subjects whose joint
            failure worsens the division; empty disables the penalty
        default: Whether this is the default scheme
    """

    code: str
    name: str
    grade_scale: GradeScale
    classification_scale: ClassificationScale
    best_of: int = 4
    core_subjects: Tuple[str, ...] = ()
    default: bool = False

    def __post_init__(self) -> None:
        if self.best_of < 1:
            raise ValueError(f"best_of must be positive: {self.best_of}")


def scheme_from_dict(data: Dict[str, Any]) -> GradingScheme:
    """
    Build a GradingScheme from manifest data.

    Raises:
        SchemeValidationError: If the manifest is invalid
    """
    try:
        validate_scheme_manifest(data)
    except ValidationError as e:
        where = f" at {e.path}" if e.path else ""
        raise SchemeValidationError(f"Invalid grading scheme{where}: {e}") from e

    version = data.get("manifest_schema_version", 1)
    if version < SCHEME_SCHEMA_VERSION:
        logger.warning(
            f"Scheme '{data['code']}' has manifest_schema_version {version}, "
            f"expected {SCHEME_SCHEMA_VERSION}."
        )

    try:
        grade_scale = GradeScale(
            bands=tuple(
                GradeBand(g["min_percentage"], g["symbol"], g["weight"], g.get("label", ""))
                for g in data["grades"]
            ),
            fail=GradeBand(
                0,
                data["fail_grade"]["symbol"],
                data["fail_grade"]["weight"],
                data["fail_grade"].get("label", ""),
            ),
        )
        classification_scale = ClassificationScale(
            bands=tuple(
                ClassificationBand(c["min"], c["max"], c["label"])
                for c in data["classifications"]
            ),
            fallback=data.get("fallback_classification", "U"),
        )
        return GradingScheme(
            code=data["code"],
            name=data["name"],
            grade_scale=grade_scale,
            classification_scale=classification_scale,
            best_of=data.get("best_of", 4),
            core_subjects=tuple(s.lower() for s in data.get("core_subjects", [])),
            default=data.get("default", False),
        )
    except ValueError as e:
        raise SchemeValidationError(f"Invalid grading scheme '{data['code']}': {e}") from e


def load_scheme(path: Path) -> GradingScheme:
    """
    Load a grading scheme manifest from disk.

    Args:
        path: Path to a scheme.json file

    Raises:
        SchemeValidationError: If the file is unreadable or invalid
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SchemeValidationError(f"Cannot read scheme manifest {path}: {e}") from e
    if not isinstance(data, dict):
        raise SchemeValidationError(f"Scheme manifest must be a JSON object: {path}")
    return scheme_from_dict(data)


def _bundled_schemes_dir() -> Path:
    return Path(__file__).resolve().parent


def _discover_schemes(root: Path) -> tuple[Dict[str, GradingScheme], Optional[str]]:
    """Discover bundled schemes, skipping invalid manifests."""
    registry: Dict[str, GradingScheme] = {}
    default_code: Optional[str] = None

    for entry in sorted(root.iterdir()):
        manifest_path = entry / MANIFEST_NAME
        if not entry.is_dir() or not manifest_path.exists():
            continue
        try:
            scheme = load_scheme(manifest_path)
        except SchemeValidationError as exc:
            logger.warning(f"Skipping invalid grading scheme {entry.name}: {exc}")
            continue

        if scheme.code in registry:
            logger.warning(f"Duplicate scheme code '{scheme.code}' - skipping {entry.name}")
            continue
        registry[scheme.code] = scheme
        if scheme.default:
            default_code = scheme.code

    if registry and (not default_code or default_code not in registry):
        default_code = sorted(registry)[0]

    logger.debug(f"Discovered {len(registry)} grading scheme(s) in {root}")
    return registry, default_code


# Lazy initialization - schemes are NOT discovered at import time
_SCHEMES: Dict[str, GradingScheme] = {}
_DEFAULT_CODE: Optional[str] = None
_INITIALIZED = False


def _ensure_initialized() -> None:
    """Discover bundled schemes on first use."""
    global _SCHEMES, _DEFAULT_CODE, _INITIALIZED
    if not _INITIALIZED:
        _SCHEMES, _DEFAULT_CODE = _discover_schemes(_bundled_schemes_dir())
        _INITIALIZED = True


def register_scheme(scheme: GradingScheme, *, make_default: bool = False) -> None:
    """
    Register a scheme at runtime, replacing any scheme with the same code.

    Args:
        scheme: Scheme to register
        make_default: Use this scheme when no code is given
    """
    global _DEFAULT_CODE
    _ensure_initialized()
    if scheme.code in _SCHEMES:
        logger.info(f"Replacing registered grading scheme '{scheme.code}'")
    _SCHEMES[scheme.code] = scheme
    if make_default or _DEFAULT_CODE is None:
        _DEFAULT_CODE = scheme.code


def reset_registry() -> None:
    """Forget runtime registrations; bundled schemes are rediscovered on next use."""
    global _INITIALIZED
    _INITIALIZED = False


def list_schemes() -> Iterable[GradingScheme]:
    """Registered schemes in registration order, bundled ones first."""
    _ensure_initialized()
    return list(_SCHEMES.values())


def supported_scheme_codes() -> list[str]:
    _ensure_initialized()
    return sorted(_SCHEMES)


def default_scheme_code() -> Optional[str]:
    _ensure_initialized()
    return _DEFAULT_CODE


def get_scheme(code: Optional[str] = None) -> GradingScheme:
    """
    Get a registered scheme.

    Args:
        code: Scheme code; None or "" selects the default scheme

    Raises:
        UnsupportedSchemeError: If the code is not registered
    """
    _ensure_initialized()
    if not code:
        code = _DEFAULT_CODE
    scheme = _SCHEMES.get(code) if code else None
    if scheme is None:
        raise UnsupportedSchemeError(f"Unsupported grading scheme: {code}")
    return scheme


def default_scheme() -> GradingScheme:
    return get_scheme(None)


__all__ = [
    "GradingScheme",
    "SchemeError",
    "UnsupportedSchemeError",
    "SchemeValidationError",
    "scheme_from_dict",
    "load_scheme",
    "register_scheme",
    "reset_registry",
    "list_schemes",
    "supported_scheme_codes",
    "default_scheme_code",
    "get_scheme",
    "default_scheme",
]
