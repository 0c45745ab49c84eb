"""Traversal guard keeping resolved paths inside the server root."""

from __future__ import annotations

import enum
import errno
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class Verdict(enum.Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


def is_missing_error(exc: OSError) -> bool:
    """True when ``exc`` means the entry does not exist and never could."""
    return isinstance(exc, FileNotFoundError) or exc.errno == errno.ENAMETOOLONG


def has_parent_segment(candidate: Path) -> bool:
    return ".." in candidate.parts


def canonicalize(candidate: Path) -> Path:
    """Resolve symlinks in ``candidate``.

    Existing paths resolve strictly. A leaf that is absent, or whose name is
    too long to exist, is resolved through its parent, which must exist and
    be a directory. Raises ``OSError`` (or ``RuntimeError`` for symlink loops
    on older interpreters) for anything else.
    """
    try:
        candidate.lstat()
    except OSError as exc:
        if not is_missing_error(exc):
            raise
    else:
        return candidate.resolve(strict=True)

    parent = candidate.parent.resolve(strict=True)
    if not parent.is_dir():
        raise NotADirectoryError(f"Intermediate segment is not a directory: {parent}")
    return parent / candidate.name


def check_path(candidate: Path, root: Path) -> Verdict:
    """Decide whether ``candidate`` may be served from ``root``.

    Literal ``..`` segments are refused before the filesystem is touched.
    Afterwards both paths are canonicalized and the candidate must land at or
    below the canonical root. Any canonicalization failure denies.
    """
    if has_parent_segment(candidate):
        logger.warning("Parent segment in requested path: %s", candidate)
        return Verdict.DENIED

    try:
        canonical_root = root.resolve(strict=True)
        canonical_candidate = canonicalize(candidate)
    except (OSError, RuntimeError) as exc:
        logger.warning("Cannot canonicalize %s: %s", candidate, exc)
        return Verdict.DENIED

    if len(canonical_candidate.parts) < len(canonical_root.parts):
        logger.warning("Requested path climbs above root: %s", canonical_candidate)
        return Verdict.DENIED

    try:
        canonical_candidate.relative_to(canonical_root)
    except ValueError:
        logger.warning("Requested path escapes root: %s", canonical_candidate)
        return Verdict.DENIED

    logger.debug("Allowed %s under %s", canonical_candidate, canonical_root)
    return Verdict.ALLOWED
