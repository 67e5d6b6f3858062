# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Content digests used to detect unchanged hook scripts."""

from __future__ import annotations

import hashlib
from pathlib import Path

_CHUNK_SIZE = 64 * 1024


def file_digest(path: Path) -> str:
    """Return the hex-encoded SHA-1 digest of the file at ``path``.

    Symlinks are followed, so a hook linked to its source hashes to the same
    value as the source itself.

    Args:
        path: File whose content should be hashed.

    Returns:
        str: Hex digest of the file content.

    Raises:
        OSError: If the file cannot be read.
    """

    hasher = hashlib.sha1(usedforsecurity=False)
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def same_content(first: Path, second: Path) -> bool:
    """Return whether ``first`` and ``second`` hold identical bytes."""

    return file_digest(first) == file_digest(second)


__all__ = ["file_digest", "same_content"]
