"""Bulk creation, update and deletion of files kept under a data directory."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

ACCESS_DENIED = "Invalid file path: access denied"

_SEPARATORS = re.compile(r"[\\/]")


@dataclass
class FileResult:
    """Outcome of one file in a bulk operation."""

    path: str
    success: bool = True
    error: str = ""


@dataclass
class BulkFileResponse:
    """Outcome of a whole bulk operation."""

    success: bool
    message: str = ""
    results: list[FileResult] = field(default_factory=list)
    error: str = ""


class PathAccessError(ValueError):
    """Raised when a path would reach outside the data directory."""

    def __init__(self, path: str) -> None:
        super().__init__(ACCESS_DENIED)
        self.path = path


def _summary(results: list[FileResult], verb: str) -> BulkFileResponse:
    success = all(result.success for result in results)
    if success:
        message = f"All files {verb} successfully"
    else:
        message = f"Some files failed to be {verb}"
    return BulkFileResponse(success=success, message=message, results=results)


class FileStore:
    """Files kept below one data directory."""

    def __init__(self, data_dir: str | os.PathLike[str]) -> None:
        self.data_dir = Path(data_dir)

    def validate_path(self, path: str) -> Path:
        """Return the full path of *path* inside the data directory.

        Empty and absolute paths, paths with a ``..`` component and paths
        that resolve outside the data directory are refused.
        """
        if not path or os.path.isabs(path) or path.startswith(("/", "\\")):
            raise PathAccessError(path)
        if ".." in _SEPARATORS.split(path):
            raise PathAccessError(path)
        root = self.data_dir.resolve()
        full = (root / path).resolve()
        if full != root and not full.is_relative_to(root):
            raise PathAccessError(path)
        return full

    def _checked(self, path: str) -> tuple[Path | None, FileResult]:
        result = FileResult(path=path)
        try:
            return self.validate_path(path), result
        except PathAccessError:
            result.success = False
            result.error = ACCESS_DENIED
            return None, result

    def bulk_create(self, files: Iterable[tuple[str, str]]) -> BulkFileResponse:
        """Create every ``(path, content)`` file; existing files are left alone."""
        results = []
        for path, content in files:
            full, result = self._checked(path)
            results.append(result)
            if full is None:
                continue
            try:
                full.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                result.success = False
                result.error = f"Error creating directories: {exc}"
                continue
            if full.exists():
                result.success = False
                result.error = "File already exists"
                continue
            try:
                full.write_bytes(content.encode("utf-8"))
            except OSError as exc:
                result.success = False
                result.error = f"Error writing file: {exc}"
        return _summary(results, "created")

    def bulk_update(self, files: Iterable[tuple[str, str]]) -> BulkFileResponse:
        """Overwrite every ``(path, content)`` file that already exists."""
        results = []
        for path, content in files:
            full, result = self._checked(path)
            results.append(result)
            if full is None:
                continue
            if not full.exists():
                result.success = False
                result.error = "File not found"
                continue
            try:
                full.write_bytes(content.encode("utf-8"))
            except OSError as exc:
                result.success = False
                result.error = f"Error writing file: {exc}"
        return _summary(results, "updated")

    def bulk_delete(self, paths: Iterable[str]) -> BulkFileResponse:
        """Delete every file named in *paths*."""
        results = []
        for path in paths:
            full, result = self._checked(path)
            results.append(result)
            if full is None:
                continue
            if not full.exists():
                result.success = False
                result.error = "File not found"
                continue
            try:
                os.remove(full)
            except OSError as exc:
                result.success = False
                result.error = f"Error deleting file: {exc}"
        return _summary(results, "deleted")