"""Zip backups of a data directory and restoring from them."""

from __future__ import annotations

import os
import zipfile
from datetime import datetime
from http import HTTPStatus
from pathlib import Path

from comanda.files import ACCESS_DENIED, FileStore, PathAccessError

BACKUP_DIR_NAME = "backups"


class RestoreError(Exception):
    """Raised when a backup cannot be restored."""

    def __init__(self, message: str, status: HTTPStatus) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


def create_backup(store: FileStore) -> str:
    """Zip everything in the store's data directory except earlier backups.

    The archive is written to the ``backups`` directory and its file name
    is returned.
    """
    data_dir = str(store.data_dir)
    backup_dir = os.path.join(data_dir, BACKUP_DIR_NAME)
    os.makedirs(backup_dir, exist_ok=True)

    name = f"backup-{datetime.now():%Y%m%d-%H%M%S}.zip"
    backup_path = os.path.join(backup_dir, name)

    with zipfile.ZipFile(backup_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for current, dirnames, filenames in os.walk(data_dir):
            dirnames[:] = sorted(
                d for d in dirnames
                if not os.path.join(current, d).startswith(backup_dir)
            )
            for entry in [*dirnames, *sorted(filenames)]:
                full = os.path.join(current, entry)
                if full.startswith(backup_dir):
                    continue
                relative = os.path.relpath(full, data_dir).replace(os.sep, "/")
                archive.write(full, relative)
    return name


def _fail(message: str, status: HTTPStatus) -> RestoreError:
    return RestoreError(message, status)


def restore_backup(store: FileStore, name: str) -> None:
    """Extract the named backup over the store's data directory."""
    if not name:
        raise _fail("Backup name is required", HTTPStatus.BAD_REQUEST)
    if ".." in name or "/" in name or "\\" in name or os.path.isabs(name):
        raise _fail("Invalid backup path", HTTPStatus.BAD_REQUEST)

    backup_path = Path(store.data_dir) / BACKUP_DIR_NAME / name
    if not backup_path.exists():
        raise _fail("Backup file not found", HTTPStatus.NOT_FOUND)

    try:
        archive = zipfile.ZipFile(backup_path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise _fail(
            f"Error opening backup file: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR
        ) from exc

    with archive:
        for info in archive.infolist():
            try:
                target = store.validate_path(info.filename)
            except PathAccessError:
                raise _fail(ACCESS_DENIED, HTTPStatus.FORBIDDEN) from None
            mode = (info.external_attr >> 16) & 0o777

            if info.is_dir():
                target.mkdir(mode=mode or 0o755, parents=True, exist_ok=True)
                continue

            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise _fail(
                    f"Error creating directory: {exc}",
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                ) from exc
            try:
                with archive.open(info) as source, target.open("wb") as sink:
                    while chunk := source.read(64 * 1024):
                        sink.write(chunk)
            except (OSError, zipfile.BadZipFile) as exc:
                raise _fail(
                    f"Error copying file: {exc}", HTTPStatus.INTERNAL_SERVER_ERROR
                ) from exc
            if mode:
                os.chmod(target, mode)