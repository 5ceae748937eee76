"""
Backup files on disk.

Backups written by the management commands, the API and the scheduled task
all land in ``settings.BACKUP_DIR``.
"""

import os
from datetime import datetime, timezone as dt_timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from django.conf import settings
from django.utils import timezone

from core.exceptions import InvalidBackupFormatError
from core.logging.structured import get_contextual_logger

from .snapshot import Snapshot

FILENAME_PREFIX = 'tsoam-backup-'
FILENAME_SUFFIX = '.json'


class BackupStorage:
    """Reads and writes snapshot files in one directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        self.directory = Path(directory or settings.BACKUP_DIR)
        self.logger = get_contextual_logger('datastore.storage', directory=str(self.directory))

    @staticmethod
    def default_filename() -> str:
        stamp = timezone.now().strftime('%Y-%m-%dT%H-%M-%S-%f')
        return f"{FILENAME_PREFIX}{stamp}{FILENAME_SUFFIX}"

    def resolve(self, name: Union[str, Path]) -> Path:
        """
        Turn a file name into a path.

        Relative names resolve into the backups directory; absolute paths are
        used as they are.
        """
        path = Path(name)
        if path.is_absolute():
            return path
        return self.directory / path

    def resolve_safe(self, name: str) -> Path:
        """
        Resolve a bare file name coming from an untrusted caller.

        Raises:
            InvalidBackupFormatError: the name is empty or points outside the
                backups directory.
        """
        if not name or name in ('.', '..') or os.sep in name or '/' in name or '\\' in name:
            raise InvalidBackupFormatError(f"Invalid backup file name: {name!r}", operation='resolve')
        return self.directory / name

    def save(self, snapshot: Snapshot, filename: Optional[Union[str, Path]] = None) -> Path:
        path = self.resolve(filename or self.default_filename())
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(snapshot.to_json(), encoding='utf-8')

        self.logger.info(
            f"Backup written to {path}",
            extra={'operation': 'save', 'path': str(path), 'total_records': snapshot.total_records},
        )
        return path

    def load(self, path: Union[str, Path]) -> Snapshot:
        """
        Read a snapshot file.

        Raises:
            InvalidBackupFormatError: the file is missing or unreadable, not JSON, or lacks
                the required fields.
        """
        path = self.resolve(path)
        try:
            text = path.read_text(encoding='utf-8')
        except FileNotFoundError as exc:
            raise InvalidBackupFormatError(f"Backup file not found: {path}", operation='load') from exc
        except UnicodeDecodeError as exc:
            raise InvalidBackupFormatError(f"Backup file is not UTF-8 text: {path}", operation='load') from exc
        except OSError as exc:
            raise InvalidBackupFormatError(f"Backup file cannot be read: {path} ({exc.strerror})", operation='load') from exc
        return Snapshot.from_json(text)

    def list(self) -> List[Dict[str, Any]]:
        """Backup files in the directory, newest first."""
        if not self.directory.is_dir():
            return []

        files = []
        for path in self.directory.glob(f"*{FILENAME_SUFFIX}"):
            if not path.is_file():
                continue
            stat = path.stat()
            files.append({
                'name': path.name,
                'size': stat.st_size,
                'modified': datetime.fromtimestamp(stat.st_mtime, tz=dt_timezone.utc),
            })
        files.sort(key=lambda item: item['modified'], reverse=True)
        return files

    def delete(self, name: str) -> bool:
        """Remove a backup file. Returns False when there was nothing to remove."""
        path = self.resolve_safe(name)
        if not path.is_file():
            return False
        path.unlink()
        self.logger.info(f"Backup {name} deleted", extra={'operation': 'delete', 'path': str(path)})
        return True
