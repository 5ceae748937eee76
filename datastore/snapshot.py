"""
Backup snapshot document.

On disk a snapshot is JSON shaped as::

    {
        "timestamp": "2025-01-15T02:00:00.000000+00:00",
        "version": "2.0.0",
        "church": "TSOAM CHURCH INTERNATIONAL",
        "include_demo": false,
        "data": {"members": [{...}, ...], ...}
    }

``data`` and ``timestamp`` are mandatory when reading one back.
"""

import datetime
import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from django.core.serializers.json import DjangoJSONEncoder

from core.exceptions import InvalidBackupFormatError

BACKUP_VERSION = '2.0.0'
REQUIRED_FIELDS = ('data', 'timestamp')


class SnapshotEncoder(DjangoJSONEncoder):
    """Keeps full microsecond precision, which DjangoJSONEncoder truncates."""

    def default(self, o):
        if isinstance(o, (datetime.datetime, datetime.time)):
            return o.isoformat()
        if isinstance(o, (bytes, memoryview)):
            return bytes(o).decode('utf-8', errors='replace')
        return super().default(o)


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of the backed-up tables. Never mutated once built."""

    timestamp: str
    version: str
    church: str
    include_demo: bool
    data: Mapping[str, Tuple[Dict[str, Any], ...]]

    def __post_init__(self):
        frozen = MappingProxyType({
            table: tuple(records) for table, records in self.data.items()
        })
        object.__setattr__(self, 'data', frozen)

    @property
    def tables(self):
        return list(self.data.keys())

    @property
    def total_records(self) -> int:
        return sum(len(records) for records in self.data.values())

    def record_counts(self) -> Dict[str, int]:
        return {table: len(records) for table, records in self.data.items()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'version': self.version,
            'church': self.church,
            'include_demo': self.include_demo,
            'data': {table: [dict(record) for record in records]
                     for table, records in self.data.items()},
        }

    def to_json(self, indent=2) -> str:
        return json.dumps(self.to_dict(), cls=SnapshotEncoder, indent=indent)

    @classmethod
    def from_dict(cls, document: Any) -> 'Snapshot':
        """
        Build a snapshot from a parsed backup document.

        Raises:
            InvalidBackupFormatError: required fields are missing or ``data``
                is not a mapping of table names to lists of records.
        """
        if not isinstance(document, dict):
            raise InvalidBackupFormatError("Invalid backup file format: expected a JSON object")

        missing = [name for name in REQUIRED_FIELDS if document.get(name) in (None, '')]
        if missing:
            raise InvalidBackupFormatError(
                f"Invalid backup file format: missing {', '.join(missing)}")

        data = document['data']
        if not isinstance(data, dict):
            raise InvalidBackupFormatError("Invalid backup file format: 'data' must be an object")
        for table, records in data.items():
            if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
                raise InvalidBackupFormatError(
                    f"Invalid backup file format: records of '{table}' must be a list of objects",
                    table=table,
                )

        return cls(
            timestamp=str(document['timestamp']),
            version=str(document.get('version') or 'Unknown'),
            church=str(document.get('church') or 'Unknown'),
            include_demo=bool(document.get('include_demo', False)),
            data=data,
        )

    @classmethod
    def from_json(cls, text) -> 'Snapshot':
        try:
            document = json.loads(text)
        except ValueError as exc:
            raise InvalidBackupFormatError(f"Backup file is not valid JSON: {exc}") from exc
        return cls.from_dict(document)
