# -*- coding: utf-8 -*-
"""
Record storage used to keep a history of rankings.

Two capabilities only: append a record of a given type, and return a
snapshot of everything stored. ``JSONRecordStore`` keeps the snapshot in a
single JSON document; an unreadable or missing file reads as empty.
"""

import copy
import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from .logger import get_module_logger

Snapshot = Dict[str, List[Dict[str, Any]]]


class RecordStore(ABC):
    """Abstract append-only record store."""

    def append(self, record_type: str, record: Dict[str, Any]) -> None:
        """Store ``record`` under ``record_type``, stamping id and timestamp."""
        data = self._read()
        bucket = data.setdefault(record_type, [])
        entry = dict(record)
        entry.setdefault('id', f"{record_type}_{len(bucket) + 1}")
        entry.setdefault('created', datetime.now().isoformat())
        bucket.append(entry)
        self._write(data)

    def snapshot(self) -> Snapshot:
        """Deep copy of all records, grouped by type."""
        return copy.deepcopy(self._read())

    def records(self, record_type: str) -> List[Dict[str, Any]]:
        return self.snapshot().get(record_type, [])

    def clear(self) -> None:
        self._write({})

    @abstractmethod
    def _read(self) -> Snapshot:
        pass

    @abstractmethod
    def _write(self, data: Snapshot) -> None:
        pass


class MemoryRecordStore(RecordStore):
    """Process-local store."""

    def __init__(self):
        self._data: Snapshot = {}

    def _read(self) -> Snapshot:
        return self._data

    def _write(self, data: Snapshot) -> None:
        self._data = data


class JSONRecordStore(RecordStore):
    """Store persisted as one JSON document on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.logger = get_module_logger('storage')

    def _read(self) -> Snapshot:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable record file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring malformed record file {self.path}")
            return {}
        records = {}
        for record_type, bucket in data.items():
            if isinstance(bucket, list):
                records[record_type] = bucket
            else:
                self.logger.warning(f"Ignoring malformed '{record_type}' records in {self.path}")
        return records

    def _write(self, data: Snapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str)
