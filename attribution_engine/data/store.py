"""
Dataset Store Module

Key-value storage for canonical records. Records are stored once and never
mutated; uploading the same document twice yields two ids.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from .models import CanonicalRecord, DatasetType
from ..config import STORE_DIR
from ..exceptions import DatasetNotFoundError

logger = logging.getLogger(__name__)


class DatasetStore:
    """
    In-memory registry of canonical records.

    Provides:
    - put/get by generated id
    - Bulk removal of temporary custom uploads
    - JSON save/load of the whole store
    """

    def __init__(self):
        """Initialize an empty store."""
        self.records: Dict[str, CanonicalRecord] = {}

    def put(self, record: CanonicalRecord) -> str:
        """
        Store a record under a new id.

        Args:
            record: Canonical record to store

        Returns:
            The generated dataset id
        """
        dataset_id = uuid.uuid4().hex
        self.records[dataset_id] = record
        logger.info(
            f"Stored dataset {dataset_id} ({record.metadata.name}, "
            f"{len(record.features)} features)"
        )
        return dataset_id

    def get(self, dataset_id: str) -> CanonicalRecord:
        """
        Get a stored record by id.

        Raises:
            DatasetNotFoundError: If the id is unknown
        """
        if dataset_id not in self.records:
            raise DatasetNotFoundError(f"Dataset '{dataset_id}' not found")
        return self.records[dataset_id]

    def delete(self, dataset_id: str):
        if self.records.pop(dataset_id, None) is None:
            raise DatasetNotFoundError(f"Dataset '{dataset_id}' not found")
        logger.info(f"Deleted dataset {dataset_id}")

    def delete_by_type(self, dataset_type: DatasetType) -> int:
        """Delete every record of the given type. Returns how many were removed."""
        doomed = [
            dataset_id for dataset_id, record in self.records.items()
            if record.dataset_type == dataset_type
        ]
        for dataset_id in doomed:
            del self.records[dataset_id]

        logger.info(f"Deleted {len(doomed)} {dataset_type.value} datasets")
        return len(doomed)

    def list_ids(self) -> List[str]:
        return list(self.records.keys())

    def __len__(self) -> int:
        return len(self.records)

    def save_all(self, directory: Optional[Path] = None):
        """
        Save all records as one JSON file per id.

        Files of records no longer in the store are removed, so deleted and
        cleaned-up datasets are not loaded again.
        """
        directory = directory or STORE_DIR
        directory.mkdir(parents=True, exist_ok=True)

        stale = [path for path in directory.glob("*.json") if path.stem not in self.records]
        for path in stale:
            path.unlink()

        for dataset_id, record in self.records.items():
            with open(directory / f"{dataset_id}.json", "w") as f:
                json.dump(record.to_dict(), f, indent=2)

        logger.info(
            f"Saved {len(self.records)} datasets to {directory} "
            f"(removed {len(stale)} stale files)"
        )

    def load_all(self, directory: Optional[Path] = None):
        """Load every ``<id>.json`` record found in the directory."""
        directory = directory or STORE_DIR
        if not directory.exists():
            logger.warning(f"Store directory {directory} does not exist")
            return

        for path in sorted(directory.glob("*.json")):
            with open(path, "r") as f:
                self.records[path.stem] = CanonicalRecord.from_dict(json.load(f))

        logger.info(f"Loaded {len(self.records)} datasets from {directory}")


# Global store instance
_store: Optional[DatasetStore] = None


def get_store() -> DatasetStore:
    """Get or create the global dataset store."""
    global _store
    if _store is None:
        _store = DatasetStore()
    return _store
