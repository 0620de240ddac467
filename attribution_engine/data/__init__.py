"""Data package for the attribution engine"""

from .models import (
    CanonicalRecord,
    DatasetMetadata,
    DatasetType,
    FeatureAttribution,
    is_number,
)
from .store import DatasetStore, get_store
from .samples import SAMPLE_DATASETS, list_sample_datasets, load_sample_dataset

__all__ = [
    "CanonicalRecord",
    "DatasetMetadata",
    "DatasetType",
    "FeatureAttribution",
    "is_number",
    "DatasetStore",
    "get_store",
    "SAMPLE_DATASETS",
    "list_sample_datasets",
    "load_sample_dataset",
]
