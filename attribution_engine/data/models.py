"""
Canonical Data Model

Defines the normalized attribution record shared by ingestion, storage,
scaling, selection, and the API layer. Records are immutable once built;
re-uploading a document produces a new record.
"""

import copy
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


def is_number(value: Any) -> bool:
    """True for finite real numbers. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


class DatasetType(str, Enum):
    """Origin of a dataset; drives the chart scaling policy."""
    SAMPLE = "sample"
    CUSTOM = "custom"


@dataclass(frozen=True)
class FeatureAttribution:
    """A named feature's signed contribution to a prediction."""

    name: str
    importance: float
    value: float
    is_positive: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "importance": self.importance,
            "value": self.value,
            "isPositive": self.is_positive,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeatureAttribution":
        """Build from the wire shape (camelCase ``isPositive``)."""
        value = float(data["value"]) if is_number(data.get("value")) else 0.0
        importance = (
            float(data["importance"]) if is_number(data.get("importance")) else abs(value)
        )
        is_positive = data.get("isPositive")
        if not isinstance(is_positive, bool):
            is_positive = value >= 0
        return cls(
            name=str(data.get("name", "")),
            importance=importance,
            value=value,
            is_positive=is_positive,
        )


_METADATA_KEYS = ("name", "description", "target", "type", "totalRows", "totalFeatures")


@dataclass(frozen=True)
class DatasetMetadata:
    """Descriptive metadata carried with every canonical record."""

    name: str
    description: str
    target: str
    type: DatasetType
    total_rows: int
    total_features: int
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Detached from the source document and read-only
        object.__setattr__(self, "extra", MappingProxyType(copy.deepcopy(dict(self.extra))))

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(dict(self.extra))
        data.update({
            "name": self.name,
            "description": self.description,
            "target": self.target,
            "type": self.type.value,
            "totalRows": self.total_rows,
            "totalFeatures": self.total_features,
        })
        return data

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        default_type: DatasetType = DatasetType.CUSTOM
    ) -> "DatasetMetadata":
        try:
            dataset_type = DatasetType(data.get("type", default_type))
        except ValueError:
            dataset_type = default_type

        return cls(
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            target=str(data.get("target", "")),
            type=dataset_type,
            total_rows=int(data["totalRows"]) if is_number(data.get("totalRows")) else 0,
            total_features=(
                int(data["totalFeatures"]) if is_number(data.get("totalFeatures")) else 0
            ),
            extra={k: v for k, v in data.items() if k not in _METADATA_KEYS},
        )


@dataclass(frozen=True)
class CanonicalRecord:
    """The unit persisted and retrieved by id."""

    features: Tuple[FeatureAttribution, ...]
    metadata: DatasetMetadata

    @property
    def dataset_type(self) -> DatasetType:
        return self.metadata.type

    def to_dict(self) -> Dict[str, Any]:
        return {
            "features": [f.to_dict() for f in self.features],
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        default_type: DatasetType = DatasetType.CUSTOM
    ) -> "CanonicalRecord":
        features: List[FeatureAttribution] = [
            FeatureAttribution.from_dict(f)
            for f in data.get("features", [])
            if isinstance(f, Mapping)
        ]
        metadata: Optional[Mapping[str, Any]] = data.get("metadata")
        return cls(
            features=tuple(features),
            metadata=DatasetMetadata.from_dict(metadata or {}, default_type=default_type),
        )
