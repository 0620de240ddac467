"""
Dataset Scaling Module

Computes the scaling statistics charts use for bar lengths and axes.

Custom datasets are scaled with metrics over the whole feature list, so a
feature keeps the same bar length whichever chart shows it. Sample datasets
are scaled locally from the subset each chart displays.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np

from .selection import VisualizationKind, select
from ..config import SCALING_CONFIG
from ..data.models import DatasetType, FeatureAttribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScalingMetrics:
    """Derived scaling statistics; never persisted."""
    max_abs_impact: float = 0.0
    min_impact: float = 0.0
    max_impact: float = 0.0

    def effective_max_abs_impact(self, floor: float = None) -> float:
        """Denominator for bar lengths, never below the floor."""
        floor = SCALING_CONFIG["floor"] if floor is None else floor
        return max(self.max_abs_impact, floor)

    def effective_range(self, floor: float = None) -> float:
        """Width of the signed axis, never below the floor."""
        floor = SCALING_CONFIG["floor"] if floor is None else floor
        return max(self.max_impact - self.min_impact, floor)

    def to_dict(self) -> Dict[str, float]:
        return {
            "maxAbsImpact": self.max_abs_impact,
            "minImpact": self.min_impact,
            "maxImpact": self.max_impact,
        }


def compute_scaling_metrics(features: Sequence[FeatureAttribution]) -> ScalingMetrics:
    """
    Aggregate scaling metrics over a feature list.

    An empty list yields zeros; consumers apply the floor themselves.
    """
    if len(features) == 0:
        return ScalingMetrics()

    importances = np.array([f.importance for f in features], dtype=float)
    values = np.array([f.value for f in features], dtype=float)

    return ScalingMetrics(
        max_abs_impact=float(importances.max()),
        min_impact=float(values.min()),
        max_impact=float(values.max()),
    )


def scale(
    features: Sequence[FeatureAttribution],
    dataset_type: DatasetType,
    kind: VisualizationKind = VisualizationKind.BAR
) -> ScalingMetrics:
    """
    Scaling metrics for one visualization under the dataset-type policy.

    Args:
        features: The full canonical feature list of the dataset
        dataset_type: Custom datasets use dataset-wide metrics; sample
                      datasets use metrics over the visualization's own selection
        kind: The visualization being scaled (only affects sample datasets)
    """
    dataset_type = DatasetType(dataset_type)
    if dataset_type is DatasetType.CUSTOM:
        return compute_scaling_metrics(features)

    return compute_scaling_metrics(select(features, kind).features)
