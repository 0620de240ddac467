"""
Chart Data Module

Renderer-facing composition: what a visualization displays for a dataset
and how it is scaled. Rendering itself happens elsewhere.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .scaling import ScalingMetrics, compute_scaling_metrics, scale
from .selection import OrderingStrategy, VisualizationKind, ordering_for, select
from ..config import FALLBACK_FEATURES
from ..data.models import CanonicalRecord, DatasetType, FeatureAttribution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartData:
    """Displayed features and scaling for one visualization."""
    kind: VisualizationKind
    strategy: OrderingStrategy
    dataset_type: DatasetType
    target: str
    features: Tuple[FeatureAttribution, ...]
    scaling: ScalingMetrics
    is_fallback: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "strategy": self.strategy.value,
            "datasetType": self.dataset_type.value,
            "target": self.target,
            "features": [f.to_dict() for f in self.features],
            "scaling": self.scaling.to_dict(),
            "effectiveMaxAbsImpact": self.scaling.effective_max_abs_impact(),
            "effectiveRange": self.scaling.effective_range(),
            "isFallback": self.is_fallback,
        }


def fallback_features(kind: VisualizationKind) -> Tuple[FeatureAttribution, ...]:
    """The demonstration data a visualization shows for an empty dataset."""
    return tuple(FeatureAttribution.from_dict(f) for f in FALLBACK_FEATURES[kind.value])


def build_chart_data(record: CanonicalRecord, kind: VisualizationKind) -> ChartData:
    """
    Select and scale the features one visualization displays.

    An empty feature list is replaced with the visualization's own fallback
    data. Custom datasets are scaled with dataset-wide metrics, sample
    datasets with metrics over the displayed features.
    """
    selection = select(record.features, kind)
    is_fallback = selection.is_empty()
    if is_fallback:
        logger.info(f"No informative features for {kind.value}; using fallback data")
        displayed = fallback_features(kind)
    else:
        displayed = selection.features

    if is_fallback and record.dataset_type is DatasetType.SAMPLE:
        scaling = compute_scaling_metrics(displayed)
    else:
        scaling = scale(record.features, record.dataset_type, kind)

    return ChartData(
        kind=kind,
        strategy=ordering_for(kind),
        dataset_type=record.dataset_type,
        target=record.metadata.target or "Model Prediction",
        features=displayed,
        scaling=scaling,
        is_fallback=is_fallback,
    )
