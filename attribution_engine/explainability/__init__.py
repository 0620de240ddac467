"""Explainability package for the attribution engine"""

from .canonicalizer import canonicalize, format_feature_name
from .selection import OrderingStrategy, Selection, VisualizationKind, select
from .scaling import ScalingMetrics, compute_scaling_metrics, scale
from .charts import ChartData, build_chart_data, fallback_features
from .report import AttributionReport

__all__ = [
    "canonicalize",
    "format_feature_name",
    "OrderingStrategy",
    "Selection",
    "VisualizationKind",
    "select",
    "ScalingMetrics",
    "compute_scaling_metrics",
    "scale",
    "ChartData",
    "build_chart_data",
    "fallback_features",
    "AttributionReport",
]
