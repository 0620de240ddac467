"""
Top-K Selection Module

Picks the bounded subset of features each visualization displays: up to
``top_k_per_sign`` positive and negative features, then ordered with the
strategy registered for that visualization.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from ..config import ORDERING_BY_VISUALIZATION, SELECTION_CONFIG
from ..data.models import FeatureAttribution


class VisualizationKind(str, Enum):
    """Chart types that consume selections."""
    BAR = "feature-importance"
    TORNADO = "tornado"
    TORNADO_VARIANT = "tornado-variant"
    FORCE_FIELD = "force-field"


class OrderingStrategy(str, Enum):
    """How the two selected partitions are combined for display."""
    COMBINED_DESC = "combined_desc"
    SPLIT_POS_DESC_NEG_ASC = "split_pos_desc_neg_asc"


def ordering_for(kind: VisualizationKind) -> OrderingStrategy:
    return OrderingStrategy(ORDERING_BY_VISUALIZATION[kind.value])


@dataclass(frozen=True)
class Selection:
    """Ordered subset of features chosen for one visualization."""
    kind: VisualizationKind
    strategy: OrderingStrategy
    features: Tuple[FeatureAttribution, ...]

    @property
    def positive(self) -> List[FeatureAttribution]:
        return [f for f in self.features if f.is_positive]

    @property
    def negative(self) -> List[FeatureAttribution]:
        return [f for f in self.features if not f.is_positive]

    def is_empty(self) -> bool:
        return len(self.features) == 0


def _by_importance(features: Sequence[FeatureAttribution], descending: bool = True):
    return sorted(features, key=lambda f: f.importance, reverse=descending)


def top_by_sign(
    features: Sequence[FeatureAttribution],
    k: int = None
) -> Tuple[List[FeatureAttribution], List[FeatureAttribution]]:
    """
    Split on ``is_positive`` and keep the k most important of each side.

    Partitions with fewer than k members are returned as-is, never padded.
    """
    k = SELECTION_CONFIG["top_k_per_sign"] if k is None else k
    positive = _by_importance([f for f in features if f.is_positive])[:k]
    negative = _by_importance([f for f in features if not f.is_positive])[:k]
    return positive, negative


def order_selection(
    positive: List[FeatureAttribution],
    negative: List[FeatureAttribution],
    strategy: OrderingStrategy
) -> List[FeatureAttribution]:
    """Combine the selected partitions for display."""
    if strategy is OrderingStrategy.COMBINED_DESC:
        return _by_importance(positive + negative)

    if strategy is OrderingStrategy.SPLIT_POS_DESC_NEG_ASC:
        # Positives already descending; negatives smallest magnitude first
        return list(positive) + _by_importance(negative, descending=False)

    raise ValueError(f"Unknown ordering strategy: {strategy}")


def select(
    features: Sequence[FeatureAttribution],
    kind: VisualizationKind,
    strategy: OrderingStrategy = None
) -> Selection:
    """
    Select and order the features a visualization displays.

    Args:
        features: The full canonical feature list of a dataset
        kind: The requesting visualization
        strategy: Override of the visualization's registered ordering

    Returns:
        The selection; empty when ``features`` is empty
    """
    strategy = strategy or ordering_for(kind)
    positive, negative = top_by_sign(features)
    return Selection(
        kind=kind,
        strategy=strategy,
        features=tuple(order_selection(positive, negative, strategy)),
    )
