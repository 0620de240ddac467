"""
Canonicalizer Module

Normalizes raw adapter output into canonical FeatureAttribution records:
consistent naming, importance derived from the signed value, zero-importance
filtering, and a stable descending sort by importance.
"""

import logging
from typing import Any, Iterable, List, Mapping

from ..config import INGESTION_CONFIG
from ..data.models import FeatureAttribution, is_number

logger = logging.getLogger(__name__)


def format_feature_name(name: Any) -> str:
    """Upper-case the first character only; the rest is left untouched."""
    if name is None or name == "":
        name = INGESTION_CONFIG["unknown_feature_name"]
    name = str(name)
    return name[:1].upper() + name[1:]


def canonicalize(raw_features: Iterable[Mapping[str, Any]]) -> List[FeatureAttribution]:
    """
    Canonicalize raw attributions.

    ``importance`` is always recomputed as ``abs(value)``. ``isPositive`` is
    carried through as given, so it may disagree with the sign of ``value``
    when the source supplied an explicit label. Records with zero importance
    are dropped.

    Args:
        raw_features: Dicts with ``name``, ``value`` and optionally ``isPositive``

    Returns:
        Canonical features sorted by descending importance, ties in input order
    """
    processed: List[FeatureAttribution] = []
    n_dropped = 0

    for raw in raw_features:
        if not isinstance(raw, Mapping):
            n_dropped += 1
            continue

        value = float(raw["value"]) if is_number(raw.get("value")) else 0.0
        is_positive = raw.get("isPositive")
        if not isinstance(is_positive, bool):
            is_positive = value >= 0

        importance = abs(value)
        if importance <= 0:
            n_dropped += 1
            continue

        processed.append(FeatureAttribution(
            name=format_feature_name(raw.get("name")),
            importance=importance,
            value=value,
            is_positive=is_positive,
        ))

    if n_dropped:
        logger.debug(f"Dropped {n_dropped} uninformative attributions")

    # sorted() is stable, so equal importances keep adapter order
    return sorted(processed, key=lambda f: f.importance, reverse=True)
