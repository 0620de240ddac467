"""
Schema Adapters Module

One adapter per recognized export shape. Each converts a classified document
into raw attribution dicts (``name``, ``importance``, ``value``,
``isPositive``) plus whatever metadata the shape carries. Canonical naming,
filtering and ordering happen afterwards in the canonicalizer.
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import numpy as np
import pandas as pd

from .detector import SchemaKind
from ..config import (
    CONTRIBUTION_TABLE_COLUMNS,
    INGESTION_CONFIG,
    POSITIVE_IMPACT_LABEL,
    SCHEMA_METADATA,
)
from ..data.models import is_number
from ..exceptions import FormatError, NumericCoercionWarning

logger = logging.getLogger(__name__)


@dataclass
class AdapterResult:
    """Raw attributions and shape-supplied metadata."""
    schema: SchemaKind
    features: List[Dict[str, Any]]
    metadata: Dict[str, Any] = field(default_factory=dict)
    n_coerced: int = 0


def _raw(name: Any, value: float, is_positive: bool, importance: float = None) -> Dict[str, Any]:
    return {
        "name": name,
        "importance": abs(value) if importance is None else importance,
        "value": value,
        "isPositive": is_positive,
    }


def _name_or_unknown(name: Any) -> Any:
    return name if name else INGESTION_CONFIG["unknown_feature_name"]


def _warn_coerced(schema: SchemaKind, n_coerced: int, action: str):
    if n_coerced:
        message = f"{n_coerced} non-numeric value(s) in {schema.value} export {action}"
        logger.warning(message)
        warnings.warn(message, NumericCoercionWarning, stacklevel=3)


def adapt_contribution_table(doc: Dict[str, Any]) -> AdapterResult:
    """
    Feature/Contribution/Impact table.

    ``isPositive`` comes from the Impact label, independently of the sign of
    the contribution.
    """
    columns = doc["columns"]
    feature_idx, contribution_idx, impact_idx = (
        columns.index(header) for header in CONTRIBUTION_TABLE_COLUMNS
    )

    def cell(row: Any, idx: int) -> Any:
        return row[idx] if isinstance(row, list) and idx < len(row) else None

    features = []
    n_coerced = 0
    for row in doc["data"]:
        contribution = cell(row, contribution_idx)
        if is_number(contribution):
            value = float(contribution)
        else:
            value = 0.0
            n_coerced += 1

        features.append(_raw(
            name=_name_or_unknown(cell(row, feature_idx)),
            value=value,
            is_positive=cell(row, impact_idx) == POSITIVE_IMPACT_LABEL,
        ))

    _warn_coerced(SchemaKind.CONTRIBUTION_TABLE, n_coerced, "replaced with 0")
    metadata = {
        **SCHEMA_METADATA[SchemaKind.CONTRIBUTION_TABLE.value],
        "totalRows": len(features),
        "totalFeatures": len(features),
    }
    return AdapterResult(SchemaKind.CONTRIBUTION_TABLE, features, metadata, n_coerced)


def adapt_column_matrix(doc: Dict[str, Any]) -> AdapterResult:
    """
    Columns/data matrix with one row per explained instance.

    Each column is averaged over its numeric cells only. Non-numeric cells
    count toward neither the sum nor the denominator; a column without any
    numeric cell is omitted.
    """
    columns = doc["columns"]
    data = doc["data"]
    if len(columns) == 0 or len(data) == 0:
        raise FormatError("JSON must contain non-empty 'columns' and 'data' arrays.")

    n_columns = len(columns)
    n_coerced = 0
    matrix = []
    for row in data:
        if not isinstance(row, list):
            continue
        cells = []
        for idx in range(n_columns):
            if idx >= len(row):
                cells.append(np.nan)
            elif is_number(row[idx]):
                cells.append(float(row[idx]))
            else:
                cells.append(np.nan)
                n_coerced += 1
        matrix.append(cells)

    frame = pd.DataFrame(matrix, columns=range(n_columns), dtype=float)
    counts = frame.count()
    means = frame.mean(skipna=True)

    features = []
    for idx, name in enumerate(columns):
        if counts.iloc[idx] == 0:
            logger.debug(f"Column {name!r} has no numeric samples; omitted")
            continue
        average = float(means.iloc[idx])
        features.append(_raw(name=name, value=average, is_positive=average >= 0))

    _warn_coerced(SchemaKind.COLUMN_MATRIX, n_coerced, "excluded from averages")
    metadata = {
        **SCHEMA_METADATA[SchemaKind.COLUMN_MATRIX.value],
        "totalRows": len(data),
        "totalFeatures": n_columns,
    }
    return AdapterResult(SchemaKind.COLUMN_MATRIX, features, metadata, n_coerced)


def adapt_shap_arrays(doc: Dict[str, Any]) -> AdapterResult:
    """Parallel ``features`` and ``shap_values`` arrays of equal length."""
    names = doc["features"]
    shap_values = doc["shap_values"]
    if len(names) != len(shap_values):
        raise FormatError("Feature names and SHAP values arrays must have the same length.")

    features = []
    n_coerced = 0
    for name, shap_value in zip(names, shap_values):
        if is_number(shap_value):
            value = float(shap_value)
        else:
            value = 0.0
            n_coerced += 1
        features.append(_raw(name=_name_or_unknown(name), value=value, is_positive=value >= 0))

    _warn_coerced(SchemaKind.SHAP_ARRAYS, n_coerced, "replaced with 0")
    metadata = doc["metadata"] if isinstance(doc.get("metadata"), dict) else {}
    return AdapterResult(SchemaKind.SHAP_ARRAYS, features, dict(metadata), n_coerced)


def adapt_feature_list(doc: List[Any]) -> AdapterResult:
    """Array of ``{"Feature Name" | name, Contribution}`` objects; nameless entries dropped."""
    features = []
    n_coerced = 0
    for item in doc:
        if not isinstance(item, dict):
            continue
        name = item.get("Feature Name") or item.get("name")
        if not name:
            continue

        contribution = item.get("Contribution")
        if is_number(contribution):
            value = float(contribution)
        else:
            value = 0.0
            n_coerced += 1
        features.append(_raw(name=name, value=value, is_positive=value >= 0))

    _warn_coerced(SchemaKind.FEATURE_LIST, n_coerced, "replaced with 0")
    return AdapterResult(SchemaKind.FEATURE_LIST, features, {}, n_coerced)


def adapt_canonical(doc: Dict[str, Any]) -> AdapterResult:
    """
    Re-upload of a previously canonicalized record.

    Missing fields fall back on each other: importance from ``abs(value)``,
    value from importance, and the sign from whichever is numeric.
    """
    features = []
    for item in doc["features"]:
        if not isinstance(item, dict):
            continue
        importance = item.get("importance")
        value = item.get("value")

        if is_number(importance):
            out_importance = abs(float(importance))
        elif is_number(value):
            out_importance = abs(float(value))
        else:
            out_importance = 0.0

        if is_number(value):
            out_value = float(value)
            is_positive = out_value >= 0
        elif is_number(importance):
            out_value = float(importance)
            is_positive = out_value >= 0
        else:
            out_value = 0.0
            is_positive = False

        name = item.get("name") or item.get("Feature Name")
        features.append(_raw(
            name=_name_or_unknown(name),
            value=out_value,
            is_positive=is_positive,
            importance=out_importance,
        ))

    metadata = doc["metadata"] if isinstance(doc.get("metadata"), dict) else {}
    return AdapterResult(SchemaKind.CANONICAL, features, dict(metadata))


def adapt_single_feature(doc: Dict[str, Any]) -> AdapterResult:
    value = float(doc["Contribution"])
    features = [_raw(name=doc["Feature Name"], value=value, is_positive=value >= 0)]
    return AdapterResult(SchemaKind.SINGLE_FEATURE, features)


ADAPTERS: Dict[SchemaKind, Callable[[Any], AdapterResult]] = {
    SchemaKind.CONTRIBUTION_TABLE: adapt_contribution_table,
    SchemaKind.COLUMN_MATRIX: adapt_column_matrix,
    SchemaKind.SHAP_ARRAYS: adapt_shap_arrays,
    SchemaKind.FEATURE_LIST: adapt_feature_list,
    SchemaKind.CANONICAL: adapt_canonical,
    SchemaKind.SINGLE_FEATURE: adapt_single_feature,
}
