"""
Format Detector Module

Classifies a parsed JSON document into one of the recognized attribution
export shapes. Detection is an exclusive cascade: the first matching
schema wins and later schemas are not consulted.
"""

import logging
from enum import Enum
from typing import Any, Callable, List, Tuple

from ..config import CONTRIBUTION_TABLE_COLUMNS
from ..data.models import is_number
from ..exceptions import FormatError

logger = logging.getLogger(__name__)


class SchemaKind(str, Enum):
    """Recognized attribution export shapes."""
    CONTRIBUTION_TABLE = "contribution_table"  # columns incl. Feature/Contribution/Impact
    COLUMN_MATRIX = "column_matrix"            # columns + data, one row per instance
    SHAP_ARRAYS = "shap_arrays"                # features[] + shap_values[]
    FEATURE_LIST = "feature_list"              # [{"Feature Name", "Contribution"}, ...]
    CANONICAL = "canonical"                    # re-upload of {features, metadata}
    SINGLE_FEATURE = "single_feature"          # {"Feature Name", "Contribution"}


UNRECOGNIZED_MESSAGE = (
    "Invalid JSON structure. Expected an array of feature objects, an object with "
    "'features' and 'shap_values' arrays, an object with 'columns' and 'data' arrays, "
    "or an object with 'features' and 'metadata'."
)


def _has_lists(doc: Any, *keys: str) -> bool:
    return isinstance(doc, dict) and all(isinstance(doc.get(k), list) for k in keys)


def is_contribution_table(doc: Any) -> bool:
    return _has_lists(doc, "columns", "data") and all(
        header in doc["columns"] for header in CONTRIBUTION_TABLE_COLUMNS
    )


def is_column_matrix(doc: Any) -> bool:
    return _has_lists(doc, "columns", "data")


def is_shap_arrays(doc: Any) -> bool:
    return _has_lists(doc, "features", "shap_values")


def is_feature_list(doc: Any) -> bool:
    return isinstance(doc, list)


def is_canonical(doc: Any) -> bool:
    return _has_lists(doc, "features")


def is_single_feature(doc: Any) -> bool:
    return (
        isinstance(doc, dict)
        and bool(doc.get("Feature Name"))
        and is_number(doc.get("Contribution"))
    )


# Order matters: the contribution table is a special case of the column matrix.
DETECTION_ORDER: List[Tuple[SchemaKind, Callable[[Any], bool]]] = [
    (SchemaKind.CONTRIBUTION_TABLE, is_contribution_table),
    (SchemaKind.COLUMN_MATRIX, is_column_matrix),
    (SchemaKind.SHAP_ARRAYS, is_shap_arrays),
    (SchemaKind.FEATURE_LIST, is_feature_list),
    (SchemaKind.CANONICAL, is_canonical),
    (SchemaKind.SINGLE_FEATURE, is_single_feature),
]


def detect_schema(doc: Any) -> SchemaKind:
    """
    Classify a parsed JSON document.

    Args:
        doc: Any parsed JSON value

    Returns:
        The first matching schema kind

    Raises:
        FormatError: If no schema matches
    """
    for kind, matches in DETECTION_ORDER:
        if matches(doc):
            logger.debug(f"Detected schema: {kind.value}")
            return kind

    logger.error("Invalid JSON structure detected")
    raise FormatError(UNRECOGNIZED_MESSAGE)
