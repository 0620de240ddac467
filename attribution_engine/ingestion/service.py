"""
Ingestion Service

Turns one parsed JSON export into an immutable CanonicalRecord:
detect the schema, run its adapter, canonicalize, and build metadata.
"""

import logging
from typing import Any, Dict, Optional

from .adapters import ADAPTERS, AdapterResult
from .detector import SchemaKind, detect_schema
from ..config import INGESTION_CONFIG
from ..data.models import CanonicalRecord, DatasetMetadata, DatasetType, is_number
from ..explainability.canonicalizer import canonicalize

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Service for ingesting attribution exports.

    Supports:
    - The six recognized export shapes
    - Metadata defaulting and merging of uploaded metadata
    - Optional "last rule wins" handling of contribution tables
    """

    def __init__(self, last_rule_wins: Optional[bool] = None):
        """
        Initialize the ingestion service.

        Args:
            last_rule_wins: Also run contribution tables through the column
                            matrix adapter and keep that result. Defaults to
                            INGESTION_CONFIG["last_rule_wins"].
        """
        if last_rule_wins is None:
            last_rule_wins = INGESTION_CONFIG["last_rule_wins"]
        self.last_rule_wins = last_rule_wins

    def adapt(self, doc: Any) -> AdapterResult:
        """Detect the schema and run its adapter."""
        kind = detect_schema(doc)
        result = ADAPTERS[kind](doc)

        if kind is SchemaKind.CONTRIBUTION_TABLE and self.last_rule_wins:
            logger.warning("Contribution table re-processed as column matrix (last rule wins)")
            result = ADAPTERS[SchemaKind.COLUMN_MATRIX](doc)

        return result

    def ingest(self, doc: Any, filename: Optional[str] = None) -> CanonicalRecord:
        """
        Ingest one parsed JSON document.

        Args:
            doc: Parsed JSON value
            filename: Upload name, used as the default dataset name

        Returns:
            The canonical record

        Raises:
            FormatError: If the document matches no schema or fails a structural check
        """
        result = self.adapt(doc)
        features = canonicalize(result.features)
        metadata = self._build_metadata(result, filename or INGESTION_CONFIG["default_filename"])

        logger.info(
            f"Processed {result.schema.value} export: {len(result.features)} raw, "
            f"{len(features)} canonical features"
        )
        return CanonicalRecord(features=tuple(features), metadata=metadata)

    def _build_metadata(self, result: AdapterResult, filename: str) -> DatasetMetadata:
        """Defaults, then shape-supplied metadata on top; type is always custom."""
        n_raw = len(result.features)
        defaults: Dict[str, Any] = {
            "name": filename,
            "description": INGESTION_CONFIG["default_description"],
            "target": INGESTION_CONFIG["default_target"],
            "totalRows": n_raw,
            "totalFeatures": n_raw,
        }

        merged = {**defaults, **result.metadata}
        for key in ("name", "description", "target"):
            if merged.get(key) is None:
                merged[key] = defaults[key]
        for key in ("totalRows", "totalFeatures"):
            if not is_number(merged.get(key)):
                merged[key] = defaults[key]
        merged["type"] = DatasetType.CUSTOM.value

        return DatasetMetadata.from_dict(merged)
