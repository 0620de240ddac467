"""Ingestion package for the attribution engine"""

from .detector import SchemaKind, detect_schema
from .adapters import ADAPTERS, AdapterResult
from .service import IngestionService

__all__ = ["SchemaKind", "detect_schema", "ADAPTERS", "AdapterResult", "IngestionService"]
