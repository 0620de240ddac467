"""
Pydantic Schemas for API Request/Response Models

Wire field names are camelCase, matching the stored canonical record.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

from ..data.models import DatasetType
from ..explainability.selection import OrderingStrategy, VisualizationKind


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    datasets_loaded: int


class FeatureAttributionModel(BaseModel):
    """A single canonical feature attribution."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    importance: float = Field(..., ge=0, description="Absolute magnitude of the attribution")
    value: float = Field(..., description="Signed attribution")
    is_positive: bool = Field(..., alias="isPositive")


class DatasetMetadataModel(BaseModel):
    """Dataset metadata; unknown uploaded keys are passed through."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    description: str
    target: str
    type: DatasetType
    total_rows: int = Field(..., alias="totalRows")
    total_features: int = Field(..., alias="totalFeatures")


class CanonicalRecordModel(BaseModel):
    """Canonical record as stored and served."""
    features: List[FeatureAttributionModel]
    metadata: DatasetMetadataModel


class UploadResponse(BaseModel):
    """Response from the upload endpoint."""
    id: str
    features: int = Field(..., description="Number of canonical features stored")
    message: str


class CleanupResponse(BaseModel):
    message: str
    deleted: int


class SampleDatasetList(BaseModel):
    datasets: List[str]


class ScalingMetricsModel(BaseModel):
    """Scaling statistics for one dataset or chart."""
    model_config = ConfigDict(populate_by_name=True)

    max_abs_impact: float = Field(..., alias="maxAbsImpact")
    min_impact: float = Field(..., alias="minImpact")
    max_impact: float = Field(..., alias="maxImpact")


class ChartResponse(BaseModel):
    """Features and scaling a visualization should render."""
    model_config = ConfigDict(populate_by_name=True)

    kind: VisualizationKind
    strategy: OrderingStrategy
    dataset_type: DatasetType = Field(..., alias="datasetType")
    target: str
    features: List[FeatureAttributionModel]
    scaling: ScalingMetricsModel
    effective_max_abs_impact: float = Field(..., alias="effectiveMaxAbsImpact")
    effective_range: float = Field(..., alias="effectiveRange")
    is_fallback: bool = Field(..., alias="isFallback")


class ChatTurn(BaseModel):
    """One turn of the caller-held conversation."""
    role: str
    content: str


class AssistantContextRequest(BaseModel):
    """Request for assistant context."""
    visualization: Optional[VisualizationKind] = None
    conversation_history: List[ChatTurn] = Field(default_factory=list)


class AssistantContextResponse(BaseModel):
    """Everything the assistant is allowed to see about a dataset."""
    dataset_name: str
    dataset_type: DatasetType
    target: str
    current_visualization: Optional[str] = None
    features: str
    use_domain_knowledge: bool
    conversation_history: List[ChatTurn]


class ReportResponse(BaseModel):
    """Structured attribution report."""
    timestamp: str
    summary: Dict[str, Any]
    diagnostic_explanation: Dict[str, Any]
