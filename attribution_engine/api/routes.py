"""
FastAPI Routes Module

Implements the API endpoints:
- /datasets: Upload, fetch, delete and clean up canonical records
- /sample-datasets: Bundled demonstration datasets
- /.../metrics, /.../charts/{kind}: Scaling and selection for renderers
- /.../report, /.../assistant-context: Summaries for people and the assistant
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from .schemas import (
    AssistantContextRequest,
    AssistantContextResponse,
    CanonicalRecordModel,
    ChartResponse,
    CleanupResponse,
    ReportResponse,
    SampleDatasetList,
    ScalingMetricsModel,
    UploadResponse,
)
from ..config import INGESTION_CONFIG
from ..data.models import CanonicalRecord, DatasetType
from ..data.samples import list_sample_datasets, load_sample_dataset
from ..data.store import DatasetStore, get_store
from ..exceptions import DatasetNotFoundError, FormatError
from ..explainability import (
    AttributionReport,
    VisualizationKind,
    build_chart_data,
    compute_scaling_metrics,
)
from ..ingestion import IngestionService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_ingestion_service() -> IngestionService:
    return IngestionService()


def _stored_record(store: DatasetStore, dataset_id: str) -> CanonicalRecord:
    try:
        return store.get(dataset_id)
    except DatasetNotFoundError as e:
        logger.error(f"Dataset lookup failed: {e}")
        raise HTTPException(status_code=404, detail="Dataset not found")


def _sample_record(key: str) -> CanonicalRecord:
    try:
        return load_sample_dataset(key)
    except DatasetNotFoundError:
        raise HTTPException(status_code=404, detail="Dataset not found")


def _chart_response(record: CanonicalRecord, kind: VisualizationKind) -> ChartResponse:
    try:
        chart = build_chart_data(record, kind)
        return ChartResponse.model_validate(chart.to_dict())
    except Exception as e:
        logger.error(f"Chart data error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _assistant_response(
    record: CanonicalRecord,
    request: AssistantContextRequest
) -> AssistantContextResponse:
    context = AttributionReport().assistant_context(
        record,
        visualization=request.visualization.value if request.visualization else None,
        conversation_history=[turn.model_dump() for turn in request.conversation_history],
    )
    return AssistantContextResponse.model_validate(context)


# =============================================================================
# CUSTOM DATASETS
# =============================================================================

@router.post("/datasets", response_model=UploadResponse)
async def upload_dataset(
    payload: Any = Body(..., description="Parsed XAI export"),
    filename: str = Query(INGESTION_CONFIG["default_filename"]),
    store: DatasetStore = Depends(get_store),
    ingestion: IngestionService = Depends(get_ingestion_service),
) -> UploadResponse:
    """
    Normalize an uploaded attribution export and store it.

    Returns:
        The new dataset id and the number of canonical features.
    """
    if not filename.endswith(".json"):
        raise HTTPException(
            status_code=400,
            detail="Unsupported file type. Only JSON files are accepted.",
        )

    try:
        record = ingestion.ingest(payload, filename=filename)
    except FormatError as e:
        logger.error(f"Upload rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    dataset_id = store.put(record)
    return UploadResponse(
        id=dataset_id,
        features=len(record.features),
        message="Dataset uploaded successfully",
    )


@router.post("/datasets/cleanup", response_model=CleanupResponse)
async def cleanup_datasets(store: DatasetStore = Depends(get_store)) -> CleanupResponse:
    """Delete all temporary custom datasets."""
    deleted = store.delete_by_type(DatasetType.CUSTOM)
    return CleanupResponse(
        message="Temporary custom datasets cleaned up successfully.",
        deleted=deleted,
    )


@router.get("/datasets/{dataset_id}", response_model=CanonicalRecordModel)
async def get_dataset(
    dataset_id: str,
    store: DatasetStore = Depends(get_store),
) -> CanonicalRecordModel:
    record = _stored_record(store, dataset_id)
    return CanonicalRecordModel.model_validate(record.to_dict())


@router.delete("/datasets/{dataset_id}", status_code=204)
async def delete_dataset(dataset_id: str, store: DatasetStore = Depends(get_store)):
    try:
        store.delete(dataset_id)
    except DatasetNotFoundError:
        raise HTTPException(status_code=404, detail="Dataset not found")


@router.get("/datasets/{dataset_id}/metrics", response_model=ScalingMetricsModel)
async def get_dataset_metrics(
    dataset_id: str,
    store: DatasetStore = Depends(get_store),
) -> ScalingMetricsModel:
    """Dataset-wide scaling metrics over the full feature list."""
    record = _stored_record(store, dataset_id)
    metrics = compute_scaling_metrics(record.features)
    return ScalingMetricsModel.model_validate(metrics.to_dict())


@router.get("/datasets/{dataset_id}/charts/{kind}", response_model=ChartResponse)
async def get_dataset_chart(
    dataset_id: str,
    kind: VisualizationKind,
    store: DatasetStore = Depends(get_store),
) -> ChartResponse:
    """Selection and scaling for one visualization of a stored dataset."""
    return _chart_response(_stored_record(store, dataset_id), kind)


@router.get("/datasets/{dataset_id}/report", response_model=ReportResponse)
async def get_dataset_report(
    dataset_id: str,
    store: DatasetStore = Depends(get_store),
) -> ReportResponse:
    record = _stored_record(store, dataset_id)
    return ReportResponse.model_validate(AttributionReport().generate(record))


@router.post("/datasets/{dataset_id}/assistant-context", response_model=AssistantContextResponse)
async def get_dataset_assistant_context(
    dataset_id: str,
    request: AssistantContextRequest,
    store: DatasetStore = Depends(get_store),
) -> AssistantContextResponse:
    """Metadata and feature summary for the conversational assistant."""
    return _assistant_response(_stored_record(store, dataset_id), request)


# =============================================================================
# SAMPLE DATASETS
# =============================================================================

@router.get("/sample-datasets", response_model=SampleDatasetList)
async def get_sample_datasets() -> SampleDatasetList:
    return SampleDatasetList(datasets=list_sample_datasets())


@router.get("/sample-datasets/{key}", response_model=CanonicalRecordModel)
async def get_sample_dataset(key: str) -> CanonicalRecordModel:
    record = _sample_record(key)
    return CanonicalRecordModel.model_validate(record.to_dict())


@router.get("/sample-datasets/{key}/charts/{kind}", response_model=ChartResponse)
async def get_sample_chart(key: str, kind: VisualizationKind) -> ChartResponse:
    """Selection and locally scaled metrics for one visualization of a sample."""
    return _chart_response(_sample_record(key), kind)


@router.post("/sample-datasets/{key}/assistant-context", response_model=AssistantContextResponse)
async def get_sample_assistant_context(
    key: str,
    request: AssistantContextRequest,
) -> AssistantContextResponse:
    return _assistant_response(_sample_record(key), request)
