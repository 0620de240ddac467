"""
Bundled Sample Datasets

Curated demonstration attributions served by key. Sample datasets use the
per-chart local scaling policy.
"""

import logging
from typing import Dict, Any, List

from .models import CanonicalRecord, DatasetMetadata, DatasetType
from ..exceptions import DatasetNotFoundError

logger = logging.getLogger(__name__)


SAMPLE_DATASETS: Dict[str, Dict[str, Any]] = {
    "bike-operations": {
        "features": [
            {"name": "Hour of Day (Peak)", "importance": 0.42, "value": 0.42, "isPositive": True},
            {"name": "Season: Summer", "importance": 0.3, "value": 0.3, "isPositive": True},
            {"name": "Working Day", "importance": 0.25, "value": 0.25, "isPositive": True},
            {"name": "Year", "importance": 0.2, "value": 0.2, "isPositive": True},
            {"name": "Month: June", "importance": 0.15, "value": 0.15, "isPositive": True},
            {"name": "Weekday", "importance": 0.1, "value": 0.1, "isPositive": True},
            {"name": "Windspeed", "importance": 0.18, "value": -0.18, "isPositive": False},
            {"name": "Humidity", "importance": 0.25, "value": -0.25, "isPositive": False},
            {"name": "Weather: Rain", "importance": 0.35, "value": -0.35, "isPositive": False},
        ],
        "metadata": {
            "name": "Bike Operations Dataset",
            "description": "Bike sharing rental prediction data",
            "target": "Rental Likelihood",
        },
    },
    "diabetes": {
        "features": [
            {"name": "Glucose", "importance": 0.42, "value": 0.42, "isPositive": True},
            {"name": "BMI", "importance": 0.3, "value": 0.3, "isPositive": True},
            {"name": "Age", "importance": 0.25, "value": 0.25, "isPositive": True},
            {"name": "Blood Pressure", "importance": 0.2, "value": 0.2, "isPositive": True},
            {"name": "Insulin", "importance": 0.18, "value": -0.18, "isPositive": False},
            {"name": "Diabetes Pedigree", "importance": 0.15, "value": 0.15, "isPositive": True},
            {"name": "Skin Thickness", "importance": 0.1, "value": -0.1, "isPositive": False},
        ],
        "metadata": {
            "name": "Diabetes Dataset",
            "description": "Diabetes prediction based on health metrics",
            "target": "Diabetes Risk",
        },
    },
    "wine-quality": {
        "features": [
            {"name": "Alcohol", "importance": 0.45, "value": 0.45, "isPositive": True},
            {"name": "Sulphates", "importance": 0.38, "value": 0.38, "isPositive": True},
            {"name": "Volatile Acidity", "importance": 0.3, "value": -0.3, "isPositive": False},
            {"name": "Citric Acid", "importance": 0.25, "value": 0.25, "isPositive": True},
            {"name": "Total Sulfur Dioxide", "importance": 0.22, "value": -0.22, "isPositive": False},
            {"name": "Density", "importance": 0.15, "value": -0.15, "isPositive": False},
            {"name": "pH", "importance": 0.1, "value": 0.1, "isPositive": True},
        ],
        "metadata": {
            "name": "Wine Quality Dataset",
            "description": "Predicting wine quality based on physicochemical properties",
            "target": "Wine Quality Score",
        },
    },
}


def list_sample_datasets() -> List[str]:
    """Keys of the bundled sample datasets."""
    return list(SAMPLE_DATASETS.keys())


def load_sample_dataset(key: str) -> CanonicalRecord:
    """
    Build the canonical record for a bundled sample dataset.

    Raises:
        DatasetNotFoundError: If the key is unknown
    """
    dataset = SAMPLE_DATASETS.get(key)
    if dataset is None:
        logger.error(f"Sample dataset not found: '{key}'. Available: {list_sample_datasets()}")
        raise DatasetNotFoundError(f"Sample dataset '{key}' not found")

    # Imported here: the explainability package imports data.models
    from ..explainability.canonicalizer import canonicalize

    features = canonicalize(dataset["features"])
    metadata = DatasetMetadata.from_dict({
        **dataset["metadata"],
        "type": DatasetType.SAMPLE.value,
        "totalRows": len(dataset["features"]),
        "totalFeatures": len(dataset["features"]),
    })
    return CanonicalRecord(features=tuple(features), metadata=metadata)
