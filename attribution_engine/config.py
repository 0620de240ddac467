"""
Attribution Engine Configuration

Central configuration for all system components including paths, ingestion
defaults, selection limits, scaling floor, and per-visualization behaviour.
"""

from pathlib import Path
from typing import Dict, List, Any

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"
STORE_DIR = DATA_DIR / "datasets"

# Load the store from STORE_DIR on startup and save it on shutdown
STORE_CONFIG = {
    "persist": False,
}

# =============================================================================
# INGESTION CONFIGURATION
# =============================================================================

INGESTION_CONFIG = {
    "default_filename": "uploaded.json",
    "unknown_feature_name": "Unknown Feature",
    # When True, a document matching the Feature/Contribution/Impact table is
    # also run through the columns/data adapter and that result is kept.
    "last_rule_wins": False,
    "default_description": "Custom uploaded XAI output",
    "default_target": "Unknown Target",
}

# Column headers that identify the contribution table export
CONTRIBUTION_TABLE_COLUMNS = ("Feature", "Contribution", "Impact")
POSITIVE_IMPACT_LABEL = "Positive"

# Adapter-level metadata defaults, keyed by schema
SCHEMA_METADATA = {
    "contribution_table": {
        "description": "Feature contribution analysis",
        "target": "Model Prediction",
    },
    "column_matrix": {
        "description": "Aggregated SHAP values from multiple instances",
        "target": "Model Prediction",
    },
}

# =============================================================================
# SELECTION & SCALING CONFIGURATION
# =============================================================================

SELECTION_CONFIG = {
    "top_k_per_sign": 3,
}

SCALING_CONFIG = {
    # Substituted for a zero denominator by chart consumers
    "floor": 0.01,
}

# Visualization kind -> ordering strategy name
ORDERING_BY_VISUALIZATION = {
    "feature-importance": "combined_desc",
    "tornado": "combined_desc",
    "force-field": "combined_desc",
    "tornado-variant": "split_pos_desc_neg_asc",
}

# =============================================================================
# FALLBACK DEMONSTRATION DATA (one list per visualization)
# =============================================================================

FALLBACK_FEATURES: Dict[str, List[Dict[str, Any]]] = {
    "feature-importance": [
        {"name": "Hour of Day (Peak)", "value": 0.42, "isPositive": True},
        {"name": "Season: Summer", "value": 0.3, "isPositive": True},
        {"name": "Working Day", "value": 0.25, "isPositive": True},
        {"name": "Weather: Rain", "value": -0.35, "isPositive": False},
        {"name": "Humidity", "value": -0.25, "isPositive": False},
    ],
    "tornado": [
        {"name": "Hour of Day (Peak)", "value": 0.42, "isPositive": True},
        {"name": "Weather: Rain", "value": -0.35, "isPositive": False},
        {"name": "Season: Summer", "value": 0.3, "isPositive": True},
        {"name": "Humidity", "value": -0.25, "isPositive": False},
        {"name": "Working Day", "value": 0.25, "isPositive": True},
        {"name": "Year", "value": 0.2, "isPositive": True},
        {"name": "Windspeed", "value": -0.18, "isPositive": False},
    ],
    "tornado-variant": [
        {"name": "TEMPERATURE", "value": 0.42, "isPositive": True},
        {"name": "HOUR OF DAY (PEAK)", "value": 0.38, "isPositive": True},
        {"name": "SEASON: SUMMER", "value": 0.28, "isPositive": True},
        {"name": "WEATHER: RAIN", "value": -0.35, "isPositive": False},
        {"name": "HUMIDITY", "value": -0.25, "isPositive": False},
        {"name": "WINDSPEED", "value": -0.18, "isPositive": False},
    ],
    "force-field": [
        {"name": "Improved customer response time", "value": 0.42, "isPositive": True},
        {"name": "Higher margins", "value": 0.3, "isPositive": True},
        {"name": "Improved access", "value": 0.25, "isPositive": True},
        {"name": "Lower ongoing cost", "value": 0.2, "isPositive": True},
        {"name": "Difficult to transition", "value": -0.35, "isPositive": False},
        {"name": "New skills needed", "value": -0.3, "isPositive": False},
        {"name": "Impact on workload", "value": -0.25, "isPositive": False},
        {"name": "Time taken", "value": -0.2, "isPositive": False},
        {"name": "Cost", "value": -0.15, "isPositive": False},
    ],
}

# =============================================================================
# ASSISTANT CONFIGURATION
# =============================================================================

ASSISTANT_CONFIG = {
    "history_turns": 5,
    "max_factors": 5,
}

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_CONFIG = {
    "title": "XAI Attribution Engine API",
    "description": "API for normalizing feature-attribution exports and preparing chart data",
    "version": "1.0.0",
    "host": "0.0.0.0",
    "port": 8000,
    "prefix": "/api/v1",
}

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
