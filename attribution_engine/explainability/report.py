"""
Attribution Report Module

Builds structured summaries of a canonical record for people and for the
conversational assistant, which only ever sees metadata and a name/importance
summary of the features.
"""

import pandas as pd
from typing import Dict, Any, List, Optional
from datetime import datetime
import json
import logging

from ..config import ASSISTANT_CONFIG
from ..data.models import CanonicalRecord, DatasetType

logger = logging.getLogger(__name__)


class AttributionReport:
    """
    Generates structured reports for a dataset's attributions.

    Combines:
    - Dataset metadata
    - Positive and negative factors by importance
    - A short key insight
    - Assistant context (metadata + feature summary + caller-held history)
    """

    def __init__(self):
        """Initialize the report generator."""
        self.report: Dict[str, Any] = {}

    def generate(self, record: CanonicalRecord) -> Dict[str, Any]:
        """
        Generate a report for a canonical record.

        Args:
            record: Canonical record to summarize

        Returns:
            Complete report
        """
        self.report = {
            "timestamp": datetime.now().isoformat(),
            "summary": self._generate_summary(record),
            "diagnostic_explanation": self._format_factors(record),
        }
        return self.report

    def _generate_summary(self, record: CanonicalRecord) -> Dict[str, Any]:
        metadata = record.metadata
        return {
            "dataset": metadata.name,
            "description": metadata.description,
            "target": metadata.target,
            "type": metadata.type.value,
            "n_features": len(record.features),
        }

    def _feature_frame(self, record: CanonicalRecord) -> pd.DataFrame:
        return pd.DataFrame(
            [f.to_dict() for f in record.features],
            columns=["name", "importance", "value", "isPositive"],
        )

    def _format_factors(self, record: CanonicalRecord) -> Dict[str, Any]:
        """Split features by direction, strongest first."""
        if not record.features:
            return {
                "positive_factors": [],
                "negative_factors": [],
                "key_insight": self._generate_insight([], [], record.metadata.target),
            }

        frame = self._feature_frame(record)
        max_factors = ASSISTANT_CONFIG["max_factors"]

        ranked = frame.sort_values("importance", ascending=False, kind="stable")
        is_positive = ranked["isPositive"].astype(bool)
        positive = ranked[is_positive]
        negative = ranked[~is_positive]

        positive_factors = positive[["name", "value", "importance"]].head(max_factors).to_dict("records")
        negative_factors = negative[["name", "value", "importance"]].head(max_factors).to_dict("records")

        return {
            "positive_factors": positive_factors,
            "negative_factors": negative_factors,
            "key_insight": self._generate_insight(positive_factors, negative_factors, record.metadata.target),
        }

    def _generate_insight(
        self,
        positive: List[Dict],
        negative: List[Dict],
        target: str
    ) -> str:
        if not positive and not negative:
            return "Unable to determine key factors."

        insights = []
        if positive:
            insights.append(f"{positive[0]['name']} pushes {target} up the most.")
        if negative:
            insights.append(f"{negative[0]['name']} pulls {target} down the most.")

        return " ".join(insights)

    def feature_summary(self, record: CanonicalRecord) -> str:
        """``"Name (importance)"`` pairs joined by commas, or ``"None"``."""
        if not record.features:
            return "None"
        return ", ".join(f"{f.name} ({f.importance:g})" for f in record.features)

    def assistant_context(
        self,
        record: CanonicalRecord,
        visualization: Optional[str] = None,
        conversation_history: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """
        Context handed to the conversational assistant.

        Conversation history is owned by the caller and passed in; only the
        most recent turns are kept.

        Args:
            record: Dataset being discussed
            visualization: Chart currently on screen
            conversation_history: Prior turns as ``{"role", "content"}`` dicts
        """
        metadata = record.metadata
        history = list(conversation_history or [])[-ASSISTANT_CONFIG["history_turns"]:]

        return {
            "dataset_name": metadata.name or "User Dataset",
            "dataset_type": metadata.type.value,
            "target": metadata.target or "Unknown",
            "current_visualization": visualization,
            "features": self.feature_summary(record),
            # Sample datasets are well known; custom ones must stick to the data
            "use_domain_knowledge": metadata.type is DatasetType.SAMPLE,
            "conversation_history": history,
        }

    def to_json(self) -> str:
        """Export report as JSON string."""
        return json.dumps(self.report, indent=2, default=str)

    def to_markdown(self) -> str:
        """Export report as Markdown."""
        md = []

        summary = self.report.get("summary", {})
        md.append(f"# Attribution Report: {summary.get('dataset', 'Unknown')}\n")
        md.append(f"*Generated: {self.report.get('timestamp', 'Unknown')}*\n\n")
        md.append(f"**Target:** {summary.get('target', '')}\n")
        md.append(f"**Features:** {summary.get('n_features', 0)}\n\n")

        diagnostic = self.report.get("diagnostic_explanation", {})
        if diagnostic.get("positive_factors"):
            md.append("## Positive Factors\n")
            for f in diagnostic["positive_factors"]:
                md.append(f"- **{f['name']}**: {f['value']:+.3f}\n")
            md.append("\n")

        if diagnostic.get("negative_factors"):
            md.append("## Negative Factors\n")
            for f in diagnostic["negative_factors"]:
                md.append(f"- **{f['name']}**: {f['value']:+.3f}\n")
            md.append("\n")

        if diagnostic.get("key_insight"):
            md.append(f"{diagnostic['key_insight']}\n")

        return "".join(md)
