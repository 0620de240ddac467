"""
Tests for Canonicalization, Scaling, Selection, Chart Data and Reports
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from attribution_engine.data import (
    CanonicalRecord,
    DatasetMetadata,
    DatasetType,
    FeatureAttribution,
    load_sample_dataset,
)
from attribution_engine.explainability import (
    AttributionReport,
    OrderingStrategy,
    VisualizationKind,
    build_chart_data,
    canonicalize,
    compute_scaling_metrics,
    scale,
    select,
)


def feature(name, value, is_positive=None):
    if is_positive is None:
        is_positive = value >= 0
    return FeatureAttribution(name=name, importance=abs(value), value=value, is_positive=is_positive)


def make_record(features, dataset_type=DatasetType.CUSTOM, target="Outcome"):
    metadata = DatasetMetadata(
        name="test.json",
        description="test",
        target=target,
        type=dataset_type,
        total_rows=len(features),
        total_features=len(features),
    )
    return CanonicalRecord(features=tuple(features), metadata=metadata)


@pytest.fixture
def five_positive_one_negative():
    return [
        feature("p1", 0.9),
        feature("p2", 0.5),
        feature("p3", 0.3),
        feature("p4", 0.2),
        feature("p5", 0.1),
        feature("n1", -0.6),
    ]


@pytest.fixture
def mixed_features():
    return [
        feature("p1", 0.9),
        feature("n1", -0.8),
        feature("p2", 0.5),
        feature("n2", -0.4),
        feature("p3", 0.3),
        feature("n3", -0.2),
        feature("n4", -0.1),
    ]


class TestCanonicalizer:
    """Tests for canonicalization."""

    def test_only_first_character_capitalized(self):
        result = canonicalize([{"name": "hOUR of day", "value": 0.1}])
        assert result[0].name == "HOUR of day"

    def test_importance_recomputed_flag_kept(self):
        """Supplied importance is ignored; isPositive is carried as given."""
        result = canonicalize([
            {"name": "a", "importance": 9.0, "value": -0.5, "isPositive": True}
        ])
        assert result == [FeatureAttribution("A", 0.5, -0.5, True)]

    def test_zero_importance_dropped(self):
        result = canonicalize([
            {"name": "a", "value": 0},
            {"name": "b", "value": 0.0},
            {"name": "c", "value": "x"},
            {"name": "d", "value": 0.2},
        ])
        assert [f.name for f in result] == ["D"]

    def test_stable_descending_sort(self):
        """Ties keep input order."""
        result = canonicalize([
            {"name": "a", "value": 0.3},
            {"name": "b", "value": -0.3},
            {"name": "c", "value": 0.5},
            {"name": "d", "value": 0.3},
        ])
        assert [f.name for f in result] == ["C", "A", "B", "D"]

    def test_missing_flag_derived_from_value(self):
        result = canonicalize([{"name": "a", "value": -0.1}])
        assert result[0].is_positive is False

    def test_missing_name(self):
        result = canonicalize([{"value": 0.1}])
        assert result[0].name == "Unknown Feature"


class TestScaling:
    """Tests for scaling metrics."""

    def test_dataset_metrics(self):
        metrics = compute_scaling_metrics([
            feature("a", 0.5), feature("b", -0.3), feature("c", 0.2)
        ])
        assert metrics.max_abs_impact == pytest.approx(0.5)
        assert metrics.min_impact == pytest.approx(-0.3)
        assert metrics.max_impact == pytest.approx(0.5)

    def test_empty_list_is_zero(self):
        """Empty input yields zeros; the floor is applied by consumers."""
        metrics = compute_scaling_metrics([])
        assert (metrics.max_abs_impact, metrics.min_impact, metrics.max_impact) == (0, 0, 0)
        assert metrics.effective_max_abs_impact() == pytest.approx(0.01)
        assert metrics.effective_range() == pytest.approx(0.01)

    def test_custom_uses_full_list(self):
        """Features outside a chart's selection still define custom scaling."""
        features = [
            feature("p1", 1.0),
            feature("p2", 0.9),
            feature("p3", 0.8),
            feature("flagged", -0.7, is_positive=True),
            feature("n1", -0.1),
        ]
        metrics = scale(features, DatasetType.CUSTOM, VisualizationKind.BAR)
        assert metrics.min_impact == pytest.approx(-0.7)

    def test_sample_uses_local_selection(self):
        """Sample datasets are scaled from what the chart displays."""
        features = [
            feature("p1", 1.0),
            feature("p2", 0.9),
            feature("p3", 0.8),
            feature("flagged", -0.7, is_positive=True),
            feature("n1", -0.1),
        ]
        metrics = scale(features, DatasetType.SAMPLE, VisualizationKind.BAR)
        assert metrics.min_impact == pytest.approx(-0.1)
        assert metrics.max_abs_impact == pytest.approx(1.0)

    def test_accepts_type_string(self):
        metrics = scale([feature("a", 0.4)], "custom")
        assert metrics.max_abs_impact == pytest.approx(0.4)


class TestSelection:
    """Tests for Top-K selection."""

    def test_asymmetric_selection_not_padded(self, five_positive_one_negative):
        selection = select(five_positive_one_negative, VisualizationKind.BAR)

        assert len(selection.positive) == 3
        assert len(selection.negative) == 1
        assert [f.name for f in selection.features] == ["p1", "n1", "p2", "p3"]

    def test_combined_descending_for_bar_tornado_force(self, mixed_features):
        for kind in (VisualizationKind.BAR, VisualizationKind.TORNADO, VisualizationKind.FORCE_FIELD):
            selection = select(mixed_features, kind)
            assert selection.strategy is OrderingStrategy.COMBINED_DESC
            assert [f.name for f in selection.features] == ["p1", "n1", "p2", "n2", "p3", "n3"]

    def test_split_ordering_for_tornado_variant(self, mixed_features):
        """Positives descending, then negatives ascending by importance."""
        selection = select(mixed_features, VisualizationKind.TORNADO_VARIANT)

        assert selection.strategy is OrderingStrategy.SPLIT_POS_DESC_NEG_ASC
        assert [f.name for f in selection.features] == ["p1", "p2", "p3", "n3", "n2", "n1"]

    def test_strategy_override(self, mixed_features):
        selection = select(
            mixed_features, VisualizationKind.BAR, OrderingStrategy.SPLIT_POS_DESC_NEG_ASC
        )
        assert [f.name for f in selection.features][:3] == ["p1", "p2", "p3"]

    def test_partition_follows_flag_not_sign(self):
        features = [feature("a", -0.5, is_positive=True), feature("b", 0.4, is_positive=False)]
        selection = select(features, VisualizationKind.BAR)

        assert [f.name for f in selection.positive] == ["a"]
        assert [f.name for f in selection.negative] == ["b"]

    def test_empty_input(self):
        selection = select([], VisualizationKind.TORNADO)
        assert selection.is_empty()

    def test_repeatable(self, mixed_features):
        assert select(mixed_features, VisualizationKind.BAR) == select(mixed_features, VisualizationKind.BAR)


class TestChartData:
    """Tests for chart data composition."""

    def test_custom_scaling_consistent_across_charts(self, mixed_features):
        """Switching chart type never changes a custom dataset's scale."""
        record = make_record(mixed_features)
        scalings = {build_chart_data(record, kind).scaling for kind in VisualizationKind}

        assert len(scalings) == 1
        assert scalings.pop() == compute_scaling_metrics(mixed_features)

    def test_sample_scaling_is_local(self):
        features = [
            feature("p1", 1.0),
            feature("p2", 0.9),
            feature("p3", 0.8),
            feature("flagged", -0.7, is_positive=True),
            feature("n1", -0.1),
        ]
        chart = build_chart_data(make_record(features, DatasetType.SAMPLE), VisualizationKind.TORNADO)
        assert chart.scaling.min_impact == pytest.approx(-0.1)

    def test_each_chart_has_its_own_fallback(self):
        """An empty dataset gets per-visualization demonstration data."""
        record = make_record([])
        charts = {kind: build_chart_data(record, kind) for kind in VisualizationKind}

        assert all(chart.is_fallback for chart in charts.values())
        names = {kind: [f.name for f in chart.features] for kind, chart in charts.items()}
        assert names[VisualizationKind.TORNADO_VARIANT][0] == "TEMPERATURE"
        assert names[VisualizationKind.FORCE_FIELD][0] == "Improved customer response time"
        assert names[VisualizationKind.BAR] != names[VisualizationKind.TORNADO]

    def test_empty_custom_dataset_scaling_floored(self):
        chart = build_chart_data(make_record([]), VisualizationKind.BAR)

        assert chart.scaling.max_abs_impact == 0
        assert chart.to_dict()["effectiveMaxAbsImpact"] == pytest.approx(0.01)

    def test_empty_sample_dataset_scaled_from_fallback(self):
        chart = build_chart_data(make_record([], DatasetType.SAMPLE), VisualizationKind.BAR)

        assert chart.scaling.max_abs_impact == pytest.approx(0.42)
        assert chart.scaling.min_impact == pytest.approx(-0.35)

    def test_chart_scaling_matches_policy(self, mixed_features):
        for dataset_type in DatasetType:
            record = make_record(mixed_features, dataset_type)
            for kind in VisualizationKind:
                chart = build_chart_data(record, kind)
                assert chart.scaling == scale(mixed_features, dataset_type, kind)

    def test_target_carried(self, mixed_features):
        chart = build_chart_data(make_record(mixed_features, target="Churn"), VisualizationKind.FORCE_FIELD)
        assert chart.target == "Churn"


class TestAttributionReport:
    """Tests for reports and assistant context."""

    def test_factors_split_by_direction(self, mixed_features):
        report = AttributionReport().generate(make_record(mixed_features))
        diagnostic = report["diagnostic_explanation"]

        assert [f["name"] for f in diagnostic["positive_factors"]] == ["p1", "p2", "p3"]
        assert [f["name"] for f in diagnostic["negative_factors"]] == ["n1", "n2", "n3", "n4"]
        assert "p1" in diagnostic["key_insight"]

    def test_empty_record(self):
        generator = AttributionReport()
        report = generator.generate(make_record([]))

        assert report["diagnostic_explanation"]["key_insight"] == "Unable to determine key factors."
        assert "Attribution Report" in generator.to_markdown()

    def test_assistant_context_for_sample(self):
        record = load_sample_dataset("diabetes")
        history = [{"role": "user", "content": str(i)} for i in range(8)]
        context = AttributionReport().assistant_context(record, "tornado", history)

        assert context["use_domain_knowledge"] is True
        assert context["features"].startswith("Glucose (0.42)")
        assert [turn["content"] for turn in context["conversation_history"]] == ["3", "4", "5", "6", "7"]

    def test_assistant_context_for_custom(self, mixed_features):
        context = AttributionReport().assistant_context(make_record(mixed_features))

        assert context["use_domain_knowledge"] is False
        assert context["conversation_history"] == []
        assert context["target"] == "Outcome"

    def test_json_export(self, mixed_features):
        generator = AttributionReport()
        generator.generate(make_record(mixed_features))
        assert '"positive_factors"' in generator.to_json()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
