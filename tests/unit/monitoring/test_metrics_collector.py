"""Tests for the CloudWatch metrics collector."""

import pytest
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError, NoCredentialsError, NoRegionError

from trust_graph.models.graph.builder import GraphBuilder
from trust_graph.monitoring.metrics import MetricPoint, MetricsCollector, MetricType
from trust_graph.orchestration.stream import StreamStats


@pytest.fixture
def build(scenario_lines):
    return GraphBuilder().build_from_lines(scenario_lines + ["bad"])


@pytest.fixture
def stats():
    stats = StreamStats(classified=4, malformed=1, elapsed_seconds=2.0)
    stats.trusted_counts[:] = [1, 2, 3]
    return stats


class TestMetricPoint:
    """Tests for MetricPoint dataclass."""

    def test_timestamp_defaults(self):
        """A timestamp is filled in when missing."""
        point = MetricPoint(metric_name="graph_edges", value=2.0)

        assert point.timestamp is not None
        assert point.unit == "None"


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_collector_initialization(self, mock_boto3_client):
        """Test initializing metrics collector."""
        collector = MetricsCollector(namespace="TrustGraphTest", region="eu-west-1")

        assert collector.namespace == "TrustGraphTest"
        mock_boto3_client.assert_called_once_with("cloudwatch", region_name="eu-west-1")

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_record_build(self, mock_boto3_client, build):
        """Graph size and skipped records are buffered."""
        collector = MetricsCollector(batch_size=100)

        collector.record_build(build)

        values = {m.metric_name: m.value for m in collector.metric_buffer}
        assert values[MetricType.GRAPH_VERTICES.value] == 3.0
        assert values[MetricType.GRAPH_EDGES.value] == 2.0
        assert values[MetricType.BATCH_RECORDS_LOADED.value] == 2.0
        assert values[MetricType.BATCH_RECORDS_SKIPPED.value] == 1.0

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_record_stream(self, mock_boto3_client, stats):
        """Trusted rate is recorded once per feature."""
        collector = MetricsCollector(batch_size=100)

        collector.record_stream(stats)

        rates = {
            m.dimensions["feature"]: m.value
            for m in collector.metric_buffer
            if m.metric_name == MetricType.TRUSTED_RATE.value
        }
        assert rates == {"feature_1": 0.25, "feature_2": 0.5, "feature_3": 0.75}
        throughput = [
            m for m in collector.metric_buffer
            if m.metric_name == MetricType.CLASSIFICATION_THROUGHPUT.value
        ]
        assert throughput[0].value == 2.0

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_record_run_flushes(self, mock_boto3_client, build, stats):
        """A full run is published and the buffer emptied."""
        mock_cloudwatch = MagicMock()
        mock_boto3_client.return_value = mock_cloudwatch
        collector = MetricsCollector(namespace="TrustGraph", batch_size=100)

        collector.record_run(build, stats)

        assert mock_cloudwatch.put_metric_data.called
        kwargs = mock_cloudwatch.put_metric_data.call_args.kwargs
        assert kwargs["Namespace"] == "TrustGraph"
        assert collector.metric_buffer == []

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_auto_flush_at_batch_size(self, mock_boto3_client):
        """Test auto-flush when batch size reached."""
        mock_cloudwatch = MagicMock()
        mock_boto3_client.return_value = mock_cloudwatch
        collector = MetricsCollector(batch_size=2)

        collector.record_metric(MetricPoint(metric_name="a", value=1.0))
        assert not mock_cloudwatch.put_metric_data.called

        collector.record_metric(MetricPoint(metric_name="b", value=1.0))
        assert mock_cloudwatch.put_metric_data.called

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_flush_failure_raises_ioerror(self, mock_boto3_client):
        """CloudWatch errors surface as IOError."""
        mock_cloudwatch = MagicMock()
        mock_cloudwatch.put_metric_data.side_effect = ClientError(
            {"Error": {"Code": "Throttling", "Message": "slow down"}},
            "PutMetricData",
        )
        mock_boto3_client.return_value = mock_cloudwatch
        collector = MetricsCollector(batch_size=100)
        collector.record_metric(MetricPoint(metric_name="a", value=1.0))

        with pytest.raises(IOError, match="CloudWatch write failed"):
            collector.flush()

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_flush_empty_buffer_is_noop(self, mock_boto3_client):
        """Nothing is sent when nothing is buffered."""
        mock_cloudwatch = MagicMock()
        mock_boto3_client.return_value = mock_cloudwatch

        MetricsCollector().shutdown()

        assert not mock_cloudwatch.put_metric_data.called

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_missing_credentials_raise_ioerror(self, mock_boto3_client):
        """botocore errors outside ClientError also surface as IOError."""
        mock_cloudwatch = MagicMock()
        mock_cloudwatch.put_metric_data.side_effect = NoCredentialsError()
        mock_boto3_client.return_value = mock_cloudwatch
        collector = MetricsCollector(batch_size=100)
        collector.record_metric(MetricPoint(metric_name="a", value=1.0))

        with pytest.raises(IOError, match="CloudWatch write failed"):
            collector.flush()

    @patch("trust_graph.monitoring.metrics.boto3.client")
    def test_client_creation_failure_raises_ioerror(self, mock_boto3_client):
        """A client that cannot be created surfaces as IOError."""
        mock_boto3_client.side_effect = NoRegionError()

        with pytest.raises(IOError, match="CloudWatch client unavailable"):
            MetricsCollector()
