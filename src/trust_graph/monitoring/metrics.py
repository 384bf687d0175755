"""Monitoring - publish graph size, skipped records, and trust rates to CloudWatch."""

import logging, os
from datetime import datetime, timezone
from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from trust_graph.common.constants import MonitoringConstants
from trust_graph.core.types import Feature
from trust_graph.models.graph.builder import BuildResult
from trust_graph.orchestration.stream import StreamStats

logger = logging.getLogger(__name__)

# CloudWatch accepts at most 20 data points per request
_PUT_BATCH_LIMIT = 20


class MetricType(str, Enum):
    GRAPH_VERTICES = "graph_vertices"
    GRAPH_EDGES = "graph_edges"
    BATCH_RECORDS_LOADED = "batch_records_loaded"
    BATCH_RECORDS_SKIPPED = "batch_records_skipped"
    TRANSACTIONS_CLASSIFIED = "transactions_classified"
    STREAM_RECORDS_MALFORMED = "stream_records_malformed"
    TRUSTED_RATE = "trusted_rate"
    CLASSIFICATION_THROUGHPUT = "classification_throughput"


@dataclass
class MetricPoint:
    metric_name: str
    value: float
    unit: str = "None"
    timestamp: Optional[datetime] = None
    dimensions: Optional[Dict[str, str]] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc)


class MetricsCollector:
    """Collects and publishes run metrics to CloudWatch."""

    def __init__(self, namespace: Optional[str] = None, region: Optional[str] = None,
                 aws_profile: Optional[str] = None,
                 batch_size: int = MonitoringConstants.DEFAULT_BATCH_SIZE):
        self.namespace = namespace or os.environ.get(
            "CLOUDWATCH_NAMESPACE", MonitoringConstants.DEFAULT_NAMESPACE
        )
        self.region = region or os.environ.get("AWS_REGION", MonitoringConstants.DEFAULT_REGION)
        self.batch_size = batch_size
        self.metric_buffer: List[MetricPoint] = []

        try:
            if aws_profile:
                session = boto3.Session(profile_name=aws_profile)
                self.cloudwatch = session.client("cloudwatch", region_name=self.region)
            else:
                self.cloudwatch = boto3.client("cloudwatch", region_name=self.region)
        except BotoCoreError as e:
            raise IOError(f"CloudWatch client unavailable: {e}") from e

        logger.info(f"Initialized MetricsCollector: namespace={self.namespace}")

    def record_metric(self, metric: MetricPoint) -> None:
        """Record a metric point.

        Buffers metrics for batch publishing.
        """
        self.metric_buffer.append(metric)

        if len(self.metric_buffer) >= self.batch_size:
            self.flush()

    def record_build(self, build: BuildResult) -> None:
        """Record graph construction metrics."""
        self.record_metric(MetricPoint(
            metric_name=MetricType.GRAPH_VERTICES.value,
            value=float(build.graph.vertex_count()),
            unit="Count",
        ))
        self.record_metric(MetricPoint(
            metric_name=MetricType.GRAPH_EDGES.value,
            value=float(build.graph.edge_count()),
            unit="Count",
        ))
        self.record_metric(MetricPoint(
            metric_name=MetricType.BATCH_RECORDS_LOADED.value,
            value=float(build.loaded),
            unit="Count",
        ))
        self.record_metric(MetricPoint(
            metric_name=MetricType.BATCH_RECORDS_SKIPPED.value,
            value=float(build.skipped),
            unit="Count",
        ))

    def record_stream(self, stats: StreamStats) -> None:
        """Record classification metrics for a finished stream.

        Args:
            stats: Counters returned by the stream classifier
        """
        self.record_metric(MetricPoint(
            metric_name=MetricType.TRANSACTIONS_CLASSIFIED.value,
            value=float(stats.classified),
            unit="Count",
        ))
        self.record_metric(MetricPoint(
            metric_name=MetricType.STREAM_RECORDS_MALFORMED.value,
            value=float(stats.malformed),
            unit="Count",
        ))
        for feature in Feature:
            self.record_metric(MetricPoint(
                metric_name=MetricType.TRUSTED_RATE.value,
                value=stats.trusted_rate(feature),
                unit="None",
                dimensions={"feature": feature.name.lower()},
            ))
        self.record_metric(MetricPoint(
            metric_name=MetricType.CLASSIFICATION_THROUGHPUT.value,
            value=stats.throughput,
            unit="Count/Second",
        ))

    def record_run(self, build: BuildResult, stats: StreamStats) -> None:
        """Record a complete run and publish it."""
        self.record_build(build)
        self.record_stream(stats)
        self.flush()

    def flush(self) -> None:
        """Flush buffered metrics to CloudWatch.

        Raises:
            IOError: If CloudWatch write fails
        """
        if not self.metric_buffer:
            return

        try:
            metric_data = []
            for metric in self.metric_buffer:
                metric_dict = {
                    "MetricName": metric.metric_name,
                    "Value": metric.value,
                    "Unit": metric.unit,
                    "Timestamp": metric.timestamp,
                }

                if metric.dimensions:
                    metric_dict["Dimensions"] = [
                        {"Name": k, "Value": str(v)}
                        for k, v in metric.dimensions.items()
                    ]

                metric_data.append(metric_dict)

            for i in range(0, len(metric_data), _PUT_BATCH_LIMIT):
                self.cloudwatch.put_metric_data(
                    Namespace=self.namespace,
                    MetricData=metric_data[i:i + _PUT_BATCH_LIMIT],
                )

            logger.debug(f"Published {len(self.metric_buffer)} metrics to CloudWatch")
            self.metric_buffer.clear()

        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to publish metrics: {e}")
            raise IOError(f"CloudWatch write failed: {e}") from e

    def shutdown(self) -> None:
        """Flush remaining metrics on shutdown."""
        self.flush()
