"""Monitoring - optional CloudWatch metrics for classification runs."""

from trust_graph.monitoring.metrics import MetricType, MetricPoint, MetricsCollector

__all__ = ["MetricType", "MetricPoint", "MetricsCollector"]
