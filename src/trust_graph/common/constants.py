"""Centralized constants for TrustGraph."""


# ===== INPUT FORMAT =====
class RecordConstants:
    FIELD_DELIMITER = ","
    PAYER_FIELD_INDEX = 1
    PAYEE_FIELD_INDEX = 2
    MIN_FIELDS = 3
    ENCODING = "utf-8"
    # Undecodable bytes become U+FFFD so only the id fields decide validity
    ENCODING_ERRORS = "replace"


# ===== CLASSIFICATION =====
class ClassificationConstants:
    # Maximum trusted hop count per feature, strictest first
    FEATURE_1_MAX_HOPS = 1
    FEATURE_2_MAX_HOPS = 2
    FEATURE_3_MAX_HOPS = 4

    # Histogram bucket collecting unreachable and beyond-threshold distances
    HISTOGRAM_OVERFLOW_BUCKET = FEATURE_3_MAX_HOPS + 1


# ===== STREAMING =====
class StreamConstants:
    DEFAULT_WORKERS = 1
    DEFAULT_PROGRESS_INTERVAL = 100
    DEFAULT_CHUNK_SIZE = 512


# ===== MONITORING =====
class MonitoringConstants:
    DEFAULT_NAMESPACE = "TrustGraph"
    DEFAULT_REGION = "us-east-1"
    DEFAULT_BATCH_SIZE = 20
