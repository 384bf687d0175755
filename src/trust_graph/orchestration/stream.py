"""Stream Classifier - ordered, optionally parallel classification of payments.

Execution model:
1. Numbered records are read from the stream in chunks
2. With one worker, each chunk is classified in the calling thread
3. With more workers, the chunk is split into slices that run on a thread
   pool against the shared frozen graph; results are re-joined by index
4. Outputs are emitted strictly in input order
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from trust_graph.agents.proximity.agent import ProximityAgent
from trust_graph.agents.proximity.schema import ProximityOutput
from trust_graph.common.constants import ClassificationConstants, StreamConstants
from trust_graph.common.exceptions import RecordParseError
from trust_graph.core.types import Feature, TrustLabel, UNREACHABLE
from trust_graph.data.io import FeatureWriters
from trust_graph.data.schemas import Transaction

logger = logging.getLogger(__name__)


# (line_number, raw line)
StreamRecord = Tuple[int, str]

# (output, was_malformed)
ClassifiedLine = Tuple[ProximityOutput, bool]

_HISTOGRAM_SIZE = ClassificationConstants.HISTOGRAM_OVERFLOW_BUCKET + 1


def _new_histogram() -> np.ndarray:
    return np.zeros(_HISTOGRAM_SIZE, dtype=np.int64)


def _new_feature_counts() -> np.ndarray:
    return np.zeros(len(Feature), dtype=np.int64)


@dataclass
class StreamStats:
    """Counters for one classification run.

    Attributes:
        classified: Transactions classified and emitted
        malformed: Stream records whose party ids could not be parsed
        elapsed_seconds: Wall time spent classifying
        trusted_counts: Transactions trusted, per feature
        distance_histogram: Transactions per hop distance; the last bucket
            holds unreachable and beyond-threshold transactions
    """
    classified: int = 0
    malformed: int = 0
    elapsed_seconds: float = 0.0
    trusted_counts: np.ndarray = field(default_factory=_new_feature_counts)
    distance_histogram: np.ndarray = field(default_factory=_new_histogram)

    def record(self, output: ProximityOutput, malformed: bool = False) -> None:
        """Account for one emitted classification."""
        self.classified += 1
        if malformed:
            self.malformed += 1
        for index, label in enumerate(output.labels()):
            if label == TrustLabel.TRUSTED:
                self.trusted_counts[index] += 1
        bucket = output.distance
        if bucket is None or bucket > ClassificationConstants.HISTOGRAM_OVERFLOW_BUCKET:
            bucket = ClassificationConstants.HISTOGRAM_OVERFLOW_BUCKET
        self.distance_histogram[bucket] += 1

    def trusted_rate(self, feature: Feature) -> float:
        """Fraction of transactions the feature trusted."""
        if self.classified == 0:
            return 0.0
        return float(self.trusted_counts[int(feature) - 1]) / self.classified

    @property
    def throughput(self) -> float:
        """Transactions per second."""
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.classified / self.elapsed_seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classified": self.classified,
            "malformed": self.malformed,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "trusted_counts": {
                feature.name.lower(): int(self.trusted_counts[int(feature) - 1])
                for feature in Feature
            },
            "distance_histogram": [int(count) for count in self.distance_histogram],
        }


class StreamClassifier:
    """Drives the per-transaction loop over a payment stream.

    Features:
    - One output per input line, in input order
    - Optional thread pool for read-only distance queries
    - Run-local counters and periodic progress logging
    """

    def __init__(
        self,
        agent: ProximityAgent,
        workers: int = StreamConstants.DEFAULT_WORKERS,
        progress_interval: int = StreamConstants.DEFAULT_PROGRESS_INTERVAL,
        chunk_size: int = StreamConstants.DEFAULT_CHUNK_SIZE,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        """Initialize stream classifier.

        Args:
            agent: Proximity agent bound to a frozen graph
            workers: Parallel workers; 1 classifies in the calling thread
            progress_interval: Log progress every this many transactions
            chunk_size: Lines read ahead per scheduling round
            executor: Custom executor. Created per run if not provided.
        """
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if progress_interval < 1:
            raise ValueError(f"progress_interval must be >= 1, got {progress_interval}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.agent = agent
        self.workers = workers
        self.progress_interval = progress_interval
        self.chunk_size = chunk_size
        self._executor = executor

    def classify_lines(self, lines: Iterable[str]) -> Iterator[ProximityOutput]:
        """Classify raw stream lines, yielding outputs in input order.

        Lines are numbered from 1 in the order given.
        """
        yield from self.classify_records(enumerate(lines, start=1))

    def classify_records(self, records: Iterable[StreamRecord]) -> Iterator[ProximityOutput]:
        """Classify numbered stream records, yielding outputs in input order."""
        for output, _ in self._classify(records):
            yield output

    def run(self, records: Iterable[StreamRecord], writers: FeatureWriters) -> StreamStats:
        """Classify every record and write labels to the feature channels.

        Args:
            records: Numbered stream records, header already removed
            writers: Opened feature output channels

        Returns:
            StreamStats for this run
        """
        stats = StreamStats()
        logger.info("Begin to classify streaming transactions.")
        begin = time.monotonic()

        for output, malformed in self._classify(records):
            writers.write(output.labels())
            stats.record(output, malformed)
            if stats.classified % self.progress_interval == 0:
                self._log_progress(stats.classified, begin)

        stats.elapsed_seconds = time.monotonic() - begin
        self._log_progress(stats.classified, begin)
        if stats.malformed:
            logger.warning(f"{stats.malformed} stream records could not be parsed")
        return stats

    def _classify(self, records: Iterable[StreamRecord]) -> Iterator[ClassifiedLine]:
        if self.workers == 1:
            for record in records:
                yield self._classify_record(record)
            return

        if self._executor is not None:
            yield from self._classify_parallel(records, self._executor)
            return

        with ThreadPoolExecutor(
            max_workers=self.workers,
            thread_name_prefix="ProximityWorker",
        ) as executor:
            yield from self._classify_parallel(records, executor)

    def _classify_parallel(
        self,
        records: Iterable[StreamRecord],
        executor: ThreadPoolExecutor,
    ) -> Iterator[ClassifiedLine]:
        iterator = iter(records)
        while True:
            chunk = list(islice(iterator, self.chunk_size))
            if not chunk:
                return

            slice_size = max(1, -(-len(chunk) // self.workers))
            futures = {
                executor.submit(self._classify_slice, chunk[start:start + slice_size]): start
                for start in range(0, len(chunk), slice_size)
            }

            results: List[Optional[ClassifiedLine]] = [None] * len(chunk)
            for future in as_completed(futures):
                start = futures[future]
                for offset, result in enumerate(future.result()):
                    results[start + offset] = result

            yield from results

    def _classify_slice(self, records: List[StreamRecord]) -> List[ClassifiedLine]:
        return [self._classify_record(record) for record in records]

    def _classify_record(self, record: StreamRecord) -> ClassifiedLine:
        line_number, line = record
        try:
            transaction = Transaction.from_line(line, line_number=line_number)
        except RecordParseError as e:
            logger.debug(f"Stream line {line_number} classified as unreachable: {e.message}")
            return self.agent.classify(UNREACHABLE), True
        return self.agent.analyze(transaction.payer_id, transaction.payee_id), False

    @staticmethod
    def _log_progress(classified: int, begin: float) -> None:
        logger.info(f"Classified {classified} transactions successfully.")
        logger.info(f"Time taken in seconds: {time.monotonic() - begin:.2f}")
