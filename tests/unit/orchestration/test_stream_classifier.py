"""Tests for the stream classification loop."""

import logging
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest

from trust_graph.agents.proximity.agent import ProximityAgent
from trust_graph.core.types import Feature, TrustLabel
from trust_graph.data.schemas import Transaction
from trust_graph.orchestration.stream import StreamClassifier, StreamStats


T, U = TrustLabel.TRUSTED, TrustLabel.UNVERIFIED


@pytest.fixture
def agent(chain_graph):
    return ProximityAgent(chain_graph)


@pytest.fixture
def stream_lines():
    """Stream mixing every distance bucket and a malformed record."""
    return [
        "t, 1, 1, 1.0, self",
        "t, 1, 2, 1.0, friend",
        "t, 1, 3, 1.0, fof",
        "t, 1, 4, 1.0, third",
        "t, 1, 5, 1.0, fourth",
        "t, 1, 6, 1.0, fifth",
        "t, 1, 100, 1.0, island",
        "broken",
    ]


def _records(lines):
    """Number lines the way open_stream does, header at line 1."""
    return list(enumerate(lines, start=2))


def _writer():
    writer = MagicMock()
    writer.written = []
    writer.write.side_effect = writer.written.append
    return writer


class TestStreamClassifierSequential:
    """Single-worker classification."""

    def test_outputs_in_input_order(self, agent, stream_lines):
        """One output per line, in order."""
        classifier = StreamClassifier(agent)

        distances = [o.distance for o in classifier.classify_lines(stream_lines)]

        assert distances == [0, 1, 2, 3, 4, None, None, None]

    def test_run_writes_every_line(self, agent, stream_lines):
        """run() writes each transaction's labels once."""
        writer = _writer()

        StreamClassifier(agent).run(_records(stream_lines), writer)

        assert writer.written == [
            (T, T, T),
            (T, T, T),
            (U, T, T),
            (U, U, T),
            (U, U, T),
            (U, U, U),
            (U, U, U),
            (U, U, U),
        ]

    def test_run_stats(self, agent, stream_lines):
        """Counters reflect the run."""
        stats = StreamClassifier(agent).run(_records(stream_lines), _writer())

        assert stats.classified == 8
        assert stats.malformed == 1
        assert stats.trusted_rate(Feature.FEATURE_1) == pytest.approx(2 / 8)
        assert stats.trusted_rate(Feature.FEATURE_2) == pytest.approx(3 / 8)
        assert stats.trusted_rate(Feature.FEATURE_3) == pytest.approx(5 / 8)
        assert list(stats.distance_histogram) == [1, 1, 1, 1, 1, 3]

    def test_progress_logged(self, agent, caplog):
        """Progress is logged every interval and at the end."""
        lines = ["t,1,2"] * 5
        classifier = StreamClassifier(agent, progress_interval=2)

        with caplog.at_level(logging.INFO, logger="trust_graph.orchestration.stream"):
            classifier.run(_records(lines), _writer())

        messages = [r.getMessage() for r in caplog.records]
        assert "Begin to classify streaming transactions." in messages
        assert "Classified 2 transactions successfully." in messages
        assert "Classified 4 transactions successfully." in messages
        assert "Classified 5 transactions successfully." in messages

    def test_malformed_record_names_line(self, agent, caplog):
        """Unparseable records are logged with their source line number."""
        with caplog.at_level(logging.DEBUG, logger="trust_graph.orchestration.stream"):
            stats = StreamClassifier(agent).run([(2, "t,1,2"), (3, "t, 1_000, 2")], _writer())

        assert stats.malformed == 1
        assert any("line 3" in r.getMessage() for r in caplog.records)

    def test_records_parsed_as_transactions(self, agent):
        """Each record goes through Transaction.from_line with its line number."""
        with patch(
            "trust_graph.orchestration.stream.Transaction.from_line",
            wraps=Transaction.from_line,
        ) as from_line:
            list(StreamClassifier(agent).classify_records([(7, "t, 1, 3, 1.0, fof")]))

        from_line.assert_called_once_with("t, 1, 3, 1.0, fof", line_number=7)

    def test_empty_stream(self, agent):
        """No lines, no output."""
        stats = StreamClassifier(agent).run([], _writer())

        assert stats.classified == 0
        assert stats.trusted_rate(Feature.FEATURE_1) == 0.0

    @pytest.mark.parametrize("kwargs", [
        {"workers": 0},
        {"progress_interval": 0},
        {"chunk_size": 0},
    ])
    def test_invalid_settings(self, agent, kwargs):
        """Non-positive settings are rejected."""
        with pytest.raises(ValueError):
            StreamClassifier(agent, **kwargs)


class TestStreamClassifierParallel:
    """Thread pool classification."""

    def test_parallel_matches_sequential(self, agent, stream_lines):
        """Parallel runs give the same outputs in the same order."""
        lines = stream_lines * 25
        sequential = list(StreamClassifier(agent).classify_lines(lines))

        parallel = list(
            StreamClassifier(agent, workers=4, chunk_size=7).classify_lines(lines)
        )

        assert parallel == sequential

    def test_chunk_smaller_than_workers(self, agent, stream_lines):
        """Tiny chunks still preserve order."""
        parallel = StreamClassifier(agent, workers=8, chunk_size=3)

        distances = [o.distance for o in parallel.classify_lines(stream_lines)]

        assert distances == [0, 1, 2, 3, 4, None, None, None]

    def test_custom_executor(self, agent, stream_lines):
        """An injected executor is used and left running."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            classifier = StreamClassifier(agent, workers=2, executor=executor)
            stats = classifier.run(_records(stream_lines), _writer())

            assert stats.classified == len(stream_lines)
            assert executor.submit(lambda: 1).result() == 1


class TestStreamStats:
    """Tests for StreamStats."""

    def test_to_dict(self):
        """Serialises counters to plain types."""
        stats = StreamStats(classified=2, malformed=1, elapsed_seconds=0.5)
        stats.trusted_counts[0] = 1

        data = stats.to_dict()

        assert data["classified"] == 2
        assert data["trusted_counts"] == {"feature_1": 1, "feature_2": 0, "feature_3": 0}
        assert data["distance_histogram"] == [0, 0, 0, 0, 0, 0]

    def test_throughput(self):
        """Transactions per second."""
        assert StreamStats(classified=10, elapsed_seconds=2.0).throughput == 5.0
        assert StreamStats(classified=10).throughput == 0.0
