"""Graph builder for constructing the payment graph from batch data.

Reads historical payment records once, before any stream processing.
Malformed records are skipped and counted; an unreadable or empty batch
source aborts construction.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from trust_graph.common.constants import RecordConstants
from trust_graph.common.exceptions import ConstructionError, RecordParseError
from trust_graph.data.parsing import iter_records, parse_party_ids
from trust_graph.models.graph.schema import PaymentGraph

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of a graph construction run.

    Attributes:
        graph: Frozen payment graph
        loaded: Records that produced a vertex pair
        skipped: Records dropped as malformed
        elapsed_seconds: Wall time spent building
    """
    graph: PaymentGraph
    loaded: int
    skipped: int
    elapsed_seconds: float


class GraphBuilder:
    """Build the payment graph from batch records.

    The builder owns a graph only while constructing it; the returned
    graph is frozen and the builder can be discarded.
    """

    def __init__(self, source_name: Optional[str] = None):
        """Initialize graph builder.

        Args:
            source_name: Label used in error messages when building from lines
        """
        self.source_name = source_name

    def build_from_file(self, path: Union[str, Path]) -> BuildResult:
        """Build the graph from a batch file.

        Undecodable bytes are replaced rather than rejected, so a bad byte
        only costs the record it sits in when it lands in an id field.

        Raises:
            ConstructionError: If the file cannot be read or holds no data line
        """
        self.source_name = str(path)
        try:
            with open(
                path,
                "r",
                encoding=RecordConstants.ENCODING,
                errors=RecordConstants.ENCODING_ERRORS,
                newline="",
            ) as handle:
                return self.build_from_lines(handle)
        except OSError as e:
            raise ConstructionError(
                f"Can't read input file for batch data: {path}",
                path=str(path),
            ) from e

    def build_from_lines(self, lines: Iterable[str]) -> BuildResult:
        """Build the graph from raw lines; the first line is a header.

        Raises:
            ConstructionError: If there is no line after the header
        """
        begin = time.monotonic()
        graph = PaymentGraph()
        loaded = 0
        skipped = 0
        seen_record = False

        for line_number, line in iter_records(lines):
            seen_record = True
            try:
                payer, payee = parse_party_ids(line)
            except RecordParseError as e:
                skipped += 1
                logger.debug(f"Skipping batch line {line_number}: {e.message}")
                continue
            graph.add_edge(payer, payee)
            loaded += 1

        if not seen_record:
            raise ConstructionError(
                f"batch file is empty: {self.source_name or '<lines>'}",
                path=self.source_name,
            )

        elapsed = time.monotonic() - begin
        logger.info(f"Loaded {loaded} transactions in graph.")
        if skipped:
            logger.info(f"Skipped {skipped} malformed batch records.")
        logger.info(f"Time taken in seconds: {elapsed:.2f}")
        logger.debug(
            f"Graph has {graph.vertex_count()} vertices and {graph.edge_count()} edges"
        )

        return BuildResult(
            graph=graph.freeze(),
            loaded=loaded,
            skipped=skipped,
            elapsed_seconds=elapsed,
        )
