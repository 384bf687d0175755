"""File I/O for the transaction stream and the feature output channels.

Setup failures here are fatal and reported with the offending path;
resources already opened are released before the error propagates.
"""

import itertools
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator, List, Sequence, Tuple, Union

from trust_graph.common.constants import RecordConstants
from trust_graph.common.exceptions import OutputError, StreamError
from trust_graph.core.types import TrustTuple
from trust_graph.data.parsing import iter_records

PathLike = Union[str, Path]


def _read_lines(handle: Iterable[str], path: PathLike) -> Iterator[str]:
    try:
        yield from handle
    except OSError as e:
        raise StreamError(f"Can't read stream file: {path}", path=str(path)) from e


@contextmanager
def open_stream(path: PathLike) -> Iterator[Iterator[Tuple[int, str]]]:
    """Open a stream file and yield its numbered records, header removed.

    Undecodable bytes are replaced, so they reach the record parser instead
    of aborting the read.

    Raises:
        StreamError: If the file cannot be read, or holds no data line
    """
    try:
        handle = open(
            path,
            "r",
            encoding=RecordConstants.ENCODING,
            errors=RecordConstants.ENCODING_ERRORS,
            newline="",
        )
    except OSError as e:
        raise StreamError(f"Can't read stream file: {path}", path=str(path)) from e

    with handle:
        records = iter_records(_read_lines(handle, path))
        first = next(records, None)
        if first is None:
            raise StreamError(f"stream file is empty: {path}", path=str(path))

        yield itertools.chain([first], records)


class FeatureWriters:
    """The three feature output channels, opened and closed together.

    Each channel receives one token per transaction, in transaction order.
    If any channel fails to open, the ones already opened are closed and
    OutputError is raised.

    Example:
        with FeatureWriters(["f1.txt", "f2.txt", "f3.txt"]) as writers:
            writers.write(labels)
    """

    def __init__(self, paths: Sequence[PathLike]):
        if len(paths) != 3:
            raise ValueError(f"Expected exactly three output paths, got {len(paths)}")
        self.paths = [Path(p) for p in paths]
        self._stack = ExitStack()
        self._handles: List[IO[str]] = []
        self.lines_written = 0

    def open(self) -> "FeatureWriters":
        """Open all channels for writing, truncating existing files."""
        for path in self.paths:
            try:
                handle = open(path, "w", encoding=RecordConstants.ENCODING, newline="\n")
            except OSError as e:
                self.close()
                raise OutputError(f"Can't open file to write: {path}", path=str(path)) from e
            self._handles.append(self._stack.enter_context(handle))
        return self

    def write(self, labels: TrustTuple) -> None:
        """Write one transaction's labels, one per channel."""
        for handle, label in zip(self._handles, labels):
            handle.write(label.value)
            handle.write("\n")
        self.lines_written += 1

    def close(self) -> None:
        """Flush and close every opened channel."""
        self._stack.close()
        self._handles = []

    @property
    def is_open(self) -> bool:
        return bool(self._handles)

    def __enter__(self) -> "FeatureWriters":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
