"""Record parsing for comma-delimited payment files.

Batch and stream files share one layout: a header line, then one payment
per line with the payer id in field 1 and the payee id in field 2.
Any further fields are carried through untouched.
"""

import re
from typing import Iterable, Iterator, Tuple

from trust_graph.common.constants import RecordConstants
from trust_graph.common.exceptions import RecordParseError

# Optional sign and ASCII digits only; no grouping underscores
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_id(field: str) -> int:
    text = field.strip()
    if not _ID_PATTERN.fullmatch(text):
        raise ValueError(f"invalid literal for party id: {text!r}")
    return int(text)


def parse_party_ids(line: str) -> Tuple[int, int]:
    """Extract the (payer, payee) ids from a delimited record.
    
    Args:
        line: Raw record text, with or without a trailing newline
        
    Returns:
        Tuple of payer id and payee id
        
    Raises:
        RecordParseError: If the record has too few fields or a non-integer id
    """
    fields = line.split(RecordConstants.FIELD_DELIMITER)
    if len(fields) < RecordConstants.MIN_FIELDS:
        raise RecordParseError(
            f"Expected at least {RecordConstants.MIN_FIELDS} fields, found {len(fields)}",
            line=line,
        )
    
    try:
        payer = _parse_id(fields[RecordConstants.PAYER_FIELD_INDEX])
        payee = _parse_id(fields[RecordConstants.PAYEE_FIELD_INDEX])
    except ValueError as e:
        raise RecordParseError(f"Invalid party id: {e}", line=line) from e
    
    return payer, payee


def iter_records(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, line) pairs, skipping the header.
    
    Line numbers are 1-based and count the header, so the first data
    record is line 2.
    """
    iterator = iter(lines)
    next(iterator, None)
    for line_number, line in enumerate(iterator, start=2):
        yield line_number, line.rstrip("\r\n")
