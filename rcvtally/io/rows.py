"""Flat CSV row exports of ballots and candidates.

This is the shape in which an election database stores its data, and thus
the natural export format:

-   ballots as one row per ranked candidate, with the header
    ``ballot_id,candidate_id,rank`` (``rankno`` is accepted in place of
    ``rank``); the rows of a ballot need not be adjacent,
-   candidates as one row each, with the header ``id,name,active``; the
    ``active`` column is optional and defaults to true.

Identifiers consisting of digits only are read as integers, so that the ids
in both files match each other regardless of quoting.
"""

import io
import re
import csv
from typing import Any, Dict, Iterable, Iterator, List

import rcvtally.convert
import rcvtally.io.core
from rcvtally.candidate import Candidate
from rcvtally.vote import Ballot


BALLOT_COLUMNS = ('ballot_id', 'candidate_id', 'rank')
CANDIDATE_COLUMNS = ('id', 'name', 'active')
COLUMN_ALIASES = {'rankno': 'rank'}
TRUE_VALUES = frozenset(['1', 'true', 't', 'yes', 'y'])
FALSE_VALUES = frozenset(['0', 'false', 'f', 'no', 'n'])

INTEGER_RE = re.compile(r'-?\d+')

ROWS_TO_BALLOTS = rcvtally.convert.RowsToBallots()


class RowsParseError(rcvtally.io.core.ParseError):
    def __init__(self, message: str, line_no: int = None):
        self.line_no = line_no
        if line_no is not None:
            message = f'line {line_no}: {message}'
        super().__init__(message)


def load_lines(lines: Iterable[str]) -> List[Ballot]:
    """Load ballots from CSV rows of ballot_id, candidate_id and rank."""
    return ROWS_TO_BALLOTS.convert(
        (record['ballot_id'], record['candidate_id'], record['rank'])
        for record in _iter_records(
            lines, BALLOT_COLUMNS, {'rank': _parse_rank}
        )
    )


load, loads = rcvtally.io.core.loaders(load_lines)


def dump_lines(ballots: Iterable[Ballot]) -> Iterable[str]:
    yield _csv_line(BALLOT_COLUMNS)
    for ballot in ballots:
        for entry in sorted(ballot.entries, key=lambda entry: entry.rank):
            yield _csv_line([ballot.id, entry.candidate_id, entry.rank])


dump, dumps = rcvtally.io.core.dumpers(dump_lines)


def load_candidates_lines(lines: Iterable[str]) -> List[Candidate]:
    """Load candidates from CSV rows of id, name and active flag."""
    return [
        Candidate(record['id'], record['name'], record.get('active', True))
        for record in _iter_records(
            lines,
            CANDIDATE_COLUMNS[:2],
            {'name': str, 'active': _parse_flag},
            optional=CANDIDATE_COLUMNS[2:]
        )
    ]


load_candidates, loads_candidates = rcvtally.io.core.loaders(
    load_candidates_lines
)


def dump_candidates_lines(candidates: Iterable[Candidate]) -> Iterable[str]:
    yield _csv_line(CANDIDATE_COLUMNS)
    for cand in candidates:
        yield _csv_line([
            cand.id, cand.name, 'true' if cand.active else 'false'
        ])


dump_candidates, dumps_candidates = rcvtally.io.core.dumpers(
    dump_candidates_lines
)


def _iter_records(lines: Iterable[str],
                  required: Iterable[str],
                  parsers: Dict[str, Any],
                  optional: Iterable[str] = (),
                  ) -> Iterator[Dict[str, Any]]:
    reader = csv.reader(lines)
    header = None
    for row in reader:
        if not row or not any(cell.strip() for cell in row):
            continue
        if header is None:
            header = _parse_header(row, required, optional, reader.line_num)
            continue
        if len(row) != len(header):
            raise RowsParseError(
                f'expected {len(header)} columns, got {len(row)}',
                reader.line_num
            )
        record = {}
        for column, cell in zip(header, row):
            parser = parsers.get(column, _parse_id)
            try:
                record[column] = parser(cell.strip())
            except ValueError as e:
                raise RowsParseError(
                    f'invalid {column}: {cell!r}', reader.line_num
                ) from e
        yield record
    if header is None:
        raise RowsParseError('empty input, header expected')


def _parse_header(row: List[str],
                  required: Iterable[str],
                  optional: Iterable[str],
                  line_no: int,
                  ) -> List[str]:
    header = [
        COLUMN_ALIASES.get(cell.strip().lower(), cell.strip().lower())
        for cell in row
    ]
    missing = [column for column in required if column not in header]
    if missing:
        raise RowsParseError(
            'missing columns: ' + ', '.join(missing), line_no
        )
    known = set(required) | set(optional)
    unknown = [column for column in header if column not in known]
    if unknown:
        raise RowsParseError(
            'unknown columns: ' + ', '.join(unknown), line_no
        )
    return header


def _parse_id(text: str) -> Any:
    return int(text) if INTEGER_RE.fullmatch(text) else text


def _parse_rank(text: str) -> int:
    return int(text)


def _parse_flag(text: str) -> bool:
    lowered = text.lower()
    if lowered in TRUE_VALUES:
        return True
    elif lowered in FALSE_VALUES:
        return False
    else:
        raise ValueError(f'not a boolean: {text!r}')


def _csv_line(values: Iterable[Any]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator='\n').writerow(values)
    return buffer.getvalue()
