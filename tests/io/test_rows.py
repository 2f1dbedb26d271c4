import sys
import os
import io

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rcvtally.io.rows
from rcvtally.candidate import Candidate
from rcvtally.vote import Ballot, BallotEntry


BALLOTS_CSV = '''ballot_id,candidate_id,rank
1,10,2
2,11,1
1,11,1
3,"b-x",1
'''


def test_loads_groups_rows():
    assert rcvtally.io.rows.loads(BALLOTS_CSV) == [
        Ballot(1, (BallotEntry(10, 2), BallotEntry(11, 1))),
        Ballot(2, (BallotEntry(11, 1),)),
        Ballot(3, (BallotEntry('b-x', 1),)),
    ]


def test_load_file():
    assert rcvtally.io.rows.load(io.StringIO(BALLOTS_CSV)) == (
        rcvtally.io.rows.loads(BALLOTS_CSV)
    )


@pytest.mark.parametrize('header', [
    'ballot_id,candidate_id,rankno',
    'Ballot_ID, Candidate_ID, Rank',
])
def test_header_variants(header):
    assert rcvtally.io.rows.loads(header + '\n7,1,1\n\n7,2,3\n') == [
        Ballot(7, (BallotEntry(1, 1), BallotEntry(2, 3))),
    ]


def test_column_order():
    assert rcvtally.io.rows.loads('rank,candidate_id,ballot_id\n2,5,9\n') == [
        Ballot(9, (BallotEntry(5, 2),)),
    ]


def test_header_only():
    assert rcvtally.io.rows.loads('ballot_id,candidate_id,rank\n') == []


@pytest.mark.parametrize(('text', 'line_no'), [
    ('ballot_id,candidate_id\n1,2\n', 1),
    ('ballot_id,candidate_id,rank,weight\n1,2,1,1\n', 1),
    ('ballot_id,candidate_id,rank\n1,2\n', 2),
    ('ballot_id,candidate_id,rank\n1,2,1\n1,3,first\n', 3),
    ('ballot_id,candidate_id,rank\n1,2,1.5\n', 2),
    ('', None),
])
def test_parse_errors(text, line_no):
    with pytest.raises(rcvtally.io.rows.RowsParseError) as excinfo:
        rcvtally.io.rows.loads(text)
    assert excinfo.value.line_no == line_no
    if line_no is not None:
        assert str(excinfo.value).startswith(f'line {line_no}:')


def test_dumps_sorted_by_rank():
    ballots = [
        Ballot('b1', (BallotEntry(1, 2), BallotEntry(2, 1))),
        Ballot('b2', ()),
    ]
    assert rcvtally.io.rows.dumps(ballots) == (
        'ballot_id,candidate_id,rank\n'
        'b1,2,1\n'
        'b1,1,2\n'
    )


def test_dump_and_load_back():
    ballots = [
        Ballot(1, (BallotEntry(3, 1), BallotEntry(1, 4))),
        Ballot(2, (BallotEntry(1, 1),)),
    ]
    out = io.StringIO()
    rcvtally.io.rows.dump(out, ballots)
    assert rcvtally.io.rows.loads(out.getvalue()) == ballots


CANDIDATES_CSV = '''id,name,active
1,Alice,true
2,Bob,0
3,12,yes
'''


def test_loads_candidates():
    candidates = rcvtally.io.rows.loads_candidates(CANDIDATES_CSV)
    assert [
        (cand.id, cand.name, cand.active) for cand in candidates
    ] == [
        (1, 'Alice', True),
        (2, 'Bob', False),
        (3, '12', True),
    ]


def test_candidates_active_optional():
    candidates = rcvtally.io.rows.loads_candidates('id,name\nx,Xena\n')
    assert [(cand.id, cand.active) for cand in candidates] == [('x', True)]


def test_candidates_invalid_flag():
    with pytest.raises(rcvtally.io.rows.RowsParseError) as excinfo:
        rcvtally.io.rows.loads_candidates('id,name,active\n1,Alice,maybe\n')
    assert excinfo.value.line_no == 2


def test_dumps_candidates():
    candidates = [
        Candidate(1, 'Alice'),
        Candidate(2, 'Smith, J.', active=False),
    ]
    assert rcvtally.io.rows.dumps_candidates(candidates) == (
        'id,name,active\n'
        '1,Alice,true\n'
        '2,"Smith, J.",false\n'
    )
