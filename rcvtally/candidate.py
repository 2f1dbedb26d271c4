'''Candidates standing in an election.

Candidates are owned by the election administration; the tabulation engine
only reads them. A :class:`Candidate` carries an identifier (referenced by
ballot entries), a display name and an active flag. Only active candidates
should take part in a tabulation; :func:`active_only` performs that
restriction the same way the storage layer does before invoking an
evaluator.

Candidate identifiers can be any hashable objects (usually integers from
the database or short strings); the evaluators only compare and hash them.
'''

from typing import Any, Dict, Iterable, List, Optional

from rcvtally.persist import simple_serialization


class CandidateError(Exception):
    '''A candidate set is invalid in the given context.

    E.g. two candidates sharing a single identifier.

    :param candidate: Candidate that was found to be invalid.
    :param reason: What is wrong with the candidate.
    '''
    def __init__(self, candidate: Any, reason: Optional[str] = None):
        self.candidate = candidate
        self.reason = reason
        message = f'invalid candidate: {candidate!r}'
        if reason:
            message += f', {reason}'
        super().__init__(message)


@simple_serialization
class Candidate:
    '''A person or option standing in the election.

    Candidates compare equal (and hash) by their identifier only, so that
    a candidate record fetched twice from storage is still the same
    candidate.

    :param id: Identifier of the candidate, referenced by ballot entries.
    :param name: Display name of the candidate. Defaults to the string form
        of the identifier.
    :param active: Whether the candidate currently stands in the election.
    '''
    def __init__(self,
                 id: Any,
                 name: Optional[str] = None,
                 active: bool = True,
                 ):
        self.id = id
        self.name = str(id) if name is None else name
        self.active = active

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Candidate):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (
            f'<Candidate({self.id!r},{self.name}'
            + ('' if self.active else ',inactive')
            + ')>'
        )


def active_only(candidates: Iterable[Candidate]) -> List[Candidate]:
    '''Restrict candidates to those currently active, keeping their order.'''
    return [cand for cand in candidates if cand.active]


def index_candidates(candidates: Iterable[Candidate]
                     ) -> Dict[Any, Candidate]:
    '''Map candidate identifiers to candidates, keeping the input order.

    :raises CandidateError: If two candidates share an identifier.
    '''
    index = {}
    for cand in candidates:
        if cand.id in index:
            raise CandidateError(cand, f'duplicate identifier {cand.id!r}')
        index[cand.id] = cand
    return index
