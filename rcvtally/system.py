'''Tabulation methods and dispatch among them.

The caller (usually a web handler computing the winner for a stored
election) selects the method by name: ``"Instant Runoff"``,
``"Ranked Pairs"`` or ``"Coombs"``. :func:`tabulate` resolves the name to
a :class:`Method` and runs the matching :class:`TabulationSystem`.

Any other method name falls back to Instant Runoff. The fallback is logged
as a warning; use ``Method.parse(name, strict=True)`` to reject unknown
names instead.
'''

import enum
import logging
from typing import Any, Dict, Iterable, Union

import rcvtally.evaluate.core
import rcvtally.evaluate.condorcet
import rcvtally.evaluate.sequential
from rcvtally.candidate import Candidate
from rcvtally.persist import simple_serialization
from rcvtally.vote import Ballot


logger = logging.getLogger(__name__)


class Method(enum.Enum):
    '''Tabulation methods, valued by their display names.'''
    INSTANT_RUNOFF = 'Instant Runoff'
    RANKED_PAIRS = 'Ranked Pairs'
    COOMBS = 'Coombs'

    @classmethod
    def parse(cls,
              value: Union[str, 'Method', None],
              strict: bool = False,
              ) -> 'Method':
        '''Resolve a method from its display name.

        :param value: A method, its display name or its enum member name
            (e.g. ``RANKED_PAIRS``).
        :param strict: Raise on unknown names instead of falling back to
            :data:`DEFAULT_METHOD`.
        :raises ValueError: If the name is unknown and strict is set.
        '''
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        if isinstance(value, str) and value in cls.__members__:
            return cls.__members__[value]
        if strict:
            known = ', '.join(repr(method.value) for method in cls)
            raise ValueError(f'unknown method {value!r}, known: {known}')
        logger.warning(
            'unknown method %r, falling back to %s',
            value, DEFAULT_METHOD.value
        )
        return DEFAULT_METHOD


DEFAULT_METHOD = Method.INSTANT_RUNOFF


@simple_serialization
class TabulationSystem:
    """A named tabulation method. Wraps an evaluator.

    :param name: Name of the system as shown to voters.
    :param evaluator: Evaluator implementing the method.
    """
    def __init__(self,
                 name: str,
                 evaluator: rcvtally.evaluate.core.Evaluator,
                 ):
        self.name = name
        self.evaluator = evaluator

    def evaluate(self,
                 candidates: Iterable[Candidate],
                 ballots: Iterable[Ballot],
                 ) -> rcvtally.evaluate.core.TabulationResult:
        """Return the evaluator's result for the ballots given."""
        return self.evaluator.evaluate(candidates, ballots)


SYSTEMS: Dict[Method, TabulationSystem] = {
    Method.INSTANT_RUNOFF: TabulationSystem(
        Method.INSTANT_RUNOFF.value,
        rcvtally.evaluate.sequential.InstantRunoff(),
    ),
    Method.RANKED_PAIRS: TabulationSystem(
        Method.RANKED_PAIRS.value,
        rcvtally.evaluate.condorcet.RankedPairs(),
    ),
    Method.COOMBS: TabulationSystem(
        Method.COOMBS.value,
        rcvtally.evaluate.sequential.Coombs(),
    ),
}


def tabulate(method: Union[str, Method, None],
             candidates: Iterable[Candidate],
             ballots: Iterable[Ballot],
             systems: Dict[Method, TabulationSystem] = SYSTEMS,
             ) -> rcvtally.evaluate.core.TabulationResult:
    '''Compute the winner of an election by the given method.

    :param method: The method or its display name. Unknown names fall back
        to Instant Runoff.
    :param candidates: Candidates taking part in the tabulation.
    :param ballots: Cast ballots.
    :param systems: Systems to use for the methods; override to configure
        the evaluators (e.g. the elimination policy).
    '''
    resolved = Method.parse(method)
    logger.info('tabulating by %s', resolved.value)
    return systems[resolved].evaluate(candidates, ballots)


def get_available_systems() -> Dict[str, TabulationSystem]:
    '''Return the default systems keyed by their display name.'''
    return {method.value: system for method, system in SYSTEMS.items()}
