'''Evaluate the ballots of a single-winner election.

Three methods are provided, each by an evaluator class with an
``evaluate(candidates, ballots)`` method:

-   Instant-runoff voting, :class:`sequential.InstantRunoff`,
-   Coombs method, :class:`sequential.Coombs`,
-   Ranked pairs (Tideman), :class:`condorcet.RankedPairs`.

All of them return a :class:`core.TabulationResult`: a :class:`core.Winner`
or, when the ballots do not determine a single winner, a
:class:`core.NoWinner` with the reason.

The evaluators reject malformed ballots (duplicate ranks, candidates ranked
twice) with :class:`rcvtally.vote.InvalidBallotError` but otherwise never
raise on well formed input. They do not filter inactive candidates; use
:func:`rcvtally.candidate.active_only` for that.
'''

from rcvtally.evaluate.core import *    # noqa
