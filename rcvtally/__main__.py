"""A commandline tool to compute the winner of a ranked-choice election.

Reads candidate and ballot exports in the CSV row format (see
rcvtally.io.rows) and prints the winner under the chosen method, or the
reason why there is none.
"""

import argparse
import io
import json
import logging
import sys
import warnings
from typing import Dict, List, Optional

import rcvtally.candidate
import rcvtally.component.elimination
import rcvtally.evaluate.condorcet
import rcvtally.evaluate.core
import rcvtally.evaluate.sequential
import rcvtally.io.core
import rcvtally.io.rows
import rcvtally.persist
import rcvtally.util
import rcvtally.vote
from rcvtally.candidate import Candidate
from rcvtally.evaluate.core import TabulationResult, Winner
from rcvtally.system import Method, TabulationSystem
from rcvtally.vote import Ballot

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-c', '--candidates-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load candidates from',
)
argparser.add_argument(
    '-b', '--ballots-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load ballot rows from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load ballot rows from standard input',
)
argparser.add_argument(
    '-m', '--method',
    default=Method.INSTANT_RUNOFF.value,
    help=(
        'tabulation method: ' + ', '.join(m.value for m in Method)
        + '; unknown names fall back to Instant Runoff'
    ),
)
argparser.add_argument(
    '-a', '--all-methods',
    action='store_true',
    help='tabulate by all methods and compare the winners',
)
argparser.add_argument(
    '-e', '--elimination',
    default='all_tied',
    choices=sorted(rcvtally.component.elimination.ELIMINATION_POLICIES),
    help='how Instant Runoff and Coombs eliminate tied candidates',
)
argparser.add_argument(
    '-u', '--unknown-candidates',
    default='ignore',
    choices=rcvtally.vote.UNKNOWN_CANDIDATE_POLICIES,
    help='what to do with ballot entries for candidates not tabulated',
)
argparser.add_argument(
    '-S', '--system-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='JSON tabulation system definition to use instead of --method',
)
argparser.add_argument(
    '--include-inactive',
    action='store_true',
    help='tabulate inactive candidates too',
)
argparser.add_argument(
    '-r', '--show-rounds',
    action='store_true',
    help='show the tallies of every round',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages or other info',
)


def main(candidates_file: io.TextIOBase,
         ballots_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         method: str = Method.INSTANT_RUNOFF.value,
         all_methods: bool = False,
         elimination: str = 'all_tied',
         unknown_candidates: str = 'ignore',
         system_file: Optional[io.TextIOBase] = None,
         include_inactive: bool = False,
         show_rounds: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        ballots_file = sys.stdin
    try:
        candidates = rcvtally.io.rows.load_candidates(candidates_file)
        ballots = rcvtally.io.rows.load(ballots_file)
    except rcvtally.io.core.ParseError as e:
        warnings.warn(f'cannot read input: {e}, terminating')
        return
    if not include_inactive:
        candidates = rcvtally.candidate.active_only(candidates)
    if not candidates:
        warnings.warn('no active candidates: cannot tabulate, terminating')
        return
    if system_file is not None:
        use_systems = [load_system(system_file)]
    else:
        systems = build_systems(elimination, unknown_candidates)
        if all_methods:
            use_systems = list(systems.values())
        else:
            use_systems = [systems[Method.parse(method)]]
    show_input_stats(candidates, ballots)
    for system in use_systems:
        run_one_system(system, candidates, ballots, show_rounds=show_rounds)


def build_systems(elimination: str = 'all_tied',
                  unknown_candidates: str = 'ignore',
                  ) -> Dict[Method, TabulationSystem]:
    """Set up the systems for all methods with the given options."""
    return {
        Method.INSTANT_RUNOFF: TabulationSystem(
            Method.INSTANT_RUNOFF.value,
            rcvtally.evaluate.sequential.InstantRunoff(
                elimination=elimination,
                unknown_candidates=unknown_candidates,
            ),
        ),
        Method.RANKED_PAIRS: TabulationSystem(
            Method.RANKED_PAIRS.value,
            rcvtally.evaluate.condorcet.RankedPairs(
                unknown_candidates=unknown_candidates,
            ),
        ),
        Method.COOMBS: TabulationSystem(
            Method.COOMBS.value,
            rcvtally.evaluate.sequential.Coombs(
                elimination=elimination,
                unknown_candidates=unknown_candidates,
            ),
        ),
    }


def load_system(system_file: io.TextIOBase) -> TabulationSystem:
    """Load a tabulation system from its JSON definition."""
    try:
        loaded = rcvtally.persist.from_dict(json.load(system_file))
    except json.JSONDecodeError as e:
        raise ValueError(f'invalid system definition file: {e}') from e
    if isinstance(loaded, rcvtally.evaluate.core.Evaluator):
        loaded = TabulationSystem(type(loaded).__name__, loaded)
    if not isinstance(loaded, TabulationSystem):
        raise ValueError(f'not a tabulation system definition: {loaded!r}')
    return loaded


def show_input_stats(candidates: List[Candidate],
                     ballots: List[Ballot],
                     ) -> None:
    print(f'Received {len(ballots)} ballots')
    print(f'{len(candidates)} candidates:')
    for cand in candidates:
        print(' ' * 10 + str(cand))


def show_rounds_full(result: TabulationResult,
                     candidates: List[Candidate],
                     pairwise: bool = False,
                     ) -> None:
    """Show the tallies and eliminations of every round of a count."""
    names = {cand.id: cand.name for cand in candidates}
    for count in result.rounds:
        print(f'Round {count.number}:')
        if pairwise:
            for victory in count.locked:
                print(f'  locked   {names[victory.winner]} over '
                      f'{names[victory.loser]} (margin {victory.margin})')
            for victory in count.skipped:
                print(f'  skipped  {names[victory.winner]} over '
                      f'{names[victory.loser]} (margin {victory.margin})')
            continue
        for cand_id, n_votes in rcvtally.util.sorted_votes(count.tallies):
            print(f'  {names[cand_id]:<20} {n_votes}')
        if count.exhausted:
            print(f'  {"(exhausted)":<20} {count.exhausted}')
        if count.eliminated:
            print('  eliminated: '
                  + ', '.join(names[cand] for cand in count.eliminated))


def run_one_system(system: TabulationSystem,
                   candidates: List[Candidate],
                   ballots: List[Ballot],
                   show_rounds: bool = False,
                   ) -> TabulationResult:
    print()
    print(f'Running a {system.name} tabulation')
    result = system.evaluate(candidates, ballots)
    if show_rounds:
        show_rounds_full(
            result,
            candidates,
            pairwise=isinstance(
                system.evaluator, rcvtally.evaluate.condorcet.RankedPairs
            ),
        )
    if isinstance(result, Winner):
        print(f'Winner: {result.name}')
    else:
        print(f'No winner: {result.reason.value}')
    return result


def cli() -> None:
    args = argparser.parse_args()
    if not args.candidates_file or not (args.ballots_file or args.use_stdin):
        argparser.print_usage()
    else:
        main(**vars(args))


if __name__ == '__main__':
    cli()
