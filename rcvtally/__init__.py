"""rcvtally - a ranked-choice election tabulation engine.

Given the candidates of an election and the ranked ballots cast in it,
rcvtally computes the single winner under one of three methods:
instant-runoff voting, ranked pairs (Tideman) and the Coombs method.

The engine is pure: it reads the candidates and ballots it is given, never
modifies them and keeps no state between tabulations. Storage, user
management and presentation are left to the caller.

-   Candidates are described by the :mod:`candidate` module, ballots and
    their validation by the :mod:`vote` module.
-   The :mod:`evaluate` subpackage holds the evaluators for the three
    methods and the result types.
-   The :mod:`system` module dispatches to an evaluator by method name
    (:func:`system.tabulate`), which is the usual entry point.
-   The :mod:`io` subpackage reads and writes storage exports of candidates
    and ballots.
"""
