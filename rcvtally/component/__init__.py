'''Building blocks shared by the tabulation evaluators.

Tallies of first and last preferences, named elimination policies, pairwise
win scorers and the lock graph used by ranked pairs live here. There should
normally be no need to use these directly; the evaluators in
:mod:`rcvtally.evaluate` compose them.
'''
