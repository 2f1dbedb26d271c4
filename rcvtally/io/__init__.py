"""Input/output of storage exports of candidates and ballots.

This subpackage is structured into modules by file format. So far, only the
flat row format (:mod:`rows`) used by database exports is supported.
"""
