#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains the segment record and
overlap resolution for passage matching.
"""
from typing import NamedTuple

import numpy as np


class MatchSegment(NamedTuple):
    """
    a passage shared by the reference and the candidate sequence.

    Attributes
    ----------
    reference_start : int
        index of the first reference note
    candidate_start : int
        index of the first candidate note
    length : int
        number of notes
    similarity_score : float
        similarity in [0, 100]
    """

    reference_start: int
    candidate_start: int
    length: int
    similarity_score: float

    def reference_slice(self):
        return slice(self.reference_start, self.reference_start + self.length)

    def candidate_slice(self):
        return slice(self.candidate_start, self.candidate_start + self.length)


def resolve_overlaps(candidates, n_reference, n_candidate):
    """
    greedily select index-disjoint segments.

    Longer segments are considered first (higher similarity
    first on equal length). A segment is accepted if it lies
    within both sequences and none of its reference or candidate
    notes is claimed by an already accepted segment.

    Parameters
    ----------
    candidates : list of MatchSegment
        candidate segments, possibly overlapping
    n_reference : int
        number of reference notes
    n_candidate : int
        number of candidate notes

    Returns
    -------
    segments : list of MatchSegment
        accepted segments sorted by descending similarity
    """
    ref_used = np.zeros(n_reference, dtype=bool)
    perf_used = np.zeros(n_candidate, dtype=bool)
    accepted = list()

    for seg in sorted(candidates, key=lambda s: (-s.length, -s.similarity_score)):
        if seg.reference_start < 0 or seg.candidate_start < 0:
            continue
        if (
            seg.reference_start + seg.length > n_reference
            or seg.candidate_start + seg.length > n_candidate
        ):
            continue
        ref_slice = seg.reference_slice()
        perf_slice = seg.candidate_slice()
        if ref_used[ref_slice].any() or perf_used[perf_slice].any():
            continue
        accepted.append(seg)
        ref_used[ref_slice] = True
        perf_used[perf_slice] = True

    return sorted(accepted, key=lambda s: -s.similarity_score)
