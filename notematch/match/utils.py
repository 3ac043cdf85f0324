#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains conversions of note match results.
"""
import numpy as np

from .matchers import UNMATCHED


def match_pairs(results):
    """
    (candidate index, reference index) pairs of all matched notes.

    Parameters
    ----------
    results : list of MatchResult
        output of a note matcher

    Returns
    -------
    pairs : np.ndarray
        (k, 2) integer array
    """
    pairs = [(m.order, m.reference_index) for m in results if m.stage != UNMATCHED]
    return np.array(pairs, dtype=int).reshape(-1, 2)


def results_to_alignment(results, n_reference, score_ids=None, performance_ids=None):
    """
    create alignment in list of dicts format from match results.

    Matched candidate notes become matches, unmatched candidate
    notes insertions, and unclaimed reference notes deletions.

    Parameters
    ----------
    results : list of MatchResult
        output of a note matcher
    n_reference : int
        number of notes in the reference sequence
    score_ids : sequence, optional
        ids of the reference notes, defaults to "r{index}"
    performance_ids : sequence, optional
        ids of the candidate notes, defaults to "p{index}"

    Returns
    -------
    alignment : list
        A list of note alignment dictionaries.
    """
    if score_ids is None:
        score_ids = ["r{0}".format(idx) for idx in range(n_reference)]
    if performance_ids is None:
        performance_ids = ["p{0}".format(m.order) for m in sorted(results, key=lambda m: m.order)]

    alignment = list()
    claimed = np.zeros(n_reference, dtype=bool)
    for m in sorted(results, key=lambda m: m.order):
        if m.stage == UNMATCHED:
            alignment.append(
                {"label": "insertion", "performance_id": str(performance_ids[m.order])}
            )
        else:
            alignment.append(
                {
                    "label": "match",
                    "score_id": str(score_ids[m.reference_index]),
                    "performance_id": str(performance_ids[m.order]),
                    "stage": m.stage,
                }
            )
            claimed[m.reference_index] = True

    for r_idx in np.flatnonzero(~claimed):
        alignment.append({"label": "deletion", "score_id": str(score_ids[r_idx])})

    return alignment
