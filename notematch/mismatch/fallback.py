#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains a sequential, duration-driven matcher
used when no repeated interval run is found.
"""
import logging

from ..match.features import ensure_note_array, pitch_intervals, quarter_durations
from .utils import MatchSegment

logger = logging.getLogger(__name__)


class SequentialFallbackMatcher(object):
    """
    Greedy walk through the candidate sequence.

    For each candidate start offset, the reference pitch intervals
    are matched one after the other against windows of candidate
    notes: a reference step is matched at the first candidate note
    with the same outgoing pitch interval where the duration
    accumulated over the window lies within the rhythm tolerance
    of the reference note duration. The reference side of every
    emitted segment is anchored at 0.

    Parameters
    ----------
    rhythm_tolerance : float
        relative duration tolerance
    epsilon : float
        absolute slack added to the duration bounds
    min_pairs : int
        minimal number of matched steps for a segment
    similarity_per_pair : float
        similarity credited per matched step, capped at 100
    """

    def __init__(
        self,
        rhythm_tolerance=0.15,
        epsilon=0.01,
        min_pairs=2,
        similarity_per_pair=50.0,
    ):
        self.rhythm_tolerance = rhythm_tolerance
        self.epsilon = epsilon
        self.min_pairs = min_pairs
        self.similarity_per_pair = similarity_per_pair

    def search_window(self, ref_interval, ref_duration, perf_intervals, perf_durations, start):
        """
        first candidate index from `start` on that closes a window
        matching the reference step, -1 if there is none.
        """
        lower = ref_duration * (1 - self.rhythm_tolerance) - self.epsilon
        upper = ref_duration * (1 + self.rhythm_tolerance) + self.epsilon
        accumulated = 0.0
        for q in range(start, len(perf_intervals)):
            accumulated += perf_durations[q]
            if accumulated > upper:
                break
            if perf_intervals[q] == ref_interval and accumulated >= lower:
                return q
        return -1

    def walk(self, ref_intervals, ref_durations, perf_intervals, perf_durations, offset):
        """
        matched steps and final candidate cursor of a walk
        starting at candidate note `offset`.
        """
        r = 0
        p = offset
        matched_pairs = 0
        while r < len(ref_intervals) and p < len(perf_intervals):
            q = self.search_window(
                ref_intervals[r], ref_durations[r], perf_intervals, perf_durations, p
            )
            if q >= 0:
                matched_pairs += 1
                r += 1
                p = q + 1
            else:
                p += 1
        return matched_pairs, p

    def __call__(self, reference_notes, candidate_notes, use_musical_time=True, candidates=None):
        """
        Parameters
        ----------
        reference_notes : np.ndarray
            reference note array
        candidate_notes : np.ndarray
            candidate note array
        use_musical_time : bool
            compare note values (True) or tempo-converted
            absolute durations (False)
        candidates : list, optional
            list the segments are appended to

        Returns
        -------
        candidates : list of MatchSegment
        """
        if candidates is None:
            candidates = list()
        ref_notes = ensure_note_array(reference_notes)
        perf_notes = ensure_note_array(candidate_notes)

        ref_intervals = pitch_intervals(ref_notes)
        perf_intervals = pitch_intervals(perf_notes)
        ref_durations = quarter_durations(ref_notes, use_musical_time)
        perf_durations = quarter_durations(perf_notes, use_musical_time)

        n_found = len(candidates)
        for offset in range(len(perf_notes)):
            matched_pairs, end = self.walk(
                ref_intervals, ref_durations, perf_intervals, perf_durations, offset
            )
            if matched_pairs >= self.min_pairs:
                length = min(end - offset + 1, len(ref_notes))
                similarity = min(matched_pairs * self.similarity_per_pair, 100.0)
                candidates.append(MatchSegment(0, offset, int(length), float(similarity)))

        logger.debug(
            "fallback (%s time) found %d segments",
            "musical" if use_musical_time else "absolute",
            len(candidates) - n_found,
        )
        return candidates
