#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to find passages that
recur in a reference and a candidate note sequence.
"""
import logging

import numpy as np

from ..dp.runs import interval_runs
from ..match.features import ensure_note_array, pitch_intervals
from .fallback import SequentialFallbackMatcher
from .utils import MatchSegment, resolve_overlaps

logger = logging.getLogger(__name__)

MUSICAL_TIME = "musical"
ABSOLUTE_TIME = "absolute"


def segment_similarity(
    ref_segment,
    perf_segment,
    base_score_per_note=10.0,
    rhythm_bonus=5.0,
    rhythm_tolerance=0.15,
):
    """
    duration based similarity of two equally long passages.

    Every note scores `base_score_per_note`, every note whose
    duration lies within `rhythm_tolerance` (relative) of the
    corresponding reference duration additionally scores
    `rhythm_bonus`. The score is capped at 100.
    """
    ref_durations = ref_segment["duration"]
    perf_durations = perf_segment["duration"]
    rhythm_matches = np.sum(
        np.abs(perf_durations - ref_durations) <= rhythm_tolerance * ref_durations
    )
    score = base_score_per_note * len(ref_segment) + rhythm_bonus * rhythm_matches
    return float(min(score, 100.0))


class RepeatedSegmentFinder(object):
    """
    Find contiguous passages with equal pitch intervals
    in a reference and a candidate sequence.

    Runs of at least `min_run` equal consecutive intervals become
    candidate segments, scored by `segment_similarity`. If no
    candidate reaches `fallback_similarity`, the sequential
    fallback matcher is tried, first in musical time and then in
    absolute time. Overlapping candidates are resolved greedily,
    longest first.

    Parameters
    ----------
    similarity_threshold : float
        minimal similarity of a returned segment
    min_run : int
        minimal number of matching intervals
    base_score_per_note : float
        similarity credited per note
    rhythm_bonus : float
        similarity credited per note with matching duration
    rhythm_tolerance : float
        relative duration tolerance of a rhythm match
    fallback_similarity : float
        similarity a candidate needs to skip the fallback
    fallback : SequentialFallbackMatcher, optional
        fallback matcher
    """

    def __init__(
        self,
        similarity_threshold=70.0,
        min_run=4,
        base_score_per_note=10.0,
        rhythm_bonus=5.0,
        rhythm_tolerance=0.15,
        fallback_similarity=50.0,
        fallback=None,
    ):
        self.similarity_threshold = similarity_threshold
        self.min_run = min_run
        self.base_score_per_note = base_score_per_note
        self.rhythm_bonus = rhythm_bonus
        self.rhythm_tolerance = rhythm_tolerance
        self.fallback_similarity = fallback_similarity
        if fallback is None:
            fallback = SequentialFallbackMatcher()
        self.fallback = fallback

    def similarity(self, ref_segment, perf_segment):
        return segment_similarity(
            ref_segment,
            perf_segment,
            base_score_per_note=self.base_score_per_note,
            rhythm_bonus=self.rhythm_bonus,
            rhythm_tolerance=self.rhythm_tolerance,
        )

    def run_candidates(self, ref_notes, perf_notes, similarity_threshold):
        """
        candidate segments from runs of equal pitch intervals
        """
        candidates = list()
        runs = interval_runs(
            pitch_intervals(ref_notes), pitch_intervals(perf_notes), self.min_run
        )
        for ref_start, perf_start, run_length in runs:
            # n intervals connect n + 1 notes
            length = run_length + 1
            if (
                ref_start + length > len(ref_notes)
                or perf_start + length > len(perf_notes)
            ):
                continue
            sim = self.similarity(
                ref_notes[ref_start : ref_start + length],
                perf_notes[perf_start : perf_start + length],
            )
            if sim >= similarity_threshold:
                candidates.append(
                    MatchSegment(int(ref_start), int(perf_start), int(length), sim)
                )
        return candidates

    def fallback_candidates(self, ref_notes, perf_notes, similarity_threshold):
        """
        candidate segments of the sequential fallback and
        the time convention that produced them
        """
        for use_musical_time, convention in ((True, MUSICAL_TIME), (False, ABSOLUTE_TIME)):
            candidates = [
                seg
                for seg in self.fallback(ref_notes, perf_notes, use_musical_time)
                if seg.similarity_score >= similarity_threshold
            ]
            if candidates:
                return candidates, convention
        return list(), None

    def __call__(
        self,
        reference_notes,
        candidate_notes,
        similarity_threshold=None,
        return_fallback=False,
    ):
        """
        Parameters
        ----------
        reference_notes : np.ndarray
            reference note array
        candidate_notes : np.ndarray
            candidate note array
        similarity_threshold : float, optional
            overrides the threshold of the finder
        return_fallback : bool
            additionally return the fallback convention used
            ("musical", "absolute", or None)

        Returns
        -------
        segments : list of MatchSegment
            index-disjoint segments, sorted by descending similarity
        """
        if similarity_threshold is None:
            similarity_threshold = self.similarity_threshold
        ref_notes = ensure_note_array(reference_notes)
        perf_notes = ensure_note_array(candidate_notes)

        candidates = self.run_candidates(ref_notes, perf_notes, similarity_threshold)
        logger.debug("%d interval run candidates", len(candidates))

        convention = None
        if not any(c.similarity_score >= self.fallback_similarity for c in candidates):
            fallback_candidates, convention = self.fallback_candidates(
                ref_notes, perf_notes, similarity_threshold
            )
            if convention is not None:
                logger.debug("using %s time fallback", convention)
                candidates = fallback_candidates

        segments = resolve_overlaps(candidates, len(ref_notes), len(perf_notes))

        if return_fallback:
            return segments, convention
        return segments
