#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains note matcher classes.
"""
import logging
from typing import NamedTuple

import numpy as np

from ..dp.dtw import DTW
from .features import (
    NOTE_DTYPE,
    context_window,
    ensure_note_array,
    feature_matrix,
    reference_tempo,
    relative_features,
)

logger = logging.getLogger(__name__)

FIRST_PASS = "first_pass"
SECOND_PASS = "second_pass"
UNMATCHED = "unmatched"

STAGES = (FIRST_PASS, SECOND_PASS, UNMATCHED)

EMPTY_NOTE = np.zeros(1, dtype=NOTE_DTYPE)[0]


class MatchResult(NamedTuple):
    """
    correspondence of one candidate note.

    Attributes
    ----------
    order : int
        index of the note in the candidate sequence
    candidate_note : np.void
        the candidate note
    reference_note : np.void
        the matched reference note, an all-zero note if unmatched
    reference_index : int
        index of the matched reference note, -1 if unmatched
    tempo_correction_ratio : float
        reference duration / candidate duration
    alignment_score : float
        context DTW distance of the match, nan if unmatched
    stage : str
        "first_pass", "second_pass", or "unmatched"
    """

    order: int
    candidate_note: np.void
    reference_note: np.void
    reference_index: int
    tempo_correction_ratio: float
    alignment_score: float
    stage: str

    @property
    def is_match(self):
        return self.stage != UNMATCHED


class TwoRoundNoteMatcher(object):
    """
    Greedy note matcher based on relative note features.

    Every candidate note is matched to a reference note in two
    passes. The first pass admits reference notes with the same
    pitch interval and similar duration and position, the second
    pass admits any reference note whose pitch interval differs by
    at most `interval_tolerance`. Among the admitted notes the one
    whose context window is closest under DTW wins.

    Parameters
    ----------
    duration_tolerance_ratio : float
        first pass duration tolerance, relative to the
        mean reference duration
    position_tolerance : float
        first pass tolerance of the onset relative to the
        first note, in seconds
    interval_tolerance : int
        second pass pitch interval tolerance in semitones
    context_radius : int
        number of neighbors on each side in the context window
    duration_unit : str
        "beat" if note durations are note values,
        "sec" if they are seconds
    group_by_stage : bool
        order the output by stage first (first pass, second pass,
        unmatched), else by candidate index only
    """

    def __init__(
        self,
        duration_tolerance_ratio=0.3,
        position_tolerance=0.5,
        interval_tolerance=1,
        context_radius=1,
        duration_unit="beat",
        group_by_stage=False,
    ):
        self.duration_tolerance_ratio = duration_tolerance_ratio
        self.position_tolerance = position_tolerance
        self.interval_tolerance = interval_tolerance
        self.context_radius = context_radius
        self.duration_unit = duration_unit
        self.group_by_stage = group_by_stage
        self.dtw = DTW()

    def first_pass_mask(self, ref_features, perf_feature, ref_mean):
        """
        reference notes admitted by the strict criteria
        """
        same_interval = ref_features["pitch_interval"] == perf_feature["pitch_interval"]
        similar_duration = (
            np.abs(ref_features["normalized_duration"] - perf_feature["normalized_duration"])
            <= self.duration_tolerance_ratio * ref_mean
        )
        similar_position = (
            np.abs(ref_features["relative_start"] - perf_feature["relative_start"])
            <= self.position_tolerance
        )
        return np.all((same_interval, similar_duration, similar_position), axis=0)

    def second_pass_mask(self, ref_features, perf_feature):
        """
        reference notes admitted by the relaxed criteria
        """
        interval_diff = np.abs(
            ref_features["pitch_interval"].astype(int) - int(perf_feature["pitch_interval"])
        )
        return interval_diff <= self.interval_tolerance

    def context_distance(self, ref_rows, perf_rows, r_idx, p_idx):
        ctx_ref = context_window(ref_rows, r_idx, self.context_radius)
        ctx_perf = context_window(perf_rows, p_idx, self.context_radius)
        return self.dtw(ctx_ref, ctx_perf).distance

    def best_context_match(self, ref_rows, perf_rows, p_idx, admitted):
        """
        admitted reference index with the lowest context distance,
        the first one on ties. Returns (-1, inf) if none is admitted.
        """
        min_score = np.inf
        best_ref_idx = -1
        for r_idx in admitted:
            score = self.context_distance(ref_rows, perf_rows, r_idx, p_idx)
            if score < min_score:
                min_score = score
                best_ref_idx = int(r_idx)
        return best_ref_idx, min_score

    def __call__(self, reference_notes, candidate_notes, tempo=None):
        """
        match every candidate note to at most one reference note.

        Parameters
        ----------
        reference_notes : np.ndarray
            reference note array
        candidate_notes : np.ndarray
            candidate (performance) note array
        tempo : float, optional
            BPM for the seconds-per-beat conversion, defaults
            to the tempo at the first reference onset

        Returns
        -------
        results : list of MatchResult
            one entry per candidate note
        """
        ref_notes = ensure_note_array(reference_notes)
        perf_notes = ensure_note_array(candidate_notes)
        if tempo is None:
            tempo = reference_tempo(ref_notes)

        ref_rel = relative_features(ref_notes, self.duration_unit, tempo)
        perf_rel = relative_features(perf_notes, self.duration_unit, tempo)
        ref_mean = ref_rel["normalized_duration"].mean() if len(ref_rel) > 0 else 0.0
        ref_rows = feature_matrix(ref_rel)
        perf_rows = feature_matrix(perf_rel)

        matched_ref = np.zeros(len(ref_notes), dtype=bool)
        matched_perf = np.zeros(len(perf_notes), dtype=bool)
        matches = list()

        # first round: equal interval, similar duration and position
        for p_idx in range(len(perf_rel)):
            admitted = np.flatnonzero(
                self.first_pass_mask(ref_rel, perf_rel[p_idx], ref_mean) & ~matched_ref
            )
            r_idx, score = self.best_context_match(ref_rows, perf_rows, p_idx, admitted)
            if r_idx >= 0:
                matches.append(
                    self._match(ref_notes, perf_notes, ref_rel, perf_rel, p_idx, r_idx, score, FIRST_PASS)
                )
                matched_ref[r_idx] = True
                matched_perf[p_idx] = True
        logger.debug("first pass matched %d of %d notes", matched_perf.sum(), len(perf_notes))

        # second round: close interval
        for p_idx in np.flatnonzero(~matched_perf):
            admitted = np.flatnonzero(
                self.second_pass_mask(ref_rel, perf_rel[p_idx]) & ~matched_ref
            )
            r_idx, score = self.best_context_match(ref_rows, perf_rows, p_idx, admitted)
            if r_idx >= 0:
                matches.append(
                    self._match(ref_notes, perf_notes, ref_rel, perf_rel, p_idx, r_idx, score, SECOND_PASS)
                )
                matched_ref[r_idx] = True
                matched_perf[p_idx] = True
        logger.debug("second pass matched %d of %d notes", matched_perf.sum(), len(perf_notes))

        for p_idx in np.flatnonzero(~matched_perf):
            matches.append(
                MatchResult(int(p_idx), perf_notes[p_idx], EMPTY_NOTE, -1, 1.0, np.nan, UNMATCHED)
            )

        if self.group_by_stage:
            matches.sort(key=lambda m: (STAGES.index(m.stage), m.order))
        else:
            matches.sort(key=lambda m: m.order)
        return matches

    @staticmethod
    def _match(ref_notes, perf_notes, ref_rel, perf_rel, p_idx, r_idx, score, stage):
        ratio = ref_rel["normalized_duration"][r_idx] / perf_rel["normalized_duration"][p_idx]
        return MatchResult(
            int(p_idx),
            perf_notes[p_idx],
            ref_notes[r_idx],
            int(r_idx),
            float(ratio),
            float(score),
            stage,
        )
