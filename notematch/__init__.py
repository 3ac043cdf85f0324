#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
The top level of the package contains functions to
note-align two renditions of a piece and to find
the passages they share.
"""
from .dp import DTW, DTWResult, dtw_distance
from .match import (
    TwoRoundNoteMatcher,
    MatchResult,
    make_note_array,
    relative_features,
)
from .mismatch import (
    RepeatedSegmentFinder,
    SequentialFallbackMatcher,
    MatchSegment,
)
from .evaluate import (
    load_note_array,
    fscore_matches,
    print_alignment_report,
    print_segment_report,
    plot_segments,
    save_match_results_csv,
    save_segments_csv,
)

__all__ = [
    "DTW",
    "DTWResult",
    "dtw_distance",
    "TwoRoundNoteMatcher",
    "MatchResult",
    "make_note_array",
    "relative_features",
    "RepeatedSegmentFinder",
    "SequentialFallbackMatcher",
    "MatchSegment",
    "load_note_array",
    "fscore_matches",
    "print_alignment_report",
    "print_segment_report",
    "plot_segments",
    "save_match_results_csv",
    "save_segments_csv",
]
