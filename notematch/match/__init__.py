#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods for note alignment.
"""

from .features import (
    NOTE_DTYPE,
    FEATURE_DTYPE,
    make_note_array,
    ensure_note_array,
    relative_features,
    feature_matrix,
    pitch_intervals,
)
from .matchers import (
    TwoRoundNoteMatcher,
    MatchResult,
    FIRST_PASS,
    SECOND_PASS,
    UNMATCHED,
)
from .utils import match_pairs, results_to_alignment
