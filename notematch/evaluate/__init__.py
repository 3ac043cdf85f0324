#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to read, export, report,
visualize, and evaluate matched note sequences.
"""

from .io import (
    load_note_array,
    extract_tempo_map,
    extract_bpm,
    save_match_results_csv,
    save_segments_csv,
    save_segment_midi,
)
from .eval import fscore_matches, check_coverage, segments_are_disjoint
from .report import print_alignment_report, print_segment_report
from .plot import plot_segments, plot_dtw
