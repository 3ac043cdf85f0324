#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
This module contains a condensed,
single-command method to compare two MIDI files
and save the results as csv files.
"""

from ..match import TwoRoundNoteMatcher
from ..mismatch import RepeatedSegmentFinder
from .io import load_note_array, save_match_results_csv, save_segments_csv


def match_midis(ref_midi, # the reference rendition of the piece
                performance_midi, # the performance that will be compared to the reference
                output_file = "matched_notes.csv", # a path to a csv file where we store the note matches
                segments_file = None, # a path to a csv file for the matched passages, not saved if None
                similarity_threshold = 70.0, # minimal similarity of a matched passage
                channel = None): # only compare notes of this MIDI channel

    ref_na = load_note_array(ref_midi, duration_unit="beat", channel=channel)
    performance_na = load_note_array(performance_midi, duration_unit="beat", channel=channel)

    # note matching at the reference tempo
    matcher = TwoRoundNoteMatcher(duration_unit="beat")
    results = matcher(ref_na, performance_na, tempo=ref_na["tempo"][0])

    # repeated passages
    finder = RepeatedSegmentFinder(similarity_threshold=similarity_threshold)
    segments, fallback_convention = finder(ref_na, performance_na, return_fallback=True)

    save_match_results_csv(results, output_file)
    if segments_file is not None:
        save_segments_csv(segments, segments_file)

    return results, segments, fallback_convention
