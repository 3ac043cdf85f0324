#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
This module includes tests for MIDI input, csv/MIDI export,
reports, and plots.
"""
import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd

from notematch import (
    DTW,
    MatchSegment,
    TwoRoundNoteMatcher,
    load_note_array,
    plot_segments,
    print_alignment_report,
    print_segment_report,
)
from notematch.evaluate import extract_bpm, extract_tempo_map, plot_dtw, save_segment_midi
from notematch.evaluate.simple import match_midis
from notematch.match import FIRST_PASS

from tests import write_midi

MELODY = [(0, 60, 1.0), (1, 62, 1.0), (2, 64, 0.5), (2.5, 65, 1.5)]
PHRASE = [(float(i), p, 1.0) for i, p in enumerate([60, 62, 64, 65, 67, 65, 64, 62])]


class TestMidiInput(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.midi_file = write_midi(
            os.path.join(self.tmp_dir.name, "melody.mid"), MELODY, bpm=100.0
        )

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_load_note_array(self, **kwargs):
        note_array = load_note_array(self.midi_file)
        self.assertTrue(np.all(note_array["pitch"] == [60, 62, 64, 65]))
        self.assertTrue(np.allclose(note_array["tempo"], 100.0))
        self.assertTrue(
            np.allclose(note_array["duration"], [1.0, 1.0, 0.5, 1.5], atol=1e-3)
        )
        self.assertTrue(
            np.allclose(note_array["onset_sec"], [0.0, 0.6, 1.2, 1.5], atol=1e-3)
        )

    def test_load_note_array_seconds(self, **kwargs):
        note_array = load_note_array(self.midi_file, duration_unit="sec")
        self.assertTrue(
            np.allclose(note_array["duration"], [0.6, 0.6, 0.3, 0.9], atol=1e-3)
        )

    def test_tempo_map(self, **kwargs):
        tempo_map = extract_tempo_map(self.midi_file)
        self.assertEqual(len(tempo_map), 1)
        self.assertAlmostEqual(tempo_map[0][1], 100.0)
        self.assertAlmostEqual(extract_bpm(self.midi_file), 100.0)

    def test_default_tempo(self, **kwargs):
        midi_file = write_midi(
            os.path.join(self.tmp_dir.name, "no_tempo.mid"), MELODY, bpm=None
        )
        self.assertEqual(extract_bpm(midi_file), 120.0)

    def test_missing_channel(self, **kwargs):
        with self.assertRaises(ValueError):
            load_note_array(self.midi_file, channel=5)

    def test_unknown_duration_unit(self, **kwargs):
        with self.assertRaises(ValueError):
            load_note_array(self.midi_file, duration_unit="tick")


class TestPipeline(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.ref_file = write_midi(
            os.path.join(self.tmp_dir.name, "reference.mid"), PHRASE, bpm=100.0
        )
        self.perf_file = write_midi(
            os.path.join(self.tmp_dir.name, "performance.mid"), PHRASE, bpm=100.0
        )

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_match_midis(self, **kwargs):
        notes_csv = os.path.join(self.tmp_dir.name, "notes.csv")
        segments_csv = os.path.join(self.tmp_dir.name, "segments.csv")
        results, segments, convention = match_midis(
            self.ref_file,
            self.perf_file,
            output_file=notes_csv,
            segments_file=segments_csv,
        )
        self.assertEqual(len(results), len(PHRASE))
        self.assertTrue(all(m.stage == FIRST_PASS for m in results))
        self.assertEqual([m.reference_index for m in results], list(range(len(PHRASE))))
        self.assertEqual(segments, [MatchSegment(0, 0, 8, 100.0)])
        self.assertIsNone(convention)

        notes_df = pd.read_csv(notes_csv)
        self.assertEqual(len(notes_df), len(PHRASE))
        self.assertTrue(np.all(notes_df["stage"] == FIRST_PASS))
        segments_df = pd.read_csv(segments_csv)
        self.assertEqual(segments_df["length"].tolist(), [8])

    def test_save_segment_midi(self, **kwargs):
        perf_na = load_note_array(self.perf_file)
        out = os.path.join(self.tmp_dir.name, "segment.mid")
        save_segment_midi(perf_na, MatchSegment(0, 2, 4, 100.0), out)
        segment_na = load_note_array(out, duration_unit="sec")
        self.assertTrue(np.all(segment_na["pitch"] == [64, 65, 67, 65]))
        self.assertTrue(np.allclose(segment_na["duration"], 0.6, atol=1e-2))
        self.assertAlmostEqual(segment_na["onset_sec"][0], 0.0, places=3)

    def test_reports(self, **kwargs):
        ref_na = load_note_array(self.ref_file)
        perf_na = load_note_array(self.perf_file)
        results = TwoRoundNoteMatcher()(ref_na, perf_na)

        buf = io.StringIO()
        with redirect_stdout(buf):
            print_alignment_report(results)
            print_segment_report(
                [MatchSegment(0, 0, 8, 100.0), MatchSegment(0, 0, 2, 100.0)],
                fallback_convention="musical",
            )
        report = buf.getvalue()
        self.assertIn("Match Stage", report)
        self.assertIn(FIRST_PASS, report)
        self.assertIn("[Fallback Triggered] Yes (musical time)", report)
        self.assertIn("100.0%", report)
        # segments shorter than three notes are not listed
        self.assertEqual(report.count("100.0%"), 1)

    def test_plots(self, **kwargs):
        ref_na = load_note_array(self.ref_file)
        perf_na = load_note_array(self.perf_file)
        fname = os.path.join(self.tmp_dir.name, "segments")
        plot_segments(
            ref_na, perf_na, [MatchSegment(0, 0, 8, 100.0)], save_file=True, fname=fname
        )
        self.assertTrue(os.path.exists(fname + ".png"))

        fname = os.path.join(self.tmp_dir.name, "dtw")
        plot_dtw(DTW()(ref_na["pitch"], perf_na["pitch"]), save_file=True, fname=fname)
        self.assertTrue(os.path.exists(fname + ".png"))


if __name__ == "__main__":
    unittest.main()
