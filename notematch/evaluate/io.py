#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
This module contains functionality to read note sequences
from MIDI files and to export match results and passages.
"""
import logging

import mido
import numpy as np
import pandas as pd
import partitura as pt

from ..match.features import DEFAULT_TEMPO, make_note_array, select_channel
from ..match.matchers import UNMATCHED

logger = logging.getLogger(__name__)


################################### NOTE SOURCE ###################################


def extract_tempo_map(filename):
    """
    tempo events of a MIDI file.

    Parameters
    ----------
    filename : str
        path to a MIDI file

    Returns
    -------
    tempo_map : list
        (time in seconds, BPM) tuples sorted by time, starting
        with a default tempo at 0 if the file sets none there.
    """
    midi = mido.MidiFile(filename)
    tempo_map = list()
    current_time = 0.0
    # iterating a MidiFile merges the tracks, times are seconds
    for msg in midi:
        current_time += msg.time
        if msg.type == "set_tempo":
            tempo_map.append((current_time, mido.tempo2bpm(msg.tempo)))

    if len(tempo_map) == 0 or tempo_map[0][0] > 0:
        tempo_map.insert(0, (0.0, DEFAULT_TEMPO))
    return tempo_map


def extract_bpm(filename):
    """
    tempo in force at the start of a MIDI file
    """
    return float(tempo_at(extract_tempo_map(filename), [0.0])[0])


def tempo_at(tempo_map, times):
    """
    BPM in force at each of the given times
    """
    map_times = np.array([t for t, _ in tempo_map])
    map_bpms = np.array([bpm for _, bpm in tempo_map])
    idx = np.searchsorted(map_times, np.asarray(times, dtype=float), side="right") - 1
    return map_bpms[np.clip(idx, 0, len(map_bpms) - 1)]


def load_note_array(filename, duration_unit="beat", channel=None):
    """
    read a note array from a MIDI file.

    Parameters
    ----------
    filename : str
        path to a MIDI file
    duration_unit : str
        "beat" to express durations as note values at the
        tempo of each onset, "sec" to keep seconds
    channel : int, optional
        keep only notes of this MIDI channel

    Returns
    -------
    note_array : np.ndarray
        note array sorted by onset (and pitch)
    """
    performance = pt.load_performance_midi(filename)
    pna = performance.note_array()
    pna = pna[np.lexsort((pna["pitch"], pna["onset_sec"]))]

    tempo_map = extract_tempo_map(filename)
    tempo = tempo_at(tempo_map, pna["onset_sec"])
    if duration_unit == "beat":
        durations = pna["duration_sec"] * tempo / 60.0
    elif duration_unit == "sec":
        durations = pna["duration_sec"]
    else:
        raise ValueError(
            "duration_unit needs to be 'beat' or 'sec', got {0}".format(duration_unit)
        )

    note_array = make_note_array(
        pna["onset_sec"], pna["pitch"], durations, pna["channel"], tempo
    )
    note_array = select_channel(note_array, channel)

    if len(note_array) == 0:
        raise ValueError("No valid notes found in MIDI file: {0}".format(filename))
    if np.any(note_array["duration"] <= 0):
        raise ValueError(
            "{0} notes without positive duration in MIDI file: {1}".format(
                np.sum(note_array["duration"] <= 0), filename
            )
        )
    logger.info(
        "read %d notes and %d tempo events from %s",
        len(note_array),
        len(tempo_map),
        filename,
    )
    return note_array


################################### EXPORT ###################################


def match_results_to_dataframe(results):
    rows = list()
    for m in results:
        matched = m.stage != UNMATCHED
        rows.append(
            {
                "order": m.order,
                "candidate_onset_sec": m.candidate_note["onset_sec"],
                "candidate_pitch": m.candidate_note["pitch"],
                "candidate_duration": m.candidate_note["duration"],
                "reference_index": m.reference_index,
                "reference_onset_sec": m.reference_note["onset_sec"] if matched else None,
                "reference_pitch": m.reference_note["pitch"] if matched else None,
                "reference_duration": m.reference_note["duration"] if matched else None,
                "tempo_correction_ratio": m.tempo_correction_ratio,
                "alignment_score": m.alignment_score,
                "stage": m.stage,
            }
        )
    return pd.DataFrame(rows)


def save_match_results_csv(results, out="matched_notes.csv"):
    """
    save note match results as csv, one row per candidate note
    """
    df = match_results_to_dataframe(results)
    df.to_csv(out, index=False)
    return df


def save_segments_csv(segments, out="matched_segments.csv"):
    """
    save passage matches as csv, one row per segment
    """
    df = pd.DataFrame([seg._asdict() for seg in segments], columns=[
        "reference_start", "candidate_start", "length", "similarity_score"
    ])
    df.to_csv(out, index=False)
    return df


def save_segment_midi(
    note_array,
    segment,
    out="segment.mid",
    side="candidate",
    duration_unit="beat",
    velocity=64,
):
    """
    write the notes of a matched passage to a MIDI file.

    Parameters
    ----------
    note_array : np.ndarray
        the full note array of one side
    segment : MatchSegment
        a matched segment
    out : str
        path of the MIDI file
    side : str
        "candidate" or "reference", the side `note_array` belongs to
    duration_unit : str
        duration convention of `note_array`
    velocity : int
        MIDI velocity of the written notes
    """
    if side == "candidate":
        notes = note_array[segment.candidate_slice()]
    elif side == "reference":
        notes = note_array[segment.reference_slice()]
    else:
        raise ValueError("side needs to be 'candidate' or 'reference', got {0}".format(side))

    if duration_unit == "beat":
        duration_sec = notes["duration"] * 60.0 / notes["tempo"]
    else:
        duration_sec = notes["duration"]

    fields = [
        ("onset_sec", "f4"),
        ("duration_sec", "f4"),
        ("pitch", "i4"),
        ("velocity", "i4"),
        ("track", "i4"),
        ("channel", "i4"),
        ("id", "U256"),
    ]
    export_array = np.zeros(len(notes), dtype=fields)
    if len(notes) > 0:
        export_array["onset_sec"] = notes["onset_sec"] - notes["onset_sec"][0]
    export_array["duration_sec"] = duration_sec
    export_array["pitch"] = notes["pitch"]
    export_array["velocity"] = velocity
    export_array["channel"] = notes["channel"]
    export_array["id"] = ["n{0}".format(idx) for idx in range(len(notes))]

    ppart = pt.performance.PerformedPart.from_note_array(export_array)
    pt.save_performance_midi(ppart, out)
    return export_array
