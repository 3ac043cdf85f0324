#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains the note array layout and
relative feature extraction for note sequences.
"""
import numpy as np

DEFAULT_TEMPO = 120.0

NOTE_DTYPE = np.dtype(
    [
        ("onset_sec", "f8"),
        ("pitch", "i4"),
        ("duration", "f8"),
        ("channel", "i4"),
        ("tempo", "f8"),
    ]
)

FEATURE_DTYPE = np.dtype(
    [
        ("pitch_interval", "i4"),
        ("normalized_duration", "f8"),
        ("relative_start", "f8"),
    ]
)

DURATION_UNITS = ("beat", "sec")


################################### NOTE ARRAYS ###################################


def make_note_array(onsets, pitches, durations, channels=0, tempo=DEFAULT_TEMPO):
    """
    create a note array from parallel sequences.

    Parameters
    ----------
    onsets : array_like
        onset times in seconds
    pitches : array_like
        MIDI pitches
    durations : array_like
        durations, either in seconds or in beats
    channels : int or array_like
        MIDI channel(s)
    tempo : float or array_like
        tempo in BPM at each onset

    Returns
    -------
    note_array : np.ndarray
        structured array with NOTE_DTYPE
    """
    pitches = np.asarray(pitches)
    note_array = np.zeros(len(pitches), dtype=NOTE_DTYPE)
    note_array["onset_sec"] = onsets
    note_array["pitch"] = pitches
    note_array["duration"] = durations
    note_array["channel"] = channels
    note_array["tempo"] = tempo
    return note_array


def ensure_note_array(notes):
    """
    convert note data to a note array with NOTE_DTYPE.

    Accepts note arrays, structured arrays with
    partitura-style fields (onset_sec, duration_sec, pitch, ...),
    and sequences of (onset, pitch, duration[, channel[, tempo]]) tuples.
    """
    if isinstance(notes, np.ndarray) and notes.dtype == NOTE_DTYPE:
        return notes

    if isinstance(notes, np.ndarray) and notes.dtype.names is not None:
        names = notes.dtype.names
        if "pitch" not in names or "onset_sec" not in names:
            raise ValueError(
                "note arrays need 'onset_sec' and 'pitch' fields, got {0}".format(names)
            )
        if "duration" in names:
            durations = notes["duration"]
        elif "duration_sec" in names:
            durations = notes["duration_sec"]
        else:
            raise ValueError("note arrays need a 'duration' or 'duration_sec' field")
        channels = notes["channel"] if "channel" in names else 0
        tempo = notes["tempo"] if "tempo" in names else DEFAULT_TEMPO
        return make_note_array(notes["onset_sec"], notes["pitch"], durations, channels, tempo)

    note_array = np.zeros(len(notes), dtype=NOTE_DTYPE)
    for idx, note in enumerate(notes):
        values = tuple(note) + (0, DEFAULT_TEMPO)[len(note) - 3 :]
        if len(values) != 5:
            raise ValueError("notes need 3 to 5 values, got {0}".format(note))
        note_array[idx] = values
    return note_array


def select_channel(note_array, channel=None):
    """
    keep only notes of one MIDI channel
    """
    if channel is None:
        return note_array
    return note_array[note_array["channel"] == channel]


def pitch_intervals(note_array):
    """
    semitone steps between consecutive notes
    (one less than the number of notes)
    """
    return np.diff(note_array["pitch"].astype(np.int64))


################################### TEMPO ###################################


def seconds_per_beat(tempo):
    if tempo is None or not tempo > 0:
        raise ValueError("tempo needs to be a positive BPM value, got {0}".format(tempo))
    return 60.0 / tempo


def reference_tempo(note_array, default=DEFAULT_TEMPO):
    """
    tempo at the first onset of a sequence
    """
    if len(note_array) == 0 or not note_array["tempo"][0] > 0:
        return default
    return float(note_array["tempo"][0])


def estimate_tempo(note_array, default=DEFAULT_TEMPO):
    """
    rough tempo estimate from the mean inter-onset interval,
    assuming one note per beat
    """
    if len(note_array) < 2:
        return default
    onsets = note_array["onset_sec"]
    mean_ioi = (onsets[-1] - onsets[0]) / (len(onsets) - 1)
    if mean_ioi <= 0:
        return default
    return 60.0 / mean_ioi


################################### DURATIONS ###################################


def normalized_durations(note_array, duration_unit="beat", tempo=DEFAULT_TEMPO):
    """
    note durations in beats.

    Parameters
    ----------
    note_array : np.ndarray
        note array
    duration_unit : str
        "beat": durations are already tempo-relative note values,
        "sec": durations are seconds and get converted with
        the seconds-per-beat of `tempo`.
    tempo : float
        BPM used for the "sec" conversion
    """
    if duration_unit == "beat":
        return note_array["duration"].astype(float)
    elif duration_unit == "sec":
        return note_array["duration"] / seconds_per_beat(tempo)
    raise ValueError(
        "duration_unit needs to be one of {0}, got {1}".format(DURATION_UNITS, duration_unit)
    )


def quarter_durations(note_array, use_musical_time=True):
    """
    note durations for rhythm comparison.

    musical time: the raw note values.
    absolute time: note values converted to seconds with the
    tempo at each onset and scaled by four
    (note_value * (60 / bpm) * 4).
    """
    if use_musical_time:
        return note_array["duration"].astype(float)
    return note_array["duration"] * (60.0 / note_array["tempo"]) * 4


################################### FEATURES ###################################


def relative_features(note_array, duration_unit="beat", tempo=DEFAULT_TEMPO):
    """
    relative feature representation of a note sequence.

    Parameters
    ----------
    note_array : np.ndarray
        note array, sorted by onset
    duration_unit : str
        duration convention, see `normalized_durations`
    tempo : float
        BPM for the "sec" duration convention

    Returns
    -------
    features : np.ndarray
        structured array with FEATURE_DTYPE, one row per note:
        pitch interval to the previous note (0 for the first),
        duration in beats, and onset relative to the first note.
    """
    features = np.zeros(len(note_array), dtype=FEATURE_DTYPE)
    if len(note_array) == 0:
        return features

    features["pitch_interval"][1:] = pitch_intervals(note_array)
    features["normalized_duration"] = normalized_durations(
        note_array, duration_unit, tempo
    )
    features["relative_start"] = note_array["onset_sec"] - note_array["onset_sec"][0]
    return features


def feature_matrix(features):
    """
    (n, 3) float matrix of relative features for DTW
    """
    return np.column_stack(
        (
            features["pitch_interval"].astype(float),
            features["normalized_duration"],
            features["relative_start"],
        )
    ).reshape(-1, 3)


def context_window(feature_rows, index, radius=1):
    """
    rows of a note and its neighbors, clipped at the sequence boundaries
    """
    return feature_rows[max(0, index - radius) : min(len(feature_rows), index + radius + 1)]
