#!/usr/bin/env python
# -*- coding: utf-8 -*-
# pylint: skip-file
"""
This module contains tests.
"""

import os

import mido

BASE_PATH = os.path.dirname(os.path.realpath(__file__))


def write_midi(filename, notes, bpm=120.0, channel=0, ticks_per_beat=480):
    """
    write (onset_beat, pitch, duration_beat) notes to a single track
    MIDI file, without tempo event if `bpm` is None.
    """
    midi = mido.MidiFile(ticks_per_beat=ticks_per_beat)
    track = mido.MidiTrack()
    midi.tracks.append(track)
    if bpm is not None:
        track.append(mido.MetaMessage("set_tempo", tempo=mido.bpm2tempo(bpm), time=0))

    events = list()
    for onset, pitch, duration in notes:
        on_tick = int(round(onset * ticks_per_beat))
        off_tick = int(round((onset + duration) * ticks_per_beat))
        events.append(
            (off_tick, 0, mido.Message("note_off", note=pitch, velocity=0, channel=channel))
        )
        events.append(
            (on_tick, 1, mido.Message("note_on", note=pitch, velocity=64, channel=channel))
        )
    events.sort(key=lambda e: (e[0], e[1]))

    last_tick = 0
    for tick, _, msg in events:
        track.append(msg.copy(time=tick - last_tick))
        last_tick = tick
    midi.save(filename)
    return filename
