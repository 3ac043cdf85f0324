#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to visualize matched passages
and DTW alignments
"""

import numpy as np
import matplotlib.pyplot as plt


def plot_segments(
    ref_note_array,
    perf_note_array,
    segments,
    save_file=False,
    fname="matched_segments",
):
    """
    plot reference (top) and candidate (bottom) pitches
    over note index and connect the starts of matched passages.
    """
    f, axs = plt.subplots(2, 1, figsize=(20, 8), sharex=True)
    axs[0].plot(ref_note_array["pitch"], "o-", c="grey", lw=1)
    axs[1].plot(perf_note_array["pitch"], "o-", c="grey", lw=1)
    axs[0].set_ylabel("reference pitch")
    axs[1].set_ylabel("candidate pitch")
    axs[1].set_xlabel("note index")

    colors = ["r", "g", "b", "m", "c"]
    for i, seg in enumerate(segments):
        c = colors[i % len(colors)]
        ref_idx = np.arange(seg.reference_start, seg.reference_start + seg.length)
        perf_idx = np.arange(seg.candidate_start, seg.candidate_start + seg.length)
        axs[0].plot(ref_idx, ref_note_array["pitch"][ref_idx], "o-", c=c, lw=3)
        axs[1].plot(perf_idx, perf_note_array["pitch"][perf_idx], "o-", c=c, lw=3)
        axs[0].text(
            ref_idx[0],
            ref_note_array["pitch"][ref_idx[0]] + 1,
            "{0:.0f}%".format(seg.similarity_score),
            color=c,
        )

    if save_file:
        plt.savefig(fname + ".png")
        plt.close(f)
    else:
        plt.show()


def plot_dtw(result, save_file=False, fname="dtw_alignment"):
    """
    plot the accumulated cost matrix of a DTW result
    with its backtracked path
    """
    cost = result.cost[1:, 1:]
    path = result.path
    f, axs = plt.subplots(1, 1, figsize=(6, 6))
    axs.imshow(np.where(np.isfinite(cost), cost, np.nan), aspect="auto", origin="lower")
    if len(path) > 0:
        axs.plot(path[:, 1], path[:, 0], "r-o", lw=2)
    axs.set_title("DTW distance: {0:.3f}".format(result.distance))

    if save_file:
        plt.savefig(fname + ".png")
        plt.close(f)
    else:
        plt.show()
