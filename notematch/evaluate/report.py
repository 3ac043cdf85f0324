#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains console reports of match results.
"""


def print_alignment_report(results):
    print("\n============= Note Alignment Report =============")
    print(
        "{0:<6}{1:<12}{2:<14}{3:<10}{4}".format(
            "#", "Ref Pitch", "Perf Pitch", "Ratio", "Match Stage"
        )
    )
    print("-------------------------------------------------")
    for m in results:
        print(
            "{0:<6}{1:<12}{2:<14}{3:<10.2f}{4}".format(
                m.order,
                int(m.reference_note["pitch"]),
                int(m.candidate_note["pitch"]),
                m.tempo_correction_ratio,
                m.stage,
            )
        )
    print("=================================================")


def print_segment_report(segments, fallback_convention=None, min_segment_length=3):
    """
    print matched passages of at least `min_segment_length` notes

    Parameters
    ----------
    segments : list of MatchSegment
        segments as returned by the segment finder
    fallback_convention : str, optional
        time convention of the fallback, None if
        the fallback was not used
    min_segment_length : int
        shorter segments are not printed
    """
    print("\n============= Similarity Analysis =============")
    if fallback_convention is None:
        print("[Fallback Triggered] No")
    else:
        print("[Fallback Triggered] Yes ({0} time)".format(fallback_convention))
    print("Ref Start\tPerf Start\tLength\tSimilarity")
    print("-----------------------------------------------")
    for seg in segments:
        if seg.length >= min_segment_length:
            print(
                "{0}\t\t{1}\t\t{2}\t{3:.1f}%".format(
                    seg.reference_start,
                    seg.candidate_start,
                    seg.length,
                    seg.similarity_score,
                )
            )
    print("===============================================")
