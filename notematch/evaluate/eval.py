#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to evaluate
- note matching via precision, recall, and f scores of matched pairs
- structural properties of match results and segments
"""
from typing import List, Sequence, Tuple, Union

import numpy as np

from ..match.matchers import MatchResult
from ..match.utils import match_pairs
from ..mismatch.utils import MatchSegment


def fscore_matches(
    prediction: Union[List[MatchResult], np.ndarray],
    ground_truth: Union[List[MatchResult], np.ndarray],
) -> Tuple[float, float, float]:
    """
    Parameters
    ----------
    prediction: match results or (candidate index, reference index) pairs
    ground_truth: match results or (candidate index, reference index) pairs

    Returns
    -------
    precision, recall, f score
    """
    pred_pairs = set(map(tuple, _as_pairs(prediction)))
    gt_pairs = set(map(tuple, _as_pairs(ground_truth)))

    n_pred = len(pred_pairs)
    n_gt = len(gt_pairs)
    n_correct = len(pred_pairs & gt_pairs)

    if n_pred > 0 or n_gt > 0:
        precision = n_correct / n_pred if n_pred > 0 else 0.0
        recall = n_correct / n_gt if n_gt > 0 else 0.0
        f_score = (
            2 * precision * recall / (precision + recall)
            if (precision + recall) > 0
            else 0.0
        )
    else:
        # nothing predicted and nothing to find
        precision, recall, f_score = 1.0, 1.0, 1.0

    return precision, recall, f_score


def _as_pairs(matches):
    if len(matches) > 0 and isinstance(matches[0], MatchResult):
        return match_pairs(matches)
    return np.asarray(matches, dtype=int).reshape(-1, 2)


def check_coverage(results: Sequence[MatchResult], n_candidates: int) -> bool:
    """
    every candidate note appears exactly once and
    no reference note is claimed twice
    """
    orders = sorted(m.order for m in results)
    if orders != list(range(n_candidates)):
        return False
    ref_idx = [m.reference_index for m in results if m.reference_index >= 0]
    return len(ref_idx) == len(set(ref_idx))


def segments_are_disjoint(segments: Sequence[MatchSegment]) -> bool:
    """
    no two segments share a reference or a candidate note
    """
    ref_claimed = set()
    perf_claimed = set()
    for seg in segments:
        ref_idx = set(range(seg.reference_start, seg.reference_start + seg.length))
        perf_idx = set(range(seg.candidate_start, seg.candidate_start + seg.length))
        if ref_idx & ref_claimed or perf_idx & perf_claimed:
            return False
        ref_claimed |= ref_idx
        perf_claimed |= perf_idx
    return True
