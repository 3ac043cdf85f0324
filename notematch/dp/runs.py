#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains a longest common substring
dynamic program over pitch interval sequences.
"""
import numpy as np
from numba import jit


@jit(nopython=True)
def common_run_matrix(X, Y):
    """
    length of the run of equal consecutive elements
    of X and Y ending at each pair of indices.

    Runs need to be contiguous in both sequences.

    Parameters
    ----------
    X : np.ndarray
        1D integer array (e.g. reference pitch intervals)
    Y : np.ndarray
        1D integer array (e.g. performance pitch intervals)

    Returns
    -------
    R : np.ndarray
        len(X) x len(Y) integer matrix of run lengths
    """
    N = X.shape[0]
    M = Y.shape[0]
    R = np.zeros((N, M), dtype=np.int64)
    for i in range(N):
        for j in range(M):
            if X[i] == Y[j]:
                if i > 0 and j > 0:
                    R[i, j] = R[i - 1, j - 1] + 1
                else:
                    R[i, j] = 1
    return R


def interval_runs(X, Y, min_run=4):
    """
    all runs of at least `min_run` matching intervals,
    in row-major order of their end cell.

    Parameters
    ----------
    X : array_like
        reference intervals
    Y : array_like
        performance intervals
    min_run : int
        minimal number of matching intervals

    Returns
    -------
    runs : np.ndarray
        (k, 3) integer array, each row holds
        (start index in X, start index in Y, run length)
    """
    X = np.asarray(X, dtype=np.int64)
    Y = np.asarray(Y, dtype=np.int64)
    R = common_run_matrix(X, Y)
    ends_x, ends_y = np.nonzero(R >= min_run)
    run_lengths = R[ends_x, ends_y]
    runs = np.column_stack(
        (ends_x - run_lengths + 1, ends_y - run_lengths + 1, run_lengths)
    )
    return runs.astype(int).reshape(-1, 3)
