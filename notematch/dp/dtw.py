#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains dynamic time warping methods
for short windows of note feature vectors.
"""
from typing import NamedTuple

import numpy as np
from scipy.spatial.distance import cdist
from numba import jit

from .metrics import cdist_local


class DTWResult(NamedTuple):
    """
    Accumulated cost matrix and backtracking table
    of a single DTW run.

    Attributes
    ----------
    cost : np.ndarray
        (n + 1) x (m + 1) accumulated cost matrix. Row and
        column 0 are the infinite border, cost[0, 0] = 0.
    backtrace : np.ndarray
        (n + 1) x (m + 1) x 2 table of predecessor coordinates,
        -1 on the border.
    """

    cost: np.ndarray
    backtrace: np.ndarray

    @property
    def distance(self):
        """
        accumulated cost of the optimal path (bottom-right cell)
        """
        return float(self.cost[-1, -1])

    @property
    def path(self):
        return dtw_backtracking(self.backtrace)


class DynamicTimeWarping(object):
    """
    pure python vanilla Dynamic Time Warping
    with euclidean local cost

    Parameters
    ----------
    metric : str or callable
        metric passed to `cdist`, or a callable
        used with `cdist_local`.
    cdist_local : bool
        compute pairwise distances with a python loop
        over a callable metric.
    """

    def __init__(self, metric="euclidean", cdist_local=False):
        self.metric = metric
        self.cdist_local = cdist_local

    def __call__(self, X, Y):
        """
        Parameters
        ----------
        X : np.ndarray
            sequence 1 features, 1 row per step.
        Y : np.ndarray
            sequence 2 features, 1 row per step.

        Returns
        -------
        result : DTWResult
            accumulated cost matrix and backtracking table
        """
        X = _as_feature_rows(X)
        Y = _as_feature_rows(Y)
        # Compute pairwise distance
        if X.shape[0] == 0 or Y.shape[0] == 0:
            pwD = np.zeros((X.shape[0], Y.shape[0]), dtype=float)
        elif self.cdist_local:
            pwD = cdist_local(X, Y, self.metric)
        else:
            pwD = cdist(X, Y, self.metric)

        return self.from_distance_matrix(pwD)

    def from_distance_matrix(self, pwD):
        """
        Parameters
        ----------
        pwD : np.ndarray
            pairwise distance matrix

        Returns
        -------
        result : DTWResult
        """
        pwD = np.ascontiguousarray(pwD, dtype=np.float64)
        D, B = dtw_forward_and_backward(pwD)
        return DTWResult(D, B)


# alias
DTW = DynamicTimeWarping


def dtw_distance(X, Y, metric="euclidean"):
    """
    DTW distance between two feature sequences
    """
    return DynamicTimeWarping(metric=metric)(X, Y).distance


def _as_feature_rows(X):
    X = np.asanyarray(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    return X


@jit(nopython=True)
def dtw_forward_and_backward(pwD):
    """
    compute dynamic time warping cost matrix
    and predecessor table from a pairwise distance matrix.

    Steps are scanned vertical (i - 1, j), horizontal (i, j - 1),
    diagonal (i - 1, j - 1); the first strict minimum wins.

    Parameters
    ----------
    pwD : np.ndarray
        Pairwise distance matrix (computed e.g., with `cdist`).

    Returns
    -------
    D : np.ndarray
        Accumulated cost matrix including the border
    B : np.ndarray
        predecessor coordinates of each cell
    """
    N = pwD.shape[0]
    M = pwD.shape[1]
    # the cost matrix is initialized with INFINITY
    D = np.ones((N + 1, M + 1), dtype=np.float64) * np.inf
    B = np.ones((N + 1, M + 1, 2), dtype=np.int64) * -1

    D[0, 0] = 0.0
    for i in range(1, N + 1):
        for j in range(1, M + 1):
            # insertion
            mincost = D[i - 1, j]
            bestiprev = i - 1
            bestjprev = j
            # deletion
            if D[i, j - 1] < mincost:
                mincost = D[i, j - 1]
                bestiprev = i
                bestjprev = j - 1
            # match
            if D[i - 1, j - 1] < mincost:
                mincost = D[i - 1, j - 1]
                bestiprev = i - 1
                bestjprev = j - 1

            D[i, j] = pwD[i - 1, j - 1] + mincost
            B[i, j, 0] = bestiprev
            B[i, j, 1] = bestjprev

    return D, B


def dtw_backtracking(B):
    """
    Decode path from the predecessor table.

    Parameters
    ----------
    B : np.ndarray
        predecessor table (computed with
        `dtw_forward_and_backward`)

    Returns
    -------
    path : np.ndarray
       A 2D array of size (n_steps, 2), where i-th row has elements
       (i_n, i_m) where i_n represents the index in the first sequence
       and i_m represents the corresponding index in the second sequence.
    """
    n = B.shape[0] - 1
    m = B.shape[1] - 1
    path = list()
    if n == 0 or m == 0:
        return np.zeros((0, 2), dtype=int)

    while n > 0 and m > 0:
        path.append([n - 1, m - 1])
        n, m = B[n, m, 0], B[n, m, 1]

    return np.array(path[::-1], dtype=int)
