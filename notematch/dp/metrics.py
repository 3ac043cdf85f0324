#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains local costs for comparing
rows of note feature matrices.
"""
import numpy as np


def l2(vec1, vec2):
    """
    euclidean distance of two feature rows
    """
    diff = np.asarray(vec2, dtype=float) - np.asarray(vec1, dtype=float)
    return float(np.sqrt(np.dot(diff, diff)))


def cdist_local(arr1, arr2, metric):
    """
    pairwise local costs of the rows of two feature
    matrices under an arbitrary callable.

    Parameters
    ----------
    arr1 : np.ndarray
        (n, d) feature matrix
    arr2 : np.ndarray
        (m, d) feature matrix
    metric : callable
        local cost of two rows

    Returns
    -------
    pwD : np.ndarray
        (n, m) matrix of local costs
    """
    n_rows = arr1.shape[0]
    n_cols = arr2.shape[0]
    pwD = np.empty((n_rows, n_cols), dtype=float)
    for i in range(n_rows):
        for j in range(n_cols):
            pwD[i, j] = metric(arr1[i], arr2[j])
    return pwD
