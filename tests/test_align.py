#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
This module includes tests for the dynamic programming utilities.
"""
import unittest
import numpy as np
from notematch.dp.dtw import DTW, DTWResult, dtw_distance
from notematch.dp.metrics import l2
from notematch.dp.runs import common_run_matrix, interval_runs

RNG = np.random.RandomState(1984)

array1 = np.array([[0, 1, 2, 3, 6]]).T
array2 = np.array([[0, 1, 2, 3, 4, 5, 6]]).T

result_dtw = np.array([[0, 0], [1, 1], [2, 2], [3, 3], [3, 4], [4, 5], [4, 6]])


class TestDTWAlignment(unittest.TestCase):
    def test_DTW_align(self, **kwargs):
        vanillaDTW = DTW()
        result = vanillaDTW(array1, array2)
        self.assertTrue(isinstance(result, DTWResult))
        self.assertTrue(np.all(result_dtw == result.path))
        self.assertEqual(result.distance, 2.0)

    def test_DTW_local_metric(self, **kwargs):
        localDTW = DTW(metric=l2, cdist_local=True)
        result = localDTW(array1, array2)
        self.assertTrue(np.all(result_dtw == result.path))
        self.assertEqual(result.distance, 2.0)

    def test_DTW_matrix_layout(self, **kwargs):
        result = DTW()(array1, array2)
        self.assertEqual(result.cost.shape, (6, 8))
        self.assertEqual(result.backtrace.shape, (6, 8, 2))
        self.assertEqual(result.cost[0, 0], 0.0)
        self.assertTrue(np.all(np.isinf(result.cost[0, 1:])))
        self.assertTrue(np.all(np.isinf(result.cost[1:, 0])))
        self.assertTrue(np.all(result.backtrace[0, :] == -1))

    def test_DTW_tie_break(self, **kwargs):
        # all three steps cost the same at (2, 2): vertical wins
        X = np.zeros((2, 1))
        result = DTW()(X, X)
        self.assertTrue(np.all(result.backtrace[2, 2] == [1, 2]))
        self.assertTrue(np.all(result.backtrace[1, 2] == [1, 1]))
        self.assertTrue(np.all(result.path == [[0, 0], [0, 1], [1, 1]]))
        self.assertEqual(result.distance, 0.0)

    def test_DTW_identity(self, **kwargs):
        A = RNG.rand(6, 3)
        self.assertEqual(dtw_distance(A, A), 0.0)

    def test_DTW_symmetry(self, **kwargs):
        for _ in range(5):
            A = RNG.rand(RNG.randint(1, 8), 3)
            B = RNG.rand(RNG.randint(1, 8), 3)
            self.assertEqual(dtw_distance(A, B), dtw_distance(B, A))

    def test_DTW_empty(self, **kwargs):
        result = DTW()(np.zeros((0, 3)), np.ones((2, 3)))
        self.assertEqual(result.cost.shape, (1, 3))
        self.assertTrue(np.isinf(result.distance))
        self.assertEqual(len(result.path), 0)
        self.assertEqual(DTW()([], []).distance, 0.0)


class TestIntervalRuns(unittest.TestCase):
    def test_common_run_matrix(self, **kwargs):
        R = common_run_matrix(np.array([1, 2, 3]), np.array([2, 3, 1]))
        expected = np.array([[0, 0, 1], [1, 0, 0], [0, 2, 0]])
        self.assertTrue(np.all(R == expected))

    def test_interval_runs(self, **kwargs):
        runs = interval_runs([2, 2, 1, 2, 2, 1], [0, 2, 2, 1, 2, 2, 1, 0], min_run=4)
        expected = np.array([[0, 1, 4], [0, 1, 5], [0, 1, 6]])
        self.assertTrue(np.all(runs == expected))

    def test_interval_runs_empty(self, **kwargs):
        runs = interval_runs([2, 2, 1], [], min_run=4)
        self.assertEqual(runs.shape, (0, 3))


if __name__ == "__main__":
    unittest.main()
