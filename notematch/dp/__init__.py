#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains dynamic programming methods 
for sequence alignment.
"""

from .dtw import DTW, DTWResult, DynamicTimeWarping, dtw_distance
from .runs import common_run_matrix, interval_runs
