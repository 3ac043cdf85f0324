#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods for passage level matching.
e.g.:
- finding passages repeated between a reference and a performance
- sequential rhythm matching when no repeated passage is found
"""

from .utils import MatchSegment, resolve_overlaps
from .fallback import SequentialFallbackMatcher
from .segments import RepeatedSegmentFinder, segment_similarity
