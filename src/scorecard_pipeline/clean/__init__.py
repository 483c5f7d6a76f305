"""Cleaning utilities for the pipeline.

Provides functions to normalize raw College Scorecard school payloads into
validated `SchoolRecord` objects and to flatten their nested program lists
into degree records ready for aggregation.
"""
