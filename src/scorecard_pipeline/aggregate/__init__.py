"""Gold-layer aggregation helpers.

This package converts the flattened degree table of the Clean layer into
the Gold dataset: sample-weighted medians of earnings and debt, overall and
per CIP code, plus the routine that mirrors that dataset into MongoDB.
"""
