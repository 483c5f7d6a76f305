"""Record collection from the College Scorecard API.

Pages through the schools endpoint and returns the raw school payloads
(Raw layer) for the cleaning step.
"""
