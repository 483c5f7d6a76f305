"""scorecard_pipeline package.

Contains modules for downloading College Scorecard school records from the
api.data.gov REST API, flattening their 4-digit CIP program lists into
degree records, and computing sample-weighted medians of earnings and debt
per program code.

Architecture:
- Raw → Clean → Gold layers (JSON files, optionally mirrored to MongoDB)
- pandas backs the Gold-layer aggregation
- Pydantic models validate the Clean and Gold layers
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
