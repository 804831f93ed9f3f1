"""
Schema definitions using Pandera for data validation.

Data contracts for uploaded records are defined here so they are checked
before anything leaves the machine.
"""

from exohunt.schemas.dataset import ExoplanetRecordSchema, check_records

__all__ = ["ExoplanetRecordSchema", "check_records"]
