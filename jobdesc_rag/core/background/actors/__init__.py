"""
Dramatiq actors. Importing this package registers every actor with the broker.
"""

from .ingestion import process_job_description

__all__ = ["process_job_description"]
