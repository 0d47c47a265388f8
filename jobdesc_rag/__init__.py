"""
Job description RAG: asynchronous ingestion, deduplicated indexing and
retrieval-augmented chat over job postings.
"""

__version__ = "1.0.0"
