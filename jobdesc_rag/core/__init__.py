"""
Core pipeline components.

Modules:
- background: dramatiq broker, worker-side models and actors
- ingestion: publish, dedup, index
- query: retrieval-augmented chat
"""
