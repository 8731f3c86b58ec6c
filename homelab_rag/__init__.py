"""Homelab RAG: retrieval-augmented Q&A over homelab documentation."""

__version__ = "0.1.0"
