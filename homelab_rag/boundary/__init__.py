"""
Boundary layer: adapters for the database and the vector store.
"""
