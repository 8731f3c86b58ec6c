"""Application layer: services used by the HTTP shell."""
