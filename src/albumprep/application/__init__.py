"""Application layer orchestrating the pipeline features."""
