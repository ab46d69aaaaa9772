"""User interfaces for albumprep."""
