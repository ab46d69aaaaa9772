"""albumprep: retag, measure and loudness-normalize an album of FLAC files."""

__version__ = "0.1.0"
