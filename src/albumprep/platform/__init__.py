"""Platform adapters: logging, FLAC tag store and the external normalizer."""
