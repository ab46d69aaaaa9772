"""Feature packages implementing each pipeline stage."""
