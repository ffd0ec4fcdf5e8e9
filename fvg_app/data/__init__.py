"""
Bar data module.

Holds the immutable bar record, the append-only bar series the detector
reads from, and parsing of raw bar payloads.
"""
