"""Adapters for input corpora and record sinks."""
