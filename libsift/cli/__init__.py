"""Command-line interface for libsift."""
