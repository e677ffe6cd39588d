"""libsift - library identification and FQN resolution for code mining corpora."""

__version__ = "0.3.0"
