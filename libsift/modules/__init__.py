"""Analytical core: library clustering and FQN resolution."""
