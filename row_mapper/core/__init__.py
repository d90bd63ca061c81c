"""Core layer - tabular containers, coercion, configuration and errors."""
