"""Comment normalization and budgeted serialization for AI feedback analysis."""
