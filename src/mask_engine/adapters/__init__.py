"""Host adapters for the mask engine."""
