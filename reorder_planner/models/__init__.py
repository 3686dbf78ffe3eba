"""Domain models: report lines, allocation results, run metadata."""
