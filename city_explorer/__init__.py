"""City Explorer API: location lookup and per-location summaries."""
