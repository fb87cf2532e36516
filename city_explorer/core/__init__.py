"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, provider HTTP calls, settings, logging). Keep feature-specific SQL
and mapping logic in the corresponding feature package (e.g. `locations/`).
"""
