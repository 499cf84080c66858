"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that every resource uses
(DB wiring, settings, logging). Keep resource-specific SQL and business rules
in the corresponding package (e.g. `grants/`).
"""

