"""Small helpers shared by the grid core (collation, type inspection, timing)."""
