"""Book club backend package."""
