"""FastAPI application for the book club backend."""
