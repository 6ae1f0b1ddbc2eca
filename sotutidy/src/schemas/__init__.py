"""Pydantic models describing corpus records, dictionary rows and reports."""
