"""Pydantic schemas defining the API contract."""
