"""Pydantic models for interview analysis."""
