"""Pydantic models for feed records and map layers."""
