"""Pydantic schemas for the route API."""
