"""Shared helpers for kvconf tools."""
