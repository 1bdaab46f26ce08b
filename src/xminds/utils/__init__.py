"""Utility helpers for the xminds client."""
