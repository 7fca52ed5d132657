"""Utility helpers for whatwasthat."""
