#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers for text normalization, identifiers and tree navigation."""
