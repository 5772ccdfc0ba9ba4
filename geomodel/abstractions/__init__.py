"""Abstractions layer - value types shared across the package."""
