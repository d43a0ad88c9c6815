"""Tests for CSS Linter."""
