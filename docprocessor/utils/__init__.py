"""Utilities for docprocessor."""
