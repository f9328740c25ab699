"""Shared utilities for mpq2json."""
