"""Shared helpers for Stratum."""
