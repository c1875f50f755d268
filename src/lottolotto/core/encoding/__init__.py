"""Encoders for persisted session data."""
