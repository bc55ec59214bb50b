"""Roster models."""
