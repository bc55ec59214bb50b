"""Attendance overrides, aggregation and batch submission."""
