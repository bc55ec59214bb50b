"""Coach dashboard core: schedule projection, roster and attendance workflow."""

__version__ = "1.0.0"
