"""Training schedule projection."""
