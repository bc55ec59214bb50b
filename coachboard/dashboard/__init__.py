"""Dashboard orchestration: auth state, data loading and view models."""
