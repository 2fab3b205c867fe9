"""Task sources: where runnable tasks come from and how they are run."""
