"""Console output and interactive prompts."""
