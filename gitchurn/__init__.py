"""gitchurn: per-file content churn across a git repository's history."""

__version__ = "0.1.0"
