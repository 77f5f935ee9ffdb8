"""Analyzer functions — each returns plain dataclass-based structures."""

# Lazy re-exports so `python -m gitchurn.analyzers.churn` imports each module once.
from importlib import import_module as _im


def __getattr__(name: str):  # noqa: N807
    _map = {
        "get_file_churn": ("churn", "get_file_churn"),
        "get_commit_log": ("commit_log", "get_commit_log"),
    }
    if name in _map:
        mod_name, attr = _map[name]
        mod = _im(f"gitchurn.analyzers.{mod_name}")
        return getattr(mod, attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "get_file_churn",
    "get_commit_log",
]
