"""Exception hierarchy for gitchurn."""

from __future__ import annotations


class GitChurnError(Exception):
    """Base exception for all gitchurn errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ObjectNotFound(GitChurnError):
    """An object id referenced by a tree or commit cannot be resolved."""

    def __init__(self, oid: str, reason: str | None = None):
        details = {"oid": oid}
        if reason:
            details["reason"] = reason
        super().__init__("Object not found", details)
        self.oid = oid


class ObjectCorrupt(GitChurnError):
    """An object resolved, but its content does not have the expected shape."""

    def __init__(self, oid: str, reason: str):
        super().__init__("Corrupt object", {"oid": oid, "reason": reason})
        self.oid = oid
        self.reason = reason


class TraversalFailure(GitChurnError):
    """The history walk cannot start or continue."""

    def __init__(self, ref: str, reason: str):
        super().__init__("History traversal failed", {"ref": ref, "reason": reason})
        self.ref = ref
        self.reason = reason


class EngineSealed(GitChurnError):
    """Raised when folding into an engine that has already been flattened."""

    def __init__(self):
        super().__init__("Churn engine already flattened; no further folds allowed")
