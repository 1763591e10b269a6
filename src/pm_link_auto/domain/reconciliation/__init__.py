"""Link reconciliation core.

Compares the packages declared in the config file with the filesystem and with
the package manager's global link registry, and decides one link action per
package. Side effects (commands, prompts, config writes) go through ports.
"""

from __future__ import annotations

from .discovery import DiscoveryIncompleteError, DiscoverySearcher
from .engine import ReconciliationEngine, ReconciliationOutcome, ReconciliationResult
from .policy import decide_link_action, normalize_path, same_location, settle_conflict
from .validate import EntryPartition, resolve_declared_path, validate_entries

__all__ = [
    "DiscoveryIncompleteError",
    "DiscoverySearcher",
    "EntryPartition",
    "ReconciliationEngine",
    "ReconciliationOutcome",
    "ReconciliationResult",
    "decide_link_action",
    "normalize_path",
    "resolve_declared_path",
    "same_location",
    "settle_conflict",
    "validate_entries",
]
