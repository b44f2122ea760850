from __future__ import annotations

from typing import Dict, List, Optional


class CallGraph:
    """Caller -> callee relations between functions seen in one file.

    Only functions registered before a call is encountered can be callees;
    the graph is built in a single pass and forward references are dropped.
    """
    def __init__(self):
        self.callees: Dict[str, Dict[str, None]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.callees

    def add_function(self, name: str):
        """Register a function, keeping callees already recorded for it."""
        self.callees.setdefault(name, {})

    def add_call(self, caller: Optional[str], callee: str) -> bool:
        """Record caller -> callee if both are known and distinct."""
        if caller is None or caller == callee:
            return False
        if caller not in self.callees or callee not in self.callees:
            return False
        self.callees[caller][callee] = None
        return True

    @property
    def edges(self) -> List[tuple]:
        return [
            (caller, callee)
            for caller, targets in self.callees.items()
            for callee in targets
        ]

    def freeze(self) -> Dict[str, List[str]]:
        """Callee lists per function, in insertion order."""
        return {caller: list(targets) for caller, targets in self.callees.items()}
