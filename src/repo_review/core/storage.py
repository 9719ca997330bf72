"""
Report store keyed by "owner/repo".

Holds the latest analysis report per repository so that deferred analyses
can be read back after the initial response. Writes are serialised per key
and versioned with a revision counter:

- put(key, report) -> revision       unconditional write, returns new revision
- replace(key, revision, report)     compare-and-set, only if revision still current
- get(key)                           latest report or None
- list_reports(limit, offset)        most recently written first

The in-memory backend lives for the lifetime of the process.
"""

import copy
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple


def report_key(owner: str, repo: str) -> str:
    # GitHub owner/repo names are case-insensitive
    return f"{owner}/{repo}".lower()


class ReportStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def put(self, key: str, report: Dict[str, Any]) -> int:
        ...

    @abstractmethod
    def replace(self, key: str, revision: int, report: Dict[str, Any]) -> bool:
        ...

    @abstractmethod
    def list_reports(self, limit: int = 20, offset: int = 0) -> List[Dict[str, Any]]:
        ...


class InMemoryReportStore(ReportStore):
    """Thread-safe in-memory store with per-key locks."""

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[int, Dict[str, Any]]] = {}
        self._order: List[str] = []
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()
        self._counter = 0

    def _lock_for(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _next_revision(self) -> int:
        with self._guard:
            self._counter += 1
            return self._counter

    def _touch(self, key: str) -> None:
        with self._guard:
            if key in self._order:
                self._order.remove(key)
            self._order.append(key)

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock_for(key):
            entry = self._entries.get(key)
            return copy.deepcopy(entry[1]) if entry else None

    def put(self, key: str, report: Dict[str, Any]) -> int:
        with self._lock_for(key):
            revision = self._next_revision()
            self._entries[key] = (revision, copy.deepcopy(report))
        self._touch(key)
        return revision

    def replace(self, key: str, revision: int, report: Dict[str, Any]) -> bool:
        with self._lock_for(key):
            entry = self._entries.get(key)
            if entry is None or entry[0] != revision:
                return False
            self._entries[key] = (revision, copy.deepcopy(report))
        self._touch(key)
        return True

    def list_reports(self, limit: int = 20, offset: int = 0) -> List[Dict[str, Any]]:
        with self._guard:
            keys = list(reversed(self._order))[offset : offset + limit]
        reports = []
        for key in keys:
            report = self.get(key)
            if report is not None:
                reports.append(report)
        return reports
