from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from ..core.exceptions import DomainError
from .model import Employee
from .service import EmployeeService

logger = logging.getLogger(__name__)


def normalize_name(name: str, aliases: Mapping[str, str]) -> str:
    """Trim and map a known alternate spelling to its canonical name."""
    trimmed = (name or "").strip()
    return aliases.get(trimmed, trimmed)


@dataclass(frozen=True)
class RosterPolicy:
    """Canonical roster configuration used by RosterSync.

    Pure data: extend the roster or the alias table without touching the sync logic.
    """

    canonical_names: tuple[str, ...] = ()
    aliases: Mapping[str, str] = field(default_factory=dict)
    denied_names: tuple[str, ...] = ()
    # Remove employees whose name is not canonical (otherwise only denied names go).
    # An empty allow-list never prunes.
    prune_unlisted: bool = True

    def normalize(self, name: str) -> str:
        return normalize_name(name, self.aliases)

    def should_remove(self, name: str) -> bool:
        n = self.normalize(name)
        if n in {self.normalize(d) for d in self.denied_names}:
            return True
        return self.prune_unlisted and bool(self.canonical_names) and n not in self.canonical_names

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RosterPolicy":
        return cls(
            canonical_names=tuple(data.get("canonicalNames") or ()),
            aliases=dict(data.get("aliases") or {}),
            denied_names=tuple(data.get("deniedNames") or ()),
            prune_unlisted=bool(data.get("pruneUnlisted", True)),
        )

    @classmethod
    def from_settings(cls, settings: Any) -> "RosterPolicy":
        roster_file = getattr(settings, "ROSTER_FILE", "") or ""
        if roster_file:
            data = json.loads(Path(roster_file).read_text(encoding="utf-8"))
            return cls.from_mapping(data)

        return cls(
            canonical_names=tuple(getattr(settings, "ROSTER_CANONICAL_NAMES", ()) or ()),
            aliases=dict(getattr(settings, "ROSTER_NAME_ALIASES", {}) or {}),
            denied_names=tuple(getattr(settings, "ROSTER_DENIED_NAMES", ()) or ()),
            prune_unlisted=bool(getattr(settings, "ROSTER_PRUNE_UNLISTED", True)),
        )


@dataclass
class SyncReport:
    removed_unlisted: list[Employee] = field(default_factory=list)
    removed_duplicates: list[Employee] = field(default_factory=list)
    created: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    roster: list[Employee] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "removedUnlisted": [e.to_dict() for e in self.removed_unlisted],
            "removedDuplicates": [e.to_dict() for e in self.removed_duplicates],
            "created": list(self.created),
            "errors": list(self.errors),
            "roster": [e.to_dict() for e in self.roster],
        }


class RosterSync:
    """Reconcile the stored roster against a RosterPolicy.

    Steps run in order and each one tolerates failures on single employees:
    remove unlisted/denied, remove later duplicates, re-fetch, create missing
    canonical names, re-fetch.
    """

    def __init__(self, employees: EmployeeService, policy: RosterPolicy):
        self._employees = employees
        self._policy = policy

    def run(self) -> SyncReport:
        report = SyncReport()
        roster = self._fetch(report, fallback=[])
        logger.info("Syncing roster (%d employees)", len(roster))

        kept: list[Employee] = []
        for emp in roster:
            if self._policy.should_remove(emp.name):
                if self._remove(emp, report, reason="unlisted"):
                    report.removed_unlisted.append(emp)
                    continue
            kept.append(emp)

        seen: set[str] = set()
        for emp in kept:
            key = self._policy.normalize(emp.name)
            if key not in seen:
                seen.add(key)
                continue
            if self._remove(emp, report, reason="duplicate"):
                report.removed_duplicates.append(emp)

        roster = self._fetch(report, fallback=kept)

        present = {self._policy.normalize(e.name) for e in roster}
        for name in self._policy.canonical_names:
            if name in present:
                continue
            try:
                self._employees.save_employee(name=name)
            except DomainError as e:
                logger.warning("Could not add missing employee %r: %s", name, e)
                report.errors.append(f"add {name}: {e}")
                continue
            logger.info("Added missing employee %r", name)
            report.created.append(name)

        report.roster = list(self._fetch(report, fallback=roster))
        logger.info("Sync complete. Total employees: %d", len(report.roster))
        return report

    def _fetch(self, report: SyncReport, *, fallback: Sequence[Employee]) -> list[Employee]:
        try:
            return list(self._employees.list_roster())
        except DomainError as e:
            logger.warning("Could not reload roster: %s", e)
            report.errors.append(f"reload: {e}")
            return list(fallback)

    def _remove(self, emp: Employee, report: SyncReport, *, reason: str) -> bool:
        try:
            self._employees.delete_employee(emp.id)
        except DomainError as e:
            logger.warning("Could not remove %s employee %r (%s): %s", reason, emp.name, emp.id, e)
            report.errors.append(f"remove {emp.name} ({emp.id}): {e}")
            return False
        logger.info("Removed %s employee %r (%s)", reason, emp.name, emp.id)
        return True
