"""Symlink reconciler for dependency slots.

Reconciliation is recomputed from the filesystem on every call, so running
it twice with the same arguments changes nothing the second time.
"""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from monolink.core.utils.paths import relative_link_target

from .models import ReconcileResult, SlotInspection, SymlinkState

logger = logging.getLogger(__name__)

NODE_MODULES = "node_modules"

_ACTIONS = {
    SymlinkState.MISSING: "created",
    SymlinkState.WRONG_SYMLINK: "fixed",
    SymlinkState.OCCUPIED_BY_DIRECTORY: "replaced-directory",
    SymlinkState.OCCUPIED_BY_FILE: "replaced-file",
}
_DRY_RUN_ACTIONS = {
    SymlinkState.MISSING: "would-create",
    SymlinkState.WRONG_SYMLINK: "would-fix",
    SymlinkState.OCCUPIED_BY_DIRECTORY: "would-replace-directory",
    SymlinkState.OCCUPIED_BY_FILE: "would-replace-file",
}


def dependency_slot(consumer_root: Path, name: str) -> Path:
    """``<consumer>/node_modules/<name>``; scoped names nest one level deeper."""
    return Path(consumer_root) / NODE_MODULES / Path(*name.split("/"))


class SymlinkReconciler:
    def inspect(self, slot: Path, expected_target: str | None = None) -> SlotInspection:
        """Classify what currently occupies ``slot`` (read-only).

        Without ``expected_target`` every symlink reports ``WRONG_SYMLINK``.
        Raises OSError when the slot cannot be read.
        """
        try:
            is_link = slot.is_symlink()
        except OSError:
            is_link = False
        if is_link:
            current = os.readlink(slot)
            if expected_target is not None and current == expected_target:
                return SlotInspection(SymlinkState.CORRECT_SYMLINK, current)
            return SlotInspection(SymlinkState.WRONG_SYMLINK, current)
        if not os.path.lexists(slot):
            return SlotInspection(SymlinkState.MISSING)
        if slot.is_dir():
            return SlotInspection(SymlinkState.OCCUPIED_BY_DIRECTORY)
        return SlotInspection(SymlinkState.OCCUPIED_BY_FILE)

    def reconcile(
        self,
        name: str,
        source_dir: Path,
        consumer_root: Path,
        dry_run: bool = False,
    ) -> ReconcileResult:
        """Make ``consumer_root``'s slot for ``name`` a relative symlink to ``source_dir``.

        Filesystem errors are logged and reported in the result; they are
        never raised, so one dependency cannot abort a batch.
        """
        slot = dependency_slot(consumer_root, name)
        target = str(relative_link_target(source_dir, slot))
        try:
            inspection = self.inspect(slot, target)
        except OSError as exc:
            logger.warning("Cannot inspect %s for %s: %s", slot, name, exc)
            return ReconcileResult(
                name, slot, target, SymlinkState.MISSING, "unchanged", success=False, error=str(exc)
            )
        state = inspection.state

        if state is SymlinkState.CORRECT_SYMLINK:
            logger.debug("Symlink for %s already correct: %s -> %s", name, slot, target)
            return ReconcileResult(name, slot, target, state, "unchanged")

        if dry_run:
            logger.info("DRY RUN: would link %s: %s -> %s", name, slot, target)
            return ReconcileResult(name, slot, target, state, _DRY_RUN_ACTIONS[state])

        mutations = 0
        try:
            if state is SymlinkState.WRONG_SYMLINK or state is SymlinkState.OCCUPIED_BY_FILE:
                slot.unlink()
                mutations += 1
            elif state is SymlinkState.OCCUPIED_BY_DIRECTORY:
                shutil.rmtree(slot)
                mutations += 1
            elif not slot.parent.is_dir():
                slot.parent.mkdir(parents=True, exist_ok=True)
                mutations += 1
            slot.symlink_to(target, target_is_directory=True)
            mutations += 1
        except OSError as exc:
            logger.warning("Failed to link %s at %s: %s", name, slot, exc)
            return ReconcileResult(
                name,
                slot,
                target,
                state,
                _ACTIONS[state],
                success=False,
                mutations=mutations,
                error=str(exc),
            )

        if state is SymlinkState.WRONG_SYMLINK:
            logger.info("Fixed symlink %s: %s -> %s", name, inspection.current_target, target)
        elif state is SymlinkState.MISSING:
            logger.info("Created symlink %s -> %s", slot, target)
        else:
            logger.info("Replaced %s at %s with symlink -> %s", state.value, slot, target)
        return ReconcileResult(name, slot, target, state, _ACTIONS[state], mutations=mutations)

    def remove(self, name: str, consumer_root: Path, dry_run: bool = False) -> ReconcileResult:
        """Delete the slot for ``name`` when, and only when, it is a symlink."""
        slot = dependency_slot(consumer_root, name)
        try:
            inspection = self.inspect(slot)
        except OSError as exc:
            logger.warning("Cannot inspect %s for %s: %s", slot, name, exc)
            return ReconcileResult(name, slot, "", SymlinkState.MISSING, "unchanged", success=False, error=str(exc))
        current = inspection.current_target or ""
        if inspection.state is not SymlinkState.WRONG_SYMLINK:
            return ReconcileResult(name, slot, current, inspection.state, "unchanged")
        if dry_run:
            return ReconcileResult(name, slot, current, inspection.state, "would-remove")
        try:
            slot.unlink()
        except OSError as exc:
            logger.warning("Failed to unlink %s at %s: %s", name, slot, exc)
            return ReconcileResult(
                name, slot, current, inspection.state, "removed", success=False, error=str(exc)
            )
        logger.info("Removed symlink %s -> %s", slot, current)
        return ReconcileResult(name, slot, current, inspection.state, "removed", mutations=1)


__all__ = ["NODE_MODULES", "SymlinkReconciler", "dependency_slot"]
