"""Registration table mapping key sequences onto buffer commands."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, Optional, Sequence

from bufcycle.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    """Snapshot of registry size."""

    action_count: int
    binding_count: int
    signatures: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding shadows an existing one in the same context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and the bindings that point at them."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._signature_index: Dict[str, set[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "keys": binding.key_signature},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflicts = [
                c for c in self.detect_conflicts(binding) if c.id != binding.id
            ]
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(binding, conflicts)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in conflicts:
                self._drop(stale.id)
            self._drop(binding.id)

            self._bindings[binding.id] = binding
            self._index(binding)
            self._touch()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        removed = self._drop(binding_id)
        if removed is not None:
            self._touch()
        return removed

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ) as handle:
            current = self._bindings.get(binding_id)
            if current is None:
                handle.fail("missing_binding")
                raise KeyError(f"Binding '{binding_id}' not found")

            updated = replace(current, **changes)
            if updated.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding_id}' references unknown action '{updated.action_id}'"
                )
            conflicts = self.detect_conflicts(updated, ignore=(binding_id,))
            if conflicts:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(updated, conflicts)

            self._unindex(current)
            self._bindings[binding_id] = updated
            self._index(updated)
            self._touch()
            return updated

    def iter_actions(self) -> Iterator[ActionRef]:
        yield from self._actions.values()

    def iter_bindings(self, *, action_id: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if action_id is None or binding.action_id == action_id:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            signatures=tuple(sorted(self._signature_index)),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        conflicts: list[Binding] = []
        for match_id in sorted(self._signature_index.get(binding.key_signature, ())):
            if match_id in ignored:
                continue
            existing = self._bindings[match_id]
            if _contexts_overlap(binding, existing):
                conflicts.append(existing)
        return conflicts

    def _drop(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._unindex(binding)
        return binding

    def _index(self, binding: Binding) -> None:
        self._signature_index.setdefault(binding.key_signature, set()).add(binding.id)

    def _unindex(self, binding: Binding) -> None:
        bucket = self._signature_index.get(binding.key_signature)
        if not bucket:
            return
        bucket.discard(binding.id)
        if not bucket:
            self._signature_index.pop(binding.key_signature, None)

    def _touch(self) -> None:
        self._revision += 1


def _contexts_overlap(left: Binding, right: Binding) -> bool:
    """Two bindings overlap unless some shared flag demands opposite values.

    An unconditional binding only overlaps another unconditional one, so a
    gated binding may refine a global default.
    """

    if not left.when and not right.when:
        return True
    if not left.when or not right.when:
        return False
    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return left_map == right_map


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
