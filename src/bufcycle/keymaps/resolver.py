"""Trie-based resolution of typed key tokens against the registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from bufcycle.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    """Binding ids ending here plus child transitions."""

    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Rebuilds a trie whenever the registry revision moves and resolves tokens."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cached: Optional[tuple[int, TrieNode]] = None

    def resolve(
        self,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"length": len(normalized)},
        ) as handle:
            node = self._root()
            consumed = 0
            for token in normalized:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            match = self._select_match(node, ctx)
            if match is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(status="match", match=match, consumed=consumed)

            next_expected = node.next_tokens()
            if next_expected and consumed:
                timeout_ms = self._pending_timeout(node)
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=consumed,
                    next_expected=next_expected,
                    timeout_ms=timeout_ms,
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def reset(self) -> None:
        self._cached = None

    def _root(self) -> TrieNode:
        revision = self._registry.revision()
        if self._cached and self._cached[0] == revision:
            return self._cached[1]

        root = TrieNode()
        for binding in self._registry.iter_bindings():
            node = root
            for token in binding.sequence.tokens:
                node = node.child(token)
            node.bindings.append(binding.id)
        self._cached = (revision, root)
        return root

    def _select_match(
        self, node: TrieNode, context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        matches: list[ResolutionMatch] = []
        for binding_id in node.bindings:
            binding = self._registry.get_binding(binding_id)
            if binding.allows(context):
                action = self._registry.get_action(binding.action_id)
                matches.append(ResolutionMatch(binding=binding, action=action))
        if not matches:
            return None
        # Gated bindings outrank unconditional ones at equal priority.
        matches.sort(
            key=lambda m: (-m.binding.priority, -len(m.binding.when), m.binding.id)
        )
        return matches[0]

    def _pending_timeout(self, node: TrieNode) -> Optional[int]:
        timeouts: list[int] = []
        stack = list(node.children.values())
        while stack:
            current = stack.pop()
            for binding_id in current.bindings:
                timeouts.append(
                    self._registry.get_binding(binding_id).sequence.timeout_ms
                )
            stack.extend(current.children.values())
        return min(timeouts) if timeouts else None


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
