"""Dataclasses describing key bindings and the commands they trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, MutableMapping


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().upper() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def _split_notation(notation: str) -> list[str]:
    keys: list[str] = []
    index = 0
    while index < len(notation):
        char = notation[index]
        if char == "<":
            end = notation.find(">", index + 1)
            if end > index + 1:
                keys.append(notation[index : end + 1])
                index = end + 1
                continue
        keys.append(char)
        index += 1
    return keys


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + f"+{self.key}"
        return self.key

    @classmethod
    def parse(cls, key: str) -> "KeyStroke":
        """Parse ``x`` or ``<C-x>``/``<Leader>`` style notation."""

        if len(key) > 2 and key.startswith("<") and key.endswith(">"):
            inner = key[1:-1]
            parts = inner.split("-")
            if len(parts) > 1 and all(len(p) == 1 for p in parts[:-1]):
                names = {"C": "CTRL", "A": "ALT", "M": "ALT", "S": "SHIFT"}
                modifiers = tuple(names.get(p.upper(), p.upper()) for p in parts[:-1])
                return cls(parts[-1], modifiers)
            return cls(inner.upper())
        return cls(key)


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of keystrokes with a completion timeout."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = 1000

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str, timeout_ms: int = 1000) -> "KeySequence":
        strokes = tuple(KeyStroke.parse(key) for key in keys if key)
        return cls(strokes=strokes, timeout_ms=timeout_ms)

    @classmethod
    def parse(cls, notation: str, *, timeout_ms: int = 1000) -> "KeySequence":
        """Build a sequence from notation such as ``]b`` or ``<Leader>bd``."""

        return cls.from_strings(*_split_notation(notation), timeout_ms=timeout_ms)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag test gating a binding."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:].strip(), False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """A registered command handler plus its static arguments."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def _normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: MutableMapping[str, None] = {}
    for tag in tags:
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence with an action under optional conditions."""

    id: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    tags: tuple[str, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(self, "tags", _normalize_tags(self.tags))
        object.__setattr__(
            self,
            "when",
            tuple(
                clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
                for clause in self.when
            ),
        )

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
]
