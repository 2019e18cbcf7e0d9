"""Navigator configuration and its environment loader."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Iterable, Mapping, Optional

ENV_PREFIX = "BUFCYCLE_"

DEFAULT_SKIP_FILETYPES: frozenset[str] = frozenset({"nerdtree", "tagbar", "qf"})
DEFAULT_HELP_FILETYPE = "help"


def _split_names(raw: str) -> frozenset[str]:
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class NavigatorConfig:
    """Filetypes that steer buffer selection.

    ``skip_filetypes`` names plugin-owned windows that are never a target
    and never an origin of navigation. ``help_filetype`` marks the buffers
    that form their own navigation class.
    """

    skip_filetypes: frozenset[str] = field(default=DEFAULT_SKIP_FILETYPES)
    help_filetype: str = DEFAULT_HELP_FILETYPE

    def __post_init__(self) -> None:
        if not self.help_filetype:
            raise ValueError("help_filetype cannot be empty")
        object.__setattr__(self, "skip_filetypes", frozenset(self.skip_filetypes))
        if self.help_filetype in self.skip_filetypes:
            raise ValueError(
                f"help filetype '{self.help_filetype}' cannot also be skipped"
            )

    def with_skip_filetypes(self, *names: str) -> "NavigatorConfig":
        extra = {name.strip() for name in names if name.strip()}
        return replace(self, skip_filetypes=self.skip_filetypes | extra)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NavigatorConfig":
        env = os.environ if environ is None else environ
        skip: Iterable[str] = DEFAULT_SKIP_FILETYPES
        raw_skip = env.get(f"{ENV_PREFIX}SKIP_FILETYPES")
        if raw_skip is not None:
            skip = _split_names(raw_skip)
        raw_extra = env.get(f"{ENV_PREFIX}EXTRA_SKIP_FILETYPES")
        if raw_extra:
            skip = frozenset(skip) | _split_names(raw_extra)
        help_filetype = (
            env.get(f"{ENV_PREFIX}HELP_FILETYPE") or DEFAULT_HELP_FILETYPE
        ).strip()
        return cls(skip_filetypes=frozenset(skip), help_filetype=help_filetype)


__all__ = [
    "NavigatorConfig",
    "DEFAULT_SKIP_FILETYPES",
    "DEFAULT_HELP_FILETYPE",
    "ENV_PREFIX",
]
