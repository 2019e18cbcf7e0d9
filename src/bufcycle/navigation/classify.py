"""Predicates deciding which buffers may take part in navigation."""

from __future__ import annotations

from typing import Optional

from .config import NavigatorConfig
from .host import NO_BUFFER, BufferId, BufferInfo, BufferQuery


class BufferClassifier:
    """Answers skippable/selectable questions against live host state."""

    def __init__(
        self, query: BufferQuery, config: Optional[NavigatorConfig] = None
    ) -> None:
        self.query = query
        self.config = config or NavigatorConfig()

    def is_skippable(self, buffer_id: BufferId) -> bool:
        filetype = self._filetype(buffer_id)
        return filetype is not None and filetype in self.config.skip_filetypes

    def is_help(self, buffer_id: BufferId) -> bool:
        return self._filetype(buffer_id) == self.config.help_filetype

    def _filetype(self, buffer_id: BufferId) -> Optional[str]:
        if buffer_id == NO_BUFFER or not self.query.exists(buffer_id):
            return None
        return self.query.filetype(buffer_id)

    def is_selectable(self, buffer_id: BufferId, want_help: bool) -> bool:
        # Existence is checked first so other queries never see a missing id.
        if buffer_id == NO_BUFFER:
            return False
        query = self.query
        if not query.exists(buffer_id):
            return False
        if not query.is_loaded(buffer_id) or not query.is_listed(buffer_id):
            return False
        filetype = query.filetype(buffer_id)
        if (filetype == self.config.help_filetype) != want_help:
            return False
        return filetype not in self.config.skip_filetypes

    def info(self, buffer_id: BufferId) -> BufferInfo:
        if buffer_id == NO_BUFFER or not self.query.exists(buffer_id):
            return BufferInfo(id=buffer_id, exists=False)
        return BufferInfo(
            id=buffer_id,
            exists=True,
            loaded=self.query.is_loaded(buffer_id),
            listed=self.query.is_listed(buffer_id),
            filetype=self.query.filetype(buffer_id),
        )


__all__ = ["BufferClassifier"]
