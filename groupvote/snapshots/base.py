"""Abstract base class for group snapshot parsers."""

import json
from abc import ABC, abstractmethod
from typing import Any

from groupvote.models import GroupSnapshot


class SnapshotError(ValueError):
    """Raised when a snapshot is recognized but structurally unusable.

    The message is shown to the user as-is.
    """
    pass


class SnapshotParser(ABC):
    """Abstract base class for parsing group snapshots.

    Each parser implementation handles one export format. Parsers are
    registered via the @register_parser decorator in
    groupvote/snapshots/__init__.py.
    """

    @abstractmethod
    def can_parse(self, source: str) -> bool:
        """Check if this parser can handle the given source.

        Args:
            source: URL or filename to check

        Returns:
            True if this parser can handle the source, False otherwise
        """
        pass

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this parser can handle the given file content.

        Used for uploads and URLs that don't follow a naming convention.
        Subclasses should override this to inspect the document for
        tell-tale keys of their format.
        """
        return False

    @abstractmethod
    def parse(self, source: str, content: bytes) -> GroupSnapshot:
        """Parse the content into a GroupSnapshot.

        Args:
            source: Original URL or filename (for context)
            content: Raw bytes of the document

        Returns:
            Parsed GroupSnapshot

        Raises:
            ValueError: If the content cannot be parsed
        """
        pass


def load_json_object(content: bytes) -> dict[str, Any] | None:
    """Decode content as a JSON object, or None if it isn't one."""
    try:
        data = json.loads(content.decode("utf-8", errors="replace"))
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None
