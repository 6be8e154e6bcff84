from abc import ABC, abstractmethod


class BaseClipboard(ABC):
    """Contract for clipboard sinks."""

    @abstractmethod
    def write_text(self, text: str) -> None:
        """Replace the clipboard contents with ``text``."""


class InMemoryClipboard(BaseClipboard):
    """Holds the last copied text; stands in for a system clipboard."""

    def __init__(self) -> None:
        self.text = ""

    def write_text(self, text: str) -> None:
        self.text = text
