"""Document domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """A passage available to the retriever."""

    id: str
    title: str
    content: str
