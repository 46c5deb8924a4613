"""Answer domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Answer:
    """An answer to a user question.

    Attributes:
        question: The question as asked
        answer: The response text
        sources: Source identifiers backing the answer
        from_cache: True when served by either cache tier
    """

    question: str
    answer: str
    sources: tuple[str, ...]
    from_cache: bool = False
