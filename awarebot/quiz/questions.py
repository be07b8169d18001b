"""
awarebot/quiz/questions.py
The canonical question shape every quiz grammar is normalised into.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

MIN_OPTIONS = 2
MAX_OPTIONS = 4


@dataclass(frozen=True)
class CanonicalQuestion:
    id: int
    text: str
    options: Tuple[str, ...]
    correct_option_index: int
    explanation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Structured-format shape, also what the API sends to the client."""
        data: Dict[str, Any] = {
            "id":            self.id,
            "question":      self.text,
            "options":       list(self.options),
            "correctAnswer": self.correct_option_index,
        }
        if self.explanation:
            data["explanation"] = self.explanation
        return data


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def make_question(qid: Any, text: Any, options: Any, correct_index: Any,
                  explanation: Any = None) -> Optional[CanonicalQuestion]:
    """
    Build a CanonicalQuestion or return None when the pieces cannot form one:
    blank text, fewer than 2 / more than 4 options, a blank option, or a
    correct index that does not point into the options.
    An id that is not a positive int is stored as 0 and renumbered later.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    if not isinstance(options, (list, tuple)):
        return None
    if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
        return None
    if not all(isinstance(o, str) and o.strip() for o in options):
        return None
    if not _is_int(correct_index) or not 0 <= correct_index < len(options):
        return None

    return CanonicalQuestion(
        id=qid if _is_int(qid) and qid > 0 else 0,
        text=text.strip(),
        options=tuple(o.strip() for o in options),
        correct_option_index=correct_index,
        explanation=explanation.strip() if isinstance(explanation, str) and explanation.strip() else None,
    )


def normalize_ids(questions: Sequence[CanonicalQuestion]) -> List[CanonicalQuestion]:
    """Keep source ids when they are unique and positive, else renumber 1..N."""
    ids = [q.id for q in questions]
    if all(i > 0 for i in ids) and len(set(ids)) == len(ids):
        return list(questions)
    return [replace(q, id=position) for position, q in enumerate(questions, start=1)]
