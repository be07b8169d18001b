"""
awarebot/quiz/parser.py

Quiz content has been authored in several formats over the life of the
platform. Each format gets its own strategy; parse_quiz() tries them in a
fixed order and the first one that yields a result wins:

  1. structured      : JSON {"introduction": ..., "questions": [...]}
  2. keyword_fallback: placeholder content mapped to a hand-built set
  3. answer_key      : numbered questions, lettered options, "Answers: 1-b, 2-a"
  4. section_marker  : "## Quiz Section:" + options tagged "(correct)"
  5. legacy          : "## Question 1: ..." sections with "- option" lines

A strategy returns None when its format does not apply. Parsing never
raises; total failure is an empty, non-ok QuizParseResult.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from awarebot.quiz.fallback_sets import match_fallback_set
from awarebot.quiz.introductions import expand_introduction
from awarebot.quiz.questions import CanonicalQuestion, make_question, normalize_ids

logger = logging.getLogger(__name__)

OPTION_LETTERS = "abcd"
CORRECT_SUFFIX = "(correct)"
ANSWER_KEY_MARKER = "Answers:"
SECTION_MARKER = "## Quiz Section:"
LEGACY_MARKER = "## Question"
LEGACY_INTRO_HEADER = "# Quiz"

# A question number either opens a line or follows whitespace inline; the
# inline form only counts once the current question's options have started.
_QUESTION_START = re.compile(r"^[ \t]*(\d+)\.[ \t]+", re.MULTILINE)
_INLINE_QUESTION_START = re.compile(r"(?<!\S)(\d+)\.\s+")
_OPTION_PREFIX = {
    letter: re.compile(r"(?<!\S)%s\)[ \t]*" % letter, re.IGNORECASE)
    for letter in OPTION_LETTERS
}
_ANSWER_PAIR = re.compile(r"(\d+)\s*-\s*([a-d])\b", re.IGNORECASE)
_LEGACY_HEADING = re.compile(r"^\s*(\d+)\s*:\s*(.*\S)\s*$")

Parsed = Tuple[List[CanonicalQuestion], Optional[str]]


@dataclass
class QuizParseResult:
    questions: List[CanonicalQuestion] = field(default_factory=list)
    strategy: Optional[str] = None
    introduction: Optional[str] = None
    display_introduction: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.strategy is not None


# ── Shared scanning helpers ───────────────────────────────────────────────────

def _squash(text: str) -> str:
    return " ".join(text.split())


def _strip_correct_marker(option: str) -> Tuple[str, bool]:
    if option.lower().endswith(CORRECT_SUFFIX):
        return option[:-len(CORRECT_SUFFIX)].rstrip(), True
    return option, False


def _next_question(text: str, block_start: int):
    """Where the question after the one whose text begins at block_start starts."""
    candidates = [_QUESTION_START.search(text, block_start)]
    first_option = _OPTION_PREFIX["a"].search(text, block_start)
    if first_option:
        candidates.append(_INLINE_QUESTION_START.search(text, first_option.end()))
    candidates = [m for m in candidates if m]
    return min(candidates, key=lambda m: m.start()) if candidates else None


def _numbered_blocks(text: str) -> List[Tuple[int, str]]:
    """Split text on "<n>. " question markers → [(n, block_text), ...]."""
    blocks = []
    match = _INLINE_QUESTION_START.search(text)
    while match:
        following = _next_question(text, match.end())
        end = following.start() if following else len(text)
        blocks.append((int(match.group(1)), text[match.end():end]))
        match = following
    return blocks


def _scan_lettered_options(block: str) -> Tuple[str, List[str]]:
    """
    Find a), b), c), d) in that order; whatever precedes a) is the question
    text. Stops at the first missing letter.
    """
    spans = []
    cursor = 0
    for letter in OPTION_LETTERS:
        match = _OPTION_PREFIX[letter].search(block, cursor)
        if not match:
            break
        spans.append((match.start(), match.end()))
        cursor = match.end()

    if not spans:
        return _squash(block), []

    text = _squash(block[:spans[0][0]])
    options = []
    for i, (_, body_start) in enumerate(spans):
        body_end = spans[i + 1][0] if i + 1 < len(spans) else len(block)
        options.append(_squash(block[body_start:body_end]))
    return text, options


# ── Strategies ────────────────────────────────────────────────────────────────

def parse_structured(content: str) -> Optional[Parsed]:
    try:
        doc = json.loads(content)
    except ValueError:
        return None
    if not isinstance(doc, dict) or not isinstance(doc.get("questions"), list):
        return None
    introduction = doc.get("introduction")
    if introduction is not None and not isinstance(introduction, str):
        return None

    questions = []
    for position, entry in enumerate(doc["questions"], start=1):
        if not isinstance(entry, dict):
            logger.debug("structured: entry %d is not an object, dropped", position)
            continue
        question = make_question(
            entry.get("id"),
            entry.get("question"),
            entry.get("options"),
            entry.get("correctAnswer"),
            entry.get("explanation"),
        )
        if question is None:
            logger.debug("structured: entry %d is malformed, dropped", position)
            continue
        questions.append(question)
    return questions, introduction


def parse_keyword_fallback(content: str) -> Optional[Parsed]:
    questions = match_fallback_set(content)
    if questions is None:
        return None
    return questions, None


def parse_answer_key(content: str) -> Optional[Parsed]:
    if ANSWER_KEY_MARKER not in content:
        return None
    body, _, key_text = content.rpartition(ANSWER_KEY_MARKER)

    answer_key: Dict[int, int] = {}
    for match in _ANSWER_PAIR.finditer(key_text):
        number = int(match.group(1))
        answer_key.setdefault(number, OPTION_LETTERS.index(match.group(2).lower()))

    questions = []
    for number, block in _numbered_blocks(body):
        if number not in answer_key:
            logger.debug("answer_key: question %d has no key entry, dropped", number)
            continue
        text, options = _scan_lettered_options(block)
        question = make_question(number, text, options, answer_key[number])
        if question is None:
            logger.debug("answer_key: question %d is malformed, dropped", number)
            continue
        questions.append(question)
    return questions, None


def parse_section_marker(content: str) -> Optional[Parsed]:
    if SECTION_MARKER not in content:
        return None
    _, _, section = content.partition(SECTION_MARKER)

    questions = []
    for number, block in _numbered_blocks(section):
        text, raw_options = _scan_lettered_options(block)
        options = []
        correct = None
        for option in raw_options:
            option, is_correct = _strip_correct_marker(option)
            if is_correct and correct is None:
                correct = len(options)
            options.append(option)
        # Unmarked questions default to the first option.
        question = make_question(number, text, options, correct if correct is not None else 0)
        if question is None:
            logger.debug("section_marker: question %d is malformed, dropped", number)
            continue
        questions.append(question)
    return questions, None


def parse_legacy(content: str) -> Optional[Parsed]:
    if LEGACY_MARKER not in content:
        return None
    sections = content.split(LEGACY_MARKER)

    introduction = None
    if sections[0].lstrip().startswith(LEGACY_INTRO_HEADER):
        introduction = sections[0].strip()
        sections = sections[1:]

    questions = []
    for section in sections:
        lines = section.strip().splitlines()
        if not lines:
            continue
        heading = _LEGACY_HEADING.match(lines[0])
        if not heading:
            continue

        options = []
        correct = None
        for line in lines[1:]:
            line = line.strip()
            if not line.startswith("- "):
                continue
            option, is_correct = _strip_correct_marker(line[2:].strip())
            if is_correct and correct is None:
                correct = len(options)
            options.append(option)

        number = int(heading.group(1))
        if not options or correct is None:
            logger.debug("legacy: question %d has no options or no correct option, dropped", number)
            continue
        question = make_question(number, heading.group(2), options, correct)
        if question is not None:
            questions.append(question)
    return questions, introduction


STRATEGIES: Tuple[Tuple[str, Callable[[str], Optional[Parsed]]], ...] = (
    ("structured", parse_structured),
    ("keyword_fallback", parse_keyword_fallback),
    ("answer_key", parse_answer_key),
    ("section_marker", parse_section_marker),
    ("legacy", parse_legacy),
)


# ── Entry points ──────────────────────────────────────────────────────────────

def parse_quiz(content: Optional[str]) -> QuizParseResult:
    if not isinstance(content, str) or not content.strip():
        return QuizParseResult()

    for name, strategy in STRATEGIES:
        try:
            parsed = strategy(content)
        except Exception:
            logger.exception("Quiz strategy %s failed unexpectedly", name)
            continue
        if parsed is None:
            continue
        questions, introduction = parsed
        # A well-formed empty structured document is still a match.
        if not questions and name != "structured":
            continue

        display = introduction
        if name == "structured" and introduction:
            display = expand_introduction(introduction)
        return QuizParseResult(
            questions=normalize_ids(questions),
            strategy=name,
            introduction=introduction,
            display_introduction=display,
        )

    logger.debug("No quiz strategy matched content (%d chars)", len(content))
    return QuizParseResult()


def parse(content: Optional[str]) -> List[CanonicalQuestion]:
    return parse_quiz(content).questions


def to_structured(questions: List[CanonicalQuestion], introduction: Optional[str] = None) -> str:
    """Serialise questions back into the structured format."""
    doc: Dict = {}
    if introduction is not None:
        doc["introduction"] = introduction
    doc["questions"] = [q.to_dict() for q in questions]
    return json.dumps(doc, indent=2)
