"""
tests/test_parser.py
====================
Quiz content parser: every authored format, the order they are tried in,
and the edge cases that must come back empty instead of raising.

Run with:
    pytest tests/test_parser.py -v
"""

from __future__ import annotations

import json

import pytest

from awarebot.quiz.fallback_sets import PHISHING_QUESTIONS, SOCIAL_ENGINEERING_QUESTIONS
from awarebot.quiz.introductions import PHISHING_INTRO, expand_introduction
from awarebot.quiz.parser import parse, parse_quiz, to_structured
from awarebot.quiz.questions import CanonicalQuestion, make_question


def _structured(questions, introduction="Test your knowledge."):
    return json.dumps({"introduction": introduction, "questions": questions})


def _q(qid, text="Question?", options=("Yes", "No"), answer=0, **extra):
    data = {"id": qid, "question": text, "options": list(options), "correctAnswer": answer}
    data.update(extra)
    return data


ANSWER_KEY_QUIZ = """Password quiz
1. What makes a password strong?
a) Length b) Your birthday c) A dictionary word d) Reuse
2. Which tool stores passwords safely?
a) Sticky note b) Spreadsheet c) Password manager
3. Should you share your password with IT?
a) Yes b) No

Answers: 1-a, 3-b"""

SECTION_QUIZ = """# Pretexting
Some article text about pretexting.

## Quiz Section: Check yourself
1. A caller asks for your PIN. You should:
a) Share it b) Hang up and call back (correct) c) Share half
2. Which is a red flag?
a) Urgency b) A known colleague
"""

LEGACY_QUIZ = """# Quiz: Tailgating
Intro text.

## Question 1: Someone asks you to hold the door. You:
- Hold it
- Direct them to reception (correct)

## Question 2: No correct option here
- One
- Two

## Question 3: No options at all

## Question 4: Why does tailgating work?
- Politeness (correct)
- Slow doors
- Cheap badges
"""


# ══════════════════════════════════════════════════════════════════════════════
# 1. STRUCTURED FORMAT
# ══════════════════════════════════════════════════════════════════════════════

class TestStructuredFormat:

    def test_returns_every_question_in_source_order(self):
        content = _structured([_q(3, "Third?"), _q(1, "First?"), _q(2, "Second?")])
        questions = parse(content)
        assert [q.text for q in questions] == ["Third?", "First?", "Second?"]
        assert [q.id for q in questions] == [3, 1, 2]

    def test_fields_are_mapped(self):
        content = _structured([
            _q(1, "Pick one", ["A", "B", "C", "D"], 3, explanation="Because D."),
        ])
        [question] = parse(content)
        assert question == CanonicalQuestion(
            id=1, text="Pick one", options=("A", "B", "C", "D"),
            correct_option_index=3, explanation="Because D.",
        )

    def test_empty_questions_array_is_a_match_not_an_error(self):
        result = parse_quiz(_structured([]))
        assert result.questions == []
        assert result.ok
        assert result.strategy == "structured"

    def test_malformed_entries_are_dropped(self):
        content = _structured([
            _q(1, "Good?"),
            _q(2, "Five options", ["a", "b", "c", "d", "e"], 0),
            _q(3, "One option", ["a"], 0),
            _q(4, "Bad index", ["a", "b"], 2),
            _q(5, "", ["a", "b"], 0),
            _q(6, "Blank option", ["a", "  "], 0),
            "not an object",
            {"id": 7, "question": "Bool index", "options": ["a", "b"], "correctAnswer": True},
        ])
        questions = parse(content)
        assert [q.id for q in questions] == [1]

    def test_duplicate_or_missing_ids_are_renumbered(self):
        content = _structured([_q(1, "A?"), _q(1, "B?"), {"question": "C?", "options": ["x", "y"], "correctAnswer": 1}])
        questions = parse(content)
        assert [q.id for q in questions] == [1, 2, 3]
        assert [q.text for q in questions] == ["A?", "B?", "C?"]

    def test_introduction_is_expanded_for_known_topic(self):
        result = parse_quiz(_structured([_q(1)], introduction="This quiz covers phishing emails."))
        assert result.introduction == "This quiz covers phishing emails."
        assert result.display_introduction == PHISHING_INTRO

    def test_introduction_without_topic_is_kept(self):
        result = parse_quiz(_structured([_q(1)], introduction="Cryptography basics."))
        assert result.display_introduction == "Cryptography basics."

    def test_introduction_does_not_change_questions(self):
        plain = parse(_structured([_q(1), _q(2)], introduction="Cryptography basics."))
        topical = parse(_structured([_q(1), _q(2)], introduction="All about passwords."))
        assert plain == topical

    @pytest.mark.parametrize("content", ['{"foo": 1}', '[1, 2, 3]', '42', '{"questions": "nope"}'])
    def test_other_json_falls_through(self, content):
        result = parse_quiz(content)
        assert result.questions == []
        assert not result.ok


# ══════════════════════════════════════════════════════════════════════════════
# 2. KEYWORD FALLBACK SETS
# ══════════════════════════════════════════════════════════════════════════════

class TestKeywordFallback:

    def test_phishing_placeholder_returns_phishing_set(self):
        result = parse_quiz("Content for phishing detection...")
        assert result.strategy == "keyword_fallback"
        assert result.questions == list(PHISHING_QUESTIONS)

    def test_match_is_case_insensitive(self):
        assert parse("CONTENT FOR SOCIAL ENGINEERING basics") == list(SOCIAL_ENGINEERING_QUESTIONS)

    def test_structured_content_wins_over_trigger(self):
        content = _structured([_q(1, "Only one?")], introduction="Content for phishing detection")
        result = parse_quiz(content)
        assert result.strategy == "structured"
        assert len(result.questions) == 1

    def test_fallback_sets_satisfy_question_invariants(self):
        for question in PHISHING_QUESTIONS + SOCIAL_ENGINEERING_QUESTIONS:
            assert 2 <= len(question.options) <= 4
            assert 0 <= question.correct_option_index < len(question.options)


# ══════════════════════════════════════════════════════════════════════════════
# 3. ANSWER-KEY SUFFIX FORMAT
# ══════════════════════════════════════════════════════════════════════════════

class TestAnswerKeyFormat:

    def test_correct_index_comes_from_key(self):
        result = parse_quiz(ANSWER_KEY_QUIZ)
        assert result.strategy == "answer_key"
        first, third = result.questions
        assert first.text == "What makes a password strong?"
        assert first.options == ("Length", "Your birthday", "A dictionary word", "Reuse")
        assert first.correct_option_index == 0
        assert third.options == ("Yes", "No")
        assert third.correct_option_index == 1

    def test_questions_missing_from_key_are_dropped(self):
        ids = [q.id for q in parse(ANSWER_KEY_QUIZ)]
        assert ids == [1, 3]

    def test_key_tolerates_case_and_spacing(self):
        content = "1. Pick?\na) x b) y c) z\n\nAnswers: 1 - C"
        [question] = parse(content)
        assert question.correct_option_index == 2

    def test_key_letter_without_option_drops_question(self):
        content = "1. Pick?\na) x b) y\n2. Other?\na) p b) q\nAnswers: 1-d, 2-b"
        questions = parse(content)
        assert [(q.id, q.correct_option_index) for q in questions] == [(2, 1)]

    def test_options_on_separate_lines(self):
        content = "1. Pick?\na) first\nb) second\nc) third\nAnswers: 1-b"
        [question] = parse(content)
        assert question.options == ("first", "second", "third")
        assert question.correct_option_index == 1

    def test_marker_without_questions_yields_nothing(self):
        assert parse("Answers: 1-a, 2-b") == []

    def test_questions_on_a_single_line(self):
        content = ("1. What is phishing? a) A sport b) A scam email c) A fish d) A tool "
                   "2. What is MFA? a) One password b) Extra proof c) None d) Email "
                   "Answers: 1-b, 2-b")
        first, second = parse(content)
        assert first.text == "What is phishing?"
        assert first.options == ("A sport", "A scam email", "A fish", "A tool")
        assert second.text == "What is MFA?"
        assert second.options == ("One password", "Extra proof", "None", "Email")
        assert [q.correct_option_index for q in (first, second)] == [1, 1]

    def test_number_inside_question_text_does_not_split(self):
        content = "1. Is 2. a valid step? a) Yes b) No\nAnswers: 1-b"
        [question] = parse(content)
        assert question.text == "Is 2. a valid step?"


# ══════════════════════════════════════════════════════════════════════════════
# 4. SECTION-MARKER FORMAT
# ══════════════════════════════════════════════════════════════════════════════

class TestSectionMarkerFormat:

    def test_correct_suffix_is_stripped_and_used(self):
        result = parse_quiz(SECTION_QUIZ)
        assert result.strategy == "section_marker"
        first = result.questions[0]
        assert first.options == ("Share it", "Hang up and call back", "Share half")
        assert first.correct_option_index == 1

    def test_unmarked_question_defaults_to_first_option(self):
        second = parse(SECTION_QUIZ)[1]
        assert second.text == "Which is a red flag?"
        assert second.correct_option_index == 0

    def test_text_before_marker_is_ignored(self):
        content = "1. Not a quiz question\na) no b) no\n## Quiz Section: Real\n1. Real?\na) yes (correct) b) no"
        [question] = parse(content)
        assert question.text == "Real?"

    def test_questions_on_a_single_line(self):
        content = "## Quiz Section: 1. Q one? a) x (correct) b) y 2. Q two? a) p b) q (correct)"
        first, second = parse(content)
        assert (first.text, first.options, first.correct_option_index) == ("Q one?", ("x", "y"), 0)
        assert (second.text, second.options, second.correct_option_index) == ("Q two?", ("p", "q"), 1)


# ══════════════════════════════════════════════════════════════════════════════
# 5. LEGACY DASH-LIST FORMAT
# ══════════════════════════════════════════════════════════════════════════════

class TestLegacyFormat:

    def test_parses_sections_and_skips_introduction(self):
        result = parse_quiz(LEGACY_QUIZ)
        assert result.strategy == "legacy"
        assert result.introduction.startswith("# Quiz: Tailgating")
        assert [q.id for q in result.questions] == [1, 4]

    def test_correct_option_is_marked_and_stripped(self):
        first, fourth = parse(LEGACY_QUIZ)
        assert first.options == ("Hold it", "Direct them to reception")
        assert first.correct_option_index == 1
        assert fourth.options == ("Politeness", "Slow doors", "Cheap badges")
        assert fourth.correct_option_index == 0

    def test_section_without_correct_option_has_no_fallback(self):
        assert parse("## Question 1: Anything?\n- a\n- b") == []

    def test_answer_key_takes_priority_over_legacy(self):
        content = "## Question 1: ignored\n- x (correct)\n- y\n1. Real?\na) p b) q\nAnswers: 1-b"
        result = parse_quiz(content)
        assert result.strategy == "answer_key"


# ══════════════════════════════════════════════════════════════════════════════
# 6. EDGE CASES & ROUND TRIP
# ══════════════════════════════════════════════════════════════════════════════

class TestEdgeCases:

    @pytest.mark.parametrize("content", [
        "", "   ", None, "no recognizable structure", "{", "Answers:",
        "## Quiz Section:", "## Question", "# Quiz only an intro",
    ])
    def test_unparsable_content_returns_empty(self, content):
        result = parse_quiz(content)
        assert result.questions == []
        assert not result.ok
        assert parse(content) == []

    def test_round_trip_is_idempotent(self):
        original = parse(LEGACY_QUIZ) + [
            CanonicalQuestion(id=9, text="Why?", options=("a", "b", "c"),
                              correct_option_index=2, explanation="Because."),
        ]
        reparsed = parse(to_structured(original, introduction="Mixed quiz"))
        assert reparsed == original
        assert parse(to_structured(reparsed)) == reparsed

    def test_make_question_rejects_out_of_range_index(self):
        assert make_question(1, "Q?", ["a", "b"], -1) is None
        assert make_question(1, "Q?", ["a", "b"], 1) is not None

    def test_expand_introduction_passes_through_empty(self):
        assert expand_introduction(None) is None
        assert expand_introduction("") == ""
