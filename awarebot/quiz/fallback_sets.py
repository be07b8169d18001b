"""
awarebot/quiz/fallback_sets.py
Hand-built question sets for early modules whose content was never authored
in a parseable format. The table maps a trigger phrase (matched
case-insensitively against the raw content) to a fixed question set; first
trigger wins, so more specific phrases go first.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from awarebot.quiz.questions import CanonicalQuestion

# ── Question sets ─────────────────────────────────────────────────────────────

PHISHING_QUESTIONS: Tuple[CanonicalQuestion, ...] = (
    CanonicalQuestion(
        id=1,
        text="Which of the following is NOT a common indicator of a phishing email?",
        options=(
            "Urgent language demanding immediate action",
            "Misspelled domain names in email addresses",
            "Personal greeting using your full name",
            "Generic salutations like 'Dear Customer'",
        ),
        correct_option_index=2,
        explanation="Generic greetings are far more common in phishing than a correct, personal one.",
    ),
    CanonicalQuestion(
        id=2,
        text="What is 'spear phishing'?",
        options=(
            "A phishing attack targeting a specific individual or organization",
            "A phishing attack using telephone calls",
            "A phishing attack that only works on mobile devices",
            "A phishing attack that uses USB drives as the delivery method",
        ),
        correct_option_index=0,
    ),
    CanonicalQuestion(
        id=3,
        text="Which URL is most likely legitimate?",
        options=(
            "amazon-secure.com/login",
            "amazon.com-secure-login.net",
            "amazon.com/secure/login",
            "secure-amazon.net/login",
        ),
        correct_option_index=2,
        explanation="Only amazon.com/secure/login has amazon.com as the real domain.",
    ),
    CanonicalQuestion(
        id=4,
        text="An email asks you to verify your account details. What is the safest response?",
        options=(
            "Click the link and enter your information",
            "Reply to the email with your information",
            "Contact the company through its official website or a known phone number",
        ),
        correct_option_index=2,
    ),
)

SOCIAL_ENGINEERING_QUESTIONS: Tuple[CanonicalQuestion, ...] = (
    CanonicalQuestion(
        id=1,
        text="What does a social engineering attack primarily exploit?",
        options=(
            "Unpatched software",
            "Human psychology and trust",
            "Weak encryption algorithms",
            "Misconfigured firewalls",
        ),
        correct_option_index=1,
    ),
    CanonicalQuestion(
        id=2,
        text="Someone without a badge asks you to hold the secure door because they forgot their card. This is:",
        options=("Pretexting", "Baiting", "Tailgating", "Quid pro quo"),
        correct_option_index=2,
    ),
    CanonicalQuestion(
        id=3,
        text="A caller claims to be from IT and offers to fix your laptop in exchange for your login. This is:",
        options=("Quid pro quo", "Whaling", "Smishing", "Scareware"),
        correct_option_index=0,
    ),
    CanonicalQuestion(
        id=4,
        text="What should you do first when a request feels urgent and unusual?",
        options=(
            "Act quickly so you do not cause a delay",
            "Verify the request through a separate, trusted channel",
            "Forward it to colleagues for their opinion",
            "Ignore it permanently without telling anyone",
        ),
        correct_option_index=1,
    ),
)

PASSWORD_QUESTIONS: Tuple[CanonicalQuestion, ...] = (
    CanonicalQuestion(
        id=1,
        text="Which password is the strongest?",
        options=("password123", "Summer2023", "Tr@vel*2NewZ3aland!2023", "qwerty"),
        correct_option_index=2,
    ),
    CanonicalQuestion(
        id=2,
        text="Why is reusing a password across sites risky?",
        options=(
            "It makes the password harder to remember",
            "One breach exposes every account that shares it",
            "Websites reject reused passwords",
        ),
        correct_option_index=1,
    ),
    CanonicalQuestion(
        id=3,
        text="What does multi-factor authentication add?",
        options=(
            "A longer password",
            "A second proof of identity beyond the password",
            "Automatic password rotation",
            "Encrypted email",
        ),
        correct_option_index=1,
    ),
)

# ── Trigger table ─────────────────────────────────────────────────────────────

FALLBACK_SETS: Tuple[Tuple[str, Tuple[CanonicalQuestion, ...]], ...] = (
    ("content for phishing", PHISHING_QUESTIONS),
    ("content for social engineering", SOCIAL_ENGINEERING_QUESTIONS),
    ("content for password", PASSWORD_QUESTIONS),
)


def match_fallback_set(content: str) -> Optional[List[CanonicalQuestion]]:
    lowered = content.lower()
    for trigger, questions in FALLBACK_SETS:
        if trigger in lowered:
            return list(questions)
    return None
