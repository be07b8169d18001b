"""
awarebot/quiz/introductions.py
Topic passages shown above a structured quiz. Display only.
"""
from __future__ import annotations

from typing import Optional, Tuple

PHISHING_INTRO = (
    "Phishing is the most common way attackers get a foothold in an organisation. "
    "A phishing message imitates someone you trust (a bank, a supplier, a colleague) "
    "and pushes you to click a link, open an attachment or hand over credentials. "
    "Look for urgency, mismatched sender addresses and links whose real domain is not "
    "the one you expect. When in doubt, contact the sender through a channel you "
    "already know."
)

PASSWORD_INTRO = (
    "Passwords are the keys to your digital life. Long, unique passphrases stored in "
    "a password manager resist guessing and credential stuffing, and multi-factor "
    "authentication stops most account takeovers even when a password leaks. Never "
    "share a password, not even with someone who claims to be from IT support."
)

SOCIAL_ENGINEERING_INTRO = (
    "Social engineering attacks target people rather than systems. Pretexting, "
    "baiting, quid pro quo offers and tailgating all rely on trust, helpfulness or "
    "fear to get you to bypass a security control. Slowing down and verifying "
    "unusual requests through official channels defeats nearly all of them."
)

GENERAL_AWARENESS_INTRO = (
    "Security awareness is about building habits: question unexpected requests, "
    "protect what you share, keep software up to date and report anything "
    "suspicious quickly. Each question below reflects a situation you are likely "
    "to meet at work."
)

# First match wins.
TOPIC_INTRODUCTIONS: Tuple[Tuple[str, str], ...] = (
    ("phishing", PHISHING_INTRO),
    ("password", PASSWORD_INTRO),
    ("social engineering", SOCIAL_ENGINEERING_INTRO),
    ("awareness", GENERAL_AWARENESS_INTRO),
)


def expand_introduction(introduction: Optional[str]) -> Optional[str]:
    if not introduction:
        return introduction
    lowered = introduction.lower()
    for keyword, passage in TOPIC_INTRODUCTIONS:
        if keyword in lowered:
            return passage
    return introduction
