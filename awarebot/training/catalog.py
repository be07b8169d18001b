"""
awarebot/training/catalog.py
Authored training modules, achievements, threat scenarios and policies, plus the `flask seed-catalog`
command that loads them.

Quiz modules below are deliberately written in each of the formats the quiz
parser understands, because that is how they exist in production.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

import click

from awarebot import db
from awarebot.models import Achievement, OrganizationPolicy, ThreatScenario, TrainingModule, User

logger = logging.getLogger(__name__)

# ── Module registry ───────────────────────────────────────────────────────────
# Structure:
#   title / description : shown on the dashboard card
#   type                : "article" | "quiz" | "scenario" | "video"
#   difficulty          : "beginner" | "intermediate" | "advanced"
#   xp_reward           : XP granted on first completion
#   order               : catalog position; recommendations follow it
#   content             : markdown for articles, quiz source for quizzes

MODULES: List[Dict[str, Any]] = [
    {
        "title": "Introduction to Social Engineering",
        "description": "Learn what social engineering is and the most common attack types.",
        "type": "article",
        "difficulty": "beginner",
        "xp_reward": 10,
        "order": 1,
        "content": """# Introduction to Social Engineering

Social engineering is the art of manipulating people into performing actions or
divulging confidential information.

## Common Types of Social Engineering Attacks

### Phishing
Email or malicious websites solicit personal information by posing as a
trustworthy organization.

### Pretexting
A fabricated scenario is used to engage a victim and obtain information.

### Baiting
A false promise (free downloads, a found USB drive) piques greed or curiosity.

### Tailgating
An unauthorized person follows an authorized person into a restricted area.

## How to Protect Yourself

1. **Verify the source** of any request for sensitive information.
2. **Be skeptical** of urgency and offers that seem too good to be true.
3. **Use multi-factor authentication.**
4. **Report** anything suspicious to your security team.
""",
    },
    {
        "title": "Phishing Attack Recognition",
        "description": "Master the skills to identify and avoid various types of phishing attacks.",
        "type": "quiz",
        "difficulty": "beginner",
        "xp_reward": 20,
        "order": 2,
        "content": json.dumps({
            "introduction": "Phishing attacks attempt to steal your personal information by "
                            "disguising as trustworthy entities. This quiz will test your "
                            "knowledge on recognizing various phishing techniques.",
            "questions": [
                {
                    "id": 1,
                    "question": "Which of the following is NOT a common indicator of a phishing email?",
                    "options": [
                        "Urgent language demanding immediate action",
                        "Misspelled domain names in email addresses",
                        "Personal greeting using your full name",
                        "Generic salutations like 'Dear Customer'",
                    ],
                    "correctAnswer": 2,
                    "explanation": "Generic greetings are more common in phishing attacks.",
                },
                {
                    "id": 2,
                    "question": "When receiving an email asking you to verify your account "
                                "information, what is the safest course of action?",
                    "options": [
                        "Click on the provided link and enter your information",
                        "Reply directly to the email with your information",
                        "Call the company using the phone number provided in the email",
                        "Contact the company through their official website or a known phone number",
                    ],
                    "correctAnswer": 3,
                },
                {
                    "id": 3,
                    "question": "What should you do if you think you've fallen for a phishing attack?",
                    "options": [
                        "Ignore it and hope nothing happens",
                        "Change the password for that account only",
                        "Change your passwords, contact your financial institutions, "
                        "and monitor your accounts",
                    ],
                    "correctAnswer": 2,
                },
            ],
        }),
    },
    {
        "title": "Social Engineering Basics",
        "description": "Learn the foundations of social engineering attacks.",
        "type": "quiz",
        "difficulty": "beginner",
        "xp_reward": 10,
        "order": 3,
        "content": "Content for social engineering basics...",
    },
    {
        "title": "Password Security Best Practices",
        "description": "Create strong, unique passwords and manage them safely.",
        "type": "article",
        "difficulty": "intermediate",
        "xp_reward": 15,
        "order": 4,
        "content": """# Password Security Best Practices

Strong, unique passwords are your first line of defense.

## DO
1. **Use long passwords** of at least 12-16 characters.
2. **Use passphrases** built from a memorable sentence.
3. **Use a password manager** to keep every password unique.

## DON'T
1. Use personal information such as birthdays.
2. Reuse passwords across sites.
""",
    },
    {
        "title": "Password Security Check",
        "description": "Check what you remember about passwords and MFA.",
        "type": "quiz",
        "difficulty": "intermediate",
        "xp_reward": 20,
        "order": 5,
        "content": """Password Security Check

1. What is the minimum recommended length for a strong password?
a) 6 characters b) 8 characters c) 12-16 characters d) Length does not matter
2. Which of these is the best way to keep many unique passwords?
a) Write them on a sticky note b) Use a password manager c) Reuse one strong password
3. What should you do first if an account is compromised?
a) Delete the account b) Wait and see c) Change the password immediately d) Email IT the old password

Answers: 1-c, 2-b, 3-c""",
    },
    {
        "title": "Spotting Pretexting",
        "description": "Recognize invented scenarios used to extract information.",
        "type": "quiz",
        "difficulty": "intermediate",
        "xp_reward": 20,
        "order": 6,
        "content": """# Pretexting

Attackers invent a believable story to get you to share information.

## Quiz Section: Pretexting
1. A caller says they are from your bank and asks you to confirm your PIN. You should:
a) Confirm it quickly b) Hang up and call the bank's official number (correct) c) Give only the last two digits
2. Which detail is a typical sign of pretexting?
a) A request through a known channel b) An urgent story that explains why rules must be skipped (correct) c) A ticket number you created yourself
""",
    },
    {
        "title": "Tailgating Awareness",
        "description": "Physical security: who gets through the door behind you.",
        "type": "quiz",
        "difficulty": "advanced",
        "xp_reward": 25,
        "order": 7,
        "content": """# Quiz: Tailgating Awareness
Physical social engineering relies on courtesy.

## Question 1: Someone without a badge asks you to hold the secure door. What should you do?
- Hold the door, they look like an employee
- Politely refuse and direct them to reception (correct)
- Lend them your badge

## Question 2: Why does tailgating work so often?
- Doors are too slow to close
- It exploits people's politeness (correct)
- Badges are easy to clone
""",
    },
    {
        "title": "CEO Email Fraud Attempt",
        "description": "Walk through a business email compromise scenario.",
        "type": "scenario",
        "difficulty": "advanced",
        "xp_reward": 30,
        "order": 8,
        "content": """# CEO Email Fraud Attempt

At 4:45 PM on Friday you receive an urgent email from your "CEO" asking for a
confidential wire transfer of $47,500 to a new vendor.

## Red Flags
1. The sender uses a Gmail address, not the company domain.
2. Urgency right before the weekend.
3. A request for secrecy that bypasses normal approvals.

## Proper Response
Verify through a known phone number, follow the wire transfer protocol and
report the email to security.
""",
    },
]

ACHIEVEMENTS: List[Dict[str, Any]] = [
    {
        "title": "Security Fundamentals",
        "description": "Completed the basic security training modules with at least 80% accuracy.",
        "icon": "shield-check",
        "required_xp": 50,
    },
    {
        "title": "Phishing Expert",
        "description": "Successfully identified all phishing attempts in the advanced training module.",
        "icon": "fish-off",
        "required_xp": 100,
    },
    {
        "title": "Perfect Quiz Score",
        "description": "Achieved 100% on a quiz.",
        "icon": "quiz",
        "required_xp": 30,
    },
    {
        "title": "Fast Learner",
        "description": "Completed 5 modules in a week.",
        "icon": "speed",
        "required_xp": 75,
    },
]

THREAT_SCENARIOS: List[Dict[str, Any]] = [
    {
        "title": "Vendor Impersonation Attack",
        "description": "Attackers impersonate trusted vendors requesting urgent system access "
                       "or invoice payments.",
        "content": """# Vendor Impersonation Attack

An email arrives from a supplier you work with, asking you to update their bank
details before the next invoice run, or to grant a "support engineer" remote access.

Warning signs: a lookalike sending domain, a change of payment details by email,
pressure to skip the usual approval.

Call the vendor on the number already on file before changing anything.
""",
        "difficulty": "intermediate",
        "is_new": True,
        "is_trending": False,
    },
    {
        "title": "Executive Whaling Attack",
        "description": "Sophisticated phishing attacks targeting C-level executives for "
                       "financial gain or data theft.",
        "content": """# Executive Whaling Attack

Whaling targets senior staff with messages tailored from public information:
board meetings, acquisitions, travel plans. The request is usually a payment or
a document that looks routine for someone at that level.

Executives and their assistants should confirm unusual requests in person or by
phone, never by replying to the message.
""",
        "difficulty": "advanced",
        "is_new": False,
        "is_trending": True,
    },
]

POLICIES: List[Dict[str, Any]] = [
    {
        "title": "Data Classification Policy",
        "description": "Guidelines for classifying and handling sensitive information",
        "content": "Label every document Public, Internal, Confidential or Restricted. "
                   "Confidential and Restricted data is only shared with named recipients "
                   "and is never sent to personal email accounts.",
        "category": "data-security",
    },
    {
        "title": "Email Security Guidelines",
        "description": "Procedures for secure email communication",
        "content": "Check the sender address before acting on a request. Do not open "
                   "unexpected attachments. Use the Report Phishing button for anything "
                   "suspicious instead of forwarding it.",
        "category": "communication",
    },
    {
        "title": "Incident Reporting Protocol",
        "description": "Steps to report security incidents",
        "content": "Report suspected incidents to the security team within one hour. "
                   "Do not try to investigate yourself. Note the time, what you saw and "
                   "anything you clicked or entered.",
        "category": "incident-response",
    },
]

GUEST_USER = {"username": "guest", "email": "guest@example.com"}


def _add_missing(model, entries: List[Dict[str, Any]]) -> int:
    existing = {row.title for row in model.query.all()}
    added = 0
    for entry in entries:
        if entry["title"] not in existing:
            db.session.add(model(**entry))
            added += 1
    return added


def seed_catalog(with_guest: bool = True) -> Dict[str, int]:
    """
    Insert any registry rows missing by title.
    Safe to run repeatedly. Returns how many rows of each kind were added.
    """
    added = {
        "modules":      _add_missing(TrainingModule, MODULES),
        "achievements": _add_missing(Achievement, ACHIEVEMENTS),
        "threats":      _add_missing(ThreatScenario, THREAT_SCENARIOS),
        "policies":     _add_missing(OrganizationPolicy, POLICIES),
        "users":        0,
    }

    if with_guest and not User.query.filter_by(email=GUEST_USER["email"]).first():
        db.session.add(User(**GUEST_USER))
        added["users"] += 1

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Seeded catalog: %s", added)
    return added


def register_commands(app):
    @app.cli.command("seed-catalog")
    @click.option("--no-guest", is_flag=True, help="Do not create the guest user.")
    def seed_catalog_command(no_guest):
        """Load the authored modules, achievements, threat scenarios and policies."""
        added = seed_catalog(with_guest=not no_guest)
        click.echo(
            f"Added {added['modules']} modules, {added['achievements']} achievements, "
            f"{added['threats']} threat scenarios, {added['policies']} policies, "
            f"{added['users']} users."
        )
