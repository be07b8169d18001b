"""
awarebot/assistant/utils.py

Chat answers for the awareness assistant. The language model is a plain
text-completion call to Groq; when no key is configured or the call fails,
the reply comes from a keyword table instead so the chat never goes dark.
"""
from __future__ import annotations

import logging
from typing import Tuple

from flask import current_app
from groq import Groq

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are AwareBot, an assistant specialising in social engineering awareness and cybersecurity education.
Your goal is to help users understand, identify, and protect against social engineering attacks.

- Explain attack types (phishing, pretexting, baiting, tailgating, ...)
- Give recognition tips and prevention strategies
- Encourage reporting suspicious activity
- Be informative but concise, and focus on education, not fear
- If asked about something unrelated, gently redirect to security awareness topics"""

# ── Fallback answers ──────────────────────────────────────────────────────────
# (keywords, answer); first entry with any keyword in the message wins.

FALLBACK_RESPONSES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (
        ("phishing", "email", "suspicious"),
        "Phishing attempts often arrive as emails that look legitimate but contain "
        "suspicious links or attachments. Check the sender's address, hover over links "
        "before clicking and never send sensitive information by email unless you are "
        "certain who receives it.",
    ),
    (
        ("password", "authentication", "2fa", "two factor"),
        "Use a unique, long password for every account, keep them in a password manager "
        "and turn on two-factor authentication wherever you can. Never share a password, "
        "even with someone who says they are from IT support.",
    ),
    (
        ("pretexting", "impersonation", "pretend"),
        "Pretexting uses an invented scenario to get information or access. Attackers pose "
        "as colleagues, IT staff or authority figures. Verify the person's identity through "
        "an official channel before you share anything.",
    ),
    (
        ("baiting", "usb", "free", "offer"),
        "Baiting lures victims with something tempting: a free download or a USB drive "
        "left in the car park. Never plug in unknown devices or install software from "
        "unverified sources.",
    ),
    (
        ("tailgating", "piggybacking", "badge", "door"),
        "Tailgating is following an authorised person into a restricted area. Politely ask "
        "unbadged people to use reception or security, and report the attempt.",
    ),
    (
        ("vishing", "voice", "call", "phone"),
        "Vishing is phishing by phone. Callers impersonate banks, agencies or tech support. "
        "Hang up and call the organisation back on its official number.",
    ),
    (
        ("report", "incident", "fell for", "clicked"),
        "If you think you have been targeted, stop interacting, report it to your security "
        "team straight away and change any credentials you may have exposed.",
    ),
)

DEFAULT_RESPONSE = (
    "Social engineering attacks exploit human psychology rather than technical "
    "vulnerabilities. Verify requests through a separate channel, be skeptical of "
    "urgency, protect your personal information and report anything suspicious. Try "
    "asking about phishing, passwords, pretexting or tailgating."
)


def fallback_response(message: str) -> str:
    lowered = message.lower()
    for keywords, answer in FALLBACK_RESPONSES:
        if any(k in lowered for k in keywords):
            return answer
    return DEFAULT_RESPONSE


def _groq_client():
    api_key = current_app.config.get("GROQ_API_KEY")
    if not api_key:
        return None
    return Groq(api_key=api_key)


def get_completion(message: str) -> str:
    client = _groq_client()
    if client is None:
        logger.debug("GROQ_API_KEY not configured, using fallback response")
        return fallback_response(message)

    try:
        response = client.chat.completions.create(
            model=current_app.config.get("GROQ_MODEL", "llama3-8b-8192"),
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user",   "content": message},
            ],
            temperature=0.7,
            max_tokens=1000,
        )
        reply = (response.choices[0].message.content or "").strip()
    except Exception:
        logger.exception("Groq completion failed, using fallback response")
        return fallback_response(message)

    return reply or fallback_response(message)
