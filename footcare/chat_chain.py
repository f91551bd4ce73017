# footcare/chat_chain.py
import os
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from .dialogue import generate_scripted_reply

logger = logging.getLogger(__name__)

DEMO_KEY = "demo-key"
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
MODEL_NAME = os.getenv("OPENAI_MODEL", "gpt-4-turbo-preview")


def _timeout_from_env() -> Optional[float]:
    raw = os.getenv("LLM_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"LLM_TIMEOUT must be a number of seconds, got {raw!r}") from None


LLM_TIMEOUT = _timeout_from_env()

EMPTY_REPLY = "I apologize, but I encountered an error. Please try again."

SYSTEM_PROMPT = """You are an AI Foot Health Practitioner for FootCare Clinic. Your role is to:

1. Collect patient information (name, email, phone)
2. Identify the foot issue category (ingrown toenail, plantar fasciitis, athlete's foot, bunions, heel pain, toe pain, nail fungus, other)
3. Ask detailed questions about symptoms, duration, severity, and impact on daily life
4. Provide a preliminary diagnosis for common foot conditions
5. Offer initial care recommendations
6. Help schedule appointments when needed
7. Arrange follow-ups for ongoing treatment
8. Collect satisfaction feedback at the end

Guidelines:
- Be professional, empathetic, and reassuring
- Ask one question at a time to avoid overwhelming the patient
- For ingrown toenails: Ask about pain level, swelling, redness, discharge, which toe, how long
- For plantar fasciitis: Ask about heel pain, morning stiffness, activity levels
- For athlete's foot: Ask about itching, peeling, location, moisture
- Always recommend seeing a professional for severe symptoms
- Be clear that this is preliminary guidance, not a replacement for professional care
- When booking appointments, offer available time slots
- After providing diagnosis and recommendations, ask if they'd like to book an appointment
- At the end, ask for satisfaction rating (1-5) and feedback

Keep responses concise and conversational. Guide the patient through the process step by step."""


def is_demo_mode() -> bool:
    return not OPENAI_API_KEY or OPENAI_API_KEY == DEMO_KEY


def _call_chat_completion_http(messages: List[Dict[str, str]]) -> str:
    url = f"{OPENAI_BASE_URL.rstrip('/')}/chat/completions"
    payload = {
        "model": MODEL_NAME,
        "messages": [{"role": "system", "content": SYSTEM_PROMPT}, *messages],
        "temperature": 0.7,
        "max_tokens": 500,
    }
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {OPENAI_API_KEY}",
    }
    resp = requests.post(url, json=payload, headers=headers, timeout=LLM_TIMEOUT)
    resp.raise_for_status()
    data = resp.json()
    choices = data.get("choices") or []
    if not choices:
        return ""
    return (choices[0].get("message") or {}).get("content") or ""


def _as_dict(message: Any) -> Dict[str, str]:
    if isinstance(message, dict):
        return {"role": message["role"], "content": message["content"]}
    return {"role": message.role, "content": message.content}


def generate_reply(messages) -> Tuple[str, bool]:
    """Next assistant message for ``messages`` and whether demo mode produced it."""
    if is_demo_mode():
        return generate_scripted_reply(messages), True

    logger.info("requesting completion from %s (%d messages)", MODEL_NAME, len(messages))
    content = _call_chat_completion_http([_as_dict(m) for m in messages])
    return content or EMPTY_REPLY, False
