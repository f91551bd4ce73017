# footcare/dialogue.py
"""Scripted triage conversation used when no language model is configured.

The script has no memory of its own: the stage is derived from how many
messages the client sent (assistant and user turns both count) and the branch
is picked by substring matching on the latest message.
"""
from enum import Enum
from typing import Iterable, Sequence, Tuple

from .utils import contains_any, first_matching


class DialogueStage(Enum):
    FALLBACK = 0
    GREETING = 1
    ASK_EMAIL = 2
    ASK_PHONE = 3
    CATEGORY_MENU = 4
    CATEGORY_FOLLOW_UP = 5
    SYMPTOM_IMPACT = 6
    DIAGNOSIS = 7
    BOOKING = 8
    CONFIRM_BOOKING = 9
    FOLLOW_UP = 10
    RATING = 11
    CLOSING = 12

    def successor(self) -> "DialogueStage":
        if self in (DialogueStage.FALLBACK, DialogueStage.CLOSING):
            return self
        return DialogueStage(self.value + 1)


GREETING = (
    "Hello! I'm your AI Foot Health Assistant at FootCare Clinic. I'm here to help "
    "assess your foot concerns and guide you through our services.\n\n"
    "To get started, may I have your full name?"
)
ASK_EMAIL = (
    "Thank you! Now, could you please provide your email address so we can send you "
    "appointment details and follow-up information?"
)
ASK_PHONE = "Great! And what's the best phone number to reach you at?"
CATEGORY_MENU = (
    "Perfect! Now, let's discuss your foot concern. What type of issue are you "
    "experiencing?\n\n1. Ingrown toenail\n2. Heel pain\n3. Athlete's foot or fungal "
    "infection\n4. Bunions\n5. Plantar fasciitis\n6. General toe pain\n7. Other\n\n"
    "Please describe your main concern."
)

INGROWN_FOLLOW_UP = (
    "I understand you're dealing with what sounds like an ingrown toenail. Let me ask "
    "you a few questions to better understand your situation.\n\n"
    "On a scale of 1-10, how would you rate your pain level? And which toe is affected?"
)
HEEL_FOLLOW_UP = (
    "I see you're experiencing heel pain. This is quite common. Let me gather some "
    "details.\n\nDoes the pain feel worse in the morning when you first stand up? And "
    "how long have you been experiencing this?"
)
FUNGAL_FOLLOW_UP = (
    "It sounds like you might be dealing with a fungal infection like athlete's foot. "
    "Let me learn more.\n\nAre you experiencing itching, peeling skin, or redness? "
    "Where exactly on your foot is it located?"
)
GENERAL_FOLLOW_UP = (
    "Thank you for sharing that. To help you better, could you describe your symptoms "
    "in more detail? For example, when did it start, what does it feel like, and what "
    "activities make it worse or better?"
)
CATEGORY_FOLLOW_UP_RULES = [
    (("ingrown", "toenail", "nail"), INGROWN_FOLLOW_UP),
    (("heel", "bottom"), HEEL_FOLLOW_UP),
    (("itch", "athlete", "fungus"), FUNGAL_FOLLOW_UP),
]

SYMPTOM_IMPACT = (
    "Thank you for that information. Have you noticed any swelling, redness, or warmth "
    "in the affected area? Also, has this issue been affecting your daily activities "
    "or sleep?"
)

INGROWN_DIAGNOSIS = (
    "Based on your symptoms, this appears to be an ingrown toenail. This occurs when "
    "the nail edge grows into the surrounding skin, causing pain, swelling, and "
    "sometimes infection."
)
HEEL_DIAGNOSIS = (
    "Based on your symptoms, this sounds like it could be plantar fasciitis - "
    "inflammation of the tissue connecting your heel to your toes. The morning pain is "
    "a classic sign."
)
FUNGAL_DIAGNOSIS = (
    "Based on your symptoms, this appears to be a fungal infection (athlete's foot). "
    "This is caused by fungi that thrive in warm, moist environments."
)
CARE_RECOMMENDATIONS = (
    "**Initial Care Recommendations:**\n"
    "• Keep the area clean and dry\n"
    "• Avoid tight footwear\n"
    "• Soak in warm water with Epsom salt (15 minutes daily)\n"
    "• Apply antibiotic ointment if there's any redness\n"
    "• Elevate your foot when resting\n\n"
    "**Important:** While these can help with mild cases, I strongly recommend seeing "
    "our foot health specialist for proper treatment, especially if symptoms worsen.\n\n"
    "Would you like to schedule an appointment with one of our podiatrists?"
)

BOOKING_KEYWORDS = ("yes", "book", "appointment", "schedule")
APPOINTMENT_SLOTS = (
    "Excellent! I can help you book an appointment. We have availability:\n\n"
    "• Tomorrow at 2:00 PM\n• Wednesday at 10:00 AM\n• Thursday at 3:30 PM\n"
    "• Friday at 9:00 AM\n\nWhich time works best for you?"
)

SLOT_KEYWORDS = ("tomorrow", "wednesday", "thursday", "friday", "am", "pm")
BOOKING_CONFIRMED = (
    "Perfect! I've scheduled your appointment. You'll receive a confirmation email "
    "shortly with all the details.\n\nWould you like to schedule a follow-up "
    "appointment in 2 weeks to check on your progress? Follow-ups are important for "
    "monitoring your recovery."
)

AGREE_KEYWORDS = ("yes", "sure", "okay")
RATING_REQUEST = (
    "Before we finish, I'd love to get your feedback. On a scale of 1-5 stars, how "
    "would you rate your experience with our AI triage system today?"
)
FOLLOW_UP_NOTED = (
    "Great! I've noted a follow-up appointment for 2 weeks from your initial visit. "
    "We'll send you a reminder.\n\n" + RATING_REQUEST
)
FOLLOW_UP_DECLINED = (
    "No problem! You can always schedule a follow-up later if needed.\n\n" + RATING_REQUEST
)

FEEDBACK_REQUEST = (
    "Thank you for your rating! Is there anything specific you'd like to share about "
    "your experience - what went well or what we could improve?"
)
CLOSING = (
    "Thank you so much for your feedback! It helps us improve our service.\n\n"
    "Your session has been saved to your patient portal where you can:\n"
    "• View your diagnosis and recommendations\n"
    "• Access your appointment details\n"
    "• Message our team\n"
    "• Track your treatment progress\n\n"
    "Take care, and we look forward to seeing you at your appointment! "
    "Feel better soon! 🦶"
)
FALLBACK = "I'm here to help! Could you tell me more about your concern?"


def stage_for(message_count: int) -> DialogueStage:
    if message_count >= DialogueStage.CLOSING.value:
        return DialogueStage.CLOSING
    if message_count < 1:
        return DialogueStage.FALLBACK
    return DialogueStage(message_count)


def diagnose(history: Iterable[str]) -> str:
    # every message counts, the assistant's own turns included
    texts = [h.lower() for h in history]
    if any("ingrown" in t for t in texts):
        return INGROWN_DIAGNOSIS
    if any("heel" in t for t in texts):
        return HEEL_DIAGNOSIS
    return FUNGAL_DIAGNOSIS


def transition(
    stage: DialogueStage, utterance: str, history: Sequence[str] = ()
) -> Tuple[DialogueStage, str]:
    """Answer ``utterance`` at ``stage``.

    Returns the stage the reply leads into and the reply text. Branches that
    fall through to the generic prompt return ``DialogueStage.FALLBACK``.
    """
    text = utterance.lower()
    advance = stage.successor()

    if stage is DialogueStage.GREETING:
        return advance, GREETING
    if stage is DialogueStage.ASK_EMAIL:
        return advance, ASK_EMAIL
    if stage is DialogueStage.ASK_PHONE:
        return advance, ASK_PHONE
    if stage is DialogueStage.CATEGORY_MENU:
        return advance, CATEGORY_MENU
    if stage is DialogueStage.CATEGORY_FOLLOW_UP:
        return advance, first_matching(text, CATEGORY_FOLLOW_UP_RULES, GENERAL_FOLLOW_UP)
    if stage is DialogueStage.SYMPTOM_IMPACT:
        return advance, SYMPTOM_IMPACT
    if stage is DialogueStage.DIAGNOSIS:
        return advance, f"{diagnose([*history, utterance])}\n\n{CARE_RECOMMENDATIONS}"
    if stage is DialogueStage.BOOKING and contains_any(text, BOOKING_KEYWORDS):
        return advance, APPOINTMENT_SLOTS
    if stage is DialogueStage.CONFIRM_BOOKING and contains_any(text, SLOT_KEYWORDS):
        return advance, BOOKING_CONFIRMED
    if stage is DialogueStage.FOLLOW_UP:
        if contains_any(text, AGREE_KEYWORDS):
            return advance, FOLLOW_UP_NOTED
        return advance, FOLLOW_UP_DECLINED
    if stage is DialogueStage.RATING:
        return advance, FEEDBACK_REQUEST
    if stage is DialogueStage.CLOSING:
        return advance, CLOSING
    return DialogueStage.FALLBACK, FALLBACK


def generate_scripted_reply(messages) -> str:
    """Reply to a chat history of ``{"role", "content"}`` items (dicts or models)."""
    contents = [_content(m) for m in messages]
    utterance = contents[-1] if contents else ""
    _, reply = transition(stage_for(len(contents)), utterance, contents)
    return reply


def _content(message) -> str:
    if isinstance(message, dict):
        return message.get("content") or ""
    return getattr(message, "content", "") or ""
