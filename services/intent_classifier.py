"""
Rule-based intent classification for chat messages.

Greeting and help short-circuit. The remaining type rules are independent
gates evaluated in INTENT_RULES order; every gate that matches overwrites the
type, so the last matching gate wins. Feature, category and place-name
extraction run as separate passes.
"""

import re
from typing import Dict, List, Optional, Pattern, Tuple

from core.logging import get_logger
from schemas.chatbot import Intent, IntentType

logger = get_logger(__name__)


GREETING_PATTERN = re.compile(
    r"^(hi|hello|hey|greetings|good morning|good afternoon|good evening)", re.IGNORECASE
)
HELP_PATTERN = re.compile(r"help|what can you|how do|guide|assist", re.IGNORECASE)

ACCESSIBILITY_PATTERN = re.compile(
    r"wheelchair|ramp|accessible|accessibility|disabled|mobility|visual|hearing|braille|sign language",
    re.IGNORECASE,
)

INTENT_RULES: List[Tuple[Pattern[str], IntentType]] = [
    (re.compile(r"nearest|nearby|close|near me|around me|closest", re.IGNORECASE), IntentType.NEAREST),
    (ACCESSIBILITY_PATTERN, IntentType.ACCESSIBILITY),
    (re.compile(r"suggest|recommend|good|best|top|popular", re.IGNORECASE), IntentType.RECOMMENDATION),
    (re.compile(r"with|has|have|features|facilities", re.IGNORECASE), IntentType.FEATURES),
]

# Scanned only when ACCESSIBILITY_PATTERN matched. Independent of each other.
ACCESSIBILITY_FEATURE_PATTERNS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"wheelchair", re.IGNORECASE), "wheelchair_accessible"),
    (re.compile(r"ramp", re.IGNORECASE), "ramp"),
    (re.compile(r"elevator|lift", re.IGNORECASE), "elevator"),
    (re.compile(r"braille", re.IGNORECASE), "braille_signage"),
    (re.compile(r"audio|visual|hearing", re.IGNORECASE), "audio_assistance"),
    (re.compile(r"parking", re.IGNORECASE), "accessible_parking"),
]

# Scan order matters: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "restaurant": ["restaurant", "food", "eat", "dining", "cafe", "coffee"],
    "hotel": ["hotel", "accommodation", "stay", "lodge", "resort"],
    "park": ["park", "garden", "outdoor", "nature"],
    "museum": ["museum", "gallery", "exhibition", "art"],
    "shopping": ["shop", "mall", "store", "market", "shopping"],
    "transport": ["transport", "bus", "train", "station", "taxi"],
    "healthcare": ["hospital", "clinic", "medical", "doctor", "pharmacy"],
    "entertainment": ["cinema", "theater", "movie", "entertainment", "fun"],
    "education": ["school", "university", "college", "education"],
    "government": ["government", "office", "public", "municipal"],
}

QUOTED_NAME_PATTERN = re.compile(r"\"([^\"]+)\"|'([^']+)'")
PLACE_NAME_PATTERNS: List[Pattern[str]] = [
    re.compile(r"does\s+([^?]+?)\s+(have|has|provide)", re.IGNORECASE),
    re.compile(r"is\s+([^?]+?)\s+(accessible|wheelchair)", re.IGNORECASE),
]

MIN_KEYWORD_LENGTH = 4


def extract_accessibility_features(query: str) -> List[str]:
    return [tag for pattern, tag in ACCESSIBILITY_FEATURE_PATTERNS if pattern.search(query)]


def detect_category(query: str) -> Optional[str]:
    """Return the plural category tag for the first matching keyword set."""
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in query for keyword in keywords):
            return category + "s"
    return None


def extract_place_name(query: str) -> Optional[str]:
    """Quoted text first, then 'does X have' / 'is X accessible' phrasing."""
    quoted = QUOTED_NAME_PATTERN.search(query)
    if quoted:
        return quoted.group(1) or quoted.group(2)

    for pattern in PLACE_NAME_PATTERNS:
        match = pattern.search(query)
        if match:
            return match.group(1).strip()
    return None


def extract_keywords(query: str) -> List[str]:
    return [word for word in query.split(" ") if len(word) >= MIN_KEYWORD_LENGTH]


def classify(message: str) -> Intent:
    """Classify a raw chat message into an Intent."""
    query = message.lower().strip()
    intent = Intent(query=query)

    if GREETING_PATTERN.search(query):
        intent.type = IntentType.GREETING
        return intent

    if HELP_PATTERN.search(query):
        intent.type = IntentType.HELP
        return intent

    for pattern, intent_type in INTENT_RULES:
        if pattern.search(query):
            intent.type = intent_type

    if ACCESSIBILITY_PATTERN.search(query):
        intent.accessibility_features = extract_accessibility_features(query)

    intent.category = detect_category(query)
    if intent.category and intent.type == IntentType.GENERAL:
        intent.type = IntentType.CATEGORY

    place_name = extract_place_name(query)
    if place_name is not None:
        intent.place_name = place_name
        intent.type = IntentType.SPECIFIC_PLACE

    intent.keywords = extract_keywords(query)

    logger.debug(
        "Intent classified",
        intent_type=intent.type.value,
        category=intent.category,
        features=intent.accessibility_features,
        place_name=intent.place_name,
    )
    return intent
