"""
Chatbot service: answers free-text questions about accessible places.

Flow per message:
- classify the text into an Intent
- route the intent to its handler
- handlers fetch places and businesses together, normalize them into one
  shape, filter, rank by distance when the user's location is known, and
  compose the reply with follow-up suggestions

Handlers let fetch errors propagate; process_message is the only place that
turns an exception into a reply.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from core.config import settings
from core.logging import get_logger
from schemas.chatbot import ChatbotResponse, Coordinate, Intent, IntentType, NormalizedPlace, PlaceFilter
from services.intent_classifier import classify
from services.place_data_source import DatabasePlaceDataSource, PlaceDataSource
from services.place_ranking import normalize_place, rank_by_distance

logger = get_logger(__name__)

Location = Union[Coordinate, Mapping[str, Any], None]
Handler = Callable[[Intent, Optional[Coordinate]], Awaitable[ChatbotResponse]]

ERROR_MESSAGE = "I'm sorry, I encountered an error while processing your request. Please try again."

GREETING_MESSAGE = (
    "Hello! I'm your AccessLanka assistant. I can help you find accessible places, "
    "restaurants, hotels, and more. What would you like to know?"
)

HELP_MESSAGE = (
    "I can help you with:\n"
    "\n"
    "• Finding nearest places (restaurants, hotels, parks, etc.)\n"
    "• Checking accessibility features of specific places\n"
    "• Recommending places with accessibility features\n"
    "• Searching for places by category\n"
    "\n"
    "Try asking me questions like:\n"
    "\"What's the nearest restaurant?\"\n"
    "\"Does [place name] have wheelchair access?\"\n"
    "\"Show me hotels with accessibility features\""
)

LOCATION_REQUIRED_MESSAGE = "To find places near you, I need your location. Please enable location services."

DEFAULT_SUGGESTIONS = (
    "What's the nearest restaurant?",
    "Show me hotels with wheelchair access",
    "Find accessible parks nearby",
    "Suggest good museums",
)


def get_default_suggestions() -> List[str]:
    """Fixed starter questions. Returns a new list on every call."""
    return list(DEFAULT_SUGGESTIONS)


def _singular(category: Optional[str], fallback: str = "place") -> str:
    if not category:
        return fallback
    return category[:-1] if category.endswith("s") else category


def _feature_label(tag: str) -> str:
    return tag.replace("_", " ")


def _has_any_feature(place: NormalizedPlace, features: List[str]) -> bool:
    return any(feature in place.features for feature in features)


class ChatbotService:
    """Rule-based assistant over the places and businesses collections."""

    def __init__(
        self,
        data_source: PlaceDataSource,
        max_results: Optional[int] = None,
        fetch_timeout: Optional[float] = None,
    ):
        self.data_source = data_source
        self.max_results = max_results or settings.CHATBOT_MAX_RESULTS
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else settings.CHATBOT_FETCH_TIMEOUT_SECONDS
        self._handlers: Dict[IntentType, Handler] = {
            IntentType.NEAREST: self.handle_nearest,
            IntentType.ACCESSIBILITY: self.handle_accessibility,
            IntentType.CATEGORY: self.handle_category,
            IntentType.SPECIFIC_PLACE: self.handle_specific_place,
            IntentType.RECOMMENDATION: self.handle_recommendation,
            IntentType.FEATURES: self.handle_features,
            IntentType.GREETING: self.handle_greeting,
            IntentType.HELP: self.handle_help,
        }

    @staticmethod
    def get_default_suggestions() -> List[str]:
        return get_default_suggestions()

    async def process_message(self, text: str, location: Location = None) -> ChatbotResponse:
        """
        Answer a chat message.

        Args:
            text: Raw user message.
            location: User coordinate, as a Coordinate or a mapping with
                latitude/longitude, or None when unknown.

        Returns:
            ChatbotResponse. Never raises; failures become an apology reply.
        """
        try:
            coordinate = self._coerce_location(location)
            intent = classify(text)
            response = await self.route(intent, coordinate)
            logger.info(
                "Chat message processed",
                intent_type=intent.type.value,
                category=intent.category,
                has_location=coordinate is not None,
                results=len(response.places),
            )
            return response
        except Exception as e:
            logger.error("Error processing message", error=str(e), exc_info=True)
            return ChatbotResponse(
                message=ERROR_MESSAGE,
                places=[],
                suggestions=get_default_suggestions(),
            )

    @staticmethod
    def _coerce_location(location: Location) -> Optional[Coordinate]:
        if location is None or isinstance(location, Coordinate):
            return location
        return Coordinate.model_validate(dict(location))

    async def route(self, intent: Intent, location: Optional[Coordinate] = None) -> ChatbotResponse:
        """Dispatch an intent to its handler; anything unmapped is a general search."""
        handler = self._handlers.get(intent.type)
        if handler is None:
            return await self.handle_general(intent.query, location)
        return await handler(intent, location)

    # ---- candidates ----

    async def fetch_candidates(self, place_filter: Optional[PlaceFilter] = None) -> List[NormalizedPlace]:
        """Fetch places and businesses together and normalize them, places first."""
        place_filter = place_filter or PlaceFilter()
        fetches = asyncio.gather(
            self.data_source.list_places(place_filter),
            self.data_source.list_businesses(place_filter),
        )
        if self.fetch_timeout:
            places, businesses = await asyncio.wait_for(fetches, timeout=self.fetch_timeout)
        else:
            places, businesses = await fetches

        return [
            *(normalize_place(record, "place") for record in places),
            *(normalize_place(record, "business") for record in businesses),
        ]

    def _rank_if_located(
        self, places: List[NormalizedPlace], location: Optional[Coordinate]
    ) -> List[NormalizedPlace]:
        if location is None:
            return places
        return rank_by_distance(places, location)

    # ---- handlers ----

    async def handle_nearest(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        if location is None:
            return ChatbotResponse(
                message=LOCATION_REQUIRED_MESSAGE,
                places=[],
                suggestions=["Show me restaurants", "Find hotels with accessibility"],
            )

        category = intent.category
        category_name = _singular(category)

        places = await self.fetch_candidates()
        if category:
            places = [place for place in places if place.category == category]

        nearest = rank_by_distance(places, location)[:self.max_results]
        count = len(nearest)

        if count > 0:
            message = f"I found {count} {category_name}{'s' if count > 1 else ''} near you:"
        else:
            message = f"I couldn't find any {category_name}s near your location."

        return ChatbotResponse(
            message=message,
            places=nearest,
            suggestions=[
                "Show me hotels nearby",
                "Find accessible restaurants",
                "What parks are close?",
            ],
        )

    async def handle_accessibility(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        places = await self.fetch_candidates()

        if intent.category:
            places = [place for place in places if place.category == intent.category]

        if intent.accessibility_features:
            places = [place for place in places if _has_any_feature(place, intent.accessibility_features)]
        else:
            # no specific feature asked for: anything with at least one feature
            places = [place for place in places if place.features]

        results = self._rank_if_located(places, location)[:self.max_results]

        if intent.accessibility_features:
            feature_text = _feature_label(", ".join(intent.accessibility_features))
        else:
            feature_text = "accessibility features"

        if results:
            message = f"I found {len(results)} places with {feature_text}:"
        else:
            message = "I couldn't find places matching your accessibility requirements."

        return ChatbotResponse(
            message=message,
            places=results,
            suggestions=[
                "Hotels with wheelchair access",
                "Restaurants with ramps",
                "Parks with accessible parking",
            ],
        )

    async def handle_category(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        category = intent.category
        places = await self.fetch_candidates(PlaceFilter(category=category))
        results = self._rank_if_located(places, location)[:self.max_results]

        label = category or "places"
        if results:
            message = f"Here are {len(results)} {label}:"
        else:
            message = f"I couldn't find any {label} in the database."

        return ChatbotResponse(
            message=message,
            places=results,
            suggestions=[
                "Show wheelchair accessible options",
                "Find nearby alternatives",
                "What features do they have?",
            ],
        )

    async def handle_specific_place(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        place_name = intent.place_name
        if not place_name:
            return await self.handle_general("", location)

        needle = place_name.lower()
        matches = [place for place in await self.fetch_candidates() if needle in place.name.lower()]

        if not matches:
            return ChatbotResponse(
                message=f'I couldn\'t find "{place_name}" in our database. Try searching for similar places.',
                places=[],
                suggestions=[
                    "Show me all restaurants",
                    "Find accessible hotels",
                    "What parks are available?",
                ],
            )

        place = matches[0]
        message = f'I found "{place.name}". '
        if intent.accessibility_features:
            feature_name = _feature_label(intent.accessibility_features[0])
            if _has_any_feature(place, intent.accessibility_features):
                message += f"Yes, it has {feature_name}."
            else:
                message += f"Unfortunately, it doesn't have {feature_name} listed."
        elif place.features:
            message += "Accessibility features: " + ", ".join(_feature_label(f) for f in place.features)
        else:
            message += "Accessibility features: No specific accessibility features listed"

        return ChatbotResponse(
            message=message,
            places=[place],
            suggestions=[
                "Show me similar places",
                "Find alternatives nearby",
                "What are the reviews?",
            ],
        )

    async def handle_recommendation(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        places = await self.fetch_candidates()

        if intent.category:
            places = [place for place in places if place.category == intent.category]

        if intent.accessibility_features:
            places = [place for place in places if _has_any_feature(place, intent.accessibility_features)]

        # verified first; distance ranking below supersedes this when located
        places = sorted(places, key=lambda place: not place.verified)
        results = self._rank_if_located(places, location)[:self.max_results]

        category_text = _singular(intent.category)
        feature_text = " with accessibility features" if intent.accessibility_features else ""

        if results:
            message = f"Here are my top recommendations for {category_text}s{feature_text}:"
        else:
            message = f"I couldn't find suitable {category_text}s to recommend."

        return ChatbotResponse(
            message=message,
            places=results,
            suggestions=[
                "Show me more options",
                "Filter by wheelchair access",
                "Find alternatives nearby",
            ],
        )

    async def handle_features(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        return await self.handle_accessibility(intent, location)

    async def handle_greeting(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        return ChatbotResponse(
            message=GREETING_MESSAGE,
            places=[],
            suggestions=get_default_suggestions(),
        )

    async def handle_help(self, intent: Intent, location: Optional[Coordinate]) -> ChatbotResponse:
        return ChatbotResponse(
            message=HELP_MESSAGE,
            places=[],
            suggestions=get_default_suggestions(),
        )

    async def handle_general(self, query: str, location: Optional[Coordinate]) -> ChatbotResponse:
        """Free-text search across name, address, description and category."""
        places = await self.fetch_candidates()

        if query:
            places = [
                place for place in places
                if query in place.name.lower()
                or query in place.address.lower()
                or query in place.description.lower()
                or query in (place.category or "").lower()
            ]

        if location is not None and places:
            places = rank_by_distance(places, location)

        results = places[:self.max_results]

        if results:
            message = f"I found {len(results)} places matching your search:"
        else:
            message = (
                "I couldn't find what you're looking for. "
                "Try asking about specific categories like restaurants, hotels, or parks."
            )

        return ChatbotResponse(
            message=message,
            places=results,
            suggestions=get_default_suggestions(),
        )


chatbot_service = ChatbotService(DatabasePlaceDataSource())
