#!/usr/bin/env python3
"""
Ask the AccessLanka assistant a question from the command line.

Usage:
    python cli.py "What's the nearest restaurant?" 6.9271 79.8612
    python cli.py "Does Ministry of Crab have wheelchair access?"
"""

import asyncio
import sys
from typing import List, Optional

from core.config import settings
from core.database import create_tables, engine
from schemas.chatbot import ChatbotResponse, Coordinate
from services.chatbot_service import chatbot_service
from services.place_ranking import format_distance


def parse_location(args: List[str]) -> Optional[Coordinate]:
    if not args:
        return None
    if len(args) != 2:
        raise ValueError("Location needs both latitude and longitude")
    return Coordinate(latitude=float(args[0]), longitude=float(args[1]))


def render(response: ChatbotResponse) -> str:
    lines = [response.message]
    for index, place in enumerate(response.places, start=1):
        line = f"  {index}. {place.name} ({place.category or 'uncategorized'}) - {place.address}"
        distance_text = format_distance(place.distance)
        if distance_text:
            line += f" [{distance_text}]"
        lines.append(line)
    if response.suggestions:
        lines.append("")
        lines.append("Try asking:")
        lines.extend(f"  - {suggestion}" for suggestion in response.suggestions)
    return "\n".join(lines)


async def ask(message: str, location: Optional[Coordinate]) -> ChatbotResponse:
    """Answer one message, creating the development tables first."""
    try:
        if settings.ENV == "development":
            await create_tables()
        return await chatbot_service.process_message(message, location)
    finally:
        # pooled connections belong to this event loop
        await engine.dispose()


def main(argv: List[str]) -> int:
    if not argv:
        print(__doc__)
        return 1

    try:
        location = parse_location(argv[1:])
    except ValueError as e:
        print(f"❌ {e}")
        return 1

    response = asyncio.run(ask(argv[0], location))
    print(render(response))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
