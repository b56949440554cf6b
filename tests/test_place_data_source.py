import asyncio
from datetime import datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.database import Base
from models.place import Business, Place
from repositories.place import BusinessRepository, PlaceRepository
from schemas.chatbot import BusinessRecord, PlaceFilter, PlaceRecord
from services.chatbot_service import ChatbotService
from services.place_data_source import DatabasePlaceDataSource

from conftest import COLOMBO, north_of

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


def run_with_database(tmp_path, scenario):
    """Create a throwaway SQLite database, seed it, and run scenario(session_factory)."""

    async def runner():
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'places.db'}")
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            async with session_factory() as session:
                await seed(session)
            return await scenario(session_factory)
        finally:
            await engine.dispose()

    return asyncio.run(runner())


async def seed(session):
    lat, lng = north_of(COLOMBO, 500)
    session.add_all([
        Place(id="p-old", name="Viharamahadevi Park", address="Colombo 07", category="parks",
              latitude=6.9130, longitude=79.8620, accessibility_features=["ramp"], verified=True,
              created_at=BASE_TIME),
        Place(id="p-new", name="Beira Lake Walk", address="Colombo 02", category="parks",
              latitude=6.9300, longitude=79.8500, created_at=BASE_TIME + timedelta(hours=1)),
        Place(id="p-museum", name="National Museum", address="Sir Marcus Fernando Mawatha", category="museums",
              latitude=6.9100, longitude=79.8610, created_at=BASE_TIME + timedelta(hours=2)),
    ])
    session.add_all([
        Business(id="b-crab", name="Ministry of Crab", address="Old Dutch Hospital, Colombo 01",
                 category="restaurants", latitude=lat, longitude=lng,
                 accessibility_features=["wheelchair_accessible"], status="approved", verified=True,
                 created_at=BASE_TIME),
    ])
    await session.commit()


def test_repository_filters_by_category_newest_first(tmp_path):
    async def scenario(session_factory):
        async with session_factory() as session:
            return await PlaceRepository(session).list_by_filter(PlaceFilter(category="parks"))

    rows = run_with_database(tmp_path, scenario)
    assert [row.id for row in rows] == ["p-new", "p-old"]


def test_repository_filters_by_verified(tmp_path):
    async def scenario(session_factory):
        async with session_factory() as session:
            return await PlaceRepository(session).list_by_filter(PlaceFilter(verified=True))

    rows = run_with_database(tmp_path, scenario)
    assert [row.id for row in rows] == ["p-old"]


def test_repository_paginates(tmp_path):
    async def scenario(session_factory):
        async with session_factory() as session:
            repo = PlaceRepository(session)
            first = await repo.list_by_filter(PlaceFilter(limit=1))
            rest = await repo.list_by_filter(PlaceFilter(offset=1))
            return first, rest

    first, rest = run_with_database(tmp_path, scenario)
    assert [row.id for row in first] == ["p-museum"]
    assert [row.id for row in rest] == ["p-new", "p-old"]


def test_blank_category_means_no_filter(tmp_path):
    async def scenario(session_factory):
        async with session_factory() as session:
            return await PlaceRepository(session).list_by_filter(PlaceFilter(category=""))

    rows = run_with_database(tmp_path, scenario)
    assert len(rows) == 3


def test_business_repository_filters(tmp_path):
    async def scenario(session_factory):
        async with session_factory() as session:
            repo = BusinessRepository(session)
            return (
                await repo.list_by_filter(PlaceFilter(category="restaurants", verified=True)),
                await repo.list_by_filter(PlaceFilter(verified=False)),
            )

    verified, unverified = run_with_database(tmp_path, scenario)
    assert [row.id for row in verified] == ["b-crab"]
    assert unverified == []


def test_data_source_returns_source_records(tmp_path):
    async def scenario(session_factory):
        source = DatabasePlaceDataSource(session_factory)
        return (
            await source.list_places(PlaceFilter(category="museums")),
            await source.list_businesses(PlaceFilter()),
            await source.ping(),
        )

    places, businesses, alive = run_with_database(tmp_path, scenario)
    assert isinstance(places[0], PlaceRecord)
    assert [p.id for p in places] == ["p-museum"]
    assert places[0].accessibility_features is None
    assert isinstance(businesses[0], BusinessRecord)
    assert businesses[0].status == "approved"
    assert alive is True


def test_chatbot_end_to_end_over_database(tmp_path):
    async def scenario(session_factory):
        service = ChatbotService(DatabasePlaceDataSource(session_factory))
        return (
            await service.process_message("Does Ministry of Crab have wheelchair access?"),
            await service.process_message("What's the nearest restaurant?", COLOMBO),
            await service.process_message("Show me parks"),
        )

    specific, nearest, parks = run_with_database(tmp_path, scenario)

    assert specific.message == 'I found "Ministry of Crab". Yes, it has wheelchair accessible.'
    assert specific.places[0].type == "business"

    assert [p.id for p in nearest.places] == ["b-crab"]
    assert abs(nearest.places[0].distance - 500) < 1

    assert [p.id for p in parks.places] == ["p-new", "p-old"]
    assert parks.places[1].features == ["ramp"]
