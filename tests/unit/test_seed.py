"""
Unit tests for the sample data loader.
"""

import pytest

from backend.app.repositories.entities import CourseRepository, PublicationRepository
from backend.app.repositories.profile import ProfileRepository
from backend.scripts.seed import SAMPLE_COURSES, SAMPLE_PROJECTS, SAMPLE_PUBLICATIONS, seed


class TestSeed:
    @pytest.mark.asyncio
    async def test_loads_every_sample_record(self, fake_db):
        # Act
        counts = await seed(fake_db)

        # Assert
        assert counts == {
            "profiles": 1,
            "publications": len(SAMPLE_PUBLICATIONS),
            "projects": len(SAMPLE_PROJECTS),
            "courses": len(SAMPLE_COURSES),
        }
        profile = await ProfileRepository(fake_db).get()
        assert profile["institution"] == "Indian Institute of Technology Roorkee"
        publications = await PublicationRepository(fake_db).list()
        assert [p["year"] for p in publications] == [2022, 2021, 2020]

    @pytest.mark.asyncio
    async def test_reset_replaces_existing_records(self, fake_db):
        await seed(fake_db)

        await seed(fake_db, reset=True)

        assert len(fake_db["courses"].docs) == len(SAMPLE_COURSES)
        assert len(fake_db["profiles"].docs) == 1

    @pytest.mark.asyncio
    async def test_running_twice_keeps_one_profile(self, fake_db):
        await seed(fake_db)
        await seed(fake_db)

        assert len(fake_db["profiles"].docs) == 1
        assert len(await CourseRepository(fake_db).list()) == 2 * len(SAMPLE_COURSES)
