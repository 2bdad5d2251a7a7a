"""
Load sample portfolio content into the configured MongoDB database.

Usage:
    python -m backend.scripts.seed            # add the sample records
    python -m backend.scripts.seed --reset    # clear the collections first

Records go through the repositories, so they are validated exactly like
admin writes over HTTP.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, Optional, Sequence

from dotenv import load_dotenv

from backend.app.core.config import get_settings
from backend.app.core.db.mongo import MongoConnectionCache
from backend.app.observability.logging import log_event, setup_logging
from backend.app.repositories.entities import CourseRepository, ProjectRepository, PublicationRepository
from backend.app.repositories.profile import ProfileRepository

SAMPLE_PROFILE = {
    "name": "Dr. Sanjeev Manhas",
    "title": "Professor, Microelectronics & VLSI",
    "email": "manhas@iitr.ac.in",
    "phone": "+91-1332-285082",
    "office": "ECE Department, IIT Roorkee",
    "department": "Electronics and Communication Engineering",
    "university": "Indian Institute of Technology Roorkee",
    "bio": (
        "Leading researcher in micro/nanoelectronics with focus on semiconductor device "
        "modeling, simulation, fabrication and characterization."
    ),
    "education": [
        {"degree": "Ph.D. in Microelectronics", "institution": "IIT Delhi", "year": 2002},
        {"degree": "M.Tech in Solid State Materials", "institution": "IIT Delhi", "year": 1998},
        {"degree": "B.E. in Electronics & Communication Engineering", "institution": "University of Roorkee", "year": 1996},
    ],
    "researchInterests": [
        "Micro/Nanoelectronics Device Modeling",
        "Semiconductor Device Fabrication",
        "Compact Model Development for Circuit Simulation",
        "Nanoscale CMOS Devices and Technology",
    ],
}

SAMPLE_PUBLICATIONS = [
    {
        "title": "Analysis and Modeling of Drain Current Characteristics in Nanoscale SOI MOSFET",
        "authors": "S. Manhas, M. Singh, D. Sharma",
        "category": "journal",
        "venue": "IEEE Transactions on Electron Devices",
        "year": 2022,
        "doi": "10.1109/TED.2022.1234567",
        "tags": ["modeling", "SOI", "MOSFET"],
    },
    {
        "title": "Compact Model for Tunnel FET with Gate Overlap for Circuit Simulation",
        "authors": "A. Kumar, S. Manhas, P. Singh",
        "category": "journal",
        "venue": "Solid-State Electronics",
        "year": 2021,
        "doi": "10.1016/j.sse.2021.987654",
        "tags": ["TFET", "compact model", "simulation"],
    },
    {
        "title": "Design and Fabrication of High-k Gate Dielectric MOSFET",
        "authors": "S. Manhas, R. Gupta, V. Kumar",
        "category": "journal",
        "venue": "IEEE Electron Device Letters",
        "year": 2020,
        "doi": "10.1109/LED.2020.5678910",
        "tags": ["fabrication", "high-k", "dielectric"],
    },
]

SAMPLE_PROJECTS = [
    {
        "title": "VLSI Design and Fabrication Lab",
        "description": "State-of-the-art laboratory for designing and fabricating integrated circuits.",
        "category": "lab",
        "highlights": [
            "Complete VLSI design flow capabilities",
            "Industry collaboration opportunities",
            "Hands-on training for students",
        ],
        "order": 1,
    },
    {
        "title": "Nano-Scale Device Characterization",
        "description": "Research project focused on characterizing and modeling nano-scale semiconductor devices.",
        "category": "research",
        "highlights": [
            "Novel measurement techniques for sub-10nm devices",
            "Parameter extraction methodologies",
            "Physics-based compact modeling",
        ],
        "order": 2,
    },
]

SAMPLE_COURSES = [
    {
        "code": "ECE305",
        "title": "Advanced VLSI Design",
        "description": "Advanced concepts in VLSI design including low-power techniques and high-performance circuit design.",
        "level": "Graduate",
        "semester": "Fall",
        "year": 2023,
        "highlights": [
            "Industry-standard EDA tools for design and simulation",
            "Hands-on lab sessions for practical implementation",
            "Final project on designing a complete integrated circuit",
        ],
        "order": 1,
    },
    {
        "code": "ECE201",
        "title": "Microelectronics Devices and Circuits",
        "description": "Fundamentals of semiconductor devices and their application in electronic circuits.",
        "level": "Undergraduate",
        "semester": "Spring",
        "year": 2023,
        "highlights": [
            "Device physics and operation principles",
            "Circuit analysis and design techniques",
            "Laboratory component for practical experience",
        ],
        "order": 2,
    },
]

SAMPLE_RECORDS = (
    (PublicationRepository, SAMPLE_PUBLICATIONS),
    (ProjectRepository, SAMPLE_PROJECTS),
    (CourseRepository, SAMPLE_COURSES),
)


async def seed(db: Any, reset: bool = False) -> dict[str, int]:
    if reset:
        for repo_cls in (ProfileRepository, *(repo_cls for repo_cls, _ in SAMPLE_RECORDS)):
            await db[repo_cls.collection_name].delete_many({})
        log_event("seed_reset", severity="warning")

    await ProfileRepository(db).upsert(SAMPLE_PROFILE)
    counts = {ProfileRepository.collection_name: 1}
    for repo_cls, records in SAMPLE_RECORDS:
        repo = repo_cls(db)
        for record in records:
            await repo.create(record)
        counts[repo_cls.collection_name] = len(records)

    log_event("seed_completed", **counts)
    return counts


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load sample portfolio content.")
    parser.add_argument("--reset", action="store_true", help="delete existing profile, publications, projects and courses first")
    return parser.parse_args(argv)


async def run(argv: Optional[Sequence[str]] = None) -> dict[str, int]:
    args = _parse_args(argv)
    load_dotenv()
    settings = get_settings()
    setup_logging(settings.log_level)

    cache = MongoConnectionCache(settings)
    try:
        connection = await cache.acquire()
        return await seed(connection.db, reset=args.reset)
    finally:
        await cache.close()


if __name__ == "__main__":
    asyncio.run(run())
