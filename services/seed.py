"""
Startup Seed Data

Fills an empty database with a handful of sample entries and two default
accounts (admin and contributor) so a fresh install is usable right away.
Seeded accounts are created already verified since no mailbox backs them.
"""

from typing import Any, Dict, List

from config.constants import ROLE_ADMIN, ROLE_CONTRIBUTOR
from config.settings import Settings
from core.database import Database
from services.users import get_user_service
from services.words import get_word_service
from utils.logging import get_logger

logger = get_logger(__name__)

SAMPLE_WORDS: List[Dict[str, Any]] = [
    {
        "word": "băiat",
        "definition": "Tânăr de sex masculin, copil sau adolescent.",
        "short_description": "Tânăr de sex masculin",
        "category": "Persoane",
        "origin": "Română",
        "examples": ["Băiatul merge la școală.", "E un băiat bun."],
        "pronunciation": "bă-iat",
    },
    {
        "word": "casă",
        "definition": "Clădire destinată locuinței unei familii sau a unei persoane.",
        "short_description": "Clădire pentru locuit",
        "category": "Locuințe",
        "origin": "Română",
        "examples": ["Casa noastră este mare.", "Să mergem acasă."],
        "pronunciation": "ca-să",
    },
    {
        "word": "mamă",
        "definition": "Femeie care a născut un copil sau care îl crește.",
        "short_description": "Femeie care a născut un copil",
        "category": "Familie",
        "origin": "Română",
        "examples": ["Mama gătește mâncare.", "Îmi iubesc mama."],
        "pronunciation": "ma-mă",
    },
    {
        "word": "tată",
        "definition": "Bărbat care a conceput un copil sau care îl crește.",
        "short_description": "Bărbat care a conceput un copil",
        "category": "Familie",
        "origin": "Română",
        "examples": ["Tata lucrează mult.", "Tatăl meu este doctor."],
        "pronunciation": "ta-tă",
    },
    {
        "word": "apă",
        "definition": "Lichid incolor, inodor și insipid, compus din hidrogen și oxigen.",
        "short_description": "Lichid incolor și inodor",
        "category": "Natură",
        "origin": "Română",
        "examples": ["Bea apă sănătoasă.", "Apa este rece."],
        "pronunciation": "a-pă",
    },
    {
        "word": "mâncare",
        "definition": "Alimente preparate pentru consum.",
        "short_description": "Alimente preparate",
        "category": "Alimentație",
        "origin": "Română",
        "examples": ["Mâncarea este gata.", "Ce mâncare bună!"],
        "pronunciation": "mân-ca-re",
    },
    {
        "word": "școală",
        "definition": "Instituție de învățământ unde se predă știința.",
        "short_description": "Instituție de învățământ",
        "category": "Educație",
        "origin": "Română",
        "examples": ["Merg la școală zilnic.", "Școala este mare."],
        "pronunciation": "școa-lă",
    },
    {
        "word": "prieten",
        "definition": "Persoană cu care cineva are relații de prietenie.",
        "short_description": "Persoană cu relații de prietenie",
        "category": "Relații",
        "origin": "Română",
        "examples": ["El este prietenul meu.", "Am mulți prieteni."],
        "pronunciation": "pri-e-ten",
    },
    {
        "word": "munte",
        "definition": "Ridicătură naturală foarte înaltă a scoarței terestre.",
        "short_description": "Ridicătură înaltă a terenului",
        "category": "Geografie",
        "origin": "Română",
        "examples": ["Muntele este înalt.", "Urc pe munte."],
        "pronunciation": "mun-te",
    },
    {
        "word": "mare",
        "definition": "Suprafață mare de apă sărată care înconjoară continentele.",
        "short_description": "Suprafață mare de apă sărată",
        "category": "Geografie",
        "origin": "Română",
        "examples": ["Marea este albastră.", "Merg la mare vara."],
        "pronunciation": "ma-re",
    },
]


async def seed_database(database: Database, settings: Settings) -> None:
    """Insert sample words and default accounts into empty tables."""
    words = get_word_service()
    users = get_user_service()

    async with database.session() as db:
        if await words.count(db) == 0:
            logger.info("Initializing database with sample words...")
            for entry in SAMPLE_WORDS:
                await words.create(db, entry)
            logger.info(f"Added {len(SAMPLE_WORDS)} sample words to database")

        if await users.count(db) == 0:
            logger.info("Creating default accounts...")
            await users.create(
                db,
                username="contributor",
                email="contributor@cuvintebanatene.ro",
                password=settings.DEFAULT_CONTRIBUTOR_PASSWORD,
                role=ROLE_CONTRIBUTOR,
                email_verified=True,
            )
            await users.create(
                db,
                username="admin",
                email="admin@cuvintebanatene.ro",
                password=settings.DEFAULT_ADMIN_PASSWORD,
                role=ROLE_ADMIN,
                email_verified=True,
            )
            logger.warning("Default accounts 'admin' and 'contributor' created - change their passwords")
