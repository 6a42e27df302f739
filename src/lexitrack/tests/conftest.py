"""Test configuration."""
import os
import tempfile
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from faker import Faker

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="lexitrack-"))

# Import after environment setup
from lexitrack.models.records import (  # noqa: E402
    LanguageCode,
    Level,
    PartOfSpeech,
    VocabularyItem,
)

fake = Faker()


@pytest.fixture
def make_item():
    """Factory for vocabulary items with unique ids."""
    ids = count(1)

    def _make_item(**overrides) -> VocabularyItem:
        item_id = overrides.pop("id", next(ids))
        reviews = overrides.get("review_count", 0)
        fields = {
            "id": item_id,
            "guid": fake.uuid4(),
            "word": f"{fake.word()}{item_id}",
            "part_of_speech": PartOfSpeech.NOUN,
            "level": Level.A1,
            "language": LanguageCode.EN_US,
            "translation": fake.word(),
            "review_count": 0,
            "rate": 0,
            "last_review_date": (
                datetime.now(UTC) - timedelta(days=1) if reviews else None
            ),
        }
        fields.update(overrides)
        return VocabularyItem(**fields)

    return _make_item
