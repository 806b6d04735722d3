from pathlib import Path

import pytest


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def feed_bytes() -> bytes:
    return (FIXTURES / "feed.xml").read_bytes()
