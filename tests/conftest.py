import pytest

from passforge.config import Settings


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_key="test-key",
        model="gemini-test",
        api_base="https://example.invalid/",
        request_timeout=5,
    )
