"""
Pytest configuration and shared fixtures for the EasyJob backend tests.
"""
import os

# Settings are cached on first import, so the test environment goes in first
os.environ.update({
    "ENVIRONMENT": "testing",
    "TESTING": "true",
    "SECRET_KEY": "test-secret-key-for-jwt-tokens-12345678901234567890",
    "BCRYPT_ROUNDS": "4",
    "LOG_LEVEL": "DEBUG",
})

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import patch

from easyjob_app.backend.main import app
from easyjob_app.backend.models.db.database import get_db, Base
from easyjob_app.backend.models.db import crud
from easyjob_app.backend.security import create_access_token, get_password_hash
from easyjob_app.backend.services.captcha_service import CaptchaStore, get_captcha_store
from easyjob_app.backend.services.llm_service import LLMResult, get_llm_gateway


class FakeLLMGateway:
    """Stands in for the Gemini gateway and records every call."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.default = LLMResult(content="Generated text", tokens_used=42)
        self.error = None

    def queue(self, content: str, tokens_used: int = 100) -> None:
        self.responses.append(LLMResult(content=content, tokens_used=tokens_used))

    def complete(self, system_prompt: str, user_prompt: str, temperature: float) -> LLMResult:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return self.default


# Test Database Setup
@pytest.fixture(scope="function")
def test_db_engine():
    """One in-memory SQLite database per test, shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def fake_llm():
    return FakeLLMGateway()


@pytest.fixture
def captcha_store():
    return CaptchaStore(ttl_seconds=300)


@pytest.fixture(scope="function")
def test_client(test_db_session, fake_llm, captcha_store):
    """Create a test client with overridden database, LLM and captcha dependencies."""
    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_llm_gateway] = lambda: fake_llm
    app.dependency_overrides[get_captcha_store] = lambda: captcha_store
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client(test_client):
    """Same overrides as test_client, but server errors come back as 500 responses."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def solve_captcha(captcha_store):
    """Returns a callable producing a fresh, correctly answered captcha."""
    def _solve(answer: str = "abcd"):
        return {"captchaId": captcha_store.put(answer), "captchaCode": answer}
    return _solve


# User Fixtures
@pytest.fixture
def test_user_data():
    """Sample registration data for testing."""
    return {
        "email": "test@example.com",
        "username": "tester",
        "password": "testpassword123",
        "confirmPassword": "testpassword123",
    }


@pytest.fixture
def test_user(test_db_session, test_user_data):
    """Create a test user directly in the database."""
    return crud.create_user(
        test_db_session,
        email=test_user_data["email"],
        username=test_user_data["username"],
        password_hash=get_password_hash(test_user_data["password"]),
    )


@pytest.fixture
def auth_headers(test_user):
    """Authentication headers for the test user."""
    token = create_access_token(user_id=test_user.id, email=test_user.email)
    return {"Authorization": f"Bearer {token}"}


# CV Test Data Fixtures
@pytest.fixture
def sample_cv_modules():
    """A complete set of CV modules as the client submits them for export."""
    return {
        "basicInfo": {
            "name": "Jane Doe",
            "phone": "+1 555 0100",
            "email": "jane@example.com",
            "linkedin": "linkedin.com/in/janedoe",
            "github": "github.com/janedoe",
        },
        "education": {
            "items": [{
                "degree": "Bachelor of Science",
                "school": "State University",
                "major": "Computer Science",
                "period": "Sep 2018 - Jul 2022",
                "location": "Boston",
                "gpa": "3.83/4.00",
                "honors": ["Dean's List"],
                "relevantCoursework": ["Algorithms", "Databases"],
            }]
        },
        "working": {
            "items": [{
                "company": "Tech Corp",
                "position": "Software Engineer",
                "period": "2022 - 2024",
                "location": "New York",
                "responsibilities": ["Built REST APIs"],
                "achievements": ["Cut latency by 30%"],
            }]
        },
        "project": {
            "items": [{
                "name": "Resume Builder",
                "period": "2023",
                "role": "Lead",
                "description": ["Designed the export pipeline"],
                "technologies": ["Python", "FastAPI"],
            }]
        },
        "publications": {
            "items": [{
                "title": "On Structured Extraction",
                "authors": ["J. Doe", "A. Smith"],
                "journal": "Journal of Examples",
                "year": "2023",
                "doi": "10.1000/xyz",
                "status": "published",
            }]
        },
        "leadership": {
            "items": [{
                "title": "President",
                "organization": "Coding Club",
                "period": "2020 - 2021",
                "description": ["Organised weekly workshops"],
            }]
        },
        "skills": {
            "languages": "English (native), Mandarin (fluent)",
            "skills": "Python, SQL, Docker",
            "interests": "Hiking, chess",
        },
    }


# Environment Variable Mocks
@pytest.fixture(autouse=True)
def mock_environment_variables():
    """Keep environment changes made by a test from leaking into the next one."""
    test_env = {
        "SECRET_KEY": "test-secret-key-for-jwt-tokens-12345678901234567890",
        "LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, test_env):
        yield test_env
