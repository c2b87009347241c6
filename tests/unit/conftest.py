"""
Shared fixtures for unit tests.

Each test gets a fresh in-memory SQLite database. StaticPool keeps every
session on the same connection so the schema survives between sessions.
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from models.appraisal_source import AppraisalSource
from models.idp import IDP
from repositories.skill_repository import SkillRepository
from utils.database import init_db


class FakeLLMService:
    """Stands in for LLMService.generate_json: canned reply or raised error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_json(self, system_prompt, human_prompt, schema):
        self.calls.append({"system_prompt": system_prompt, "human_prompt": human_prompt, "schema": schema})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_llm():
    return FakeLLMService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def appraisal_source(db):
    source = AppraisalSource(
        employee_id="emp-1",
        manager_id="mgr-1",
        sheet_url="https://docs.google.com/spreadsheets/d/abc123/edit",
    )
    db.add(source)
    db.commit()
    db.refresh(source)
    return source


@pytest.fixture
def idp(db, appraisal_source):
    idp = IDP(name="March 2025", appraisal_source_id=appraisal_source.id)
    db.add(idp)
    db.commit()
    db.refresh(idp)
    return idp


@pytest.fixture
def skills(db, idp):
    """One stored skill per category."""
    return SkillRepository(db).create_batch(idp.id, {
        "technical": ["Deep understanding on Data Analysis"],
        "functional": ["Lead cross-functional teams with effective Project Management"],
        "behavioral": ["Communicate clearly and persuasively across all audiences"],
    })
