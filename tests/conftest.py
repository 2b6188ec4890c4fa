import os

os.environ.setdefault("SECRET_KEY", "ballot-test-secret-key-with-enough-bytes")
os.environ.setdefault("BALLOT_ADMIN_ADDRESS", "0xAdmin")
os.environ.setdefault("LOGGER_FILE", "")

import pytest

from fastapi.testclient import TestClient

from app.ballot.engine import BallotEngine
from app.ballot_auth.utils import create_access_token
from app.dependencies import get_engine
from app.main import app

ADMIN = "0xAdmin"
VOTER_1 = "0xVoter1"
VOTER_2 = "0xVoter2"
VOTER_3 = "0xVoter3"
NON_VOTER = "0xNobody"


@pytest.fixture
def engine():
    return BallotEngine(admin=ADMIN)


@pytest.fixture
def registered_engine(engine):
    """
    Engine with three voters and proposals registration open.
    """
    for voter in (VOTER_1, VOTER_2, VOTER_3):
        engine.add_voter(ADMIN, voter)
    engine.start_proposals_registering(ADMIN)
    return engine


@pytest.fixture
def voting_engine(registered_engine):
    """
    Engine with "Proposal 1" and "Proposal 2" registered and voting open.
    """
    registered_engine.add_proposal(VOTER_1, "Proposal 1")
    registered_engine.add_proposal(VOTER_2, "Proposal 2")
    registered_engine.end_proposals_registering(ADMIN)
    registered_engine.start_voting_session(ADMIN)
    return registered_engine


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(address):
    return {"Authorization": f"Bearer {create_access_token(address)}"}
