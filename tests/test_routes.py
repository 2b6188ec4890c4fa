"""Tests for the ballot HTTP API."""

from app.ballot.model.models import Proposal
from app.ballot.model.schemas import BallotSchema, ProposalOut
from app.ballot_auth.utils import create_access_token

from conftest import ADMIN, NON_VOTER, VOTER_1, VOTER_2, VOTER_3, auth


def register_voters(client, *voters):
    for voter in voters:
        response = client.post("/voters", json={"address": voter}, headers=auth(ADMIN))
        assert response.status_code == 201


def admin_step(client, route):
    response = client.post(route, headers=auth(ADMIN))
    assert response.status_code == 200, response.json()
    return response.json()


def test_public_ballot_state(client):
    response = client.get("/ballot")
    assert response.status_code == 200
    assert response.json() == {
        "admin": ADMIN,
        "workflow_status": 0,
        "workflow_status_name": "registering_voters",
        "winning_proposal_id": 0,
        "max_votes": 0,
    }


def test_full_ballot(client):
    register_voters(client, VOTER_1, VOTER_2, VOTER_3)
    body = admin_step(client, "/start-proposals-registering")
    assert body["status"] == 1
    assert body["status_name"] == "proposals_registration_started"

    for voter, description, expected_id in (
        (VOTER_1, "Proposal 1", 1),
        (VOTER_2, "Proposal 2", 2),
    ):
        response = client.post("/proposals", json={"description": description}, headers=auth(voter))
        assert response.status_code == 201
        assert response.json() == {"proposal_id": expected_id}

    admin_step(client, "/end-proposals-registering")
    admin_step(client, "/start-voting-session")

    for voter, proposal_id in ((VOTER_1, 1), (VOTER_2, 2), (VOTER_3, 1)):
        response = client.post("/vote", json={"proposal_id": proposal_id}, headers=auth(voter))
        assert response.status_code == 200

    admin_step(client, "/end-voting-session")
    body = admin_step(client, "/tally-votes")
    assert body["winning_proposal_id"] == 1
    assert body["status"] == 5

    ballot = client.get("/ballot").json()
    assert ballot["winning_proposal_id"] == 1
    assert ballot["max_votes"] == 2

    results = client.get("/results").json()
    assert results["winning_proposal"] == {"id": 1, "description": "Proposal 1", "vote_count": 2}
    assert results["total_votes"] == 3
    assert [p["id"] for p in results["proposals"]] == [1, 2, 0]


def test_voter_and_proposal_reads(client):
    register_voters(client, VOTER_1, VOTER_2)
    admin_step(client, "/start-proposals-registering")

    voter = client.get(f"/voters/{VOTER_2}", headers=auth(VOTER_1)).json()
    assert voter == {
        "address": VOTER_2,
        "is_registered": True,
        "has_voted": False,
        "voted_proposal_id": 0,
    }

    voters = client.get("/voters", headers=auth(VOTER_1)).json()
    assert [v["address"] for v in voters] == [VOTER_1, VOTER_2]

    genesis = client.get("/proposals/0", headers=auth(VOTER_1)).json()
    assert genesis == {"id": 0, "description": "GENESIS", "vote_count": 0}

    proposals = client.get("/proposals", headers=auth(VOTER_1)).json()
    assert len(proposals) == 1


def test_unknown_proposal(client):
    register_voters(client, VOTER_1)
    admin_step(client, "/start-proposals-registering")
    response = client.get("/proposals/999", headers=auth(VOTER_1))
    assert response.status_code == 404
    assert response.json()["error"] == {
        "type": "ProposalNotFound",
        "requested_id": 999,
        "highest_id": 0,
    }


def test_non_admin_transition(client):
    response = client.post("/start-proposals-registering", headers=auth(VOTER_1))
    assert response.status_code == 401
    assert response.json()["error"] == {"type": "UnauthorizedCaller", "caller": VOTER_1}
    assert client.get("/ballot").json()["workflow_status"] == 0


def test_add_voter_wrong_status(client):
    admin_step(client, "/start-proposals-registering")
    response = client.post("/voters", json={"address": "0xLate"}, headers=auth(ADMIN))
    assert response.status_code == 400
    assert response.json()["error"] == {
        "type": "InvalidWorkflowTransition",
        "actual": 1,
        "required": 0,
    }


def test_duplicate_voter(client):
    register_voters(client, VOTER_1)
    response = client.post("/voters", json={"address": VOTER_1}, headers=auth(ADMIN))
    assert response.status_code == 400
    assert response.json()["error"] == {"type": "AlreadyRegistered", "address": VOTER_1}


def test_empty_proposal(client):
    register_voters(client, VOTER_1)
    admin_step(client, "/start-proposals-registering")
    response = client.post("/proposals", json={"description": ""}, headers=auth(VOTER_1))
    assert response.status_code == 400
    assert response.json()["error"] == {"type": "EmptyProposalDescription"}


def test_vote_twice(client):
    register_voters(client, VOTER_1)
    admin_step(client, "/start-proposals-registering")
    client.post("/proposals", json={"description": "Only Proposal"}, headers=auth(VOTER_1))
    admin_step(client, "/end-proposals-registering")
    admin_step(client, "/start-voting-session")

    assert client.post("/vote", json={"proposal_id": 1}, headers=auth(VOTER_1)).status_code == 200
    response = client.post("/vote", json={"proposal_id": 1}, headers=auth(VOTER_1))
    assert response.status_code == 400
    assert response.json()["error"] == {"type": "AlreadyVoted", "voter": VOTER_1}


def test_non_voter_reads(client):
    register_voters(client, VOTER_1)
    response = client.get(f"/voters/{VOTER_1}", headers=auth(NON_VOTER))
    assert response.status_code == 401
    assert response.json()["error"] == {"type": "NotARegisteredVoter", "caller": NON_VOTER}


def test_results_before_tally(client):
    response = client.get("/results")
    assert response.status_code == 400
    assert response.json()["error"]["required"] == 5


def test_events(client):
    register_voters(client, VOTER_1, VOTER_2)
    admin_step(client, "/start-proposals-registering")

    events = client.get("/events").json()
    assert [e["event"] for e in events] == [
        "voter_registered",
        "voter_registered",
        "workflow_status_change",
    ]
    assert events[0]["params"] == {"voter_address": VOTER_1}
    assert events[2]["params"] == {"previous_status": 0, "new_status": 1}

    later = client.get("/events", params={"since": 2}).json()
    assert [e["sequence"] for e in later] == [2]


def test_missing_token(client):
    response = client.post("/voters", json={"address": VOTER_1})
    assert response.status_code == 403


def test_invalid_token(client):
    response = client.post(
        "/voters",
        json={"address": VOTER_1},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 403


def test_cookie_token(client):
    client.cookies.set("access_token", create_access_token(ADMIN))
    response = client.post("/voters", json={"address": VOTER_1})
    assert response.status_code == 201


def test_invalid_body(client):
    response = client.post("/voters", json={"address": ""}, headers=auth(ADMIN))
    assert response.status_code == 422


def test_vote_for_genesis(client):
    register_voters(client, VOTER_1)
    admin_step(client, "/start-proposals-registering")
    client.post("/proposals", json={"description": "Only Proposal"}, headers=auth(VOTER_1))
    admin_step(client, "/end-proposals-registering")
    admin_step(client, "/start-voting-session")

    response = client.post("/vote", json={"proposal_id": 0}, headers=auth(VOTER_1))
    assert response.status_code == 200
    ballot = client.get("/ballot").json()
    assert ballot["winning_proposal_id"] == 0
    assert ballot["max_votes"] == 1


def test_schemas_read_attributes():
    assert BallotSchema.model_config["from_attributes"] is True
    proposal = ProposalOut.model_validate(Proposal(id=1, description="Proposal 1", vote_count=2))
    assert proposal.model_dump() == {"id": 1, "description": "Proposal 1", "vote_count": 2}
