from fastapi import Depends, APIRouter, Query

from app.ballot.engine import BallotEngine
from app.ballot.model.schemas import (
    BallotOut,
    EventOut,
    ProposalCreated,
    ProposalIn,
    ProposalOut,
    ResultsOut,
    VoteIn,
    VoterIn,
    VoterOut,
)
from app.ballot_auth.auth_bearer import AuthCaller
from app.dependencies import get_engine

api_router = APIRouter()


def _status_response(engine: BallotEngine, message: str):
    status = engine.workflow_status
    return {"message": message, "status": status, "status_name": status.name}


# ----- Public Routes -----


@api_router.get("/ballot", response_model=BallotOut, status_code=200)
async def get_ballot(engine: BallotEngine = Depends(get_engine)):
    """
    Public route for the ballot status and its current leader
    """
    status = engine.workflow_status
    return {
        "admin": engine.admin,
        "workflow_status": status,
        "workflow_status_name": status.name,
        "winning_proposal_id": engine.winning_proposal_id,
        "max_votes": engine.max_votes,
    }


@api_router.get("/results", response_model=ResultsOut, status_code=200)
async def get_results(engine: BallotEngine = Depends(get_engine)):
    """
    Public route for the final results, only once votes are tallied
    """
    return engine.get_results()


@api_router.get("/events", response_model=list[EventOut], status_code=200)
async def get_events(
    since: int = Query(0, ge=0),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Public route for the notifications emitted since a given sequence number
    """
    return [
        {
            "sequence": event.sequence,
            "event": event.event.value,
            "created_at": event.created_at,
            "params": event.params(),
        }
        for event in engine.get_events(since=since)
    ]


# ----- Ballot Admin Routes -----


@api_router.post("/voters", status_code=201)
async def add_voter(
    voter_in: VoterIn,
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Admin's route for registering a voter
    """
    engine.add_voter(caller, voter_in.address)
    return {"message": f"Voter {voter_in.address} registered"}


@api_router.post("/start-proposals-registering", status_code=200)
async def start_proposals_registering(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Admin's route for opening the proposals registration,
    the voter list is frozen from now on.
    """
    engine.start_proposals_registering(caller)
    return _status_response(engine, "Proposals registration started")


@api_router.post("/end-proposals-registering", status_code=200)
async def end_proposals_registering(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Admin's route for closing the proposals registration
    """
    engine.end_proposals_registering(caller)
    return _status_response(engine, "Proposals registration ended")


@api_router.post("/start-voting-session", status_code=200)
async def start_voting_session(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Admin's route for opening the voting session
    """
    engine.start_voting_session(caller)
    return _status_response(engine, "Voting session started")


@api_router.post("/end-voting-session", status_code=200)
async def end_voting_session(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Admin's route for ending the voting session, once it happens
    no voter should be able to cast a vote.
    """
    engine.end_voting_session(caller)
    return _status_response(engine, "Voting session ended")


@api_router.post("/tally-votes", status_code=200)
async def tally_votes(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Admin's route for locking in the winning proposal
    """
    winning_proposal_id = engine.tally_votes(caller)
    response = _status_response(engine, "Votes tallied")
    response["winning_proposal_id"] = winning_proposal_id
    return response


# ----- Voter Routes -----


@api_router.get("/voters", response_model=list[VoterOut], status_code=200)
async def get_voters(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Route for getting every registered voter
    """
    return engine.get_voters(caller)


@api_router.get("/voters/{address}", response_model=VoterOut, status_code=200)
async def get_voter(
    address: str,
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Route for getting a voter
    """
    return engine.get_voter(caller, address)


@api_router.post("/proposals", response_model=ProposalCreated, status_code=201)
async def add_proposal(
    proposal_in: ProposalIn,
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Voter's route for registering a proposal
    """
    return {"proposal_id": engine.add_proposal(caller, proposal_in.description)}


@api_router.get("/proposals", response_model=list[ProposalOut], status_code=200)
async def get_proposals(
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Route for getting every proposal, GENESIS included
    """
    return engine.get_proposals(caller)


@api_router.get("/proposals/{proposal_id}", response_model=ProposalOut, status_code=200)
async def get_one_proposal(
    proposal_id: int,
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Route for getting a proposal
    """
    return engine.get_one_proposal(caller, proposal_id)


@api_router.post("/vote", status_code=200)
async def set_vote(
    vote_in: VoteIn,
    caller: str = Depends(AuthCaller()),
    engine: BallotEngine = Depends(get_engine),
):
    """
    Voter's route for casting the one vote they are allowed
    """
    engine.set_vote(caller, vote_in.proposal_id)
    return {"message": f"Vote for proposal {vote_in.proposal_id} cast"}
