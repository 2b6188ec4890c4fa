"""
Pydantic schemas (FastAPI) for the ballot API.

18-10-2026


Engine records are plain dataclasses; the API never hands them out
directly. For every record the API can create or return we keep:

    - <Record>In: the data a caller sends to create it.
    - <Record>Out: the data returned to the caller.

Descriptions are not length-checked here, the engine rejects empty
proposals with its own error so callers get the same failure no matter
how they reach it.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from app.ballot.model.enums import WorkflowStatus


class BallotSchema(BaseModel):
    """
    Base class for a ballot schema.
    """

    model_config = ConfigDict(from_attributes=True)


# ------------------ voter-related schemas ------------------

class VoterIn(BallotSchema):
    address: str = Field(min_length=1)


class VoterOut(BallotSchema):
    address: str
    is_registered: bool
    has_voted: bool
    voted_proposal_id: int


# ------------------ proposal-related schemas ------------------

class ProposalIn(BallotSchema):
    description: str


class ProposalCreated(BallotSchema):
    proposal_id: int


class ProposalOut(BallotSchema):
    id: int
    description: str
    vote_count: int


class VoteIn(BallotSchema):
    proposal_id: int


# ------------------ ballot-related schemas ------------------

class BallotOut(BallotSchema):
    """
    Public state of the ballot.
    """
    admin: str
    workflow_status: WorkflowStatus
    workflow_status_name: str
    winning_proposal_id: int
    max_votes: int


class ResultsOut(BallotSchema):
    status: WorkflowStatus
    winning_proposal: ProposalOut
    max_votes: int
    total_votes: int
    proposals: list[ProposalOut]


class EventOut(BallotSchema):
    sequence: int
    event: str
    created_at: datetime
    params: dict
