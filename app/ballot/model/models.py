"""
In-memory records for the ballot registries.

18-10-2026
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from app.ballot.model.enums import WorkflowStatus

GENESIS_DESCRIPTION = "GENESIS"


@dataclass
class Voter:
    address: str
    is_registered: bool = False
    has_voted: bool = False
    voted_proposal_id: int = 0

    def snapshot(self) -> Voter:
        return replace(self)


@dataclass
class Proposal:
    id: int
    description: str
    vote_count: int = 0

    def snapshot(self) -> Proposal:
        return replace(self)


@dataclass(frozen=True)
class TallyResult:
    """
    Final picture of a tallied ballot.

    Proposals are ranked by vote count, ties keep the lower id first.
    """

    status: WorkflowStatus
    winning_proposal: Proposal
    max_votes: int
    total_votes: int
    proposals: list[Proposal] = field(default_factory=list)
