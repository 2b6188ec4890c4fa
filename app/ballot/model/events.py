"""
Notifications emitted by the ballot engine.

Every successful command produces exactly one notification, stamped with
its position in the engine's history.

18-10-2026
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import ClassVar

from app.ballot import utils
from app.ballot.model.enums import BallotEventEnum, WorkflowStatus


@dataclass(frozen=True)
class BallotEvent:
    event: ClassVar[BallotEventEnum]

    sequence: int
    created_at: datetime = field(default_factory=utils.tz_now, compare=False)

    def params(self) -> dict:
        """
        Event-specific fields, ready to be serialized.
        """
        data = asdict(self)
        data.pop("sequence")
        data.pop("created_at")
        return {k: int(v) if isinstance(v, WorkflowStatus) else v for k, v in data.items()}


@dataclass(frozen=True)
class VoterRegistered(BallotEvent):
    event: ClassVar[BallotEventEnum] = BallotEventEnum.VOTER_REGISTERED

    voter_address: str = ""


@dataclass(frozen=True)
class ProposalRegistered(BallotEvent):
    event: ClassVar[BallotEventEnum] = BallotEventEnum.PROPOSAL_REGISTERED

    proposal_id: int = 0


@dataclass(frozen=True)
class Voted(BallotEvent):
    event: ClassVar[BallotEventEnum] = BallotEventEnum.VOTED

    voter: str = ""
    proposal_id: int = 0


@dataclass(frozen=True)
class WorkflowStatusChange(BallotEvent):
    event: ClassVar[BallotEventEnum] = BallotEventEnum.WORKFLOW_STATUS_CHANGE

    previous_status: WorkflowStatus = WorkflowStatus.registering_voters
    new_status: WorkflowStatus = WorkflowStatus.registering_voters
