"""
Ballot engine.

Holds the workflow status, the voter and proposal registries and the
live leader of a single ballot. All mutations are serialized by one lock
and notify subscribers in the order they were applied.

18-10-2026
"""

from __future__ import annotations

import threading

from typing import Callable

from loguru import logger

from app.ballot.exceptions import (
    AlreadyRegistered,
    AlreadyVoted,
    EmptyProposalDescription,
    InvalidWorkflowTransition,
    NotARegisteredVoter,
    ProposalNotFound,
    UnauthorizedCaller,
)
from app.ballot.model.enums import WorkflowStatus
from app.ballot.model.events import (
    BallotEvent,
    ProposalRegistered,
    Voted,
    VoterRegistered,
    WorkflowStatusChange,
)
from app.ballot.model.models import GENESIS_DESCRIPTION, Proposal, TallyResult, Voter

Subscriber = Callable[[BallotEvent], None]


class BallotEngine(object):
    """
    Single ballot run by one administrator.

    Commands take the caller address as first argument; the caller is
    assumed to be already authenticated.
    """

    def __init__(self, admin: str, voter_gated_reads: bool = True) -> None:
        if not admin:
            raise ValueError("A ballot needs an administrator address")

        self._admin = admin
        self.voter_gated_reads = voter_gated_reads

        self._status = WorkflowStatus.registering_voters
        self._voters: dict[str, Voter] = {}
        self._proposals: list[Proposal] = []
        self._winning_proposal_id = 0
        self._max_votes = 0

        self._events: list[BallotEvent] = []
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    # -- Public state --

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def workflow_status(self) -> WorkflowStatus:
        with self._lock:
            return self._status

    @property
    def winning_proposal_id(self) -> int:
        with self._lock:
            return self._winning_proposal_id

    @property
    def max_votes(self) -> int:
        with self._lock:
            return self._max_votes

    # -- Subscriptions --

    def subscribe(self, callback: Subscriber):
        """
        Registers a callable invoked with every new notification.

        Callbacks run while the engine lock is held and must not call back
        into the engine. A failing callback is logged; the command that
        triggered it stays applied.
        """
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber):
        with self._lock:
            self._subscribers.remove(callback)

    # -- Guards (lock held) --

    def _only_admin(self, caller: str):
        if caller != self._admin:
            raise UnauthorizedCaller(caller)

    def _only_voter(self, caller: str):
        voter = self._voters.get(caller)
        if voter is None or not voter.is_registered:
            raise NotARegisteredVoter(caller)
        return voter

    def _only_reader(self, caller: str):
        if self.voter_gated_reads:
            self._only_voter(caller)

    def _require_status(self, required: WorkflowStatus):
        if self._status != required:
            raise InvalidWorkflowTransition(self._status, required)

    def _highest_proposal_id(self) -> int:
        return max(len(self._proposals) - 1, 0)

    def _emit(self, event_class, **params):
        event = event_class(sequence=len(self._events), **params)
        self._events.append(event)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.opt(exception=True).error(
                    "Subscriber {} failed on {}", callback, event.event.value
                )
        return event

    def _check_transition(self, caller: str, required: WorkflowStatus):
        self._only_admin(caller)
        self._require_status(required)

    def _advance(self):
        previous, self._status = self._status, self._status.successor
        self._emit(WorkflowStatusChange, previous_status=previous, new_status=self._status)

    # -- Voter registration --

    def add_voter(self, caller: str, address: str):
        with self._lock:
            self._only_admin(caller)
            self._require_status(WorkflowStatus.registering_voters)
            if address in self._voters:
                raise AlreadyRegistered(address)

            self._voters[address] = Voter(address=address, is_registered=True)
            self._emit(VoterRegistered, voter_address=address)

    # -- Proposal registration --

    def start_proposals_registering(self, caller: str):
        with self._lock:
            self._check_transition(caller, WorkflowStatus.registering_voters)
            self._proposals.append(Proposal(id=0, description=GENESIS_DESCRIPTION))
            self._advance()

    def add_proposal(self, caller: str, description: str) -> int:
        with self._lock:
            self._only_voter(caller)
            self._require_status(WorkflowStatus.proposals_registration_started)
            if not description:
                raise EmptyProposalDescription()

            proposal = Proposal(id=len(self._proposals), description=description)
            self._proposals.append(proposal)
            self._emit(ProposalRegistered, proposal_id=proposal.id)
            return proposal.id

    def end_proposals_registering(self, caller: str):
        with self._lock:
            self._check_transition(caller, WorkflowStatus.proposals_registration_started)
            self._advance()

    # -- Voting --

    def start_voting_session(self, caller: str):
        with self._lock:
            self._check_transition(caller, WorkflowStatus.proposals_registration_ended)
            self._advance()

    def set_vote(self, caller: str, proposal_id: int):
        with self._lock:
            voter = self._only_voter(caller)
            self._require_status(WorkflowStatus.voting_session_started)
            if voter.has_voted:
                raise AlreadyVoted(caller)

            highest_id = self._highest_proposal_id()
            if isinstance(proposal_id, bool) or highest_id < 1 or not 0 <= proposal_id <= highest_id:
                raise ProposalNotFound(proposal_id, highest_id)

            voter.has_voted = True
            voter.voted_proposal_id = proposal_id

            proposal = self._proposals[proposal_id]
            proposal.vote_count += 1
            # strict: on a tie the first proposal to reach the count stays ahead
            if proposal.vote_count > self._max_votes:
                self._max_votes = proposal.vote_count
                self._winning_proposal_id = proposal_id

            self._emit(Voted, voter=caller, proposal_id=proposal_id)

    def end_voting_session(self, caller: str):
        with self._lock:
            self._check_transition(caller, WorkflowStatus.voting_session_started)
            self._advance()

    def tally_votes(self, caller: str) -> int:
        """
        Locks in the leader tracked while voting and returns its id.
        """
        with self._lock:
            self._check_transition(caller, WorkflowStatus.voting_session_ended)
            self._advance()
            return self._winning_proposal_id

    # -- Reads --

    def get_voter(self, caller: str, address: str) -> Voter:
        with self._lock:
            self._only_reader(caller)
            voter = self._voters.get(address)
            return voter.snapshot() if voter else Voter(address=address)

    def get_voters(self, caller: str) -> list[Voter]:
        with self._lock:
            self._only_reader(caller)
            return [voter.snapshot() for voter in self._voters.values()]

    def get_one_proposal(self, caller: str, proposal_id: int) -> Proposal:
        with self._lock:
            self._only_reader(caller)
            if isinstance(proposal_id, bool) or not 0 <= proposal_id < len(self._proposals):
                raise ProposalNotFound(proposal_id, self._highest_proposal_id())
            return self._proposals[proposal_id].snapshot()

    def get_proposals(self, caller: str) -> list[Proposal]:
        with self._lock:
            self._only_reader(caller)
            return [proposal.snapshot() for proposal in self._proposals]

    def get_results(self) -> TallyResult:
        with self._lock:
            self._require_status(WorkflowStatus.votes_tallied)
            ranked = sorted(self._proposals, key=lambda p: (-p.vote_count, p.id))
            return TallyResult(
                status=self._status,
                winning_proposal=self._proposals[self._winning_proposal_id].snapshot(),
                max_votes=self._max_votes,
                total_votes=sum(p.vote_count for p in self._proposals),
                proposals=[p.snapshot() for p in ranked],
            )

    def get_events(self, since: int = 0) -> list[BallotEvent]:
        with self._lock:
            return self._events[max(since, 0):]
