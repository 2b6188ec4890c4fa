"""
Enums for the ballot model.

18-10-2026
"""

import enum


class WorkflowStatus(int, enum.Enum):
    registering_voters = 0
    proposals_registration_started = 1
    proposals_registration_ended = 2
    voting_session_started = 3
    voting_session_ended = 4
    votes_tallied = 5

    @property
    def successor(self):
        """
        Returns the status that follows this one, None for the last one.
        """
        members = list(type(self))
        index = members.index(self)
        return members[index + 1] if index + 1 < len(members) else None


class BallotEventEnum(str, enum.Enum):
    VOTER_REGISTERED = "voter_registered"
    PROPOSAL_REGISTERED = "proposal_registered"
    VOTED = "voted"
    WORKFLOW_STATUS_CHANGE = "workflow_status_change"
