"""
Custom Exceptions for the ballot engine.

Every exception is raised before any state is touched, so catching one
means the engine is exactly as it was before the call.

18-10-2026
"""

from app.ballot.model.enums import WorkflowStatus


class BallotError(Exception):
    """Base class for ballot engine rejections"""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def params(self) -> dict:
        return {}

    def to_dict(self) -> dict:
        return {"type": type(self).__name__, **self.params()}


class UnauthorizedCaller(BallotError):
    """
    Exception raised when someone other than the administrator
    calls an administrator-only command

    Attributes:
        caller -- address that made the call
    """

    status_code = 401

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"{caller} is not the administrator of this ballot")

    def params(self):
        return {"caller": self.caller}


class NotARegisteredVoter(BallotError):
    """
    Exception raised when a voter-only command comes from an
    address that was never registered

    Attributes:
        caller -- address that made the call
    """

    status_code = 401

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"{caller} is not a registered voter")

    def params(self):
        return {"caller": self.caller}


class AlreadyRegistered(BallotError):
    def __init__(self, address: str):
        self.address = address
        super().__init__(f"{address} is already registered")

    def params(self):
        return {"address": self.address}


class InvalidWorkflowTransition(BallotError):
    """
    Exception raised when a command runs in the wrong workflow status

    Attributes:
        actual -- status the ballot is in
        required -- status the command needs
    """

    def __init__(self, actual: WorkflowStatus, required: WorkflowStatus):
        self.actual = actual
        self.required = required
        super().__init__(
            f"Workflow status is {actual.name}, {required.name} is required"
        )

    def params(self):
        return {"actual": int(self.actual), "required": int(self.required)}


class EmptyProposalDescription(BallotError):
    def __init__(self):
        super().__init__("Proposal description can't be empty")


class ProposalNotFound(BallotError):
    """
    Exception raised when a proposal id is out of the registered range

    Attributes:
        requested_id -- id that was asked for
        highest_id -- highest id assigned so far (0 while only GENESIS exists)
    """

    status_code = 404

    def __init__(self, requested_id: int, highest_id: int):
        self.requested_id = requested_id
        self.highest_id = highest_id
        super().__init__(
            f"Proposal {requested_id} not found, highest proposal id is {highest_id}"
        )

    def params(self):
        return {"requested_id": self.requested_id, "highest_id": self.highest_id}


class AlreadyVoted(BallotError):
    def __init__(self, voter: str):
        self.voter = voter
        super().__init__(f"{voter} has already voted")

    def params(self):
        return {"voter": self.voter}
