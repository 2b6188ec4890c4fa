from fastapi import Request

from app.ballot.engine import BallotEngine


def get_engine(request: Request) -> BallotEngine:
    """
    Engine dependency: every request works on the engine built at startup.
    """
    return request.app.state.engine
