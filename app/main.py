from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette_context import context
from starlette_context.header_keys import HeaderKeys

from .ballot.routes import api_router

from app.ballot.engine import BallotEngine
from app.ballot.exceptions import BallotError
from app.config import BALLOT_ADMIN_ADDRESS, BALLOT_VOTER_GATED_READS
from app.logger import logger, ballot_logger
from app.middleware import register_middlewares


def build_engine(admin: str = BALLOT_ADMIN_ADDRESS, voter_gated_reads: bool = BALLOT_VOTER_GATED_READS):
    """
    Creates the ballot engine and hooks the notification logger to it.
    """
    engine = BallotEngine(admin=admin, voter_gated_reads=voter_gated_reads)
    engine.subscribe(ballot_logger)
    return engine


async def ballot_error_handler(request: Request, exc: BallotError):
    request_id = context.data.get(HeaderKeys.request_id) if context.exists() else None
    logger.bind(request_id=request_id).warning(
        "{} {} rejected: {}", request.method, request.url.path, exc.message
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.to_dict()},
    )


app = FastAPI()

app.logger = logger
app.state.engine = build_engine()

register_middlewares(app)
app.add_exception_handler(BallotError, ballot_error_handler)

# Routes
app.include_router(api_router)
