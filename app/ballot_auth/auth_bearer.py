from fastapi import Request, HTTPException, Cookie
from fastapi.security import HTTPBearer

from app.ballot_auth.utils import decode_access_token

import jwt


class AuthCaller(HTTPBearer):

    """
    HTTPBearer class resolving the caller address from a Bearer token
    or the access_token cookie.

    The engine does its own role checks; this only establishes who is
    calling.
    """

    def __init__(self, auto_error: bool = False):
        super(AuthCaller, self).__init__(auto_error=auto_error)

    async def __call__(self, request: Request, access_token: str = Cookie(None)) -> str:
        credentials = await super(AuthCaller, self).__call__(request)
        token = credentials.credentials if credentials else access_token
        if not token:
            raise HTTPException(status_code=403, detail="Authorization token not provided.")
        return self.verify_jwt(token)

    def verify_jwt(self, jwtoken: str) -> str:
        try:
            return decode_access_token(jwtoken)
        except jwt.InvalidTokenError:
            raise HTTPException(status_code=403, detail="Invalid token or expired token.")
