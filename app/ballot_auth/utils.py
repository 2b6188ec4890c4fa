import jwt

from app.config import SECRET_KEY

ALGORITHM = "HS256"


def create_access_token(address: str) -> str:
    """
    Issue a token naming the caller
    :param address: address the token speaks for
    """
    return jwt.encode({"address": address}, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str:
    """
    Returns the caller address carried by the token
    :param token: encoded JWT
    """
    decoded_token = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    address = decoded_token.get("address")
    if not address:
        raise jwt.InvalidTokenError("token has no address claim")
    return address
