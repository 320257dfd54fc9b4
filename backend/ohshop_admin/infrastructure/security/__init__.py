from .jwt_tokens import JWTTokenIssuer
from .passwords import PasslibPasswordHasher

__all__ = [
    "JWTTokenIssuer",
    "PasslibPasswordHasher",
]
