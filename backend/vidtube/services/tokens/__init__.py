from vidtube.services.tokens.dto import AccessClaims, TokenConfig, TokenPairOut, TokenSubject
from vidtube.services.tokens.service import TokenService

__all__ = ["AccessClaims", "TokenConfig", "TokenPairOut", "TokenService", "TokenSubject"]
