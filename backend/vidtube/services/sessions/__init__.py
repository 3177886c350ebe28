from vidtube.services.sessions.dto import ChangePasswordIn, LoginIn, LoginOut, RegisterIn
from vidtube.services.sessions.service import SessionService

__all__ = ["ChangePasswordIn", "LoginIn", "LoginOut", "RegisterIn", "SessionService"]
