from vidtube.services.accounts.dto import AccountOut, UpdateDetailsIn, WatchEntryOut
from vidtube.services.accounts.service import AccountService

__all__ = ["AccountOut", "AccountService", "UpdateDetailsIn", "WatchEntryOut"]
