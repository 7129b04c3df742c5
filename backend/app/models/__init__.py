# Models module initialization
from .user import User
from .admin import Admin
from .ledger import LedgerEntry, TransactionKind, LEDGER_EFFECTS

__all__ = ["User", "Admin", "LedgerEntry", "TransactionKind", "LEDGER_EFFECTS"]
