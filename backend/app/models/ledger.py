"""
Ann Investment Portal - Ledger Entry Model
Append-only transaction log for user accounts
"""
from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
import enum

from db.base import Base, utcnow


class TransactionKind(str, enum.Enum):
    """Recognised ledger transaction kinds"""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    INVESTMENT = "investment"


# kind -> (running total column, sign applied to balance)
LEDGER_EFFECTS = {
    TransactionKind.DEPOSIT.value: ("total_deposit", 1),
    TransactionKind.WITHDRAWAL.value: ("total_withdrawal", -1),
    TransactionKind.INVESTMENT.value: ("total_investment", -1),
}


class LedgerEntry(Base):
    """
    Single ledger record. kind is stored as given, so an
    unrecognised kind is kept in the log without affecting totals.
    """

    user_id = Column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    kind = Column(String(50), nullable=False)
    amount = Column(Float, nullable=False)
    occurred_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="transactions")

    def __repr__(self) -> str:
        return f"<LedgerEntry(id={self.id}, kind={self.kind}, amount={self.amount})>"

    @property
    def is_recognised(self) -> bool:
        return self.kind in LEDGER_EFFECTS
