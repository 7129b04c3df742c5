"""
Ann Investment Portal - User Model
Portal account with identity details, verification artifacts and ledger totals
"""
from sqlalchemy import Column, String, Boolean, Float
from sqlalchemy.orm import relationship

from db.base import Base


class User(Base):
    """
    Investor account.
    balance/total_* are only changed together with a ledger entry
    (see LedgerRepository.apply_transaction) unless an admin overrides them.
    """

    # Identity
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(50), nullable=False)
    dob = Column(String(20), nullable=False)

    # Postal address
    street = Column(String(255), default="", nullable=False)
    city = Column(String(100), default="", nullable=False)
    state = Column(String(100), default="", nullable=False)
    zip = Column(String(20), default="", nullable=False)

    hashed_password = Column(String(255), nullable=False)

    # Verification artifacts
    id_front_url = Column(String(500), default="", nullable=False)
    id_back_url = Column(String(500), default="", nullable=False)
    selfie_url = Column(String(500), default="", nullable=False)

    # Status
    verified = Column(Boolean, default=False, nullable=False)
    frozen = Column(Boolean, default=False, nullable=False)

    # Ledger
    balance = Column(Float, default=0.0, nullable=False)
    total_deposit = Column(Float, default=0.0, nullable=False)
    total_withdrawal = Column(Float, default=0.0, nullable=False)
    total_investment = Column(Float, default=0.0, nullable=False)
    min_deposit = Column(Float, default=0.0, nullable=False)  # not enforced
    min_withdrawal = Column(Float, default=0.0, nullable=False)  # not enforced

    transactions = relationship(
        "LedgerEntry",
        back_populates="user",
        order_by="LedgerEntry.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

    @property
    def role(self) -> str:
        return "user"
