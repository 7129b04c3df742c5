"""
Ann Investment Portal - Admin Model
"""
from sqlalchemy import Column, String
from db.base import Base


class Admin(Base):
    """
    Back-office operator account. No ledger, no artifacts.
    """

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, email={self.email})>"

    @property
    def role(self) -> str:
        return "admin"
