"""
Ann Investment Portal - Ledger Repository
Balance / running totals / transaction log mutation
"""
import logging
from typing import List
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AccountNotFoundError
from db.base import utcnow
from models.ledger import LedgerEntry, LEDGER_EFFECTS
from models.user import User

logger = logging.getLogger(__name__)


class LedgerRepository:
    """
    Applies transactions to a user's ledger.

    The entry insert and the totals update are issued on the same
    session, so they commit (or roll back) together with the request.
    Totals are updated with column arithmetic (balance = balance + x),
    which keeps concurrent appends to one account from losing updates.

    Amounts are not validated: zero, negative and overdrawing amounts
    are applied as given.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_user(self, user_id: int) -> User:
        result = await self.session.execute(
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise AccountNotFoundError(user_id)
        return user

    async def apply_transaction(self, user_id: int, kind: str, amount: float) -> User:
        """
        Append {kind, amount, occurred_at} to the log, then adjust totals:

            deposit:    total_deposit += amount;    balance += amount
            withdrawal: total_withdrawal += amount; balance -= amount
            investment: total_investment += amount; balance -= amount

        Unrecognised kinds are logged but leave every total unchanged.
        Returns the refreshed user.
        """
        await self._get_user(user_id)

        self.session.add(LedgerEntry(
            user_id=user_id,
            kind=kind,
            amount=amount,
            occurred_at=utcnow()
        ))

        effect = LEDGER_EFFECTS.get(kind)
        if effect is not None:
            total_column, sign = effect
            await self.session.execute(
                update(User)
                .where(User.id == user_id)
                .values({
                    total_column: getattr(User, total_column) + amount,
                    "balance": User.balance + sign * amount,
                })
                .execution_options(synchronize_session=False)
            )
        else:
            logger.warning(f"Unrecognised transaction kind '{kind}' recorded for user {user_id}")

        await self.session.flush()
        logger.info(f"Ledger: {kind} {amount} applied to user {user_id}")
        return await self._get_user(user_id)

    async def get_entries(self, user_id: int) -> List[LedgerEntry]:
        """Transaction log in insertion order"""
        result = await self.session.execute(
            select(LedgerEntry)
            .where(LedgerEntry.user_id == user_id)
            .order_by(LedgerEntry.id.asc())
        )
        return list(result.scalars().all())
