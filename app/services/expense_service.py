"""
Expense Service - operating expenses and their split between participants
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.config import settings
from app.models.base import new_id
from app.repositories import Repository
from app.schemas import Expense
from app.schemas.expense import SHARED_OWNER
from app.schemas.report import ParticipantExpenses

logger = logging.getLogger(__name__)


def expense_shares(expense: Expense, participants: Sequence[str]) -> Dict[str, float]:
    """
    Amount each participant carries. An explicit split wins; otherwise a
    named owner carries all of it and shared expenses are split equally.
    """
    if expense.share_percentages:
        return {p: expense.amount * pct / 100 for p, pct in expense.share_percentages.items()}
    if expense.owner != SHARED_OWNER:
        return {expense.owner: expense.amount}
    if not participants:
        return {}
    return {p: expense.amount / len(participants) for p in participants}


def calculate_expenses_by_participant(
    expenses: Iterable[Expense],
    participants: Optional[Sequence[str]] = None
) -> ParticipantExpenses:
    participants = list(settings.DEFAULT_PARTICIPANTS if participants is None else participants)
    by_participant: Dict[str, float] = {p: 0.0 for p in participants}
    total = 0.0

    for expense in expenses:
        total += expense.amount
        for participant, amount in expense_shares(expense, participants).items():
            by_participant[participant] = by_participant.get(participant, 0.0) + amount

    return ParticipantExpenses(by_participant=by_participant, total_expenses=total)


def calculate_marketing_expenses(expenses: Iterable[Expense]) -> float:
    return sum((e.amount for e in expenses if e.category == "marketing"), 0.0)


def owner_for_split(share_percentages: Optional[Dict[str, float]]) -> str:
    """A split that puts everything on one participant is owned by them"""
    if share_percentages:
        carriers = [p for p, pct in share_percentages.items() if pct > 0]
        if len(carriers) == 1 and share_percentages[carriers[0]] == 100:
            return carriers[0]
    return SHARED_OWNER


class ExpenseService:
    """Expense business logic"""

    def __init__(self, repository: Repository[Expense]):
        self.repository = repository

    async def get_expenses(self, start: Optional[date] = None, end: Optional[date] = None) -> List[Expense]:
        expenses = await self.repository.get_all()
        if start:
            expenses = [e for e in expenses if e.date >= start]
        if end:
            expenses = [e for e in expenses if e.date <= end]
        return sorted(expenses, key=lambda e: e.date, reverse=True)

    async def create_expense(
        self,
        expense_date: date,
        category: str,
        amount: float,
        description: str = "",
        share_percentages: Optional[Dict[str, float]] = None,
        include_tax: bool = False,
    ) -> Expense:
        """`amount` is the base amount; tax is added on top when include_tax is set"""
        if amount < 0:
            raise ValueError("Expense amount cannot be negative")
        if share_percentages and abs(sum(share_percentages.values()) - 100) > 1e-9:
            raise ValueError("Expense split must total 100%")

        total = amount * (1 + settings.EXPENSE_TAX_RATE / 100) if include_tax else amount
        expense = Expense(
            id=new_id(),
            date=expense_date,
            category=category,
            description=description,
            amount=total,
            owner=owner_for_split(share_percentages),
            share_percentages=share_percentages,
            include_tax=include_tax,
            amount_before_tax=amount if include_tax else None,
        )
        await self.repository.upsert(expense)
        logger.info(f"Created {category} expense {expense.id}: {total}")
        return expense

    async def delete_expense(self, expense_id: str) -> None:
        await self.repository.delete(expense_id)
