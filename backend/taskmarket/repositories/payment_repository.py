# backend/taskmarket/repositories/payment_repository.py
"""
Repository for payments and payouts.

Rows only mirror gateway state; nothing here talks to the gateway.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..models.payment import Payment, Payout
from .base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    def __init__(self, db: Session):
        super().__init__(db, Payment)
        self.payouts = BaseRepository(db, Payout)

    def get_by_reference(self, reference: str) -> Optional[Payment]:
        return self.find_one_by(reference=reference)

    def list_for_booking(self, booking_id: int) -> List[Payment]:
        return self._execute_query(
            self.db.query(Payment)
            .filter(Payment.booking_id == booking_id)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
        )

    def list_payouts(self, tasker_id: int, status: Optional[str] = None) -> List[Payout]:
        query = self.db.query(Payout).filter(Payout.tasker_id == tasker_id)
        if status is not None:
            query = query.filter(Payout.status == status)
        return self._execute_query(query.order_by(Payout.created_at.desc(), Payout.id.desc()))
