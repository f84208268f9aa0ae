"""
Swap Domain Events

Published after the negotiation step has been committed.
"""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from shared.domain.base import DomainEvent


@dataclass(kw_only=True)
class SwapProposed(DomainEvent):
    """Event: A user offered one of their items for another user's item"""
    swap_id: UUID
    proposer_id: int
    receiver_id: int
    proposer_item_id: UUID
    receiver_item_id: UUID
    cash_adjustment: Decimal

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'swap_id': str(self.swap_id),
            'proposer_id': self.proposer_id,
            'receiver_id': self.receiver_id,
            'proposer_item_id': str(self.proposer_item_id),
            'receiver_item_id': str(self.receiver_item_id),
            'cash_adjustment': str(self.cash_adjustment),
        })
        return data


@dataclass(kw_only=True)
class SwapStatusChanged(DomainEvent):
    """Event: One of the parties countered, accepted, rejected or reopened a swap"""
    swap_id: UUID
    actor_id: int
    actor_role: str
    old_status: str
    new_status: str
    cash_adjustment: Decimal

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({
            'swap_id': str(self.swap_id),
            'actor_id': self.actor_id,
            'actor_role': self.actor_role,
            'old_status': self.old_status,
            'new_status': self.new_status,
            'cash_adjustment': str(self.cash_adjustment),
        })
        return data
