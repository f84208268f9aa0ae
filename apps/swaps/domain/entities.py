"""
Swap Domain Entities

- SwapProposal: Aggregate for an offer to exchange one item for another
- SwapStatus: Negotiation states
- SwapRole: Which side of the negotiation an actor is on
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from uuid import UUID

from shared.domain.base import Aggregate
from shared.domain.exceptions import ForbiddenError, ValidationError


class SwapStatus(Enum):
    """
    Swap Negotiation States

    - PENDING: proposer made an offer, receiver to respond
    - COUNTER: receiver changed the terms, proposer to respond
    - ACCEPTED: deal agreed
    - REJECTED: either side walked away
    """
    PENDING = 'pending'
    COUNTER = 'counter'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'

    @classmethod
    def parse(cls, value) -> 'SwapStatus':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ', '.join(s.value for s in cls)
            raise ValidationError(f"Invalid status '{value}'. Allowed: {allowed}")


OPEN_STATUSES = frozenset({SwapStatus.PENDING, SwapStatus.COUNTER})


class SwapRole(Enum):
    PROPOSER = 'proposer'
    RECEIVER = 'receiver'


@dataclass(kw_only=True, eq=False)
class SwapProposal(Aggregate):
    """
    Swap Proposal Aggregate Root

    Parties and items are fixed at creation. ``cash_adjustment`` is a signed
    amount whose meaning (who pays whom) belongs to the presentation layer;
    it is stored as given.
    """

    proposer_id: int
    proposer_item_id: UUID
    receiver_id: int
    receiver_item_id: UUID
    cash_adjustment: Decimal = field(default_factory=lambda: Decimal('0'))
    status: SwapStatus = SwapStatus.PENDING
    notes: str = ''

    @classmethod
    def propose(cls, *, proposer_id, proposer_item_id, receiver_id, receiver_item_id,
                cash_adjustment: Decimal, notes: str = '') -> 'SwapProposal':
        """Create a new PENDING proposal and record SwapProposed."""
        from apps.swaps.domain.events import SwapProposed

        swap = cls(
            proposer_id=proposer_id,
            proposer_item_id=proposer_item_id,
            receiver_id=receiver_id,
            receiver_item_id=receiver_item_id,
            cash_adjustment=cash_adjustment,
            notes=notes,
        )
        swap.add_event(SwapProposed(
            aggregate_id=swap.id,
            swap_id=swap.id,
            proposer_id=proposer_id,
            receiver_id=receiver_id,
            proposer_item_id=proposer_item_id,
            receiver_item_id=receiver_item_id,
            cash_adjustment=cash_adjustment,
        ))
        return swap

    def role_of(self, actor_id) -> SwapRole:
        if actor_id == self.proposer_id:
            return SwapRole.PROPOSER
        if actor_id == self.receiver_id:
            return SwapRole.RECEIVER
        raise ForbiddenError("Not authorized to update this swap")

    @property
    def is_open(self) -> bool:
        return self.status in OPEN_STATUSES

    def transition(self, actor_id, new_status: SwapStatus, *,
                   cash_adjustment: Decimal | None = None, notes: str | None = None):
        """
        Apply a negotiation step on behalf of ``actor_id``

        | new status | allowed for                                   |
        |------------|-----------------------------------------------|
        | counter    | receiver                                      |
        | accepted   | receiver on pending, proposer on counter      |
        | rejected   | either party                                  |
        | pending    | either party                                  |

        Events: SwapStatusChanged
        """
        role = self.role_of(actor_id)
        old_status = self.status

        if new_status is SwapStatus.COUNTER:
            if role is not SwapRole.RECEIVER:
                raise ForbiddenError("Only the receiver can counter a swap proposal")
            if cash_adjustment is not None:
                self.cash_adjustment = cash_adjustment
            if notes is not None:
                self.notes = notes

        elif new_status is SwapStatus.ACCEPTED:
            if role is SwapRole.RECEIVER and old_status is not SwapStatus.PENDING:
                raise ForbiddenError(
                    f"The receiver can only accept a pending swap (current status: {old_status.value})"
                )
            if role is SwapRole.PROPOSER and old_status is not SwapStatus.COUNTER:
                raise ForbiddenError(
                    f"The proposer can only accept a counter offer (current status: {old_status.value})"
                )

        elif new_status is SwapStatus.REJECTED:
            if notes is not None:
                self.notes = notes

        self.status = new_status
        self.touch()

        from apps.swaps.domain.events import SwapStatusChanged

        self.add_event(SwapStatusChanged(
            aggregate_id=self.id,
            swap_id=self.id,
            actor_id=actor_id,
            actor_role=role.value,
            old_status=old_status.value,
            new_status=new_status.value,
            cash_adjustment=self.cash_adjustment,
        ))

    def __str__(self):
        return f"Swap {self.id} ({self.status.value})"
