"""
Swap Command Handlers

Commands:
- ProposeSwapCommand: Offer one of your items for another user's item
- TransitionSwapCommand: Counter, accept, reject or reopen a proposal
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Tuple
from uuid import UUID
import logging

from shared.application.store import AbstractReservationStore, DuplicateRecordError
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ForbiddenError, NotFoundError, ValidationError
from shared.domain.value_objects import bounded_amount, coerce_uuid
from apps.swaps.domain.entities import OPEN_STATUSES, SwapProposal, SwapStatus

logger = logging.getLogger(__name__)

MAX_CASH_ADJUSTMENT = Decimal('1000000')


def _cash(value) -> Decimal:
    return bounded_amount(value, 'cash_adjustment', limit=MAX_CASH_ADJUSTMENT, allow_negative=True)


# ===== Commands =====

@dataclass
class ProposeSwapCommand:
    """
    Command to propose a swap

    ``receiver_id`` may be omitted; it defaults to the receiver item's owner.
    """
    proposer_id: int
    proposer_item_id: UUID
    receiver_item_id: UUID
    receiver_id: int | None = None
    cash_adjustment: Decimal | int | float | str = 0
    notes: str = ''


@dataclass
class TransitionSwapCommand:
    """Command for one negotiation step"""
    swap_id: UUID
    actor_id: int
    new_status: SwapStatus | str
    cash_adjustment: Decimal | int | float | str | None = None
    notes: str | None = None


# ===== Command Handlers =====

class ProposeSwapHandler:
    """
    Handler for ProposeSwap command

    Resubmitting a proposal that is still open (PENDING or COUNTER) for the
    same proposer and item pair returns that proposal instead of a new one.
    """

    def __init__(self, store: AbstractReservationStore, uow_factory: Callable = DjangoUnitOfWork):
        self.store = store
        self.uow_factory = uow_factory

    def handle(self, command: ProposeSwapCommand) -> SwapProposal:
        swap, _ = self.submit(command)
        return swap

    def submit(self, command: ProposeSwapCommand) -> Tuple[SwapProposal, bool]:
        """
        Returns: (swap, created)

        Raises:
            ValidationError, NotFoundError, ForbiddenError
        """
        cash_adjustment = _cash(0 if command.cash_adjustment is None else command.cash_adjustment)
        notes = command.notes or ''

        logger.info(
            f"Swap proposal by {command.proposer_id}: item {command.proposer_item_id} "
            f"for item {command.receiver_item_id}"
        )

        proposer_item_id = coerce_uuid(command.proposer_item_id)
        receiver_item_id = coerce_uuid(command.receiver_item_id)

        with self.uow_factory() as uow:
            proposer_item = self.store.find_item(proposer_item_id) if proposer_item_id else None
            receiver_item = self.store.find_item(receiver_item_id) if receiver_item_id else None
            if proposer_item is None or receiver_item is None:
                raise NotFoundError("Item not found")

            if not proposer_item.is_owned_by(command.proposer_id):
                raise ForbiddenError("You can only propose swaps with items you own")

            if receiver_item.is_owned_by(command.proposer_id):
                raise ValidationError("You cannot swap with yourself")

            receiver_id = receiver_item.owner_id
            if command.receiver_id is not None and command.receiver_id != receiver_id:
                raise ValidationError("Receiver does not own the requested item")

            existing = self.store.find_existing_swap(
                command.proposer_id, proposer_item.id, receiver_item.id, OPEN_STATUSES
            )
            if existing is not None:
                logger.info(f"Returning open swap {existing.id} for identical proposal")
                return existing, False

            swap = SwapProposal.propose(
                proposer_id=command.proposer_id,
                proposer_item_id=proposer_item.id,
                receiver_id=receiver_id,
                receiver_item_id=receiver_item.id,
                cash_adjustment=cash_adjustment,
                notes=notes,
            )

            try:
                saved = self.store.create_swap(swap)
            except DuplicateRecordError as exc:
                logger.info(f"Concurrent identical proposal resolved to swap {exc.existing.id}")
                return exc.existing, False

            uow.collect_events(swap)

        logger.info(f"Swap {saved.id} proposed (pending)")
        return saved, True


class TransitionSwapHandler:
    """
    Handler for TransitionSwap command

    The role/state gate lives on the aggregate (SwapProposal.transition);
    this handler loads the proposal under a row lock and persists the result
    with an optimistic version check.
    """

    def __init__(self, store: AbstractReservationStore, uow_factory: Callable = DjangoUnitOfWork):
        self.store = store
        self.uow_factory = uow_factory

    def handle(self, command: TransitionSwapCommand) -> SwapProposal:
        new_status = SwapStatus.parse(command.new_status)
        cash_adjustment = None
        if command.cash_adjustment is not None:
            cash_adjustment = _cash(command.cash_adjustment)
        swap_id = coerce_uuid(command.swap_id)

        logger.info(
            f"Transition swap {command.swap_id} to {new_status.value} by actor {command.actor_id}"
        )

        with self.uow_factory() as uow:
            swap = self.store.find_swap(swap_id, lock=True) if swap_id else None
            if swap is None:
                raise NotFoundError("Swap not found")

            swap.transition(
                command.actor_id,
                new_status,
                cash_adjustment=cash_adjustment,
                notes=command.notes,
            )

            uow.collect_events(swap)
            saved = self.store.save_swap(swap)

        logger.info(f"Swap {saved.id} is now {saved.status.value}")
        return saved
