"""
TicketRepository

MongoDB operations for the 'tickets' collection.

Methods:
- save(ticket): Insert a new ticket, DuplicateTicketError on an existing ticket_id
- find_by_ticket_id(ticket_id): Single ticket or None
"""

import logging
from typing import Optional

from pymongo.errors import DuplicateKeyError

from .exceptions import DuplicateTicketError
from .models import Ticket

logger = logging.getLogger(__name__)


class TicketRepository:
    """Insert and look up tickets by their business identifier."""

    async def save(self, ticket: Ticket) -> Ticket:
        """
        Insert a new ticket.

        The unique index on ticket_id rejects the write, so a failed save
        leaves the collection untouched.

        Raises:
            DuplicateTicketError: a ticket with this ticket_id already exists
        """
        try:
            await ticket.insert()
        except DuplicateKeyError as e:
            logger.warning(f"Rejected duplicate ticket_id: {ticket.ticket_id}")
            raise DuplicateTicketError(ticket.ticket_id) from e

        logger.debug(f"Saved ticket {ticket.ticket_id} as {ticket.id}")
        return ticket

    async def find_by_ticket_id(self, ticket_id: str) -> Optional[Ticket]:
        """Return the ticket with this ticket_id, or None if there is none."""
        ticket = await Ticket.find_one(Ticket.ticket_id == ticket_id)
        if ticket is None:
            logger.debug(f"No ticket found for ticket_id: {ticket_id}")
        return ticket
