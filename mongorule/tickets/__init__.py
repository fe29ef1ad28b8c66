from .exceptions import DuplicateTicketError, TicketStoreError
from .models import Ticket
from .repository import TicketRepository

__all__ = [
    "Ticket",
    "TicketRepository",
    "TicketStoreError",
    "DuplicateTicketError",
]
