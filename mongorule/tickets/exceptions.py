class TicketStoreError(Exception):
    """Base exception for ticket store errors."""

    pass


class DuplicateTicketError(TicketStoreError):
    """A ticket with the same ticket_id already exists."""

    def __init__(self, ticket_id: str):
        super().__init__(f"Ticket with ticket_id '{ticket_id}' already exists")
        self.ticket_id = ticket_id
