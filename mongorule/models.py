"""Document model registry."""

from typing import List, Type

from beanie import Document

from mongorule.tickets.models import Ticket


def get_document_models() -> List[Type[Document]]:
    """All document models the application initializes with Beanie."""
    return [Ticket]
