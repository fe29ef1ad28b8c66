"""
Ticket MongoDB Schema

Defines the Ticket document model for the 'tickets' collection.

Schema Fields:
- _id: ObjectId (MongoDB auto-generated)
- ticket_id: Business identifier (unique)
- content: Free-form ticket text

Indexes:
- ticket_id (unique)
"""

from beanie import Document
from pymongo import ASCENDING, IndexModel


class Ticket(Document):
    """A support ticket keyed by its business identifier."""

    ticket_id: str
    content: str

    class Settings:
        name = "tickets"
        indexes = [
            IndexModel([("ticket_id", ASCENDING)], unique=True),
        ]
