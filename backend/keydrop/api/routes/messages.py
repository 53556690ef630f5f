"""Message Routes - send and fetch encrypted messages.

Invariants:
    - POST /message/send persists the message before responding
    - GET /message/{username} returns exactly the messages whose `to` equals username
    - Message content is opaque ciphertext; nothing here decrypts it
"""

from fastapi import APIRouter, Depends

from keydrop.core.domain_types import Username
from keydrop.infrastructure.store_manager import get_message_repository
from keydrop.repositories.message_repository import MessageRepository
from keydrop.schemas.message import MessageSend

router = APIRouter(prefix="/message", tags=["message"])


@router.post("/send")
async def send_message(
    body: MessageSend,
    messages: MessageRepository = Depends(get_message_repository),
):
    """Send an encrypted message from one user to another."""
    message = await messages.create(body.to_domain())
    return {"message": "Message sent successfully", "data": message.to_document()}


@router.get("/{username}")
async def get_messages(
    username: str,
    messages: MessageRepository = Depends(get_message_repository),
):
    """Retrieve all messages sent to a specific user."""
    found = await messages.read_for_recipient(Username(username))
    return {
        "message": "Messages retrieved successfully",
        "data": [m.to_document() for m in found],
    }
