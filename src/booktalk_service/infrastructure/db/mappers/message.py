from __future__ import annotations

from booktalk_service.domain.entities.message import Message
from booktalk_service.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender_id=model.sender_id,
        receiver_id=model.receiver_id,
        text=model.text,
        read=model.read,
        read_at=model.read_at,
        created_at=model.created_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        sender_id=entity.sender_id,
        receiver_id=entity.receiver_id,
        text=entity.text,
        read=entity.read,
        read_at=entity.read_at,
        created_at=entity.created_at,
    )
