"""Streaming assistant chat."""

import logging
from dataclasses import dataclass, field
from typing import Literal

from nutriscan.domain.profile import UserProfile
from nutriscan.services.gateway import AIGateway
from nutriscan.services.localization import Localizer

_logger = logging.getLogger(__name__)

_INSTRUCTIONS = (
    "You are a friendly and helpful AI assistant for NutriScan AI, a nutrition "
    "tracking app. The user's name is {name}. Address them by their name "
    "occasionally. Answer questions about the app's features concisely, "
    "helpfully and encouragingly. Do not answer questions unrelated to health, "
    "fitness, or the NutriScan AI app."
)


@dataclass
class ChatMessage:
    """Single message in a conversation."""

    role: Literal["user", "assistant"]
    content: str


@dataclass
class Conversation:
    """In-memory chat transcript for one session."""

    instructions: str
    messages: list[ChatMessage] = field(default_factory=list)
    is_streaming: bool = False


@dataclass
class ChatService:
    """Runs assistant conversations through the gateway's streaming variant."""

    gateway: AIGateway

    def start(self, profile: UserProfile, localizer: Localizer) -> Conversation:
        """Open a conversation with a greeting for the user."""
        greeting = localizer.translate("howCanIHelp", name=profile.first_name)
        return Conversation(
            instructions=_INSTRUCTIONS.format(name=profile.name),
            messages=[ChatMessage(role="assistant", content=greeting)],
        )

    async def send(
        self, conversation: Conversation, text: str, localizer: Localizer
    ) -> ChatMessage | None:
        """Send a user message and stream the reply into the transcript."""
        cleaned = text.strip()
        if not cleaned or conversation.is_streaming:
            return None
        conversation.messages.append(ChatMessage(role="user", content=cleaned))
        history = [
            {"role": message.role, "content": message.content}
            for message in conversation.messages
        ]
        reply = ChatMessage(role="assistant", content="")
        conversation.messages.append(reply)
        conversation.is_streaming = True
        try:
            async for chunk in self.gateway.stream_chat(
                instructions=conversation.instructions, messages=history
            ):
                reply.content += chunk
        except Exception:
            _logger.exception("Assistant chat stream failed")
            reply.content = localizer.translate("tryAgainLater")
        finally:
            conversation.is_streaming = False
        return reply
