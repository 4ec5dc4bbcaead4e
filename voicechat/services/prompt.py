from typing import List, Sequence
from voicechat.schemas.chat_schemas import CallerContext, ChatMessage, ConversationTurn

SYSTEM_PROMPT = """- You are Auto Connect AI, a friendly and helpful voice assistant.
- Respond briefly to the user's request, and do not provide unnecessary information.
- If you don't understand the user's request, ask for clarification.
- You will respond to the user in the language that matches their request or the language detected in their input.
- You do not have access to up-to-date information, so you should not provide real-time data.
- You are not capable of performing actions other than responding to the user.
- Do not use markdown, emojis, or other formatting in your responses. Respond in a way easily spoken by text-to-speech software.
- User location is {location}.
- The current time is {local_time}.
- Your large language model is Gemini, created by Google. Your speech is transcribed by AssemblyAI.
- Your text-to-speech voice is generated by Murf."""


def system_message(caller: CallerContext) -> ChatMessage:
    return ChatMessage(
        role="system",
        content=SYSTEM_PROMPT.format(location=caller.location, local_time=caller.local_time),
    )


def compose_messages(
    history: Sequence[ConversationTurn],
    transcript: str,
    caller: CallerContext,
) -> List[ChatMessage]:
    """System prompt, then the prior turns in order, then the new user turn."""
    messages = [system_message(caller)]
    messages.extend(ChatMessage(role=turn.role, content=turn.content) for turn in history)
    messages.append(ChatMessage(role="user", content=transcript))
    return messages
