"""Deterministic templated reply generator."""

from hexchat.replies.base import BaseReplyGenerator

REPLY_TEMPLATE = (
    "This is a demo response from {assistant_name}. In a real implementation, "
    "this would be connected to your AI backend or API to generate actual "
    'responses based on: "{user_text}"'
)


class EchoReplyGenerator(BaseReplyGenerator):
    """Echo the user's message back inside a fixed demo template."""

    def __init__(self, assistant_name: str = "HexGpt"):
        super().__init__(generator_name="echo")
        self.assistant_name = assistant_name

    async def generate(self, conversation_id: str, user_text: str) -> str:
        return REPLY_TEMPLATE.format(assistant_name=self.assistant_name, user_text=user_text)
