# agents/message_agent.py
from typing import Any, Dict, Optional

from b_types.invitation_types import ThemeStyle
from .base_agent import BaseAgent
from prompts.message_prompt import INVITATION_MESSAGE_PROMPT


class MessageAgent(BaseAgent):
    def __init__(self, api_key: Optional[str] = None) -> None:
        super().__init__(
            name="message_agent",
            description="Writes the custom message of a birthday invitation.",
            instruction=INVITATION_MESSAGE_PROMPT,
            temperature=0.9,
            top_p=0.95,
            max_output_tokens=256,
            api_key=api_key,
        )

    def process_request(self, inputs: Dict[str, Any]) -> str:
        return self._generate(inputs, instruction_override=INVITATION_MESSAGE_PROMPT).strip()

    def generate(self, name: str, age: str, theme: ThemeStyle, tone: str = "excited") -> str:
        """The (name, age, theme, tone) -> text collaborator used by the composer."""
        return self.process_request({
            "name": name,
            "age": age,
            "theme": ThemeStyle.parse(theme).value,
            "tone": tone,
        })
