"""Model provider configuration."""

from pydantic import BaseModel, Field

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful AI assistant with access to tools. "
    "Please use these tools when appropriate to help the user."
)


class ModelConfig(BaseModel, frozen=True):
    """Which model to stream from and the credential used to reach it."""

    model: str = Field(min_length=1)
    api_key: str = Field(min_length=1, repr=False)
    max_tokens: int = Field(default=1024, gt=0)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
