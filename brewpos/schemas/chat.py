"""
Chat request/response schemas
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: str = Field(..., max_length=2000, description="Customer question")


class ChatReply(BaseModel):
    """One bot bubble; error=True when the text describes a failure"""
    sender: str = Field("bot", description="Message author")
    text: str = Field(..., description="Reply text")
    error: bool = Field(False, description="True when the assistant could not answer")
    timestamp: datetime = Field(default_factory=datetime.now, description="Reply time")
