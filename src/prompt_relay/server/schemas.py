"""Request and response models of the HTTP surface."""

from pydantic import BaseModel, Field


class GenerateBody(BaseModel):
    """Body of ``POST /generate``."""

    prompt: str | None = Field(default=None, description="Prompt to send")
    provider: str | None = Field(
        default="auto", description="'auto' or one of groq, openai, gemini, claude"
    )


class TextPart(BaseModel):
    text: str


class Content(BaseModel):
    parts: list[TextPart]


class Candidate(BaseModel):
    content: Content


class GenerateResponse(BaseModel):
    """Envelope of a successful generation."""

    candidates: list[Candidate]
    provider: str
    model: str


class PingResponse(BaseModel):
    ok: bool = True
    ts: int
