"""Request/response schemas for the analysis, framework and ranking endpoints."""

from pydantic import BaseModel, Field

from src.core.frameworks.models import RankingEntry


class PromptRequest(BaseModel):
    """A prompt to analyse, render or rank.  Empty prompts are accepted and
    answered with a sentinel message."""

    prompt: str = Field(default="", description="Free-form or 'Label: value' prompt text")


class FrameworkInfo(BaseModel):
    id: str
    name: str
    description: str
    use_case: str


class FrameworkListResponse(BaseModel):
    frameworks: list[FrameworkInfo]
    count: int


class RankResponse(BaseModel):
    """Ranked frameworks, best first.  ``entries`` always has one item per
    registered framework."""

    entries: list[RankingEntry]
    count: int
    top: str
