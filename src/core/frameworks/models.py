from pydantic import BaseModel


class FrameworkOutput(BaseModel):
    """One framework rendered for one intent."""

    framework: str
    name: str
    description: str
    optimized: str
    use_case: str


class RankingEntry(BaseModel):
    framework: str
    score: float
    output: FrameworkOutput
    semantic_score: float | None = None  # None when the keyword-only path produced the entry
    keyword_score: float = 0.0
