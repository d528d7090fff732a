"""Static registry of the eight prompt frameworks.

Declaration order is significant: rankings break ties by it.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from src.utils.exceptions import FrameworkNotFoundError


@dataclass(frozen=True)
class FrameworkDefinition:
    id: str
    name: str
    description: str
    use_case: str

    @property
    def profile_text(self) -> str:
        """Text compared against the prompt when scoring semantically."""
        return f"{self.description} {self.use_case}"


_DEFINITIONS: tuple[FrameworkDefinition, ...] = (
    FrameworkDefinition(
        id="cot",
        name="Chain of Thought (CoT)",
        description="Break problems into step-by-step reasoning",
        use_case="Complex reasoning, math, logic problems",
    ),
    FrameworkDefinition(
        id="tot",
        name="Tree of Thoughts (ToT)",
        description="Explore multiple reasoning paths simultaneously",
        use_case="Strategic planning, creative problem solving",
    ),
    FrameworkDefinition(
        id="ape",
        name="APE (Action, Purpose, Expectation)",
        description="Define what to do, why, and expected output",
        use_case="Quick, practical prompts",
    ),
    FrameworkDefinition(
        id="race",
        name="RACE (Role, Action, Context, Expectation)",
        description="Assign role, task, context and expected result",
        use_case="Professional and role-based outputs, reports",
    ),
    FrameworkDefinition(
        id="roses",
        name="ROSES (Role, Objective, Style, Example, Scope)",
        description="Add style, examples and scope to role-based prompts",
        use_case="Writing, content creation",
    ),
    FrameworkDefinition(
        id="guide",
        name="GUIDE (Goal, User, Instructions, Details, Examples)",
        description="Lay out a goal and instructions for a specific user",
        use_case="Educational or structured tasks, tutorials",
    ),
    FrameworkDefinition(
        id="smart",
        name="SMART (Specific, Measurable, Achievable, Relevant, Time-bound)",
        description="Turn a request into a measurable goal",
        use_case="Goal-oriented prompts, planning with targets",
    ),
    FrameworkDefinition(
        id="create",
        name="CREATE (Character, Request, Examples, Adjustments, Type, Extras)",
        description="Comprehensive prompt covering persona, request, examples and refinements",
        use_case="Comprehensive default for creative and detailed outputs",
    ),
)

FRAMEWORKS: MappingProxyType = MappingProxyType({d.id: d for d in _DEFINITIONS})
FRAMEWORK_IDS: tuple[str, ...] = tuple(d.id for d in _DEFINITIONS)


def list_frameworks() -> list[FrameworkDefinition]:
    return list(_DEFINITIONS)


def get_framework(framework_id: str) -> FrameworkDefinition:
    try:
        return FRAMEWORKS[framework_id.lower()]
    except KeyError:
        raise FrameworkNotFoundError(framework_id) from None
