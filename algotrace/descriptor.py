"""Static, display-only algorithm metadata."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class AlgorithmDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    description: str
    time_complexity: str
    space_complexity: str
    difficulty: Difficulty
    code: str  # reference implementation shown next to the animation

    def __str__(self) -> str:
        return (
            f"{self.name} [{self.category}, {self.difficulty.value}] "
            f"time {self.time_complexity}, space {self.space_complexity}"
        )
