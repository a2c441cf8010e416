"""Shared models for git-commit-lint."""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class Level(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    IGNORE = "ignore"


class Violation(BaseModel):
    rule: str = Field(description="Name of the rule that failed")
    level: Level
    message: str = Field(description="Human readable explanation")


class LintResult(BaseModel):
    violations: List[Violation] = Field(default_factory=list)

    @property
    def errors(self) -> List[Violation]:
        return [v for v in self.violations if v.level == Level.ERROR]

    @property
    def warnings(self) -> List[Violation]:
        return [v for v in self.violations if v.level == Level.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
