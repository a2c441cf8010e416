"""Lint rules for parsed commit messages.

Each rule inspects a :class:`~gitcommitlint.message.Message` and reports at
most one :class:`~gitcommitlint.models.Violation`. Rules are independent of
each other; a :class:`RuleSet` runs them in a fixed order.
"""
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

from .message import BREAKING_TOKENS, ConventionalSubject, Message
from .models import Level, Violation


class Rule(ABC):
    """Abstract base class for lint rules."""

    name: str = ""
    default_level: Level = Level.ERROR

    def __init__(self, level: Optional[Level] = None):
        self.level = Level(level) if level is not None else self.default_level

    def check(self, message: Message) -> Optional[Violation]:
        """Run the rule, returning a violation unless it passes or is ignored."""
        if self.level == Level.IGNORE:
            return None
        error = self.validate(message)
        if error is None:
            return None
        return Violation(rule=self.name, level=self.level, message=error)

    @abstractmethod
    def validate(self, message: Message) -> Optional[str]:
        """Return an error message if the commit message breaks the rule."""
        pass

    def options(self) -> Dict[str, Any]:
        return {"level": self.level.value}


class LengthRule(Rule):
    """Base class for rules with a maximum length."""

    default_length: int = 72

    def __init__(self, level: Optional[Level] = None, length: Optional[int] = None):
        super().__init__(level)
        self.length = length if length is not None else self.default_length
        if self.length < 0:
            raise ValueError(f"{self.name}: length must not be negative")

    def options(self) -> Dict[str, Any]:
        return {**super().options(), "length": self.length}


class EnumRule(Rule):
    """Base class for rules restricting a field to a list of values."""

    default_options: List[str] = []

    def __init__(self, level: Optional[Level] = None, options: Optional[List[str]] = None):
        super().__init__(level)
        self.allowed = list(options) if options is not None else list(self.default_options)

    def options(self) -> Dict[str, Any]:
        return {**super().options(), "options": self.allowed}


class SubjectEmptyRule(Rule):
    name = "subject-empty"

    def validate(self, message: Message) -> Optional[str]:
        if not message.subject:
            return "Subject is empty"
        return None


class TypeEmptyRule(Rule):
    name = "type-empty"

    def validate(self, message: Message) -> Optional[str]:
        if not message.type:
            return "Type is empty; subject must follow format: type(scope): description"
        return None


class DescriptionEmptyRule(Rule):
    name = "description-empty"

    def validate(self, message: Message) -> Optional[str]:
        if not message.description:
            return "Description is empty"
        return None


class SubjectMaxLengthRule(LengthRule):
    name = "subject-max-length"

    def validate(self, message: Message) -> Optional[str]:
        subject = (message.subject or "").split("\n", 1)[0]
        if len(subject) > self.length:
            return f"Subject line too long ({len(subject)} > {self.length})"
        return None


class TypeEnumRule(EnumRule):
    name = "type-enum"
    default_level = Level.IGNORE
    default_options = [
        "build", "chore", "ci", "docs", "feat", "fix",
        "perf", "refactor", "revert", "style", "test",
    ]

    def validate(self, message: Message) -> Optional[str]:
        if message.type is not None and message.type not in self.allowed:
            return f"Type '{message.type}' is not allowed (allowed: {', '.join(self.allowed)})"
        return None


class TypeCaseRule(Rule):
    name = "type-case"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if message.type is not None and message.type != message.type.lower():
            return f"Type '{message.type}' must be lower case"
        return None


class ScopeEmptyRule(Rule):
    name = "scope-empty"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if not message.scope:
            return "Scope is empty"
        return None


class ScopeEnumRule(EnumRule):
    name = "scope-enum"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if message.scope is not None and message.scope not in self.allowed:
            return f"Scope '{message.scope}' is not allowed (allowed: {', '.join(self.allowed)})"
        return None


class DescriptionFormatRule(Rule):
    name = "description-format"
    default_level = Level.IGNORE

    def __init__(self, level: Optional[Level] = None, format: Optional[str] = None):
        super().__init__(level)
        self.format = format
        self.pattern = re.compile(format) if format else None

    def validate(self, message: Message) -> Optional[str]:
        if self.pattern is None or message.description is None:
            return None
        if not self.pattern.match(message.description):
            return f"Description doesn't match format '{self.format}'"
        return None

    def options(self) -> Dict[str, Any]:
        options = super().options()
        if self.format:
            options["format"] = self.format
        return options


class DescriptionFullStopRule(Rule):
    name = "description-full-stop"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if message.description and message.description.endswith("."):
            return "Description should not end with a period"
        return None


class BodyEmptyRule(Rule):
    name = "body-empty"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if not message.body:
            return "Body is empty"
        return None


class BodyLeadingBlankRule(Rule):
    name = "body-leading-blank"
    default_level = Level.WARNING

    def validate(self, message: Message) -> Optional[str]:
        # The subject is a whole paragraph; more than one line means the
        # body was written without a blank line in between
        if message.subject and "\n" in message.subject:
            return "Leave one blank line after subject"
        return None


class BodyMaxLineLengthRule(LengthRule):
    name = "body-max-line-length"
    default_level = Level.IGNORE
    default_length = 100

    def validate(self, message: Message) -> Optional[str]:
        if not message.body:
            return None
        for line in message.body.split("\n"):
            if len(line) > self.length:
                return f"Body line too long ({len(line)} > {self.length}): {line}"
        return None


class FootersEmptyRule(Rule):
    name = "footers-empty"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if not message.footers:
            return "Footers are empty"
        return None


class BreakingChangeFooterRule(Rule):
    name = "breaking-change-footer"
    default_level = Level.IGNORE

    def validate(self, message: Message) -> Optional[str]:
        if not isinstance(message.header, ConventionalSubject) or not message.header.breaking:
            return None
        if not any(footer.token in BREAKING_TOKENS for footer in message.trailers):
            return "Breaking change marker '!' requires a BREAKING CHANGE footer"
        return None


RULES: List[Type[Rule]] = [
    SubjectEmptyRule,
    TypeEmptyRule,
    DescriptionEmptyRule,
    SubjectMaxLengthRule,
    TypeEnumRule,
    TypeCaseRule,
    ScopeEmptyRule,
    ScopeEnumRule,
    DescriptionFormatRule,
    DescriptionFullStopRule,
    BodyEmptyRule,
    BodyLeadingBlankRule,
    BodyMaxLineLengthRule,
    FootersEmptyRule,
    BreakingChangeFooterRule,
]

RULES_BY_NAME: Dict[str, Type[Rule]] = {rule.name: rule for rule in RULES}


class RuleSet:
    """An ordered collection of rules."""

    def __init__(self, rules: Optional[List[Rule]] = None):
        self.rules: List[Rule] = list(rules) if rules is not None else []

    def __iter__(self):
        return iter(self.rules)

    def get(self, name: str) -> Optional[Rule]:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def validate(self, message: Message) -> List[Violation]:
        """Run every rule against the message, in order."""
        violations = []
        for rule in self.rules:
            violation = rule.check(message)
            if violation is not None:
                violations.append(violation)
        return violations

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {rule.name: rule.options() for rule in self.rules}


def create_rule_set(settings: Optional[Dict[str, Dict[str, Any]]] = None) -> RuleSet:
    """Create the default rule set, applying per-rule settings.

    Args:
        settings: Mapping of rule name to keyword options such as
            ``level``, ``length``, ``options`` or ``format``

    Returns:
        RuleSet: Every known rule, in the default order

    Raises:
        ValueError: If a rule name or option is unknown or invalid
    """
    settings = settings or {}

    unknown = sorted(set(settings) - set(RULES_BY_NAME))
    if unknown:
        raise ValueError(f"Unknown rule(s): {', '.join(unknown)}")

    rules = []
    for rule_class in RULES:
        options = settings.get(rule_class.name) or {}
        if not isinstance(options, dict):
            raise ValueError(f"{rule_class.name}: expected a table of options")
        try:
            rules.append(rule_class(**options))
        except TypeError as e:
            raise ValueError(f"{rule_class.name}: invalid options ({e})") from e
        except re.error as e:
            raise ValueError(f"{rule_class.name}: invalid format ({e})") from e
    return RuleSet(rules)
