"""Conventional Commits parser and linter."""

__version__ = "0.1.0"

from .message import ConventionalSubject, Footer, FreeformSubject, Message, parse_commit_message, parse_subject
from .models import Level, LintResult, Violation
from .rules import Rule, RuleSet, create_rule_set
from .config import Config
from .validator import lint, validate

__all__ = [
    'ConventionalSubject',
    'Footer',
    'FreeformSubject',
    'Message',
    'parse_commit_message',
    'parse_subject',
    'Level',
    'LintResult',
    'Violation',
    'Rule',
    'RuleSet',
    'create_rule_set',
    'Config',
    'lint',
    'validate',
]
