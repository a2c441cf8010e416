"""Commit message validation."""
from .config import Config
from .message import Message
from .models import LintResult


async def validate(message: Message, config: Config) -> LintResult:
    """Validate a parsed message against the configured rules.

    Violations are returned exactly as the rule set produced them. Errors
    raised by the rules are not caught here.
    """
    violations = config.rules.validate(message)
    return LintResult(violations=violations)


async def lint(raw: str, config: Config) -> LintResult:
    """Parse and validate a raw commit message."""
    return await validate(Message.parse(raw), config)
