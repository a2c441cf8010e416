"""Commit message parsing.

A commit message following the Conventional Commits format looks like::

    <type>[optional scope][!]: <description>

    [optional body]

    [optional footer(s)]

Parsing never fails. Anything that can't be decomposed is represented by
absent (``None``) fields, and it is up to the rules to report it.
"""
import re
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

SUBJECT_PATTERN = re.compile(
    r"^(?P<type>[^\s()!:]+)"
    r"(?:\((?P<scope>[^()]+)\))?"
    r"(?P<breaking>!)?"
    r": (?P<description>\S.*)$"
)

FOOTER_PATTERN = re.compile(
    r"^(?P<token>BREAKING CHANGE|[^\s:#]+)"
    r"(?:: (?P<value>.*)| #(?P<reference>.*))$"
)

BREAKING_TOKENS = ("BREAKING CHANGE", "BREAKING-CHANGE")

LINE_BREAK = re.compile(r"\r?\n")


class Footer(BaseModel):
    """A single trailer line, e.g. ``Refs: #123`` or ``Closes #42``."""

    model_config = ConfigDict(frozen=True)

    token: str
    value: str


class ConventionalSubject(BaseModel):
    """A subject that matched ``type(scope)!: description``."""

    model_config = ConfigDict(frozen=True)

    text: str
    type: str
    scope: Optional[str] = None
    breaking: bool = False
    description: str


class FreeformSubject(BaseModel):
    """A subject that doesn't follow the conventional format."""

    model_config = ConfigDict(frozen=True)

    text: str


Subject = Union[ConventionalSubject, FreeformSubject]


def _is_blank(line: str) -> bool:
    return not line.strip()


def parse_subject(subject: str) -> Optional[Tuple[str, Optional[str], bool, str]]:
    """Split a subject into type, scope, breaking marker and description.

    Only the first line of the subject is considered.

    Args:
        subject: The subject text, already separated from body and footers

    Returns:
        Optional[Tuple]: ``(type, scope, breaking, description)`` or None if
        the subject doesn't follow the conventional format
    """
    first_line = subject.split("\n", 1)[0]
    match = SUBJECT_PATTERN.match(first_line)
    if not match:
        return None

    description = match.group("description").rstrip()
    return (
        match.group("type"),
        match.group("scope"),
        match.group("breaking") is not None,
        description,
    )


def parse_footer(line: str) -> Optional[Footer]:
    """Parse a single trailer line, returning None if it isn't one."""
    match = FOOTER_PATTERN.match(line.rstrip())
    if not match:
        return None
    value = match.group("value")
    if value is None:
        value = match.group("reference")
    return Footer(token=match.group("token"), value=value.strip())


def parse_commit_message(
    raw: str,
) -> Tuple[str, Optional[str], Optional[List[Footer]]]:
    """Split a raw commit message into subject, body and footers.

    The subject is the first paragraph. Footers are the longest run of
    trailer lines at the end of the message; everything between the
    subject and the footers is the body.

    Args:
        raw: The full commit message

    Returns:
        Tuple: ``(subject, body, footers)``; body and footers are None when
        the message doesn't have them
    """
    lines = LINE_BREAK.split(raw)

    start = 0
    while start < len(lines) and _is_blank(lines[start]):
        start += 1

    end = start
    while end < len(lines) and not _is_blank(lines[end]):
        end += 1

    subject = "\n".join(lines[start:end]).strip()

    # Nothing after the subject paragraph
    if end >= len(lines):
        return subject, None, None

    rest = lines[end + 1:]
    while rest and _is_blank(rest[-1]):
        rest.pop()

    footers: List[Footer] = []
    boundary = len(rest)
    while boundary > 0:
        footer = parse_footer(rest[boundary - 1])
        if footer is None:
            break
        footers.insert(0, footer)
        boundary -= 1

    body_lines = rest[:boundary]
    while body_lines and _is_blank(body_lines[0]):
        body_lines.pop(0)
    while body_lines and _is_blank(body_lines[-1]):
        body_lines.pop()

    body = "\n".join(body_lines) if body_lines else None
    return subject, body, footers or None


class Message(BaseModel):
    """A parsed commit message.

    Build one with :meth:`Message.parse`; instances are immutable.
    """

    model_config = ConfigDict(frozen=True)

    raw: str
    header: Subject
    body: Optional[str] = None
    footers: Optional[Dict[str, str]] = None
    trailers: Tuple[Footer, ...] = ()

    @classmethod
    def parse(cls, raw: str) -> "Message":
        """Parse a raw commit message. This never raises."""
        subject, body, footer_list = parse_commit_message(raw)

        parsed = parse_subject(subject)
        if parsed is None:
            header: Subject = FreeformSubject(text=subject)
        else:
            commit_type, scope, breaking, description = parsed
            header = ConventionalSubject(
                text=subject,
                type=commit_type,
                scope=scope,
                breaking=breaking,
                description=description,
            )

        footers = None
        if footer_list:
            footers = {}
            for footer in footer_list:
                # Repeated tokens keep the last value, all pairs stay in trailers
                footers[footer.token] = footer.value

        return cls(
            raw=raw,
            header=header,
            body=body,
            footers=footers,
            trailers=tuple(footer_list or ()),
        )

    new = parse

    @property
    def subject(self) -> Optional[str]:
        return self.header.text

    @property
    def is_conventional(self) -> bool:
        return isinstance(self.header, ConventionalSubject)

    @property
    def type(self) -> Optional[str]:
        if isinstance(self.header, ConventionalSubject):
            return self.header.type
        return None

    @property
    def scope(self) -> Optional[str]:
        if isinstance(self.header, ConventionalSubject):
            return self.header.scope
        return None

    @property
    def description(self) -> Optional[str]:
        if isinstance(self.header, ConventionalSubject):
            return self.header.description
        return None

    @property
    def breaking(self) -> bool:
        """True for a ``!`` marker or a breaking-change footer."""
        if isinstance(self.header, ConventionalSubject) and self.header.breaking:
            return True
        return any(footer.token in BREAKING_TOKENS for footer in self.trailers)
