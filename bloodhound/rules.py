"""Rule definitions and YAML ruleset loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml


class RulesetError(Exception):
    """Raised when a ruleset cannot be read, parsed or validated."""


class Level(str, Enum):
    """The stage of evaluation a rule applies to."""

    UNKNOWN = ""
    RESOURCE = "resource"
    CONTENT = "content"


@dataclass
class RuleContent:
    """What a rule looks for: substrings, or an element with attributes."""

    element: str = ""
    attr: dict[str, str] = field(default_factory=dict)
    matches: list[str] = field(default_factory=list)


@dataclass
class Rule:
    """A named scoring rule."""

    name: str = ""
    value: int = 0
    level: Level = Level.UNKNOWN
    remove: bool = False
    content: RuleContent = field(default_factory=RuleContent)

    def is_valid(self) -> bool:
        """Check that the rule's content suits its level."""
        if self.level is Level.RESOURCE:
            return bool(self.content.matches)
        if self.level is Level.CONTENT:
            return bool(self.content.matches) or self.content.element != ""
        return False


@dataclass
class Ruleset:
    """A named collection of rules."""

    name: str = ""
    rules: list[Rule] = field(default_factory=list)

    def get_rules(self, level: Level) -> list[Rule]:
        """Return the rules of the given level, in ruleset order."""
        return [rule for rule in self.rules if rule.level == level]


def match_content(matches) -> RuleContent:
    """Build rule content that matches any of the given substrings."""
    return RuleContent(matches=list(matches))


def element_content(element: str, attr) -> RuleContent:
    """Build rule content that matches an element, optionally with attributes."""
    return RuleContent(element=element, attr=dict(attr or {}))


def resource_rule(name: str, value: int, remove: bool, content: RuleContent) -> Rule:
    """Build a rule evaluated against the resource URL."""
    return Rule(name=name, value=value, level=Level.RESOURCE, remove=remove, content=content)


def content_rule(name: str, value: int, remove: bool, content: RuleContent) -> Rule:
    """Build a rule evaluated against the retrieved document."""
    return Rule(name=name, value=value, level=Level.CONTENT, remove=remove, content=content)


def _mapping(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping")
    return value


def _string(value: Any, what: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{what} must be a string")


def _integer(value: Any, what: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer")
    return value


def _boolean(value: Any, what: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{what} must be a boolean")
    return value


def _strings(value: Any, what: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what} must be a list")
    return [_string(item, what) for item in value]


def _level(value: Any) -> Level:
    text = _string(value, "level")
    try:
        return Level(text)
    except ValueError:
        return Level.UNKNOWN


def _decode_content(data: Any) -> RuleContent:
    mapping = _mapping(data, "content")
    attr = {
        _string(key, "attr key"): _string(val, "attr value")
        for key, val in _mapping(mapping.get("attr"), "attr").items()
    }
    return RuleContent(
        element=_string(mapping.get("element"), "element"),
        attr=attr,
        matches=_strings(mapping.get("matches"), "matches"),
    )


def _decode_rule(data: Any) -> Rule:
    mapping = _mapping(data, "rule")
    return Rule(
        name=_string(mapping.get("name"), "name"),
        value=_integer(mapping.get("value"), "value"),
        level=_level(mapping.get("level")),
        remove=_boolean(mapping.get("remove"), "remove"),
        content=_decode_content(mapping.get("content")),
    )


def _decode_ruleset(data: Any) -> Ruleset:
    mapping = _mapping(data, "ruleset")
    raw_rules = mapping.get("rules")
    if raw_rules is None:
        raw_rules = []
    if not isinstance(raw_rules, list):
        raise ValueError("rules must be a list")
    return Ruleset(
        name=_string(mapping.get("name"), "name"),
        rules=[_decode_rule(item) for item in raw_rules],
    )


def parse_ruleset(text) -> Ruleset:
    """Parse and validate a ruleset from YAML text."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RulesetError(f"unable to parse ruleset file. Reason: {exc}") from exc
    try:
        ruleset = _decode_ruleset(data)
    except ValueError as exc:
        raise RulesetError(f"unable to parse ruleset file. Reason: {exc}") from exc

    for rule in ruleset.rules:
        if not rule.is_valid():
            raise RulesetError(
                f"unable to parse rule named '{rule.name}'. "
                "Reason: Invalid rule configurations"
            )
    return ruleset


def load_ruleset(path) -> Ruleset:
    """Read, parse and validate a ruleset file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise RulesetError(f"unable to open ruleset file. Reason: {exc}") from exc
    return parse_ruleset(data)