"""Scoring of resource URLs and HTML documents against rules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from bloodhound.htmldoc import Node, NodeType
from bloodhound.rules import Level, Rule
from bloodhound.utils import contains_any

logger = logging.getLogger(__name__)

_SKIPPED_NODE_TYPES = frozenset({NodeType.ERROR, NodeType.DOCUMENT, NodeType.DOCTYPE})


@dataclass(frozen=True)
class EvaluationResult:
    """Score collected from rules, and whether the resource is to be dropped."""

    score: int = 0
    remove: bool = False


def evaluate_url(url: str, rules: Iterable[Rule]) -> EvaluationResult:
    """Score a URL against resource-level rules."""
    score = 0
    for rule in rules:
        if rule.level is not Level.RESOURCE or not rule.content.matches:
            continue
        if contains_any(url, rule.content.matches):
            if rule.remove:
                return EvaluationResult(0, True)
            score += rule.value
    return EvaluationResult(score, False)


def evaluate_html(document: Node | None, rules: Iterable[Rule]) -> EvaluationResult:
    """Score a parsed document against content-level rules; each rule counts once."""
    if document is None:
        return EvaluationResult()

    rule_list = list(rules)
    score = 0
    matched: set[str] = set()

    for node in document.descendants():
        if node.type in _SKIPPED_NODE_TYPES:
            continue
        for rule in rule_list:
            if rule.level is not Level.CONTENT:
                logger.debug("Unable to evaluate rule %r: incompatible rule level", rule.name)
                continue
            if rule.name in matched:
                continue
            if _node_matches_rule(node, rule):
                if rule.remove:
                    logger.debug("Rule %r with remove matched, resource skipped", rule.name)
                    return EvaluationResult(0, True)
                score += rule.value
                matched.add(rule.name)

    return EvaluationResult(score, False)


def _node_matches_rule(node: Node, rule: Rule) -> bool:
    if rule.content.element:
        return _node_matches_element(node, rule)
    if rule.content.matches:
        return _node_matches_text(node, rule)
    return False


def _node_matches_element(node: Node, rule: Rule) -> bool:
    if node.type is not NodeType.ELEMENT or node.data != rule.content.element:
        return False
    attrs = node.attr_map()
    for key, value in rule.content.attr.items():
        if key in attrs and attrs[key] != value:
            return False
    logger.debug("Content level rule %r matched", rule.name)
    return True


def _node_matches_text(node: Node, rule: Rule) -> bool:
    if node.type is not NodeType.TEXT:
        return False
    if contains_any(node.data, rule.content.matches):
        logger.debug("Content level rule %r matched", rule.name)
        return True
    return False