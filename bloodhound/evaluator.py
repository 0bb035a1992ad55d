"""The evaluation pipeline: score, fetch, score again, and rank target URLs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from bloodhound.client import ClientConfig
from bloodhound.evaluation import evaluate_html, evaluate_url
from bloodhound.pipeline import Context, retrieve_resource
from bloodhound.rules import Level, Ruleset

logger = logging.getLogger(__name__)


def apply_resource_rules(ruleset: Ruleset, contexts: Iterable[Context]) -> Iterator[Context]:
    """Score contexts by their URL, dropping those a remove rule matches."""
    resource_rules = ruleset.get_rules(Level.RESOURCE)
    for context in contexts:
        evaluation = evaluate_url(context.url, resource_rules)
        logger.debug("Resource level evaluation of %s: %s", context.url, evaluation)
        if not evaluation.remove:
            context.add_score(evaluation.score)
            yield context


def apply_content_rules(ruleset: Ruleset, contexts: Iterable[Context]) -> Iterator[Context]:
    """Score contexts by their document, dropping those a remove rule matches."""
    content_rules = ruleset.get_rules(Level.CONTENT)
    for context in contexts:
        evaluation = evaluate_html(context.content, content_rules)
        logger.debug("Content level evaluation of %s: %s", context.url, evaluation)
        if not evaluation.remove:
            context.add_score(evaluation.score)
            yield context


def rank(contexts: Iterable[Context]) -> list[Context]:
    """Return the contexts ordered by score, highest first."""
    return sorted(contexts, key=lambda context: context.score, reverse=True)


def evaluate(target_urls: Iterable[str], ruleset: Ruleset, client_config: ClientConfig) -> list[Context]:
    """Run every target URL through the pipeline and return them ranked by score."""
    targets = list(target_urls)
    contexts = (Context(url) for url in targets)
    scored = apply_resource_rules(ruleset, contexts)
    fetched = retrieve_resource(client_config, scored)
    evaluated = apply_content_rules(ruleset, fetched)
    logger.info(
        "Initialized evaluation pipeline for %d targets and %d rules",
        len(targets),
        len(ruleset.rules),
    )

    finished = []
    for context in evaluated:
        logger.info("Finished processing target %s with score %d", context.url, context.score)
        finished.append(context)
    return rank(finished)