"""Projection of an answer set into the template context.

``project`` is a pure function: the same answers always give an equal
context, and nothing outside the answers influences the result.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .features import FEATURE_CATALOG

PASS_THROUGH_KEYS: tuple[str, ...] = (
    "workflow",
    "drupalvm_version",
    "vagrant_hostname",
    "vagrant_machine_name",
    "vagrant_ip",
    "sync_type",
    "vagrant_memory",
    "vagrant_cpus",
    "drupalvm_webserver",
    "drush_version",
    "php_version",
    "php_memory_limit",
)

DRUPAL_CORE_BRANCHES: dict[str, str] = {
    "7": "7.x",
    "8": "8.1.x",
}

# Branch used when no Drupal version was asked for.
FALLBACK_CORE_BRANCH = DRUPAL_CORE_BRANCHES["8"]


def selected_features(answers: Mapping[str, Any]) -> frozenset[str]:
    """The feature toggle set held by the ``packages`` answer."""
    return frozenset(answers.get("packages", ()))


def project(answers: Mapping[str, Any]) -> dict[str, Any]:
    """Build the template context for *answers*.

    Args:
        answers: A resolved answer set from ``QuestionPipeline``.

    Returns:
        A new dictionary. For every catalog feature it holds an
        ``install_<name>`` line (active or commented), plus the numeric flag
        and sub-version the feature declares.
    """
    features = selected_features(answers)

    context: dict[str, Any] = {key: answers.get(key, "") for key in PASS_THROUGH_KEYS}
    context["install_drupal"] = bool(answers.get("install_drupal", False))
    drupal_version = str(answers.get("drupal_version", ""))
    context["drupal_version"] = drupal_version
    context["drupal_core_branch"] = DRUPAL_CORE_BRANCHES.get(drupal_version, FALLBACK_CORE_BRANCH)
    context["packages"] = sorted(features)

    for rule in FEATURE_CATALOG:
        enabled = rule.name in features
        context[rule.line_key] = rule.active_line if enabled else rule.commented_line
        if rule.numeric_flag:
            context[rule.numeric_flag] = 1 if enabled else 0
        if rule.version_key:
            chosen = answers.get(rule.version_key) if enabled else None
            context[rule.version_key] = chosen or rule.default_version

    return context
