"""Optional DrupalVM packages and how each one projects into the template context.

Every package offered by the ``packages`` question has exactly one
``FeatureRule``. The context projector iterates this catalog, so a package
cannot be offered without a projection rule.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FeatureRule:
    """Projection rule for one optional package.

    Attributes:
        name: Package name as understood by DrupalVM's ``installed_extras``.
        selected: Whether the package is pre-selected in the prompt.
        numeric_flag: Context key receiving ``1``/``0``, for templates that
            need a boolean rather than a list line.
        version_key: Answer key holding a package-specific version, honoured
            only while the package is selected.
        default_version: Version used whenever ``version_key`` is not honoured.
    """

    name: str
    selected: bool = False
    numeric_flag: str | None = None
    version_key: str | None = None
    default_version: str | None = None

    @property
    def line_key(self) -> str:
        return f"install_{self.name}"

    @property
    def active_line(self) -> str:
        return f"- {self.name}"

    @property
    def commented_line(self) -> str:
        return f"#{self.active_line}"


SOLR_DEFAULT_VERSION = "4.10.4"

FEATURE_CATALOG: tuple[FeatureRule, ...] = (
    FeatureRule("adminer", selected=True),
    FeatureRule("mailhog", selected=True),
    FeatureRule("memcached"),
    FeatureRule("nodejs"),
    FeatureRule("pimpmylog"),
    FeatureRule("ruby"),
    FeatureRule("selenium"),
    FeatureRule(
        "solr",
        version_key="solr_version",
        default_version=SOLR_DEFAULT_VERSION,
    ),
    FeatureRule("varnish"),
    FeatureRule("xdebug", numeric_flag="enable_xdebug"),
    FeatureRule("xhprof"),
)

FEATURE_NAMES: frozenset[str] = frozenset(rule.name for rule in FEATURE_CATALOG)


def get_feature(name: str) -> FeatureRule:
    """Look up a catalog entry by package name."""
    for rule in FEATURE_CATALOG:
        if rule.name == name:
            return rule
    raise KeyError(name)
