"""The DrupalVM question catalog.

Order matters: a question may only depend on questions declared above it.
"""

from __future__ import annotations

from src.scaffolder.features import FEATURE_CATALOG, SOLR_DEFAULT_VERSION

from .models import AnswerView, Choice, QuestionKind, QuestionSpec
from .validators import valid_cpu_count, valid_php_memory_limit

DRUPALVM_VERSIONS: tuple[str, ...] = ("master", "3.1.4")
DRUPAL_VERSIONS: tuple[str, ...] = ("7", "8")
SYNC_TYPES: tuple[str, ...] = ("nfs", "rsync", "smb")
WEBSERVERS: tuple[str, ...] = ("apache", "nginx")
DRUSH_VERSIONS: tuple[str, ...] = ("8.1.3", "7.3.0", "6.7.0", "5.11.0", "master")
PHP_VERSIONS: tuple[str, ...] = ("5.5", "5.6", "7.0")


def _is_new_workflow(answers: AnswerView) -> bool:
    return answers.get("workflow") == "new"


def _wants_drupal(answers: AnswerView) -> bool:
    return bool(answers.get("install_drupal"))


def _wants_solr(answers: AnswerView) -> bool:
    return "solr" in answers.get("packages", frozenset())


def _machine_name_default(answers: AnswerView) -> str:
    return str(answers["vagrant_hostname"])


def _selection_is_known(raw: object) -> bool:
    known = {rule.name for rule in FEATURE_CATALOG}
    return isinstance(raw, frozenset) and raw <= known


def build_questions(default_ip: str, docroot: str = "./docroot") -> tuple[QuestionSpec, ...]:
    """Return the ordered question list.

    Args:
        default_ip: Default VM IP, chosen by the environment probe.
        docroot: Where an existing Drupal instance is expected, for the
            ``install_drupal`` prompt text.
    """
    return (
        QuestionSpec(
            key="workflow",
            kind=QuestionKind.CHOICE,
            prompt="Specify your workflow type:",
            choices=("new", "exist"),
            default="new",
        ),
        QuestionSpec(
            key="drupalvm_version",
            kind=QuestionKind.CHOICE,
            prompt="Specify what version of DrupalVM you want to use:",
            choices=DRUPALVM_VERSIONS,
            default="3.1.4",
        ),
        QuestionSpec(
            key="install_drupal",
            kind=QuestionKind.BOOLEAN,
            prompt=(
                "Do you need to install Drupal? If not, you should provide your "
                f"own instance of Drupal at {docroot}"
            ),
            default=True,
            visible=_is_new_workflow,
            depends_on=("workflow",),
        ),
        QuestionSpec(
            key="drupal_version",
            kind=QuestionKind.CHOICE,
            prompt="What version of Drupal do you want to install?",
            choices=DRUPAL_VERSIONS,
            default="7",
            visible=_wants_drupal,
            depends_on=("install_drupal",),
        ),
        QuestionSpec(
            key="vagrant_hostname",
            kind=QuestionKind.TEXT,
            prompt=(
                "Enter a hostname for the VM. No spaces or symbols. Vagrant will "
                "automatically append your hostfile for you."
            ),
            default="drupalvm.dev",
        ),
        QuestionSpec(
            key="vagrant_machine_name",
            kind=QuestionKind.TEXT,
            prompt="Enter a machine name for the VM. No spaces or symbols.",
            default=_machine_name_default,
            depends_on=("vagrant_hostname",),
        ),
        QuestionSpec(
            key="vagrant_ip",
            kind=QuestionKind.TEXT,
            prompt="What IP do you want to use for the VM?",
            default=default_ip,
        ),
        QuestionSpec(
            key="sync_type",
            kind=QuestionKind.CHOICE,
            prompt="Select the method of file sync you want.",
            choices=SYNC_TYPES,
            default="nfs",
        ),
        QuestionSpec(
            key="vagrant_memory",
            kind=QuestionKind.TEXT,
            prompt="How much memory (in MB) do you want to allot to this virtual machine?",
            default="2048",
        ),
        QuestionSpec(
            key="vagrant_cpus",
            kind=QuestionKind.TEXT,
            prompt="How many CPUs for this virtual machine?",
            default="2",
            validate=valid_cpu_count,
        ),
        QuestionSpec(
            key="drupalvm_webserver",
            kind=QuestionKind.CHOICE,
            prompt="Do you want to use Apache or Nginx?",
            choices=WEBSERVERS,
            default="nginx",
        ),
        QuestionSpec(
            key="drush_version",
            kind=QuestionKind.CHOICE,
            prompt="Which Drush version do you want to use?",
            choices=DRUSH_VERSIONS,
            default="8.1.3",
        ),
        QuestionSpec(
            key="packages",
            kind=QuestionKind.MULTI_SELECT,
            prompt="Which packages would you like to install?",
            choices=tuple(Choice(rule.name, rule.selected) for rule in FEATURE_CATALOG),
            validate=_selection_is_known,
        ),
        QuestionSpec(
            key="php_version",
            kind=QuestionKind.CHOICE,
            prompt="What version of PHP do you want to use?",
            choices=PHP_VERSIONS,
            default="7.0",
        ),
        QuestionSpec(
            key="php_memory_limit",
            kind=QuestionKind.TEXT,
            prompt="How much memory do you want to allocate to PHP?",
            default="256",
            validate=valid_php_memory_limit,
        ),
        QuestionSpec(
            key="solr_version",
            kind=QuestionKind.TEXT,
            prompt="What version of Solr do you want to install?",
            default=SOLR_DEFAULT_VERSION,
            visible=_wants_solr,
            depends_on=("packages",),
        ),
    )
