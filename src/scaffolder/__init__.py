"""DrupalVM workspace scaffolder -- context projection and template output.

Quick usage::

    from src.scaffolder import materialize, project

    context = project(answers)
    await materialize(template_dir, vm_path, context)
"""

from src.scaffolder.context import project, selected_features
from src.scaffolder.features import FEATURE_CATALOG, FeatureRule
from src.scaffolder.gitignore import append_gitignore_entries
from src.scaffolder.materializer import materialize
from src.scaffolder.templates import TemplateRenderError, TemplateRenderer

__all__ = [
    "FEATURE_CATALOG",
    "FeatureRule",
    "TemplateRenderError",
    "TemplateRenderer",
    "append_gitignore_entries",
    "materialize",
    "project",
    "selected_features",
]
