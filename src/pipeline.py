"""DrupalVM generator pipeline orchestrator.

Runs the generator steps strictly in order:

Step 1: PROBE       -- Detect the vagrant-auto_network plugin (default IP hint).
Step 2: QUESTIONS   -- Resolve the question pipeline and project the context.
Step 3: PREPARE     -- Create the ``vm/`` destination (idempotent).
Step 4: ACQUIRE     -- Clone the pinned DrupalVM version into ``vm/``.
Step 5: MATERIALIZE -- Render the configuration templates into ``vm/``.
Step 6: FINALIZE    -- Append ignore entries to the workspace ``.gitignore``.

Usage::

    python -m src.pipeline
    python -m src.pipeline --workspace ./my-site --answers answers.json
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
import traceback
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from rich.markup import escape

from src.acquirer import AcquisitionError, ResourceAcquirer, VersionControlClient
from src.config import Config
from src.environment import (
    PluginLister,
    VagrantPluginLister,
    default_vm_ip,
    has_local_network_plugin,
)
from src.questions import (
    AnswerValidationError,
    Prompter,
    QuestionPipeline,
    RichPrompter,
    build_questions,
)
from src.scaffolder import TemplateRenderError, append_gitignore_entries, materialize, project
from src.utils import (
    STEP_NAMES,
    console,
    format_duration,
    load_json,
    print_banner,
    print_error,
    print_step_header,
    print_success,
    print_summary_table,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a generator step fails irrecoverably."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step} ({STEP_NAMES.get(step, '?')}): {message}")


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives one generator run.

    Attributes:
        config: Run configuration.
        state: Results accumulated by each step (answers, context, paths).
        supplied_answers: Answer map for non-interactive runs, or ``None`` to
            prompt through ``prompter``.
    """

    _STEP_METHODS: dict[int, str] = {
        1: "step_probe",
        2: "step_questions",
        3: "step_prepare",
        4: "step_acquire",
        5: "step_materialize",
        6: "step_finalize",
    }

    def __init__(
        self,
        config: Config,
        *,
        prompter: Prompter | None = None,
        supplied_answers: Mapping[str, Any] | None = None,
        vcs_client: VersionControlClient | None = None,
        plugin_lister: PluginLister | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or RichPrompter()
        self.supplied_answers = supplied_answers
        self.plugin_lister = plugin_lister or VagrantPluginLister(timeout=config.probe_timeout)
        self.acquirer = ResourceAcquirer(
            vcs_client,
            repository_url=config.repository_url,
            timeout=config.clone_timeout,
        )
        self.state: dict[str, Any] = {
            "steps_completed": [],
            "steps_failed": [],
            "success": False,
        }

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def step_probe(self) -> dict[str, Any]:
        has_plugin = await has_local_network_plugin(self.plugin_lister)
        default_ip = default_vm_ip(has_plugin)
        self.state["default_ip"] = default_ip
        console.print(f"  auto_network plugin: {'found' if has_plugin else 'not found'}")
        return {"auto_network": has_plugin, "default_ip": default_ip}

    async def step_questions(self) -> dict[str, Any]:
        docroot = str(self.config.workspace_root / "docroot")
        questions = QuestionPipeline(build_questions(self.state["default_ip"], docroot=docroot))

        if self.supplied_answers is not None:
            try:
                answers = questions.resolve(self.supplied_answers)
            except AnswerValidationError as exc:
                raise PipelineError(2, str(exc)) from exc
        else:
            answers = questions.ask(self.prompter)

        self.state["answers"] = answers
        self.state["context"] = project(answers)
        print_summary_table(
            {key: _display(value) for key, value in answers.items()},
            title="Your answers",
        )
        return {"questions_answered": len(answers)}

    async def step_prepare(self) -> dict[str, Any]:
        vm_path = self.config.ensure_directories()
        console.print(f"  Destination ready: [cyan]{escape(str(vm_path))}[/cyan]")
        return {"vm_path": str(vm_path)}

    async def step_acquire(self) -> dict[str, Any]:
        version = str(self.state["answers"]["drupalvm_version"])
        try:
            await self.acquirer.acquire(version, self.config.vm_path)
        except AcquisitionError as exc:
            raise PipelineError(4, f"Git clone DrupalVM failed: {exc}") from exc
        return {"version": version}

    async def step_materialize(self) -> dict[str, Any]:
        try:
            written = await materialize(
                self.config.template_dir, self.config.vm_path, self.state["context"]
            )
        except TemplateRenderError as exc:
            raise PipelineError(5, f"Template/context mismatch: {exc}") from exc
        for path in written:
            console.print(f"  [green]+[/green] {escape(str(path))}")
        return {"files_written": [str(p) for p in written]}

    async def step_finalize(self) -> dict[str, Any]:
        path = append_gitignore_entries(self.config.gitignore_path, self.config.gitignore_entries)
        console.print(f"  Updated [cyan]{escape(str(path))}[/cyan]")
        return {"gitignore": str(path)}

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    async def run(self) -> dict[str, Any]:
        """Execute every step in order, stopping at the first failure.

        Returns:
            The state dictionary, including a top-level ``success`` boolean.
        """
        start = time.monotonic()
        all_success = True

        for step_num in sorted(self._STEP_METHODS):
            step_name = STEP_NAMES[step_num]
            print_step_header(step_num, step_name)
            method = getattr(self, self._STEP_METHODS[step_num])
            try:
                self.state[f"step{step_num}"] = await method()
                self.state["steps_completed"].append(step_num)
            except PipelineError as exc:
                all_success = False
                self.state["steps_failed"].append(step_num)
                self.state[f"step{step_num}_error"] = str(exc)
                print_error(escape(str(exc)))
                # Later steps write into what earlier ones produced.
                break
            except Exception as exc:
                all_success = False
                self.state["steps_failed"].append(step_num)
                tb = traceback.format_exc()
                self.state[f"step{step_num}_error"] = tb
                print_error(escape(f"Step {step_num} ({step_name}) FAILED: {exc}"))
                console.print(f"[dim]{escape(tb)}[/dim]")
                break

        self.state["success"] = all_success
        self.state["total_duration"] = format_duration(time.monotonic() - start)
        if all_success:
            self._print_next_steps()
        return self.state

    def _print_next_steps(self) -> None:
        destination = self.config.vm_path
        console.print()
        print_success("Complete!")
        console.print(
            f"\nNext steps:\n"
            f"   -- Navigate to [yellow]{escape(str(destination))}[/yellow] and run the "
            f"[magenta]vagrant up[/magenta] command.\n"
            f"   -- Read the README at {escape(str(self.config.readme_path))} or online at "
            f"http://docs.drupalvm.com/en/latest"
        )


def _display(value: Any) -> str:
    if isinstance(value, frozenset):
        return ", ".join(sorted(value)) or "(none)"
    return str(value)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drupalvm-generator",
        description="Scaffold a DrupalVM workspace from a few questions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.pipeline\n"
            "  python -m src.pipeline -w ./my-site --defaults\n"
            "  python -m src.pipeline -w ./my-site --answers answers.json\n"
        ),
    )
    parser.add_argument(
        "--workspace", "-w",
        type=Path,
        default=None,
        help="Workspace root; vm/ and .gitignore are written here (default: cwd)",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--answers",
        type=Path,
        default=None,
        help="JSON file of answers; skips prompting",
    )
    source.add_argument(
        "--defaults",
        action="store_true",
        help="Accept every default without prompting",
    )
    parser.add_argument(
        "--template-dir",
        type=Path,
        default=None,
        help="Alternative configuration template directory",
    )
    parser.add_argument(
        "--repository-url",
        default=None,
        help="Alternative DrupalVM repository URL",
    )
    parser.add_argument(
        "--clone-timeout",
        type=int,
        default=None,
        help="Seconds allowed for git clone (default: 600)",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Skip the start banner",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``python -m src.pipeline``."""
    args = build_parser().parse_args(argv)

    supplied: Mapping[str, Any] | None = None
    if args.answers is not None:
        try:
            supplied = load_json(args.answers)
        except (OSError, ValueError) as exc:
            print_error(
                f"Error: cannot read answers file {escape(str(args.answers))}: "
                f"{escape(str(exc))}"
            )
            sys.exit(1)
    elif args.defaults:
        supplied = {}

    config = Config.from_env(
        workspace_root=args.workspace,
        template_dir=args.template_dir,
        repository_url=args.repository_url,
        clone_timeout=args.clone_timeout,
    )

    if not args.no_banner:
        print_banner()

    pipeline = Pipeline(config, supplied_answers=supplied)
    try:
        result = asyncio.run(pipeline.run())
    except KeyboardInterrupt:
        print_error("Aborted.")
        sys.exit(130)

    if not result.get("success"):
        sys.exit(1)


if __name__ == "__main__":
    main()
