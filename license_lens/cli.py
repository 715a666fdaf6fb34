"""CLI entry point: license-lens.

Subcommands:
    license-lens check                          # table report for the current project
    license-lens check --format json            # machine-readable report
    license-lens check --disallow GPL-3.0,AGPL-3.0 --warn LGPL-3.0

Exit codes: 0 pass, 1 policy failure, 2 usage error (click), 3 precondition failure.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click
import structlog

from license_lens.config import find_project_root, load_config
from license_lens.core.logging import setup_logging
from license_lens.engines.license_scanner import scan
from license_lens.engines.license_scanner.scanner import STORE_DIR
from license_lens.engines.policy_evaluator import evaluate
from license_lens.exceptions import DependencyTreeNotFoundError, LicenseLensError
from license_lens.report import render_json, render_table

log = structlog.get_logger("license_lens.cli")

EXIT_OK = 0
EXIT_FAIL = 1
EXIT_PRECONDITION = 3  # click reserves 2 for usage errors


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """License Lens: audit installed dependency licenses against a policy."""
    setup_logging("DEBUG" if verbose else None)
    if ctx.invoked_subcommand is None:
        ctx.invoke(check)


@main.command("check")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Start directory for project-root discovery (default: cwd)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Policy config file (default: <root>/license-lens.config.json)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Report format",
)
@click.option("--disallow", default=None, help="Comma-separated licenses that fail the check")
@click.option("--warn", default=None, help="Comma-separated licenses that only warn")
@click.option(
    "--no-allow-unlicensed",
    is_flag=True,
    help="Treat packages without a license as errors",
)
def check(
    root: Path | None = None,
    config_path: Path | None = None,
    output_format: str = "table",
    disallow: str | None = None,
    warn: str | None = None,
    no_allow_unlicensed: bool = False,
) -> None:
    """Scan node_modules and evaluate licenses against the policy."""
    project_root = find_project_root(root or Path.cwd())
    try:
        config = load_config(
            project_root,
            config_path,
            disallow=disallow,
            warn=warn,
            no_allow_unlicensed=no_allow_unlicensed,
        )
        tree = project_root / STORE_DIR
        if not tree.exists():
            raise DependencyTreeNotFoundError(str(tree))
    except LicenseLensError as e:
        click.echo(f"✖ {e}", err=True)
        sys.exit(EXIT_PRECONDITION)

    log.debug("cli.check", root=str(project_root), format=output_format)
    report = evaluate(scan(tree), config)

    if output_format == "json":
        click.echo(render_json(report, config))
    else:
        click.echo(render_table(report, config))

    sys.exit(EXIT_FAIL if report.fail else EXIT_OK)


if __name__ == "__main__":
    main()
