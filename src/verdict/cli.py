"""Command line entry point."""

from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="verdict", help="Evaluate comparisons and report failures")


@app.command()
def check(
    config: str = typer.Argument(help="Path to check YAML file"),
    junit: str | None = typer.Option(None, help="Write a JUnit XML report to this path"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str = typer.Option(
        ".verdict/debug.log", "--debug-log", help="Path of the debug log file"
    ),
):
    """Run the checks in a YAML file."""
    import yaml

    from verdict.config import load_config
    from verdict.runner import run_checks
    from verdict.verbose import close_logger, setup_logger

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: check file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        check_file = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger = setup_logger(Path(debug_log), verbose=verbose)
    try:
        outcomes = run_checks(check_file, logger)
    finally:
        close_logger(logger)

    failed = 0
    for outcome in outcomes:
        if outcome.passed:
            typer.echo(f"PASS {outcome.name}")
            continue
        failed += 1
        typer.echo(f"FAIL {outcome.name}")
        for line in outcome.message.strip("\n").splitlines():
            typer.echo(f"    {line}")

    typer.echo(f"{len(outcomes)} checks, {failed} failed")

    if junit is not None:
        from verdict.reporting.junit import write_junit

        junit_path = write_junit(Path(junit), outcomes, suite_name=config_path.stem)
        typer.echo(f"JUnit report: {junit_path}")

    if failed:
        raise typer.Exit(1)


@app.command()
def diff(
    left: str = typer.Argument(help="Path to the left-hand file"),
    right: str = typer.Argument(help="Path to the right-hand file"),
    context: int = typer.Option(3, "--context", "-c", min=0, help="Lines of context"),
):
    """Show the unified diff of two text files; exit 1 if they differ."""
    from verdict.compare import equal_multi_line, evaluate

    texts = []
    for path in (Path(left), Path(right)):
        if not path.is_file():
            typer.echo(f"Error: file not found: {path}", err=True)
            raise typer.Exit(1)
        texts.append(path.read_text())

    passed, message = evaluate(
        equal_multi_line(
            texts[0], texts[1], context=context, from_file=left, to_file=right
        )
    )
    if passed:
        typer.echo("No differences.")
        return
    typer.echo(message.lstrip("\n"), nl=False)
    raise typer.Exit(1)


@app.command()
def schema(
    out: str | None = typer.Option(
        None, help="Write the JSON Schema to this path instead of stdout"
    ),
):
    """Print the JSON Schema of the check file format."""
    from verdict.schema import render_json_schema, write_json_schema

    if out is None:
        typer.echo(render_json_schema(), nl=False)
        return
    write_json_schema(Path(out))
    typer.echo(f"Wrote schema: {out}")
