import json
import sys
import time
from typing import Optional

import typer

from jsonmend import JSONRepairError, repair_json
from jsonmend.batch import DEFAULT_MAX_WORKERS, DEFAULT_PATTERN, run_repair_pipeline
from jsonmend.parser import DEFAULT_MAX_DEPTH

app = typer.Typer(help="CLI for json-mend: turn broken JSON-like text into valid JSON.")


def _read_input(input_path: str) -> str:
    if input_path == "-":
        return sys.stdin.read()
    try:
        with open(input_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"❌ Error reading {input_path}: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("repair")
def repair(
    input_path: str = typer.Argument(..., help="File to repair, or - to read from stdin"),
    output_path: Optional[str] = typer.Option(
        None, "--output", "-o", help="Path to save the repaired JSON (prints it when omitted)"
    ),
    strict: bool = typer.Option(
        False, "--strict/--lenient",
        help="Fail on input that cannot be repaired instead of returning best-effort output"
    ),
    max_depth: int = typer.Option(DEFAULT_MAX_DEPTH, help="Maximum nesting depth"),
):
    """
    Repair a single JSON-like document.

    Examples:
        # Print the repaired document
        python cli.py repair broken.json

        # Repair from stdin and fail on anything unrepairable
        cat broken.json | python cli.py repair - --strict
    """
    text = _read_input(input_path)
    try:
        repaired = repair_json(text, strict=strict, max_depth=max_depth)
    except JSONRepairError as e:
        typer.echo(f"❌ {e.message} (position {e.position})", err=True)
        raise typer.Exit(code=1)

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(repaired)
        typer.echo(f"💾 Repaired JSON saved to: {output_path}")
    else:
        typer.echo(repaired)


@app.command("repair-dir")
def repair_dir(
    directory_path: str = typer.Argument(..., help="Directory containing files to repair"),
    output_dir: Optional[str] = typer.Option(
        None, "--output", "-o", help="Directory for repaired files (repairs in place when omitted)"
    ),
    pattern: str = typer.Option(DEFAULT_PATTERN, help="Glob pattern of files to repair"),
    max_workers: int = typer.Option(DEFAULT_MAX_WORKERS, help="Number of worker threads"),
    strict: bool = typer.Option(False, "--strict/--lenient", help="Fail files that cannot be repaired"),
    max_depth: int = typer.Option(DEFAULT_MAX_DEPTH, help="Maximum nesting depth"),
):
    """
    Repair every matching file in a directory using a thread pool.
    """
    typer.echo("🚀 Starting repair...\n")
    typer.echo(f"📁 Input directory: {directory_path}")
    typer.echo(f"⚙️  Workers: {max_workers}")
    typer.echo(f"🔎 Pattern: {pattern}\n")

    start = time.time()
    try:
        stats = run_repair_pipeline(
            directory_path=directory_path,
            output_dir=output_dir,
            pattern=pattern,
            max_workers=max_workers,
            strict=strict,
            max_depth=max_depth,
        )
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)
    end = time.time()
    stats["time_taken"] = end - start  # in seconds

    typer.echo("\n✅ Repair completed!\n")
    typer.echo("📊 Statistics:")
    typer.echo(f"  • Total files: {stats['total_files']}")
    typer.echo(f"  • Repaired: {stats['repaired']}")
    typer.echo(f"  • Unchanged: {stats['unchanged']}")
    typer.echo(f"  • Failed: {stats['failed']}")
    typer.echo(f"\n💾 Full statistics:\n{json.dumps(stats, indent=2)}")

    if stats["failed"]:
        raise typer.Exit(code=1)


@app.command("check")
def check(
    input_path: str = typer.Argument(..., help="File to check, or - to read from stdin"),
):
    """
    Report whether a document is valid JSON and whether it can be repaired.
    """
    text = _read_input(input_path)
    try:
        json.loads(text)
        typer.echo("✅ Valid JSON")
        return
    except ValueError:
        pass

    try:
        repaired = repair_json(text, strict=True)
    except JSONRepairError as e:
        typer.echo(f"❌ Not repairable: {e.message} (position {e.position})")
        raise typer.Exit(code=1)

    typer.echo("🔧 Invalid JSON, repairable")
    typer.echo(repaired)


if __name__ == "__main__":
    app()
