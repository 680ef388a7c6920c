"""
structai CLI.

Usage:
    structai render structured_json_v1 --var instructions="..."   # Show rendered prompts
    structai extract response.txt                                 # Pull the JSON object out of model text
    cat response.txt | structai extract                           # Same, from stdin
    structai call structured_json_v1 --var instructions="..."     # Run a prompt, print parsed JSON
    structai config                                               # Verify configuration
"""

import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from structai import __version__
from structai.config import get_settings
from structai.errors import AIError, TemplateNotFoundError
from structai.logging_config import setup_logging
from structai.observability import RequestContext
from structai.orchestration import create_orchestrator, extract_json_object
from structai.prompting import FileTemplateSource, PromptId, render

VarOption = typer.Option(
    [],
    "--var",
    "-V",
    help="Template variable as name=value (repeatable)",
)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="structai",
    help="structai - Structured JSON answers from an LLM",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="markdown",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        print(f"structai v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output."
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit."
    ),
):
    """
    structai - Structured JSON answers from an LLM
    """
    setup_logging("DEBUG" if verbose else "INFO")


def _load_settings():
    """Load settings with a user-friendly error on failure."""
    try:
        return get_settings()
    except Exception as e:
        err_console.print(
            "[red]Configuration error.[/red] "
            "Check your config file or environment variables.\n"
        )
        for error in getattr(e, "errors", lambda: [])():
            loc = ".".join(str(part) for part in error["loc"])
            err_console.print(f"  [red]✗[/red] {loc}: {error['msg']}")
        if not getattr(e, "errors", None):
            err_console.print(f"  [red]✗[/red] {e}")
        raise typer.Exit(code=1) from None


def _parse_prompt_id(value: str) -> PromptId:
    """Accept a prompt id by value (structured_json_v1) or name (STRUCTURED_JSON_V1)."""
    for prompt_id in PromptId:
        if value in (prompt_id.value, prompt_id.name):
            return prompt_id
    choices = ", ".join(prompt_id.value for prompt_id in PromptId)
    raise typer.BadParameter(f"Unknown prompt '{value}'. Choose from: {choices}")


def _parse_vars(pairs: list[str]) -> dict[str, str]:
    """Parse name=value pairs into a variables mapping."""
    variables: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected name=value, got '{pair}'")
        variables[name.strip()] = value
    return variables


@app.command("render")
def render_cmd(
    prompt: str = typer.Argument(..., help="Prompt id, e.g. structured_json_v1"),
    var: list[str] = VarOption,
    prompts_dir: Path | None = typer.Option(
        None,
        "--prompts-dir",
        help="Template directory (defaults to packaged templates)",
    ),
) -> None:
    """Render a prompt pair and print system and user text."""
    prompt_id = _parse_prompt_id(prompt)
    variables = _parse_vars(var)

    try:
        system_template, user_template = FileTemplateSource(prompts_dir).resolve(prompt_id)
    except TemplateNotFoundError as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1) from None

    console.print(Panel(render(system_template, variables) or "", title="system", border_style="blue"))
    console.print(Panel(render(user_template, variables) or "", title="user", border_style="green"))


@app.command()
def extract(
    source: Path | None = typer.Argument(
        None,
        help="File with raw model output (reads stdin when omitted)",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Extract the JSON object from raw model output."""
    raw = source.read_text(encoding="utf-8") if source else sys.stdin.read()

    try:
        json_text = extract_json_object(raw)
    except AIError as e:
        err_console.print(f"[red]✗[/red] {e.kind.name}: {e}")
        raise typer.Exit(code=1) from None

    print(json_text)


@app.command()
def call(
    prompt: str = typer.Argument(..., help="Prompt id, e.g. structured_json_v1"),
    var: list[str] = VarOption,
    json_format: bool = typer.Option(False, "--json", help="Print only the parsed JSON"),
) -> None:
    """Run a prompt and print the parsed JSON object."""
    prompt_id = _parse_prompt_id(prompt)
    variables = _parse_vars(var)
    settings = _load_settings()

    orchestrator = create_orchestrator(settings=settings)
    context = RequestContext()

    try:
        result = orchestrator.call_for_json(
            prompt_id,
            variables,
            dict,
            settings.call_options(),
            context=context,
        )
    except AIError as e:
        err_console.print(f"[red]✗[/red] {e.kind.name}: {e}")
        if e.repair_attempted:
            err_console.print("[dim]A repair round was attempted.[/dim]")
        raise typer.Exit(code=1) from None
    except TemplateNotFoundError as e:
        err_console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1) from None

    if json_format:
        print(json.dumps(result.value, indent=2, default=str))
        return

    console.print(Panel(json.dumps(result.value, indent=2, default=str), title="value", border_style="green"))

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Correlation id", context.correlation_id)
    table.add_row("Stop reason", str(result.stop_reason))
    table.add_row("Tokens", f"{result.input_tokens} in / {result.output_tokens} out")
    table.add_row("Repaired", "yes" if result.repaired else "no")
    console.print(table)


@app.command()
def config() -> None:
    """Verify configuration and show settings."""
    console.print("[bold]Verifying configuration...[/bold]\n")
    settings = _load_settings()

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("API key", "[green]set[/green]" if settings.anthropic_api_key else "[red]missing[/red]")
    table.add_row("Base URL", settings.anthropic_base_url or "default")
    table.add_row("Model", settings.llm_model)
    table.add_row("Max tokens", str(settings.llm_max_tokens))
    table.add_row("Temperature", str(settings.llm_temperature))
    table.add_row("Timeout", f"{settings.llm_timeout_seconds}s")
    table.add_row("Prompts dir", str(settings.prompts_dir or "packaged"))
    console.print(table)

    templates = FileTemplateSource(settings.prompts_dir)
    missing = 0
    for prompt_id in PromptId:
        try:
            templates.resolve(prompt_id)
            console.print(f"  [green]✓[/green] {prompt_id.value}")
        except TemplateNotFoundError as e:
            missing += 1
            console.print(f"  [red]✗[/red] {e}")

    if missing:
        raise typer.Exit(code=1)
    console.print("\n[green]Configuration OK[/green]")


if __name__ == "__main__":
    app()
