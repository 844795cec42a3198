# scope_intake/cli.py
"""
CLI interface for scope-intake.

Thin presentation layer over the catalogs, the session snapshot format
and the synthesizer. Documents go to stdout (or --output); tables and
diagnostics go to the terminal; logs go to stderr as JSON.
"""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from scope_intake.config import ScopeIntakeConfig, load_config
from scope_intake.conversation.progress import progress_from_question_count
from scope_intake.conversation.session import ConversationSession
from scope_intake.conversation.topics import build_default_topic_catalog
from scope_intake.errors import ScopeIntakeError, StateImportError
from scope_intake.features.catalog import build_default_catalog
from scope_intake.features.resolver import FeatureResolver
from scope_intake.llm.client import OllamaQuestionGenerator
from scope_intake.logging_config import configure_logging, level_for_verbosity
from scope_intake.scope.client_summary import build_client_summary, render_client_summary_html
from scope_intake.scope.markdown import render_markdown
from scope_intake.scope.validator import validate_document

app = typer.Typer(
    name="scope-intake",
    help="Website project intake: feature pricing, progress and scope document synthesis.",
    no_args_is_help=True,
)

_FORMAT_EXTENSIONS = {"markdown": "md", "json": "json", "html": "html"}


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


def _fail(error: Exception) -> None:
    Console(stderr=True).print(f"Error: {error}", style="red", markup=False)
    raise typer.Exit(1)


def _money(amount: float) -> str:
    return f"${amount:,.0f}"


def _load_session(snapshot: Path, config: ScopeIntakeConfig) -> ConversationSession:
    try:
        data = json.loads(snapshot.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StateImportError(f"{snapshot} is not valid JSON: {e}") from e
    return ConversationSession.import_state(data, config=config)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings only"),
):
    """Load configuration and set up logging for every command."""
    config = load_config()
    verbosity = "verbose" if verbose else "quiet" if quiet else config.output.verbosity
    configure_logging(level_for_verbosity(verbosity))
    ctx.obj = config


@app.command()
def topics():
    """List the conversational topics and what closes them."""
    table = Table(title="Topics")
    table.add_column("Topic", no_wrap=True)
    table.add_column("Name")
    table.add_column("Closes after")
    table.add_column("Required facts")

    for mapping in build_default_topic_catalog():
        table.add_row(
            mapping.topic,
            mapping.display_name,
            f"{mapping.min_facts_for_closure} of {len(mapping.required_facts)}",
            ", ".join(mapping.required_facts),
        )
    Console().print(table)


@app.command()
def features(
    website_type: str = typer.Option(None, "--type", "-t", help="Only features for this website type"),
):
    """List catalog features with their pricing."""
    catalog = build_default_catalog()
    if website_type:
        items = FeatureResolver(catalog).get_features_by_type(website_type)
    else:
        items = list(catalog.features)

    if not items:
        typer.echo("No features found.")
        return

    table = Table(title=f"Features ({website_type})" if website_type else "Features")
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Pricing")
    for feature in items:
        if feature.pricing.type == "included":
            pricing = "included: " + ", ".join(feature.pricing.tiers)
        else:
            pricing = f"{_money(feature.pricing.addon_price or 0)} add-on"
        table.add_row(feature.id, feature.name, feature.category, pricing)
    Console().print(table)


@app.command()
def price(
    feature_ids: list[str] = typer.Argument(..., help="Selected feature IDs"),
    tier: str = typer.Option("starter", "--tier", help="Package tier"),
):
    """Price a feature selection and report conflicts and missing dependencies."""
    console = Console()
    resolver = FeatureResolver(build_default_catalog())
    result = resolver.calculate_pricing(feature_ids, tier)
    report = resolver.validate_selection(feature_ids)

    table = Table(title=f"Pricing ({tier})")
    table.add_column("Feature", no_wrap=True)
    table.add_column("Status")
    table.add_column("Price", justify="right")
    for feature in result.included_features:
        table.add_row(feature.id, "included", _money(0))
    for feature in result.addon_features:
        table.add_row(feature.id, "add-on", _money(feature.pricing.addon_price or 0))
    console.print(table)

    console.print(f"Subtotal: {_money(result.subtotal)}")
    for bundle in result.applied_bundles:
        console.print(f"Bundle: {bundle.name} (-{_money(bundle.discount)})")
    console.print(f"Total: {_money(result.total)}", style="bold")

    for unknown in report.unknown_ids:
        console.print(f"Unknown feature: {unknown}", style="yellow", markup=False)
    for conflict in report.conflicts:
        console.print(
            f"Conflict: {conflict.feature_a} / {conflict.feature_b}: {conflict.reason}",
            style="yellow",
            markup=False,
        )
    for missing in report.dependencies.missing_dependencies:
        needed = ", ".join(dep.id for dep in missing.missing_deps)
        console.print(f"Missing dependency: {missing.feature.id} needs {needed}", style="yellow")


@app.command()
def progress(
    questions: int = typer.Argument(..., min=0, help="Questions answered so far"),
    complete: bool = typer.Option(False, "--complete", help="Conversation finished"),
):
    """Show question-count progress."""
    typer.echo(f"Progress: {progress_from_question_count(questions, complete):.2f}%")


@app.command()
def synthesize(
    ctx: typer.Context,
    snapshot: Path = typer.Argument(..., exists=True, dir_okay=False, help="Exported session JSON"),
    output: Path = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
    fmt: str = typer.Option("markdown", "--format", "-f", help="markdown, json or html"),
    save: bool = typer.Option(False, "--save", help="Write into the configured scope directory"),
):
    """Synthesize the scope document from an exported session."""
    config: ScopeIntakeConfig = ctx.obj
    if fmt not in _FORMAT_EXTENSIONS:
        _fail(ScopeIntakeError(f"Unknown format '{fmt}' (expected markdown, json or html)"))

    try:
        session = _load_session(snapshot, config)
        doc = session.synthesize()
    except ScopeIntakeError as e:
        _fail(e)

    result = validate_document(doc)
    agency_name = config.pricing.agency_name
    if fmt == "json":
        content = doc.model_dump_json(indent=2)
    elif fmt == "html":
        content = render_client_summary_html(build_client_summary(doc, agency_name=agency_name))
    else:
        content = render_markdown(doc, agency_name=agency_name)

    if save and output is None:
        output = Path(config.output.scope_dir) / f"{doc.conversation_id}.{_FORMAT_EXTENSIONS[fmt]}"

    err_console = Console(stderr=True)
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
        err_console.print(f"Wrote {output}", markup=False)
    else:
        typer.echo(content)

    style = "green" if result.is_valid else "yellow"
    err_console.print(
        f"Validation: {len(result.errors)} errors, {len(result.warnings)} warnings, "
        f"{result.completeness}% complete",
        style=style,
    )


@app.command()
def validate(
    ctx: typer.Context,
    snapshot: Path = typer.Argument(..., exists=True, dir_okay=False, help="Exported session JSON"),
):
    """Synthesize and validate; exit 1 when the document has errors."""
    try:
        session = _load_session(snapshot, ctx.obj)
        doc = session.synthesize()
    except ScopeIntakeError as e:
        _fail(e)

    result = validate_document(doc)
    console = Console()
    issues = list(result.errors) + list(result.warnings)
    if issues:
        table = Table(title="Validation issues")
        table.add_column("Severity", no_wrap=True)
        table.add_column("Section", no_wrap=True)
        table.add_column("Field")
        table.add_column("Message")
        for issue in issues:
            table.add_row(issue.severity, issue.section, issue.field, issue.message)
        console.print(table)

    console.print(f"Completeness: {result.completeness}%")
    if result.is_valid:
        console.print("Document is valid", style="green")
    else:
        console.print(f"Document has {len(result.errors)} errors", style="red")
        raise typer.Exit(1)


@app.command()
def ask(
    ctx: typer.Context,
    snapshot: Path = typer.Argument(..., exists=True, dir_okay=False, help="Exported session JSON"),
    question: str = typer.Option("", "--question", help="Question currently on screen"),
):
    """Ask the local model for the next interview step."""
    config: ScopeIntakeConfig = ctx.obj
    try:
        session = _load_session(snapshot, config)
        session.generator = OllamaQuestionGenerator.from_config(config.ollama)
        response = _run(session.next_question(question))
    except ScopeIntakeError as e:
        _fail(e)
    typer.echo(response.model_dump_json(indent=2))


@app.command()
def health(ctx: typer.Context):
    """Check that the Ollama server is reachable."""
    config: ScopeIntakeConfig = ctx.obj
    generator = OllamaQuestionGenerator.from_config(config.ollama)
    if _run(generator.health_check()):
        typer.echo(typer.style(f"Ollama reachable at {config.ollama.base_url}", fg=typer.colors.GREEN))
    else:
        typer.echo(typer.style(f"Ollama unreachable at {config.ollama.base_url}", fg=typer.colors.RED), err=True)
        raise typer.Exit(1)
