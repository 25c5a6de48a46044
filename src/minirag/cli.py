"""CLI entry point — Typer app for minirag commands.

Usage:
    minirag ingest notes.txt --title "Meeting notes"
    minirag ingest --text "The sky is blue." --source sky.txt
    minirag query "What color is the sky?"
    minirag sources
    minirag status
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from minirag import __version__

app = typer.Typer(
    name="minirag",
    help="mini-rag — ingest documents, ask questions, get cited answers.",
    no_args_is_help=True,
)

console = Console()

_INGEST_PATH = typer.Argument(help="Plain-text file to ingest")
_SETTINGS = typer.Option(None, "--settings", help="Path to settings.yaml")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline stages"),
) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def ingest(
    path: Annotated[Path | None, _INGEST_PATH] = None,
    text: str | None = typer.Option(None, "--text", help="Raw text to ingest"),
    source: str | None = typer.Option(
        None, "--source", "-s", help="Source name (defaults to the file name)",
    ),
    title: str | None = typer.Option(None, "--title", "-t", help="Document title"),
    chunk_size: int | None = typer.Option(None, "--chunk-size", help="Window size in chars"),
    overlap: int | None = typer.Option(None, "--overlap", help="Window overlap in chars"),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Chunk, embed and store a document."""
    from minirag.config import load_settings
    from minirag.errors import RAGError
    from minirag.pipeline.builder import build_ingest_pipeline

    if (path is None) == (text is None):
        raise typer.BadParameter("Pass either a file path or --text, not both")
    if path is not None:
        text = path.read_text(encoding="utf-8")
        source = source or path.name
    if not source:
        raise typer.BadParameter("--source is required with --text")

    pipeline = build_ingest_pipeline(load_settings(settings_path))
    try:
        result = pipeline.ingest_text(
            text, source=source, title=title, chunk_size=chunk_size, overlap=overlap,
        )
    except RAGError as exc:
        console.print(f"[bold red]✗ Error:[/] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"\n[bold green]Ingested:[/] {result.source}")
    console.print(f"  Chunks: {result.chunks_created}")
    console.print(f"  Tokens: {result.total_tokens} (~${result.estimated_cost:.6f})")
    console.print(f"  Time: {result.processing_time_ms} ms")
    if result.replaced:
        console.print(f"  [yellow]Replaced:[/] {result.replaced} earlier chunks")


@app.command()
def query(
    question: str = typer.Argument(..., help="Question to ask"),
    top_k: int | None = typer.Option(None, "--top-k", "-k", help="Candidates to retrieve"),
    citations: int | None = typer.Option(
        None, "--citations", "-c", help="Chunks passed to the LLM",
    ),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Ask a question against the stored documents."""
    from minirag.config import load_settings
    from minirag.pipeline.builder import build_query_pipeline
    from minirag.pipeline.citations import format_citations

    pipeline = build_query_pipeline(load_settings(settings_path))
    response = pipeline.query(question, top_k=top_k, citation_limit=citations)

    if not response.ok:
        console.print(f"[bold red]✗ {response.answer}[/]")
        raise typer.Exit(code=1)

    console.print(f"\n[bold]Q:[/] {response.question}")
    console.print(f"\n[bold green]A:[/] {response.answer}")
    if response.citations:
        console.print(format_citations(response.citations))

    t, u = response.timing, response.usage
    console.print(
        f"\n[dim]retrieval {t.retrieval_ms} ms | rerank {t.rerank_ms} ms | "
        f"llm {t.llm_ms} ms | total {t.total_ms} ms[/]"
    )
    console.print(
        f"[dim]{u.total_tokens} tokens (~${u.estimated_cost:.6f}) "
        f"| model: {response.model or 'n/a'} | dropped: {response.dropped_count}[/]"
    )


@app.command()
def sources(settings_path: Path | None = _SETTINGS) -> None:
    """List ingested sources, most recent first."""
    from minirag.config import load_settings
    from minirag.pipeline.builder import build_embedder, build_vector_store

    settings = load_settings(settings_path)
    store = build_vector_store(settings, build_embedder(settings).dimension)

    table = Table(title=f"Sources ({store.count()} chunks)")
    table.add_column("Source", style="cyan")
    table.add_column("Title")
    table.add_column("Chunks", justify="right")
    table.add_column("First seen")

    for s in store.list_sources():
        table.add_row(
            s.source, s.title or "", str(s.chunk_count), s.first_seen.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Delete every stored chunk."""
    from minirag.config import load_settings
    from minirag.pipeline.builder import build_embedder, build_vector_store

    settings = load_settings(settings_path)
    store = build_vector_store(settings, build_embedder(settings).dimension)
    if not yes:
        typer.confirm(f"Delete all {store.count()} chunks?", abort=True)
    store.clear()
    console.print("[bold green]Cleared.[/]")


@app.command()
def status() -> None:
    """Show available providers and stores."""
    from minirag.embeddings.factory import available_providers as emb_providers
    from minirag.llm.factory import available_providers as llm_providers
    from minirag.reranking.factory import available_providers as rerank_providers
    from minirag.vectorstore.factory import available_stores

    console.print(f"\n[bold green]mini-rag[/] v{__version__}\n")

    table = Table(title="Available Components")
    table.add_column("Layer", style="cyan")
    table.add_column("Available")

    table.add_row("Embedding Providers", ", ".join(emb_providers()))
    table.add_row("Vector Stores", ", ".join(available_stores()))
    table.add_row("Rerank Providers", ", ".join(rerank_providers()))
    table.add_row("LLM Providers", ", ".join(llm_providers()))

    console.print(table)


if __name__ == "__main__":
    app()
