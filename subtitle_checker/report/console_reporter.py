from rich.console import Console
from rich.markup import escape
from rich.table import Table

from subtitle_checker.processor.models import FileResult, FileStatus
from subtitle_checker.report.models import RunReport

_STATUS_STYLES: dict[FileStatus, tuple[str, str]] = {
    FileStatus.SUCCESS: ("green", "Analyzed"),
    FileStatus.PARTIAL: ("red", "Analyzed, corrections not written"),
    FileStatus.NO_CONTENT: ("yellow", "No text content"),
    FileStatus.SKIPPED: ("yellow", "Skipped"),
    FileStatus.ERROR: ("red", "Error"),
}


class ConsoleReporter:
    """Renders a RunReport to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console()

    def render(self, report: RunReport) -> None:
        console = self._console
        console.rule("[bold blue]SUBTITLE CHECKING REPORT")

        if report.directory_created:
            console.print(
                f"[yellow]Created subtitles directory {escape(str(report.directory))}. "
                "Add subtitle files to check.[/yellow]"
            )
        elif report.files_found == 0:
            console.print(f"[yellow]No subtitle files found in {escape(str(report.directory))}.[/yellow]")

        if report.skipped_unchanged:
            console.print(f"\n[dim]Skipped {report.skipped_unchanged_count} unchanged files:[/dim]")
            for skipped in report.skipped_unchanged:
                console.print(f"[dim]  • {escape(skipped.filename)} ({skipped.reason.value})[/dim]")

        for result in report.results:
            self._render_file(result)

        self._render_summary(report)
        self._render_corrections(report)
        if not report.state_saved:
            console.print("[red]Processing state could not be saved; files will be rechecked next run.[/red]")

    def _render_file(self, result: FileResult) -> None:
        console = self._console
        style, label = _STATUS_STYLES[result.status]
        console.print(f"\n[bold cyan]File: {escape(result.filename)}[/bold cyan] [dim]({result.reason.value})[/dim]")
        console.print(f"[{style}]{label}[/{style}]" + (f": {escape(result.error)}" if result.error else ""))

        analysis = result.analysis
        if analysis is None or not result.analyzed:
            return
        if analysis.summary is not None:
            console.print(f"  Spelling errors: {analysis.summary.spelling_errors}")
            console.print(f"  Grammar errors: {analysis.summary.grammar_errors}")
            console.print(f"  Quality: {escape(analysis.summary.overall_quality or 'N/A')}")

        if result.applied_count:
            console.print(f"[cyan]  Corrections applied ({result.applied_count}):[/cyan]")
            for change in result.fix_outcome.applied_changes:
                console.print(
                    f"    • {change.kind}: \"{escape(change.original)}\" → \"{escape(change.corrected)}\""
                )
                if change.explanation:
                    console.print(f"[dim]      {escape(change.explanation)}[/dim]")
            console.print(f"[dim]  Backup: {escape(result.fix_outcome.backup_path.name)}[/dim]")
        elif not analysis.corrections:
            console.print("[green]  No errors found - text is already correct![/green]")
        else:
            console.print(
                f"[yellow]  {len(analysis.corrections)} corrections proposed, none matched the file text[/yellow]"
            )

        if analysis.analysis_text:
            console.print("  Detailed analysis:")
            console.print(escape(analysis.analysis_text))
        if analysis.truncated:
            console.print(f"[dim]  Text truncated to fit the local model ({result.extracted_length} chars total)[/dim]")
        if analysis.token_usage is not None:
            console.print(f"[dim]  Tokens used: {analysis.token_usage.total_tokens}[/dim]")

    def _render_summary(self, report: RunReport) -> None:
        table = Table(title="Summary")
        table.add_column("Metric", style="cyan")
        table.add_column("Files", justify="right", style="green")
        table.add_row("Skipped (unchanged)", str(report.skipped_unchanged_count))
        table.add_row("Successfully analyzed", str(report.analyzed_count))
        table.add_row("Corrected", str(report.corrected_count))
        table.add_row("Total corrections", str(report.total_corrections))
        table.add_row("Errors", str(report.error_count))
        table.add_row("No text content", str(report.no_content_count))
        table.add_row("Analysis skipped", str(report.analysis_skipped_count))
        self._console.print()
        self._console.print(table)

    def _render_corrections(self, report: RunReport) -> None:
        console = self._console
        if not report.corrected_files:
            if report.analyzed_count:
                console.print("[green]No corrections needed - all analyzed files are error-free![/green]")
            return
        console.print(
            f"\n[cyan]Files corrected: {report.corrected_count}, "
            f"total corrections: {report.total_corrections}[/cyan]"
        )
        for result in report.corrected_files:
            console.print(
                f"  • {escape(result.filename)}: {result.applied_count} corrections "
                f"[dim](backup: {escape(result.fix_outcome.backup_path.name)})[/dim]"
            )
        console.print("[yellow]Original files have been backed up next to the corrected ones.[/yellow]")
