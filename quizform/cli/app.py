"""Typer CLI application for quiz generation and grading."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from quizform.config.settings import Settings, get_settings
from quizform.core.generation_client import parse_questions
from quizform.errors import GenerationError, QuizFormError
from quizform.forms.local_host import ItemType, LocalFormHost
from quizform.graph.workflow import generate_quiz_questions
from quizform.models.quiz import GeneratedQuestion, GradingResult, PublishResult
from quizform.services.quiz_service import create_quiz, handle_submission, update_fixed_quiz
from quizform.storage.answer_key_store import JsonAnswerKeyStore
from quizform.storage.record_sink import CsvRecordSink
from quizform.utils.logging_config import configure_logging

app = typer.Typer(
    name="quizform",
    help="Generate multiple-choice quizzes with AI and grade their submissions",
    add_completion=False,
)

console = Console()


def build_collaborators(settings: Settings) -> tuple[LocalFormHost, JsonAnswerKeyStore, CsvRecordSink]:
    """Create the form host, answer-key store and record sink under the data dir."""
    data_dir = Path(settings.data_dir)
    return (
        LocalFormHost(data_dir / "forms"),
        JsonAnswerKeyStore(data_dir / "answer_keys.json"),
        CsvRecordSink(data_dir / "records"),
    )


def fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {message}", style="bold")
    raise typer.Exit(code=1)


@app.command()
def generate(
    topic: str = typer.Option(
        "",
        "--topic",
        "-t",
        help="Quiz topic; a keyword filter when a reference is given",
    ),
    questions: Optional[int] = typer.Option(
        None,
        "--questions",
        "-q",
        help="Number of questions to generate (defaults to DEFAULT_QUESTION_COUNT)",
        min=1,
    ),
    reference: Optional[str] = typer.Option(
        None,
        "--reference",
        "-r",
        help="Reference document (path, URL or document id) to restrict questions to",
    ),
    output: str = typer.Option(
        "questions.json",
        "--output",
        "-o",
        help="Where to write the generated questions",
    ),
) -> None:
    """
    Generate questions with the AI endpoint.

    Example:
        quizform generate -t "光合作用" -q 3 -o photosynthesis.json
    """
    settings = get_settings()
    if not topic and not reference:
        fail("Give a --topic, a --reference, or both.")
    if not settings.gemini_api_key:
        console.print(
            "[red]Error:[/red] GEMINI_API_KEY environment variable not set.",
            style="bold",
        )
        console.print("\nPlease set your API key:\n  export GEMINI_API_KEY='your-key-here'")
        raise typer.Exit(code=1)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("[cyan]Generating questions...", total=None)
            generated = generate_quiz_questions(topic, questions, reference, settings=settings)
            progress.update(task, description="[green]Generation complete!")
    except GenerationError as e:
        fail(f"Generation failed ({e.kind.value}): {e.detail}")
    except QuizFormError as e:
        fail(str(e))

    Path(output).write_text(
        json.dumps([q.to_wire() for q in generated], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    display_questions(generated)
    console.print(f"\n[green]✓[/green] Questions written to: {output}")


@app.command()
def publish(
    questions_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Generated questions JSON"),
    title: Optional[str] = typer.Option(None, "--title", help="Create a new quiz with this title"),
    form_id: Optional[str] = typer.Option(None, "--form-id", help="Replace the questions of this quiz"),
) -> None:
    """Publish questions as a quiz form and store its answer key."""
    settings = get_settings()
    host, store, sink = build_collaborators(settings)
    skip_choice = settings.skip_sentinel if settings.add_skip_choice else None

    try:
        generated = parse_questions(questions_file.read_text(encoding="utf-8"))
        target = form_id or (None if title else settings.fixed_quiz_id)
        if target:
            result = update_fixed_quiz(host, store, generated, target, skip_choice=skip_choice)
        else:
            result = create_quiz(host, store, sink, generated, title, skip_choice=skip_choice)
    except QuizFormError as e:
        fail(str(e))

    display_publish_result(result)
    show(result.form_id)


@app.command()
def show(form_id: str = typer.Argument(..., help="Quiz form id")) -> None:
    """List a quiz's items with their ids and choices."""
    host = build_collaborators(get_settings())[0]
    try:
        form = host.open_form(form_id)
    except QuizFormError as e:
        fail(str(e))

    table = Table(title=form.title, border_style="cyan")
    table.add_column("#", style="cyan")
    table.add_column("Item ID", style="dim")
    table.add_column("Title", style="white")
    table.add_column("Choices", style="white")
    for position, item in enumerate(form.items, start=1):
        choices = " / ".join(item.choices) if item.item_type == ItemType.MULTIPLE_CHOICE else ""
        table.add_row(str(position), item.item_id, item.title, choices)

    console.print()
    console.print(table)


@app.command()
def submit(
    form_id: str = typer.Argument(..., help="Quiz form id"),
    answers_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="JSON object mapping item id to chosen answer"
    ),
    email: Optional[str] = typer.Option(None, "--email", "-e", help="Respondent email"),
) -> None:
    """Submit answers to a quiz and grade them."""
    settings = get_settings()
    host, store, sink = build_collaborators(settings)

    try:
        answers = json.loads(answers_file.read_text(encoding="utf-8"))
        if not isinstance(answers, dict):
            fail("Answers file must hold a JSON object")
        submission = host.submit(form_id, answers, respondent_id=email)
        result = handle_submission(host, store, sink, submission, settings.skip_sentinel)
    except (QuizFormError, ValueError) as e:
        fail(str(e))

    display_grading_result(result)


@app.command()
def info() -> None:
    """Display information about the quiz generator."""
    settings = get_settings()
    info_text = f"""
[bold cyan]AI Quiz Form Generator[/bold cyan]
Version: 0.1.0

[bold]Pipeline:[/bold]
  • Extractor - Reads an optional reference document
  • Prompt builder - Restricted (reference only) or open mode
  • Generator - Calls the Gemini generateContent endpoint
  • Validator - Checks every question against the schema
  • Answer key - Maps form items to correct answers
  • Grader - Scores submissions and logs wrong answers

[bold]Model:[/bold] {settings.gemini_model}
[bold]Data directory:[/bold] {settings.data_dir}
    """
    console.print(Panel(info_text, title="Quizform Info", border_style="cyan"))


def display_questions(questions: list[GeneratedQuestion]) -> None:
    """Display generated questions with their correct answers."""
    table = Table(title="Generated Questions", border_style="green")
    table.add_column("#", style="cyan")
    table.add_column("Question", style="white")
    table.add_column("Answer", style="green")
    table.add_column("Points", style="white")

    for i, question in enumerate(questions, start=1):
        table.add_row(str(i), question.question_text, question.correct_option, str(question.points))

    console.print()
    console.print(table)


def display_publish_result(result: PublishResult) -> None:
    table = Table(title="Quiz Published", show_header=False, border_style="green")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Form ID", result.form_id)
    table.add_row("URL", result.url)
    table.add_row("Updated", result.updated_at)
    table.add_row("Questions", str(result.total_questions))

    console.print()
    console.print(table)


def display_grading_result(result: GradingResult) -> None:
    """Display grading rates and the wrong answers."""
    table = Table(title="Grading Summary", border_style="green")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Items Seen", str(result.items_seen))
    table.add_row("Graded", str(result.total_graded))
    table.add_row("Correct", f"{result.correct_count} ({result.correct_rate})")
    table.add_row("Wrong", f"[red]{result.wrong_count} ({result.wrong_rate})[/red]")
    table.add_row("Blank", f"{result.blank_count} ({result.blank_rate})")

    console.print()
    console.print(table)

    if result.wrong_records:
        wrong_table = Table(title="Wrong Answers", border_style="red")
        wrong_table.add_column("#", style="cyan")
        wrong_table.add_column("Question", style="white")
        wrong_table.add_column("Your Answer", style="red")
        wrong_table.add_column("Correct", style="green")
        for record in result.wrong_records:
            wrong_table.add_row(
                str(record.position or ""),
                record.question_text,
                record.student_answer,
                record.correct_answer,
            )
        console.print()
        console.print(wrong_table)


@app.callback()
def callback() -> None:
    """
    AI Quiz Form Generator - Generate quizzes and grade submissions.
    """
    configure_logging(get_settings().log_level)


if __name__ == "__main__":
    app()
