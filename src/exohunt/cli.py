"""Command-line interface for exohunt."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from exohunt.config.settings import AppConfig
    from exohunt.quiz.leaderboard import LeaderboardEntry

app = typer.Typer(
    name="exohunt",
    help="Upload exoplanet datasets for model training, or play planet trivia.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file. Defaults plus EXOHUNT_* env vars if omitted.",
        exists=True,
        dir_okay=False,
    ),
]


def _load(config: Path | None, *, json_logs: bool = False) -> "AppConfig":
    """Load configuration and set up logging, exiting on invalid config."""
    from pydantic import ValidationError

    from exohunt.config.loader import load_config
    from exohunt.utils.logging import configure_logging

    try:
        app_config = load_config(config)
    except (ValidationError, ValueError) as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1) from e

    configure_logging(
        level=app_config.logging.level,
        json_output=json_logs or app_config.logging.json_output,
    )
    return app_config


@app.command()
def preflight(
    file: Annotated[
        Path,
        typer.Option(
            "--file",
            "-f",
            help="CSV dataset to check.",
            exists=True,
            dir_okay=False,
        ),
    ],
    config: ConfigOption = None,
    require: Annotated[
        list[str] | None,
        typer.Option(
            "--require",
            "-r",
            help="Required canonical column (repeatable). Overrides the config.",
        ),
    ] = None,
) -> None:
    """Show how the CSV headers map to canonical columns."""
    from exohunt.ingestion import read_csv_file
    from exohunt.validation import ConsoleReporter, run_preflight

    app_config = _load(config)
    required = tuple(require) if require else app_config.preflight.required_fields

    parsed = read_csv_file(file)
    if not parsed.ok:
        console.print(f"[red]CSV parse error: {parsed.errors[0]}[/red]")
        raise typer.Exit(code=1)

    try:
        result = run_preflight(parsed.headers, required)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(
        f"[dim]{len(parsed.rows)} data rows, delimiter {parsed.delimiter!r}[/dim]"
    )
    ConsoleReporter(console).print_result(result, required)

    if not result.passed:
        raise typer.Exit(code=1)


@app.command()
def train(
    file: Annotated[
        Path,
        typer.Option(
            "--file",
            "-f",
            help="Labeled CSV dataset to upload.",
            exists=True,
            dir_okay=False,
        ),
    ],
    config: ConfigOption = None,
    train_split: Annotated[
        int | None,
        typer.Option(
            "--train-split",
            help="Percentage of rows used for training (50-90).",
            min=50,
            max=90,
        ),
    ] = None,
    cv_folds: Annotated[
        int | None, typer.Option("--cv-folds", help="Cross-validation folds (3-10).")
    ] = None,
    rf_estimators: Annotated[
        int | None, typer.Option("--rf-estimators", help="Random Forest trees.")
    ] = None,
    xgb_estimators: Annotated[
        int | None, typer.Option("--xgb-estimators", help="XGBoost trees.")
    ] = None,
    lgbm_estimators: Annotated[
        int | None, typer.Option("--lgbm-estimators", help="LightGBM trees.")
    ] = None,
    xgb_max_depth: Annotated[
        int | None, typer.Option("--xgb-max-depth", help="XGBoost max depth.")
    ] = None,
    lgbm_max_depth: Annotated[
        int | None, typer.Option("--lgbm-max-depth", help="LightGBM max depth.")
    ] = None,
    learning_rate: Annotated[
        float | None, typer.Option("--learning-rate", help="Boosting learning rate.")
    ] = None,
    metrics_out: Annotated[
        Path | None,
        typer.Option(
            "--metrics-out",
            "-o",
            help="Write the detailed metrics report (metrics.json) here.",
            dir_okay=False,
        ),
    ] = None,
    json_logs: Annotated[
        bool,
        typer.Option("--json-logs", help="Emit structured logs as JSON."),
    ] = False,
) -> None:
    """Upload a dataset and train a new model with the given hyperparameters."""
    from pydantic import ValidationError

    from exohunt.config.settings import TrainingConfig
    from exohunt.pipeline import SubmissionReporter, UploadOrchestrator
    from exohunt.store import PostgrestRowStore
    from exohunt.training import TrainingApiClient, save_metrics_json

    app_config = _load(config, json_logs=json_logs)

    overrides = {
        "cv_folds": cv_folds,
        "rf_estimators": rf_estimators,
        "xgb_estimators": xgb_estimators,
        "lgbm_estimators": lgbm_estimators,
        "xgb_max_depth": xgb_max_depth,
        "lgbm_max_depth": lgbm_max_depth,
        "learning_rate": learning_rate,
    }
    if train_split is not None:
        overrides["train_test_split"] = train_split / 100
    try:
        training = TrainingConfig.model_validate(
            {
                **app_config.training.model_dump(),
                **{k: v for k, v in overrides.items() if v is not None},
            }
        )
    except ValidationError as e:
        console.print(f"[red]Invalid hyperparameters: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[blue]Training endpoint: {app_config.training_api.endpoint}[/blue]")
    console.print(f"[dim]Dataset table: {app_config.store.table}[/dim]")

    reporter = SubmissionReporter(console)
    with (
        PostgrestRowStore(app_config.store) as store,
        TrainingApiClient(app_config.training_api) as client,
    ):
        orchestrator = UploadOrchestrator(store, client, app_config)
        if not orchestrator.select_file(file):
            reporter.print_status(orchestrator.status_log)
            raise typer.Exit(code=1)
        result = orchestrator.submit(training)

    console.print()
    reporter.print_status(orchestrator.status_log)

    if orchestrator.metrics_report is not None:
        reporter.print_metrics(orchestrator.metrics_report)
        if metrics_out is not None:
            saved = save_metrics_json(orchestrator.metrics_report, metrics_out)
            console.print(f"\n[green]Saved metrics to: {saved}[/green]")

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def quiz(
    config: ConfigOption = None,
    rounds: Annotated[
        int,
        typer.Option("--rounds", "-n", help="Number of questions to play.", min=1),
    ] = 4,
    questions: Annotated[
        Path | None,
        typer.Option(
            "--questions",
            "-q",
            help="CSV question bank. Uses the built-in questions if omitted.",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    username: Annotated[
        str | None,
        typer.Option("--username", "-u", help="Save the final score under this name."),
    ] = None,
    seed: Annotated[
        int | None, typer.Option("--seed", help="Random seed for question order.")
    ] = None,
) -> None:
    """Play planet trivia in the terminal."""
    import random

    from rich.prompt import IntPrompt

    from exohunt.quiz import QuizGame, load_questions, planet_features

    app_config = _load(config)
    quiz_config = app_config.quiz

    bank_path = questions or quiz_config.questions_path
    try:
        bank = load_questions(bank_path) if bank_path else None
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    game_kwargs = {
        "correct_points": quiz_config.correct_points,
        "wrong_points": quiz_config.wrong_points,
        "rng": random.Random(seed),
    }
    try:
        game = QuizGame(bank, **game_kwargs) if bank is not None else QuizGame(**game_kwargs)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    for round_number in range(1, rounds + 1):
        if round_number > 1:
            game.next_question()
        question = game.current

        console.print()
        console.print(f"[bold cyan]{question.planet_name}[/bold cyan]")
        for feature in planet_features(question):
            console.print(
                f"  {feature.label}: {feature.display_value} "
                f"[dim]({feature.percent:.0f}% of scale)[/dim]"
            )
        console.print(f"\n[bold]{question.question}[/bold]")
        for index, choice in enumerate(game.choices, start=1):
            console.print(f"  {index}. {choice}")

        picked = IntPrompt.ask(
            "Your answer",
            choices=[str(i) for i in range(1, len(game.choices) + 1)],
            console=console,
        )
        outcome = game.guess(game.choices[picked - 1])

        if outcome.is_correct:
            console.print(f"[green]Correct! +{outcome.points}[/green]")
        else:
            console.print(
                f"[red]Wrong ({outcome.points}). Correct answer: "
                f"{outcome.correct_choice}[/red]"
            )
        console.print(f"Score: {outcome.score}")

    console.print(f"\n[bold]Final score: {game.score}[/bold]")

    if username is not None:
        _save_and_show_leaderboard(app_config, username, game.score)


def _save_and_show_leaderboard(
    app_config: "AppConfig", username: str, score: int
) -> None:
    from exohunt.quiz import Leaderboard
    from exohunt.store import PostgrestRowStore

    with PostgrestRowStore(app_config.store) as store:
        board = Leaderboard(store, app_config.quiz)
        outcome = board.save_score(username, score)
        if outcome.error:
            console.print(f"[red]{outcome.error}[/red]")
        else:
            console.print(f"[green]{outcome.message}[/green]")
        _print_leaderboard(board.top())


def _print_leaderboard(entries: list["LeaderboardEntry"]) -> None:
    table = Table(title="Leaderboard")
    table.add_column("#", justify="right")
    table.add_column("Player", style="cyan")
    table.add_column("Score", style="green", justify="right")
    for rank, entry in enumerate(entries, start=1):
        table.add_row(str(rank), entry.name, str(entry.score))
    if not entries:
        table.add_row("-", "[dim]no scores yet[/dim]", "-")
    console.print(table)


@app.command()
def leaderboard(config: ConfigOption = None) -> None:
    """Show the top scores."""
    from exohunt.quiz import Leaderboard
    from exohunt.store import PostgrestRowStore

    app_config = _load(config)
    with PostgrestRowStore(app_config.store) as store:
        _print_leaderboard(Leaderboard(store, app_config.quiz).top())


@app.command()
def version() -> None:
    """Show version information."""
    from exohunt import __version__

    console.print(f"exohunt version {__version__}")


if __name__ == "__main__":
    app()
