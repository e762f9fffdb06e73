import typer

from typings_fetcher.cli.fetch import fetch
from typings_fetcher.cli.serve import serve

app = typer.Typer(
    name="typings-fetcher",
    help="Fetch npm dependency typings as JSON.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("fetch")(fetch)
app.command("serve")(serve)


def main() -> None:
    app()
