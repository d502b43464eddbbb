import typer
from rich.console import Console

from .. import __version__
from ..config import get_log_dir, get_log_level
from ..logs import configure_logging, finalize_log_file, init_log_file, log_error, log_stack, new_log_path
from .special_commands import app as special_app

app = typer.Typer()
console = Console()

# add special profile subcommand
app.add_typer(special_app, name="special", help="Manage built-in special profiles")


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages"),
    log_to_file: bool = typer.Option(False, "--log-file", help="Also write logs to the log directory"),
):
    """netwarden profile maintenance."""
    level = "DEBUG" if verbose else get_log_level()
    
    log_file = None
    if log_to_file:
        log_file = init_log_file(new_log_path(get_log_dir()), "netwarden", __version__)
        if log_file is not None:
            # drop the file again if nothing got logged
            ctx.call_on_close(lambda: finalize_log_file(log_file))
    
    configure_logging(level, log_file)


@app.command()
def version():
    """show the installed version."""
    console.print(f"netwarden {__version__}")


@app.command("dump-stack")
def dump_stack():
    """write the stacks of all threads to the log directory."""
    log_path = log_stack(get_log_dir(), "netwarden", __version__)
    if log_path is None:
        console.print("[red]Error:[/red] failed to write stack log")
        raise typer.Exit(1)
    
    console.print(f"[green]✓[/green] Stack written to {log_path}")


def run():
    """entry point; unexpected errors are also written to an error log."""
    try:
        app()
    except Exception as e:
        log_error(get_log_dir(), e, "netwarden", __version__)
        raise


if __name__ == "__main__":
    run()
