import json
import typer
from rich.console import Console
from rich.table import Table

from ..config import get_profiles_file
from ..domain.errors import ProfileError
from ..domain.models import ProfileSource, make_scoped_id
from ..profiles import ProfileLoader, ProfileStore, needs_reset
from ..profiles.catalog import CATALOG, INTERNAL_PROFILE_IDS
from ..profiles.special import UPGRADE_CUTOFFS

app = typer.Typer()
console = Console()


def get_profile_loader() -> ProfileLoader:
    """get profile loader instance."""
    return ProfileLoader(ProfileStore(get_profiles_file()))


def _parse_value(raw: str):
    # accept JSON so lists and booleans can be set, fall back to plain text
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command("list")
def list_special_profiles():
    """list built-in special profiles and their stored state."""
    loader = get_profile_loader()
    
    table = Table(title="Special Profiles")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Internal", style="dim")
    table.add_column("Reset Before", style="dim")
    table.add_column("Stored", style="green")
    
    for identity, definition in CATALOG.items():
        profile = loader.store.get(make_scoped_id(ProfileSource.LOCAL, identity.value))
        if profile is None:
            stored = ""
        elif profile.edited:
            stored = "edited"
        else:
            stored = "default"
        table.add_row(
            identity.value,
            definition.name,
            "yes" if identity in INTERNAL_PROFILE_IDS else "",
            UPGRADE_CUTOFFS.get(identity, ""),
            stored,
        )
    
    console.print(table)


@app.command("sync")
def sync_special_profile(
    profile_id: str,
    path: str = typer.Option("", "--path", "-p", help="Executable path to link the profile to")
):
    """create, reset or update a special profile."""
    loader = get_profile_loader()
    
    try:
        result = loader.get_special_profile(profile_id, path)
    except ProfileError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    
    console.print(f"[green]✓[/green] {result.profile.scoped_id}: {result.action}")


@app.command("show")
def show_special_profile(profile_id: str):
    """show a stored special profile."""
    loader = get_profile_loader()
    profile = loader.store.get(make_scoped_id(ProfileSource.LOCAL, profile_id))
    
    if profile is None:
        console.print(f"[red]Error:[/red] Profile '{profile_id}' not found")
        raise typer.Exit(1)
    
    console.print(f"\n[bold]{profile.name}[/bold] [cyan]{profile.scoped_id}[/cyan]")
    console.print(f"  Linked path:  {profile.linked_path or '-'}")
    console.print(f"  Internal:     {profile.internal}")
    console.print(f"  Created:      {profile.created}")
    console.print(f"  Last edited:  {profile.last_edited or 'never'}")
    for key, value in profile.settings.items():
        console.print(f"  {key} = {json.dumps(value)}", markup=False)
    console.print()


@app.command("set")
def set_setting(profile_id: str, key: str, value: str):
    """change a setting of a special profile as the user."""
    loader = get_profile_loader()
    
    try:
        loader.edit_setting(make_scoped_id(ProfileSource.LOCAL, profile_id), key, _parse_value(value))
    except ProfileError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    
    console.print(f"[green]✓[/green] Set {key} on '{profile_id}'")


@app.command("check")
def check_reset(profile_id: str):
    """check whether a stored special profile is due for a reset."""
    loader = get_profile_loader()
    profile = loader.store.get(make_scoped_id(ProfileSource.LOCAL, profile_id))
    
    if profile is None:
        console.print(f"[yellow]Profile '{profile_id}' is not stored yet.[/yellow]")
        return
    
    if needs_reset(profile):
        console.print(f"[yellow]'{profile_id}' is outdated and will be reset on next sync.[/yellow]")
    else:
        console.print(f"'{profile_id}' is up to date.")


if __name__ == "__main__":
    app()
