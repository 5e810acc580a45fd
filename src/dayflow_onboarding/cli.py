"""
Dayflow Onboarding Command Line Interface

Main entry point for the dayflow-onboard CLI.
"""

import sys
from pathlib import Path

import click
from rich.console import Console

from dayflow_onboarding.wizard.exceptions import OnboardingError, get_error_code
from dayflow_onboarding.wizard.logging_config import ENV_VARS

console = Console()


def _env_help() -> str:
    lines = ["\b", "Environment:"]
    for name, info in ENV_VARS.items():
        lines.append(f"  {name}  {info['description']} (default: {info['default']})")
    return "\n".join(lines)


def _load_config(config_path: str, state_path: str):
    from dayflow_onboarding.config import OnboardingConfig

    config = OnboardingConfig.load(Path(config_path) if config_path else None)
    if state_path:
        config.state_path = Path(state_path)
    return config


def _fail(error: OnboardingError):
    console.print(f"[red]Error:[/red] {error.message}")
    if error.details:
        console.print(f"[dim]{error.details}[/dim]")
    if error.remediation:
        console.print(f"[blue]To fix:[/blue] {error.remediation}")
    sys.exit(get_error_code(error))


@click.group(epilog=_env_help())
@click.version_option(package_name="dayflow-onboarding")
def main():
    """Dayflow Onboarding: first-run setup wizard for Dayflow"""
    pass


@main.command()
@click.option("--state", "state_path", type=click.Path(dir_okay=False), help="Onboarding state file")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Onboarding config file")
@click.option("--verbose", "-v", is_flag=True, help="Log wizard events to the console")
def run(state_path: str, config_path: str, verbose: bool):
    """Run the onboarding wizard, resuming saved progress.

    Examples:
        dayflow-onboard run
        dayflow-onboard run --state /tmp/onboarding.json
    """
    import logging

    from dayflow_onboarding.wizard import WizardController, WizardUI
    from dayflow_onboarding.wizard.logging_config import setup_logging
    from dayflow_onboarding.wizard.notifier import LoggingNotifier
    from dayflow_onboarding.wizard.steps import DEFAULT_SEQUENCE
    from dayflow_onboarding.wizard.store import JsonFileStore
    from dayflow_onboarding.wizard.ui import ConsoleRenderer

    try:
        config = _load_config(config_path, state_path)
        level = logging.DEBUG if config.debug else (logging.INFO if verbose else None)
        setup_logging(level=level, log_file=config.log_file)

        ui = WizardUI(console)
        controller = WizardController(
            store=JsonFileStore(config.state_path),
            sequence=DEFAULT_SEQUENCE,
            renderer=ConsoleRenderer(console, total_steps=len(DEFAULT_SEQUENCE)),
            notifier=LoggingNotifier(),
            fast_path_provider=config.fast_path_provider,
        )

        ui.print_header()
        finished = ui.drive(
            controller,
            providers=config.providers,
            default_provider=config.default_provider
        )
        sys.exit(0 if finished else 1)
    except OnboardingError as e:
        _fail(e)
    except (KeyboardInterrupt, EOFError):
        console.print()
        console.print("[yellow]Onboarding interrupted. Progress is saved.[/yellow]")
        sys.exit(130)


@main.command()
@click.option("--state", "state_path", type=click.Path(dir_okay=False), help="Onboarding state file")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Onboarding config file")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def status(state_path: str, config_path: str, json_output: bool):
    """Show saved onboarding progress."""
    import json

    from dayflow_onboarding.wizard import WizardController, WizardUI
    from dayflow_onboarding.wizard.store import JsonFileStore

    try:
        config = _load_config(config_path, state_path)
        store = JsonFileStore(config.state_path)
        controller = WizardController(store=store, fast_path_provider=config.fast_path_provider)
        step = controller.resolve(mark_started=False)
        state = store.load()
    except OnboardingError as e:
        _fail(e)

    status_data = {
        "path": str(config.state_path),
        "step_id": step.id,
        "step": step.name,
        "schema_version": state.schema_version,
        "completed": state.completed,
        "started": state.started,
        "selected_provider": state.selected_provider,
    }

    if json_output:
        print(json.dumps(status_data, indent=2))
        return

    WizardUI(console).show_summary_table("Dayflow Onboarding Status", {
        "State file": str(config.state_path),
        "Current step": f"{step.id + 1}/{len(controller.sequence)} {step.title}",
        "Schema version": str(state.schema_version),
        "Completed": "[green]yes[/green]" if state.completed else "no",
        "Provider": state.selected_provider,
    })


@main.command()
@click.option("--state", "state_path", type=click.Path(dir_okay=False), help="Onboarding state file")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def reset(state_path: str, yes: bool):
    """Forget saved onboarding progress."""
    from dayflow_onboarding.wizard.store import JsonFileStore

    try:
        config = _load_config(None, state_path)
    except OnboardingError as e:
        _fail(e)

    if not config.state_path.exists():
        console.print("[dim]No onboarding progress saved.[/dim]")
        return

    if not yes:
        if not click.confirm(f"Delete onboarding progress at {config.state_path}?"):
            console.print("[dim]Cancelled.[/dim]")
            sys.exit(0)

    try:
        JsonFileStore(config.state_path).clear()
    except OnboardingError as e:
        _fail(e)
    console.print("[green]Onboarding progress cleared.[/green]")


@main.command()
def steps():
    """List the onboarding steps in order."""
    from rich.table import Table

    from dayflow_onboarding.wizard.controller import FAST_PATH_PROVIDER
    from dayflow_onboarding.wizard.steps import (
        CAPABILITY_STEP, DEFAULT_SEQUENCE, PROVIDER_SELECTION_STEP
    )

    table = Table(title="Onboarding Steps", border_style="blue")
    table.add_column("#", style="cyan")
    table.add_column("Name")
    table.add_column("Title")
    table.add_column("Back to", style="dim")
    table.add_column("Notes", style="dim")

    for step in DEFAULT_SEQUENCE:
        notes = ""
        if step.name == PROVIDER_SELECTION_STEP:
            notes = f"'{FAST_PATH_PROVIDER}' skips the next step"
        elif step.name == CAPABILITY_STEP:
            notes = "checks capture access on exit"
        elif DEFAULT_SEQUENCE.is_terminal(step):
            notes = "completes onboarding"
        table.add_row(str(step.id), step.name, step.title, step.back_target or "", notes)

    console.print(table)


if __name__ == "__main__":
    main()
