"""
Dayflow Onboarding Wizard UI

Terminal renderer and prompts for the onboarding wizard using rich library.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, Confirm
from rich.table import Table

from dayflow_onboarding.wizard.steps import PROVIDERS, Step

if TYPE_CHECKING:
    from dayflow_onboarding.wizard.controller import WizardController


STEP_TEXT = {
    "welcome": (
        "[bold]Your day has a story. Uncover it with Dayflow.[/bold]\n\n"
        "This wizard sets up Dayflow in a few minutes. You can quit at any\n"
        "time and pick up where you left off."
    ),
    "how_it_works": (
        "Dayflow records your screen at a low frame rate, then an AI model\n"
        "turns the footage into a timeline of what you worked on.\n\n"
        "[dim]Recordings stay on this machine unless your provider needs them.[/dim]"
    ),
    "llm_selection": "Pick the AI provider that will summarize your recordings.",
    "llm_setup": "Connect your provider so Dayflow can reach it.",
    "categories": "Review the categories Dayflow uses to group your activities.",
    "screen_recording": (
        "Dayflow needs screen recording permission to capture your day.\n"
        "[dim]If you grant it later, recording starts after a restart.[/dim]"
    ),
    "completion": (
        "[bold green]You are ready to go![/bold green]\n\n"
        "Let Dayflow run for about 30 minutes, then come back to explore\n"
        "your timeline."
    ),
}


class Renderer(ABC):
    """Draws the view for a step."""

    @abstractmethod
    def render(self, step: Step):
        """Show ``step``."""


class ConsoleRenderer(Renderer):
    """Renders each step as a rich panel."""

    def __init__(self, console: Optional[Console] = None, total_steps: int = 0):
        self.console = console or Console()
        self.total_steps = total_steps

    def render(self, step: Step):
        title = step.title or step.name
        if self.total_steps:
            title = f"Step {step.id + 1}/{self.total_steps}: {title}"
        self.console.print()
        self.console.print(Panel(
            STEP_TEXT.get(step.name, ""),
            title=f"[bold cyan]{title}[/bold cyan]",
            title_align="left",
            border_style="blue",
            padding=(1, 2)
        ))


class WizardUI:
    """Prompts for the onboarding wizard."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_header(self, title: str = "Dayflow Setup"):
        """Print the wizard header."""
        self.console.print()
        self.console.print(Panel(
            f"[bold blue]{title}[/bold blue]",
            border_style="blue",
            padding=(0, 2)
        ))

    def print_success(self, message: str):
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str):
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str):
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str):
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def prompt_confirm(self, prompt: str, default: bool = False) -> bool:
        """Prompt for yes/no confirmation."""
        return Confirm.ask(prompt, default=default, console=self.console)

    def prompt_choice(
        self,
        prompt: str,
        choices: List[str],
        default: Optional[str] = None
    ) -> str:
        """Prompt for a choice from a list."""
        self.console.print(f"\n{prompt}")
        for i, choice in enumerate(choices, 1):
            marker = "[bold green]→[/bold green]" if choice == default else " "
            self.console.print(f"  {marker} [{i}] {choice}")

        while True:
            selection = Prompt.ask(
                "Enter number or name",
                default=str(choices.index(default) + 1) if default else None,
                console=self.console
            )

            # Try numeric selection
            try:
                idx = int(selection) - 1
                if 0 <= idx < len(choices):
                    return choices[idx]
            except (TypeError, ValueError):
                pass

            # Try name match
            for choice in choices:
                if selection and choice.lower() == selection.lower():
                    return choice

            self.print_error(f"Invalid selection. Choose 1-{len(choices)}")

    def show_summary_table(self, title: str, data: Dict[str, Optional[str]]):
        """Show a two-column summary table."""
        table = Table(title=title, border_style="blue")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in data.items():
            table.add_row(key, value if value else "[dim]not set[/dim]")

        self.console.print(table)

    def prompt_provider(
        self,
        providers: Dict[str, dict],
        default: Optional[str] = None
    ) -> str:
        """Ask which provider to use. Returns the provider key."""
        keys = list(providers.keys())
        labels = [providers[key].get("name", key) for key in keys]
        default_label = labels[keys.index(default)] if default in keys else None
        selected = self.prompt_choice(
            "Select your AI provider",
            choices=labels,
            default=default_label
        )
        return keys[labels.index(selected)]

    def drive(
        self,
        controller: "WizardController",
        providers: Optional[Dict[str, dict]] = None,
        default_provider: Optional[str] = None
    ) -> bool:
        """Run the wizard interactively until it completes or the user quits.

        Returns:
            True if onboarding was completed
        """
        providers = providers or PROVIDERS
        step = controller.enter()
        if controller.completed:
            self.print_warning("Onboarding was already completed. Running it again.")

        while True:
            if controller.sequence.is_terminal(step):
                if not self.prompt_confirm("Proceed to Dayflow?", default=True):
                    self.print_info("Run 'dayflow-onboard run' when you are ready to finish.")
                    return False
                controller.complete()
                self.print_success("Onboarding complete.")
                return True

            if step.name == controller.branch_step:
                provider = self.prompt_provider(
                    providers,
                    default=controller.selection.provider or default_provider
                )
                controller.select_provider(provider)

            actions = ["Next"]
            if step.back_target:
                actions.append("Back")
            actions.append("Quit")

            action = self.prompt_choice("What next?", choices=actions, default="Next")
            if action == "Next":
                step = controller.advance()
            elif action == "Back":
                step = controller.back()
            else:
                self.console.print()
                self.print_info("Progress saved. Run 'dayflow-onboard run' to resume.")
                return False
