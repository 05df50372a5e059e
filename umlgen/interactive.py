"""
Interactive prompts for the command line tool.

Element and folder selection for a generation run, and the preferences
panel behind ``umlgen configure``.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.prompt import Prompt, Confirm, IntPrompt
from rich.panel import Panel
from rich.table import Table
from rich import box

from .core.config import ConfigManager, GeneratorConfig, load_config
from .core.errors import UserCancelled
from .core.model import Element, ElementKind, iter_elements
from .languages.gosu.config import GOSU_PREFERENCES
from .logging_config import get_logger

logger = get_logger(__name__)

CANCEL_CHOICE = "c"


def generatable_elements(root: Element) -> List[Element]:
    """Named packages and type declarations a run can start from."""
    return [
        element
        for element in iter_elements(root)
        if element.name and element.kind is not ElementKind.OTHER
    ]


def qualified_name(element: Element) -> str:
    return ".".join([a.name for a in reversed(element.ancestors())] + [element.name])


class InteractiveHandler:
    """Prompts used before a generation run starts."""

    def __init__(self, console: Console = None):
        """
        Initialize the interactive handler.

        Args:
            console: Rich console instance (creates new if None)
        """
        self.console = console or Console()

    def select_element(self, root: Element) -> Element:
        """
        Ask which element to generate.

        Raises:
            UserCancelled: If the user dismisses the prompt
        """
        candidates = generatable_elements(root)
        if not candidates:
            self.console.print("[red]❌ Model contains no named elements[/red]")
            raise UserCancelled("No element selected")

        table = Table(
            title="📦 Select Element to Generate",
            box=box.ROUNDED,
            header_style="bold cyan",
        )
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Element", style="bold green")
        table.add_column("Kind", style="dim")

        for i, element in enumerate(candidates, 1):
            table.add_row(str(i), qualified_name(element), element.kind.value)

        self.console.print()
        self.console.print(table)

        choice = self._ask(
            "\n[bold]Select element[/bold] ([cyan]c[/cyan] to cancel)",
            choices=[str(i) for i in range(1, len(candidates) + 1)] + [CANCEL_CHOICE],
            default="1",
        )
        if choice == CANCEL_CHOICE:
            raise UserCancelled("No element selected")

        element = candidates[int(choice) - 1]
        logger.debug("Selected element %s", qualified_name(element))
        return element

    def select_output_dir(self, default: Optional[str] = None) -> Path:
        """
        Ask for the folder generated code is placed in.

        Raises:
            UserCancelled: If the user dismisses the prompt or gives no folder
        """
        answer = self._ask(
            "[bold]Select a folder where generated codes to be located[/bold]",
            default=default or "",
        ).strip()
        if not answer:
            raise UserCancelled("No output folder selected")

        path = Path(answer).expanduser()
        if not path.is_dir():
            if not Confirm.ask(
                f"Folder [cyan]{path}[/cyan] does not exist. Create it?",
                default=True,
                console=self.console,
            ):
                raise UserCancelled("No output folder selected")
            path.mkdir(parents=True, exist_ok=True)
        return path

    def configure(
        self,
        config_file: Path,
        manager: Optional[ConfigManager] = None,
    ) -> GeneratorConfig:
        """
        Edit the Gosu preferences and save them to ``config_file``.

        Raises:
            UserCancelled: If the user declines to save
        """
        manager = manager or ConfigManager()
        if config_file.exists():
            config = load_config(config_file=config_file)
        else:
            config = manager.get_config("gosu")

        self._show_preferences(config)

        values: Dict[str, Any] = {}
        for key, preference in GOSU_PREFERENCES.items():
            current = config.get_option(key)
            if preference["type"] == "Check":
                values[preference["field"]] = Confirm.ask(
                    preference["description"], default=current, console=self.console
                )
            else:
                values[preference["field"]] = IntPrompt.ask(
                    preference["description"], default=current, console=self.console
                )

        author = Prompt.ask(
            "Author (blank for none)", default=config.author or "", console=self.console
        ).strip()
        values["author"] = author or None

        for field_name, value in values.items():
            setattr(config, field_name, value)

        warnings = manager.validate_config(config, "gosu")
        for warning in warnings:
            self.console.print(f"  [yellow]•[/yellow] {warning}")

        if not Confirm.ask(
            f"Save preferences to [cyan]{config_file}[/cyan]?",
            default=True,
            console=self.console,
        ):
            raise UserCancelled("Preferences not saved")

        manager.save_config(config, config_file)
        self.console.print(f"[green]✓[/green] Preferences saved to [cyan]{config_file}[/cyan]")
        return config

    def _show_preferences(self, config: GeneratorConfig):
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
        table.add_column("Preference", style="bold")
        table.add_column("Key", style="dim")
        table.add_column("Value", style="green")

        for key, preference in GOSU_PREFERENCES.items():
            table.add_row(preference["text"], key, str(config.get_option(key)))

        self.console.print()
        self.console.print(
            Panel(table, title="⚙️  Gosu Configuration", border_style="blue")
        )

    def _ask(self, prompt: str, **kwargs) -> str:
        # Ctrl+C or end of input counts as dismissing the prompt
        try:
            return Prompt.ask(prompt, console=self.console, **kwargs)
        except (KeyboardInterrupt, EOFError) as e:
            raise UserCancelled("Prompt dismissed") from e
