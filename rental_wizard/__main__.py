"""Entry point for running the wizard as a module.

Usage:
    python -m rental_wizard                   # Post to the configured service
    python -m rental_wizard --api-url URL     # Override the service root
    python -m rental_wizard --verbose --json-logs
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime
from typing import Any, Callable, Optional

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.formatted_text import HTML

from rental_wizard.client import HttpListingClient
from rental_wizard.constants import MODAL_TITLE
from rental_wizard.context import SimpleModalHost, WizardContext
from rental_wizard.lib.logging import setup_logging
from rental_wizard.models.field_metadata import FIELD_LABELS
from rental_wizard.models.location import Location
from rental_wizard.settings import WizardSettings, get_settings
from rental_wizard.wizard import RentWizard


class ConsoleNotifier:
    """Prints notifications as coloured terminal lines."""

    def success(self, message: str) -> None:
        print_formatted_text(HTML("<ansigreen>✔ {}</ansigreen>").format(message))

    def error(self, message: str) -> None:
        print_formatted_text(HTML("<ansired>✘ {}</ansired>").format(message))


def parse_location(text: str) -> Optional[Location]:
    """Parse "label | lat, lng" (coordinate optional)."""
    if not text.strip():
        return None
    label, _, coords = text.partition("|")
    coordinate = None
    if coords.strip():
        lat, lng = (float(part) for part in coords.split(","))
        coordinate = (lat, lng)
    return Location(label=label.strip(), coordinate=coordinate)


def parse_images(text: str) -> list[str]:
    return [ref.strip() for ref in text.split(",") if ref.strip()]


def parse_date(text: str) -> Optional[datetime]:
    return datetime.fromisoformat(text.strip()) if text.strip() else None


def parse_price(text: str) -> float | int:
    amount = float(text)
    return int(amount) if amount.is_integer() else amount


def parse_flag(text: str) -> bool:
    return text.strip().lower() in ("y", "yes", "true", "1", "on")


PARSERS: dict[str, Callable[[str], Any]] = {
    "category": str.strip,
    "location": parse_location,
    "guest_count": int,
    "room_count": int,
    "bathroom_count": int,
    "images": parse_images,
    "title": str.strip,
    "description": str.strip,
    "lease_start_date": parse_date,
    "lease_end_date": parse_date,
    "price": parse_price,
    "is_active": parse_flag,
}


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Location):
        if value.coordinate:
            return f"{value.label} | {value.coordinate[0]}, {value.coordinate[1]}"
        return value.label
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if isinstance(value, bool):
        return "y" if value else "n"
    return str(value)


class ConsoleWizard:
    """Drives a RentWizard from a prompt_toolkit session."""

    def __init__(self, wizard: RentWizard, settings: WizardSettings) -> None:
        self.wizard = wizard
        self.settings = settings
        self.session: PromptSession[str] = PromptSession()

    def render(self) -> None:
        view = self.wizard.view
        print_formatted_text(
            HTML("\n<b>{}</b>  <ansigray>step {}/6</ansigray>").format(
                view.title, int(view.step) + 1
            )
        )
        print_formatted_text(HTML("<i>{}</i>").format(view.subtitle))
        for field_name in view.fields:
            print_formatted_text(
                "  {}: {}".format(
                    FIELD_LABELS[field_name],
                    format_value(self.wizard.get_field(field_name)),
                )
            )

    async def edit_step(self) -> None:
        for field_name in self.wizard.view.fields:
            completer = (
                WordCompleter(self.settings.categories)
                if field_name == "category"
                else None
            )
            text = await self.session.prompt_async(
                f"{FIELD_LABELS[field_name]}: ",
                default=format_value(self.wizard.get_field(field_name)),
                completer=completer,
            )
            try:
                value = PARSERS[field_name](text)
            except ValueError as exc:
                self.wizard.context.notifier.error(
                    f"{FIELD_LABELS[field_name]}: {exc}"
                )
                continue
            self.wizard.set_field(field_name, value)

    async def run(self) -> None:
        modal = self.wizard.context.modal
        print_formatted_text(HTML("<b><u>{}</u></b>").format(MODAL_TITLE))
        while modal.is_open:
            self.render()
            actions = ["[e]dit", f"[n] {self.wizard.action_label}"]
            if self.wizard.secondary_action_label:
                actions.append(f"[b] {self.wizard.secondary_action_label}")
            actions.append("[q]uit")
            command = (
                await self.session.prompt_async(" ".join(actions) + " > ")
            ).strip().lower()

            if command == "e":
                await self.edit_step()
            elif command == "n":
                if not await self.wizard.forward() and self.wizard.disabled:
                    self.wizard.context.notifier.error("Complete this step first")
            elif command == "b":
                self.wizard.back()
            elif command == "q":
                break


async def run_console(settings: WizardSettings) -> None:
    async with HttpListingClient.from_settings(settings) as client:
        context = WizardContext(
            client=client,
            modal=SimpleModalHost(),
            notifier=ConsoleNotifier(),
        )
        await ConsoleWizard(RentWizard(context), settings).run()


def main(argv: Optional[list[str]] = None) -> int:
    """Run the console wizard."""
    parser = argparse.ArgumentParser(
        prog="rental-wizard", description="Post a rental listing step by step."
    )
    parser.add_argument("--api-url", help="Root URL of the listing service")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Log as JSON")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, json_format=args.json_logs, log_file=args.log_file)

    settings = get_settings()
    if args.api_url:
        settings.api_base_url = args.api_url

    try:
        asyncio.run(run_console(settings))
    except (KeyboardInterrupt, EOFError):
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
