"""Terminal front-end: drive a rating session from line commands on stdin."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Mapping, Sequence, TextIO

from .config import load_settings
from .domain.category_view import CategoryGroup, PresentationMode
from .domain.entrystore import Category
from .infra.logging import configure_logging, get_logger
from .session import RatingSession, Screen, SessionStateError, build_session

logger = get_logger(__name__)

HELP_TEXT = """Commands:
  category <Anime|Movie|Show>   pick the category for the next rating
  name <text>                   set the item name
  rating <1-10>                 set the rating
  comment <text>                set the comment (empty clears it)
  add                           add the current rating
  show                          show the current screen
  view                          open the Ratings screen
  back                          return to the Home screen
  help                          show this message
  quit                          exit"""


def render_home(session: RatingSession) -> List[str]:
    draft = session.draft
    rating = str(draft.rating) if draft.rating else "-"
    return [
        "CineRate",
        f"  category: {draft.category.value}",
        f"  name:     {draft.name or session.name_placeholder}",
        f"  rating:   {rating} / 10",
        f"  comment:  {draft.comment} ({session.char_count_label})",
        f"  [{session.add_button_label}]",
    ]


def render_group(group: CategoryGroup, *, viewport_rows: int) -> List[str]:
    lines = [group.title]
    if group.mode is PresentationMode.EMPTY:
        lines.append(f"  {group.empty_message}")
        return lines
    visible = group.items
    if group.mode is PresentationMode.SCROLLABLE:
        visible = group.items[:viewport_rows]
    for item in visible:
        lines.append(f"  {item.name}  {item.rating_label}")
        lines.append(f"    {item.comment_label}")
    hidden = len(group.items) - len(visible)
    if hidden > 0:
        lines.append(f"  ... {hidden} more (scroll)")
    return lines


def render_ratings(
    groups: Mapping[Category, CategoryGroup], *, viewport_rows: int
) -> List[str]:
    lines = ["Ratings"]
    for group in groups.values():
        lines.extend(render_group(group, viewport_rows=viewport_rows))
    return lines


class CommandLoop:
    """Parses one command per line and applies it to a session."""

    def __init__(
        self,
        session: RatingSession,
        *,
        viewport_rows: int,
        stdout: TextIO,
    ) -> None:
        self._session = session
        self._viewport_rows = viewport_rows
        self._stdout = stdout
        self._handlers: Dict[str, Callable[[str], None]] = {
            "category": self._category,
            "name": self._name,
            "rating": self._rating,
            "comment": self._comment,
            "add": self._add,
            "show": self._show,
            "view": self._view,
            "back": self._back,
            "help": self._help,
        }

    def run(self, stdin: TextIO) -> int:
        for raw in stdin:
            line = raw.rstrip("\r\n")
            command, _, argument = line.lstrip().partition(" ")
            command = command.rstrip()
            if not command:
                continue
            if command.lower() in {"quit", "exit"}:
                break
            handler = self._handlers.get(command.lower())
            if handler is None:
                self._write(f"Unknown command '{command}'. Type 'help'.")
                continue
            try:
                handler(argument)
            except SessionStateError as exc:
                self._write(str(exc))
        return 0

    def _write(self, *lines: str) -> None:
        for line in lines:
            self._stdout.write(f"{line}\n")

    def _category(self, argument: str) -> None:
        value = argument.strip().title()
        try:
            self._session.select_category(value)
        except ValueError:
            choices = ", ".join(category.value for category in Category)
            self._write(f"Unknown category '{argument.strip()}'. Choose one of: {choices}")

    def _name(self, argument: str) -> None:
        self._session.set_name(argument)

    def _rating(self, argument: str) -> None:
        try:
            self._session.set_rating(int(argument.strip()))
        except ValueError:
            self._write("Rating must be a whole number from 1 to 10.")

    def _comment(self, argument: str) -> None:
        if not self._session.set_comment(argument):
            limit = self._session.store.comment_max_length
            self._write(f"Comment not updated: limit is {limit} characters.")

    def _add(self, _argument: str) -> None:
        result = self._session.submit()
        if result.accepted and result.entry is not None:
            entry = result.entry
            self._write(f"Added {entry.name} ({entry.category.value}) {entry.rating} / 10")
            return
        alert = result.alert
        if alert is not None:
            self._write(f"{alert.title}: {alert.message}")

    def _show(self, _argument: str) -> None:
        if self._session.screen is Screen.RATINGS:
            groups = self._session.groups()
            self._write(*render_ratings(groups, viewport_rows=self._viewport_rows))
        else:
            self._write(*render_home(self._session))

    def _view(self, _argument: str) -> None:
        self._session.view_ratings()
        self._show("")

    def _back(self, _argument: str) -> None:
        self._session.go_back()
        self._show("")

    def _help(self, _argument: str) -> None:
        self._write(HELP_TEXT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cinerate", description=__doc__)
    parser.add_argument(
        "--profile",
        default=None,
        help="Config profile name (defaults to $CINERATE_CONFIG_PROFILE or 'dev').",
    )
    parser.add_argument(
        "--config-dir",
        default=None,
        help="Directory holding <profile>.yaml files.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the profile log level (e.g. DEBUG, INFO).",
    )
    return parser


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.profile, args.config_dir)
    configure_logging(settings.logging, level=args.log_level)
    logger.info(
        "session_started",
        extra={"environment": settings.environment},
    )

    session = build_session(settings)
    loop = CommandLoop(
        session,
        viewport_rows=settings.presentation.viewport_rows,
        stdout=stdout or sys.stdout,
    )
    return loop.run(stdin or sys.stdin)


if __name__ == "__main__":
    sys.exit(main())
