from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Callable, TextIO

from hanzimaster.modules.decks.errors import DeckError
from hanzimaster.modules.decks.export import dump_deck, write_deck
from hanzimaster.modules.decks.main import DeckService
from hanzimaster.modules.decks.models import Deck
from hanzimaster.modules.decks.sources import read_file
from hanzimaster.modules.review.models import ReviewAction
from hanzimaster.modules.review.presenter import render_text
from hanzimaster.modules.review.state import EmptyDeckError, ReviewSession

REVIEW_COMMANDS: dict[str, ReviewAction] = {
    "": ReviewAction.FLIP,
    "f": ReviewAction.FLIP,
    "n": ReviewAction.NEXT,
    "p": ReviewAction.PREVIOUS,
    "s": ReviewAction.TOGGLE_SCRIPT,
}

REVIEW_HELP = "[Enter/f] flip  [n] next  [p] previous  [s] switch script  [q] quit"


def _load_list(args: argparse.Namespace) -> str:
    if args.text and args.file:
        raise SystemExit("Provide either --text or --file, not both")
    if args.file:
        return read_file(args.file)
    if args.text:
        return args.text
    raise SystemExit("--text or --file is required")


def _emit(deck: Deck, out_dir: str | None) -> None:
    if out_dir:
        path = write_deck(deck, out_dir)
        print(f"Saved {len(deck.cards)} cards to {path}")
    else:
        print(dump_deck(deck))


def review(
    deck: Deck,
    *,
    read: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> ReviewSession:
    """Interactive terminal review of ``deck`` until the user quits."""
    session = ReviewSession(id="cli")
    session.load_deck(deck)
    print(f"{deck.title}  ({len(deck.cards)} cards)", file=out)
    print(REVIEW_HELP, file=out)
    while True:
        state = session.to_state()
        progress = state.progress
        print("", file=out)
        print(f"--- {progress.position} / {progress.total} ---", file=out)
        print(render_text(state.card), file=out)
        try:
            command = read("> ").strip().lower()
        except EOFError:
            break
        if command == "q":
            break
        action = REVIEW_COMMANDS.get(command)
        if action is None:
            print(REVIEW_HELP, file=out)
            continue
        session.apply(action)
    return session


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanzimaster", description="Chinese vocabulary flashcards CLI"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    t = sub.add_parser("topic", help="Generate a deck of 10-15 words for a topic")
    t.add_argument("topic", help="Topic, e.g. 'fruit' or 'at the airport'")
    t.add_argument("--out", help="Directory to save the deck JSON into")

    li = sub.add_parser(
        "list", help="Generate a deck from words, one per line ('word: example' allowed)"
    )
    li.add_argument("--text", "-t", help="Word list as text")
    li.add_argument("--file", "-f", help="Path to a file containing the word list")
    li.add_argument("--out", help="Directory to save the deck JSON into")

    im = sub.add_parser(
        "import", help="Import a deck file, a JSON list of words, or a text word list"
    )
    im.add_argument("source", help="Local path, http(s) URL or Google Drive share link")
    im.add_argument("--out", help="Directory to save the deck JSON into")

    rv = sub.add_parser("review", help="Review a saved deck in the terminal")
    rv.add_argument("path", help="Path to a saved deck JSON file")

    args = parser.parse_args(argv)
    svc = DeckService()
    try:
        if args.cmd == "topic":
            _emit(asyncio.run(svc.from_topic(args.topic)), args.out)
            return 0
        if args.cmd == "list":
            _emit(asyncio.run(svc.from_list(_load_list(args))), args.out)
            return 0
        if args.cmd == "import":
            source = args.source
            if "drive.google.com" in source:
                deck = asyncio.run(svc.from_drive_link(source))
            elif source.startswith(("http://", "https://")):
                deck = asyncio.run(svc.from_url(source))
            else:
                deck = asyncio.run(svc.from_file(Path(source)))
            _emit(deck, args.out)
            return 0
        if args.cmd == "review":
            review(asyncio.run(svc.from_file(Path(args.path))))
            return 0
    except (DeckError, EmptyDeckError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
