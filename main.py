"""Storyline Terminal - launcher. Serves the session API or plays in the terminal."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "13013"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    if args.story:
        os.environ["STORY_PATH"] = str(args.story.resolve())
    if args.bookmark:
        os.environ["BOOKMARK_PATH"] = str(args.bookmark.resolve())
    print(f"Starting backend on http://localhost:{args.port} ...")
    uvicorn.run("backend.app:app", host=HOST, port=args.port, reload=args.reload)
    return 0


def _play(args: argparse.Namespace) -> int:
    from backend import assets
    from backend.terminal import play
    from storyline import InitError, SessionController

    story = args.story or Path(os.getenv("STORY_PATH", str(assets.DEFAULT_STORY_PATH)))
    bookmark = args.bookmark
    if bookmark is None and os.getenv("BOOKMARK_PATH"):
        bookmark = Path(os.environ["BOOKMARK_PATH"])
    assets.init_assets(story, bookmark)

    controller = SessionController()
    try:
        controller.init(assets.story_bytes(), assets.bookmark_bytes())
    except InitError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print("Loading story...")
    try:
        play(controller)
    except KeyboardInterrupt:
        print()
    if args.save:
        args.save.write_bytes(controller.save())
        print(f"Saved bookmark to {args.save}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Storyline Terminal launcher")
    parser.add_argument("--story", type=Path, default=None,
                        help="Compiled story asset (default: $STORY_PATH or assets/story.json)")
    parser.add_argument("--bookmark", type=Path, default=None,
                        help="Saved bookmark to resume from (default: $BOOKMARK_PATH or fresh start)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP session API")
    serve.add_argument("--port", type=int, default=PORT)
    serve.add_argument("--reload", action="store_true", help="Restart on code changes")
    serve.set_defaults(func=_serve)

    play = sub.add_parser("play", help="Play the story in this terminal")
    play.add_argument("--save", type=Path, default=None,
                      help="Write the bookmark here when the session ends")
    play.set_defaults(func=_play)

    args = parser.parse_args()
    logging.basicConfig(level=LOG_LEVEL)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
