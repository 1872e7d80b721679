"""
Sadari CLI - Command-line interface for the ladder engine.

Usage:
    sadari play <name> <name>... --penalty TEXT   Reveal players until someone loses
    sadari outcomes <players>                     Show where each column lands
    sadari serve                                  Run the HTTP API
"""

import argparse
import logging
import random
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sadari - Penalty Ladder Game",
        prog="sadari",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show engine logs")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a ladder game")
    play_parser.add_argument("players", nargs="+", help="Participant names (2-8)")
    play_parser.add_argument("--penalty", "-p", required=True, help="Penalty for the loser")
    play_parser.add_argument("--seed", type=int, help="Seed for a reproducible ladder")
    play_parser.add_argument("--group", help="Record the result for this group ID")

    # Outcomes command
    outcomes_parser = subparsers.add_parser("outcomes", help="Show a ladder's column mapping")
    outcomes_parser.add_argument("players", type=int, help="Number of columns")
    outcomes_parser.add_argument("--seed", type=int, help="Seed for a reproducible ladder")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "play":
        return cmd_play(args)
    elif args.command == "outcomes":
        return cmd_outcomes(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def _generator(seed):
    from .engine_core import LadderGenerator

    return LadderGenerator(rng=random.Random(seed))


def cmd_play(args):
    """Reveal every player in order until one lands on the penalty."""
    from .reporting import InMemoryResultStore, ResultScope
    from .session import GameSessionController

    store = InMemoryResultStore()
    controller = GameSessionController(
        reporter=store,
        generator=_generator(args.seed),
        scope=ResultScope.GROUP if args.group else ResultScope.ME,
        group_id=args.group,
    )

    result = controller.confirm(args.players, args.penalty)
    if not result.success:
        print(f"Error: {result.error}")
        for e in result.errors:
            print(f"  - {e}")
        return 1

    session = controller.session
    print(f"Ladder: {session.num_players} players, {len(session.graph.rungs)} rungs")
    print(f"Penalty: {session.penalty_text}\n")

    for column, name in enumerate(session.players):
        result = controller.play(column)
        if not result.success:
            print(f"Error: {result.error}")
            return 1
        if result.finished:
            print(f"  {name}: PENALTY")
            break
        print(f"  {name}: pass")

    print(f"\n{controller.session.winner} has to: {controller.session.penalty_text}")
    for warning in result.warnings:
        print(f"Warning: {warning}")
    return 0


def cmd_outcomes(args):
    """Print start column -> final column for a generated ladder."""
    from .engine_core import outcome_map
    from .errors import LadderPreconditionError

    try:
        graph = _generator(args.seed).generate(args.players)
    except LadderPreconditionError as e:
        print(f"Error: {e}")
        return 1

    for start, final in enumerate(outcome_map(graph)):
        marker = "  <- penalty" if final == graph.penalty_column else ""
        print(f"{start} -> {final}{marker}")
    return 0


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
