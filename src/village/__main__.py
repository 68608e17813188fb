from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .app import VillageApp
from .config import load_config
from .exceptions import VillageError
from .logging_config import configure_logging
from .placement import Vector3

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="village",
        description="Village core - inspect and edit a saved village from the command line",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, default=None, help="Path to a village YAML config")
    parser.add_argument("--save-dir", type=Path, default=None, help="Directory holding the save file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Show balance and placed objects")
    sub.add_parser("catalog", help="List purchasable objects")

    buy = sub.add_parser("buy", help="Buy and place an object")
    buy.add_argument("catalog_id")
    buy.add_argument("x", type=float)
    buy.add_argument("y", type=float)
    buy.add_argument("--rotation", type=float, default=0.0)

    delete = sub.add_parser("delete", help="Delete a placed object by its index in 'status'")
    delete.add_argument("index", type=int)

    reward = sub.add_parser("reward", help="Credit coins (mini-game reward)")
    reward.add_argument("amount", type=int)
    penalty = sub.add_parser("penalty", help="Debit coins (mini-game penalty, floors at zero)")
    penalty.add_argument("amount", type=int)

    sub.add_parser("reset", help="Restore the starting balance")
    return parser


def _print_status(app: VillageApp) -> None:
    print(f"Balance: {app.ledger.balance}")
    objects = app.world.snapshot()
    if not objects:
        print("No objects placed.")
    for i, obj in enumerate(objects):
        p = obj.position
        print(f"[{i}] {obj.catalog_id} at ({p.x:g}, {p.y:g}, {p.z:g}) rot={obj.rotation:g} paid={obj.original_cost}")


def _run_command(app: VillageApp, args: argparse.Namespace) -> int:
    orch = app.orchestrator
    if args.command == "status":
        _print_status(app)
    elif args.command == "catalog":
        for entry in app.catalog.values():
            print(f"{entry.id:<14} {entry.display_name:<16} cost={entry.cost:<5} refund={float(entry.refund_ratio):.0%}")
    elif args.command == "buy":
        session = orch.request_purchase(args.catalog_id, Vector3(args.x, args.y))
        if session is None:
            print(app.messages.current.text if app.messages.current else "Purchase rejected")
            return 1
        if args.rotation:
            session.rotate(args.rotation)
        obj = orch.confirm_placement()
        if obj is None:
            print(app.messages.current.text if app.messages.current else "Purchase failed")
            return 1
        print(f"Placed {obj.catalog_id} at ({obj.position.x:g}, {obj.position.y:g}); balance {app.ledger.balance}")
    elif args.command == "delete":
        objects = app.world.snapshot()
        if not 0 <= args.index < len(objects):
            print(f"No object at index {args.index}")
            return 1
        candidate = orch.notify_object_selected(objects[args.index].instance_id)
        orch.confirm_delete()
        print(f"Removed {candidate.catalog_id}; refunded {candidate.refund}; balance {app.ledger.balance}")
    elif args.command == "reward":
        app.ledger.credit(args.amount, reason="reward")
        print(f"Balance: {app.ledger.balance}")
    elif args.command == "penalty":
        app.ledger.debit(args.amount, reason="penalty")
        print(f"Balance: {app.ledger.balance}")
    elif args.command == "reset":
        app.ledger.reset()
        print(f"Balance: {app.ledger.balance}")
    return 0


def main(argv: Optional[list] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
        if args.save_dir is not None:
            config.save_dir = args.save_dir
        app = VillageApp(config)
    except VillageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    app.start()
    try:
        return _run_command(app, args)
    except VillageError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        if not app.on_exit():
            print("warning: village could not be saved", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
