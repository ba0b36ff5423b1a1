from __future__ import annotations
import argparse, importlib, inspect, io, json, sys

from app.controller.controller import Controller
from app.controller.errors import UnknownEventTypeError
from app.logging_config import configure_logging


def load_controller(target: str) -> type:
    """'package.module:ClassName' -> the Controller subclass it names."""
    module_name, _, class_name = target.partition(":")
    if not module_name or not class_name:
        raise SystemExit(f"expected module:Class, got '{target}'")
    cls = getattr(importlib.import_module(module_name), class_name, None)
    if not (isinstance(cls, type) and issubclass(cls, Controller)):
        raise SystemExit(f"'{target}' is not a Controller subclass")
    return cls


def build(cls: type) -> Controller:
    # demo controllers render to stdout by default; keep the CLI output clean
    if "out" in inspect.signature(cls).parameters:
        return cls(out=io.StringIO())
    return cls()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="statectl", description="Inspect and drive a composed controller")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_describe = sub.add_parser("describe", help="Show event types and the handlers found for each")
    p_describe.add_argument("controller", help="module:Class")

    p_emit = sub.add_parser("emit", help="Emit events in order and print the resulting state")
    p_emit.add_argument("controller", help="module:Class")
    p_emit.add_argument("event_type", nargs="+")
    p_emit.add_argument("--data", action="append", default=[], help="JSON payload, one per event type")

    args = ap.parse_args(argv)
    # main() can run several times in one process; keep loggers unbound
    configure_logging(debug=args.verbose, json=False, stream=sys.stderr, cache=False)
    controller = build(load_controller(args.controller))

    if args.cmd == "describe":
        table = controller.describe()
        width = max((len(t) for t in table), default=0)
        for event_type, phases in table.items():
            flags = " ".join(f"{name}={'yes' if present else '-'}" for name, present in phases.items())
            print(f"{event_type:<{width}}  {flags}")
        for err in controller.composition_errors:
            print(f"! {err.code}: {err}", file=sys.stderr)
        return 1 if controller.composition_errors else 0

    if args.cmd == "emit":
        payloads = [json.loads(d) for d in args.data]
        try:
            for i, event_type in enumerate(args.event_type):
                controller.emit(event_type, payloads[i] if i < len(payloads) else None)
        except UnknownEventTypeError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2
        print(json.dumps(controller.get_state(), indent=2, sort_keys=True, default=repr))
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
