"""CLI entry point for the weather advisory service."""

import argparse
import logging

from advisor.config.loader import get_config_value, load_config, set_config_value
from advisor.models.common import utc_now
from advisor.pipeline.orchestrator import WeatherOrchestrator
from advisor.reporting.formatters import format_advisory_json, format_advisory_text
from advisor.storage.backup_store import load_backup, prune_expired, save_backup

DEFAULT_CONFIG = "configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="advisor",
        description="City weather forecast and advice",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # advise
    advise_p = sub.add_parser("advise", help="Forecast and advice for a city")
    advise_p.add_argument("city", help="City name, e.g. London or 'London,GB'")
    advise_p.add_argument(
        "--offline", action="store_true", help="Serve from back up only"
    )
    advise_p.add_argument("--json", action="store_true", help="Print JSON")

    # backup list / backup prune
    backup_p = sub.add_parser("backup", help="Back up file operations")
    backup_sub = backup_p.add_subparsers(dest="backup_command")
    backup_sub.add_parser("list", help="List cities held in the back up")
    backup_sub.add_parser("prune", help="Drop past time slots from the back up")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser(
        "set", help="Validate a config value (the YAML file is not modified)"
    )
    set_p.add_argument("keyvalue", help="key=value to set")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8080)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "advise":
        return _cmd_advise(config, args)
    elif args.command == "backup":
        return _cmd_backup(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_advise(config, args) -> int:
    if args.offline:
        config = config.model_copy(
            update={"service": config.service.model_copy(update={"online": False})}
        )
    orchestrator = WeatherOrchestrator(config)
    result = orchestrator.get_advisory(args.city)
    if args.json:
        print(format_advisory_json(result))
    else:
        print(format_advisory_text(args.city, result))
    return 0 if result.ok else 1


def _cmd_backup(config, args) -> int:
    path = config.service.cache_file
    index = load_backup(path)

    if args.backup_command == "list":
        if not index:
            print("Back up is empty")
        for city, bundle in index.items():
            print(f"  {city}: {bundle.record_count} records")
        return 0
    elif args.backup_command == "prune":
        now = utc_now()
        pruned = {}
        for city, bundle in index.items():
            kept = prune_expired(bundle, now)
            if kept.records:
                pruned[city] = kept
        removed = sum(b.record_count for b in index.values()) - sum(
            b.record_count for b in pruned.values()
        )
        save_backup(path, pruned)
        print(f"Pruned {removed} records, {len(pruned)} cities kept")
        return 0
    else:
        print("Use: backup list | backup prune")
        return 1


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            print(
                f"Valid: {key} = {get_config_value(new_config, key.strip())} "
                f"(not saved; edit {args.config} to apply)"
            )
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from advisor.api import create_app

    app = create_app(WeatherOrchestrator(config))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0
