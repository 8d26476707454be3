"""CLI entry point for the forecast pipeline."""

import argparse
import json
import logging
from datetime import date

from skycast.calendar.client import CalendarClient
from skycast.calendar.events import build_forecast_event
from skycast.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from skycast.errors import SkycastError, UserInputError
from skycast.models.common import OutputFormat
from skycast.pipeline.forecast_pipeline import ForecastPipeline
from skycast.reporting.formatters import (
    format_forecast_json,
    format_forecast_text,
    format_places_text,
)
from skycast.tools.registry import ToolRegistry

DEFAULT_CONFIG = "skycast.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="skycast",
        description="Place search and today/outlook forecast extraction",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # locate
    locate_p = sub.add_parser("locate", help="List candidate places for a query")
    locate_p.add_argument("query", help="City name or ZIP code")

    # forecast
    forecast_p = sub.add_parser("forecast", help="Fetch the forecast for a query")
    forecast_p.add_argument("query", help="City name or ZIP code")
    forecast_p.add_argument(
        "--choice", type=int, default=1, help="Candidate number to use (1-based)"
    )
    forecast_p.add_argument(
        "--format", choices=[f.value for f in OutputFormat], default=None,
        help="Output format (default from config)",
    )

    # calendar
    cal_p = sub.add_parser("calendar", help="Add today's forecast to the calendar")
    cal_p.add_argument("query", help="City name or ZIP code")
    cal_p.add_argument("--choice", type=int, default=1)
    cal_p.add_argument("--date", default=None, help="Event date, YYYY-MM-DD")
    cal_p.add_argument(
        "--dry-run", action="store_true", help="Print the event instead of inserting it"
    )

    # tools
    sub.add_parser("tools", help="Print tool schemas")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    try:
        if args.command == "locate":
            return _cmd_locate(config, args)
        elif args.command == "forecast":
            return _cmd_forecast(config, args)
        elif args.command == "calendar":
            return _cmd_calendar(config, args)
        elif args.command == "tools":
            return _cmd_tools(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
        else:
            parser.print_help()
            return 1
    except UserInputError as e:
        print(f"Error: {e}")
        return 2
    except SkycastError as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}")
        return 1


def _cmd_locate(config, args) -> int:
    pipeline = ForecastPipeline(config)
    places = pipeline.locate(args.query)
    print(format_places_text(pipeline.choices(places)))
    return 0 if places else 2


def _cmd_forecast(config, args) -> int:
    pipeline = ForecastPipeline(config)
    report = pipeline.run(args.query, choice=args.choice)
    output_format = OutputFormat(args.format or config.display.output_format)
    if output_format == OutputFormat.JSON:
        print(format_forecast_json(report))
    else:
        print(format_forecast_text(report))
    return 0


def _cmd_calendar(config, args) -> int:
    pipeline = ForecastPipeline(config)
    report = pipeline.run(args.query, choice=args.choice)
    try:
        day = date.fromisoformat(args.date) if args.date else None
    except ValueError:
        raise UserInputError(f"--date is not YYYY-MM-DD: {args.date}") from None
    event = build_forecast_event(report, day)
    if args.dry_run:
        print(json.dumps(event, indent=2, ensure_ascii=False))
        return 0
    client = CalendarClient(config=config.calendar, http=config.http)
    result = client.insert_event(event)
    print(f"Event created: {result['htmlLink']}")
    return 0


def _cmd_tools(config, args) -> int:
    registry = ToolRegistry(ForecastPipeline(config))
    print(json.dumps(registry.schemas(), indent=2))
    return 0


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
            save_config(new_config, args.config)
            print(f"Set {key} = {get_config_value(new_config, key.strip())}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
