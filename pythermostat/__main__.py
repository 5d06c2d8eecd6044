# pyThermostat Module - Command Line
# -*- coding: utf-8 -*-
"""
 Python module serving and consuming a REST API for home thermostats

 Command Line:
    python -m pythermostat server [-host HOST] [-port PORT]
    python -m pythermostat list [-url URL] [-format text|json]
    python -m pythermostat get -id ID [-url URL] [-field FIELD]
    python -m pythermostat set -id ID [-url URL] [-name NAME] [-mode MODE] [-cool F] [-heat F] [-fan FAN]
    python -m pythermostat create [-url URL] [-name NAME] [-mode MODE] [-cool F] [-heat F] [-fan FAN]
    python -m pythermostat version

"""

import argparse
import json
import os
import sys

# Modules
from pythermostat import version, set_debug

# Global Variables
url = os.getenv("TS_URL", "http://localhost:8080")


def add_url_arg(parser):
    parser.add_argument("-url", type=str, default=argparse.SUPPRESS, help=f"Server URL [Default=$TS_URL or {url}]")


def add_field_args(parser):
    parser.add_argument("-name", type=str, default=None, help="Thermostat name")
    parser.add_argument("-mode", type=str, default=None, help="Operating mode: cool, heat, or off")
    parser.add_argument("-cool", type=int, default=None, help="Cool set point (F)")
    parser.add_argument("-heat", type=int, default=None, help="Heat set point (F)")
    parser.add_argument("-fan", type=str, default=None, help="Fan mode: auto or on")


def field_values(args):
    return {
        "name": args.name,
        "mode": args.mode,
        "cool_set_point": args.cool,
        "heat_set_point": args.heat,
        "fan": args.fan,
    }


def print_thermostat(t, output_format):
    if output_format == "json":
        print(t.model_dump_json(by_alias=True, indent=4))
        return
    print(f"[{t.id}] {t.name}")
    print(f"    Mode: {t.mode}   Fan: {t.fan}")
    print(f"    Current: {t.current_temp}F   Previous: {t.previous_temp}F")
    print(f"    Cool Set Point: {t.cool_set_point}F   Heat Set Point: {t.heat_set_point}F")
    print(f"    Last Changed: {t.last_changed.isoformat()}")


def build_parser():
    p = argparse.ArgumentParser(prog="pyThermostat", description=f"pyThermostat Module v{version}")
    subparsers = p.add_subparsers(dest="command", title='commands (run <command> -h to see usage information)',
                                  required=True)

    server_args = subparsers.add_parser("server", help='Run the thermostat API server')
    server_args.add_argument("-host", type=str, default=None, help="Bind address [Default=TS_BIND_ADDRESS]")
    server_args.add_argument("-port", type=int, default=None, help="Port [Default=TS_PORT]")

    list_args = subparsers.add_parser("list", help='List all thermostats')
    list_args.add_argument("-format", type=str, default="text", help="Output format: text or json")
    add_url_arg(list_args)

    get_args = subparsers.add_parser("get", help='Get a thermostat or one of its properties')
    get_args.add_argument("-id", type=int, required=True, help="Thermostat id")
    get_args.add_argument("-field", type=str, default=None,
                          help="Property: name, currentTemp, mode, coolSetPoint, heatSetPoint, or fan")
    get_args.add_argument("-format", type=str, default="text", help="Output format: text or json")
    add_url_arg(get_args)

    set_args = subparsers.add_parser("set", help='Change settings of a thermostat')
    set_args.add_argument("-id", type=int, required=True, help="Thermostat id")
    add_url_arg(set_args)
    add_field_args(set_args)

    create_args = subparsers.add_parser("create", help='Add a thermostat')
    add_field_args(create_args)
    create_args.add_argument("-format", type=str, default="text", help="Output format: text or json")
    add_url_arg(create_args)

    subparsers.add_parser("version", help='Print version information')

    # Global flags
    p.add_argument("-url", type=str, default=url, help=f"Server URL for client commands [Default={url}]")
    p.add_argument("-debug", action="store_true", default=False, help="Enable debug output")
    return p


def run_server(args):
    import uvicorn
    from pythermostat.server.config import settings

    uvicorn.run(
        "pythermostat.server.main:create_app",
        factory=True,
        host=args.host or settings.server_host,
        port=args.port or settings.server_port,
        log_level="debug" if (args.debug or settings.debug) else "info",
    )


def run_client(args):
    from pythermostat.client import ThermostatClient
    from pythermostat.exceptions import ClientError

    client = ThermostatClient(args.url)
    try:
        if args.command == 'list':
            thermostats = client.list()
            if args.format == "json":
                print(json.dumps([t.model_dump(mode="json", by_alias=True) for t in thermostats], indent=4))
            else:
                for t in thermostats:
                    print_thermostat(t, args.format)
        elif args.command == 'get':
            if args.field:
                print(json.dumps(client.get_field(args.id, args.field)))
            else:
                print_thermostat(client.get(args.id), args.format)
        elif args.command == 'set':
            fields = field_values(args)
            if all(v is None for v in fields.values()):
                print("usage: pythermostat set -id ID [-name NAME] [-mode MODE] [-cool F] [-heat F] [-fan FAN]")
                return 1
            client.update(args.id, **fields)
            print(f"Thermostat {args.id} updated")
        elif args.command == 'create':
            print_thermostat(client.create(**field_values(args)), args.format)
    except (ClientError, ConnectionError) as e:
        print(f"ERROR: {e}")
        return 1
    return 0


def main(argv=None):
    p = build_parser()
    if argv is None and len(sys.argv) == 1:
        p.print_help(sys.stderr)
        return 1

    args = p.parse_args(argv)

    # Set Debug Mode
    if args.debug:
        set_debug(True)

    if args.command == 'version':
        print("pyThermostat [%s]" % version)
        return 0
    if args.command == 'server':
        run_server(args)
        return 0
    return run_client(args)


if __name__ == '__main__':
    sys.exit(main())
