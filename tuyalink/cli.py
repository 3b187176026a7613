import argparse
import json
import sys

from tuyalink.clients.cloud import Client
from tuyalink.core.config import ClientSettings
from tuyalink.core.errors import TuyaError


def _print_json(value) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tuyalink", description="Query and control Tuya cloud devices.")
    parser.add_argument("--client-id", type=str, default=None, help="Access ID (default: TUYA_CLIENT_ID).")
    parser.add_argument("--client-secret", type=str, default=None, help="Access Secret (default: TUYA_CLIENT_SECRET).")
    parser.add_argument("--region", type=str, default=None, help="Data center infix, e.g. eu, us, cn (default: TUYA_REGION).")

    sub = parser.add_subparsers(dest="command", required=True)

    devices = sub.add_parser("devices", help="List devices.")
    devices.add_argument("--page-size", type=int, default=None, help="Items per page (1-200).")
    devices.add_argument("--first-page", action="store_true", help="Only fetch the first page.")

    find = sub.add_parser("find", help="Look up a device id by name.")
    find.add_argument("name")
    find.add_argument("--name-field", action="store_true", help="Match 'name' instead of 'customName'.")

    info = sub.add_parser("info", help="Show device info.")
    info.add_argument("device_id")

    status = sub.add_parser("status", help="Show device status.")
    status.add_argument("device_id")

    online = sub.add_parser("online", help="Check whether a device is online.")
    online.add_argument("device", help="Device id, name or custom name.")

    send = sub.add_parser("send", help="Send a single command to a device.")
    send.add_argument("device_id")
    send.add_argument("code", help="Command code, e.g. switch_1.")
    send.add_argument("value", help="Command value, parsed as JSON when possible.")
    return parser


def _settings_from_args(args: argparse.Namespace) -> ClientSettings:
    overrides = {
        key: value
        for key, value in (
            ("client_id", args.client_id),
            ("client_secret", args.client_secret),
            ("region", args.region),
        )
        if value is not None
    }
    return ClientSettings(**overrides)


def run(client: Client, args: argparse.Namespace, settings: ClientSettings) -> None:
    if args.command == "devices":
        page_size = args.page_size if args.page_size is not None else settings.page_size
        _print_json(client.list_devices(page_size=page_size, fetch_all=not args.first_page))
    elif args.command == "find":
        _print_json(client.get_device_id_by_name(args.name, use_custom_name=not args.name_field))
    elif args.command == "info":
        _print_json(client.get_device_info(args.device_id))
    elif args.command == "status":
        _print_json(client.get_device_status(args.device_id))
    elif args.command == "online":
        _print_json(client.is_device_online(args.device))
    elif args.command == "send":
        commands = [{"code": args.code, "value": _parse_value(args.value)}]
        _print_json(client.set_device_status(args.device_id, commands))


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = _settings_from_args(args)

    if not settings.has_credentials():
        print("ERROR: Set TUYA_CLIENT_ID and TUYA_CLIENT_SECRET in environment before running.", file=sys.stderr)
        return 1

    with Client.from_settings(settings) as client:
        try:
            run(client, args, settings)
        except TuyaError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
