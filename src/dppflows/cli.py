"""CLI entry point for dppflows."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dppflows import __version__, logger
from dppflows.dependencies import (
    ensure_cli_dependencies_for_email,
    ensure_cli_dependencies_for_qr_code,
    ensure_cli_dependencies_for_run,
)
from dppflows.exceptions import PackageError
from dppflows.logging import configure_logging
from dppflows.settings import get_settings
from dppflows.typing.enums import FlowName

if TYPE_CHECKING:
    from pydantic import BaseModel

    from dppflows.settings import Settings


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="dppflows")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("flows", help="List registered AI flows")

    run_parser = subparsers.add_parser("run", help="Run an AI flow on a JSON request")
    run_parser.add_argument("flow", choices=[name.value for name in FlowName])
    run_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    run_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    otp_parser = subparsers.add_parser("send-otp", help="Email a one-time password")
    otp_parser.add_argument("--email", required=True)

    qr_parser = subparsers.add_parser("qr-code", help="Generate a passport QR code record")
    qr_parser.add_argument("--product-id", required=True, dest="product_id")
    qr_parser.add_argument("--version-id", required=True, dest="version_id")
    qr_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    return parser


def _write_json(payload: dict[str, Any], output_path: Path | None) -> None:
    """Write a JSON payload to a file or stdout.

    Args:
        payload (dict[str, Any]): JSON payload.
        output_path (Path | None): Target file, stdout when omitted.
    """
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output_path is None:
        sys.stdout.write(text + "\n")
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info("Result written", extra={"output_path": str(output_path)})


def _dump(model: BaseModel) -> dict[str, Any]:
    to_json_dict = getattr(model, "to_json_dict", None)
    if callable(to_json_dict):
        return to_json_dict()
    return model.model_dump(mode="json", by_alias=True)


def _list_flows() -> int:
    from dppflows.flows.registry import FLOWS  # noqa: PLC0415

    for name, definition in FLOWS.items():
        sys.stdout.write(f"{name.value}\t{definition.description}\n")
    return 0


def _run(args: argparse.Namespace, settings: Settings) -> int:
    ensure_cli_dependencies_for_run()
    from dppflows.backends import OpenAICompletionBackend  # noqa: PLC0415
    from dppflows.flows.registry import run_named_flow  # noqa: PLC0415

    request = json.loads(args.input_path.read_text(encoding="utf-8"))
    result = run_named_flow(args.flow, request, backend=OpenAICompletionBackend(settings))
    _write_json(_dump(result), args.output_path)
    return 0


def _send_otp(args: argparse.Namespace, settings: Settings) -> int:
    ensure_cli_dependencies_for_email()
    from dppflows.backends import SendGridEmailBackend  # noqa: PLC0415
    from dppflows.flows.communication import send_otp  # noqa: PLC0415

    result = send_otp(
        {"email": args.email},
        sender=SendGridEmailBackend(settings),
        ttl_minutes=settings.otp_ttl_minutes,
    )
    _write_json(_dump(result), None)
    return 0 if result.success else 1


def _qr_code(args: argparse.Namespace, settings: Settings) -> int:
    ensure_cli_dependencies_for_qr_code()
    from dppflows.actions import generate_qr_code_action  # noqa: PLC0415

    result = generate_qr_code_action(
        {"productId": args.product_id, "versionId": args.version_id},
        settings=settings,
    )
    _write_json(result.model_dump(mode="json", exclude_none=True), args.output_path)
    return 0 if result.success else 1


def main() -> int:
    """Run the CLI.

    Returns:
        int: Exit code (0 for success, 1 for error, 130 when interrupted).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args()

    handlers = {
        "run": _run,
        "send-otp": _send_otp,
        "qr-code": _qr_code,
    }
    if args.command == "flows":
        return _list_flows()
    if args.command not in handlers:
        parser.print_help()
        return 0

    try:
        return handlers[args.command](args, settings)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user", extra={"command": args.command})
        return 130
    except (OSError, json.JSONDecodeError):
        logger.exception("Cannot read request file", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
