"""Command-line interface for askme."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from askme import __version__
from askme.client import Client
from askme.config import Configuration, load_config
from askme.drivers.registry import VALID_CLASSES
from askme.errors import AskmeError
from askme.logging import DEFAULT_LOG_LEVEL, configure_logging
from askme.postprocess import extract_json_blocks

_LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_PROMPT_PREVIEW_WIDTH = 50


class UsageError(AskmeError):
    """Raised for invalid combinations of command-line options."""


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser."""

    parser = argparse.ArgumentParser(
        prog="askme",
        description="Send a prompt to a configured LLM service and print the answer.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        metavar="PROMPT",
        help="Prompt to send; use '-' to read it from standard input.",
    )
    parser.add_argument("-s", "--service", help="Service to use (default: default_service).")
    parser.add_argument("-m", "--model", help="Model to use instead of the service's model.")
    parser.add_argument(
        "-p",
        "--prompt",
        dest="system_prompt",
        help="System prompt: a key of system_prompts or literal text.",
    )
    parser.add_argument("--sprompt", metavar="NAME", help="Show the full text of a system prompt.")
    parser.add_argument(
        "-l",
        "--list",
        nargs="?",
        const="services",
        metavar="services|prompts",
        help="List configured services (default) or system prompts.",
    )
    parser.add_argument("--lmodels", metavar="SERVICE", help="List models available for a service.")
    parser.add_argument(
        "-n", "--nothink", action="store_true", help="Do not show the reasoning chain."
    )
    parser.add_argument("-j", "--json", action="store_true", help="Output JSON.")
    parser.add_argument(
        "-E",
        "--extractjs",
        action="store_true",
        help="Print only the JSON blocks found in the answer.",
    )
    parser.add_argument("-c", "--config", help="Configuration file path.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=_LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help="Log level for diagnostics written to stderr.",
    )
    parser.add_argument("--log-file", metavar="PATH", help="Also write JSON logs to this file.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _dump(payload: Any, *, pretty: bool = False) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2 if pretty else None)


def _describe_service_line(name: str, config: Configuration, *, check_class: bool) -> str:
    service = config.services[name]
    prefix = "*" if name == config.default_service else "-"
    description = service.description or "No description"
    model = service.model or "None"
    class_display = service.provider_class
    if check_class and class_display not in VALID_CLASSES:
        class_display = "<invalid>"
    return f"{prefix} {name} (Class: {class_display}, Model: {model}) - {description}"


def _preview(prompt: str) -> str:
    lines = prompt.splitlines()
    first_line = lines[0] if lines else ""
    if len(first_line) > _PROMPT_PREVIEW_WIDTH:
        return f"{first_line[: _PROMPT_PREVIEW_WIDTH - 3]}..."
    return first_line


def _list_services(config: Configuration, as_json: bool) -> None:
    if as_json:
        services = [
            {
                "name": name,
                "type": service.provider_class,
                "model": service.model or "None",
                "descr": service.description or "",
            }
            for name, service in config.services.items()
        ]
        print(_dump({"default": config.default_service, "services": services}))
        return

    print("Configured services:")
    for name in config.services:
        print(_describe_service_line(name, config, check_class=True))


def _list_prompts(config: Configuration, as_json: bool) -> None:
    if as_json:
        prompts = [{"name": name, "prompt": text} for name, text in config.system_prompts.items()]
        print(_dump({"default": config.default_prompt, "prompts": prompts}))
        return

    print("Configured system prompts:")
    for name, text in config.system_prompts.items():
        prefix = "*" if name == config.default_prompt else "-"
        print(f'{prefix} {name} : "{_preview(text)}"')


def _list(config: Configuration, target: str, as_json: bool) -> None:
    normalized = target.lower()
    if normalized in {"services", "s"}:
        _list_services(config, as_json)
    elif normalized in {"prompts", "p"}:
        _list_prompts(config, as_json)
    else:
        raise UsageError(f"Invalid list target '{target}'. Use 'services' or 'prompts'.")


def _show_system_prompt(config: Configuration, name: str) -> None:
    text = config.system_prompts.get(name)
    if text is None:
        raise UsageError(f"System prompt '{name}' not found in configuration")
    print(text)


def _list_models(config: Configuration, service_name: str, model: str | None, as_json: bool) -> None:
    client = Client.resolve(service_name, config, model)
    models = client.list_models()
    if as_json:
        print(_dump(models, pretty=True))
        return

    print(f"Available models for {service_name}:")
    for name in models:
        print(f"- {name}")


def _ask(config: Configuration, args: argparse.Namespace, prompt: str) -> None:
    client = Client.resolve(args.service, config, args.model, args.system_prompt)
    result = client.complete(prompt)

    extracted = extract_json_blocks(result.answer) if args.extractjs else None

    if args.json:
        response: Any = extracted if args.extractjs else result.answer
        print(
            _dump(
                {
                    "service": client.service_name,
                    "model": client.model,
                    "system_prompt": client.system_prompt,
                    "prompt": prompt,
                    "response": response,
                    "think": result.reasoning,
                }
            )
        )
        return

    if args.extractjs:
        if extracted is None:
            print("No JSON blocks found in the response.", file=sys.stderr)
        else:
            print(_dump(extracted, pretty=True))
        return

    if not args.nothink and result.reasoning is not None:
        print(f"<think>\n{result.reasoning}\n</think>")
    print(result.answer)


def _overview(config: Configuration, parser: argparse.ArgumentParser) -> None:
    print(parser.description)
    print(parser.format_usage().rstrip())
    print()
    print("Available services:")
    for name in config.services:
        print(_describe_service_line(name, config, check_class=False))
    print()

    default = config.services.get(config.default_service)
    if default is None:
        print(f"Default service '{config.default_service}' is not defined.")
    else:
        print(f"Default service: {config.default_service} (Model: {default.model or 'None'})")
    print(f"Default system prompt: {config.default_prompt}")


def _run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    config = load_config(args.config)
    if not config.services:
        raise UsageError("No services defined in configuration")

    if args.list is not None:
        _list(config, args.list, args.json)
        return

    if args.sprompt is not None:
        _show_system_prompt(config, args.sprompt)
        return

    if args.lmodels is not None:
        _list_models(config, args.lmodels, args.model, args.json)
        return

    prompt = args.input
    if prompt == "-":
        prompt = sys.stdin.read()

    if prompt is None:
        _overview(config, parser)
        return

    _ask(config, args, prompt)


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(log_level=args.log_level, log_file=args.log_file)

    try:
        _run(args, parser)
    except AskmeError as exc:
        _LOGGER.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
