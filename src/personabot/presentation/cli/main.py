"""
CLI entry point: a thin local caller of `PersonaResponder.process`.
"""

from __future__ import annotations

import argparse
import sys
import uuid
from typing import Optional, TextIO

from personabot import __version__


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="personabot",
        description="PersonaBot - multi-persona conversational responder",
    )

    subparsers = parser.add_subparsers(dest="command", help="available commands")

    chat_parser = subparsers.add_parser("chat", help="answer one message and print the envelope JSON")
    chat_parser.add_argument("persona", help="persona name (see `personabot personas`)")
    chat_parser.add_argument("text", help="message text")
    chat_parser.add_argument("--session", "-s", help="session id")
    chat_parser.add_argument("--user", "-u", help="user reference")
    chat_parser.add_argument("--config", "-c", help="YAML config file")
    chat_parser.add_argument("--pretty", action="store_true", help="indent the JSON output")

    subparsers.add_parser("personas", help="list built-in personas")

    repl_parser = subparsers.add_parser("repl", help="interactive session with one persona")
    repl_parser.add_argument("persona", help="persona name")
    repl_parser.add_argument("--session", "-s", help="session id (random by default)")
    repl_parser.add_argument("--config", "-c", help="YAML config file")

    parser.add_argument("--version", "-v", action="store_true", help="show version")

    return parser


def _load_config(path: Optional[str]):
    from personabot.config import AppConfig

    if path:
        return AppConfig.from_yaml(path)
    return AppConfig.default()


def _list_personas(out: TextIO) -> None:
    from personabot.personas import PersonaRegistry

    registry = PersonaRegistry.with_builtins()
    for name, persona in registry.all().items():
        cfg = persona.config
        out.write(f"{name:<12} {cfg.display_name:<12} {cfg.tagline}\n")


def _chat(parsed: argparse.Namespace, out: TextIO) -> None:
    from personabot.application import create_responder
    from personabot.infrastructure.logging import configure_logging

    config = _load_config(parsed.config)
    configure_logging(config.logging)
    responder = create_responder(parsed.persona, config)
    try:
        context = {"session_id": parsed.session} if parsed.session else {}
        envelope = responder.process(parsed.user, parsed.text, context)
    finally:
        responder.close()
    out.write(envelope.to_json(indent=2 if parsed.pretty else None) + "\n")


def _repl(parsed: argparse.Namespace, out: TextIO, stdin: TextIO) -> None:
    from personabot.application import create_responder
    from personabot.infrastructure.logging import configure_logging

    config = _load_config(parsed.config)
    configure_logging(config.logging)
    responder = create_responder(parsed.persona, config)
    session_id = parsed.session or uuid.uuid4().hex[:12]
    out.write(f"{responder.persona.config.display_name} (session {session_id}); type 'exit' to quit\n")
    try:
        for line in stdin:
            text = line.strip()
            if text.lower() in ("exit", "quit"):
                break
            if not text:
                continue
            envelope = responder.process(session_id, text, {"session_id": session_id})
            out.write(f"> {envelope.text}\n")
            if envelope.suggestions:
                out.write(f"  ({' | '.join(envelope.suggestions)})\n")
    finally:
        responder.close()


def run_cli(args: Optional[list] = None, *, out: Optional[TextIO] = None, stdin: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    stdin = stdin or sys.stdin
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.version:
        out.write(f"PersonaBot v{__version__}\n")
        return 0

    if not parsed.command:
        parser.print_help(out)
        return 0

    try:
        if parsed.command == "personas":
            _list_personas(out)
        elif parsed.command == "chat":
            _chat(parsed, out)
        elif parsed.command == "repl":
            _repl(parsed, out, stdin)
        return 0
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
