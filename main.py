#!/usr/bin/env python3
"""Agent Hub CLI: serve the agents over HTTP or invoke one from the shell."""

import argparse
import json
import logging
import sys

from config.settings import Settings
from schemas.contract import AgentRequest, RequestMetadata


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the HTTP app with uvicorn."""
    import uvicorn
    from api.server import create_app

    app = create_app(settings=settings)
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


def invoke(args: argparse.Namespace, settings: Settings) -> int:
    """Run one request through an agent and print the response envelope."""
    from agents.registry import build_agents
    from memory.factory import create_store

    try:
        payload = json.loads(args.input)
    except json.JSONDecodeError as e:
        print(f"--input is not valid JSON: {e}", file=sys.stderr)
        return 2

    agents = build_agents(settings, create_store(settings))
    agent = agents.get(args.agent_id)
    if agent is None:
        print(f"Unknown agent '{args.agent_id}'. Available: {', '.join(agents)}", file=sys.stderr)
        return 2

    request = AgentRequest(
        conversation_id=args.conversation_id,
        user_id=args.user_id,
        input=payload,
        metadata=RequestMetadata(trigger="cli"),
    )
    response = agent.handle(request)
    print(json.dumps(response.to_wire(), indent=2))
    return 0 if response.success else 1


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Agent Hub - HTTP-triggered agents with a shared execution log"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Serve all agents over HTTP")
    serve_parser.add_argument("--host", type=str, default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8070, help="Port (default: 8070)")

    invoke_parser = subparsers.add_parser("invoke", help="Invoke one agent once")
    invoke_parser.add_argument("agent_id", type=str, help="Agent to invoke (e.g. nova)")
    invoke_parser.add_argument(
        "--input",
        "-i",
        type=str,
        required=True,
        help='Agent input as JSON, e.g. \'{"topic": "pricing", "platform": "LinkedIn"}\''
    )
    invoke_parser.add_argument("--user-id", type=str, default="cli", help="Calling user id")
    invoke_parser.add_argument("--conversation-id", type=str, default=None, help="Conversation id")

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    if args.command == "serve":
        return serve(args, settings)
    return invoke(args, settings)


if __name__ == "__main__":
    sys.exit(main())
