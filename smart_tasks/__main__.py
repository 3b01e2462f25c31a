"""CLI entry point for smart-tasks.

Usage:
    # Serve the chat endpoint over HTTP (MCP at /mcp, JSON at /api/chat)
    python -m smart_tasks serve --port 8000

    # Serve over stdio for MCP desktop clients
    python -m smart_tasks serve --transport stdio

    # Chat with your task list in the terminal
    python -m smart_tasks chat --user alice
"""

import argparse
import asyncio
import logging

from dotenv import load_dotenv

from smart_tasks.config import Settings

CHAT_HELP = """Commands:
  /tasks            show the task list
  /add <text>       add a task
  /toggle <id>      mark a task completed/pending
  /delete <id>      delete a task
  /reload           fetch the task list again
  /quit             leave
Anything else is sent to the assistant."""


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="smart-tasks",
        description="Chat-driven personal task list",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Operator log level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the chat endpoint as an MCP/HTTP server",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for HTTP transport (default: 8000)",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["http", "stdio"],
        default="http",
        help="Transport type (default: http)",
    )
    _add_common_arguments(serve_parser)

    chat_parser = subparsers.add_parser(
        "chat",
        help="Interactive chat session in the terminal",
    )
    chat_parser.add_argument(
        "--user",
        required=True,
        help="User id whose task list to open",
    )
    _add_common_arguments(chat_parser)

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args)
    elif args.command == "chat":
        asyncio.run(run_chat(args))
    else:
        parser.print_help()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--storage",
        type=str,
        default=None,
        help="Path to the todos JSON file (default: ./todos.json)",
    )
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Chat model to use (default: llama-3.3-70b-versatile)",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Base URL for an OpenAI-compatible API (default: Groq)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="API key (overrides SMART_TASKS_API_KEY / GROQ_API_KEY)",
    )


def load_settings(args) -> Settings:
    """Environment settings with CLI overrides applied."""
    settings = Settings.from_env()
    if args.storage:
        settings.storage_path = args.storage
    if args.model:
        settings.model = args.model
    if args.base_url:
        settings.base_url = args.base_url
    if args.api_key:
        settings.api_key = args.api_key
    return settings


def run_server(args):
    """Run the MCP server."""
    from smart_tasks.mcp_server import create_mcp_server

    settings = load_settings(args)
    logger = logging.getLogger("smart_tasks")

    print("Starting smart-tasks server...")
    print(f"  Model: {settings.model}")
    if settings.base_url:
        print(f"  Base URL: {settings.base_url}")
    print(f"  Transport: {args.transport}")

    mcp = create_mcp_server(settings=settings, logger=logger)

    if args.transport == "stdio":
        print("  Mode: stdio (for MCP desktop clients)")
        mcp.run(transport="stdio")
    else:
        print(f"  MCP URL: http://localhost:{args.port}/mcp")
        print(f"  Chat URL: http://localhost:{args.port}/api/chat")
        import uvicorn
        app = mcp.streamable_http_app()
        uvicorn.run(app, host="0.0.0.0", port=args.port)


async def run_chat(args):
    """Run an interactive chat session for one user."""
    from smart_tasks.core.store import TaskStoreClient
    from smart_tasks.identity import LocalIdentityProvider
    from smart_tasks.mcp_server import create_assistant
    from smart_tasks.session import ChatSession
    from smart_tasks.storage.json_storage import JSONTaskStorage
    from smart_tasks.errors import SmartTasksError
    from smart_tasks.models.chat import ChatRole

    settings = load_settings(args)
    logger = logging.getLogger("smart_tasks")

    identity = LocalIdentityProvider()
    store = TaskStoreClient(
        JSONTaskStorage(settings.storage_path),
        identity=identity,
        max_attempts=settings.max_attempts,
        retry_delay=settings.retry_delay,
        logger=logger,
    )
    session = ChatSession(
        create_assistant(settings, logger=logger),
        store,
        identity=identity,
        logger=logger,
    )
    await session.attach()
    await identity.sign_in(args.user)

    shown = 0
    print(CHAT_HELP)
    while True:
        for message in session.messages[shown:]:
            if message.role is ChatRole.ASSISTANT:
                print(f"\nAI: {message.content}")
        shown = len(session.messages)

        try:
            line = (await asyncio.to_thread(input, "\nYou: ")).strip()
        except (EOFError, KeyboardInterrupt):
            break

        command, _, rest = line.partition(" ")
        try:
            if command == "/quit":
                break
            elif command == "/tasks":
                _print_tasks(session)
            elif command == "/add":
                await session.add_task(rest)
                _print_tasks(session)
            elif command == "/toggle":
                await session.toggle_task(rest.strip())
                _print_tasks(session)
            elif command == "/delete":
                await session.delete_task(rest.strip())
                _print_tasks(session)
            elif command == "/reload":
                await session.reload()
                _print_tasks(session)
            else:
                await session.send_message(line)
        except SmartTasksError as e:
            print(f"Error: {e}")

    await identity.sign_out()
    session.detach()


def _print_tasks(session) -> None:
    tasks = session.sorted_tasks
    if not tasks:
        print("  (no tasks)")
        return
    for task in tasks:
        mark = "x" if task.completed else " "
        print(f"  [{mark}] {task.id}: {task.description}")


if __name__ == "__main__":
    main()
