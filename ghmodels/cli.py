import argparse
import sys
from typing import List, Mapping, Optional

import requests
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .client import Client
from .config import Settings
from .context import RequestContext
from .errors import ClientError
from .types import ROLE_SYSTEM, ROLE_USER, ChatRequest, Message, ModelResponse

DEFAULT_MESSAGE = "What is the capital of France?"
DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghmodels",
        description="Chat with GitHub Models from the command line",
        add_help=False,
    )
    parser.add_argument("-help", "-h", "--help", action="help", help="Show help message")
    parser.add_argument("-models", "--models", action="store_true", dest="show_models", help="Print available models and exit")
    parser.add_argument("-filter", "--filter", default="", help="Only list models whose ID contains this text")
    parser.add_argument("-message", "--message", default=DEFAULT_MESSAGE, help="User message for chat completion")
    parser.add_argument("-system", "--system", default=DEFAULT_SYSTEM_PROMPT, help="System prompt sent before the user message")
    parser.add_argument("-model", "--model", default="", help="Model ID (defaults to GITHUB_MODELS_MODEL or openai/gpt-4.1)")
    return parser


def main(
    argv: Optional[List[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
    console: Optional[Console] = None,
    err_console: Optional[Console] = None,
) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)
    console = console or Console()
    err_console = err_console or Console(stderr=True)

    try:
        settings = Settings.from_env(environ)
    except ClientError as e:
        return fatal(err_console, f"Invalid configuration: {e}")
    if not settings.token:
        return fatal(err_console, "GITHUB_TOKEN environment variable is not set")

    model = args.model or settings.model
    try:
        llm = Client(settings.token, model)
    except ClientError as e:
        return fatal(err_console, f"Error creating client: {e}")

    ctx = RequestContext(timeout=settings.timeout)

    if args.show_models:
        try:
            models = llm.list_models(ctx)
        except (ClientError, requests.RequestException) as e:
            return fatal(err_console, f"Error listing models: {e}")
        render_models(console, models, args.filter)
        return 0

    console.print(f"[cyan]Using model {escape(model)}[/cyan]")
    try:
        messages = perform_chat_completion(llm, ctx, args.message, args.system)
    except (ClientError, requests.RequestException) as e:
        return fatal(err_console, f"Error creating chat: {e}")
    render_messages(console, messages)
    return 0


def fatal(err_console: Console, text: str) -> int:
    err_console.print(f"[red]{escape(text)}[/red]")
    return 1


def perform_chat_completion(llm: Client, ctx: RequestContext, user_message: str, system_prompt: str) -> List[Message]:
    """Send a single-turn chat and return the conversation including every choice."""
    messages = [
        Message(role=ROLE_SYSTEM, content=system_prompt),
        Message(role=ROLE_USER, content=user_message),
    ]
    chat = llm.create_chat(ctx, ChatRequest(messages=list(messages)))
    for choice in chat.choices:
        messages.append(choice.message)
    return messages


def render_messages(console: Console, messages: List[Message]) -> None:
    for msg in messages:
        console.print(f"[bold]{escape(msg.role)}[/bold]: {escape(msg.content)}")


def render_models(console: Console, models: List[ModelResponse], filter_text: str = "") -> None:
    if not models:
        console.print("[yellow]No models returned for this token[/yellow]")
        return

    filter_text = filter_text.lower()
    table = Table(title="Available models")
    table.add_column("Model ID", style="cyan")
    table.add_column("Publisher")
    table.add_column("Rate limit tier")
    table.add_column("Tags")

    rows = 0
    for m in models:
        if filter_text and filter_text not in m.id.lower():
            continue
        table.add_row(escape(m.id), escape(m.publisher) or "-", escape(m.rate_limit_tier) or "-", escape(", ".join(m.tags)) or "-")
        rows += 1

    console.print(table)
    console.print(f"[green]{rows} model(s)[/green]" + (f", filter: {escape(filter_text)}" if filter_text else ""))


if __name__ == "__main__":
    sys.exit(main())
