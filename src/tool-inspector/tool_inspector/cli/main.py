"""CLI entrypoint for tool-inspector — typer app for tools, call, chat and analyze."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import structlog
import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from tool_inspector.analysis.application.reviewer import ToolReviewer
from tool_inspector.analysis.domain.finding import SecurityFinding
from tool_inspector.analysis.domain.review import REVIEW_SYSTEM_PROMPT
from tool_inspector.analysis.infrastructure.observer import StructlogAnalysisObserver
from tool_inspector.approval.domain.errors import ToolExecutionError
from tool_inspector.approval.infrastructure.observer import StructlogApprovalObserver
from tool_inspector.cli.console_observer import ConsoleConversationObserver
from tool_inspector.config.domain.config import InspectorConfig
from tool_inspector.config.infrastructure.observer import StructlogConfigObserver
from tool_inspector.config.infrastructure.yaml_loader import YamlConfigLoader
from tool_inspector.conversation.application.session import ConversationSession
from tool_inspector.conversation.domain.errors import ModelStreamError
from tool_inspector.conversation.domain.pending import PendingToolCall
from tool_inspector.conversation.infrastructure.anthropic_stream import (
    AnthropicModelStream,
)
from tool_inspector.conversation.infrastructure.composite_observer import (
    CompositeConversationObserver,
)
from tool_inspector.conversation.infrastructure.observer import (
    StructlogConversationObserver,
)
from tool_inspector.core.errors import ToolInspectorError
from tool_inspector.tools.domain.result import ToolResult
from tool_inspector.tools.infrastructure.mcp_client import McpToolClient
from tool_inspector.tools.infrastructure.observer import StructlogToolClientObserver

app = typer.Typer(add_completion=False)

_DEFAULT_CONFIG = Path("tool-inspector.yaml")
_QUIT_COMMANDS = {"/quit", "/exit"}


def _configure_structlog(log_format: str, log_level: str) -> None:
    """Configure structlog based on the requested format; logs go to stderr."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=1)

    level = logging.getLevelNamesMapping().get(log_level.upper())
    if level is None:
        typer.echo(f"Invalid log level: {log_level!r}.")
        raise typer.Exit(code=1)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _load_config(config_path: Path) -> InspectorConfig:
    loader = YamlConfigLoader(observer=StructlogConfigObserver())
    return loader.load(path=config_path)


def build_tool_client(config: InspectorConfig) -> McpToolClient:
    return McpToolClient(
        server=config.mcp_server, observer=StructlogToolClientObserver()
    )


def build_session(config: InspectorConfig, console: Console) -> ConversationSession:
    tool_client = build_tool_client(config)
    return ConversationSession(
        model_stream=AnthropicModelStream(config=config.model),
        catalog=tool_client,
        executor=tool_client,
        observer=CompositeConversationObserver(
            observers=[
                StructlogConversationObserver(),
                ConsoleConversationObserver(console=console),
            ]
        ),
        approval_observer=StructlogApprovalObserver(),
    )


def build_reviewer(config: InspectorConfig) -> ToolReviewer:
    model = config.model.model_copy(update={"system_prompt": REVIEW_SYSTEM_PROMPT})
    return ToolReviewer(
        model_stream=AnthropicModelStream(config=model),
        observer=StructlogAnalysisObserver(),
    )


def _parse_arguments(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"arguments are not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise typer.BadParameter("arguments must be a JSON object")
    return parsed


def _print_result(console: Console, result: ToolResult) -> None:
    label = "[bold red]Error[/]" if result.is_error else "[bold green]Success[/]"
    console.print(f"Tool result: {label}")
    console.print(result.as_text(), markup=False, highlight=False)


def _describe_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    return json.dumps(value, indent=2)


def _print_pending(console: Console, call: PendingToolCall, error: str | None) -> None:
    console.print()
    console.rule("[bold]Approve Tool Call[/]")
    console.print(f"[bold]Tool:[/] {call.tool_name}")
    if call.resolved_tool is None:
        console.print("[yellow]Unknown tool: not in the server's catalog.[/]")
    elif call.resolved_tool.description:
        console.print(f"[dim]{call.resolved_tool.description}[/]")
    if call.arguments_malformed:
        console.print("[yellow]The model sent arguments that are not valid JSON:[/]")
        console.print(call.raw_arguments, markup=False, highlight=False)

    arguments = call.arguments if isinstance(call.arguments, dict) else {}
    tool = call.resolved_tool
    names = tool.parameter_names if tool is not None else list(arguments)
    for name in names:
        value = _describe_value(arguments[name]) if name in arguments else "N/A"
        console.print(f"  [cyan]{name}[/]: ", end="")
        console.print(value, markup=False, highlight=False)
    if error:
        console.print(f"[red]{error}[/]")


async def _resolve_pending(session: ConversationSession, console: Console) -> None:
    """Ask the human about each pending call until the slot is empty."""
    while (call := session.gate.pending) is not None:
        _print_pending(console=console, call=call, error=session.gate.error)
        choice = await asyncio.to_thread(
            Prompt.ask,
            "[a]pprove & run, [e]dit arguments, [r]eject",
            choices=["a", "e", "r"],
            default="a",
            console=console,
        )
        if choice == "r":
            session.reject()
            console.print("[dim]Tool call rejected.[/]")
        elif choice == "e":
            raw = await asyncio.to_thread(
                Prompt.ask,
                "Arguments (JSON object)",
                default=json.dumps(session.gate.draft_arguments()),
                console=console,
            )
            try:
                session.edit_arguments(_parse_arguments(raw))
            except typer.BadParameter as exc:
                console.print(f"[red]{exc.message}[/]")
        else:
            console.print("[dim]Running...[/]")
            try:
                outcome = await session.approve()
            except ToolExecutionError:
                continue
            except ModelStreamError as exc:
                console.print(f"[red]{exc}[/]")
                return
            _print_result(console=console, result=outcome.result)


async def _chat(session: ConversationSession, console: Console) -> None:
    tools = await session.refresh_tools()
    console.print(
        f"Connected: {len(tools)} tool(s) available. "
        "Type a message, or /quit to leave."
    )
    while True:
        try:
            text = await asyncio.to_thread(console.input, "[bold cyan]you>[/] ")
        except EOFError:
            return
        if text.strip() in _QUIT_COMMANDS:
            return
        if not text.strip():
            continue
        try:
            await session.send(text)
        except ModelStreamError as exc:
            console.print(f"[red]{exc}[/]")
            continue
        await _resolve_pending(session=session, console=console)


async def _analyze(config: InspectorConfig) -> list[SecurityFinding]:
    listed = await build_tool_client(config).list_tools()
    return await build_reviewer(config).review(listed)


def _print_findings(
    console: Console, title: str, findings: list[SecurityFinding]
) -> None:
    table = Table(title=title)
    table.add_column("Tool", style="bold")
    table.add_column("Result")
    table.add_column("Message")
    for finding in findings:
        style = "red" if finding.is_risk else "green"
        table.add_row(
            finding.tool_name,
            Text(finding.kind.value, style=style),
            Text(finding.message),
        )
    console.print(table)


_CONFIG_OPTION = typer.Option(
    _DEFAULT_CONFIG, "--config", "-c", help="Path to inspector config YAML"
)
_LOG_FORMAT_OPTION = typer.Option(
    "console", "--log-format", help="Log format: 'console' or 'json'"
)
_LOG_LEVEL_OPTION = typer.Option("warning", "--log-level", help="Minimum log level")


@app.command()
def tools(
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
    log_level: str = _LOG_LEVEL_OPTION,
) -> None:
    """List the tools the configured server advertises."""
    _configure_structlog(log_format=log_format, log_level=log_level)
    console = Console()
    try:
        config = _load_config(config_path=config_path)
        listed = asyncio.run(build_tool_client(config).list_tools())
    except ToolInspectorError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{config.name}: {len(listed)} tool(s)")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Parameters", style="cyan")
    for tool in listed:
        table.add_row(
            tool.name, tool.description or "", ", ".join(tool.parameter_names)
        )
    console.print(table)


@app.command()
def call(
    tool_name: str = typer.Argument(..., help="Name of the tool to invoke"),
    arguments: str = typer.Option(
        "{}", "--args", "-a", help="JSON object of arguments"
    ),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
    log_level: str = _LOG_LEVEL_OPTION,
) -> None:
    """Invoke one tool directly, without a model in the loop."""
    _configure_structlog(log_format=log_format, log_level=log_level)
    parsed = _parse_arguments(arguments)
    console = Console()
    try:
        config = _load_config(config_path=config_path)
        result = asyncio.run(build_tool_client(config).call_tool(tool_name, parsed))
    except ToolInspectorError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    _print_result(console=console, result=result)
    if result.is_error:
        raise typer.Exit(code=2)


@app.command()
def chat(
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
    log_level: str = _LOG_LEVEL_OPTION,
) -> None:
    """Chat with the model; every tool call it makes waits for your approval."""
    _configure_structlog(log_format=log_format, log_level=log_level)
    console = Console()
    try:
        config = _load_config(config_path=config_path)
        session = build_session(config=config, console=console)
        asyncio.run(_chat(session=session, console=console))
    except KeyboardInterrupt:
        typer.echo("Chat interrupted.")
        sys.exit(1)
    except ToolInspectorError as exc:
        typer.echo(str(exc))
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(1)


@app.command()
def analyze(
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
    log_level: str = _LOG_LEVEL_OPTION,
) -> None:
    """Review every tool the server advertises for prompt injection."""
    _configure_structlog(log_format=log_format, log_level=log_level)
    console = Console()
    try:
        config = _load_config(config_path=config_path)
        findings = asyncio.run(_analyze(config))
    except ToolInspectorError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=1) from exc

    if not findings:
        console.print("No tools found to review.")
        return
    _print_findings(
        console=console, title=f"{config.name}: security review", findings=findings
    )
    if any(finding.is_risk for finding in findings):
        raise typer.Exit(code=2)


if __name__ == "__main__":
    app()
