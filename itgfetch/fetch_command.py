"""
The /theItGirlyFetch slash command.

Usage in chat:
    /theItGirlyFetch mode=basic url=https://api.github.com/users/octocat
    /theItGirlyFetch mode=extras path=/api/test body={"msg":"Hello"}
"""

import json
import logging
from typing import Dict, Optional

import httpx
from pydantic import BaseModel

from itgfetch.commands import (
    ArgumentType,
    CommandParser,
    SlashCommand,
    SlashCommandArgument,
    SlashCommandNamedArgument,
)
from itgfetch.config import Settings
from itgfetch.dispatcher import (
    USAGE,
    BasicRequestParams,
    Dispatcher,
    DispatchResult,
    ExtrasRequestParams,
    RequestMode,
)
from itgfetch.extras import ExtrasClient

logger = logging.getLogger(__name__)

COMMAND_NAME = "theItGirlyFetch"
ALIASES = ["itgfetch"]

HELP = """
<div>
  <strong>theItGirlyFetch Command:</strong>
  <ul>
    <li><code>/theItGirlyFetch mode=basic url=https://api.github.com/users/octocat</code></li>
    <li><code>/theItGirlyFetch mode=extras path=/api/test body={"msg":"Hello"}</code></li>
  </ul>
</div>
"""


class FetchCommandArgs(BaseModel):
    mode: str = RequestMode.BASIC.value
    url: str = ""
    path: str = ""
    method: str = "GET"
    body: Optional[str] = None


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def render(result: DispatchResult) -> str:
    if result.ok:
        return json.dumps(result.value, indent=2, ensure_ascii=False)
    return result.message


def make_callback(dispatcher: Dispatcher):
    async def callback(named_args: Dict[str, str], unnamed: str) -> str:
        known = {k: v for k, v in named_args.items() if k in FetchCommandArgs.model_fields}
        args = FetchCommandArgs(**known)

        try:
            mode = RequestMode(args.mode or RequestMode.BASIC.value)
        except ValueError:
            return USAGE

        if mode is RequestMode.BASIC:
            params = BasicRequestParams(url=args.url, method=args.method or "GET")
        else:
            try:
                body = json.loads(args.body, parse_constant=_reject_constant) if args.body else {}
            except (ValueError, RecursionError) as e:
                return f"Error: Invalid JSON in 'body': {e}"
            params = ExtrasRequestParams(path=args.path, body=body)

        return render(await dispatcher.dispatch(mode, params))

    return callback


def create_fetch_command(dispatcher: Dispatcher) -> SlashCommand:
    return SlashCommand(
        name=COMMAND_NAME,
        aliases=list(ALIASES),
        callback=make_callback(dispatcher),
        named_arguments=[
            SlashCommandNamedArgument(
                name="mode",
                description="Set fetch mode: 'basic' or 'extras'",
                type_list=[ArgumentType.STRING],
                default_value=RequestMode.BASIC.value,
            ),
            SlashCommandNamedArgument(
                name="url",
                description="URL for basic fetch (GET/PUT/POST)",
            ),
            SlashCommandNamedArgument(
                name="method",
                description="HTTP method for basic fetch",
                default_value="GET",
            ),
            SlashCommandNamedArgument(
                name="path",
                description="Relative path for extras fetch",
            ),
            SlashCommandNamedArgument(
                name="body",
                description="JSON string for extras body data",
            ),
        ],
        unnamed_arguments=[SlashCommandArgument(description="Unused text argument", is_required=False)],
        returns="JSON string result from the fetch call",
        help_string=HELP,
    )


def create_dispatcher(
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    extras_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dispatcher:
    extras = ExtrasClient(
        api_url=settings.extras_api_url,
        api_key=settings.extras_api_key,
        timeout=settings.timeout,
        transport=extras_transport,
    )
    return Dispatcher(
        api_url=extras.get_api_url,
        extras_fetch=extras.fetch,
        transport=transport,
        timeout=settings.timeout,
        user_agent=settings.user_agent,
    )


def load_extension(parser: CommandParser, dispatcher: Dispatcher) -> SlashCommand:
    """Register the command with the host parser."""
    logger.info("Extension loaded!")
    command = create_fetch_command(dispatcher)
    parser.add_command_object(command)
    return command
