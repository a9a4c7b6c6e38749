"""
Run /theItGirlyFetch from a shell.

Usage:
    itgfetch mode=basic url=<url> [method=GET]
    itgfetch mode=extras path=<path> [body=<json>]

Examples:
    # Simple GET
    itgfetch mode=basic url=https://api.github.com/users/octocat

    # PUT through Extras
    itgfetch mode=extras path=/api/test 'body={"msg": "Hello"}'
"""

import asyncio
import sys

from itgfetch.commands import CommandParser
from itgfetch.config import Settings, configure_logging
from itgfetch.dispatcher import USAGE
from itgfetch.fetch_command import COMMAND_NAME, create_dispatcher, load_extension


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(USAGE)
        sys.exit(1)

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    parser = CommandParser()
    load_extension(parser, create_dispatcher(settings))

    line = " ".join([f"/{COMMAND_NAME}", *argv])
    print(asyncio.run(parser.execute(line)))


if __name__ == "__main__":
    main()
