"""
Command Service
Exposes the registered slash commands over HTTP, standing in for the chat host.
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from itgfetch.commands import CommandParser
from itgfetch.config import Settings, configure_logging
from itgfetch.fetch_command import create_dispatcher, load_extension


class CommandRequest(BaseModel):
    text: str = Field(..., min_length=1)


def create_app(settings: Optional[Settings] = None, parser: Optional[CommandParser] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    if parser is None:
        parser = CommandParser()
        load_extension(parser, create_dispatcher(settings))

    app = FastAPI(title="itgfetch", docs_url=None, redoc_url=None)
    app.state.parser = parser

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/commands")
    async def list_commands():
        return [command.describe() for command in parser.commands()]

    @app.get("/commands/{name}")
    async def get_command(name: str):
        command = parser.get(name)
        if command is None:
            raise HTTPException(status_code=404, detail=f"Unknown command: /{name}")
        return command.describe()

    @app.post("/commands/execute")
    async def execute(request: CommandRequest):
        # Output is always a string, including usage and error messages
        return {"output": await parser.execute(request.text)}

    return app


def main():
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
