# cli/main.py
import click
from core.config import settings
from core.logging_config import setup_logging
from .commands.library import init_db, books, add, status, remove, notes
from .commands.providers import search, extract

@click.group()
@click.option('--log-level', default=None, help='Override LOG_LEVEL')
def cli(log_level):
    """Reading Log CLI"""
    setup_logging(log_level)

@cli.command()
@click.option('--host', default=settings.api_host, show_default=True)
@click.option('--port', default=settings.api_port, type=int, show_default=True)
@click.option('--reload', is_flag=True, help='Restart on code changes')
def serve(host, port, reload):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["api", "core"] if reload else None,
    )

cli.add_command(init_db)
cli.add_command(books)
cli.add_command(add)
cli.add_command(status)
cli.add_command(remove)
cli.add_command(notes)
cli.add_command(search)
cli.add_command(extract)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
