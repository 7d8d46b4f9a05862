import click
from pathlib import Path
from core.errors import ExtractionError
from core.providers.extraction import TextExtractor, normalize_text
from core.providers.search import BookSearchProvider
from core.utils.image import inspect_image
from ..utils import format_search_result

@click.command()
@click.argument('query')
def search(query):
    """Search the book metadata provider."""
    response = BookSearchProvider().search(query)
    if response.error:
        click.echo(click.style(response.error, fg='yellow'))
    click.echo(click.style(f"{response.total} match(es)", fg='blue'))
    for result in response.results:
        click.echo(format_search_result(result))

@click.command()
@click.argument('image_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--raw', is_flag=True, help='Print the text as returned by the provider')
def extract(image_path, raw):
    """Extract the text from a photographed page."""
    data = image_path.read_bytes()
    try:
        inspect_image(data)
        text = TextExtractor().extract_text(data)
    except (ValueError, ExtractionError) as e:
        click.echo(click.style(str(e), fg='red'), err=True)
        raise SystemExit(1)
    click.echo(text if raw else normalize_text(text))
