import click
from core.config import settings
from core.errors import ConflictError, NotFoundError, ValidationError
from core.models.book import ReadingStatus
from core.storage import Storage
from ..utils import format_book, format_note

STATUS_CHOICES = click.Choice([s.value for s in ReadingStatus])

def _fail(message: str):
    click.echo(click.style(message, fg='red'), err=True)
    raise SystemExit(1)

def _open_storage() -> Storage:
    """Storage for one command, with tables created if the database is new"""
    storage = Storage()
    storage.init()
    return storage

@click.command('init-db')
def init_db():
    """Create the tables and the default user."""
    storage = _open_storage()
    with storage.service() as service:
        user = service.ensure_user(settings.default_username, settings.default_password)
    click.echo(click.style(f"Database ready, default user '{user.username}' (id {user.id})", fg='green'))

@click.command()
@click.option('--status', type=STATUS_CHOICES, help='Only show books with this status')
def books(status):
    """List the default user's library, newest first."""
    storage = _open_storage()
    with storage.service() as service:
        user = service.ensure_user(settings.default_username, settings.default_password)
        entries = service.list_entries(user.id, status)
    if not entries:
        click.echo("No books yet.")
        return
    for book in entries:
        click.echo(format_book(book))

@click.command()
@click.argument('title')
@click.argument('author')
@click.option('--cover-url', default='', help='Cover image URL')
@click.option('--status', type=STATUS_CHOICES, default=ReadingStatus.WANT.value, show_default=True)
def add(title, author, cover_url, status):
    """Add a book to the default user's library."""
    storage = _open_storage()
    with storage.service() as service:
        user = service.ensure_user(settings.default_username, settings.default_password)
        try:
            book = service.create_entry(
                {'title': title, 'author': author, 'cover_url': cover_url, 'status': status},
                user_id=user.id,
            )
        except ValidationError as e:
            _fail(f"{e.message}: {', '.join(err['field'] for err in e.errors)}")
    click.echo(click.style("Added: ", fg='green') + format_book(book))

@click.command()
@click.argument('book_id', type=int)
@click.argument('status', type=STATUS_CHOICES)
@click.option('--rating', type=float, help='Rating from 0 to 5 in half steps')
@click.option('--progress', type=int, help='Progress percentage')
@click.option('--completed-date', help='Completion date (YYYY-MM-DD)')
def status(book_id, status, rating, progress, completed_date):
    """Move a book to a new reading status."""
    update = {'status': status}
    if rating is not None:
        update['rating'] = rating
    if progress is not None:
        update['progress'] = progress
    if completed_date:
        update['completed_date'] = completed_date

    storage = _open_storage()
    with storage.service() as service:
        try:
            book = service.update_status(book_id, update)
        except NotFoundError:
            _fail(f"Book {book_id} not found")
        except ValidationError as e:
            _fail(f"{e.message}: {', '.join(err['field'] for err in e.errors)}")
    click.echo(format_book(book))

@click.command()
@click.argument('book_id', type=int)
def remove(book_id):
    """Remove a book from the library."""
    storage = _open_storage()
    with storage.service() as service:
        try:
            removed = service.delete_entry(book_id)
        except ConflictError as e:
            _fail(str(e))
    if not removed:
        _fail(f"Book {book_id} not found")
    click.echo(f"Removed book {book_id}")

@click.command()
@click.argument('book_id', type=int)
@click.option('--add', 'content', help='Add a note with this text instead of listing')
def notes(book_id, content):
    """List the notes on a book, or add one."""
    storage = _open_storage()
    with storage.service() as service:
        try:
            if content is not None:
                note = service.add_note(book_id, {'content': content})
                click.echo(click.style("Added note:", fg='green'))
                click.echo(format_note(note))
                return
            entries = service.list_notes(book_id)
        except NotFoundError:
            _fail(f"Book {book_id} not found")
        except ValidationError as e:
            _fail(e.message)
    if not entries:
        click.echo("No notes yet.")
    for note in entries:
        click.echo(format_note(note) + "\n")
