import click
from core.sa.models import Book, ReadingNote
from core.models.book import SearchResult

STATUS_COLORS = {
    'want': 'blue',
    'reading': 'yellow',
    'completed': 'green',
}

def format_book(book: Book) -> str:
    """One-line summary of a library entry"""
    line = (
        click.style(f"[{book.id}] ", fg='cyan') +
        click.style(book.title, bold=True) +
        f" by {book.author} " +
        click.style(f"({book.status})", fg=STATUS_COLORS.get(book.status, 'white'))
    )
    if book.status == 'reading' and book.progress is not None:
        line += f" {book.progress}%"
    if book.status == 'completed':
        if book.rating is not None:
            line += f" {book.rating:g}/5"
        if book.completed_date:
            line += f" finished {book.completed_date:%Y-%m-%d}"
    return line

def format_note(note: ReadingNote) -> str:
    header = click.style(f"[{note.id}] {note.created_at:%Y-%m-%d %H:%M}", fg='cyan')
    if note.page:
        header += click.style(f" p.{note.page}", fg='blue')
    return f"{header}\n{note.content}"

def format_search_result(result: SearchResult) -> str:
    line = click.style(result.title, bold=True) + f" by {result.author}"
    details = [d for d in (result.publisher, result.published_date) if d]
    if details:
        line += click.style(f" ({', '.join(details)})", fg='blue')
    return line
