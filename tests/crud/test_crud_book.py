# tests/crud/test_crud_book.py
import datetime
import pytest
from decimal import Decimal

from libroteca.crud import (
    BookFilter,
    create_book,
    get_book_by_id,
    get_book_by_isbn,
    get_featured_books,
    list_books,
    search_books,
)
from libroteca.models.book import Book
from libroteca.schemas.book import BookCreate

CATALOG = [
    # title, author, genre, year, average_rating, review_count
    ("The Hobbit", "J.R.R. Tolkien", "Fantasy", 1937, "4.50", 120),
    ("A Game of Thrones", "George R.R. Martin", "Fantasy", 1996, "4.20", 300),
    ("The Name of the Wind", "Patrick Rothfuss", "Fantasy", 2007, "4.60", 90),
    ("Fourth Wing", "Rebecca Yarros", "Fantasy", 2023, "3.90", 500),
    ("Dune", "Frank Herbert", "Science Fiction", 1965, "4.30", 200),
    ("Project Hail Mary", "Andy Weir", "Science Fiction", 2021, "4.70", 150),
    ("Tomorrow, and Tomorrow, and Tomorrow", "Gabrielle Zevin", "Literary Fiction", 2022, "4.10", 80),
    ("Iron Flame", "Rebecca Yarros", "Fantasy", 2023, "4.00", 250),
    ("100% Kindness", "Some Author", "Self-Help", 2024, "0", 0),
]

@pytest.fixture
def catalog(db_session):
    start = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)
    books = []
    for i, (title, author, genre, year, rating, count) in enumerate(CATALOG):
        books.append(Book(
            title=title,
            author=author,
            genre=genre,
            published_year=year,
            average_rating=Decimal(rating),
            review_count=count,
            created_at=start + datetime.timedelta(days=i),
        ))
    db_session.add_all(books)
    db_session.commit()
    return books

def _titles(books):
    return [book.title for book in books]

def test_list_books_no_filter_returns_whole_table_paginated(db_session, catalog):
    items, total = list_books(db_session, BookFilter(), page=1, page_size=4)
    assert total == len(CATALOG)
    assert len(items) == 4

    items, total = list_books(db_session, BookFilter(), page=3, page_size=4)
    assert total == len(CATALOG)
    assert len(items) == 1

def test_list_books_default_page_size_is_12(db_session, make_book):
    for i in range(15):
        make_book(title=f"Book {i:02d}")
    items, total = list_books(db_session)
    assert len(items) == 12
    assert total == 15

def test_fantasy_four_plus_sorted_by_title(db_session, catalog):
    filters = BookFilter.from_params(genre="Fantasy", rating="4+")
    items, total = list_books(db_session, filters, sort_by="title", page=1, page_size=12)

    assert _titles(items) == ["A Game of Thrones", "Iron Flame", "The Hobbit", "The Name of the Wind"]
    assert total == 4
    assert all(book.genre == "Fantasy" and book.average_rating >= 4 for book in items)

def test_year_older_returns_only_books_before_2022(db_session, catalog):
    items, total = list_books(db_session, BookFilter.from_params(year="older"), page_size=100)
    assert total == 5
    assert all(book.published_year < 2022 for book in items)

    items, total = list_books(db_session, BookFilter.from_params(year="older", genre="Fantasy"), page_size=100)
    assert set(_titles(items)) == {"The Hobbit", "A Game of Thrones", "The Name of the Wind"}
    assert all(book.published_year < 2022 for book in items)

def test_year_exact_match(db_session, catalog):
    items, total = list_books(db_session, BookFilter.from_params(year="2023"), sort_by="title")
    assert _titles(items) == ["Fourth Wing", "Iron Flame"]
    assert total == 2

def test_search_matches_title_or_author_case_insensitive(db_session, catalog):
    items, _ = list_books(db_session, BookFilter.from_params(search="tolkien"))
    assert _titles(items) == ["The Hobbit"]

    items, total = list_books(db_session, BookFilter.from_params(search="YARROS"), sort_by="title")
    assert _titles(items) == ["Fourth Wing", "Iron Flame"]
    assert total == 2

    items, _ = list_books(db_session, BookFilter.from_params(search="hail mary"))
    assert _titles(items) == ["Project Hail Mary"]

def test_search_wildcards_match_literally(db_session, catalog):
    items, total = list_books(db_session, BookFilter.from_params(search="%"))
    assert _titles(items) == ["100% Kindness"]
    assert total == 1

def test_malformed_filters_are_ignored(db_session, catalog):
    items, total = list_books(db_session, BookFilter.from_params(rating="lots", year="soon"), page_size=100)
    assert total == len(CATALOG)

@pytest.mark.parametrize("sort_by, expected_first", [
    ("popular", ["Fourth Wing", "A Game of Thrones", "Iron Flame"]),
    ("rating", ["Project Hail Mary", "The Name of the Wind", "The Hobbit"]),
    ("recent", ["100% Kindness", "Iron Flame", "Tomorrow, and Tomorrow, and Tomorrow"]),
    ("title", ["100% Kindness", "A Game of Thrones", "Dune"]),
    ("not-a-sort", ["Fourth Wing", "A Game of Thrones", "Iron Flame"]),
])
def test_sort_orders(db_session, catalog, sort_by, expected_first):
    items, _ = list_books(db_session, BookFilter(), sort_by=sort_by, page_size=3)
    assert _titles(items) == expected_first

@pytest.mark.parametrize("params", [
    {},
    {"genre": "Fantasy"},
    {"rating": "4+"},
    {"year": "older"},
    {"search": "the", "rating": "4.1+"},
    {"genre": "Science Fiction", "year": "2021"},
    {"genre": "Poetry"},
])
def test_total_matches_unpaginated_count(db_session, catalog, params):
    filters = BookFilter.from_params(**params)
    everything, total_all = list_books(db_session, filters, page_size=1000)
    first_page, total_paged = list_books(db_session, filters, page=1, page_size=2)

    assert total_all == total_paged == len(everything)
    assert len(first_page) == min(2, total_all)

@pytest.mark.parametrize("sort_by", ["popular", "rating", "recent", "title"])
def test_pages_concatenate_to_the_full_result(db_session, catalog, sort_by):
    everything, total = list_books(db_session, BookFilter(), sort_by=sort_by, page_size=1000)

    collected = []
    page = 1
    while True:
        items, _ = list_books(db_session, BookFilter(), sort_by=sort_by, page=page, page_size=2)
        if not items:
            break
        collected.extend(book.id for book in items)
        page += 1

    assert collected == [book.id for book in everything]
    assert len(set(collected)) == total

def test_pagination_is_stable_with_ties(db_session, make_book):
    ids = [make_book(title="Same").id for _ in range(7)]

    collected = []
    for page in range(1, 5):
        items, total = list_books(db_session, BookFilter(), sort_by="popular", page=page, page_size=2)
        collected.extend(book.id for book in items)

    assert total == 7
    assert collected == sorted(ids)

def test_page_past_the_end_is_empty(db_session, catalog):
    items, total = list_books(db_session, BookFilter(), page=10, page_size=12)
    assert items == []
    assert total == len(CATALOG)

def test_get_featured_books(db_session, catalog):
    featured = get_featured_books(db_session)
    assert _titles(featured) == ["Project Hail Mary", "The Name of the Wind", "The Hobbit", "Dune"]

def test_get_featured_books_tie_breaks_on_review_count(db_session, make_book):
    make_book(title="Fewer", average_rating=Decimal("4.5"), review_count=10)
    make_book(title="More", average_rating=Decimal("4.5"), review_count=20)
    assert _titles(get_featured_books(db_session)) == ["More", "Fewer"]

def test_create_book_starts_with_zero_stats(db_session):
    book = create_book(db_session, BookCreate(
        title="Piranesi", author="Susanna Clarke", genre="Fantasy",
        published_year=2020, pages=272, isbn="9781635575637",
    ))

    assert book.id is not None
    assert book.average_rating == Decimal("0")
    assert book.review_count == 0
    assert get_book_by_id(db_session, book.id) is book
    assert get_book_by_isbn(db_session, "9781635575637").id == book.id

def test_get_book_by_id_not_found(db_session):
    assert get_book_by_id(db_session, 99999) is None

def test_search_books(db_session, catalog):
    results = search_books(db_session, query="science")
    assert set(_titles(results)) == {"Dune", "Project Hail Mary"}
    assert len(search_books(db_session, limit=3)) == 3
