from .crud_user import (
    get_user,
    get_user_by_email,
    upsert_user,
    ensure_user,
    update_user,
    get_user_stats,
)
from .crud_book import (
    list_books,
    get_featured_books,
    search_books,
    get_book_by_id,
    get_book_by_isbn,
    create_book,
)
from .book_filters import BookFilter
from .crud_review import (
    create_review,
    recompute_book_stats,
    get_review_by_id,
    delete_review,
    list_reviews,
    count_review_likes,
    like_review,
    unlike_review,
)
from .crud_reading_list import (
    add_or_update,
    update_entry,
    remove_entry,
    get_reading_list,
    get_reading_list_entry,
)

__all__ = [
    "get_user",
    "get_user_by_email",
    "upsert_user",
    "ensure_user",
    "update_user",
    "get_user_stats",
    "list_books",
    "get_featured_books",
    "search_books",
    "get_book_by_id",
    "get_book_by_isbn",
    "create_book",
    "BookFilter",
    "create_review",
    "recompute_book_stats",
    "get_review_by_id",
    "delete_review",
    "list_reviews",
    "count_review_likes",
    "like_review",
    "unlike_review",
    "add_or_update",
    "update_entry",
    "remove_entry",
    "get_reading_list",
    "get_reading_list_entry",
]
