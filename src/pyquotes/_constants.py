"""Internal constants shared across the library."""

BASE_URL = "https://jsonplaceholder.typicode.com"
POSTS_ENDPOINT = "/posts"
USER_AGENT = "pyquotes/1.0"

#: Every remote-origin quote is filed under this synthetic category.
SERVER_CATEGORY = "Server"

#: Filter sentinel meaning "no category constraint".
FILTER_ALL = "all"

# ------------------------------------------------------------------
# Blob store keys
# ------------------------------------------------------------------

QUOTES_KEY = "dynamic_quote_generator_quotes"
FILTER_KEY = "dynamic_quote_generator_filter"
LAST_QUOTE_KEY = "dynamic_quote_generator_last_quote"

# ------------------------------------------------------------------
# Seed collection used when nothing valid has been persisted yet
# ------------------------------------------------------------------

DEFAULT_QUOTES: tuple[tuple[str, str], ...] = (
    ("The only limit to our realization of tomorrow is our doubts of today.", "Motivation"),
    ("Reading is to the mind what exercise is to the body.", "Reading"),
    ("A room without books is like a body without a soul.", "Books"),
    ("The future depends on what you do today.", "Motivation"),
)
