CATEGORIES = {
    "electronics": "Electronics",
    "fashion": "Fashion",
    "home": "Home & Living",
    "health": "Health & Fitness",
}

CATEGORY_ALL = "all"

# shorter queries clear the search instead of filtering
MIN_SEARCH_LENGTH = 2

NOTIFY_SUCCESS = "success"
NOTIFY_INFO = "info"
NOTIFY_WARNING = "warning"
NOTIFY_ERROR = "error"

NOTIFY_KINDS = (NOTIFY_SUCCESS, NOTIFY_INFO, NOTIFY_WARNING, NOTIFY_ERROR)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

STATUS_TEXT = "Ace Gaming Equipment Backend is Running!"
