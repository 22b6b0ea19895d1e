from quill.configs.settings import (
    CONFIG_MAP,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_NUMBER,
    MAX_PAGE_SIZE,
    MAX_POST_ID,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
    MAX_USERNAME_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
    Argon2Params,
    Settings,
    settings,
)

__all__ = [
    "Argon2Params",
    "CONFIG_MAP",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_NUMBER",
    "MAX_PAGE_SIZE",
    "MAX_POST_ID",
    "MAX_TITLE_LENGTH",
    "MAX_URL_LENGTH",
    "MAX_USERNAME_LENGTH",
    "MIN_CONTENT_LENGTH",
    "MIN_TITLE_LENGTH",
    "Settings",
    "settings",
]
