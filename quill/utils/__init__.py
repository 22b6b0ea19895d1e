from quill.utils.helpers import get_summary, host, normalize_email, page_count, today_str

__all__ = ["get_summary", "host", "normalize_email", "page_count", "today_str"]
