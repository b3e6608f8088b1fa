from aiohttp.web_request import Request

from dt_console import config
from dt_console.core.exceptions import ApiException


def external_url(url) -> str:
    return f"{config.SCHEME}://{config.SERVER_NAME}{url}"


def build_link_with_page(
    request: Request, query_string: list[str], page: int, page_size: int
) -> str:
    q = [string for string in query_string if not string.startswith("page")]
    q.extend([f"page={page}", f"page_size={page_size}"])
    rebuilt_q = "&".join(q)
    return external_url(f"{request.path}?{rebuilt_q}")


def parse_paging(request: Request) -> tuple[int, int]:
    try:
        page = int(request.query.get("page", "1"))
        page_size = int(request.query.get("page_size", config.PAGE_SIZE_DEFAULT))
    except ValueError:
        raise ApiException(400, None, "Invalid query string", "page and page_size must be integers")
    if page < 1:
        raise ApiException(400, None, "Invalid query string", "page must be greater than 0")
    if page_size > config.PAGE_SIZE_MAX:
        raise ApiException(
            400,
            None,
            "Invalid query string",
            f"Page size exceeds allowed maximum: {config.PAGE_SIZE_MAX}",
        )
    if page_size not in config.PAGE_SIZE_OPTIONS:
        raise ApiException(
            400,
            None,
            "Invalid query string",
            f"Page size must be one of {config.PAGE_SIZE_OPTIONS}",
        )
    return page, page_size
