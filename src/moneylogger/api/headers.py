"""Response headers for entity alerts and pagination."""

from starlette.datastructures import URL

from moneylogger.config import settings
from moneylogger.core.pagination import Page

ALERT_HEADER = "X-Moneylogger-Alert"
PARAMS_HEADER = "X-Moneylogger-Params"


def entity_alert(entity_name: str, action: str, entity_id: int) -> dict[str, str]:
    """Headers announcing a create/update/delete, e.g. ``moneyloggerTransaction.created``."""
    return {
        ALERT_HEADER: f"{settings.app_name}{entity_name}.{action}",
        PARAMS_HEADER: str(entity_id),
    }


def pagination_headers(url: URL, page: Page) -> dict[str, str]:
    """Build ``X-Total-Count`` and RFC 5988 ``Link`` headers for a page."""
    number = page.pageable.page
    size = page.pageable.size
    last = max(page.total_pages - 1, 0)

    def link(target: int, rel: str) -> str:
        return f'<{url.include_query_params(page=target, size=size)}>; rel="{rel}"'

    links = []
    if number < last:
        links.append(link(number + 1, "next"))
    if number > 0:
        links.append(link(number - 1, "prev"))
    links.append(link(last, "last"))
    links.append(link(0, "first"))

    return {"X-Total-Count": str(page.total), "Link": ",".join(links)}
