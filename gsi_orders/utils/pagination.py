# gsi_orders/utils/pagination.py
import math


def clamp_page(page: int | None) -> int:
    return max(1, page or 1)


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    if not limit:
        return default
    return min(maximum, max(1, limit))


def offset_for(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
