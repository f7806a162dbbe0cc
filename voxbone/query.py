"""
Voxbone Python SDK - Query encoding

Listing endpoints take their filters as a query string. Each endpoint has
an option dataclass naming every filter it recognises; field metadata
carries the wire key and whether the filter repeats once per element.

Encoding rules:
    - Pagination is always emitted. Caller values are used only when both
      ``page_number`` and ``page_size`` are set, otherwise both defaults are.
    - Other filters are emitted only when truthy, so ``0``, ``""`` and
      ``False`` are left out.
    - Repeated filters emit one ``&key=value`` pair per element, in order.
    - Values are concatenated as plain text, without percent-encoding.
"""

from dataclasses import dataclass, field, fields
from typing import Any, List, Optional, Sequence, Union


def _query(key: str, repeat: bool = False) -> Any:
    return field(default=None, metadata={"query": key, "repeat": repeat})


def format_value(value: Any) -> str:
    """Render a filter value the way the API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class PagedQuery:
    """Pagination shared by every listing."""
    page_number: Optional[int] = None
    page_size: Optional[int] = None


@dataclass(frozen=True)
class DidGroupQuery(PagedQuery):
    """Filters for ``inventory/didgroup``. ``country_code_a3`` is required."""
    country_code_a3: Optional[str] = None
    did_group_ids: Optional[Sequence[Union[int, str]]] = _query("didGroupIds", repeat=True)
    feature_ids: Optional[Sequence[int]] = _query("featureIds", repeat=True)
    state_id: Optional[Union[int, str]] = _query("stateId")
    city_name_pattern: Optional[str] = _query("cityNamePattern")
    rate_center: Optional[str] = _query("rateCenter")
    area_code: Optional[str] = _query("areaCode")
    did_type: Optional[str] = _query("didType")
    show_empty: Optional[bool] = _query("showEmpty")


@dataclass(frozen=True)
class DidQuery(PagedQuery):
    """Filters for ``inventory/did``."""
    did_ids: Optional[Sequence[Union[int, str]]] = _query("didIds", repeat=True)
    didgroup_ids: Optional[Sequence[Union[int, str]]] = _query("didgroupIds", repeat=True)
    e164_pattern: Optional[str] = _query("e164Pattern")
    regulation_address_id: Optional[Union[int, str]] = _query("regulationAddressId")
    voice_uri_id: Optional[Union[int, str]] = _query("voiceUriId")
    fax_uri_id: Optional[Union[int, str]] = _query("faxUriId")
    sms_link_group_id: Optional[Union[int, str]] = _query("smsLinkGroupId")
    need_address_link: Optional[bool] = _query("needAddressLink")
    service_type: Optional[str] = _query("serviceType")
    country_code_a3: Optional[str] = _query("countryCodeA3")
    order_reference: Optional[str] = _query("orderReference")
    porting_reference: Optional[str] = _query("portingReference")
    delivery_id: Optional[Union[int, str]] = _query("deliveryId")
    sms_outbound: Optional[bool] = _query("smsOutbound")
    web_rtc_enabled: Optional[bool] = _query("webRtcEnabled")


@dataclass(frozen=True)
class CartQuery(PagedQuery):
    """Filters for listing carts."""
    cart_identifier: Optional[Union[int, str]] = _query("cartIdentifier")
    reference: Optional[str] = _query("reference")


@dataclass(frozen=True)
class OrderQuery(PagedQuery):
    """Filters for listing orders."""
    reference: Optional[str] = _query("reference")


@dataclass(frozen=True)
class CountryQuery(PagedQuery):
    """Filters for listing countries."""
    country_code_a3: Optional[str] = _query("countryCodeA3")
    did_type: Optional[str] = _query("didType")


def encode_pages(
    options: PagedQuery,
    default_page_number: int,
    default_page_size: int,
) -> str:
    """Render the mandatory pagination pair."""
    if options.page_number and options.page_size:
        page_number, page_size = options.page_number, options.page_size
    else:
        page_number, page_size = default_page_number, default_page_size
    return f"&pageNumber={page_number}&pageSize={page_size}"


def encode_filters(options: PagedQuery) -> str:
    """Render every truthy filter of ``options`` in declaration order."""
    parts: List[str] = []
    for f in fields(options):
        key = f.metadata.get("query")
        if key is None:
            continue
        value = getattr(options, f.name)
        if not value:
            continue
        if f.metadata.get("repeat"):
            parts.extend(f"&{key}={format_value(item)}" for item in value)
        else:
            parts.append(f"&{key}={format_value(value)}")
    return "".join(parts)


def encode_query(
    options: PagedQuery,
    *,
    default_page_number: int,
    default_page_size: int,
) -> str:
    """
    Build the query fragment for a listing request.

    Args:
        options: Option dataclass for the endpoint
        default_page_number: Page number used when pagination is incomplete
        default_page_size: Page size used when pagination is incomplete

    Returns:
        Fragment starting with ``&pageNumber=``, to be appended after ``?``
        or after a leading required parameter.
    """
    return encode_pages(options, default_page_number, default_page_size) + encode_filters(options)
