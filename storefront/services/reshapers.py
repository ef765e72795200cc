"""
Reshapers for Storefront API payloads.

Pure functions that flatten the edge/node connection encoding into plain
lists, fill in fields the upstream may omit (image alt text, collection
path, cart tax) and drop hidden entities. They never mutate their input
and never raise on well-formed payloads.
"""

import re
from typing import Any, Dict, List, Optional

from storefront.core.config import DEFAULT_HIDDEN_PRODUCT_TAG

FILENAME_PATTERN = re.compile(r".*/(.*)\..*")
DEFAULT_TAX_AMOUNT = {"amount": "0.0", "currencyCode": "USD"}


def remove_edges_and_nodes(connection: Optional[Dict[str, Any]]) -> List[Any]:
    """
    Flatten ``{"edges": [{"node": x}, ...]}`` into ``[x, ...]``.

    Args:
        connection: Connection payload (None is treated as empty)

    Returns:
        List of nodes in upstream order
    """
    if not connection:
        return []
    return [edge.get("node") if edge else None for edge in connection.get("edges") or []]


def _image_file_name(url: str) -> str:
    match = FILENAME_PATTERN.match(url or "")
    return match.group(1) if match else ""


def _with_alt_text(image: Optional[Dict[str, Any]], product_title: str) -> Optional[Dict[str, Any]]:
    if not image:
        return image
    return {
        **image,
        "altText": image.get("altText") or f"{product_title} - {_image_file_name(image.get('url', ''))}",
    }


def reshape_images(images: Optional[Dict[str, Any]], product_title: str) -> List[Dict[str, Any]]:
    """
    Flatten an image connection and synthesize missing alt text.

    Alt text defaults to ``"{product_title} - {file name}"``, the file name
    being the last URL path segment without its extension.
    """
    return [_with_alt_text(image, product_title) for image in remove_edges_and_nodes(images) if image]


def reshape_product(
    product: Optional[Dict[str, Any]],
    filter_hidden: bool = True,
    hidden_tag: str = DEFAULT_HIDDEN_PRODUCT_TAG,
) -> Optional[Dict[str, Any]]:
    """
    Normalize one product payload.

    Args:
        product: Product payload
        filter_hidden: Drop the product when it carries the hidden tag
        hidden_tag: Tag that hides a product from listings

    Returns:
        Reshaped product, or None if absent or hidden
    """
    if not product:
        return None

    if filter_hidden and hidden_tag in (product.get("tags") or []):
        return None

    title = product.get("title", "")
    return {
        **product,
        "featuredImage": _with_alt_text(product.get("featuredImage"), title),
        "images": reshape_images(product.get("images"), title),
        "variants": remove_edges_and_nodes(product.get("variants")),
    }


def reshape_products(
    products: List[Optional[Dict[str, Any]]], hidden_tag: str = DEFAULT_HIDDEN_PRODUCT_TAG
) -> List[Dict[str, Any]]:
    """Reshape a product list with hidden filtering, preserving order."""
    reshaped_products = []

    for product in products or []:
        reshaped_product = reshape_product(product, hidden_tag=hidden_tag)
        if reshaped_product:
            reshaped_products.append(reshaped_product)

    return reshaped_products


def reshape_collection(collection: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not collection:
        return None

    return {
        **collection,
        "path": f"/search/{collection['handle']}",
    }


def reshape_collections(collections: List[Optional[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    reshaped_collections = []

    for collection in collections or []:
        reshaped_collection = reshape_collection(collection)
        if reshaped_collection:
            reshaped_collections.append(reshaped_collection)

    return reshaped_collections


def _reshape_cart_line(line: Dict[str, Any]) -> Dict[str, Any]:
    merchandise = line.get("merchandise") or {}
    product = merchandise.get("product")
    if not product:
        return line

    return {
        **line,
        "merchandise": {
            **merchandise,
            "product": {
                **product,
                "featuredImage": _with_alt_text(product.get("featuredImage"), product.get("title", "")),
            },
        },
    }


def reshape_cart(cart: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a cart payload.

    The tax amount defaults to zero USD when Shopify omits it. Lines that are
    already a plain list are kept as is, so reshaping twice is a no-op.
    """
    cost = dict(cart.get("cost") or {})
    if not cost.get("totalTaxAmount"):
        cost["totalTaxAmount"] = dict(DEFAULT_TAX_AMOUNT)

    lines = cart.get("lines")
    if not isinstance(lines, list):
        lines = remove_edges_and_nodes(lines)

    return {
        **cart,
        "cost": cost,
        "lines": [_reshape_cart_line(line) for line in lines if line],
    }


def reshape_menu_items(items: Optional[List[Dict[str, Any]]], domain: str) -> List[Dict[str, str]]:
    """
    Turn absolute menu URLs into local paths.

    The store domain is stripped, ``/collections`` becomes ``/search`` and
    ``/pages`` is dropped (first occurrence of each). A null URL gives an
    empty path.
    """
    return [
        {
            "title": item.get("title") or "",
            "path": (item.get("url") or "")
            .replace(domain, "", 1)
            .replace("/collections", "/search", 1)
            .replace("/pages", "", 1),
        }
        for item in items or []
        if item
    ]
