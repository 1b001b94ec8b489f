"""Title search over the documents already loaded by the editor."""

from typing import Any, Iterable, List, Mapping


def filter_documents(
    documents: Iterable[Mapping[str, Any]], query: str
) -> List[Mapping[str, Any]]:
    """Keep the documents whose title contains the query, ignoring case.

    Args:
        documents: Document payloads as returned by the API, each with a ``title``.
        query: Text typed by the user; blank returns every document.

    Returns:
        The matching documents in their original order.

    Example:
        >>> filter_documents([{"title": "Meeting Notes"}, {"title": "Ideas"}], "notes")
        [{'title': 'Meeting Notes'}]
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(documents)
    return [doc for doc in documents if needle in (doc.get("title") or "").lower()]
