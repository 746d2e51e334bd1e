"""
Profile synthesis from flat social-link URLs.

Older documents stored social links as single URL fields ("linkedin",
"github"). The current shape keeps them in basics.profiles as
{network, username, url} entries.
"""

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from galley.contexts.migration.defaults import KNOWN_NETWORKS, PROFILE_URL_FIELDS


def _split_url(url: str):
    # urlsplit only finds the host when a scheme is present
    if "://" not in url:
        url = f"https://{url}"
    return urlsplit(url)


def infer_network(host: str) -> str:
    """
    Infer a network display name from a URL host.

    Examples:
        >>> infer_network("www.linkedin.com")
        'LinkedIn'
        >>> infer_network("codeberg.org")
        'Codeberg'
    """
    host = host.lower().split(":")[0]
    if host.startswith("www."):
        host = host[4:]

    for domain, network in KNOWN_NETWORKS.items():
        if host == domain or host.endswith(f".{domain}"):
            return network

    labels = [label for label in host.split(".") if label]
    if not labels:
        return ""
    name = labels[-2] if len(labels) >= 2 else labels[0]
    return name.capitalize()


def profile_from_url(url: str) -> Optional[Dict[str, str]]:
    """
    Build a profile entry from a social link URL.

    The username is the last non-empty path segment; the network is inferred
    from the host.

    Args:
        url: Profile URL, with or without scheme

    Returns:
        {"network", "username", "url"} dict, or None for an empty URL

    Examples:
        >>> profile_from_url("https://www.linkedin.com/in/alexjohnson/")
        {'network': 'LinkedIn', 'username': 'alexjohnson', 'url': 'https://www.linkedin.com/in/alexjohnson/'}
    """
    url = url.strip()
    if not url:
        return None

    parts = _split_url(url)
    segments = [segment for segment in parts.path.split("/") if segment]
    username = segments[-1] if segments else ""

    return {"network": infer_network(parts.netloc), "username": username, "url": url}


def synthesize_profiles(
    profiles: List[Dict[str, Any]], flat_fields: Mapping[str, Any]
) -> List[Dict[str, Any]]:
    """
    Append profiles for flat URL fields not already present in the list.

    Args:
        profiles: Existing profile entries (not modified)
        flat_fields: Mapping that may hold "linkedin"/"github" URL strings

    Returns:
        New profile list
    """
    result = list(profiles)
    known_urls = {p.get("url") for p in result if isinstance(p, dict)}

    for field in PROFILE_URL_FIELDS:
        value = flat_fields.get(field)
        if not isinstance(value, str):
            continue
        profile = profile_from_url(value)
        if profile is None or profile["url"] in known_urls:
            continue
        result.append(profile)
        known_urls.add(profile["url"])

    return result
