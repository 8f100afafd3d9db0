"""Static catalog of link platforms and URL helpers."""

import re
from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass(frozen=True)
class Platform:
    id: str
    name: str
    icon: str
    url_prefix: str | None = None


PLATFORMS: list[Platform] = [
    Platform("instagram", "Instagram", "instagram-line", "https://instagram.com/"),
    Platform("youtube", "YouTube", "youtube-line", "https://youtube.com/@"),
    Platform("twitter", "Twitter", "twitter-x-line", "https://twitter.com/"),
    Platform("facebook", "Facebook", "facebook-box-fill", "https://facebook.com/"),
    Platform("tiktok", "TikTok", "tiktok-line", "https://tiktok.com/@"),
    Platform("linkedin", "LinkedIn", "linkedin-box-line", "https://linkedin.com/in/"),
    Platform("github", "GitHub", "github-fill", "https://github.com/"),
    Platform("spotify", "Spotify", "spotify-fill", "https://open.spotify.com/user/"),
    Platform("twitch", "Twitch", "twitch-line", "https://twitch.tv/"),
    Platform("pinterest", "Pinterest", "pinterest-line", "https://pinterest.com/"),
    Platform("email", "Email", "mail-line", "mailto:"),
    Platform("website", "Website", "global-line"),
    Platform("store", "My Shop", "store-2-line"),
    Platform("custom", "Custom Link", "links-line"),
]

_BY_ID = {platform.id: platform for platform in PLATFORMS}

_SCHEME_RE = re.compile(r"^(https?://|mailto:)", re.IGNORECASE)

LINK_SCHEMES = ("http", "https", "mailto")


def is_known_platform(platform_id: str) -> bool:
    return platform_id in _BY_ID


def get_platform(platform_id: str) -> Platform:
    """Look up a platform, falling back to the custom link entry."""
    return _BY_ID.get(platform_id, _BY_ID["custom"])


def normalize_url(url: str) -> str:
    """Prefix bare domains with https://.

    Examples:
        'github.com/alice' -> 'https://github.com/alice'
        'http://example.com' -> 'http://example.com'
        'mailto:me@example.com' -> 'mailto:me@example.com'
    """
    url = url.strip()
    if not url or _SCHEME_RE.match(url):
        return url
    return "https://" + url


def is_absolute_url(url: str) -> bool:
    """True for http(s) URLs with a host, or mailto: URLs with an address."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    scheme = parsed.scheme.lower()
    if scheme not in LINK_SCHEMES:
        return False
    if scheme == "mailto":
        return "@" in parsed.path
    return bool(parsed.netloc) and " " not in url
