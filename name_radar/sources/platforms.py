"""
Social platform table.

Each Platform carries its own rules: which hosts belong to it, how to pull a
username out of a profile URL, which URLs to probe for a handle, and which
body markers prove or disprove that a profile exists. The table is closed;
adding a platform means adding an enum member and a PlatformRules entry.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit

from name_radar.domain.models import Presence, SocialHandle


class Platform(str, Enum):
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    YOUTUBE = "youtube"
    LINKTREE = "linktree"
    MILKSHAKE = "milkshake"
    GITHUB = "github"
    BEHANCE = "behance"
    MEDIUM = "medium"
    LINKEDIN = "linkedin"


# Path fragments that mark a login / consent wall rather than a profile
AUTH_WALL_MARKERS = ("login", "authwall", "signup", "checkpoint", "challenge", "consent")

BodyCheck = Callable[[str, str], Presence | None]


@dataclass(frozen=True)
class PlatformRules:
    """
    Matching and probing rules for one platform.

    Attributes:
        platform: Platform this entry describes
        host_pattern: Regex matched against the lowercased hostname
        profile_urls: URL templates with a {username} placeholder; empty if
            the platform is never probed directly
        handle_prefixes: First path segments after which the handle is the
            second segment (linkedin.com/company/<handle>)
        reserved_paths: First path segments that are site pages, not handles
        not_found_markers: Lowercase body phrases of a "page doesn't exist" page
        profile_markers: Lowercase body phrases that only appear on a real
            profile; may contain a {username} placeholder
        body_check: Optional platform-specific body inspection that runs
            before the generic marker checks
    """

    platform: Platform
    host_pattern: re.Pattern
    profile_urls: tuple[str, ...] = ()
    handle_prefixes: frozenset[str] = frozenset()
    reserved_paths: frozenset[str] = frozenset()
    not_found_markers: tuple[str, ...] = ()
    profile_markers: tuple[str, ...] = ()
    body_check: BodyCheck | None = field(default=None, compare=False)

    def matches_host(self, host: str) -> bool:
        return bool(self.host_pattern.search(host.lower()))

    def extract_username(self, path: str) -> str | None:
        """
        Pull the handle out of a URL path.

        The handle is the first path segment (second after a handle prefix).
        A leading "@" is stripped; site pages and ".php" endpoints yield None.
        """
        parts = [p for p in path.split("/") if p]
        if not parts:
            return None

        head = parts[0].lower()
        if head in self.handle_prefixes:
            if len(parts) < 2:
                return None
            username = parts[1]
        elif head in self.reserved_paths:
            return None
        else:
            username = parts[0]

        username = username.removeprefix("@")
        if not username or ".php" in username.lower():
            return None
        return username

    def probe_urls(self, username: str) -> list[str]:
        return [template.format(username=username) for template in self.profile_urls]

    def owns_url(self, url: str) -> bool:
        host = urlsplit(url).hostname
        return bool(host) and self.matches_host(host)


def _host(*domains: str) -> re.Pattern:
    alternatives = "|".join(re.escape(d) for d in domains)
    return re.compile(rf"(^|\.)({alternatives})$", re.IGNORECASE)


_FB_USER_ID = re.compile(r'"userID"\s*:\s*"([^"]+)"')


def _facebook_body_check(body: str, username: str) -> Presence | None:
    """
    Facebook embeds the viewed profile's numeric userID several times on a
    real page and a single ``"userID":"0"`` on a missing one.
    """
    user_ids = _FB_USER_ID.findall(body)
    if len(user_ids) >= 3 and any(uid != "0" and len(uid) > 1 for uid in user_ids):
        return Presence.PRESENT
    if f'"userVanity":"{username}"'.lower() in body.lower():
        return Presence.PRESENT
    if user_ids == ["0"]:
        return Presence.ABSENT
    return None


PLATFORM_RULES: dict[Platform, PlatformRules] = {
    Platform.INSTAGRAM: PlatformRules(
        platform=Platform.INSTAGRAM,
        host_pattern=_host("instagram.com"),
        profile_urls=("https://www.instagram.com/{username}/",),
        reserved_paths=frozenset(
            {"p", "reel", "reels", "explore", "stories", "accounts", "tv", "direct"}
        ),
        not_found_markers=("sorry, this page isn't available", "page not found"),
        profile_markers=('"username":"{username}"', "(@{username})"),
    ),
    Platform.TIKTOK: PlatformRules(
        platform=Platform.TIKTOK,
        host_pattern=_host("tiktok.com"),
        profile_urls=("https://www.tiktok.com/@{username}",),
        reserved_paths=frozenset({"tag", "discover", "music", "video", "explore", "foryou"}),
        not_found_markers=("couldn't find this account", "couldn&#39;t find this account"),
        profile_markers=('"uniqueid":"{username}"',),
    ),
    Platform.TWITTER: PlatformRules(
        platform=Platform.TWITTER,
        host_pattern=_host("twitter.com", "x.com"),
        profile_urls=("https://twitter.com/{username}", "https://x.com/{username}"),
        reserved_paths=frozenset({"i", "intent", "search", "hashtag", "home", "share", "explore"}),
        not_found_markers=("this account doesn’t exist", "this account doesn't exist"),
        profile_markers=('"screen_name":"{username}"',),
    ),
    Platform.FACEBOOK: PlatformRules(
        platform=Platform.FACEBOOK,
        host_pattern=_host("facebook.com"),
        profile_urls=("https://www.facebook.com/{username}",),
        reserved_paths=frozenset(
            {"pages", "groups", "events", "watch", "sharer", "share", "login", "photo", "hashtag"}
        ),
        not_found_markers=(
            "page not found",
            "this content isn't available",
            "content not available",
        ),
        body_check=_facebook_body_check,
    ),
    Platform.YOUTUBE: PlatformRules(
        platform=Platform.YOUTUBE,
        host_pattern=_host("youtube.com"),
        profile_urls=("https://www.youtube.com/@{username}",),
        handle_prefixes=frozenset({"channel", "c", "user"}),
        reserved_paths=frozenset({"watch", "results", "playlist", "shorts", "feed", "embed"}),
        not_found_markers=("this page isn't available", "404 not found"),
        profile_markers=('"canonicalbaseurl":"/@{username}"',),
    ),
    Platform.LINKTREE: PlatformRules(
        platform=Platform.LINKTREE,
        host_pattern=_host("linktr.ee"),
    ),
    Platform.MILKSHAKE: PlatformRules(
        platform=Platform.MILKSHAKE,
        host_pattern=_host("msha.ke"),
    ),
    Platform.GITHUB: PlatformRules(
        platform=Platform.GITHUB,
        host_pattern=_host("github.com"),
        profile_urls=("https://github.com/{username}",),
        handle_prefixes=frozenset({"orgs"}),
        reserved_paths=frozenset(
            {"about", "pricing", "marketplace", "explore", "search", "login", "features", "topics"}
        ),
        profile_markers=('<meta property="profile:username" content="{username}"',),
    ),
    Platform.BEHANCE: PlatformRules(
        platform=Platform.BEHANCE,
        host_pattern=_host("behance.net"),
        reserved_paths=frozenset({"gallery", "search", "galleries"}),
    ),
    Platform.MEDIUM: PlatformRules(
        platform=Platform.MEDIUM,
        host_pattern=_host("medium.com"),
        reserved_paths=frozenset({"tag", "topics", "search", "m", "p"}),
    ),
    Platform.LINKEDIN: PlatformRules(
        platform=Platform.LINKEDIN,
        host_pattern=_host("linkedin.com"),
        profile_urls=("https://www.linkedin.com/company/{username}",),
        handle_prefixes=frozenset({"in", "company", "school", "showcase"}),
        reserved_paths=frozenset({"feed", "jobs", "posts", "pulse", "login", "search"}),
        not_found_markers=("page not found",),
        profile_markers=("linkedin.com/company/{username}",),
    ),
}


def rules_for(platform: Platform | str) -> PlatformRules:
    return PLATFORM_RULES[Platform(platform)]


def platform_for_host(host: str) -> PlatformRules | None:
    """Find the platform a hostname belongs to, if any."""
    for rules in PLATFORM_RULES.values():
        if rules.matches_host(host):
            return rules
    return None


def extract_social_username(url: str) -> SocialHandle | None:
    """
    Extract (platform, username) from a social profile URL.

    Examples:
        "https://instagram.com/linkpulse/" -> SocialHandle("instagram", "linkpulse")
        "https://www.youtube.com/@linkpulse" -> SocialHandle("youtube", "linkpulse")
        "https://www.linkedin.com/company/linkpulse" -> SocialHandle("linkedin", "linkpulse")
        "https://www.facebook.com/profile.php?id=1" -> None

    Returns:
        SocialHandle, or None if the URL is not a recognizable profile
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.hostname:
        return None

    rules = platform_for_host(parts.hostname)
    if rules is None:
        return None
    username = rules.extract_username(parts.path)
    if not username:
        return None
    return SocialHandle(platform=rules.platform.value, username=username)
