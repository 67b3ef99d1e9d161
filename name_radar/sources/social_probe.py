"""
Social platform probe collector.

Requests a platform's canonical profile URL without following redirects and
decides Present / Absent / Unknown from the status code, the redirect
target and platform-specific body markers. A 200 alone never yields
Present: several platforms serve soft-404 pages with status 200.
"""

import logging
from urllib.parse import urljoin, urlsplit

import httpx

from name_radar.constants import PROBE_PLATFORMS, SOCIAL_PROBE_TIMEOUT
from name_radar.domain.models import Confidence, FailureKind, Presence, SocialProbeEvidence
from name_radar.sources.platforms import AUTH_WALL_MARKERS, PlatformRules, rules_for
from name_radar.utils.rate_limiting import RateLimiter

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES = (429, 999)  # 999 is LinkedIn's rate-limit status


def _is_auth_wall(url: str) -> bool:
    parts = urlsplit(url)
    target = f"{parts.path}?{parts.query}".lower()
    return any(marker in target for marker in AUTH_WALL_MARKERS)


def inspect_body(rules: PlatformRules, body: str, username: str) -> tuple[Presence, str | None]:
    """
    Decide presence from a 200 response body.

    Returns:
        (PRESENT | ABSENT | UNKNOWN, note)
    """
    if rules.body_check is not None:
        verdict = rules.body_check(body, username)
        if verdict is not None:
            return verdict, "Platform profile check"

    lowered = body.lower()
    handle = username.lower()
    if any(marker in lowered for marker in rules.not_found_markers):
        return Presence.ABSENT, "Page reports profile not found"
    if any(marker.format(username=handle) in lowered for marker in rules.profile_markers):
        return Presence.PRESENT, "Profile markers found"
    return Presence.UNKNOWN, "No profile markers in page - check manually"


class SocialProber:
    """
    Probes profile URLs for one platform.

    Args:
        client: Shared async HTTP client (must not follow redirects)
        timeout: Per-request timeout in seconds
    """

    def __init__(self, client: httpx.AsyncClient, timeout: float = SOCIAL_PROBE_TIMEOUT):
        self.client = client
        self.timeout = timeout

    async def probe(self, platform: str, username: str) -> SocialProbeEvidence:
        """
        Probe every profile URL of a platform for a handle.

        The first Present result wins. Absent is returned only when every URL
        says Absent; otherwise the first inconclusive result is returned.
        """
        rules = rules_for(platform)
        handle = username.removeprefix("@")
        urls = rules.probe_urls(handle)
        if not urls:
            return SocialProbeEvidence(
                platform=platform,
                username=handle,
                note="Platform is not probed",
            )

        results = []
        for url in urls:
            evidence = await self._evaluate(rules, handle, url, url)
            if evidence.outcome is Presence.PRESENT:
                return evidence
            results.append(evidence)

        if all(r.outcome is Presence.ABSENT for r in results):
            return results[0]
        return next(r for r in results if r.outcome is not Presence.ABSENT)

    async def _evaluate(
        self,
        rules: PlatformRules,
        username: str,
        profile_url: str,
        request_url: str,
        followed: bool = False,
    ) -> SocialProbeEvidence:
        platform = rules.platform.value

        def result(outcome, confidence, note=None, **kwargs) -> SocialProbeEvidence:
            return SocialProbeEvidence(
                outcome=outcome,
                confidence=confidence,
                note=note,
                platform=platform,
                username=username,
                url=profile_url,
                **kwargs,
            )

        try:
            response = await self.client.get(request_url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.debug(f"{platform} probe timed out for {username}: {e}")
            return result(
                Presence.UNKNOWN,
                Confidence.NONE,
                "Timed out - check manually",
                error=str(e) or "timeout",
                failure=FailureKind.TRANSPORT,
            )
        except httpx.HTTPError as e:
            logger.debug(f"{platform} probe failed for {username}: {e}")
            return result(
                Presence.UNKNOWN,
                Confidence.NONE,
                "Network error - check manually",
                error=str(e) or type(e).__name__,
                failure=FailureKind.TRANSPORT,
            )

        status = response.status_code
        if status == 404:
            return result(Presence.ABSENT, Confidence.HIGH, status_code=status)

        if status in RATE_LIMIT_STATUSES:
            return result(
                Presence.UNKNOWN,
                Confidence.NONE,
                f"Rate limited by {platform} - check manually",
                status_code=status,
                failure=FailureKind.RATE_LIMITED,
            )

        if status == 403:
            return result(
                Presence.UNKNOWN,
                Confidence.NONE,
                f"Blocked by {platform} - check manually",
                status_code=status,
                failure=FailureKind.BLOCKED,
            )

        if response.is_redirect:
            location = response.headers.get("location", "")
            target = urljoin(request_url, location) if location else ""
            if not target or not rules.owns_url(target):
                return result(
                    Presence.UNKNOWN,
                    Confidence.NONE,
                    "Redirected off-platform - check manually",
                    status_code=status,
                    redirect_target=target or None,
                )
            if _is_auth_wall(target):
                return result(
                    Presence.UNKNOWN,
                    Confidence.NONE,
                    "Requires login - check manually",
                    status_code=status,
                    redirect_target=target,
                )
            target_handle = rules.extract_username(urlsplit(target).path)
            if target_handle and target_handle.lower() == username.lower():
                if followed:
                    return result(
                        Presence.UNKNOWN,
                        Confidence.NONE,
                        "Redirect loop - check manually",
                        status_code=status,
                        redirect_target=target,
                    )
                # Same profile on a sibling host (twitter.com -> x.com, bare -> www)
                return await self._evaluate(rules, username, profile_url, target, followed=True)
            if urlsplit(target).path.strip("/"):
                return result(
                    Presence.PRESENT,
                    Confidence.MEDIUM,
                    "Redirected within platform",
                    status_code=status,
                    redirect_target=target,
                )
            return result(
                Presence.UNKNOWN,
                Confidence.NONE,
                "Redirected to platform home - check manually",
                status_code=status,
                redirect_target=target,
            )

        if status == 200:
            outcome, note = inspect_body(rules, response.text, username)
            confidence = Confidence.NONE if outcome is Presence.UNKNOWN else Confidence.HIGH
            return result(outcome, confidence, note, status_code=status)

        return result(
            Presence.UNKNOWN,
            Confidence.NONE,
            f"HTTP {status} - check manually",
            status_code=status,
        )


async def probe_social_handles(
    prober: SocialProber,
    username: str,
    platforms: tuple[str, ...] = PROBE_PLATFORMS,
    limiter: RateLimiter | None = None,
) -> dict[str, SocialProbeEvidence]:
    """
    Probe a handle on several platforms, one request in flight at a time.

    Args:
        prober: SocialProber bound to the run's HTTP client
        username: Handle to probe
        platforms: Platform names to probe, in order
        limiter: Optional social rate limiter providing the inter-probe delay

    Returns:
        Mapping of platform name to evidence, in probe order
    """
    results: dict[str, SocialProbeEvidence] = {}
    for platform in platforms:
        if limiter is not None:
            await limiter()
        try:
            results[platform] = await prober.probe(platform, username)
        except Exception as e:
            logger.debug(f"Unexpected error probing {platform} for {username}: {e}")
            results[platform] = SocialProbeEvidence(
                platform=platform,
                username=username,
                error=str(e) or type(e).__name__,
                failure=FailureKind.TRANSPORT,
                note="Probe failed - check manually",
            )
        logger.debug(f"{platform}/@{username}: {results[platform].status}")
    return results


def summarize_social_probes(results: dict[str, SocialProbeEvidence]) -> dict:
    """
    Count taken / available / unknown across a probe run.

    Returns:
        {"total", "taken", "available", "unknown", "platforms": {platform: status}}
    """
    summary = {"total": len(results), "taken": 0, "available": 0, "unknown": 0, "platforms": {}}
    for platform, evidence in results.items():
        status = evidence.status
        summary["platforms"][platform] = status
        summary[status if status in ("taken", "available") else "unknown"] += 1
    return summary
