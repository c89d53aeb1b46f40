"""Models for the sites probed during a run."""

from collections.abc import Sequence

from pydantic import Field, field_validator
from yarl import URL

from ipv6perftest.models.base import Model


class Target(Model):
    """A named site reachable over HTTP(S)."""

    name: str = Field(..., min_length=1, description="Display name of the site")
    url: str = Field(..., description="HTTP or HTTPS URL requested by the probe")

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        parsed = URL(value)
        if parsed.scheme not in {"http", "https"} or not parsed.host:
            raise ValueError(f"Target URL must be an absolute http(s) URL: {value!r}")
        return value


class TargetList(Model):
    """Schema of a target file."""

    targets: Sequence[Target] = Field(..., min_length=1)


DEFAULT_TARGETS: Sequence[Target] = tuple(
    Target(name=name, url=url)
    for name, url in (
        ("Wikipedia", "https://www.wikipedia.org"),
        ("Google", "https://www.google.com"),
        ("Facebook", "https://www.facebook.com"),
        ("YouTube", "https://www.youtube.com"),
        ("Netflix", "https://www.netflix.com"),
        ("GitHub", "https://github.com"),
        ("Cloudflare", "https://www.cloudflare.com"),
        ("Akamai", "https://www.akamai.com"),
        ("Microsoft", "https://www.microsoft.com"),
        ("Apple", "https://www.apple.com"),
        ("Amazon", "https://www.amazon.com"),
        ("Reddit", "https://www.reddit.com"),
        ("Twitter/X", "https://www.x.com"),
        ("Cisco", "https://www.cisco.com"),
        ("Yahoo", "https://www.yahoo.com"),
        ("Yandex", "https://www.yandex.com"),
        ("Zoom", "https://zoom.us"),
        ("CNN", "https://www.cnn.com"),
        ("ESPN", "https://www.espn.com"),
        ("Spotify", "https://www.spotify.com"),
        ("Gitlab", "https://gitlab.com"),
        ("Codeberg", "https://codeberg.org"),
        ("Dockerhub", "https://hub.docker.com"),
    )
)
