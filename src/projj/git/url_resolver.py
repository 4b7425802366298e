"""URL resolver mapping repository URLs to workspace paths."""

import re
from collections.abc import Mapping

from projj.core.exceptions import RepositoryURLError

# git@github.com:org/repo.git
_SCP_LIKE = re.compile(r"^[\w.-]+@([\w.-]+):(?!//)/?(.+)$")
# ssh://git@host:22/org/repo.git, git://host/org/repo.git, git+https://host/org/repo
_GIT_TRANSPORT = re.compile(r"^(?:git\+)?(?:ssh|git|https?)://(?:[^@/]+@)?([^/:]+)(?::\d+)?/(.+)$")
_HTTP_SCHEME = re.compile(r"^https?://")
_FILE_SCHEME = re.compile(r"^file://")


class URLResolver:
    """Resolves a repository URL to its canonical path under the base directory.

    ``https://github.com/popomore/projj.git`` resolves to
    ``github.com/popomore/projj``. Alias prefixes (``github://``) are
    substituted before normalization.
    """

    def __init__(self, alias: Mapping[str, str] | None = None) -> None:
        self._alias = dict(alias or {})

    def resolve(self, url: str) -> str:
        """Resolve ``url`` to its canonical relative path.

        Local paths and ``file://`` URLs keep their path without the
        leading and trailing ``/``, so the key always stays relative to the base
        directory. Keys with ``..`` segments raise RepositoryURLError.
        """
        key = self.normalize(self.apply_alias(url))
        key = _HTTP_SCHEME.sub("", key, count=1)
        key = _FILE_SCHEME.sub("", key, count=1).strip("/")
        if not key or ".." in key.split("/"):
            raise RepositoryURLError(
                f"Invalid repository url: {url}",
                details={"url": url, "key": key},
            )
        return key

    def apply_alias(self, url: str) -> str:
        """Substitute the first alias whose prefix matches ``url``."""
        for prefix, replacement in self._alias.items():
            if prefix and url.startswith(prefix):
                return replacement + url[len(prefix):]
        return url

    @staticmethod
    def normalize(url: str) -> str:
        """Normalize a git remote URL to an HTTP(S) URL.

        Handles:
        - git@github.com:org/repo.git -> https://github.com/org/repo
        - ssh://git@github.com/org/repo.git -> https://github.com/org/repo
        - git://github.com/org/repo.git -> https://github.com/org/repo
        - https://github.com/org/repo.git -> https://github.com/org/repo

        Anything else is returned unchanged.
        """
        url = url.strip()

        if _HTTP_SCHEME.match(url):
            return _strip_suffix(url)

        scp_match = _SCP_LIKE.match(url)
        if scp_match:
            host, path = scp_match.groups()
            return _strip_suffix(f"https://{host}/{path}")

        transport_match = _GIT_TRANSPORT.match(url)
        if transport_match:
            host, path = transport_match.groups()
            return _strip_suffix(f"https://{host}/{path}")

        return url


def _strip_suffix(url: str) -> str:
    url = url.rstrip("/")
    return re.sub(r"\.git$", "", url)
