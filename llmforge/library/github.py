"""Shared transformer library hosted in a GitHub repository."""

import base64
import binascii
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import RequestException
from urllib3.util.retry import Retry

from llmforge.core.exceptions import StoreError, ValidationError
from llmforge.models.transformer_config import TransformerConfig

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
LIBRARY_FILE = "fuzor.json"

_HTTPS_PATTERN = re.compile(r"https://github\.com/([^/]+)/([^/.]+)(?:\.git)?", re.IGNORECASE)
_SSH_PATTERN = re.compile(r"git@github\.com:([^/]+)/([^/.]+)(?:\.git)?", re.IGNORECASE)
_SHORTHAND_PATTERN = re.compile(r"^([^/]+)/([^/]+)$")


@dataclass(frozen=True)
class Repository:
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def normalize_repository(value: str) -> Repository:
    """Parse ``owner/repo``, an HTTPS clone URL or an SSH clone URL.

    Raises:
        ValidationError: If the value matches none of the formats
    """
    for pattern in (_HTTPS_PATTERN, _SSH_PATTERN, _SHORTHAND_PATTERN):
        match = pattern.search(value or "")
        if match:
            name = match.group(2)
            if name.endswith(".git"):
                name = name[: -len(".git")]
            return Repository(owner=match.group(1), name=name)

    raise ValidationError(
        f"Invalid Git repository format: {value}. Supported formats: "
        "https://github.com/owner/repo.git, git@github.com:owner/repo.git, owner/repo"
    )


class GitHubLibraryClient:
    """Fetches the library file of a repository through the GitHub contents API."""

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.token = token
        self.timeout = timeout
        self._session = session or self._build_session(max_retries)

    @staticmethod
    def _build_session(max_retries: int) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=1.0,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        return session

    def fetch_file(self, repository: str, path: str) -> str:
        """Return the decoded text of one file in ``repository``.

        Raises:
            ValidationError: If the repository name is malformed
            StoreError: If the request fails or the payload cannot be decoded
        """
        repo = normalize_repository(repository)
        url = f"{GITHUB_API_URL}/repos/{repo.full_name}/contents/{path}"
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self._session.get(url, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            content = response.json()["content"]
            return base64.b64decode(content).decode("utf-8")
        except (RequestException, ValueError, KeyError, TypeError, binascii.Error) as e:
            logger.error(f"GitHub API error: {e}")
            raise StoreError(
                f"Failed to fetch file content from git: {e}",
                context={"repository": repo.full_name, "path": path},
            ) from e

    def fetch_library(self, repository: str) -> Any:
        """Fetch and parse the repository's ``fuzor.json`` library tree.

        Raises:
            StoreError: If the library cannot be fetched or parsed
        """
        content = self.fetch_file(repository, LIBRARY_FILE)
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise StoreError(
                f"Failed to fetch transformer library: {e}",
                context={"repository": repository},
            ) from e


def _is_config(node: dict) -> bool:
    return "prompt" in node and "id" in node


def flatten_library(tree: Any) -> Iterator[TransformerConfig]:
    """Yield the configurations of a nested library tree.

    The tree nests named groups (objects) whose leaves are transformer
    configurations; lists of configurations are accepted too. Invalid leaves
    are skipped with a warning.
    """
    if isinstance(tree, list):
        for node in tree:
            yield from flatten_library(node)
    elif isinstance(tree, dict):
        if _is_config(tree):
            try:
                yield TransformerConfig.from_dict(tree)
            except ValidationError as e:
                logger.warning(f"Skipping invalid library entry {tree.get('name')}: {e}")
            return
        for node in tree.values():
            yield from flatten_library(node)
