#!/usr/bin/env python3
"""archive_github.py

Command-line utility to archive a GitHub organization to local disk:
every repository (and its wiki) as a git working copy, every issue and
pull request as a Markdown file with a YAML header, and every team as a
Markdown file listing its repositories and members.

Usage:
  python archive_github.py acme                       # token from GITHUB_TOKEN
  python archive_github.py acme --token <PERSONAL_ACCESS_TOKEN>
  python archive_github.py acme --dest-dir /backups/acme
  python archive_github.py acme --timestamp 2024-05-01T10-00-00   # resume/update an archive
  python archive_github.py --skip-clone --skip-teams  # org from GITHUB_ORG

Each run writes into `<dest_dir>/<timestamp>/`; `dest_dir` defaults to
`./archive/<org>`. The token needs read access to the organization's
repositories, issues and teams; it is embedded in the git clone URLs.
"""
from __future__ import annotations

import argparse
import logging
import os
import shutil
import subprocess
import sys
import tempfile
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypedDict, Union

import requests
import yaml
from dotenv import load_dotenv

# Load environment variables from .env located next to this script (project root).
# Use override=True so values in the file replace stale values already exported
# in the shell (e.g. an expired GITHUB_TOKEN).
PROJECT_ROOT = Path(__file__).resolve().parent
load_dotenv(PROJECT_ROOT / ".env", override=True)

API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")
API_VERSION = "2022-11-28"
GIT_HOST = "github.com"
API_CALL_COUNT = 0

# Request resilience settings
REQUEST_TIMEOUT = (5, 30)  # (connect_timeout, read_timeout) in seconds
MAX_RETRIES = max(1, int(os.getenv("GITHUB_MAX_RETRIES", "3")))
TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})

PAGE_SIZE = int(os.getenv("GITHUB_PAGE_SIZE", "100"))  # GitHub caps per_page at 100

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"
DELIMITER = "---"
GHOST_LOGIN = "ghost"  # GitHub's placeholder for deleted accounts

# Module-level logger so the archive steps are usable without `cli()`,
# which is where handlers get attached.
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors ---------------------------------------------------------------------
# ---------------------------------------------------------------------------

class ConfigError(ValueError):
    """Token or organization could not be resolved."""


class GitHubError(RuntimeError):
    """A GitHub REST call failed for good (retries, if any, exhausted)."""

    def __init__(self, message: str, *, status: Optional[int] = None, url: Optional[str] = None, transient: bool = False):
        super().__init__(message)
        self.status = status
        self.url = url
        self.transient = transient


class GitCommandError(RuntimeError):
    """`git` exited non-zero or could not be started."""

    def __init__(self, command: str, *, returncode: int, stderr: str):
        super().__init__(f"`{command}` exited with status {returncode}: {stderr.strip()}")
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


# ---------------------------------------------------------------------------
# REST helpers ---------------------------------------------------------------
# ---------------------------------------------------------------------------

def _auth_headers(token: str) -> Dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": API_VERSION,
    }


def _is_transient(response: requests.Response) -> bool:
    """Return True when *response* is worth retrying (server error or rate limit)."""
    if response.status_code in TRANSIENT_STATUSES:
        return True
    return response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"


def _github_get(
    url: str,
    headers: Dict[str, str],
    params: Optional[Dict[str, Any]] = None,
    *,
    timeout: tuple = REQUEST_TIMEOUT,
    max_retries: int = MAX_RETRIES,
) -> requests.Response:
    """GET *url*, retrying transient failures with exponential backoff.

    Permanent failures (404, 401, plain 403, ...) raise `GitHubError`
    straight away; transient ones raise it once *max_retries* attempts are
    spent, with ``transient=True`` so callers can tell the two apart.
    """
    if max_retries < 1:
        raise ValueError(f"max_retries must be at least 1, got {max_retries}")

    global API_CALL_COUNT
    for attempt in range(1, max_retries + 1):
        API_CALL_COUNT += 1
        start = time.perf_counter()
        try:
            resp = requests.get(url, headers=headers, params=params, timeout=timeout)
            resp.raise_for_status()
            logger.debug("GET %s completed in %.3fs", url, time.perf_counter() - start)
            return resp
        except requests.HTTPError as exc:
            status = exc.response.status_code
            transient = _is_transient(exc.response)
            if not transient or attempt == max_retries:
                logger.warning("GET %s failed after %.3fs: %s", url, time.perf_counter() - start, exc)
                raise GitHubError(
                    f"GitHub API error {status} for {url}: {exc.response.text}",
                    status=status,
                    url=url,
                    transient=transient,
                ) from exc
        except (requests.Timeout, requests.ConnectionError) as exc:
            if attempt == max_retries:
                logger.warning("GET %s connection error after %.3fs: %s", url, time.perf_counter() - start, exc)
                raise GitHubError(f"GitHub connection error for {url}: {exc}", url=url, transient=True) from exc
        sleep_s = 2 ** attempt
        logger.info("Retrying GET %s in %ds (attempt %d/%d)...", url, sleep_s, attempt, max_retries)
        time.sleep(sleep_s)


def _fetch_paginated_rest(
    path: str,
    headers: Dict[str, str],
    params: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch every item of a paginated REST listing.

    Args:
        path: API path such as ``/orgs/acme/repos``.
        headers: The HTTP headers for each request.
        params: Extra query parameters for the first page. Later pages are
                requested through the ``Link: rel="next"`` URL, which
                already carries the query string.

    Returns:
        All items, in the order the API returned them.
    """
    items: List[Dict[str, Any]] = []
    next_url: Optional[str] = f"{API_URL}{path}"
    next_params: Optional[Dict[str, Any]] = {"per_page": PAGE_SIZE, **(params or {})}

    while next_url:
        resp = _github_get(next_url, headers, next_params)
        items.extend(resp.json())
        next_url = resp.links.get("next", {}).get("url")
        next_params = None

    return items


def fetch_org_teams(org: str, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    return _fetch_paginated_rest(f"/orgs/{org}/teams", headers)


def fetch_team_repos(org: str, team_slug: str, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    return _fetch_paginated_rest(f"/orgs/{org}/teams/{team_slug}/repos", headers)


def fetch_team_members(org: str, team_slug: str, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    return _fetch_paginated_rest(f"/orgs/{org}/teams/{team_slug}/members", headers)


def fetch_org_repos(org: str, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    return _fetch_paginated_rest(f"/orgs/{org}/repos", headers, {"type": "all"})


def fetch_issues(full_name: str, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    """Issues *and* pull requests, open and closed."""
    return _fetch_paginated_rest(f"/repos/{full_name}/issues", headers, {"state": "all"})


def fetch_issue_comments(full_name: str, number: int, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    return _fetch_paginated_rest(f"/repos/{full_name}/issues/{number}/comments", headers)


# ---------------------------------------------------------------------------
# Projection -----------------------------------------------------------------
# ---------------------------------------------------------------------------

ISSUE_FIELDS = ("title", "number", "state", "html_url", "created_at", "closed_at")
MILESTONE_FIELDS = ("title", "number", "description", "state")
COMMENT_FIELDS = ("created_at", "body")
TEAM_FIELDS = ("name", "slug", "description", "privacy", "permission")
TEAM_REPO_FIELDS = ("name", "full_name", "description", "private", "fork", "html_url", "permissions")
TEAM_MEMBER_FIELDS = ("login", "id", "html_url", "type", "site_admin")
REPO_INFO_FIELDS = ("name", "full_name", "description", "private", "fork", "homepage", "has_wiki")
REPO_STATS_FIELDS = ("forks_count", "stargazers_count", "watchers_count", "open_issues_count", "size")


class MilestoneRecord(TypedDict, total=False):
    title: str
    number: int
    description: Optional[str]
    state: str


class IssueRecord(TypedDict, total=False):
    title: str
    number: int
    state: str
    html_url: str
    created_at: str
    closed_at: Optional[str]
    user: str
    labels: List[str]
    milestone: MilestoneRecord
    assignee: str


class CommentRecord(TypedDict, total=False):
    user: str
    created_at: str
    body: Optional[str]


class TeamRecord(TypedDict, total=False):
    name: str
    slug: str
    description: Optional[str]
    privacy: str
    permission: str


class TeamRepoRecord(TypedDict, total=False):
    name: str
    full_name: str
    description: Optional[str]
    private: bool
    fork: bool
    html_url: str
    permissions: List[Dict[str, bool]]


class TeamMemberRecord(TypedDict, total=False):
    login: str
    id: int
    html_url: str
    type: str
    site_admin: bool


class RepoInfoRecord(TypedDict, total=False):
    name: str
    full_name: str
    description: Optional[str]
    private: bool
    fork: bool
    homepage: Optional[str]
    has_wiki: bool


def project(record: Mapping[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
    """Return the *fields* of *record*, in *fields* order; absent fields are skipped."""
    return {name: record[name] for name in fields if name in record}


def _login(account: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not account:
        return None
    return account.get("login")


def project_milestone(milestone: Optional[Mapping[str, Any]]) -> MilestoneRecord:
    if not milestone:
        return {}
    return project(milestone, MILESTONE_FIELDS)


def project_issue(issue: Mapping[str, Any]) -> IssueRecord:
    """Issue header: the fixed issue fields plus author, labels, milestone and assignee.

    `assignee` is left out entirely when nobody is assigned, while
    `milestone` is always present (an empty mapping when there is none).
    """
    projected: IssueRecord = project(issue, ISSUE_FIELDS)
    projected["user"] = _login(issue.get("user")) or GHOST_LOGIN
    projected["labels"] = [label.get("name") for label in issue.get("labels") or []]
    projected["milestone"] = project_milestone(issue.get("milestone"))
    assignee = _login(issue.get("assignee"))
    if assignee:
        projected["assignee"] = assignee
    return projected


def project_comment(comment: Mapping[str, Any]) -> CommentRecord:
    projected: CommentRecord = {"user": _login(comment.get("user")) or GHOST_LOGIN}
    projected.update(project(comment, COMMENT_FIELDS))
    return projected


def project_team(team: Mapping[str, Any]) -> TeamRecord:
    return project(team, TEAM_FIELDS)


def reshape_permissions(permissions: Mapping[str, bool]) -> List[Dict[str, bool]]:
    """``{"admin": False, "pull": True}`` -> ``[{"admin": False}, {"pull": True}]``."""
    return [{flag: value} for flag, value in permissions.items()]


def project_team_repo(repo: Mapping[str, Any]) -> TeamRepoRecord:
    projected: TeamRepoRecord = project(repo, TEAM_REPO_FIELDS)
    permissions = projected.get("permissions")
    if isinstance(permissions, Mapping):
        projected["permissions"] = reshape_permissions(permissions)
    return projected


def project_team_member(member: Mapping[str, Any]) -> TeamMemberRecord:
    return project(member, TEAM_MEMBER_FIELDS)


def project_repo_info(repo: Mapping[str, Any]) -> RepoInfoRecord:
    return project(repo, REPO_INFO_FIELDS)


# ---------------------------------------------------------------------------
# Markdown / YAML emitter ----------------------------------------------------
# ---------------------------------------------------------------------------

Block = Union[str, Mapping[str, Any]]


def render_block(block: Block) -> str:
    """Structured blocks become block-style YAML; text blocks pass through untouched."""
    if isinstance(block, str):
        text = block
    else:
        text = yaml.safe_dump(
            dict(block),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
    return text if text.endswith("\n") else text + "\n"


def render_document(blocks: Iterable[Block]) -> str:
    """Join *blocks*, each introduced by a `---` line."""
    return "".join(f"{DELIMITER}\n{render_block(block)}" for block in blocks)


def write_document(path: Path, blocks: Iterable[Block]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_document(blocks), encoding="utf-8")


# ---------------------------------------------------------------------------
# Issues ---------------------------------------------------------------------
# ---------------------------------------------------------------------------

def render_comment(comment: Mapping[str, Any]) -> str:
    projected = project_comment(comment)
    return f"@{projected['user']} at {projected.get('created_at')} wrote:\n\n{projected.get('body') or ''}"


def render_issue(issue: Mapping[str, Any], comments: Sequence[Mapping[str, Any]] = ()) -> str:
    blocks: List[Block] = [
        project_issue(issue),
        f"# {issue.get('title', '')}\n\n{issue.get('body') or ''}",
    ]
    blocks.extend(render_comment(comment) for comment in comments)
    return render_document(blocks)


def archive_issues(full_name: str, repo_dest: Path, headers: Dict[str, str]) -> int:
    """Write `<repo_dest>/issues/<number>.md` for every issue and PR of *full_name*.

    Comments are only fetched for issues that report at least one.
    Returns the number of files written.
    """
    issues_dir = Path(repo_dest) / "issues"
    issues_dir.mkdir(parents=True, exist_ok=True)

    issues = fetch_issues(full_name, headers)
    for issue in issues:
        number = issue["number"]
        comments: List[Dict[str, Any]] = []
        if issue.get("comments"):
            comments = fetch_issue_comments(full_name, number, headers)
        logger.info("%s#%s: %d comment(s)", full_name, number, len(comments))
        (issues_dir / f"{number}.md").write_text(render_issue(issue, comments), encoding="utf-8")

    return len(issues)


# ---------------------------------------------------------------------------
# Teams ----------------------------------------------------------------------
# ---------------------------------------------------------------------------

def render_team(
    team: Mapping[str, Any],
    repos: Sequence[Mapping[str, Any]],
    members: Sequence[Mapping[str, Any]],
) -> str:
    blocks: List[Block] = ["# Team Info", project_team(team), "# Team Repos"]
    blocks.extend(project_team_repo(repo) for repo in repos)
    blocks.append("# Team Members")
    blocks.extend(project_team_member(member) for member in members)
    return render_document(blocks)


def archive_teams(org: str, archive_root: Path, headers: Dict[str, str]) -> int:
    """Write `<archive_root>/teams/<slug>.md` for every team of *org*."""
    teams_dir = Path(archive_root) / "teams"
    teams_dir.mkdir(parents=True, exist_ok=True)

    teams = fetch_org_teams(org, headers)
    for team in teams:
        slug = team["slug"]
        repos = fetch_team_repos(org, slug, headers)
        members = fetch_team_members(org, slug, headers)
        logger.info("Team %s: %d repo(s), %d member(s)", slug, len(repos), len(members))
        (teams_dir / f"{slug}.md").write_text(render_team(team, repos, members), encoding="utf-8")

    return len(teams)


# ---------------------------------------------------------------------------
# Repository info ------------------------------------------------------------
# ---------------------------------------------------------------------------

def write_repo_info(repo: Mapping[str, Any], repo_dest: Path) -> Path:
    path = Path(repo_dest) / "repo info" / "repo_info.md"
    write_document(path, [
        "# Repo Info",
        project_repo_info(repo),
        "# Repo Stats",
        project(repo, REPO_STATS_FIELDS),
    ])
    return path


# ---------------------------------------------------------------------------
# git mirroring --------------------------------------------------------------
# ---------------------------------------------------------------------------

@dataclass
class MirrorResult:
    full_name: str
    action: str  # "clone" or "pull"
    wiki_action: Optional[str] = None
    wiki_error: Optional[str] = None


def _redact(text: str, token: Optional[str]) -> str:
    return text.replace(token, "***") if token else text


def _public_url(full_name: str, *, wiki: bool = False) -> str:
    suffix = ".wiki.git" if wiki else ".git"
    return f"https://{GIT_HOST}/{full_name}{suffix}"


def _authenticated_url(full_name: str, token: str, *, wiki: bool = False) -> str:
    suffix = ".wiki.git" if wiki else ".git"
    return f"https://x-access-token:{token}@{GIT_HOST}/{full_name}{suffix}"


def _run_git(args: List[str], token: Optional[str] = None) -> subprocess.CompletedProcess:
    """Run `git` with *args*; raise `GitCommandError` on a non-zero exit.

    The token is masked in everything that leaves this function.
    """
    command = ["git", *args]
    display = _redact(" ".join(command), token)
    logger.debug("Running %s", display)
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=False,
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )
    except FileNotFoundError as exc:
        raise GitCommandError(display, returncode=127, stderr=str(exc)) from exc
    if result.returncode != 0:
        raise GitCommandError(display, returncode=result.returncode, stderr=_redact(result.stderr or "", token))
    return result


def _clone_into_populated(url: str, dest: Path, token: Optional[str]) -> None:
    """Clone *url* into *dest* although *dest* already holds files.

    git refuses to clone into a non-empty directory (an earlier run may have
    written `issues/` there without a working copy), so the repository is
    cloned without checkout into a sibling staging directory, its `.git`
    moved into *dest* and the tracked files restored with `reset --hard`.
    Untracked files in *dest* are left alone.
    """
    staging = Path(tempfile.mkdtemp(prefix=f".{dest.name}-", dir=dest.parent))
    try:
        _run_git(["clone", "--no-checkout", url, str(staging)], token)
        shutil.move(str(staging / ".git"), str(dest / ".git"))
    finally:
        shutil.rmtree(staging, ignore_errors=True)
    _run_git(["-C", str(dest), "reset", "--hard"], token)


def sync_working_copy(url: str, dest: Path, token: Optional[str] = None, *, public_url: Optional[str] = None) -> str:
    """Clone *url* into *dest*, or pull from *url* when *dest* already is a working copy.

    With *public_url*, a fresh clone's `origin` is rewritten to it so the
    credentials embedded in *url* never stay in `.git/config`; pulls then
    name *url* explicitly.

    Returns the action taken, ``"clone"`` or ``"pull"``.
    """
    dest = Path(dest).resolve()
    if (dest / ".git").exists():
        _run_git(["-C", str(dest), "pull", url], token)
        return "pull"

    if dest.is_dir() and any(dest.iterdir()):
        _clone_into_populated(url, dest, token)
    else:
        dest.parent.mkdir(parents=True, exist_ok=True)
        _run_git(["clone", url, str(dest)], token)
    if public_url:
        _run_git(["-C", str(dest), "remote", "set-url", "origin", public_url], token)
    return "clone"


def mirror_repository(full_name: str, dest: Path, token: str, *, has_wiki: bool = False) -> MirrorResult:
    """Bring the working copy of *full_name* at *dest* up to date, wiki included.

    A failing repository clone/pull raises `GitCommandError`. A failing wiki
    is only reported on the result: GitHub flags `has_wiki` for repositories
    whose wiki was never created, and those cannot be cloned.
    """
    dest = Path(dest)
    action = sync_working_copy(
        _authenticated_url(full_name, token), dest, token, public_url=_public_url(full_name)
    )
    logger.info("%s: %s done", full_name, action)
    result = MirrorResult(full_name=full_name, action=action)

    if has_wiki:
        try:
            result.wiki_action = sync_working_copy(
                _authenticated_url(full_name, token, wiki=True),
                dest / "wiki",
                token,
                public_url=_public_url(full_name, wiki=True),
            )
            logger.info("%s: wiki %s done", full_name, result.wiki_action)
        except GitCommandError as exc:
            result.wiki_error = str(exc)
            logger.warning("%s: wiki not mirrored: %s", full_name, exc)

    return result


# ---------------------------------------------------------------------------
# Driver ---------------------------------------------------------------------
# ---------------------------------------------------------------------------

@dataclass
class ArchiveConfig:
    token: str
    org: str
    dest_dir: Path
    timestamp: Optional[str] = None
    skip_teams: bool = False
    skip_issues: bool = False
    skip_clone: bool = False


@dataclass
class ArchiveSummary:
    archive_root: Path
    teams: int = 0
    repos: int = 0
    issues: int = 0
    failed_repos: List[str] = field(default_factory=list)
    skipped_wikis: List[str] = field(default_factory=list)
    skipped_issues: List[str] = field(default_factory=list)


def load_config(
    org: Optional[str] = None,
    token: Optional[str] = None,
    dest_dir: Optional[str] = None,
    **options: Any,
) -> ArchiveConfig:
    """Resolve explicit values first, then GITHUB_TOKEN / GITHUB_ORG / ARCHIVE_DEST_DIR."""
    token = token or os.getenv("GITHUB_TOKEN")
    if not token:
        raise ConfigError("This tool requires a GitHub token. Please use --token or set GITHUB_TOKEN environment variable.")
    org = org or os.getenv("GITHUB_ORG")
    if not org:
        raise ConfigError("No organization given. Pass it as the first argument or set GITHUB_ORG environment variable.")
    dest_dir = dest_dir or os.getenv("ARCHIVE_DEST_DIR") or str(Path("archive") / org)
    return ArchiveConfig(token=token, org=org, dest_dir=Path(dest_dir), **options)


def make_archive_root(dest_dir: Path, timestamp: Optional[str] = None, *, now: Optional[datetime] = None) -> Path:
    """Create and return `<dest_dir>/<timestamp>`.

    An explicit *timestamp* reuses that directory if it exists. A generated
    one never does: a numeric suffix is added until the path is new.
    """
    base = Path(dest_dir)
    if timestamp:
        root = base / timestamp
        root.mkdir(parents=True, exist_ok=True)
        return root

    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    root = base / stamp
    suffix = 0
    while True:
        try:
            root.mkdir(parents=True, exist_ok=False)
            return root
        except FileExistsError:
            suffix += 1
            root = base / f"{stamp}-{suffix}"


def archive_org(config: ArchiveConfig) -> ArchiveSummary:
    """Archive teams once, then mirror and archive every repository of the org."""
    headers = _auth_headers(config.token)
    root = make_archive_root(config.dest_dir, config.timestamp)
    summary = ArchiveSummary(archive_root=root)
    logger.info("Archiving organization %s into %s", config.org, root)

    if config.skip_teams:
        logger.info("Skipping teams (--skip-teams)")
    else:
        summary.teams = archive_teams(config.org, root, headers)

    for repo in fetch_org_repos(config.org, headers):
        name = repo["name"]
        full_name = repo.get("full_name") or f"{config.org}/{name}"
        repo_dest = root / name
        logger.info("Archiving repository %s", full_name)

        if not config.skip_clone:
            try:
                result = mirror_repository(full_name, repo_dest, config.token, has_wiki=bool(repo.get("has_wiki")))
            except GitCommandError as exc:
                logger.error("%s: mirror failed: %s", full_name, exc)
                summary.failed_repos.append(full_name)
            else:
                if result.wiki_error:
                    summary.skipped_wikis.append(full_name)

        write_repo_info(repo, repo_dest)
        if not config.skip_issues:
            if repo.get("has_issues") is False:
                logger.warning("%s: issues are disabled, skipping", full_name)
                summary.skipped_issues.append(full_name)
            else:
                try:
                    summary.issues += archive_issues(full_name, repo_dest, headers)
                except GitHubError as exc:
                    # 410 Gone: issues disabled on this repository only
                    if exc.status != 410:
                        raise
                    logger.warning("%s: issues not archived: %s", full_name, exc)
                    summary.skipped_issues.append(full_name)
        summary.repos += 1

    return summary


def _configure_logging(log_dir: Path, verbose: bool) -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
    log_file = log_dir / f"{Path(__file__).stem}_{timestamp}.log"
    # Capture all levels in root logger so file handler can store DEBUG logs
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S%z")
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # Console handler prints INFO by default, DEBUG if --verbose specified
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    return log_file


def cli(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Archive a GitHub organization's repositories, wikis, teams and issues.")
    parser.add_argument("org", nargs="?", help="GitHub organization to archive (or set GITHUB_ORG env var)")
    parser.add_argument("--token", help="GitHub Personal Access Token (or set GITHUB_TOKEN env var)")
    parser.add_argument("--dest-dir", help="Base directory for archives (default: ./archive/<org>, or ARCHIVE_DEST_DIR)")
    parser.add_argument("--timestamp", help="Write into this existing archive run instead of a new timestamped one")
    parser.add_argument("--skip-teams", action="store_true", help="Do not archive teams")
    parser.add_argument("--skip-issues", action="store_true", help="Do not archive issues and pull requests")
    parser.add_argument("--skip-clone", action="store_true", help="Do not clone or pull repositories and wikis")
    parser.add_argument("--log-dir", default="logs", help="Directory to save timestamped logs")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")
    args = parser.parse_args(argv)

    start_time = time.perf_counter()
    _configure_logging(Path(args.log_dir), args.verbose)

    try:
        config = load_config(
            args.org,
            args.token,
            args.dest_dir,
            timestamp=args.timestamp,
            skip_teams=args.skip_teams,
            skip_issues=args.skip_issues,
            skip_clone=args.skip_clone,
        )
    except ConfigError as exc:
        parser.error(str(exc))

    logger.info("Starting archive_github run for organization: %s", config.org)
    try:
        summary = archive_org(config)
        logger.info(
            "Archived %d team(s), %d repo(s), %d issue(s) into %s",
            summary.teams, summary.repos, summary.issues, summary.archive_root,
        )
        if summary.skipped_wikis:
            logger.warning("Wikis not mirrored: %s", ", ".join(summary.skipped_wikis))
        if summary.skipped_issues:
            logger.warning("Issues not archived: %s", ", ".join(summary.skipped_issues))
        if summary.failed_repos:
            logger.error("Repositories not mirrored: %s", ", ".join(summary.failed_repos))
    except GitHubError as exc:
        logger.error("Archive aborted: %s", exc)
        raise SystemExit(f"Archive aborted: {exc}") from exc
    finally:
        logger.info("Total GitHub API calls: %d", API_CALL_COUNT)
        logger.info("Total runtime: %.2f seconds", time.perf_counter() - start_time)

    if summary.failed_repos:
        sys.exit(1)


if __name__ == "__main__":
    cli()
