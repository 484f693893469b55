#!/usr/bin/env python3
"""api_calls_estimator.py

Estimate the number of GitHub REST calls one *archive_github.py* run needs
for an organisation of a given shape.

Every listing the archiver makes is paginated at 100 items per page, so
each listing costs ceil(items / 100) calls, and never less than one call
(an empty listing still costs a request).

Calls modelled
--------------
1. Teams – `/orgs/{org}/teams`, then per team its repos and members.
2. Repositories – `/orgs/{org}/repos`.
3. Issues – per repository `/issues?state=all`, then
   `/issues/{n}/comments` for every issue that has comments.

git clone/pull traffic is not an API call and is not counted.

Adjust the constants at the top of the file to explore other org sizes.
"""
from __future__ import annotations

from dataclasses import dataclass

NUM_TEAMS: int = 5
AVG_TEAM_MEMBERS: int = 8
AVG_TEAM_REPOS: int = 12
NUM_REPOS: int = 40  # total repositories in the org
AVG_ISSUES: int = 150  # issues + pull requests per repository
COMMENTED_ISSUE_RATIO: float = 0.6  # share of issues with at least one comment
AVG_COMMENTS: int = 4  # comments per commented issue (≤100 so one page)

PAGE_SIZE = 100  # per_page used by archive_github.py for every listing


@dataclass
class Estimate:
    step: str
    description: str
    calls: int

    def __str__(self) -> str:  # pretty print
        return f"{self.step:14} | {self.calls:8,} calls | {self.description}"


def ceildiv(a: int, b: int) -> int:
    return (a + b - 1) // b


def listing_calls(items: int) -> int:
    """Calls for one paginated listing of *items* entries."""
    return max(1, ceildiv(items, PAGE_SIZE))


def team_calls(num_teams: int, members_per_team: int, repos_per_team: int) -> int:
    """Team listing plus, per team, one repo listing and one member listing."""
    per_team = listing_calls(repos_per_team) + listing_calls(members_per_team)
    return listing_calls(num_teams) + num_teams * per_team


def repo_calls(num_repos: int) -> int:
    return listing_calls(num_repos)


def issue_calls(num_repos: int, issues_per_repo: int, commented_ratio: float, comments_per_issue: int) -> int:
    """Issue listings per repo plus one comment listing per commented issue.

    Issues without comments never trigger a comment request.
    """
    commented = round(issues_per_repo * commented_ratio)
    per_repo = listing_calls(issues_per_repo) + commented * listing_calls(comments_per_issue)
    return num_repos * per_repo


def total_calls(estimates: list[Estimate]) -> int:
    return sum(est.calls for est in estimates)


if __name__ == "__main__":
    scenarios = [
        Estimate(
            "Teams",
            "team list + repos + members per team",
            team_calls(NUM_TEAMS, AVG_TEAM_MEMBERS, AVG_TEAM_REPOS),
        ),
        Estimate(
            "Repositories",
            "`/orgs/{org}/repos?type=all`",
            repo_calls(NUM_REPOS),
        ),
        Estimate(
            "Issues",
            "issue pages + comment pages for commented issues",
            issue_calls(NUM_REPOS, AVG_ISSUES, COMMENTED_ISSUE_RATIO, AVG_COMMENTS),
        ),
    ]

    print("API CALL ESTIMATES (", NUM_TEAMS, "teams,", NUM_REPOS, "repos,", AVG_ISSUES, "issues each)")
    print("Step           |    Calls | Notes")
    print("-" * 60)
    for est in scenarios:
        print(est)
    print("-" * 60)
    print(f"{'Total':14} | {total_calls(scenarios):8,} calls |")

    print("\nAssumptions:")
    print(" • Authenticated token: 5,000 requests per hour.")
    print(" • No comment thread exceeds 100 comments.")
