"""Turn a GitLab issue into a prompt for a coding agent."""

import asyncio
import logging
import sys
from dataclasses import replace

import click
from dotenv import load_dotenv

from .client import GitLabClient
from .config import IssuePromptConfig
from .exceptions import (
    GitLabApiError,
    GitLabError,
    GitLabForbiddenError,
    GitLabNotFoundError,
    GitLabUnauthorizedError,
    SchemaValidationError,
)
from .formatters.prompt import render_issue_prompt
from .formatters.raw import render_issue_json
from .handoff import open_in_opencode


async def fetch_and_render(
    config: IssuePromptConfig,
    issue_iid: int,
    *,
    include_comments: bool = True,
    only_user_comments: bool = False,
    as_json: bool = False,
) -> str:
    """Fetch one issue with its notes and render it; nothing is rendered on failure."""
    async with GitLabClient(config) as client:
        data = await client.get_issue_data(
            config.project_id,
            issue_iid,
            include_comments=include_comments,
            only_user_comments=only_user_comments,
        )
    if as_json:
        return render_issue_json(data)
    return render_issue_prompt(data, preamble=config.preamble)


def _describe(error: GitLabError) -> tuple[str, str]:
    """Return a human-readable message and the raw response body, if any."""
    if isinstance(error, GitLabUnauthorizedError):
        return "Authentication failed. Check your GITLAB_TOKEN.", error.body
    if isinstance(error, GitLabForbiddenError):
        return (
            "Access forbidden. Your token may not have sufficient permissions "
            "(read_api scope is required).",
            error.body,
        )
    if isinstance(error, GitLabNotFoundError):
        return (
            "Issue or project not found. Check your GITLAB_PROJECT_ID and issue IID.",
            error.body,
        )
    if isinstance(error, GitLabApiError):
        return f"GitLab API error: {error.status_code} {error.status_text}", error.body
    if isinstance(error, SchemaValidationError):
        lines = [f"Unexpected {error.entity} data from GitLab:"]
        lines += [f"  - {path}: {message}" for path, message in error.errors]
        return "\n".join(lines), ""
    return str(error), ""


@click.command()
@click.argument("issue_iid", type=click.IntRange(min=1), metavar="ISSUE_IID")
@click.option("--no-comments", is_flag=True, help="Exclude comments from output")
@click.option(
    "--comments-only", is_flag=True, help="Only include user comments (exclude system notes)"
)
@click.option("--json", "as_json", is_flag=True, help="Output raw JSON instead of markdown")
@click.option("--opencode", is_flag=True, help="Open the prompt directly in opencode")
@click.option("--project-id", help="Project ID or path (overrides GITLAB_PROJECT_ID)")
@click.option("--gitlab-url", help="GitLab instance URL (overrides GITLAB_URL)")
@click.option("--gitlab-token", help="GitLab personal access token (overrides GITLAB_TOKEN)")
@click.option("--preamble", help="Line placed above the issue title in the prompt")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    issue_iid: int,
    no_comments: bool,
    comments_only: bool,
    as_json: bool,
    opencode: bool,
    project_id: str | None,
    gitlab_url: str | None,
    gitlab_token: str | None,
    preamble: str | None,
    verbose: bool,
) -> None:
    """Extract GitLab issue ISSUE_IID (and its comments) as context for an AI agent."""
    load_dotenv()
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    overrides = {
        "url": gitlab_url.rstrip("/") if gitlab_url else None,
        "token": gitlab_token,
        "project_id": project_id,
        "preamble": preamble,
    }
    try:
        config = replace(
            IssuePromptConfig.from_env(), **{k: v for k, v in overrides.items() if v}
        )
        config.validate()
        config.validate_project()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        output = asyncio.run(
            fetch_and_render(
                config,
                issue_iid,
                include_comments=not no_comments,
                only_user_comments=comments_only,
                as_json=as_json,
            )
        )
        if opencode:
            sys.exit(open_in_opencode(output))
    except GitLabError as e:
        message, body = _describe(e)
        click.echo(f"Error: {message}", err=True)
        if body:
            click.echo(f"Response: {body}", err=True)
        sys.exit(1)

    click.echo(output)


if __name__ == "__main__":
    main()
