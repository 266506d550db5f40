"""Source revision resolution.

Two separate questions are asked of git:

- which name identifies this build (``get_source_revision``): the tag
  pointing exactly at HEAD when there is exactly one, else the short commit id;
- whether this is a release build (``is_untagged_build``): a literal
  substring search of the revision over the full tag listing.

The checks are intentionally not unified. A tag whose name happens to
contain an unrelated short hash makes ``is_untagged_build`` report a tagged
build even though no tag points at HEAD.
"""

from __future__ import annotations

from gxbuild.core.result import Err, Ok, Result
from gxbuild.git.repository import GitError, Repository
from gxbuild.services.build_errors import RevisionUnavailable


def _unavailable(e: GitError) -> RevisionUnavailable:
    return RevisionUnavailable(command=e.command, reason=e.message, returncode=e.returncode)


def get_source_revision(repo: Repository) -> Result[str, RevisionUnavailable]:
    """Return the tag name pointing at HEAD, or the short commit id."""
    revision = repo.short_revision()
    if isinstance(revision, Err):
        return Err(_unavailable(revision.error))

    tags = repo.tags_pointing_at(revision.value)
    if isinstance(tags, Err):
        return Err(_unavailable(tags.error))

    if len(tags.value) == 1:
        return Ok(tags.value[0])
    return Ok(revision.value)


def is_untagged_build(repo: Repository, revision: str) -> Result[bool, RevisionUnavailable]:
    """True when no tag name contains ``revision`` as a substring."""
    tags = repo.tags()
    if isinstance(tags, Err):
        return Err(_unavailable(tags.error))

    return Ok(not any(revision in tag for tag in tags.value))
