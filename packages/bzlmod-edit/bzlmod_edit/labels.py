"""
Bazel label parsing.

Accepted spellings:
    @repo//pkg:target    absolute
    @@repo//pkg:target   absolute, canonical repository name
    @repo                shorthand for @repo//:repo
    @//pkg:target        root module, repository left empty
    //pkg:target         current repository
    //pkg                target defaults to the last package segment
    :target, target      relative to the current package
"""

import posixpath
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Label:
    """
    Parsed label (immutable).

    Attributes:
        repository: Repository name without the leading "@" ("" = current repository).
            Canonical names keep one leading "@" so that they format back as "@@name".
        package: Slash-separated package path ("" = root package)
        target: Target name within the package
        relative: True if the label was written relative to an unknown package
    """

    repository: str = ""
    package: str = ""
    target: str = ""
    relative: bool = False

    def format(self) -> str:
        """Format as "@repo//pkg:target" ("//pkg:target" without a repository)."""
        if self.relative:
            return f":{self.target}"
        prefix = f"@{self.repository}" if self.repository else ""
        return f"{prefix}//{self.package}:{self.target}"

    def path(self) -> str:
        """Repo-relative path of the file the label points to."""
        joined = posixpath.join(self.package, self.target)
        return posixpath.normpath(joined) if joined else ""

    def __str__(self) -> str:
        return self.format()


def parse(raw: str) -> Label:
    """Parse a label string. Malformed input yields a best-effort label, never an error."""
    repository = ""
    rest = raw

    if rest.startswith("@"):
        canonical = rest.startswith("@@")
        rest = rest[2:] if canonical else rest[1:]
        repo, sep, rest = rest.partition("//")
        repository = f"@{repo}" if canonical else repo
        if not sep:
            # @repo == @repo//:repo
            return Label(repository=repository, package="", target=repo)
        return _parse_absolute(repository, rest)

    if rest.startswith("//"):
        return _parse_absolute("", rest[2:])

    return Label(target=rest[1:] if rest.startswith(":") else rest, relative=True)


def parse_relative(raw: str, current_package: str) -> Label:
    """Parse a label, anchoring a relative label in current_package."""
    label = parse(raw)
    if label.relative:
        return Label(repository="", package=current_package, target=label.target)
    return label


def _parse_absolute(repository: str, rest: str) -> Label:
    package, sep, target = rest.partition(":")
    if not sep:
        target = posixpath.basename(package)
    return Label(repository=repository, package=package, target=target)
