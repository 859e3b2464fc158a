"""
Module name -> apparent name resolution.

A module may bind a dependency under a repository name of its choosing:

    bazel_dep(name = "rules_go", version = "0.50.1", repo_name = "my_rules_go")

The mapping is collected from the root MODULE.bazel and every fragment it
pulls in, transitively, with ``include("//path:foo.MODULE.bazel")``.
See https://bazel.build/external/module#repository_names_and_strict_deps.
"""

import ast
from collections import deque
from collections.abc import Callable
from pathlib import Path

from bzlmod_edit import labels
from bzlmod_edit.manifest import attr_string, call_name, parse_manifest, string_value, top_level_calls
from bzlmod_shared.common.exceptions import ManifestParseError
from bzlmod_shared.infra.config import settings
from bzlmod_shared.infra.observability import get_logger, log_error

logger = get_logger(__name__)

# Repo-relative, slash-separated path -> parsed fragment, or None if it does not exist.
FragmentProvider = Callable[[str], ast.Module | None]

# module() is handled like bazel_dep() for language repos that manage their own
# BUILD files and refer to themselves by name.
_NAMING_RULES = frozenset({"module", "bazel_dep"})


class ModuleNameResolver:
    """
    Collects module name -> apparent name over the include graph of a manifest.

    Fragments are visited breadth-first; every path is read at most once, so
    include cycles terminate. Later declarations for a module name overwrite
    earlier ones.
    """

    def __init__(self, fragment_provider: FragmentProvider):
        self.fragment_provider = fragment_provider

    def resolve(self, root_path: str | None = None) -> dict[str, str] | None:
        """
        Resolve the mapping starting at ``root_path`` (default: configured root manifest).

        Returns:
            Module name -> apparent name, or None if any fragment in the include
            graph is unavailable. A partial mapping could hide an alias, so it
            is never returned.
        """
        root_path = root_path or settings.manifest.root_manifest

        apparent_names: dict[str, str] = {}
        seen: set[str] = set()
        queue = deque([root_path])

        while queue:
            path = queue.popleft()
            if path in seen:
                continue
            seen.add(path)

            fragment = self.fragment_provider(path)
            if fragment is None:
                logger.warning("fragment_unavailable", path=path, root=root_path)
                return None

            names, includes = collect_apparent_names(fragment)
            apparent_names.update(names)
            queue.extend(labels.parse(include).path() for include in includes)

        logger.debug("apparent_names_resolved", root=root_path, fragments=len(seen), modules=len(apparent_names))
        return apparent_names


def collect_apparent_names(fragment: ast.Module) -> tuple[dict[str, str], list[str]]:
    """
    Apparent names declared by a single fragment, and the labels it includes.

    Returns:
        (module name -> apparent name, include labels in file order)
    """
    apparent_names: dict[str, str] = {}
    include_labels: list[str] = []

    for call in top_level_calls(fragment):
        name = attr_string(call, "name")
        if not name:
            if call_name(call) == "include" and len(call.args) == 1 and not call.keywords:
                if label := string_value(call.args[0]):
                    include_labels.append(label)
            continue
        if call_name(call) not in _NAMING_RULES:
            continue
        apparent_names[name] = attr_string(call, "repo_name") or name

    return apparent_names, include_labels


def extract_module_to_apparent_name_mapping(fragment_provider: FragmentProvider) -> Callable[[str], str | None]:
    """
    Lookup for the apparent name of a module, based on the root MODULE.bazel.

    The returned function yields None for modules without a bazel_dep and for
    every module if the include graph could not be read completely.
    """
    apparent_names = ModuleNameResolver(fragment_provider).resolve() or {}
    return apparent_names.get


def filesystem_fragment_provider(repo_root: str | Path, encoding: str | None = None) -> FragmentProvider:
    """
    Fragment provider reading manifests below ``repo_root``.

    A missing or unreadable file, a path leading outside ``repo_root`` and
    unparsable content are all reported as an unavailable fragment.
    """
    root = Path(repo_root).resolve()
    encoding = encoding or settings.manifest.encoding

    def read_fragment(rel_path: str) -> ast.Module | None:
        file_path = (root / rel_path).resolve()
        if not file_path.is_relative_to(root):
            logger.warning("fragment_outside_repo", path=rel_path)
            return None
        try:
            content = file_path.read_text(encoding=encoding)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            log_error(logger, "fragment_read_failed", error=e, path=rel_path)
            return None

        try:
            return parse_manifest(content, rel_path)
        except ManifestParseError as e:
            log_error(logger, "fragment_parse_failed", error=e, **e.details)
            return None

    return read_fragment
