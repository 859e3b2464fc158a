"""
use_repo() editing.

A use_repo call imports repositories generated by a module extension:

    use_repo(go_deps, "com_github_pkg_errors", yaml = "in_gopkg_yaml_v3")

The first positional argument is the extension proxy and is never touched.
Repositories are identified by the name the extension exports, i.e. the value
rather than the key of a keyword argument.
"""

import ast
from collections.abc import Iterable, Sequence

from bzlmod_edit.manifest import call_name, parse_tag, parse_use_extension, source_position, string_value
from bzlmod_edit.proxies import all_proxies
from bzlmod_shared.common.exceptions import InvalidInputError
from bzlmod_shared.infra.observability import get_logger

logger = get_logger(__name__)


def use_repos(manifest: ast.Module, proxies: Iterable[str]) -> list[ast.Call]:
    """The top-level use_repo calls whose proxy is one of ``proxies``, in file order."""
    proxy_set = set(proxies)

    calls = []
    for stmt in manifest.body:
        if not isinstance(stmt, ast.Expr) or not isinstance(stmt.value, ast.Call):
            continue
        call = stmt.value
        if call_name(call) != "use_repo" or not call.args:
            continue
        proxy = call.args[0]
        if isinstance(proxy, ast.Name) and proxy.id in proxy_set:
            calls.append(call)

    return calls


def add_repo_usages(use_repo_calls: Sequence[ast.Call], repos: Iterable[str]) -> None:
    """
    Add ``repos`` to the given use_repo calls without introducing duplicates.

    Names already imported by any of the calls are skipped; the rest are
    appended, in the given order, as string arguments of the call that comes
    last in the file. Keyword arguments are preserved, adding them is not
    supported.

    Raises:
        InvalidInputError: If use_repo_calls is empty (programming error)
    """
    repos = list(repos)
    if not repos:
        return
    if not use_repo_calls:
        raise InvalidInputError("use_repo_calls must not be empty", details={"repos": repos})

    seen = set()
    for call in use_repo_calls:
        seen.update(name for name in map(_repo_from_arg, _repo_args(call)) if name)

    target = _last_use_repo(use_repo_calls)
    added = []
    for repo in repos:
        if repo in seen:
            continue
        # Sorting is left to buildifier.
        target.args.append(ast.Constant(value=repo))
        seen.add(repo)
        added.append(repo)

    if added:
        logger.debug("use_repo_repos_added", repos=added, line=source_position(target)[0])


def remove_repo_usages(use_repo_calls: Sequence[ast.Call], repos: Iterable[str]) -> None:
    """Remove ``repos`` from the given use_repo calls, keeping the order of the rest."""
    # "" stands for arguments that name no repository; those are always kept.
    to_remove = set(repos) - {""}
    if not use_repo_calls or not to_remove:
        return

    for call in use_repo_calls:
        if not call.args:
            # Invalid use_repo call without a proxy.
            continue
        call.args[1:] = [arg for arg in call.args[1:] if _repo_from_arg(arg) not in to_remove]
        call.keywords = [kw for kw in call.keywords if _repo_from_arg(kw) not in to_remove]


def new_use_repo(manifest: ast.Module, proxies: Iterable[str]) -> tuple[ast.Module, ast.Call | None]:
    """
    Insert an empty ``use_repo(proxy)`` after the last usage of any of ``proxies``.

    A usage is either the use_extension assignment of a proxy or one of its tag
    calls; the new call refers to the proxy of that last usage. The input
    manifest is left untouched and a new one is returned together with the new
    call. Without any usage the input manifest and None are returned.
    """
    index, proxy = _last_proxy_usage(manifest, proxies)
    if index == -1:
        return manifest, None

    call = ast.Call(
        func=ast.Name(id="use_repo", ctx=ast.Load()),
        args=[ast.Name(id=proxy, ctx=ast.Load())],
        keywords=[],
    )
    body = [*manifest.body[: index + 1], ast.Expr(value=call), *manifest.body[index + 1 :]]
    logger.debug("use_repo_inserted", proxy=proxy, index=index + 1)

    return ast.Module(body=body, type_ignores=list(manifest.type_ignores)), call


def update_use_repos(
    manifest: ast.Module,
    proxy: str,
    add: Iterable[str] = (),
    remove: Iterable[str] = (),
) -> ast.Module:
    """
    Remove and then add imported repositories for the extension usage of ``proxy``.

    All use_repo calls of the usage are edited in place. If the usage has none
    and there is something to add, one is inserted after its last usage, in
    which case a new manifest is returned. An unknown proxy leaves the manifest
    unchanged.
    """
    proxies = all_proxies(manifest, proxy)
    if not proxies:
        logger.debug("extension_proxy_not_found", proxy=proxy)
        return manifest

    calls = use_repos(manifest, proxies)
    remove_repo_usages(calls, remove)

    add = list(add)
    if not add:
        return manifest
    if not calls:
        manifest, call = new_use_repo(manifest, proxies)
        calls = [call]
    add_repo_usages(calls, add)
    return manifest


def _repo_args(call: ast.Call) -> list[ast.AST]:
    # Skip over the proxy in use_repo(proxy, ...).
    return [*call.args[1:], *call.keywords] if call.args else []


def _repo_from_arg(arg: ast.AST) -> str:
    """Repository name as exported by the extension; "" for any other argument shape."""
    if isinstance(arg, ast.keyword):
        # use_repo(ext, my_repo = "repo") --> repo
        return string_value(arg.value) if arg.arg else ""
    # use_repo(ext, "repo") --> repo
    return string_value(arg)


def _last_use_repo(use_repo_calls: Sequence[ast.Call]) -> ast.Call:
    last = use_repo_calls[0]
    for call in use_repo_calls[1:]:
        if source_position(call) > source_position(last):
            last = call
    return last


def _last_proxy_usage(manifest: ast.Module, proxies: Iterable[str]) -> tuple[int, str]:
    """Index and proxy of the last statement using one of ``proxies``; (-1, "") if none."""
    proxy_set = set(proxies)

    last_index, last_proxy = -1, ""
    for i, stmt in enumerate(manifest.body):
        usage = parse_use_extension(stmt)
        proxy = usage.proxy if usage is not None else parse_tag(stmt)
        if proxy is not None and proxy in proxy_set:
            last_index, last_proxy = i, proxy

    return last_index, last_proxy
