"""
Extension proxy lookup.

A proxy is the variable bound to the result of ``use_extension``. Non-isolated
usages of the same extension (same normalized .bzl file, extension name and
dev_dependency flag) share one set of repositories; an isolated usage stands
alone.
"""

import ast

from bzlmod_edit.manifest import parse_use_extension
from bzlmod_edit.normalize import get_apparent_module_name, normalize_label_string


def find_proxies(manifest: ast.Module, bzl_file: str, extension_name: str, dev_dependency: bool) -> list[str]:
    """
    Names of the proxies of the given extension with the given dev_dependency value.

    Isolated usages are skipped. Proxies are returned in file order; a proxy
    bound twice is reported twice.
    """
    apparent_module_name = get_apparent_module_name(manifest)
    ext_bzl_file = normalize_label_string(bzl_file, apparent_module_name)

    proxies = []
    for stmt in manifest.body:
        usage = parse_use_extension(stmt)
        if usage is None or usage.dev_dependency != dev_dependency or usage.isolate:
            continue
        if usage.name != extension_name:
            continue
        if normalize_label_string(usage.bzl_file, apparent_module_name) == ext_bzl_file:
            proxies.append(usage.proxy)

    return proxies


def all_proxies(manifest: ast.Module, proxy: str) -> list[str]:
    """
    All proxies belonging to the same extension usage as ``proxy``.

    Returns [proxy] for an isolated usage and [] if ``proxy`` is not bound by a
    use_extension call. The first binding of ``proxy`` decides.
    """
    for stmt in manifest.body:
        usage = parse_use_extension(stmt)
        if usage is None or usage.proxy != proxy:
            continue
        if usage.isolate:
            return [proxy]
        return find_proxies(manifest, usage.bzl_file, usage.name, usage.dev_dependency)
    return []
