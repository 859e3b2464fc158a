"""
Bzlmod Edit

Resolves and edits module extension usages in MODULE.bazel files:
- Extension proxy lookup (find_proxies, all_proxies)
- use_repo() collection and editing (use_repos, add/remove_repo_usages, new_use_repo)
- Module name -> apparent name resolution over include() graphs
"""

__version__ = "0.1.0"

from .apparent_names import (
    FragmentProvider,
    ModuleNameResolver,
    collect_apparent_names,
    extract_module_to_apparent_name_mapping,
    filesystem_fragment_provider,
)
from .labels import Label
from .manifest import ExtensionUsage, format_manifest, parse_manifest, parse_use_extension
from .normalize import get_apparent_module_name, normalize_label_string
from .proxies import all_proxies, find_proxies
from .use_repo import add_repo_usages, new_use_repo, remove_repo_usages, update_use_repos, use_repos

__all__ = [
    "ExtensionUsage",
    "FragmentProvider",
    "Label",
    "ModuleNameResolver",
    "add_repo_usages",
    "all_proxies",
    "collect_apparent_names",
    "extract_module_to_apparent_name_mapping",
    "filesystem_fragment_provider",
    "find_proxies",
    "format_manifest",
    "get_apparent_module_name",
    "new_use_repo",
    "normalize_label_string",
    "parse_manifest",
    "parse_use_extension",
    "remove_repo_usages",
    "update_use_repos",
    "use_repos",
]
