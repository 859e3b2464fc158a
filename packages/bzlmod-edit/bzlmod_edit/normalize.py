"""Label normalization against the apparent name of the root module."""

import ast

from bzlmod_edit import labels
from bzlmod_edit.manifest import attr_string, top_level_calls


def get_apparent_module_name(manifest: ast.Module) -> str:
    """
    Apparent name of the repository of the module defined in ``manifest``.

    ``module(repo_name = ...)`` is preferred over ``module(name = ...)``; if
    there are several module() calls the last one with either attribute wins.
    Returns "" if the manifest does not name its module.
    """
    apparent_name = ""
    for module in top_level_calls(manifest, "module"):
        if repo_name := attr_string(module, "repo_name"):
            apparent_name = repo_name
        elif name := attr_string(module, "name"):
            apparent_name = name
    return apparent_name


def normalize_label_string(raw_label: str, apparent_module_name: str) -> str:
    """
    Convert a label string into the form ``@apparent_name//path/to:target``.

    An empty repository covers both a relative label and the ``@//pkg:target``
    spelling. The latter is only allowed in the root module, and the manifest
    being edited is always treated as the root module.
    """
    label = labels.parse_relative(raw_label, "")
    if not label.repository:
        label = labels.Label(repository=apparent_module_name, package=label.package, target=label.target)
    return label.format()
