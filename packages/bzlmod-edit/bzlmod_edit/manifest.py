"""
MODULE.bazel statement tree.

Starlark is a syntactic subset of Python, so a manifest is held as an
``ast.Module``. The helpers below recognize the statement shapes the editing
components work with; a statement of any other shape yields None / "" and is
simply not applicable.
"""

import ast
from collections.abc import Iterator
from dataclasses import dataclass

from bzlmod_shared.common.exceptions import ManifestParseError


@dataclass(frozen=True, slots=True)
class ExtensionUsage:
    """
    One ``proxy = use_extension(bzl_file, name, ...)`` statement.

    Attributes:
        proxy: Variable the extension proxy is bound to
        bzl_file: Label of the .bzl file, as written
        name: Name of the extension exported by bzl_file
        dev_dependency: Value of the dev_dependency flag
        isolate: Value of the isolate flag
    """

    proxy: str
    bzl_file: str
    name: str
    dev_dependency: bool = False
    isolate: bool = False


def parse_manifest(content: str, path: str = "MODULE.bazel") -> ast.Module:
    """
    Parse MODULE.bazel (or *.MODULE.bazel) content.

    Raises:
        ManifestParseError: If content is not valid Starlark
    """
    try:
        return ast.parse(content, filename=path)
    except (SyntaxError, ValueError) as e:
        # ValueError: NUL bytes in the source (Python < 3.12).
        raise ManifestParseError(
            f"Failed to parse manifest: {path}",
            details={"path": path, "line": getattr(e, "lineno", None)},
        ) from e


def format_manifest(manifest: ast.Module) -> str:
    """Print a manifest. Argument sorting and layout are left to buildifier."""
    return ast.unparse(manifest) + "\n"


def call_name(call: ast.Call) -> str:
    """Name of a plain function call (``foo(...)`` -> "foo"), "" otherwise."""
    if isinstance(call.func, ast.Name):
        return call.func.id
    return ""


def top_level_calls(manifest: ast.Module, kind: str = "") -> Iterator[ast.Call]:
    """Yield top-level ``kind(...)`` calls in file order (all plain calls if kind is "")."""
    for stmt in manifest.body:
        if not isinstance(stmt, ast.Expr) or not isinstance(stmt.value, ast.Call):
            continue
        name = call_name(stmt.value)
        if name and (not kind or name == kind):
            yield stmt.value


def attr_string(call: ast.Call, name: str) -> str:
    """String value of keyword argument ``name``; "" if missing or not a string literal."""
    for keyword in call.keywords:
        if keyword.arg == name:
            return string_value(keyword.value)
    return ""


def string_value(node: ast.AST) -> str:
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    return ""


def parse_use_extension(stmt: ast.stmt) -> ExtensionUsage | None:
    """Match ``proxy = use_extension("//:ext.bzl", "ext", ...)``."""
    if not isinstance(stmt, ast.Assign) or len(stmt.targets) != 1:
        return None
    target = stmt.targets[0]
    if not isinstance(target, ast.Name):
        return None
    call = stmt.value
    if not isinstance(call, ast.Call) or call_name(call) != "use_extension":
        return None
    # Both required arguments must be positional string literals.
    if len(call.args) < 2:
        return None
    bzl_file, name = call.args[0], call.args[1]
    if not _is_string(bzl_file) or not _is_string(name):
        return None

    dev_dependency = False
    isolate = False
    for keyword in call.keywords:
        dev_dependency = dev_dependency or _bool_keyword(keyword, "dev_dependency")
        isolate = isolate or _bool_keyword(keyword, "isolate")

    return ExtensionUsage(
        proxy=target.id,
        bzl_file=bzl_file.value,
        name=name.value,
        dev_dependency=dev_dependency,
        isolate=isolate,
    )


def parse_tag(stmt: ast.stmt) -> str | None:
    """Proxy name of a tag call ``proxy.tag(...)``."""
    if not isinstance(stmt, ast.Expr) or not isinstance(stmt.value, ast.Call):
        return None
    func = stmt.value.func
    if not isinstance(func, ast.Attribute) or not isinstance(func.value, ast.Name):
        return None
    return func.value.id


def source_position(node: ast.AST) -> tuple[int, int]:
    """(line, column) of a node; synthesized nodes without a location sort first."""
    return getattr(node, "lineno", 0), getattr(node, "col_offset", 0)


def _is_string(node: ast.AST) -> bool:
    return isinstance(node, ast.Constant) and isinstance(node.value, str)


def _bool_keyword(keyword: ast.keyword, name: str) -> bool:
    """
    Value of a boolean keyword argument that defaults to False.

    MODULE.bazel files are fully static, so any expression other than the
    literal False is taken to be True: there would be no reason to pass it
    otherwise.
    """
    if keyword.arg != name:
        return False
    value = keyword.value
    if isinstance(value, ast.Constant) and value.value is False:
        return False
    # Hand-built trees may spell the literal as a name.
    if isinstance(value, ast.Name) and value.id == "False":
        return False
    return True
