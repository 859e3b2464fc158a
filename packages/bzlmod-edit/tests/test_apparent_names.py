"""
Module name -> apparent name resolution tests.
"""

import pytest

from bzlmod_edit.apparent_names import (
    ModuleNameResolver,
    collect_apparent_names,
    extract_module_to_apparent_name_mapping,
    filesystem_fragment_provider,
)


class TestCollectApparentNames:
    """Test a single fragment."""

    def test_repo_name(self, manifest_from):
        names, _ = collect_apparent_names(manifest_from('bazel_dep(name = "rules_go", repo_name = "my_rules_go")'))
        assert names == {"rules_go": "my_rules_go"}

    def test_name_only(self, manifest_from):
        names, _ = collect_apparent_names(manifest_from('bazel_dep(name = "rules_go", version = "0.50.1")'))
        assert names == {"rules_go": "rules_go"}

    def test_module(self, manifest_from):
        names, _ = collect_apparent_names(manifest_from('module(name = "gazelle", repo_name = "bazel_gazelle")'))
        assert names == {"gazelle": "bazel_gazelle"}

    def test_last_declaration_wins(self, manifest_from):
        manifest = manifest_from(
            """
            bazel_dep(name = "rules_go", repo_name = "io_bazel_rules_go")
            bazel_dep(name = "rules_go")
            """
        )
        assert collect_apparent_names(manifest)[0] == {"rules_go": "rules_go"}

    def test_other_calls_ignored(self, manifest_from):
        manifest = manifest_from(
            """
            single_version_override(module_name = "rules_go", version = "1.0")
            git_override(name = "foo", repo_name = "bar")
            bazel_dep(repo_name = "nameless")
            dep = bazel_dep(name = "assigned")
            """
        )
        assert collect_apparent_names(manifest)[0] == {}

    def test_includes(self, manifest_from):
        manifest = manifest_from(
            """
            include("//bazel:go.MODULE.bazel")
            include(":local.MODULE.bazel")
            include(LABEL)
            include("//:a.MODULE.bazel", "//:b.MODULE.bazel")
            include(label = "//:c.MODULE.bazel")
            """
        )
        assert collect_apparent_names(manifest)[1] == ["//bazel:go.MODULE.bazel", ":local.MODULE.bazel"]


class TestModuleNameResolver:
    """Test traversal of the include graph."""

    def test_root_only(self, memory_provider):
        provider = memory_provider({"MODULE.bazel": 'bazel_dep(name = "rules_go", repo_name = "my_rules_go")'})
        assert ModuleNameResolver(provider).resolve() == {"rules_go": "my_rules_go"}

    def test_transitive_includes(self, memory_provider):
        provider = memory_provider(
            {
                "MODULE.bazel": """
                    bazel_dep(name = "rules_go", repo_name = "io_bazel_rules_go")
                    include("//bazel:deps.MODULE.bazel")
                """,
                "bazel/deps.MODULE.bazel": """
                    bazel_dep(name = "gazelle", repo_name = "bazel_gazelle")
                    include("//bazel/go:go.MODULE.bazel")
                """,
                "bazel/go/go.MODULE.bazel": 'bazel_dep(name = "rules_go")',
            }
        )
        assert ModuleNameResolver(provider).resolve() == {"rules_go": "rules_go", "gazelle": "bazel_gazelle"}

    def test_breadth_first_order(self, memory_provider):
        provider = memory_provider(
            {
                "MODULE.bazel": """
                    include("//:a.MODULE.bazel")
                    include("//:b.MODULE.bazel")
                """,
                "a.MODULE.bazel": """
                    include("//:c.MODULE.bazel")
                    bazel_dep(name = "x", repo_name = "from_a")
                """,
                "b.MODULE.bazel": 'bazel_dep(name = "x", repo_name = "from_b")',
                "c.MODULE.bazel": 'bazel_dep(name = "x", repo_name = "from_c")',
            }
        )
        assert ModuleNameResolver(provider).resolve() == {"x": "from_c"}
        assert provider.calls == ["MODULE.bazel", "a.MODULE.bazel", "b.MODULE.bazel", "c.MODULE.bazel"]

    def test_cycle_terminates(self, memory_provider):
        provider = memory_provider(
            {
                "A.MODULE.bazel": """
                    bazel_dep(name = "a", repo_name = "my_a")
                    include("//:B.MODULE.bazel")
                """,
                "B.MODULE.bazel": """
                    bazel_dep(name = "b")
                    include("//:A.MODULE.bazel")
                    include(":B.MODULE.bazel")
                """,
            }
        )
        assert ModuleNameResolver(provider).resolve("A.MODULE.bazel") == {"a": "my_a", "b": "b"}
        assert provider.calls == ["A.MODULE.bazel", "B.MODULE.bazel"]

    def test_diamond_read_once(self, memory_provider):
        provider = memory_provider(
            {
                "MODULE.bazel": 'include("//:a.MODULE.bazel")\ninclude("//:b.MODULE.bazel")',
                "a.MODULE.bazel": 'include("//:shared.MODULE.bazel")',
                "b.MODULE.bazel": 'include("//:shared.MODULE.bazel")',
                "shared.MODULE.bazel": 'bazel_dep(name = "s")',
            }
        )
        assert ModuleNameResolver(provider).resolve() == {"s": "s"}
        assert provider.calls.count("shared.MODULE.bazel") == 1

    def test_missing_fragment_aborts(self, memory_provider):
        provider = memory_provider(
            {
                "MODULE.bazel": """
                    bazel_dep(name = "rules_go", repo_name = "my_rules_go")
                    include("//bazel:missing.MODULE.bazel")
                """,
            }
        )
        assert ModuleNameResolver(provider).resolve() is None

    def test_missing_root(self, memory_provider):
        assert ModuleNameResolver(memory_provider({})).resolve() is None

    def test_deep_chain(self, memory_provider):
        depth = 2000
        files = {f"m{i}.MODULE.bazel": f'include("//:m{i + 1}.MODULE.bazel")' for i in range(depth)}
        files[f"m{depth}.MODULE.bazel"] = 'bazel_dep(name = "leaf", repo_name = "my_leaf")'
        provider = memory_provider(files)
        assert ModuleNameResolver(provider).resolve("m0.MODULE.bazel") == {"leaf": "my_leaf"}


class TestExtractMapping:
    def test_lookup(self, memory_provider):
        provider = memory_provider({"MODULE.bazel": 'bazel_dep(name = "rules_go", repo_name = "my_rules_go")'})
        lookup = extract_module_to_apparent_name_mapping(provider)
        assert lookup("rules_go") == "my_rules_go"
        assert lookup("gazelle") is None

    def test_unavailable(self, memory_provider):
        lookup = extract_module_to_apparent_name_mapping(memory_provider({}))
        assert lookup("rules_go") is None


class TestFilesystemFragmentProvider:
    """Test reading fragments from disk."""

    @pytest.fixture
    def repo(self, tmp_path):
        (tmp_path / "MODULE.bazel").write_text(
            'module(name = "m")\nbazel_dep(name = "rules_go", repo_name = "go")\ninclude("//bazel:deps.MODULE.bazel")\n'
        )
        (tmp_path / "bazel").mkdir()
        (tmp_path / "bazel" / "deps.MODULE.bazel").write_text('bazel_dep(name = "gazelle")\n')
        return tmp_path

    def test_resolves_from_disk(self, repo):
        provider = filesystem_fragment_provider(repo)
        assert ModuleNameResolver(provider).resolve("MODULE.bazel") == {"m": "m", "rules_go": "go", "gazelle": "gazelle"}

    def test_missing_file(self, tmp_path):
        assert filesystem_fragment_provider(tmp_path)("MODULE.bazel") is None

    def test_unparsable_file(self, repo):
        (repo / "bazel" / "deps.MODULE.bazel").write_text("bazel_dep(name = \n")
        provider = filesystem_fragment_provider(repo)
        assert provider("bazel/deps.MODULE.bazel") is None
        assert ModuleNameResolver(provider).resolve("MODULE.bazel") is None

    def test_nul_byte_in_included_file(self, repo):
        (repo / "bazel" / "deps.MODULE.bazel").write_bytes(b'bazel_dep(name = "gazelle")\x00\n')
        provider = filesystem_fragment_provider(repo)
        assert provider("bazel/deps.MODULE.bazel") is None
        assert ModuleNameResolver(provider).resolve("MODULE.bazel") is None

    def test_path_outside_repo(self, tmp_path):
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / "MODULE.bazel").write_text('include("//..:x.MODULE.bazel")\n')
        (tmp_path / "x.MODULE.bazel").write_text('bazel_dep(name = "outside")\n')
        provider = filesystem_fragment_provider(repo)
        assert provider("../x.MODULE.bazel") is None
        assert ModuleNameResolver(provider).resolve("MODULE.bazel") is None
