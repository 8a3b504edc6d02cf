"""
Tests for configuration loading — classjars.yml parsing, validation, env overrides.
"""

import textwrap
from pathlib import Path

import pytest

from classjars.core.config.loader import (
    ConfigError,
    apply_env_overrides,
    find_project_file,
    load_project,
    project_root,
)
from classjars.core.context import set_project_root
from classjars.core.models.project import SyncMode
from classjars.core.use_cases.config_check import check_config
from classjars.core.use_cases.workspace import open_workspace


@pytest.fixture
def full_yml(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        version: 1
        name: full
        description: "Everything set"
        sync_mode: query
        workspace_module: __workspace__
        state_dir: .state
        render_jar_dir: .state/render
        source_roots: [java, javatests]
        experiments:
          render_jar_as_libraries: false
        modules:
          - name: app
            target: //java/app:app
          - name: resources
    """)
    path = tmp_path / "classjars.yml"
    path.write_text(content)
    return path


class TestLoadProject:
    def test_full(self, full_yml: Path):
        project = load_project(full_yml, env={})
        assert project.name == "full"
        assert project.sync_mode == SyncMode.QUERY
        assert project.workspace_module == "__workspace__"
        assert project.source_roots == ["java", "javatests"]
        assert project.experiments.render_jar_as_libraries is False
        assert [m.name for m in project.modules] == ["app", "resources"]

    def test_minimal(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("name: minimal\n")
        project = load_project(path, env={})
        assert project.name == "minimal"
        assert project.sync_mode == SyncMode.ASPECT
        assert project.modules == []

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_project(tmp_path / "classjars.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("name: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_project(path, env={})

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Expected a YAML mapping"):
            load_project(path, env={})

    def test_missing_name(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("sync_mode: aspect\n")
        with pytest.raises(ConfigError, match="Invalid project configuration"):
            load_project(path, env={})

    def test_bad_sync_mode(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("name: x\nsync_mode: turbo\n")
        with pytest.raises(ConfigError):
            load_project(path, env={})


class TestEnvOverrides:
    def test_sync_mode(self, full_yml: Path):
        project = load_project(full_yml, env={"CLASSJARS_SYNC_MODE": "ASPECT"})
        assert project.sync_mode == SyncMode.ASPECT

    def test_experiment_flag(self, full_yml: Path):
        env = {"CLASSJARS_EXPERIMENT_RENDER_JAR_AS_LIBRARIES": "yes"}
        project = load_project(full_yml, env=env)
        assert project.experiments.render_jar_as_libraries is True

    def test_bad_bool(self):
        with pytest.raises(ConfigError, match="not a boolean"):
            apply_env_overrides({}, {"CLASSJARS_EXPERIMENT_RENDER_JAR_AS_LIBRARIES": "maybe"})

    def test_bad_sync_mode(self):
        with pytest.raises(ConfigError, match="CLASSJARS_SYNC_MODE"):
            apply_env_overrides({}, {"CLASSJARS_SYNC_MODE": "turbo"})

    def test_unrelated_env_ignored(self):
        assert apply_env_overrides({"name": "x"}, {"HOME": "/root"}) == {"name": "x"}

    def test_input_not_mutated(self):
        data = {"name": "x", "experiments": {"render_jar_as_libraries": True}}
        apply_env_overrides(data, {"CLASSJARS_EXPERIMENT_RENDER_JAR_AS_LIBRARIES": "0"})
        assert data["experiments"]["render_jar_as_libraries"] is True


class TestFindProjectFile:
    def test_finds_in_parent(self, tmp_path: Path):
        (tmp_path / "classjars.yml").write_text("name: x\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_project_file(nested) == (tmp_path / "classjars.yml").resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_project_file(tmp_path) is None

    def test_project_root(self, tmp_path: Path):
        assert project_root(tmp_path / "classjars.yml") == tmp_path.resolve()


class TestConfigCheck:
    def test_valid(self, project_yml: Path):
        result = check_config(project_yml)
        assert result.valid
        assert result.errors == []
        assert result.to_dict()["module_count"] == 2

    def test_duplicate_modules(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text(textwrap.dedent("""\
            name: dupes
            modules:
              - name: app
                target: //a:a
              - name: app
                target: //b:b
        """))
        result = check_config(path)
        assert not result.valid
        assert any("Duplicate module names: app" in e for e in result.errors)

    def test_module_shadowing_workspace(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("name: x\nmodules:\n  - name: .workspace\n    target: //a:a\n")
        result = check_config(path)
        assert not result.valid

    def test_warnings(self, full_yml: Path):
        result = check_config(full_yml)
        assert result.valid
        text = " ".join(result.warnings)
        assert "resources" in text
        assert "Source root does not exist: java" in text
        assert "Query sync" in text

    def test_load_error(self, tmp_path: Path):
        path = tmp_path / "classjars.yml"
        path.write_text("just a string\n")
        result = check_config(path)
        assert not result.valid
        assert result.errors


class TestOpenWorkspace:
    def test_root_is_config_directory(self, project_yml: Path):
        workspace = open_workspace(project_yml)
        assert workspace.root == project_root(project_yml) == project_yml.parent.resolve()
        assert workspace.builds.last_build_timestamp("demo") is None

    def test_root_from_project_context(self, project_yml: Path):
        nested = project_yml.parent / "java" / "deep"
        nested.mkdir(parents=True)
        set_project_root(nested)
        assert open_workspace().root == project_yml.parent.resolve()

    def test_no_config_anywhere(self, tmp_path: Path):
        set_project_root(tmp_path)
        with pytest.raises(ConfigError, match="No classjars.yml found"):
            open_workspace()
