"""End-to-end tests: resolver facade, pipeline, output and CLI."""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

from fqcn import Psr4Namespace, Resolver, create_resolver
from fqcn.cli import cli
from fqcn.composer.prefix_map import ComposerPrefixMap, StaticPrefixMap
from fqcn.config import DiscoveryConfig, DiscoveryResult
from fqcn.errors import InvalidNamespace, UnregisteredNamespace
from fqcn.introspection import CallableIntrospector, StaticIntrospector
from fqcn.output import write_output
from fqcn.pipeline import run_pipeline

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")
PROJECT_DIR = os.path.join(FIXTURES_DIR, "php_project")

ALL_MODELS = [
    "App\\Models\\Admin",
    "App\\Models\\Model",
    "App\\Models\\Nested\\Deep",
    "App\\Models\\Post",
    "App\\Models\\User",
]


class TestResolver:
    @pytest.fixture(autouse=True)
    def setup(self):
        self.resolver = create_resolver(PROJECT_DIR)

    def test_resolve_directory(self):
        assert self.resolver.resolve_directory("\\App\\Models") == [
            os.path.realpath(os.path.join(PROJECT_DIR, "src", "Models")),
            os.path.realpath(os.path.join(PROJECT_DIR, "lib", "Models")),
        ]

    def test_resolve_directory_missing(self):
        assert self.resolver.resolve_directory("App\\Madeup") == []

    def test_resolve_unknown(self):
        with pytest.raises(UnregisteredNamespace) as exc_info:
            self.resolver.resolve_directory("\\ThisDoesNotExist\\")
        assert str(exc_info.value) == "Could not find registered psr4 prefix that matches ThisDoesNotExist\\"

    @pytest.mark.parametrize("namespace", ["", "\\"])
    def test_invalid_namespace(self, namespace):
        with pytest.raises(InvalidNamespace):
            self.resolver.resolve_directory(namespace)

    def test_find_classes(self):
        assert self.resolver.find_classes("App\\Models") == ALL_MODELS

    def test_find_classes_whole_prefix(self):
        assert self.resolver.find_classes(Psr4Namespace("App")) == [
            "App\\Concerns\\Greets",
            "App\\Contracts\\HasName",
            *ALL_MODELS,
            "App\\Status",
        ]

    def test_find_classes_instance_of_class(self):
        assert self.resolver.find_classes("App\\Models", instance_of="App\\Models\\Model") == [
            "App\\Models\\Admin",
            "App\\Models\\Nested\\Deep",
            "App\\Models\\Post",
            "App\\Models\\User",
        ]

    def test_find_classes_instance_of_interface(self):
        assert self.resolver.find_classes("App", instance_of="\\App\\Contracts\\HasName") == [
            "App\\Models\\Admin",
            "App\\Models\\User",
        ]

    def test_find_classes_vendor_namespace(self):
        assert self.resolver.find_classes("Acme\\Lib") == ["Acme\\Lib\\Gadget", "Acme\\Lib\\Widget"]

    def test_resolver_is_reusable(self):
        first = self.resolver.find_classes("App\\Models")
        self.resolver.find_classes("App\\Contracts")
        assert self.resolver.find_classes("App\\Models") == first

    def test_injected_introspector(self):
        resolver = Resolver(
            StaticPrefixMap({"App\\": [os.path.join(PROJECT_DIR, "src")]}),
            CallableIntrospector(lambda name: name.endswith("User")),
        )
        assert resolver.find_classes("App") == ["App\\Models\\User"]

    def test_config_extensions(self, tmp_path):
        (tmp_path / "Models").mkdir()
        (tmp_path / "Models" / "User.src").write_text("")
        resolver = Resolver(
            StaticPrefixMap({"App\\": [str(tmp_path)]}),
            CallableIntrospector(lambda name: True),
            DiscoveryConfig(extensions=[".src"]),
        )
        assert resolver.find_classes("App") == ["App\\Models\\User"]


class TestRunPipeline:
    def _run(self, **kwargs):
        config = DiscoveryConfig(project_root=PROJECT_DIR, **kwargs)
        provider = ComposerPrefixMap(PROJECT_DIR)
        return run_pipeline(config, provider, StaticIntrospector(provider))

    def test_result(self):
        result = self._run(namespace="App\\Models")
        assert isinstance(result, DiscoveryResult)
        assert [c["name"] for c in result.constructs] == ALL_MODELS
        assert result.stats == {"directories": 2, "candidates": 5, "constructs": 5}
        assert result.metadata["namespace"] == "App\\Models"
        assert set(result.metadata["phase_timings"]) == {"resolve", "scan", "filter"}

    def test_construct_details(self):
        result = self._run(namespace="App\\Contracts")
        (construct,) = result.constructs
        assert construct["name"] == "App\\Contracts\\HasName"
        assert construct["kind"] == "Interface"
        assert construct["line"] == 5
        assert construct["file"].endswith("HasName.php")

    def test_construct_details_from_callable_introspector(self):
        config = DiscoveryConfig(namespace="App\\Contracts")
        provider = ComposerPrefixMap(PROJECT_DIR)
        result = run_pipeline(config, provider, CallableIntrospector(lambda name: True))
        assert result.constructs == [
            {"name": "App\\Contracts\\HasName", "kind": None, "file": None, "line": None}
        ]

    def test_subtype_phase(self):
        result = self._run(namespace="App", instance_of="App\\Contracts\\HasName")
        assert [c["name"] for c in result.constructs] == ["App\\Models\\Admin", "App\\Models\\User"]
        assert "subtype" in result.metadata["phase_timings"]

    def test_candidates_without_declarations(self):
        result = self._run(namespace="App\\Support")
        assert result.stats["candidates"] == 2
        assert result.constructs == []

    def test_progress_callback(self):
        config = DiscoveryConfig(namespace="App\\Models")
        provider = ComposerPrefixMap(PROJECT_DIR)
        phases = []
        run_pipeline(config, provider, StaticIntrospector(provider), lambda name, label: phases.append(name))
        assert phases == ["resolve", "scan", "filter"]

    def test_unregistered(self):
        with pytest.raises(UnregisteredNamespace):
            self._run(namespace="Nowhere")

    def test_write_output(self, tmp_path):
        result = self._run(namespace="App\\Models")
        out = tmp_path / "out" / "result.json"
        write_output(result, str(out))
        data = json.loads(out.read_text())
        assert data["version"] == "1.0"
        assert [c["name"] for c in data["constructs"]] == ALL_MODELS
        assert len(data["directories"]) == 2


class TestCli:
    def test_dirs(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["dirs", "App\\Models", "--project", PROJECT_DIR, "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            os.path.realpath(os.path.join(PROJECT_DIR, "src", "Models")),
            os.path.realpath(os.path.join(PROJECT_DIR, "lib", "Models")),
        ]

    def test_dirs_plain(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["dirs", "App\\Models\\Legacy", "-p", PROJECT_DIR])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == os.path.realpath(os.path.join(PROJECT_DIR, "legacy"))

    def test_classes_json(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["classes", "App\\Models", "-p", PROJECT_DIR, "--json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == ALL_MODELS

    def test_classes_instance_of(self):
        runner = CliRunner()
        result = runner.invoke(cli, [
            "classes", "Acme\\Lib", "-p", PROJECT_DIR, "--json",
            "--instance-of", "App\\Contracts\\HasName",
        ])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == ["Acme\\Lib\\Gadget"]

    def test_classes_no_vendor(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["classes", "Acme\\Lib", "-p", PROJECT_DIR, "--no-vendor", "--json"])
        assert result.exit_code == 1
        assert "Could not find registered psr4 prefix" in result.output

    def test_classes_table_and_output_file(self, tmp_path):
        out = tmp_path / "result.json"
        runner = CliRunner()
        result = runner.invoke(cli, ["classes", "App\\Contracts", "-p", PROJECT_DIR, "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "HasName" in result.output
        assert "Output written to" in result.output
        data = json.loads(out.read_text())
        assert data["stats"]["constructs"] == 1

    def test_classes_quiet(self, tmp_path):
        out = tmp_path / "result.json"
        runner = CliRunner()
        result = runner.invoke(cli, ["classes", "App\\Models", "-p", PROJECT_DIR, "--quiet", "-o", str(out)])
        assert result.exit_code == 0
        assert result.output == ""
        assert out.exists()

    def test_invalid_namespace(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["classes", "4Something", "-p", PROJECT_DIR])
        assert result.exit_code == 1
        assert "Invalid namespace" in result.output

    def test_project_without_composer_json(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["dirs", "App", "-p", str(tmp_path)])
        assert result.exit_code == 1
        assert "composer.json" in result.output
